import time
import argparse

from conway import Boundary, expand, step_ref
from patterns import PATTERNS, STORAGES, get_pattern, place, random_grid, read_rle_file
from visualize import animate, render, visualize

DEFAULT_SIZE = (24, 64)


def build_parser():
    parser = argparse.ArgumentParser(description="Conway's Game of Life simulation.")
    parser.add_argument('-V', '--visualize', action='store_true', help='Interactive curses viewer.')
    parser.add_argument('-I', '--iter', type=int, default=100, help='Number of generations.')
    parser.add_argument('-S', '--size', type=int, nargs=2, metavar=('HEIGHT', 'WIDTH'),
                        default=DEFAULT_SIZE, help='Grid height and width.')
    parser.add_argument('-B', '--boundary', choices=[b.value for b in Boundary], default=Boundary.WRAP.value,
                        help='Wrap around the edges (torus) or clip at them.')
    parser.add_argument('--storage', choices=sorted(STORAGES), default='dense', help='Grid storage.')
    parser.add_argument('--interval', type=float, default=0.1, help='Seconds between frames.')
    parser.add_argument('--at', type=int, nargs=2, metavar=('COL', 'ROW'), default=(1, 1),
                        help='Where to place the upper left corner of a file or named pattern.')
    parser.add_argument('--density', type=float, default=0.3, help='Alive fraction of a random grid.')
    parser.add_argument('--seed', type=int, default=None, help='Random seed.')
    parser.add_argument('--check', action='store_true',
                        help='Compare the reference stepper against the fast one instead of animating.')

    group = parser.add_mutually_exclusive_group()
    group.add_argument('-F', '--file', type=str, help='Path to an RLE file to load the initial grid.')
    group.add_argument('-P', '--pattern', choices=sorted(PATTERNS), help='Named seed pattern.')
    return parser


def initial_grid(args):
    height, width = args.size
    col, row = args.at
    if args.file:
        _, _, cells = read_rle_file(args.file)
        return place(cells, width, height, col, row, args.storage)
    if args.pattern:
        return place(get_pattern(args.pattern), width, height, col, row, args.storage)
    return random_grid(width, height, args.density, args.seed, args.storage)


def check(grid, iterations, boundary):
    start_ref = time.perf_counter()
    ans_ref = expand(grid, iterations, boundary, stepper=step_ref)
    end_ref = time.perf_counter()

    start = time.perf_counter()
    ans = expand(grid, iterations, boundary)
    end = time.perf_counter()

    if ans != ans_ref:
        print("final result different")
        print("Optimized:")
        print(render(ans, dead='.'))
        print("Reference:")
        print(render(ans_ref, dead='.'))
        print("WA")
        return 1

    print("AC")
    print(f"Reference: {end_ref - start_ref:.4f} s")
    print(f"Optimized: {end - start:.4f} s")
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.iter < 0:
        parser.error("--iter must not be negative")
    if args.size[0] <= 0 or args.size[1] <= 0:
        parser.error("--size must be positive")
    if args.interval < 0:
        parser.error("--interval must not be negative")

    try:
        grid = initial_grid(args)
    except (OSError, ValueError) as e:
        parser.error(str(e))
    boundary = Boundary(args.boundary)

    if args.check:
        return check(grid, args.iter, boundary)

    if args.visualize:
        visualize(grid, args.iter, boundary, max(args.interval, 0.1))
        return 0

    final = animate(grid, args.iter, args.interval, boundary)
    print(f"Final population: {final.population}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
