import numpy as np

from conway import DenseGrid, SparseGrid

STORAGES = {
    'dense': DenseGrid,
    'sparse': SparseGrid,
}

ALIVE_GLYPHS = '#Oo*'

PATTERNS = {
    'block': [
        '##',
        '##',
    ],
    'blinker': [
        '###',
    ],
    'toad': [
        '.###',
        '###.',
    ],
    'beacon': [
        '##..',
        '##..',
        '..##',
        '..##',
    ],
    'glider': [
        '.#.',
        '..#',
        '###',
    ],
    'lwss': [
        '.#..#',
        '#....',
        '#...#',
        '####.',
    ],
    'gosper_glider_gun': [
        '........................#...........',
        '......................#.#...........',
        '............##......##............##',
        '...........#...#....##............##',
        '##........#.....#...##..............',
        '##........#...#.##....#.#...........',
        '..........#.....#.......#...........',
        '...........#...#....................',
        '............##......................',
    ],
}


def parse_picture(lines):
    """Alive (col, row) cells of a picture, one string per row."""
    return {
        (c, r)
        for r, line in enumerate(lines)
        for c, ch in enumerate(line)
        if ch in ALIVE_GLYPHS
    }


def get_pattern(name):
    try:
        return parse_picture(PATTERNS[name])
    except KeyError:
        raise ValueError(f"unknown pattern {name!r}, expected one of {', '.join(sorted(PATTERNS))}") from None


def extent(cells):
    """(width, height) of the bounding box anchored at the origin."""
    if not cells:
        return 0, 0
    return max(c for c, _ in cells) + 1, max(r for _, r in cells) + 1


def parse_rle(text):
    # return: width, height, alive cells
    width, height = 0, 0
    rle_string = ""
    header_found = False

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if not header_found and ('x' in line and 'y' in line):
            for part in line.split(','):
                part = part.strip()
                if part.startswith('x'):
                    width = int(part.split('=')[1])
                elif part.startswith('y'):
                    height = int(part.split('=')[1])
            header_found = True
        else:
            rle_string += line

    if '!' in rle_string:
        rle_string = rle_string[:rle_string.find('!')]

    if width == 0 or height == 0:
        raise ValueError("Could not find grid dimensions in the RLE data.")

    cells = set()
    x, y = 0, 0
    run_count = 0

    for char in rle_string:
        if char.isdigit():
            run_count = run_count * 10 + int(char)
            continue
        count = max(1, run_count)
        if char == 'o':
            for _ in range(count):
                if x < width and y < height:
                    cells.add((x, y))
                x += 1
        elif char == 'b':
            x += count
        elif char == '$':
            y += count
            x = 0
        else:
            raise ValueError(f"Unexpected character {char!r} in RLE data.")
        run_count = 0

    return width, height, cells


def read_rle_file(file_path):
    with open(file_path, 'r') as f:
        return parse_rle(f.read())


def place(cells, width, height, col=0, row=0, storage='dense'):
    """Builds a width x height grid with cells shifted by (col, row)."""
    pw, ph = extent(cells)
    if col < 0 or row < 0 or col + pw > width or row + ph > height:
        raise ValueError(f"a {pw}x{ph} pattern at ({col}, {row}) does not fit a {width}x{height} grid")
    return STORAGES[storage].from_cells(width, height, {(c + col, r + row) for c, r in cells})


def random_grid(width, height, density=0.5, seed=None, storage='dense'):
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"density must be within [0, 1], got {density}")
    rng = np.random.default_rng(seed)
    noise = rng.random((height, width))
    grid = DenseGrid((noise < density).astype(np.uint8))
    return STORAGES[storage].from_grid(grid)


