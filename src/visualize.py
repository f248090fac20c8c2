import sys
import time
import curses
import asyncio

from conway import Boundary, step

ALIVE = '#'
DEAD = ' '
# ANSI: clear screen, cursor home
CLEAR = '\x1b[2J\x1b[H'


def render(grid, alive=ALIVE, dead=DEAD):
    """One line per row, alive cells as `alive` and dead ones as `dead`."""
    lines = []
    for row in range(grid.height):
        lines.append(''.join(alive if grid.cell_at(col, row) else dead for col in range(grid.width)))
    return '\n'.join(lines)


def animate(grid, generations, interval=0.1, boundary=Boundary.WRAP,
            stream=None, sleep=time.sleep, stop_when_stable=False):
    """
    Prints generations frames of grid to stream, sleeping interval between
    them. Returns the grid of the last frame drawn.
    """
    stream = stream if stream is not None else sys.stdout
    for generation in range(generations):
        if generation:
            nxt = step(grid, boundary)
            if stop_when_stable and nxt == grid:
                stream.write(f"Stabilized at Generation {generation - 1}.\n")
                break
            grid = nxt
            sleep(interval)

        stream.write(CLEAR)
        stream.write(render(grid))
        stream.write(f"\nGeneration {generation}, population {grid.population}\n")
        stream.flush()
    return grid


class World:
    # padding between upper left corners of grid & window
    OFFSET = 1
    MIN_INTERVAL = 0.1
    MAX_INTERVAL = 2.0

    def __init__(self, grid, boundary=Boundary.WRAP, interval=0.5):
        self.grid = grid
        self.boundary = Boundary(boundary)
        # evolving pause time
        self.interval = interval
        # visual origin
        self.vorigin = (0, 0)
        self.generation = 0

        # stepping mode
        self.paused = False
        # set True when j is pressed
        self.step_once = False
        # exit loop flag
        self.stop_flag = False

        # set by q to break sleep and quit immediately
        self.stop_event = None
        # set by space to break sleep and pause immediately
        self.pause_event = None

    def evolve(self):
        """Advances one generation. Returns False once the grid stops changing."""
        prev_grid = self.grid
        self.grid = step(self.grid, self.boundary)
        self.generation += 1
        return self.grid != prev_grid

    def handle_key(self, key):
        """Applies one key press. Returns True if the screen needs redrawing."""
        if key == curses.KEY_UP:
            self.vorigin = (self.vorigin[0] - 1, self.vorigin[1])
        elif key == curses.KEY_DOWN:
            self.vorigin = (self.vorigin[0] + 1, self.vorigin[1])
        elif key == curses.KEY_LEFT:
            self.vorigin = (self.vorigin[0], self.vorigin[1] - 1)
        elif key == curses.KEY_RIGHT:
            self.vorigin = (self.vorigin[0], self.vorigin[1] + 1)
        elif key in (ord('+'), ord('=')):
            self.interval = min(self.MAX_INTERVAL, round(self.interval + 0.1, 2))
        elif key in (ord('-'), ord('_')):
            self.interval = max(self.MIN_INTERVAL, round(self.interval - 0.1, 2))
        elif key == ord('q'):
            self.stop_flag = True
            if self.stop_event:
                self.stop_event.set()
        elif key == ord(' '):
            self.paused = not self.paused
            if self.pause_event:
                self.pause_event.set()
        elif key == ord('j'):
            if self.paused:
                self.step_once = True
        else:
            return False
        return True

    def frame_lines(self, max_y, max_x, done=False):
        """Text lines of one screen of max_y rows by max_x columns."""
        display_height = max(0, max_y - 3)
        # each cell is two characters wide
        display_width = max_x // 2
        origin = (self.OFFSET - self.vorigin[0], self.OFFSET - self.vorigin[1])

        display = [['  '] * display_width for _ in range(display_height)]
        for col, row in self.grid.alive_cells():
            r, c = row + origin[0], col + origin[1]
            if 0 <= r < display_height and 0 <= c < display_width:
                display[r][c] = '[]'
        lines = [''.join(row)[:max_x - 1] for row in display]

        status = f"Generation {self.generation}, population {self.grid.population}, {self.boundary.value}"
        if self.paused:
            status += " [PAUSED]"
        lines.append(status)
        lines.append(f"VORIGIN: {self.vorigin}, arrows move, 'q' quit, 'space' pause, 'j' step.")
        if done:
            lines.append(f"Stabilized at Generation {self.generation}.")
        else:
            lines.append(f"Interval: {self.interval:.2f}s (+/- to change)")
        return [line[:max_x - 1] for line in lines]

    def print_grid(self, stdscr, done=False):
        stdscr.clear()
        max_y, max_x = stdscr.getmaxyx()
        for i, line in enumerate(self.frame_lines(max_y, max_x, done)[:max_y]):
            stdscr.addstr(i, 0, line)
        stdscr.refresh()

    async def handle_input_curses(self, stdscr):
        stdscr.nodelay(1)
        while not self.stop_flag:
            key = stdscr.getch()
            if key != -1 and self.handle_key(key):
                self.print_grid(stdscr)
            await asyncio.sleep(0.01)

    async def _linger(self, stdscr):
        # show the stabilized frame for a moment unless q is pressed
        self.print_grid(stdscr, done=True)
        sleep_task = asyncio.create_task(asyncio.sleep(2))
        stop_task = asyncio.create_task(self.stop_event.wait())
        await asyncio.wait([sleep_task, stop_task], return_when=asyncio.FIRST_COMPLETED)
        sleep_task.cancel()
        stop_task.cancel()

    async def game_loop_curses(self, stdscr, iter_limit):
        curses.curs_set(0)
        stdscr.nodelay(1)

        self.stop_flag = False
        self.paused = False
        self.step_once = False
        self.stop_event = asyncio.Event()
        self.pause_event = asyncio.Event()

        input_task = asyncio.create_task(self.handle_input_curses(stdscr))
        self.print_grid(stdscr)

        while self.generation < iter_limit:
            while self.paused and not self.step_once and not self.stop_flag:
                await asyncio.sleep(0.01)

            if self.stop_flag:
                break

            # single step while paused
            if self.step_once:
                self.step_once = False
                if not self.evolve():
                    await self._linger(stdscr)
                    break
                self.print_grid(stdscr)
                continue

            # wait for the next frame, interruptible by pause and quit
            sleep_task = asyncio.create_task(asyncio.sleep(self.interval))
            stop_task = asyncio.create_task(self.stop_event.wait())
            pause_task = asyncio.create_task(self.pause_event.wait())
            await asyncio.wait([sleep_task, stop_task, pause_task], return_when=asyncio.FIRST_COMPLETED)
            for task in (sleep_task, stop_task, pause_task):
                task.cancel()

            if self.stop_event.is_set():
                break
            if self.pause_event.is_set():
                self.pause_event.clear()
                self.print_grid(stdscr)
                continue

            if not self.evolve():
                await self._linger(stdscr)
                break
            self.print_grid(stdscr)

        self.stop_flag = True
        input_task.cancel()
        return self.grid


def visualize(grid, iter_limit, boundary=Boundary.WRAP, interval=0.5):
    world = World(grid, boundary, interval)

    def run_async_loop(stdscr):
        return asyncio.run(world.game_loop_curses(stdscr, iter_limit))

    return curses.wrapper(run_async_loop)
