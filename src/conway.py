from enum import Enum, IntEnum

import numpy as np


class Cell(IntEnum):
    DEAD = 0
    ALIVE = 1


class Boundary(Enum):
    # columns wrap modulo width, rows modulo height
    WRAP = 'wrap'
    # positions outside the grid are not counted
    CLIP = 'clip'


class Grid:
    """
    A fixed width x height board of cells, addressed as (col, row).

    Grids are immutable values: every update returns a new grid of the
    same storage type. Subclasses pick the storage.
    """

    def __init__(self, width, height):
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def shape(self):
        return (self._height, self._width)

    def contains(self, col, row):
        return 0 <= col < self._width and 0 <= row < self._height

    def check(self, col, row):
        if not self.contains(col, row):
            raise IndexError(f"cell ({col}, {row}) is outside the {self._width}x{self._height} grid")

    @classmethod
    def empty(cls, width, height):
        return cls.from_cells(width, height, ())

    @classmethod
    def from_cells(cls, width, height, cells):
        raise NotImplementedError

    @classmethod
    def from_grid(cls, grid):
        if isinstance(grid, cls):
            return grid
        return cls.from_cells(grid.width, grid.height, grid.alive_cells())

    def cell_at(self, col, row):
        raise NotImplementedError

    def alive_cells(self):
        """Returns a frozenset of (col, row) for every ALIVE cell."""
        raise NotImplementedError

    def with_cells(self, cells, state=Cell.ALIVE):
        alive = set(self.alive_cells())
        for col, row in cells:
            self.check(col, row)
            if state == Cell.ALIVE:
                alive.add((col, row))
            else:
                alive.discard((col, row))
        return type(self).from_cells(self._width, self._height, alive)

    @property
    def population(self):
        return len(self.alive_cells())

    def to_array(self):
        arr = np.zeros(self.shape, dtype=np.uint8)
        for col, row in self.alive_cells():
            arr[row, col] = 1
        return arr

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and self.alive_cells() == other.alive_cells()

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}({self._width}x{self._height}, population={self.population})"


class DenseGrid(Grid):
    """Row-major numpy storage, cells[row, col]."""

    def __init__(self, cells):
        cells = np.array(cells, dtype=np.uint8)
        if cells.ndim != 2:
            raise ValueError(f"expected a 2D array, got shape {cells.shape}")
        height, width = cells.shape
        super().__init__(width, height)
        cells[cells != 0] = 1
        cells.flags.writeable = False
        self._cells = cells

    @classmethod
    def from_cells(cls, width, height, cells):
        empty = cls(np.zeros((max(height, 0), max(width, 0)), dtype=np.uint8))
        arr = empty.to_array()
        for col, row in cells:
            empty.check(col, row)
            arr[row, col] = 1
        return cls(arr)

    @property
    def cells(self):
        return self._cells

    def cell_at(self, col, row):
        self.check(col, row)
        return Cell(int(self._cells[row, col]))

    def alive_cells(self):
        rows, cols = np.nonzero(self._cells)
        return frozenset(zip(cols.tolist(), rows.tolist()))

    @property
    def population(self):
        return int(self._cells.sum())

    def to_array(self):
        return self._cells.copy()

    def __eq__(self, other):
        if isinstance(other, DenseGrid):
            return np.array_equal(self._cells, other._cells)
        return super().__eq__(other)

    __hash__ = None


class SparseGrid(Grid):
    """Set of alive (col, row) pairs, for large and mostly dead boards."""

    def __init__(self, width, height, alive=()):
        super().__init__(width, height)
        alive = frozenset((int(col), int(row)) for col, row in alive)
        for col, row in alive:
            self.check(col, row)
        self._alive = alive

    @classmethod
    def from_cells(cls, width, height, cells):
        return cls(width, height, cells)

    def cell_at(self, col, row):
        self.check(col, row)
        return Cell.ALIVE if (col, row) in self._alive else Cell.DEAD

    def alive_cells(self):
        return self._alive


def neighbor_positions(width, height, col, row, boundary=Boundary.WRAP):
    boundary = Boundary(boundary)
    # on grids narrower than 3 a wrapped position can repeat; each repeat counts
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            c, r = col + dc, row + dr
            if boundary is Boundary.WRAP:
                yield c % width, r % height
            elif 0 <= c < width and 0 <= r < height:
                yield c, r


def neighbor_count(grid, col, row, boundary=Boundary.WRAP):
    """Number of ALIVE cells among the 8 around (col, row)."""
    boundary = Boundary(boundary)
    grid.check(col, row)
    return sum(grid.cell_at(c, r) for c, r in neighbor_positions(grid.width, grid.height, col, row, boundary))


def next_state(cell, neighbors):
    if neighbors == 3 or (neighbors == 2 and cell == Cell.ALIVE):
        return Cell.ALIVE
    return Cell.DEAD


def neighbor_counts(cells, boundary=Boundary.WRAP):
    """Neighbour count of every cell of a (height, width) 0/1 array."""
    boundary = Boundary(boundary)
    cells = np.asarray(cells, dtype=np.uint8)
    if boundary is Boundary.WRAP:
        counts = np.zeros_like(cells)
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                counts += np.roll(np.roll(cells, dr, axis=0), dc, axis=1)
        return counts

    height, width = cells.shape
    padded = np.pad(cells, pad_width=1, mode='constant', constant_values=0)
    counts = np.zeros_like(cells)
    for dr in range(3):
        for dc in range(3):
            if dr == 1 and dc == 1:
                continue
            counts += padded[dr:dr + height, dc:dc + width]
    return counts


def step_ref(grid, boundary=Boundary.WRAP):
    """Cell-by-cell reference step. Slow, but every other stepper must agree with it."""
    boundary = Boundary(boundary)
    alive = set()
    for row in range(grid.height):
        for col in range(grid.width):
            n = neighbor_count(grid, col, row, boundary)
            if next_state(grid.cell_at(col, row), n) == Cell.ALIVE:
                alive.add((col, row))
    return type(grid).from_cells(grid.width, grid.height, alive)


def _step_dense(grid, boundary):
    counts = neighbor_counts(grid.cells, boundary)
    alive = grid.cells == 1
    nxt = (counts == 3) | ((counts == 2) & alive)
    return DenseGrid(nxt.astype(np.uint8))


def _step_sparse(grid, boundary):
    # only live cells and their neighbours can be alive next generation
    alive = grid.alive_cells()
    candidates = set(alive)
    for col, row in alive:
        candidates.update(neighbor_positions(grid.width, grid.height, col, row, boundary))

    born = set()
    for col, row in candidates:
        n = sum(1 for pos in neighbor_positions(grid.width, grid.height, col, row, boundary) if pos in alive)
        cell = Cell.ALIVE if (col, row) in alive else Cell.DEAD
        if next_state(cell, n) == Cell.ALIVE:
            born.add((col, row))
    return SparseGrid(grid.width, grid.height, born)


def step(grid, boundary=Boundary.WRAP):
    """
    Returns the next generation of grid. The input is left untouched and
    the result is a new grid with the same storage type.
    """
    boundary = Boundary(boundary)
    if isinstance(grid, DenseGrid):
        return _step_dense(grid, boundary)
    if isinstance(grid, SparseGrid):
        return _step_sparse(grid, boundary)
    return step_ref(grid, boundary)


def generations(grid, boundary=Boundary.WRAP):
    while True:
        yield grid
        grid = step(grid, boundary)


def expand(grid, iterations, boundary=Boundary.WRAP, stepper=step):
    """Steps grid up to iterations times, stopping once it stops changing."""
    for _ in range(iterations):
        nxt = stepper(grid, boundary)
        if nxt == grid:
            break
        grid = nxt
    return grid


def simulate(grid, steps=50, boundary=Boundary.WRAP):
    """History of grid for up to steps generations, ending before the first repeat."""
    seen = set()
    history = []
    for g in generations(grid, boundary):
        if len(history) >= steps:
            break
        key = g.alive_cells()
        if key in seen:
            break
        seen.add(key)
        history.append(g)
    return history


def period(grid, max_steps=50, boundary=Boundary.WRAP):
    """
    Cycle length the pattern settles into: 1 for a still life, >1 for an
    oscillator, None if no state repeats within max_steps generations.
    """
    history = simulate(grid, max_steps, boundary)
    if len(history) >= max_steps:
        return None
    # history stopped because step(history[-1]) was seen earlier
    nxt = step(history[-1], boundary).alive_cells()
    for i, g in enumerate(history):
        if g.alive_cells() == nxt:
            return len(history) - i
    return None
