import math
from array import array
from typing import Iterator, Optional, Tuple

from spanning_maze.core.errors import InvalidSize, NotAdjacent

Cell = Tuple[int, int]

class Grid:
    # Bitmask Constants (a set bit means the wall is present)
    NORTH = 0b00000001
    EAST  = 0b00000010
    SOUTH = 0b00000100
    WEST  = 0b00001000

    # Flags
    VISITED = 0b00010000
    PATH    = 0b00100000
    SOLVER_VISITED = 0b01000000
    FRONTIER       = 0b10000000 # Prim's frontier membership, display only

    # All walls present by default (N|E|S|W) = 15
    ALL_WALLS = NORTH | EAST | SOUTH | WEST
    ALL_FLAGS = VISITED | PATH | SOLVER_VISITED | FRONTIER

    # Neighbour order is fixed: N, E, S, W
    DIRECTIONS = (NORTH, EAST, SOUTH, WEST)

    # Direction Helpers
    DROW = {NORTH: -1, SOUTH: 1, EAST: 0, WEST: 0}
    DCOL = {NORTH: 0, SOUTH: 0, EAST: 1, WEST: -1}
    OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}
    NAMES = {NORTH: "N", EAST: "E", SOUTH: "S", WEST: "W"}

    __slots__ = ('side', 'size', 'cells', 'event_writer')

    def __init__(self, side: int, event_writer=None):
        if isinstance(side, bool) or not isinstance(side, int) or side < 1:
            raise InvalidSize(f"Grid side must be a positive integer, got {side!r}")
        self.side = side
        self.size = side * side
        self.event_writer = event_writer
        # One byte per cell: 4 wall bits + 4 flag bits
        self.cells = array('B', [self.ALL_WALLS] * self.size)

    @staticmethod
    def side_for_cell_count(count: int) -> int:
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise InvalidSize(f"Cell count must be a positive integer, got {count!r}")
        side = math.isqrt(count)
        if side * side != count:
            raise InvalidSize(f"Cell count {count} is not a perfect square")
        return side

    @classmethod
    def from_cell_count(cls, count: int, event_writer=None) -> "Grid":
        """Builds a grid from a total cell count, which must be a perfect square."""
        return cls(cls.side_for_cell_count(count), event_writer=event_writer)

    def reset(self):
        """Closes every passage and clears every flag."""
        for i in range(self.size):
            self.cells[i] = self.ALL_WALLS

    def clear_flags(self, mask: int):
        keep = ~mask & 0xFF
        for i in range(self.size):
            self.cells[i] &= keep

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.side and 0 <= col < self.side

    def get_index(self, row: int, col: int) -> int:
        if 0 <= row < self.side and 0 <= col < self.side:
            return row * self.side + col
        raise IndexError(f"Cell ({row}, {col}) out of bounds")

    def cell_at(self, index: int) -> Cell:
        if not 0 <= index < self.size:
            raise IndexError(f"Index {index} out of bounds")
        return divmod(index, self.side)

    def all_cells(self) -> Iterator[Cell]:
        for row in range(self.side):
            for col in range(self.side):
                yield (row, col)

    def direction_between(self, a: Cell, b: Cell) -> Optional[int]:
        """Direction from a to b if both are in bounds and share a border, else None."""
        if not (self.in_bounds(*a) and self.in_bounds(*b)):
            return None
        dr, dc = b[0] - a[0], b[1] - a[1]
        for dir_bit in self.DIRECTIONS:
            if self.DROW[dir_bit] == dr and self.DCOL[dir_bit] == dc:
                return dir_bit
        return None

    def carve_path(self, row: int, col: int, dir_bit: int) -> bool:
        """
        Removes the wall between (row, col) and the neighbour in 'dir_bit'.
        Also removes the OPPOSITE wall from the neighbour.
        Returns True if the passage was closed before.
        """
        nrow = row + self.DROW[dir_bit]
        ncol = col + self.DCOL[dir_bit]
        if not self.in_bounds(nrow, ncol):
            raise NotAdjacent(f"({row}, {col}) has no neighbour to the {self.NAMES[dir_bit]}")

        idx1 = row * self.side + col
        idx2 = nrow * self.side + ncol
        if not (self.cells[idx1] & dir_bit):
            return False # already open

        self.cells[idx1] &= ~dir_bit
        self.cells[idx2] &= ~self.OPPOSITE[dir_bit]

        if self.event_writer is not None:
            self.event_writer.log_carve(row, col, nrow, ncol)
        return True

    def open_passage(self, a: Cell, b: Cell) -> bool:
        dir_bit = self.direction_between(a, b)
        if dir_bit is None:
            raise NotAdjacent(f"Cells {a} and {b} are not grid-adjacent")
        return self.carve_path(a[0], a[1], dir_bit)

    def open_border(self, row: int, col: int, dir_bit: int):
        """Removes an outward-facing wall (entrance / exit gap)."""
        if self.in_bounds(row + self.DROW[dir_bit], col + self.DCOL[dir_bit]):
            raise ValueError(f"{self.NAMES[dir_bit]} wall of ({row}, {col}) is not on the border")
        self.cells[self.get_index(row, col)] &= ~dir_bit

    def has_wall(self, row: int, col: int, dir_bit: int) -> bool:
        return (self.cells[row * self.side + col] & dir_bit) != 0

    def is_open(self, a: Cell, b: Cell) -> bool:
        dir_bit = self.direction_between(a, b)
        if dir_bit is None:
            return False
        return not self.has_wall(a[0], a[1], dir_bit)

    def set_visited(self, row: int, col: int, visited: bool = True):
        idx = row * self.side + col
        if visited:
            self.cells[idx] |= self.VISITED
            if self.event_writer is not None:
                self.event_writer.log_visit(row, col)
        else:
            self.cells[idx] &= ~self.VISITED

    def is_visited(self, row: int, col: int) -> bool:
        return (self.cells[row * self.side + col] & self.VISITED) != 0

    def set_frontier(self, row: int, col: int, frontier: bool = True):
        idx = row * self.side + col
        if frontier:
            self.cells[idx] |= self.FRONTIER
            if self.event_writer is not None:
                self.event_writer.log_frontier(row, col)
        else:
            self.cells[idx] &= ~self.FRONTIER

    def is_frontier(self, row: int, col: int) -> bool:
        return (self.cells[row * self.side + col] & self.FRONTIER) != 0

    def set_solver_visited(self, row: int, col: int):
        self.cells[row * self.side + col] |= self.SOLVER_VISITED
        if self.event_writer is not None:
            self.event_writer.log_visit(row, col)

    def mark_path(self, row: int, col: int):
        self.cells[row * self.side + col] |= self.PATH
        if self.event_writer is not None:
            self.event_writer.log_path_add(row, col)

    def get_neighbors(self, row: int, col: int) -> Iterator[Tuple[int, int, int]]:
        """
        Yields (nrow, ncol, direction_to_neighbor) for all in-bounds neighbours,
        always in the order North, East, South, West.
        Does NOT check walls (that's for pathfinding).
        """
        # North
        if row > 0:
            yield (row - 1, col, self.NORTH)
        # East
        if col < self.side - 1:
            yield (row, col + 1, self.EAST)
        # South
        if row < self.side - 1:
            yield (row + 1, col, self.SOUTH)
        # West
        if col > 0:
            yield (row, col - 1, self.WEST)

    def connected_neighbors(self, row: int, col: int) -> Iterator[Cell]:
        """
        Yields (nrow, ncol) for neighbours joined to (row, col) by an open passage.
        Border gaps are skipped by the bounds checks.
        """
        val = self.cells[row * self.side + col]

        if not (val & self.NORTH) and row > 0:
            yield (row - 1, col)
        if not (val & self.EAST) and col < self.side - 1:
            yield (row, col + 1)
        if not (val & self.SOUTH) and row < self.side - 1:
            yield (row + 1, col)
        if not (val & self.WEST) and col > 0:
            yield (row, col - 1)

    def edges(self) -> Iterator[Tuple[Cell, Cell]]:
        """Every pair of bordering cells, once each (east and south of each cell)."""
        for row in range(self.side):
            for col in range(self.side):
                if col < self.side - 1:
                    yield ((row, col), (row, col + 1))
                if row < self.side - 1:
                    yield ((row, col), (row + 1, col))

    def passage_count(self) -> int:
        # Count each inner passage once, from its west / north cell
        count = 0
        for row in range(self.side):
            for col in range(self.side):
                val = self.cells[row * self.side + col]
                if col < self.side - 1 and not (val & self.EAST):
                    count += 1
                if row < self.side - 1 and not (val & self.SOUTH):
                    count += 1
        return count
