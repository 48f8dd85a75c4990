import random
from abc import ABC, abstractmethod
from typing import Iterator, Optional

from spanning_maze.core.grid import Cell, Grid

class Generator(ABC):
    # Lifecycle
    UNINITIALIZED = "uninitialized"
    EXPANDING = "expanding"
    DONE = "done"

    def __init__(self, grid: Grid, seed: int = None, rng=None, start: Optional[Cell] = None):
        """
        rng: optional random source with randrange(n) and choice(seq).
             Defaults to random.Random(seed), created fresh on every run.
        start: seed cell. Drawn uniformly from the grid when omitted.
        """
        self.grid = grid
        self.seed = seed
        self.rng = rng
        self.start = start
        self.step_count = 0
        self.state = Generator.UNINITIALIZED

    def make_rng(self):
        if self.rng is not None:
            return self.rng
        return random.Random(self.seed)

    def pick_start(self, rng) -> Cell:
        if self.start is not None:
            # Validates bounds
            self.grid.get_index(*self.start)
            return tuple(self.start)
        return self.grid.cell_at(rng.randrange(self.grid.size))

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields a status string after every processed cell or edge.
        The actual grid modifications happen in-place on self.grid.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
