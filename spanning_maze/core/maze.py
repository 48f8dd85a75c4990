import logging
from typing import Iterator, List, Optional

from spanning_maze.algo.base import Generator
from spanning_maze.algo.dfs import RecursiveBacktracker
from spanning_maze.algo.kruskal import KruskalsAlgorithm
from spanning_maze.algo.prim import PrimsAlgorithm
from spanning_maze.algo.solvers import BFS
from spanning_maze.core.config import DEFAULT_ALGORITHM
from spanning_maze.core.errors import NotSolved
from spanning_maze.core.events import EventLog
from spanning_maze.core.grid import Cell, Grid

logger = logging.getLogger(__name__)

GENERATORS = {
    "prim": PrimsAlgorithm,
    "kruskal": KruskalsAlgorithm,
    "dfs": RecursiveBacktracker,
}

def make_generator(algo: str, grid: Grid, seed: int = None, rng=None, start: Optional[Cell] = None) -> Generator:
    try:
        cls = GENERATORS[algo]
    except KeyError:
        raise ValueError(f"Unknown algorithm {algo!r}, expected one of {sorted(GENERATORS)}") from None
    return cls(grid, seed=seed, rng=rng, start=start)

class Maze:
    """
    Owns everything one maze needs: the grid and its passages, the event
    log, and the generator / solver of the current run. Nothing is shared
    between Maze instances.

    generate() and solve() are iterators with one step per processed cell;
    drive them from an animation loop, or call run_all() for a headless run.
    """
    def __init__(self, side: int):
        self.events = EventLog()
        self.grid = Grid(side, event_writer=self.events)
        self.generator: Optional[Generator] = None
        self.solver: Optional[BFS] = None
        # Log length when solving first began; later solves cut back to it
        self.solve_mark: Optional[int] = None
        self.generated = False

    @classmethod
    def from_cell_count(cls, count: int) -> "Maze":
        return cls(Grid.side_for_cell_count(count))

    @property
    def side(self) -> int:
        return self.grid.side

    @property
    def entrance(self) -> Cell:
        return (self.grid.side - 1, self.grid.side - 1)

    @property
    def exit(self) -> Cell:
        return (0, 0)

    def reset(self):
        self.grid.reset()
        self.events.clear()
        self.generator = None
        self.solver = None
        self.solve_mark = None
        self.generated = False

    def generate(self, algo: str = DEFAULT_ALGORITHM, seed: int = None, rng=None,
                 start: Optional[Cell] = None) -> Iterator[str]:
        """
        Clears the maze and returns the step iterator of a new generation run.
        Bad arguments fail here rather than on the first step.
        """
        generator = make_generator(algo, self.grid, seed=seed, rng=rng, start=start)
        if start is not None:
            self.grid.get_index(*start)
        self.reset()
        self.generator = generator
        return self._generate(algo)

    def _generate(self, algo: str) -> Iterator[str]:
        logger.info("Generating %dx%d maze with %s", self.side, self.side, algo)

        yield from self.generator.run()

        # Entrance and exit only exist once the maze is complete
        self.open_entrance_and_exit()
        self.generated = True
        logger.info("Generation done: %d passages", self.grid.passage_count())

    def open_entrance_and_exit(self):
        self.grid.open_border(*self.entrance, Grid.SOUTH)
        self.grid.open_border(*self.exit, Grid.NORTH)

    def solve(self) -> Iterator[str]:
        # A new solve replaces the old one, in the grid and in the log
        if self.solve_mark is None:
            self.solve_mark = len(self.events)
        else:
            self.events.truncate(self.solve_mark)
        self.solver = BFS(self.grid)
        logger.info("Solving from %s to %s", self.entrance, self.exit)
        yield from self.solver.run(self.entrance, self.exit)
        logger.info("Shortest path: %d cells", len(self.solver.path))

    def animate(self, algo: str = DEFAULT_ALGORITHM, seed: int = None, rng=None,
                start: Optional[Cell] = None, solve: bool = True) -> Iterator[str]:
        """Generation followed (optionally) by solving, as one step stream."""
        steps = self.generate(algo, seed=seed, rng=rng, start=start)
        return self._chain(steps, solve)

    def _chain(self, steps: Iterator[str], solve: bool) -> Iterator[str]:
        yield from steps
        if solve:
            yield from self.solve()

    def run_all(self, algo: str = DEFAULT_ALGORITHM, seed: int = None, rng=None,
                start: Optional[Cell] = None, solve: bool = True):
        for _ in self.animate(algo, seed=seed, rng=rng, start=start, solve=solve):
            pass

    def is_passage_open(self, a: Cell, b: Cell) -> bool:
        return self.grid.is_open(a, b)

    def shortest_path(self) -> List[Cell]:
        if self.solver is None:
            raise NotSolved("Call solve() before asking for the shortest path")
        return self.solver.shortest_path()
