import logging
from abc import ABC, abstractmethod
from array import array
from collections import deque
from typing import Iterator, List

from spanning_maze.core.errors import DisconnectedMaze, NotSolved
from spanning_maze.core.grid import Cell, Grid

logger = logging.getLogger(__name__)

class Solver(ABC):
    def __init__(self, grid: Grid):
        self.grid = grid
        self.path: List[Cell] = []
        self.visited_count = 0
        self.solved = False

    @abstractmethod
    def run(self, start: Cell, end: Cell) -> Iterator[str]:
        pass

    def run_all(self, start: Cell, end: Cell) -> List[Cell]:
        for _ in self.run(start, end):
            pass
        return self.shortest_path()

    def shortest_path(self) -> List[Cell]:
        """Cells from start to end. Only valid once run() has completed."""
        if not self.solved:
            raise NotSolved("Run the solver to completion before asking for the path")
        return list(self.path)

class BFS(Solver):
    """
    Shortest path on the passage graph (Dijkstra with unit weights).

    Phase 1 layers the maze breadth-first from the start, recording the
    depth at which each cell is first discovered. Phase 2 walks back from
    the end, each time stepping to the first connected neighbour with a
    smaller depth, until depth 0 is reached.

    Only passages reported by Grid.connected_neighbors are traversed.
    """
    def __init__(self, grid: Grid):
        super().__init__(grid)
        self.depth = None

    def run(self, start: Cell, end: Cell) -> Iterator[str]:
        grid = self.grid
        start, end = tuple(start), tuple(end)
        self.path = []
        self.solved = False
        grid.clear_flags(Grid.SOLVER_VISITED | Grid.PATH)

        # Dense depth map, -1 = undiscovered
        self.depth = array('i', [-1] * grid.size)
        self.depth[grid.get_index(*start)] = 0
        grid.get_index(*end) # Validates bounds

        grid.set_solver_visited(*start)
        self.visited_count = 1

        queue = deque([start])
        reached = False

        while queue:
            current = queue.popleft()
            if current == end:
                reached = True
                break

            next_depth = self.depth[grid.get_index(*current)] + 1
            for neighbor in grid.connected_neighbors(*current):
                idx = grid.get_index(*neighbor)
                if self.depth[idx] == -1:
                    self.depth[idx] = next_depth
                    grid.set_solver_visited(*neighbor)
                    self.visited_count += 1
                    queue.append(neighbor)

            yield f"Visited: {self.visited_count}"

        if not reached:
            raise DisconnectedMaze(f"{end} is not reachable from {start}")

        yield from self.descend(start, end)

        self.solved = True
        logger.debug("Solved %s -> %s: %d cells, %d visited", start, end, len(self.path), self.visited_count)
        yield "Solved"

    def descend(self, start: Cell, end: Cell) -> Iterator[str]:
        grid = self.grid
        current = end
        best = self.depth[grid.get_index(*end)]
        steps = [current]
        grid.mark_path(*current)

        while best > 0:
            for neighbor in grid.connected_neighbors(*current):
                d = self.depth[grid.get_index(*neighbor)]
                if d != -1 and d < best:
                    current, best = neighbor, d
                    break
            else:
                raise DisconnectedMaze(f"No way back toward {start} from {current}")

            steps.append(current)
            grid.mark_path(*current)
            yield f"Path: {len(steps)}"

        if current != start:
            raise DisconnectedMaze(f"Descent ended at {current}, expected {start}")

        steps.reverse()
        self.path = steps
