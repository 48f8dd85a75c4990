import logging
from typing import Iterator, List

from spanning_maze.algo.base import Generator
from spanning_maze.core.grid import Cell

logger = logging.getLogger(__name__)

class RecursiveBacktracker(Generator):
    def run(self) -> Iterator[str]:
        rng = self.make_rng()
        grid = self.grid

        start_row, start_col = self.pick_start(rng)
        grid.set_visited(start_row, start_col)
        self.state = Generator.EXPANDING
        logger.debug("Backtracker starting at (%d, %d)", start_row, start_col)

        # Explicit stack instead of recursion; large grids would blow the call stack
        stack: List[Cell] = [(start_row, start_col)]

        while stack:
            row, col = stack[-1]

            # Candidates keep the N, E, S, W order of get_neighbors
            neighbors = [
                (nrow, ncol) for nrow, ncol, _ in grid.get_neighbors(row, col)
                if not grid.is_visited(nrow, ncol)
            ]

            if neighbors:
                nrow, ncol = rng.choice(neighbors)
                grid.open_passage((nrow, ncol), (row, col))
                grid.set_visited(nrow, ncol)
                stack.append((nrow, ncol))
                self.step_count += 1
                yield f"Carving... Stack: {len(stack)}"
            else:
                # Dead end
                stack.pop()
                yield f"Backtracking... Stack: {len(stack)}"

        self.state = Generator.DONE
        logger.debug("Backtracker finished after %d carves", self.step_count)
        yield "Done"
