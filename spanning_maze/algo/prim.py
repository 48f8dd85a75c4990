import logging
from typing import Iterator, List, Set

from spanning_maze.algo.base import Generator
from spanning_maze.core.errors import NoVisitedNeighbor
from spanning_maze.core.grid import Cell

logger = logging.getLogger(__name__)

class PrimsAlgorithm(Generator):
    def run(self) -> Iterator[str]:
        rng = self.make_rng()
        grid = self.grid

        start_row, start_col = self.pick_start(rng)
        grid.set_visited(start_row, start_col)
        self.state = Generator.EXPANDING
        logger.debug("Prim's starting at (%d, %d)", start_row, start_col)

        # Set for O(1) membership, list for uniform random choice
        frontier_set: Set[Cell] = set()
        frontier_list: List[Cell] = []

        def extend_frontier(row, col):
            for nrow, ncol, _ in grid.get_neighbors(row, col):
                if not grid.is_visited(nrow, ncol) and (nrow, ncol) not in frontier_set:
                    frontier_set.add((nrow, ncol))
                    frontier_list.append((nrow, ncol))
                    grid.set_frontier(nrow, ncol)

        extend_frontier(start_row, start_col)
        yield f"Frontier: {len(frontier_list)}"

        while frontier_list:
            # Pick random cell from frontier, swap remove for O(1)
            idx = rng.randrange(len(frontier_list))
            row, col = frontier_list[idx]
            frontier_list[idx] = frontier_list[-1]
            frontier_list.pop()
            frontier_set.discard((row, col))
            grid.set_frontier(row, col, False)

            # Carve TO one random visited neighbour
            visited_neighbors = [
                (nrow, ncol) for nrow, ncol, _ in grid.get_neighbors(row, col)
                if grid.is_visited(nrow, ncol)
            ]
            if not visited_neighbors:
                raise NoVisitedNeighbor(f"Frontier cell ({row}, {col}) has no visited neighbour")

            target = rng.choice(visited_neighbors)
            grid.open_passage((row, col), target)
            grid.set_visited(row, col)
            self.step_count += 1

            extend_frontier(row, col)
            yield f"Frontier: {len(frontier_list)}"

        self.state = Generator.DONE
        logger.debug("Prim's finished after %d steps", self.step_count)
        yield "Done"
