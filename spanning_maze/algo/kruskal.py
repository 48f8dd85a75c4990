import logging
from typing import Iterator

from spanning_maze.algo.base import Generator
from spanning_maze.core.disjoint_set import DisjointSet

logger = logging.getLogger(__name__)

class KruskalsAlgorithm(Generator):
    """
    Randomized Kruskal's. Draws grid edges uniformly at random without
    replacement and opens every edge whose endpoints are still in different
    sets. There is no start cell; cells are marked visited the first time
    they gain a passage so the display fills in as the forest grows.
    """
    def __init__(self, grid, seed=None, rng=None, start=None):
        super().__init__(grid, seed=seed, rng=rng, start=start)
        self.forest = None

    def run(self) -> Iterator[str]:
        rng = self.make_rng()
        grid = self.grid

        pool = list(grid.edges())
        self.forest = DisjointSet(grid.size)
        self.state = Generator.EXPANDING
        logger.debug("Kruskal's with %d candidate edges", len(pool))

        if grid.size == 1:
            grid.set_visited(0, 0)

        while pool:
            # Draw and drop a random edge, swap remove for O(1)
            idx = rng.randrange(len(pool))
            a, b = pool[idx]
            pool[idx] = pool[-1]
            pool.pop()

            ia = grid.get_index(*a)
            ib = grid.get_index(*b)
            if self.forest.union(ia, ib):
                grid.open_passage(a, b)
                for row, col in (a, b):
                    if not grid.is_visited(row, col):
                        grid.set_visited(row, col)
                self.step_count += 1

            yield f"Edges left: {len(pool)} Sets: {self.forest.set_count()}"

        self.state = Generator.DONE
        logger.debug("Kruskal's finished with %d merges", self.forest.merges)
        yield "Done"
