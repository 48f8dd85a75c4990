import unittest
import sys
import os

# Add project root to path so we can import spanning_maze
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from spanning_maze.core.errors import InvalidSize, NotAdjacent
from spanning_maze.core.events import EVT_CARVE, EVT_VISIT, EventLog
from spanning_maze.core.grid import Grid

class TestGrid(unittest.TestCase):
    def test_initialization(self):
        grid = Grid(10)
        self.assertEqual(grid.side, 10)
        self.assertEqual(grid.size, 100)
        self.assertEqual(len(grid.cells), 100)
        # All cells should have all walls (value 15) and no flags
        for val in grid.cells:
            self.assertEqual(val, Grid.ALL_WALLS)
        self.assertEqual(grid.passage_count(), 0)

    def test_invalid_side(self):
        for bad in (0, -3, 2.5, "4", True, None):
            with self.assertRaises(InvalidSize):
                Grid(bad)

    def test_from_cell_count(self):
        self.assertEqual(Grid.from_cell_count(25).side, 5)
        self.assertEqual(Grid.from_cell_count(1).side, 1)
        for bad in (0, -4, 10, 24, 26):
            with self.assertRaises(InvalidSize):
                Grid.from_cell_count(bad)

    def test_invalid_size_is_value_error(self):
        with self.assertRaises(ValueError):
            Grid.from_cell_count(8)

    def test_coordinates(self):
        grid = Grid(5)
        self.assertEqual(grid.get_index(2, 3), 13) # 2 * 5 + 3
        self.assertEqual(grid.cell_at(13), (2, 3))
        self.assertEqual([grid.get_index(*c) for c in grid.all_cells()], list(range(25)))

        with self.assertRaises(IndexError):
            grid.get_index(-1, 0)
        with self.assertRaises(IndexError):
            grid.get_index(0, 5)
        with self.assertRaises(IndexError):
            grid.cell_at(25)

    def test_neighbor_order(self):
        grid = Grid(3)
        # Center cell: N, E, S, W
        self.assertEqual(
            list(grid.get_neighbors(1, 1)),
            [(0, 1, Grid.NORTH), (1, 2, Grid.EAST), (2, 1, Grid.SOUTH), (1, 0, Grid.WEST)],
        )
        # Corners drop out-of-bounds neighbours but keep the order
        self.assertEqual(list(grid.get_neighbors(0, 0)), [(0, 1, Grid.EAST), (1, 0, Grid.SOUTH)])
        self.assertEqual(list(grid.get_neighbors(2, 2)), [(1, 2, Grid.NORTH), (2, 1, Grid.WEST)])

    def test_single_cell_has_no_neighbors(self):
        grid = Grid(1)
        self.assertEqual(list(grid.get_neighbors(0, 0)), [])
        self.assertEqual(list(grid.edges()), [])

    def test_open_passage(self):
        grid = Grid(2)
        # (0,0) (0,1)
        # (1,0) (1,1)
        self.assertTrue(grid.open_passage((0, 0), (0, 1)))

        self.assertFalse(grid.has_wall(0, 0, Grid.EAST))
        self.assertFalse(grid.has_wall(0, 1, Grid.WEST))
        # Others remain
        self.assertTrue(grid.has_wall(0, 0, Grid.SOUTH))
        self.assertTrue(grid.has_wall(0, 1, Grid.EAST))
        self.assertEqual(grid.passage_count(), 1)

    def test_open_passage_is_idempotent(self):
        grid = Grid(3)
        grid.open_passage((1, 1), (2, 1))
        before = grid.cells.tobytes()
        self.assertFalse(grid.open_passage((1, 1), (2, 1)))
        self.assertFalse(grid.open_passage((2, 1), (1, 1)))
        self.assertEqual(grid.cells.tobytes(), before)
        self.assertEqual(grid.passage_count(), 1)

    def test_is_open_is_symmetric(self):
        grid = Grid(3)
        grid.open_passage((0, 2), (1, 2))
        for a, b in grid.edges():
            self.assertEqual(grid.is_open(a, b), grid.is_open(b, a))
        self.assertTrue(grid.is_open((1, 2), (0, 2)))
        self.assertFalse(grid.is_open((0, 0), (0, 1)))

    def test_not_adjacent(self):
        grid = Grid(3)
        for a, b in [((0, 0), (1, 1)), ((0, 0), (0, 2)), ((1, 1), (1, 1)), ((0, 0), (-1, 0)), ((2, 2), (2, 3))]:
            with self.assertRaises(NotAdjacent):
                grid.open_passage(a, b)
            self.assertFalse(grid.is_open(a, b))
        self.assertEqual(grid.passage_count(), 0)

    def test_carve_into_void(self):
        grid = Grid(2)
        with self.assertRaises(NotAdjacent):
            grid.carve_path(0, 0, Grid.NORTH)

    def test_connected_neighbors(self):
        grid = Grid(3)
        grid.open_passage((1, 1), (0, 1))
        grid.open_passage((1, 1), (1, 0))
        self.assertEqual(list(grid.connected_neighbors(1, 1)), [(0, 1), (1, 0)])
        self.assertEqual(list(grid.connected_neighbors(0, 1)), [(1, 1)])
        self.assertEqual(list(grid.connected_neighbors(2, 2)), [])

    def test_border_gap_is_not_a_passage(self):
        grid = Grid(3)
        grid.open_border(0, 0, Grid.NORTH)
        grid.open_border(2, 2, Grid.SOUTH)
        self.assertFalse(grid.has_wall(0, 0, Grid.NORTH))
        self.assertEqual(grid.passage_count(), 0)
        self.assertEqual(list(grid.connected_neighbors(0, 0)), [])
        with self.assertRaises(ValueError):
            grid.open_border(1, 1, Grid.NORTH)

    def test_edges(self):
        for side in (1, 2, 3, 7):
            grid = Grid(side)
            edges = list(grid.edges())
            self.assertEqual(len(edges), 2 * side * (side - 1))
            self.assertEqual(len(set(edges)), len(edges))
            for a, b in edges:
                self.assertIsNotNone(grid.direction_between(a, b))

    def test_visited_flags(self):
        grid = Grid(3)
        self.assertFalse(grid.is_visited(1, 1))
        grid.set_visited(1, 1)
        self.assertTrue(grid.is_visited(1, 1))
        grid.set_visited(1, 1, False)
        self.assertFalse(grid.is_visited(1, 1))

    def test_clear_flags_keeps_walls(self):
        grid = Grid(2)
        grid.open_passage((0, 0), (1, 0))
        grid.set_visited(0, 0)
        grid.set_frontier(1, 1)
        grid.mark_path(0, 1)
        grid.clear_flags(Grid.ALL_FLAGS)
        self.assertFalse(grid.is_visited(0, 0))
        self.assertFalse(grid.is_frontier(1, 1))
        self.assertTrue(grid.is_open((0, 0), (1, 0)))

    def test_reset(self):
        grid = Grid(3)
        grid.open_passage((0, 0), (1, 0))
        grid.set_visited(2, 2)
        grid.reset()
        self.assertEqual(list(grid.cells), [Grid.ALL_WALLS] * 9)

    def test_events(self):
        log = EventLog()
        grid = Grid(2, event_writer=log)
        grid.set_visited(0, 0)
        grid.open_passage((0, 0), (1, 0))
        grid.open_passage((1, 0), (0, 0)) # no-op, no event
        self.assertEqual(log.events, [(EVT_VISIT, (0, 0)), (EVT_CARVE, (0, 0, 1, 0))])

if __name__ == '__main__':
    unittest.main()
