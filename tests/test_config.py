import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from spanning_maze.core.config import SIZE_PRESETS, default_pace
from spanning_maze.main import main

class TestConfig(unittest.TestCase):
    def test_presets(self):
        self.assertEqual(default_pace(9), 0.5)
        self.assertEqual(default_pace(625), 0.005)
        for count, pace in SIZE_PRESETS.items():
            self.assertEqual(default_pace(count), pace)

    def test_between_presets(self):
        self.assertEqual(default_pace(36), 0.2)
        self.assertEqual(default_pace(10000), 0.005)
        self.assertEqual(default_pace(4), 0.5)

    def test_override(self):
        self.assertEqual(default_pace(9, 0.0), 0.0)
        self.assertEqual(default_pace(625, 1.5), 1.5)
        with self.assertRaises(ValueError):
            default_pace(9, -1)

class TestCLI(unittest.TestCase):
    def test_headless_generate(self):
        with self.assertLogs("spanning_maze", level="INFO") as logs:
            main(["generate", "--side", "5", "--algo", "kruskal", "--seed", "3", "--solve"])
        text = "\n".join(logs.output)
        self.assertIn("Passages: 24 / 24", text)
        self.assertIn("Path length:", text)

    def test_cells_option(self):
        with self.assertLogs("spanning_maze", level="INFO") as logs:
            main(["generate", "--cells", "25", "--algo", "dfs", "--start", "1", "1"])
        self.assertIn("Passages: 24 / 24", "\n".join(logs.output))

    def test_invalid_cells(self):
        with self.assertRaises(SystemExit):
            main(["generate", "--cells", "10"])

    def test_start_out_of_grid(self):
        with self.assertRaises(SystemExit):
            main(["generate", "--side", "3", "--start", "5", "0"])

if __name__ == '__main__':
    unittest.main()
