import argparse
import logging
import os
import sys
import time

# Ensure project root is in path so we can import 'spanning_maze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from spanning_maze.core.config import ALGORITHMS, DEFAULT_ALGORITHM, default_pace
from spanning_maze.core.errors import InvalidSize
from spanning_maze.core.events import EVT_CARVE, EVT_FRONTIER, EVT_PATH_ADD, EVT_VISIT, EVENT_NAMES
from spanning_maze.core.maze import Maze

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Perfect maze generator and solver")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate (and optionally solve) a maze")
    size = gen_parser.add_mutually_exclusive_group()
    size.add_argument("--side", type=int, default=None, help="Cells per side (default 10)")
    size.add_argument("--cells", type=int, default=None, help="Total cell count, must be a perfect square")
    gen_parser.add_argument("--algo", type=str, default=DEFAULT_ALGORITHM, choices=ALGORITHMS, help="Generation Algorithm")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--start", type=int, nargs=2, metavar=("ROW", "COL"), default=None, help="Start cell (random if omitted)")
    gen_parser.add_argument("--solve", action="store_true", help="Find the shortest path after generating")
    gen_parser.add_argument("--visual", action="store_true", help="Animate in a window")
    gen_parser.add_argument("--record", action="store_true", help="Record the animation to mp4")
    gen_parser.add_argument("--pace", type=float, default=None, help="Seconds between animation steps (default depends on size)")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time every generator and the solver")
    bench_parser.add_argument("--side", type=int, default=100, help="Benchmark size")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random Seed")

    return parser

def run_generate(args, parser, logger):
    try:
        if args.cells is not None:
            maze = Maze.from_cell_count(args.cells)
        else:
            maze = Maze(args.side if args.side is not None else 10)
    except InvalidSize as e:
        parser.error(str(e))

    start = tuple(args.start) if args.start else None
    if start is not None and not maze.grid.in_bounds(*start):
        parser.error(f"--start {start} is outside a {maze.side}x{maze.side} grid")

    steps = maze.animate(args.algo, seed=args.seed, start=start, solve=args.solve)

    if args.visual or args.record:
        from spanning_maze.viz.renderer import Renderer
        pace = default_pace(maze.grid.size, args.pace)
        logger.info(f"Visual mode enabled ({pace}s per step) - Opening window...")
        renderer = Renderer(maze, steps, pace=pace, record=args.record)
        if args.record:
            os.makedirs("recordings", exist_ok=True)
            renderer.recorder.output_file = renderer.recorder.default_filename(
                f"gen_{args.algo}_{maze.side}x{maze.side}")
            logger.info(f"Recording video to {renderer.recorder.output_file}")
        renderer.init_window()
        renderer.run_loop()
    else:
        logger.info("Headless generation...")
        for _ in steps:
            pass

    counts = {EVENT_NAMES[code]: maze.events.count(code) for code in (EVT_VISIT, EVT_CARVE, EVT_FRONTIER, EVT_PATH_ADD)}
    logger.info(f"Passages: {maze.grid.passage_count()} / {maze.grid.size - 1}")
    logger.info(f"Events: {counts}")

    if args.solve and maze.solver is not None and maze.solver.solved:
        path = maze.shortest_path()
        logger.info(f"Path length: {len(path)} cells ({len(path) - 1} moves)")
        logger.debug(f"Path: {path}")

def run_benchmark(args, logger):
    logger.info(f"Running benchmark ({args.side}x{args.side})...")

    print(f"\n{'ALGORITHM':<10} | {'GEN (s)':<10} | {'SOLVE (s)':<10} | {'PATH LEN':<10} | {'VISITED':<10}")
    print("-" * 62)

    for algo in ALGORITHMS:
        maze = Maze(args.side)

        t0 = time.perf_counter()
        for _ in maze.generate(algo, seed=args.seed):
            pass
        gen_time = time.perf_counter() - t0

        t0 = time.perf_counter()
        for _ in maze.solve():
            pass
        solve_time = time.perf_counter() - t0

        path_len = len(maze.shortest_path())
        print(f"{algo:<10} | {gen_time:<10.4f} | {solve_time:<10.4f} | {path_len:<10} | {maze.solver.visited_count:<10}")

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("spanning_maze")

    if args.command is None:
        parser.print_help()
        return

    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        run_generate(args, parser, logger)
    elif args.command == "benchmark":
        run_benchmark(args, logger)

if __name__ == "__main__":
    main()
