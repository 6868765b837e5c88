from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

import yaml

from sokoban_core.errors import MalformedPuzzle, NoSolution, Timeout
from sokoban_core.parser import parse_board_file
from sokoban_core.render import render_ascii
from search.config import load_config
from search.driver import SearchDriver
from search.strategies import parse_selector, strategy_names
from heuristics.selector import canonical_name, heuristic_names

EPILOG = """\
classic selectors for --algo:
  b    breadth-first search
  d    depth-first search
  u    uniform-cost search (move = 1, push = 2)
  gb   greedy best-first, boxes-on-goal heuristic
  gm   greedy best-first, Manhattan heuristic
  gi   greedy best-first, improved Manhattan heuristic
  ab   A*, boxes-on-goal heuristic
  am   A*, Manhattan heuristic
  ai   A*, improved Manhattan heuristic

example:
  python -m scripts.run_search puzzles/level1.txt --algo ai -t 15
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Solve a Sokoban puzzle file",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("puzzle", help="puzzle file: width line, height line, then the grid")
    p.add_argument("--algo", default=None, help="classic selector (b, d, u, gb, gm, gi, ab, am, ai)")
    p.add_argument("-s", "--strategy", default=None, choices=strategy_names())
    p.add_argument("--h", dest="heuristic", default=None, type=canonical_name, choices=heuristic_names(),
                   help="heuristic (b, m, i are accepted as short names)")
    p.add_argument("-t", "--timeout", type=float, default=None, help="timeout in seconds (default: 30)")
    p.add_argument("--config", default=None, help="YAML config with strategy/heuristic/timeout_ms")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    strategy, heuristic = args.strategy, args.heuristic
    timeout_ms = int(args.timeout * 1000) if args.timeout is not None else None
    try:
        if args.algo is not None:
            strategy, short_h = parse_selector(args.algo)
            if short_h is not None:
                heuristic = canonical_name(short_h)
        cfg = load_config(args.config).override(strategy=strategy, heuristic=heuristic, timeout_ms=timeout_ms)
    except FileNotFoundError:
        print("Config file not found")
        return 1
    except (ValueError, yaml.YAMLError) as e:
        print(f"Invalid configuration: {e}")
        return 1

    try:
        board = parse_board_file(args.puzzle)
    except FileNotFoundError:
        print("Puzzle file not found")
        return 1
    except MalformedPuzzle as e:
        print(f"Malformed puzzle: {e}")
        return 1

    print(render_ascii(board))
    driver = SearchDriver(board, cfg.build_strategy(), timeout_ms=cfg.timeout_ms)
    try:
        solution = driver.search()
    except Timeout as e:
        print(e)
        return 1
    except NoSolution:
        print("Solution does not exist")
        return 1

    print(render_ascii(driver.path[-1]))
    print(f"Solution: {solution}")
    print(f"Nodes explored: {driver.nodes_explored}")
    print(f"Previously seen: {driver.previously_seen}")
    print(f"Fringe: {driver.frontier_size}")
    print(f"Explored set: {driver.visited_size}")
    print(f"Millis elapsed: {driver.elapsed_ms}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
