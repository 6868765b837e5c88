from __future__ import annotations
import argparse, csv, os, sys, time
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from tqdm import tqdm

from sokoban_core.errors import MalformedPuzzle, NoSolution, Timeout
from sokoban_core.parser import parse_board_file
from search.config import SearchConfig, load_config
from search.driver import SearchDriver
from search.strategies import strategy_names
from heuristics.selector import canonical_name, heuristic_names

FIELDS = ["puzzle", "strategy", "heuristic", "status", "moves", "nodes",
          "previously_seen", "frontier", "visited", "elapsed_ms"]


def run_one(path: str, cfg: SearchConfig) -> Dict[str, object]:
    row: Dict[str, object] = {"puzzle": path, "strategy": cfg.strategy,
                              "heuristic": cfg.heuristic, "moves": -1}
    try:
        board = parse_board_file(path)
    except MalformedPuzzle:
        row["status"] = "malformed"
        return row
    driver = SearchDriver(board, cfg.build_strategy(), timeout_ms=cfg.timeout_ms)
    try:
        driver.search()
        row["status"] = "solved"
        row["moves"] = len(driver.path) - 1
    except Timeout:
        row["status"] = "timeout"
    except NoSolution:
        row["status"] = "no_solution"
    row.update({
        "nodes": driver.nodes_explored,
        "previously_seen": driver.previously_seen,
        "frontier": driver.frontier_size,
        "visited": driver.visited_size,
        "elapsed_ms": driver.elapsed_ms,
    })
    return row


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Solve every puzzle file of a directory → CSV")
    p.add_argument("puzzle_dir", help="directory with puzzle .txt files")
    p.add_argument("--out", default="results/batch.csv", help="output CSV path")
    p.add_argument("--config", default=None, help="YAML config with strategy/heuristic/timeout_ms")
    p.add_argument("-s", "--strategy", default=None, choices=strategy_names())
    p.add_argument("--h", dest="heuristic", default=None, type=canonical_name, choices=heuristic_names(),
                   help="heuristic (b, m, i are accepted as short names)")
    p.add_argument("--time_limit", type=float, default=None, help="seconds per puzzle")
    args = p.parse_args(argv)

    timeout_ms = int(args.time_limit * 1000) if args.time_limit is not None else None
    try:
        cfg = load_config(args.config).override(strategy=args.strategy, heuristic=args.heuristic,
                                                timeout_ms=timeout_ms)
    except FileNotFoundError:
        print("Config file not found")
        return 1
    except (ValueError, yaml.YAMLError) as e:
        print(f"Invalid configuration: {e}")
        return 1

    paths = sorted(str(f) for f in Path(args.puzzle_dir).glob("*.txt"))
    out_dir = os.path.dirname(args.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    started = time.time()
    rows = [run_one(path, cfg) for path in tqdm(paths, desc=f"Running {cfg.strategy}", unit="puzzle")]

    with open(args.out, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=FIELDS)
        w.writeheader()
        for r in rows:
            w.writerow(r)

    solved = sum(1 for r in rows if r["status"] == "solved")
    print(f"done: {solved}/{len(rows)} solved → {args.out}; total_time={time.time()-started:.2f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
