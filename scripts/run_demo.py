from __future__ import annotations

import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from index_minpq.index_min_pq import IndexMinPQ
from index_minpq.logger import init_logger, set_log_level
from lib.demo_config import DemoConfig, load_demo_config, parse_args

logger = init_logger(__name__)


def fill(pq: IndexMinPQ[str], words: list[str]) -> None:
    for i, word in enumerate(words):
        pq.insert(i, word)


def run_demo(cfg: DemoConfig) -> tuple[list[int], list[int]]:
    """
    Insert every word under its position, drain with del_min, then refill and
    walk the queue in key order. Returns both index sequences.
    """
    pq: IndexMinPQ[str] = IndexMinPQ(cfg.queue_capacity)

    fill(pq, cfg.words)
    drained: list[int] = []
    while not pq.is_empty():
        i = pq.del_min()
        drained.append(i)
        print(f"{i}, {cfg.words[i]}")
    print()

    fill(pq, cfg.words)
    iterated = list(pq)
    for i in iterated:
        print(f"{i}, {cfg.words[i]}")
    logger.info(f"Iterated {len(iterated)} indices; queue still holds {pq.size()}")

    while not pq.is_empty():
        pq.del_min()
    return drained, iterated


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv, description="Drain and iterate an indexed min-priority-queue of words.")
    cfg = load_demo_config(args)
    if args.print_config:
        print(json.dumps(asdict(cfg), indent=2, sort_keys=True))
        return
    set_log_level(cfg.log_level)
    run_demo(cfg)


if __name__ == "__main__":
    main()
