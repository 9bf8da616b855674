from __future__ import annotations

import json
import sys
import time
from dataclasses import asdict
from pathlib import Path
from typing import Sequence

import numpy as np
from numpy.random import default_rng
from tqdm import tqdm

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from index_minpq.index_min_pq import IndexMinPQ
from index_minpq.logger import init_logger, set_log_level
from lib.demo_config import BenchmarkConfig, load_demo_config, parse_args

logger = init_logger(__name__)


def run_benchmark(cfg: BenchmarkConfig, show_progress: bool = True) -> dict[str, float]:
    rng = default_rng(cfg.seed)
    keys = rng.random(cfg.size)
    pq: IndexMinPQ[float] = IndexMinPQ(cfg.size)
    timings: dict[str, float] = {}

    start = time.perf_counter()
    for i in tqdm(range(cfg.size), desc="insert", disable=not show_progress):
        pq.insert(i, float(keys[i]))
    timings["insert_s"] = time.perf_counter() - start

    num_change = int(cfg.size * cfg.change_fraction)
    start = time.perf_counter()
    for i in tqdm(rng.permutation(cfg.size)[:num_change], desc="change_key", disable=not show_progress):
        pq.change_key(int(i), float(rng.random()))
    timings["change_key_s"] = time.perf_counter() - start

    num_delete = int(cfg.size * cfg.delete_fraction)
    start = time.perf_counter()
    for i in tqdm(rng.permutation(cfg.size)[:num_delete], desc="delete", disable=not show_progress):
        pq.delete(int(i))
    timings["delete_s"] = time.perf_counter() - start

    remaining = pq.size()
    extracted = np.empty(remaining, dtype=np.float64)
    start = time.perf_counter()
    with tqdm(total=remaining, desc="del_min", disable=not show_progress) as pbar:
        for k in range(remaining):
            extracted[k] = pq.min_key()
            pq.del_min()
            pbar.update(1)
    timings["del_min_s"] = time.perf_counter() - start

    if remaining > 1 and not np.all(np.diff(extracted) >= 0):
        raise RuntimeError("del_min produced keys out of order")
    timings["extracted"] = float(remaining)
    return timings


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv, description="Time insert/change_key/delete/del_min on random keys.")
    cfg = load_demo_config(args)
    if args.print_config:
        print(json.dumps(asdict(cfg), indent=2, sort_keys=True))
        return
    set_log_level(cfg.log_level)
    timings = run_benchmark(cfg.benchmark)
    for name, value in timings.items():
        logger.info(f"{name}: {value:.4f}")


if __name__ == "__main__":
    main()
