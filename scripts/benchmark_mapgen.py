#!/usr/bin/env python3
"""Benchmark battle map generation across the map size presets.

Generates several maps per preset and prints a timing table, followed by
the per-layer breakdown collected by the performance tracker.

Usage:
    python scripts/benchmark_mapgen.py
    python scripts/benchmark_mapgen.py --runs 10 --seed BENCH
"""

# ruff: noqa: E402  # Allow path setup before importing project modules

from __future__ import annotations

import argparse
import statistics
import sys
import time
from pathlib import Path

# Add the project root to Python path so running as a script works.
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from tacmap import config
from tacmap.environment.generators import generate_map
from tacmap.environment.map import MapConfig
from tacmap.util.performance import (
    enable_performance_tracking,
    get_performance_report,
)


def _bench_preset(preset: str, runs: int, seed: str) -> list[float]:
    """Generate `runs` maps for one preset and return per-run milliseconds."""
    timings: list[float] = []
    for run in range(runs):
        map_config = MapConfig(seed=f"{seed}-{run}").with_size(preset)
        start = time.perf_counter()
        generate_map(map_config)
        timings.append((time.perf_counter() - start) * 1000)
    return timings


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--runs", type=int, default=5)
    parser.add_argument("--seed", default="BENCH")
    args = parser.parse_args()

    enable_performance_tracking()

    header = f"{'Preset':<10} {'Size':>6} {'Mean(ms)':>10} {'Min(ms)':>10}"
    print(f"{header} {'Max(ms)':>10}")
    print("-" * 50)
    for preset, size in config.MAP_SIZE_PRESETS.items():
        timings = _bench_preset(preset, args.runs, args.seed)
        print(
            f"{preset:<10} {size:>6} {statistics.mean(timings):>10.1f} "
            f"{min(timings):>10.1f} {max(timings):>10.1f}"
        )
    print()
    print(get_performance_report(filter_prefix="mapgen."))


if __name__ == "__main__":
    main()
