"""Benchmark platform assignment for growing fleets.

Usage:
    python scripts/benchmark_assignment.py -Min 50 -Max 500 -Step 50 -Strategy score

Notes:
    - Greedy assignment is O(V * P) per run (vehicles x platforms).
"""

from __future__ import annotations
import argparse, random, statistics, json, time, os, sys
from collections import defaultdict
from typing import List

# Ensure project root on path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from platform_scheduler.core.models import Train  # type: ignore
from platform_scheduler.core.solver import assign, STRATEGIES  # type: ignore


def build_random_trains(n: int, window: int) -> List[Train]:
    trains: List[Train] = []
    for i in range(n):
        dwell = random.randint(15, 45)
        arr = random.randint(0, max(0, window - dwell))
        delayed = random.random() < 0.1
        trains.append(Train(
            id=f"T{i+1}",
            name=f"Service {100 + i}",
            arrival=arr,
            departure=arr + dwell,
            delay=random.randint(5, 18) if delayed else 0,
            status="delayed" if delayed else "on-time",
        ))
    return trains


def run_once(n_trains: int, window: int, strategy: str) -> dict:
    trains = build_random_trains(n_trains, window)
    t0 = time.perf_counter()
    platforms = assign(trains, strategy=strategy)
    dt = time.perf_counter() - t0
    return {
        "n_trains": n_trains,
        "strategy": strategy,
        "elapsed_s": dt,
        "platforms": len(platforms),
        "max_load": max((len(p.trains) for p in platforms), default=0),
    }


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument('-Min', type=int, default=50)
    ap.add_argument('-Max', type=int, default=500)
    ap.add_argument('-Step', type=int, default=50)
    ap.add_argument('-Window', type=int, default=240)
    ap.add_argument('-Repeats', type=int, default=3)
    ap.add_argument('-Strategy', type=str, default='score', choices=list(STRATEGIES))
    ap.add_argument('-Json', action='store_true')
    args = ap.parse_args()

    random.seed(42)
    rows = []
    for n in range(args.Min, args.Max + 1, args.Step):
        for _ in range(args.Repeats):
            row = run_once(n, args.Window, args.Strategy)
            rows.append(row)
            if args.Json:
                print(json.dumps(row))
            else:
                print(f"Trains={row['n_trains']:<4} elapsed={row['elapsed_s']*1000:7.2f} ms platforms={row['platforms']:<4} max_load={row['max_load']:<3} strategy={row['strategy']}")
    if not args.Json:
        by_n = defaultdict(list)
        for r in rows:
            by_n[r['n_trains']].append(r['elapsed_s'])
        print('\nSummary (mean ms per train count)')
        for n in sorted(by_n):
            ms = statistics.fmean(by_n[n]) * 1000
            print(f"  {n:>4}: {ms:7.2f} ms")


if __name__ == '__main__':
    main()
