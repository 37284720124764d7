import argparse
import json
import logging
import random
from pathlib import Path
from typing import List

from platform_scheduler.config import SchedulerConfig, configure_logging
from platform_scheduler.core.models import Train
from platform_scheduler.core.solver import STRATEGIES
from platform_scheduler.core.timeline import time_ticks, minutes_to_label
from platform_scheduler.sim.delay_feed import DelayInjector
from platform_scheduler.sim.reports import train_details_frame, scheduling_metrics_frame, reach_time_frame
from platform_scheduler.sim.scenario import default_trains, run_scenario

logger = logging.getLogger(__name__)


def load_trains(path: Path) -> List[Train]:
    data = json.loads(path.read_text())
    return [Train(**t) for t in data["trains"]]


def main() -> None:
    ap = argparse.ArgumentParser(description="Assign trains to platforms and print the resulting tables.")
    ap.add_argument("--trains", type=Path, default=None, help="JSON file with a 'trains' list (default: built-in fleet)")
    ap.add_argument("--ticks", type=int, default=0, help="delay ticks to apply before printing")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--strategy", choices=STRATEGIES, default="score")
    args = ap.parse_args()

    cfg = SchedulerConfig.from_env()
    configure_logging(cfg.log_level)

    trains = load_trains(args.trains) if args.trains else default_trains()
    seed = args.seed if args.seed is not None else cfg.seed
    injector = DelayInjector(cfg.delayed_per_tick, cfg.min_delay, cfg.max_delay, rng=random.Random(seed))
    for i in range(args.ticks):
        trains = injector.next_snapshot(trains)
        logger.info("Applied tick %d", i + 1)

    result = run_scenario(trains, cfg.weights, strategy=args.strategy, window_minutes=cfg.window_minutes)
    platforms = result["platforms"]
    print("KPIs:", result["kpis"])
    print("Window:", " ".join(minutes_to_label(m) for m in time_ticks(end=cfg.window_minutes)))
    print("\nTrain Details")
    print(train_details_frame(platforms).to_string(index=False))
    print("\nScheduling Metrics")
    print(scheduling_metrics_frame(platforms, result["metrics"]).to_string(index=False))
    print("\nReach Time")
    print(reach_time_frame(platforms, result["metrics"]).to_string(index=False))


if __name__ == "__main__":
    main()
