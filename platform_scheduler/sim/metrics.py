from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from platform_scheduler.core.models import Platform, Train
from platform_scheduler.core.timeline import WINDOW_START, WINDOW_END, in_window


@dataclass
class PlatformMetrics:
    platform_id: int
    total_trains: int
    total_delay_minutes: float
    delayed_count: int
    end_metric: float  # (total delay + delayed trains) / trains


@dataclass
class TrainDelayFigures:
    train_id: str
    name: str
    platform_id: int
    scheduled_departure: float
    previous_delay: float
    end_metric: float
    # Two views of the same quantity: the reach table uses |end - prev|,
    # the metrics table max(0, prev - end).
    absolute_reach_delay: float
    clamped_reach_delay: float
    old_reach_time: float  # sched. departure + previous delay
    new_reach_time: float  # sched. departure + end metric
    reach_delta: float  # signed; negative when the reach time improves


def platform_metrics(platform: Platform) -> PlatformMetrics:
    total = len(platform.trains)
    total_delay = sum(t.delay for t in platform.trains)
    delayed = platform.delayed_count
    end_metric = (total_delay + delayed) / total if total > 0 else 0
    return PlatformMetrics(
        platform_id=platform.id,
        total_trains=total,
        total_delay_minutes=total_delay,
        delayed_count=delayed,
        end_metric=end_metric,
    )


def metrics_by_platform(platforms: Sequence[Platform]) -> Dict[int, PlatformMetrics]:
    return {pl.id: platform_metrics(pl) for pl in platforms}


def train_delay_figures(platforms: Sequence[Platform], metrics: Optional[Dict[int, PlatformMetrics]] = None) -> List[TrainDelayFigures]:
    # Ordered by platform, then by assignment order within the platform
    metrics = metrics if metrics is not None else metrics_by_platform(platforms)
    rows: List[TrainDelayFigures] = []
    for pl in platforms:
        m = metrics.get(pl.id)
        end_metric = m.end_metric if m else 0
        for t in pl.trains:
            prev = t.delay
            old_reach = t.departure + prev
            new_reach = t.departure + end_metric
            rows.append(TrainDelayFigures(
                train_id=t.id,
                name=t.name,
                platform_id=pl.id,
                scheduled_departure=t.departure,
                previous_delay=prev,
                end_metric=end_metric,
                absolute_reach_delay=abs(end_metric - prev),
                clamped_reach_delay=max(0, prev - end_metric),
                old_reach_time=old_reach,
                new_reach_time=new_reach,
                reach_delta=new_reach - old_reach,
            ))
    return rows


def delay_comparison(platforms: Sequence[Platform], metrics: Optional[Dict[int, PlatformMetrics]] = None) -> List[Dict[str, Any]]:
    # Chart rows: train details delay vs reach table delay
    return [
        {
            "train": f.train_id,
            "full_name": f.name,
            "prev_delay": f.previous_delay,
            "new_delay": round(f.absolute_reach_delay, 2),
        }
        for f in train_delay_figures(platforms, metrics)
    ]


def summarize_assignment(platforms: Sequence[Platform], trains: Sequence[Train], window_minutes: float = WINDOW_END - WINDOW_START) -> Dict[str, Any]:
    # returns basic KPIs: platforms used, on-time/delayed counts, end metric spread, utilization proxy
    if not platforms:
        return {
            "platforms_used": 0,
            "total_trains": len(trains),
            "on_time": len(trains),
            "delayed": 0,
            "outside_window": 0,
            "max_end_metric": 0.0,
            "mean_end_metric": 0.0,
            "utilization": 0,
        }
    delayed = sum(1 for t in trains if t.is_delayed)
    ends = [m.end_metric for m in metrics_by_platform(platforms).values()]
    # utilization proxy: occupied minutes over available platform-minutes (capped at 100)
    occupied = sum(t.effective_departure - t.effective_arrival for pl in platforms for t in pl.trains)
    capacity = window_minutes * len(platforms)
    utilization = int(100 * occupied / capacity) if capacity > 0 else 0
    return {
        "platforms_used": len(platforms),
        "total_trains": len(trains),
        "on_time": len(trains) - delayed,
        "delayed": delayed,
        # trains whose effective interval leaves [origin, origin + window]
        "outside_window": sum(1 for t in trains if not in_window(t, WINDOW_START, WINDOW_START + window_minutes)),
        "max_end_metric": float(max(ends)),
        "mean_end_metric": float(sum(ends) / len(ends)),
        "utilization": max(0, min(utilization, 100)),
    }
