"""Tabular views of an assignment run (train details, scheduling metrics, reach time)."""
from typing import Dict, Optional, Sequence

import pandas as pd

from platform_scheduler.core.models import Platform
from platform_scheduler.core.timeline import minutes_to_label, minutes_to_label_with_seconds, format_min_sec
from platform_scheduler.sim.metrics import PlatformMetrics, train_delay_figures

DETAILS_COLUMNS = ["train", "status", "sched_arr", "sched_dep", "delay_min", "effective", "platform"]
METRICS_COLUMNS = ["train", "platform", "previous_delay_min", "end_time", "new_delay"]
REACH_COLUMNS = ["train", "platform", "sched_dep", "end_time", "previous_delay_min", "new_delay_min", "new_reach_time"]


def train_details_frame(platforms: Sequence[Platform]) -> pd.DataFrame:
    rows = []
    for pl in platforms:
        for t in pl.trains:
            rows.append({
                "train": t.name,
                "status": t.status,
                "sched_arr": minutes_to_label(t.arrival),
                "sched_dep": minutes_to_label(t.departure),
                "delay_min": t.delay,
                "effective": f"{minutes_to_label(t.effective_arrival)} - {minutes_to_label(t.effective_departure)}",
                "platform": f"Platform {pl.id}",
            })
    return pd.DataFrame(rows, columns=DETAILS_COLUMNS)


def scheduling_metrics_frame(platforms: Sequence[Platform], metrics: Optional[Dict[int, PlatformMetrics]] = None) -> pd.DataFrame:
    # New delay here is the clamped view: max(previous - end, 0)
    rows = [
        {
            "train": f.name,
            "platform": f"Platform {f.platform_id}",
            "previous_delay_min": f.previous_delay,
            "end_time": format_min_sec(f.end_metric),
            "new_delay": round(f.clamped_reach_delay, 2),
        }
        for f in train_delay_figures(platforms, metrics)
    ]
    return pd.DataFrame(rows, columns=METRICS_COLUMNS)


def reach_time_frame(platforms: Sequence[Platform], metrics: Optional[Dict[int, PlatformMetrics]] = None) -> pd.DataFrame:
    # New delay here is the absolute view: |end - previous|
    rows = [
        {
            "train": f.name,
            "platform": f"Platform {f.platform_id}",
            "sched_dep": minutes_to_label(f.scheduled_departure),
            "end_time": format_min_sec(f.end_metric),
            "previous_delay_min": f.previous_delay,
            "new_delay_min": round(f.absolute_reach_delay, 2),
            "new_reach_time": minutes_to_label_with_seconds(f.new_reach_time),
        }
        for f in train_delay_figures(platforms, metrics)
    ]
    return pd.DataFrame(rows, columns=REACH_COLUMNS)


REPORT_VIEWS = {
    "details": train_details_frame,
    "metrics": scheduling_metrics_frame,
    "reach": reach_time_frame,
}


def frame_to_csv(df: pd.DataFrame) -> str:
    return df.to_csv(index=False)
