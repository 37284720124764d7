from typing import List, Dict, Any, Optional, Sequence

from platform_scheduler.core.models import Train, Platform, ScoringWeights
from platform_scheduler.core.solver import assign
from platform_scheduler.core.timeline import WINDOW_START, WINDOW_END
from platform_scheduler.sim.metrics import metrics_by_platform, train_delay_figures, summarize_assignment, delay_comparison


def default_trains() -> List[Train]:
    # 18 trains across the 4 hour window, all on time
    return [
        Train(id="T1", name="Red Line 101", arrival=10, departure=40),
        Train(id="T2", name="Coastal 202", arrival=25, departure=70),
        Train(id="T3", name="Express 303", arrival=60, departure=100),
        Train(id="T4", name="Metro 404", arrival=80, departure=120),
        Train(id="T5", name="Regional 505", arrival=110, departure=150),
        Train(id="T6", name="CityLink 606", arrival=140, departure=175),
        Train(id="T7", name="Valley 707", arrival=170, departure=205),
        Train(id="T8", name="Summit 808", arrival=195, departure=235),
        Train(id="T9", name="Harbor 909", arrival=0, departure=20),
        Train(id="T10", name="Forest 919", arrival=18, departure=55),
        Train(id="T11", name="River 929", arrival=45, departure=85),
        Train(id="T12", name="Garden 939", arrival=90, departure=125),
        Train(id="T13", name="Meadow 949", arrival=105, departure=140),
        Train(id="T14", name="Cedar 959", arrival=130, departure=165),
        Train(id="T15", name="Pine 969", arrival=155, departure=190),
        Train(id="T16", name="Oak 979", arrival=165, departure=200),
        Train(id="T17", name="Spruce 989", arrival=200, departure=235),
        Train(id="T18", name="Willow 999", arrival=210, departure=240),
    ]


def run_scenario(
    trains: Sequence[Train],
    weights: Optional[ScoringWeights] = None,
    strategy: str = "score",
    window_minutes: float = WINDOW_END - WINDOW_START,
) -> Dict[str, Any]:
    platforms = assign(trains, weights, strategy=strategy)
    metrics = metrics_by_platform(platforms)
    return {
        "platforms": platforms,
        "metrics": metrics,
        "figures": train_delay_figures(platforms, metrics),
        "comparison": delay_comparison(platforms, metrics),
        "kpis": summarize_assignment(platforms, trains, window_minutes=window_minutes),
    }


def gantt_json(platforms: Sequence[Platform]) -> List[Dict[str, Any]]:
    # One bar per assigned train on its platform row
    return [
        {
            "train": t.id,
            "name": t.name,
            "platform": pl.id,
            "start": t.effective_arrival,
            "end": t.effective_departure,
            "status": t.status,
        }
        for pl in platforms
        for t in pl.trains
    ]


def platforms_json(platforms: Sequence[Platform]) -> List[Dict[str, Any]]:
    return [
        {
            "id": pl.id,
            "next_free_at": pl.next_free_at,
            "trains": [
                {
                    "id": t.id,
                    "name": t.name,
                    "arrival": t.arrival,
                    "departure": t.departure,
                    "delay": t.delay,
                    "status": t.status,
                    "effective_arrival": t.effective_arrival,
                    "effective_departure": t.effective_departure,
                }
                for t in pl.trains
            ],
        }
        for pl in platforms
    ]
