import io
import logging
import random
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Any, Dict, List, Sequence

from fastapi import FastAPI
from fastapi.responses import StreamingResponse, RedirectResponse, Response
from pydantic import BaseModel, Field

from platform_scheduler.config import SchedulerConfig, configure_logging
from platform_scheduler.core.models import Train, Platform, ScoringWeights, ON_TIME
from platform_scheduler.core.solver import assign, STRATEGIES
from platform_scheduler.core.validation import ensure_valid, ScheduleValidationError
from platform_scheduler.sim.delay_feed import DelayInjector, LiveDelayDriver, LiveResult
from platform_scheduler.sim.metrics import PlatformMetrics, metrics_by_platform, train_delay_figures, summarize_assignment, delay_comparison
from platform_scheduler.sim.reports import REPORT_VIEWS, frame_to_csv
from platform_scheduler.sim.scenario import default_trains, gantt_json, platforms_json

logger = logging.getLogger(__name__)

cfg = SchedulerConfig.from_env()
configure_logging(cfg.log_level)


def _build_driver(c: SchedulerConfig) -> LiveDelayDriver:
    injector = DelayInjector(
        delayed_per_tick=c.delayed_per_tick,
        min_delay=c.min_delay,
        max_delay=c.max_delay,
        rng=random.Random(c.seed),
    )
    return LiveDelayDriver(default_trains(), injector=injector, interval_s=c.tick_seconds, weights=c.weights)


driver = _build_driver(cfg)


@asynccontextmanager
async def lifespan(_: FastAPI):
    if cfg.autostart:
        driver.start()
    yield
    # no ticks after shutdown
    await driver.stop()


app = FastAPI(title="Platform Assignment API", lifespan=lifespan)


class TrainIn(BaseModel):
    id: str
    name: str | None = None
    arrival: float
    departure: float
    delay: float = 0
    status: str = ON_TIME


class WeightsIn(BaseModel):
    idle_gap: float = Field(1.0, ge=0)
    load: float = Field(0.3, ge=0)
    delayed_spread: float = Field(0.5, ge=0)


class AssignRequest(BaseModel):
    trains: List[TrainIn] = []
    weights: WeightsIn | None = None


def _to_trains(body: AssignRequest) -> List[Train]:
    return [Train(id=t.id, name=t.name or t.id, arrival=t.arrival, departure=t.departure, delay=t.delay, status=t.status) for t in body.trains]


def _to_weights(body: AssignRequest) -> ScoringWeights:
    if body.weights is None:
        return cfg.weights
    return ScoringWeights(**body.weights.model_dump())


def _result_payload(trains: Sequence[Train], platforms: List[Platform], metrics: Dict[int, PlatformMetrics] | None = None) -> Dict[str, Any]:
    metrics = metrics if metrics is not None else metrics_by_platform(platforms)
    return {
        "kpis": summarize_assignment(platforms, trains, window_minutes=cfg.window_minutes),
        "platforms": platforms_json(platforms),
        "metrics": [asdict(m) for m in metrics.values()],
        "figures": [asdict(f) for f in train_delay_figures(platforms, metrics)],
        "comparison": delay_comparison(platforms, metrics),
        "gantt": gantt_json(platforms),
    }


def _live_payload(res: LiveResult) -> Dict[str, Any]:
    return {
        "tick": res.tick,
        "running": driver.running,
        "trains": [asdict(t) for t in res.trains],
        **_result_payload(res.trains, res.platforms, res.metrics),
    }


def _check(trains: List[Train], strategy: str, strict: bool) -> Dict[str, Any] | None:
    if strategy not in STRATEGIES:
        return {"error": f"unknown strategy {strategy!r}", "details": list(STRATEGIES)}
    if strict:
        try:
            ensure_valid(trains)
        except ScheduleValidationError as e:
            logger.info("Rejected schedule with %d problems", len(e.problems))
            return {"error": "invalid schedule", "details": e.problems}
    return None


@app.get("/")
async def root() -> RedirectResponse:
    return RedirectResponse(url="/docs")


@app.get("/favicon.ico")
async def favicon() -> Response:
    return Response(status_code=204)


@app.post("/assign")
async def assign_endpoint(body: AssignRequest, strategy: str = "score", strict: bool = False) -> Dict[str, Any]:
    """Assign the given trains to platforms and return platforms, metrics and KPIs.

    Body:
      {
        "trains": [ {id, name, arrival, departure, delay, status}, ... ],
        "weights": {idle_gap, load, delayed_spread} (optional)
      }
    """
    trains = _to_trains(body)
    err = _check(trains, strategy, strict)
    if err:
        return err
    platforms = assign(trains, _to_weights(body), strategy=strategy)
    return _result_payload(trains, platforms)


@app.post("/metrics")
async def metrics_endpoint(body: AssignRequest, strategy: str = "score", strict: bool = False) -> Dict[str, Any]:
    # KPIs and per-platform metrics without the full platform listing
    trains = _to_trains(body)
    err = _check(trains, strategy, strict)
    if err:
        return err
    platforms = assign(trains, _to_weights(body), strategy=strategy)
    return {
        "kpis": summarize_assignment(platforms, trains, window_minutes=cfg.window_minutes),
        "metrics": [asdict(m) for m in metrics_by_platform(platforms).values()],
    }


@app.get("/demo")
async def demo(strategy: str = "score") -> Dict[str, Any]:
    trains = default_trains()
    err = _check(trains, strategy, False)
    if err:
        return err
    return _result_payload(trains, assign(trains, cfg.weights, strategy=strategy))


@app.post("/tick")
async def tick(body: AssignRequest, seed: int | None = None, delayed_per_tick: int | None = None) -> Dict[str, Any]:
    """Apply one randomized delay tick to the given snapshot and reassign from scratch."""
    trains = _to_trains(body)
    injector = DelayInjector(
        delayed_per_tick=cfg.delayed_per_tick if delayed_per_tick is None else delayed_per_tick,
        min_delay=cfg.min_delay,
        max_delay=cfg.max_delay,
        rng=random.Random(seed),
    )
    snapshot = injector.next_snapshot(trains)
    platforms = assign(snapshot, _to_weights(body))
    return {"trains": [asdict(t) for t in snapshot], **_result_payload(snapshot, platforms)}


@app.get("/live/state")
async def live_state() -> Dict[str, Any]:
    return _live_payload(driver.latest)


@app.post("/live/tick")
async def live_tick() -> Dict[str, Any]:
    return _live_payload(driver.tick())


@app.post("/live/start")
async def live_start() -> Dict[str, Any]:
    driver.start()
    return {"running": driver.running, "interval_s": driver.interval_s}


@app.post("/live/stop")
async def live_stop() -> Dict[str, Any]:
    await driver.stop()
    return {"running": driver.running, "tick": driver.latest.tick}


@app.post("/reports/{view}.csv")
async def download_report(view: str, body: AssignRequest, strategy: str = "score") -> StreamingResponse:
    build = REPORT_VIEWS.get(view)
    if build is None:
        return StreamingResponse(io.StringIO(f"error,unknown report {view}\n"), media_type="text/csv")
    trains = _to_trains(body)
    if strategy not in STRATEGIES:
        return StreamingResponse(io.StringIO(f"error,unknown strategy {strategy}\n"), media_type="text/csv")
    platforms = assign(trains, _to_weights(body), strategy=strategy)
    buf = io.StringIO(frame_to_csv(build(platforms)))
    return StreamingResponse(buf, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={view}.csv"})
