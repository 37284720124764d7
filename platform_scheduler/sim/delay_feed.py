"""Live delay feed.

`DelayInjector` produces a fresh vehicle snapshot per tick (a fixed number of
randomly chosen trains delayed, all others back on time). `LiveDelayDriver`
owns the periodic loop: each tick swaps the whole snapshot in one step and
recomputes the platform assignment and metrics from scratch.
"""
from __future__ import annotations
import asyncio
import logging
import random
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional, Sequence

from platform_scheduler.core.models import Train, Platform, ScoringWeights, ON_TIME, DELAYED
from platform_scheduler.core.solver import assign
from platform_scheduler.sim.metrics import PlatformMetrics, metrics_by_platform

logger = logging.getLogger(__name__)


class DelayInjector:
    def __init__(self, delayed_per_tick: int = 2, min_delay: int = 5, max_delay: int = 18, rng: Optional[random.Random] = None) -> None:
        if min_delay > max_delay:
            raise ValueError(f"min_delay {min_delay} greater than max_delay {max_delay}")
        self.delayed_per_tick = delayed_per_tick
        self.min_delay = min_delay
        self.max_delay = max_delay
        self.rng = rng or random.Random()

    def next_snapshot(self, trains: Sequence[Train]) -> List[Train]:
        # Input trains are left untouched; a new list of new objects is returned
        k = max(0, min(self.delayed_per_tick, len(trains)))
        delayed_ids = {t.id for t in self.rng.sample(list(trains), k)}
        out: List[Train] = []
        for t in trains:
            if t.id in delayed_ids:
                out.append(replace(t, delay=self.rng.randint(self.min_delay, self.max_delay), status=DELAYED))
            else:
                out.append(replace(t, delay=0, status=ON_TIME))
        return out


@dataclass
class LiveResult:
    tick: int
    trains: List[Train]
    platforms: List[Platform]
    metrics: Dict[int, PlatformMetrics] = field(default_factory=dict)


UpdateCallback = Callable[[LiveResult], None]


class LiveDelayDriver:
    def __init__(
        self,
        trains: Sequence[Train],
        injector: Optional[DelayInjector] = None,
        interval_s: float = 4.0,
        weights: Optional[ScoringWeights] = None,
        strategy: str = "score",
        on_update: Optional[UpdateCallback] = None,
    ) -> None:
        self.injector = injector or DelayInjector()
        self.interval_s = interval_s
        self.weights = weights
        self.strategy = strategy
        self._listeners: List[UpdateCallback] = [on_update] if on_update else []
        self._task: Optional[asyncio.Task] = None
        self._tick = 0
        self._latest = self._recompute(list(trains))

    @property
    def latest(self) -> LiveResult:
        return self._latest

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, callback: UpdateCallback) -> None:
        self._listeners.append(callback)

    def _recompute(self, trains: List[Train]) -> LiveResult:
        platforms = assign(trains, self.weights, strategy=self.strategy)
        return LiveResult(tick=self._tick, trains=trains, platforms=platforms, metrics=metrics_by_platform(platforms))

    def tick(self) -> LiveResult:
        snapshot = self.injector.next_snapshot(self._latest.trains)
        self._tick += 1
        # single state transition: snapshot and derived result are swapped together
        self._latest = self._recompute(snapshot)
        delayed = [t.id for t in snapshot if t.is_delayed]
        logger.info("Tick %d: delayed=%s platforms=%d", self._tick, delayed, len(self._latest.platforms))
        for cb in list(self._listeners):
            try:
                cb(self._latest)
            except Exception:
                logger.exception("Live update callback failed on tick %d", self._tick)
        return self._latest

    async def _run(self) -> None:
        while True:
            self.tick()
            await asyncio.sleep(self.interval_s)

    def start(self) -> None:
        """Start ticking on the running event loop (first tick is immediate)."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info("Live delay driver started (interval=%.1fs)", self.interval_s)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Live delay driver stopped after %d ticks", self._tick)
