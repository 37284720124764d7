import asyncio
import random

import pytest

from platform_scheduler.core.models import DELAYED, ON_TIME
from platform_scheduler.sim.delay_feed import DelayInjector, LiveDelayDriver
from platform_scheduler.sim.scenario import default_trains


def test_exactly_two_trains_delayed_per_tick():
    inj = DelayInjector(rng=random.Random(1))
    trains = default_trains()
    for _ in range(10):
        trains = inj.next_snapshot(trains)
        delayed = [t for t in trains if t.status == DELAYED]
        assert len(delayed) == 2
        assert all(5 <= t.delay <= 18 for t in delayed)
        assert all(t.delay == 0 for t in trains if t.status == ON_TIME)


def test_snapshot_is_a_new_list_and_input_untouched():
    inj = DelayInjector(rng=random.Random(2))
    trains = default_trains()
    snap = inj.next_snapshot(trains)
    assert snap is not trains
    assert all(a is not b for a, b in zip(trains, snap))
    assert all(t.delay == 0 and t.status == ON_TIME for t in trains)
    assert [t.id for t in snap] == [t.id for t in trains]


def test_delayed_count_is_configurable_and_capped():
    trains = default_trains()[:3]
    snap = DelayInjector(delayed_per_tick=5, rng=random.Random(3)).next_snapshot(trains)
    assert sum(1 for t in snap if t.is_delayed) == 3
    snap = DelayInjector(delayed_per_tick=0, rng=random.Random(3)).next_snapshot(trains)
    assert not any(t.is_delayed for t in snap)


def test_same_seed_same_snapshot():
    a = DelayInjector(rng=random.Random(42)).next_snapshot(default_trains())
    b = DelayInjector(rng=random.Random(42)).next_snapshot(default_trains())
    assert [(t.id, t.delay) for t in a] == [(t.id, t.delay) for t in b]


def test_bad_delay_range_rejected():
    with pytest.raises(ValueError):
        DelayInjector(min_delay=10, max_delay=5)


def test_driver_tick_recomputes_from_scratch():
    seen = []
    drv = LiveDelayDriver(default_trains(), DelayInjector(rng=random.Random(5)), on_update=seen.append)
    assert drv.latest.tick == 0
    assert not any(t.is_delayed for t in drv.latest.trains)

    res = drv.tick()

    assert res.tick == 1 and drv.latest is res
    assert seen == [res]
    assert sum(1 for t in res.trains if t.is_delayed) == 2
    assigned = sorted(t.id for p in res.platforms for t in p.trains)
    assert assigned == sorted(t.id for t in res.trains)
    assert set(res.metrics) == {p.id for p in res.platforms}


def test_driver_survives_failing_callback():
    def boom(_):
        raise RuntimeError("listener down")

    drv = LiveDelayDriver(default_trains(), DelayInjector(rng=random.Random(6)), on_update=boom)
    drv.tick()
    drv.tick()
    assert drv.latest.tick == 2


@pytest.mark.asyncio
async def test_driver_stops_ticking_after_stop():
    drv = LiveDelayDriver(default_trains(), DelayInjector(rng=random.Random(7)), interval_s=0.01)
    drv.start()
    assert drv.running
    await asyncio.sleep(0.05)
    await drv.stop()
    assert not drv.running
    ticks = drv.latest.tick
    assert ticks >= 1
    await asyncio.sleep(0.05)
    assert drv.latest.tick == ticks


@pytest.mark.asyncio
async def test_stop_without_start_is_noop():
    drv = LiveDelayDriver(default_trains())
    await drv.stop()
    assert not drv.running


def test_subscribers_receive_every_tick():
    first, second = [], []
    drv = LiveDelayDriver(default_trains(), DelayInjector(rng=random.Random(8)), on_update=first.append)
    drv.subscribe(second.append)
    drv.tick()
    drv.tick()
    assert [r.tick for r in first] == [1, 2]
    assert second == first
