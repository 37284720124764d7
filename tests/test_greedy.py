import random

from platform_scheduler.core.models import Train, ScoringWeights, DEFAULT_WEIGHTS, DELAYED
from platform_scheduler.core.greedy_assigner import assign_platforms
from platform_scheduler.sim.scenario import default_trains


def _ids(platforms):
    return [[t.id for t in p.trains] for p in platforms]


def test_two_platforms_for_overlapping_trio():
    a = Train(id="A", name="A", arrival=0, departure=20)
    b = Train(id="B", name="B", arrival=10, departure=30)
    c = Train(id="C", name="C", arrival=25, departure=40)

    platforms = assign_platforms([a, b, c])

    assert _ids(platforms) == [["A", "C"], ["B"]]
    assert [p.id for p in platforms] == [1, 2]
    assert platforms[0].next_free_at == 40
    assert platforms[1].next_free_at == 30


def test_no_trains_no_platforms():
    assert assign_platforms([]) == []


def test_delay_shifts_interval_before_sorting():
    # B is scheduled first but its delay pushes it after A
    a = Train(id="A", name="A", arrival=10, departure=20)
    b = Train(id="B", name="B", arrival=0, departure=5, delay=15, status=DELAYED)

    platforms = assign_platforms([a, b])

    assert _ids(platforms) == [["A"], ["B"]]
    assert platforms[1].trains[0].effective_arrival == 15
    assert platforms[1].trains[0].effective_departure == 20


def test_every_train_assigned_exactly_once_and_no_overlap():
    rnd = random.Random(7)
    trains = []
    for i in range(60):
        arr = rnd.randint(0, 220)
        delay = rnd.choice([0, 0, 0, rnd.randint(5, 18)])
        trains.append(Train(id=f"T{i}", name=f"T{i}", arrival=arr, departure=arr + rnd.randint(10, 40),
                            delay=delay, status=DELAYED if delay else "on-time"))

    platforms = assign_platforms(trains)

    assigned = [t.id for p in platforms for t in p.trains]
    assert sorted(assigned) == sorted(t.id for t in trains)
    assert len(assigned) == len(trains)
    for p in platforms:
        for first, second in zip(p.trains, p.trains[1:]):
            assert second.effective_arrival >= first.effective_departure, f"Overlap on platform {p.id}"


def test_deterministic_for_same_input():
    trains = default_trains()
    trains[3].delay, trains[3].status = 12, DELAYED
    assert _ids(assign_platforms(trains)) == _ids(assign_platforms(trains))


def test_equal_arrivals_keep_input_order():
    # Both arrive at 0 and overlap, so whichever comes first opens platform 1
    x = Train(id="X", name="X", arrival=0, departure=10)
    y = Train(id="Y", name="Y", arrival=0, departure=10)

    assert _ids(assign_platforms([x, y])) == [["X"], ["Y"]]
    assert _ids(assign_platforms([y, x])) == [["Y"], ["X"]]


def test_equal_scores_pick_earliest_platform():
    # P1 and P2 both free at 10 with one train each; Z scores the same on both
    p1 = Train(id="P1", name="P1", arrival=0, departure=10)
    p2 = Train(id="P2", name="P2", arrival=0, departure=10)
    z = Train(id="Z", name="Z", arrival=12, departure=20)

    platforms = assign_platforms([p1, p2, z])

    assert _ids(platforms) == [["P1", "Z"], ["P2"]]


def test_delayed_spread_steers_away_from_delayed_platform():
    d = Train(id="D", name="D", arrival=0, departure=10, delay=1, status=DELAYED)
    o = Train(id="O", name="O", arrival=1, departure=11)
    n = Train(id="N", name="N", arrival=12, departure=20)

    # gap on platform 1 is 1, on platform 2 is 1; platform 1 carries a delayed train
    platforms = assign_platforms([d, o, n], DEFAULT_WEIGHTS)
    assert _ids(platforms) == [["D"], ["O", "N"]]

    # without the delayed penalty the earlier platform wins the tie
    flat = ScoringWeights(idle_gap=1.0, load=0.3, delayed_spread=0.0)
    assert _ids(assign_platforms([d, o, n], flat)) == [["D", "N"], ["O"]]


def test_idle_gap_prefers_tightest_fit():
    a = Train(id="A", name="A", arrival=0, departure=10)
    b = Train(id="B", name="B", arrival=5, departure=30)
    c = Train(id="C", name="C", arrival=31, departure=40)

    # C fits both; gap 21 on platform 1 vs 1 on platform 2
    assert _ids(assign_platforms([a, b, c])) == [["A"], ["B", "C"]]


def test_never_assigned_before_platform_is_free():
    trains = default_trains()
    for i in (1, 6, 11):
        trains[i].delay, trains[i].status = 9, DELAYED

    platforms = assign_platforms(trains)

    for p in platforms:
        free_at = None
        for t in p.trains:
            if free_at is not None:
                assert free_at <= t.effective_arrival
            free_at = t.effective_departure
        assert p.next_free_at == p.trains[-1].effective_departure


def test_input_trains_not_mutated():
    trains = default_trains()
    before = [(t.id, t.arrival, t.departure, t.delay, t.status) for t in trains]
    assign_platforms(trains)
    assert [(t.id, t.arrival, t.departure, t.delay, t.status) for t in trains] == before
