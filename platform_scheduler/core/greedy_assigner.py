from typing import List, Sequence

from .models import Train, Platform, ScoringWeights, DEFAULT_WEIGHTS
from .intervals import with_effective_times
from .scoring import platform_score

# Score-based greedy platform assignment:
# - Sort by effective arrival (arrival + delay); ties keep input order
# - Score every platform that is free by the train's effective arrival
# - Take the lowest score (first minimum wins); else open a new platform


def assign_platforms(trains: Sequence[Train], weights: ScoringWeights = DEFAULT_WEIGHTS) -> List[Platform]:
    ordered = sorted(with_effective_times(trains), key=lambda t: (t.effective_arrival, t.index))
    platforms: List[Platform] = []

    for train in ordered:
        best_idx = -1
        best_score = float("inf")
        for i, pl in enumerate(platforms):
            score = platform_score(pl, train, weights)
            if score is not None and score < best_score:
                best_score = score
                best_idx = i

        if best_idx >= 0:
            pl = platforms[best_idx]
            pl.trains.append(train)
            pl.next_free_at = train.effective_departure
        else:
            platforms.append(Platform(
                id=len(platforms) + 1,
                trains=[train],
                next_free_at=train.effective_departure,
            ))

    return platforms
