from typing import Optional

from .models import AssignedTrain, Minutes, Platform, ScoringWeights, DEFAULT_WEIGHTS


def is_feasible(platform: Platform, train: AssignedTrain) -> bool:
    # platform must be completely free by the effective arrival (no buffer)
    return platform.next_free_at <= train.effective_arrival


def idle_gap(platform: Platform, train: AssignedTrain) -> Minutes:
    return max(0, train.effective_arrival - platform.next_free_at)


def platform_score(platform: Platform, train: AssignedTrain, weights: ScoringWeights = DEFAULT_WEIGHTS) -> Optional[float]:
    """Cost of placing `train` on `platform`; lower is better.

    Returns None for infeasible platforms, which are never scored.
    """
    if not is_feasible(platform, train):
        return None
    return (
        weights.idle_gap * idle_gap(platform, train)
        + weights.load * platform.load
        + weights.delayed_spread * platform.delayed_count
    )
