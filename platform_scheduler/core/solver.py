import logging
from typing import List, Optional, Sequence

from platform_scheduler.core.models import Train, Platform, ScoringWeights, DEFAULT_WEIGHTS, FIRST_FIT_WEIGHTS
from platform_scheduler.core.greedy_assigner import assign_platforms

logger = logging.getLogger(__name__)

STRATEGIES = ("score", "first_fit")


def assign(trains: Sequence[Train], weights: Optional[ScoringWeights] = None, strategy: str = "score") -> List[Platform]:
    if strategy == "score":
        w = weights or DEFAULT_WEIGHTS
    elif strategy == "first_fit":
        w = FIRST_FIT_WEIGHTS
    else:
        raise ValueError(f"Unknown strategy {strategy!r}; expected one of {STRATEGIES}")
    platforms = assign_platforms(trains, w)
    logger.debug("Assigned %d trains to %d platforms (strategy=%s, weights=%s)", len(trains), len(platforms), strategy, w)
    return platforms
