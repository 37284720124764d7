import math
from typing import List, Sequence

from platform_scheduler.core.models import Train, STATUSES

# The assignment engine accepts anything; these checks are opt-in hardening
# for callers that want malformed schedules rejected up front.


class ScheduleValidationError(ValueError):
    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__("; ".join(problems))


def _is_nan(v) -> bool:
    return isinstance(v, float) and math.isnan(v)


def validate_trains(trains: Sequence[Train]) -> List[str]:
    problems: List[str] = []
    seen: set[str] = set()
    for t in trains:
        if t.id in seen:
            problems.append(f"{t.id}: duplicate train id")
        seen.add(t.id)
        if any(_is_nan(v) for v in (t.arrival, t.departure, t.delay)):
            problems.append(f"{t.id}: arrival, departure and delay must be numbers")
            continue
        if t.departure < t.arrival:
            problems.append(f"{t.id}: departure {t.departure} before arrival {t.arrival}")
        if t.delay < 0:
            problems.append(f"{t.id}: negative delay {t.delay}")
        if t.status not in STATUSES:
            problems.append(f"{t.id}: unknown status {t.status!r}")
    return problems


def ensure_valid(trains: Sequence[Train]) -> None:
    problems = validate_trains(trains)
    if problems:
        raise ScheduleValidationError(problems)
