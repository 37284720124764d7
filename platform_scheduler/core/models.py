from dataclasses import dataclass, field
from typing import List

Minutes = float  # offset from the window origin (0 = 08:00)

ON_TIME = "on-time"
DELAYED = "delayed"
STATUSES = (ON_TIME, DELAYED)


@dataclass
class Train:
    id: str
    name: str
    arrival: Minutes  # scheduled arrival
    departure: Minutes  # scheduled departure
    delay: Minutes = 0  # applies to both arrival and departure
    status: str = ON_TIME

    @property
    def is_delayed(self) -> bool:
        return self.status == DELAYED


@dataclass(frozen=True)
class AssignedTrain:
    # Derived view of a Train for one assignment run; the base train is referenced, not copied.
    train: Train
    index: int  # position in the input list, used as the sort tie-break
    effective_arrival: Minutes
    effective_departure: Minutes

    @property
    def id(self) -> str:
        return self.train.id

    @property
    def name(self) -> str:
        return self.train.name

    @property
    def arrival(self) -> Minutes:
        return self.train.arrival

    @property
    def departure(self) -> Minutes:
        return self.train.departure

    @property
    def delay(self) -> Minutes:
        return self.train.delay

    @property
    def status(self) -> str:
        return self.train.status

    @property
    def is_delayed(self) -> bool:
        return self.train.is_delayed


@dataclass
class Platform:
    id: int
    trains: List[AssignedTrain] = field(default_factory=list)  # assignment order, not time order
    next_free_at: Minutes = 0

    @property
    def load(self) -> int:
        return len(self.trains)

    @property
    def delayed_count(self) -> int:
        return sum(1 for t in self.trains if t.is_delayed)


@dataclass(frozen=True)
class ScoringWeights:
    idle_gap: float = 1.0  # pack trains tightly
    load: float = 0.3  # light load balancing
    delayed_spread: float = 0.5  # keep delayed trains apart


DEFAULT_WEIGHTS = ScoringWeights()
# Every feasible platform scores 0, so the earliest created free platform wins.
FIRST_FIT_WEIGHTS = ScoringWeights(idle_gap=0.0, load=0.0, delayed_spread=0.0)
