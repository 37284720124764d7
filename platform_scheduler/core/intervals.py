from typing import List, Sequence, Tuple

from .models import AssignedTrain, Minutes, Train

# Delay translates the whole occupancy window; dwell time never stretches.


def effective_interval(train: Train) -> Tuple[Minutes, Minutes]:
    return train.arrival + train.delay, train.departure + train.delay


def to_assigned(train: Train, index: int) -> AssignedTrain:
    arr, dep = effective_interval(train)
    return AssignedTrain(train=train, index=index, effective_arrival=arr, effective_departure=dep)


def with_effective_times(trains: Sequence[Train]) -> List[AssignedTrain]:
    return [to_assigned(t, i) for i, t in enumerate(trains)]
