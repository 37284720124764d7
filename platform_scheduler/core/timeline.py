from typing import List

from platform_scheduler.core.models import Minutes, Train
from platform_scheduler.core.intervals import effective_interval

# Times are minutes from the window origin; labels are wall-clock from BASE_HOUR.
WINDOW_START: Minutes = 0  # 08:00
WINDOW_END: Minutes = 240  # 12:00, 4 hour window
BASE_HOUR = 8


def minutes_to_label(m: Minutes) -> str:
    total = BASE_HOUR * 60 + int(m // 1)
    return f"{total // 60:02d}:{total % 60:02d}"


def minutes_to_label_with_seconds(m: Minutes) -> str:
    total = max(0, round(m * 60)) + BASE_HOUR * 3600
    h, rem = divmod(total, 3600)
    mm, s = divmod(rem, 60)
    return f"{h:02d}:{mm:02d}:{s:02d}"


def format_min_sec(m: Minutes) -> str:
    total = max(0, round(m * 60))
    return f"{total // 60}:{total % 60:02d}"


def time_ticks(step: int = 30, start: Minutes = WINDOW_START, end: Minutes = WINDOW_END) -> List[Minutes]:
    ticks = []
    m = start
    while m <= end:
        ticks.append(m)
        m += step
    return ticks


def in_window(train: Train, start: Minutes = WINDOW_START, end: Minutes = WINDOW_END) -> bool:
    # effective interval fully inside [start, end]
    arr, dep = effective_interval(train)
    return start <= arr and dep <= end
