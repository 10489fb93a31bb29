# policy/time_window_policy.py

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from core.clock import IClock, SystemClock
from core.errors import InvalidTimeRangeError
from core.logging_config import get_logger
from core.models.time_range import TimeLike, TimeRange, to_minute_of_day

logger = get_logger("policy.window")


def range_contains(time_range: TimeRange, minute: int) -> bool:
    """
    Minute-of-day membership for a single range, ignoring repeat days.
    Both ends are inclusive.
    """
    start = time_range.start_minute_of_day
    end = time_range.end_minute_of_day

    if end > start:
        return start <= minute <= end

    # Crosses midnight (end == start included)
    return minute >= start or minute <= end


def validate_range(start: TimeLike, end: TimeLike) -> None:
    """
    Editor check for a proposed range. Raises InvalidTimeRangeError.

    A range whose end minute is at or before its start minute crosses
    midnight and is always accepted. Otherwise the raw values must increase;
    for plain minutes/`time` values that already holds, for full datetimes
    the date part takes part in the comparison.
    """
    start_minute = to_minute_of_day(start)
    end_minute = to_minute_of_day(end)

    if end_minute <= start_minute:
        return

    if isinstance(start, datetime) and isinstance(end, datetime):
        same_day_invalid = start >= end
    else:
        same_day_invalid = start_minute >= end_minute

    if same_day_invalid:
        raise InvalidTimeRangeError("End time must be after start time")


class TimeWindowPolicy:
    """
    Decides whether an instant falls inside any configured active range.

    day_filtering:
        When True, a range with non-empty repeat_days only applies on those
        days. When False every range applies every day.
    """

    def __init__(self, clock: Optional[IClock] = None, *, day_filtering: bool = True) -> None:
        self.clock = clock or SystemClock()
        self.day_filtering = day_filtering

    def is_active(self, now: Optional[datetime], ranges: Iterable[TimeRange]) -> bool:
        if now is None:
            now = self.clock.now()

        minute = self.clock.minute_of_day(now)
        weekday = self.clock.day_of_week(now)

        for time_range in ranges:
            if self.day_filtering and time_range.repeat_days and weekday not in time_range.repeat_days:
                continue

            if range_contains(time_range, minute):
                logger.debug("%s matches %r", now.strftime("%a %H:%M"), time_range)
                return True

        return False

    def matching_range(self, now: datetime, ranges: Iterable[TimeRange]) -> Optional[TimeRange]:
        """First range that is active at `now`, for display ("Active: Friday night")."""
        for time_range in ranges:
            if self.is_active(now, [time_range]):
                return time_range
        return None

    validate_range = staticmethod(validate_range)
