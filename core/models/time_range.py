# core/models/time_range.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Any, Dict, FrozenSet, Iterable, Union

from core.errors import InvalidTimeRangeError

MINUTES_PER_DAY = 24 * 60

# 1 = Sunday ... 7 = Saturday
DAY_NAMES = ["", "Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
EVERY_DAY = frozenset(range(1, 8))
WEEKDAYS = frozenset(range(2, 7))
WEEKENDS = frozenset({1, 7})

# Options offered by the "Repeat" picker; "Custom..." toggles single days.
REPEAT_PRESETS = [
    ("No repeat", frozenset()),
    ("Every day", EVERY_DAY),
    ("Weekdays", WEEKDAYS),
    ("Weekends", WEEKENDS),
]

TimeLike = Union[int, time, datetime]


def to_minute_of_day(value: TimeLike) -> int:
    """Accept a minute count, a `time` or a `datetime`; keep hour and minute only."""
    if isinstance(value, (time, datetime)):
        return value.hour * 60 + value.minute
    return int(value)


def format_minute(minute: int) -> str:
    return f"{minute // 60:02d}:{minute % 60:02d}"


@dataclass(frozen=True)
class TimeRange:
    """
    A daily window during which outgoing messages may trigger a warning.

    Only the minute of the day is kept. When end <= start the range runs
    past midnight into the next day.
    """
    start_minute_of_day: int
    end_minute_of_day: int
    name: str = ""
    repeat_days: FrozenSet[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        for label, minute in (
            ("start", self.start_minute_of_day),
            ("end", self.end_minute_of_day),
        ):
            if isinstance(minute, bool) or not isinstance(minute, int):
                raise InvalidTimeRangeError(f"{label} minute must be an integer, got {minute!r}")
            if not 0 <= minute < MINUTES_PER_DAY:
                raise InvalidTimeRangeError(f"{label} minute {minute} is outside 0..1439")

        days = frozenset(self.repeat_days)
        bad = sorted(
            (d for d in days if isinstance(d, bool) or not isinstance(d, int) or not 1 <= d <= 7),
            key=repr,
        )
        if bad:
            raise InvalidTimeRangeError(f"repeat days must be between 1 and 7, got {bad}")
        object.__setattr__(self, "repeat_days", days)
        object.__setattr__(self, "name", (self.name or "").strip())

    @classmethod
    def from_times(
        cls,
        start: TimeLike,
        end: TimeLike,
        name: str = "",
        repeat_days: Iterable[int] = (),
    ) -> "TimeRange":
        return cls(
            start_minute_of_day=to_minute_of_day(start),
            end_minute_of_day=to_minute_of_day(end),
            name=name,
            repeat_days=frozenset(repeat_days),
        )

    @property
    def crosses_midnight(self) -> bool:
        return self.end_minute_of_day <= self.start_minute_of_day

    def label(self) -> str:
        return f"{format_minute(self.start_minute_of_day)} - {format_minute(self.end_minute_of_day)}"

    def repeat_description(self) -> str:
        return describe_repeat_days(self.repeat_days)

    # ------------------------------------------------------------------ #
    # JSON
    # ------------------------------------------------------------------ #

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "startMinuteOfDay": self.start_minute_of_day,
            "endMinuteOfDay": self.end_minute_of_day,
            "repeatDays": sorted(self.repeat_days),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimeRange":
        """
        Decode the canonical schema, or the older
        {startHour, startMinute, endHour, endMinute} layout.
        Raises KeyError / TypeError / InvalidTimeRangeError on anything else.
        """
        if not isinstance(data, dict):
            raise TypeError(f"time range entry must be an object, got {type(data).__name__}")

        if "startMinuteOfDay" in data:
            start = data["startMinuteOfDay"]
            end = data["endMinuteOfDay"]
        else:
            start = data["startHour"] * 60 + data["startMinute"]
            end = data["endHour"] * 60 + data["endMinute"]

        return cls(
            start_minute_of_day=start,
            end_minute_of_day=end,
            name=data.get("name") or "",
            repeat_days=frozenset(data.get("repeatDays") or ()),
        )

    def __repr__(self) -> str:
        days = self.repeat_description()
        return f"<TimeRange {self.name!r} {self.label()} ({days})>"


def describe_repeat_days(days: Iterable[int]) -> str:
    days = frozenset(days)
    if not days:
        return "No repeat"
    if days == EVERY_DAY:
        return "Every day"
    if days == WEEKDAYS:
        return "Weekdays"
    if days == WEEKENDS:
        return "Weekends"
    return ", ".join(DAY_NAMES[d] for d in sorted(days))
