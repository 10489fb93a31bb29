# core/services/time_range_service.py

from __future__ import annotations

import json
from typing import Iterable, List, Optional

from core.errors import StoreUnavailableError
from core.i_key_value_store import IKeyValueStore
from core.logging_config import get_logger
from core.models.time_range import TimeLike, TimeRange
from policy.time_window_policy import validate_range

logger = get_logger("store.time_ranges")

TIME_RANGES_KEY = "timeRanges"

# json.loads raises RecursionError on very deeply nested input
DECODE_ERRORS = (ValueError, KeyError, TypeError, RecursionError)


def encode_time_ranges(ranges: Iterable[TimeRange]) -> bytes:
    return json.dumps([r.to_dict() for r in ranges], indent=2).encode("utf-8")


def decode_time_ranges(data: bytes) -> List[TimeRange]:
    """
    Strict decode; any bad entry fails the whole list.
    Raises any of DECODE_ERRORS.
    """
    items = json.loads(data.decode("utf-8"))
    if not isinstance(items, list):
        raise TypeError("time ranges document must be a JSON array")
    return [TimeRange.from_dict(item) for item in items]


class TimeRangeService:
    """
    Read/write access for the "timeRanges" document.

    Reads fail open: a missing store, a missing key or an undecodable
    document all come back as "no ranges", so nothing gets blocked.
    Edits read strictly: an unreadable store aborts the edit instead of
    overwriting the stored ranges.
    """

    def __init__(self, store: Optional[IKeyValueStore]):
        self.store = store

    def load(self) -> List[TimeRange]:
        if self.store is None:
            logger.warning("No store available; treating as no time ranges")
            return []

        try:
            ranges = self._read()
        except StoreUnavailableError as e:
            logger.warning("Time ranges unreadable (%s); treating as none", e)
            return []

        logger.debug("Loaded %d time ranges", len(ranges))
        return ranges

    def is_configured(self) -> bool:
        """False when the send guard should point the user at the settings window."""
        if self.store is None:
            return False
        try:
            data = self.store.get(TIME_RANGES_KEY)
        except StoreUnavailableError:
            return False
        if data is None:
            return False
        try:
            decode_time_ranges(data)
        except DECODE_ERRORS:
            return False
        return True

    def save(self, ranges: Iterable[TimeRange]) -> None:
        if self.store is None:
            raise StoreUnavailableError("No store available to save time ranges")
        ranges = list(ranges)
        self.store.set(TIME_RANGES_KEY, encode_time_ranges(ranges))
        logger.info("Saved %d time ranges", len(ranges))

    def _read(self) -> List[TimeRange]:
        """
        Stored ranges; a missing or undecodable document counts as empty.
        Raises StoreUnavailableError when the store cannot be read.
        """
        if self.store is None:
            raise StoreUnavailableError("No store available for time ranges")

        data = self.store.get(TIME_RANGES_KEY)
        if data is None:
            logger.info("No time ranges stored yet")
            return []

        try:
            return decode_time_ranges(data)
        except DECODE_ERRORS as e:
            logger.warning("Failed to decode time ranges: %s", e)
            return []

    # ------------------------------------------------------------------ #
    # Editor operations
    # ------------------------------------------------------------------ #

    def build_range(
        self,
        start: TimeLike,
        end: TimeLike,
        name: str = "",
        repeat_days: Iterable[int] = (),
    ) -> TimeRange:
        """Validate editor input and turn it into a TimeRange."""
        validate_range(start, end)
        return TimeRange.from_times(start, end, name=name, repeat_days=repeat_days)

    def add(self, time_range: TimeRange) -> List[TimeRange]:
        validate_range(time_range.start_minute_of_day, time_range.end_minute_of_day)
        ranges = self._read()
        ranges.append(time_range)
        self.save(ranges)
        return ranges

    def update(self, index: int, time_range: TimeRange) -> List[TimeRange]:
        validate_range(time_range.start_minute_of_day, time_range.end_minute_of_day)
        ranges = self._read()
        if not 0 <= index < len(ranges):
            raise IndexError(f"No time range at position {index}")
        ranges[index] = time_range
        self.save(ranges)
        return ranges

    def delete(self, index: int) -> List[TimeRange]:
        ranges = self._read()
        if not 0 <= index < len(ranges):
            raise IndexError(f"No time range at position {index}")
        removed = ranges.pop(index)
        self.save(ranges)
        logger.info("Deleted time range %r", removed)
        return ranges
