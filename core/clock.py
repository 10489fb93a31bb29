# core/clock.py

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


def minute_of_day(moment: datetime) -> int:
    """Minutes since local midnight, 0..1439."""
    return moment.hour * 60 + moment.minute


def day_of_week(moment: datetime) -> int:
    """
    Day number with Sunday first: 1 = Sunday, 2 = Monday, ..., 7 = Saturday.
    (datetime.isoweekday() is 1 = Monday ... 7 = Sunday.)
    """
    return moment.isoweekday() % 7 + 1


class IClock(ABC):
    """
    Source of "now" for the policy code.
    Tests inject FixedClock so nothing depends on the wall clock.
    """

    @abstractmethod
    def now(self) -> datetime:
        raise NotImplementedError

    def minute_of_day(self, moment: datetime) -> int:
        return minute_of_day(moment)

    def day_of_week(self, moment: datetime) -> int:
        return day_of_week(moment)


class SystemClock(IClock):
    """Local wall-clock time."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(IClock):
    def __init__(self, moment: datetime) -> None:
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def set(self, moment: datetime) -> None:
        self.moment = moment
