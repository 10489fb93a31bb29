# core/errors.py


class NoDrunkTextError(Exception):
    """Base class for errors raised by the app."""


class InvalidTimeRangeError(NoDrunkTextError, ValueError):
    """
    Raised when a proposed time range cannot be stored
    (bad minute/day values, or a same-day range that ends before it starts).
    """


class StoreUnavailableError(NoDrunkTextError):
    """The shared key-value store could not be opened."""
