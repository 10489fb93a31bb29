# policy/cooldown_timer.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from core.config import DEFAULT_COOLDOWN_SECONDS
from core.logging_config import get_logger

logger = get_logger("policy.cooldown")


class CooldownStatus(str, Enum):
    """
    Lifecycle of one high-risk warning.
    EXPIRED and CANCELLED end the attempt.
    """
    IDLE = "IDLE"
    COUNTING_DOWN = "COUNTING_DOWN"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"


@dataclass
class CooldownSnapshot:
    """
    State of the countdown at a given moment.
    """
    status: CooldownStatus
    remaining_seconds: int
    total_seconds: int

    @property
    def can_proceed(self) -> bool:
        return self.status == CooldownStatus.EXPIRED


class CooldownTimer:
    """
    Countdown that gates the "send anyway" button of a hard warning.

    This class owns no timer. Whoever shows the warning calls `tick()` once
    per second (a QTimer in the UI, a loop in tests), so the countdown can be
    stepped by hand. After `cancel()` further ticks are ignored, and expiry
    only enables proceeding; it never sends anything.

    on_update: callable(CooldownSnapshot) | None
        Called after every state change, e.g. to refresh a button label.
    """

    def __init__(
        self,
        seconds: int = DEFAULT_COOLDOWN_SECONDS,
        *,
        on_update: Optional[Callable[[CooldownSnapshot], None]] = None,
    ) -> None:
        if seconds < 1:
            raise ValueError("cooldown must be at least one second")

        self.total_seconds = int(seconds)
        self.on_update = on_update

        self._status = CooldownStatus.IDLE
        self._remaining = self.total_seconds

    # ------------------------------------------------------------------ #
    # Transitions
    # ------------------------------------------------------------------ #

    def start(self) -> None:
        """IDLE -> COUNTING_DOWN(N). Called when the warning is shown."""
        if self._status != CooldownStatus.IDLE:
            return

        self._remaining = self.total_seconds
        self._status = CooldownStatus.COUNTING_DOWN
        logger.debug("Cooldown started (%ss)", self.total_seconds)
        self._notify()

    def tick(self) -> None:
        """One elapsed second. Ignored unless counting down."""
        if self._status != CooldownStatus.COUNTING_DOWN:
            return

        self._remaining -= 1
        if self._remaining <= 0:
            self._remaining = 0
            self._status = CooldownStatus.EXPIRED
            logger.debug("Cooldown expired")
        self._notify()

    def cancel(self) -> None:
        """User pressed cancel: the send is aborted and the countdown reset."""
        if self._status == CooldownStatus.CANCELLED:
            return

        self._status = CooldownStatus.CANCELLED
        self._remaining = self.total_seconds
        logger.debug("Cooldown cancelled")
        self._notify()

    def confirm(self) -> bool:
        """
        User pressed "send anyway". Returns True if the message may go out.
        """
        return self.can_proceed

    # ------------------------------------------------------------------ #
    # State
    # ------------------------------------------------------------------ #

    @property
    def status(self) -> CooldownStatus:
        return self._status

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def can_proceed(self) -> bool:
        return self._status == CooldownStatus.EXPIRED

    @property
    def is_finished(self) -> bool:
        return self._status in (CooldownStatus.EXPIRED, CooldownStatus.CANCELLED)

    def snapshot(self) -> CooldownSnapshot:
        return CooldownSnapshot(
            status=self._status,
            remaining_seconds=self._remaining,
            total_seconds=self.total_seconds,
        )

    def _notify(self) -> None:
        if self.on_update is not None:
            self.on_update(self.snapshot())
