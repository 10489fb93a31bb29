# policy/actions.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ActionKind(str, Enum):
    ALLOW = "ALLOW"
    SOFT_WARN = "SOFT_WARN"
    HARD_WARN = "HARD_WARN"


SOFT_WARN_MESSAGE = (
    "You're attempting to send a message during your designated cautionary "
    "hours. Are you sure you want to proceed?"
)

HARD_WARN_MESSAGE = (
    "This contact is marked as risky. Take a moment before sending "
    "during your active hours."
)


@dataclass(frozen=True)
class Allow:
    kind: ActionKind = ActionKind.ALLOW


@dataclass(frozen=True)
class SoftWarn:
    """Confirm/cancel dialog; confirming sends immediately."""
    message: str = SOFT_WARN_MESSAGE
    kind: ActionKind = ActionKind.SOFT_WARN


@dataclass(frozen=True)
class HardWarn:
    """Warning whose "send anyway" control unlocks after a countdown."""
    cooldown_seconds: int
    message: str = HARD_WARN_MESSAGE
    kind: ActionKind = ActionKind.HARD_WARN


Action = Union[Allow, SoftWarn, HardWarn]
