# sobriety/scoring.py

from __future__ import annotations

import math
from enum import Enum
from typing import Sequence, Tuple

# Reaction: 100 points at 0.2s, 0 points at 1.0s
REACTION_BEST_SECONDS = 0.2
REACTION_SPAN_SECONDS = 0.8

# Sequence: 100 points at 2s, 0 points at 8s
SEQUENCE_BEST_SECONDS = 2.0
SEQUENCE_SPAN_SECONDS = 6.0

# Balance: 0 tilt is perfect, 1.5 (about 60 degrees) scores 0
BALANCE_MAX_TILT = 1.5
TILT_SENSITIVITY = 0.7

ALERT_THRESHOLD = 80
SLOW_THRESHOLD = 60

DISCLAIMER = (
    "Note: This test is in development and should not be considered "
    "medically accurate."
)


class SobrietyTier(str, Enum):
    ALERT = "alert"
    SOMEWHAT_SLOW = "somewhat slow"
    IMPAIRED = "significantly impaired"

    @property
    def message(self) -> str:
        return TIER_MESSAGES[self]


TIER_MESSAGES = {
    SobrietyTier.ALERT: "You seem to be fully alert!",
    SobrietyTier.SOMEWHAT_SLOW: "Your reactions are somewhat slow. Take care!",
    SobrietyTier.IMPAIRED: (
        "Your reactions appear significantly impaired. Please don't drive or text!"
    ),
}


def clamp_score(value: float) -> int:
    """Round half-up, then clamp into 0..100."""
    return max(0, min(100, int(math.floor(value + 0.5))))


def linear_score(measured: float, best: float, span: float) -> int:
    """100 at `best`, 0 at `best + span`, linear in between."""
    return clamp_score(100.0 * (1.0 - (measured - best) / span))


def reaction_score(reaction_time: float) -> int:
    return linear_score(reaction_time, REACTION_BEST_SECONDS, REACTION_SPAN_SECONDS)


def sequence_score(completion_time: float) -> int:
    return linear_score(completion_time, SEQUENCE_BEST_SECONDS, SEQUENCE_SPAN_SECONDS)


def tilt_magnitude(tilt_x: float, tilt_y: float) -> float:
    """Dampened tilt of one motion sample."""
    x = abs(tilt_x) * TILT_SENSITIVITY
    y = abs(tilt_y) * TILT_SENSITIVITY
    return math.sqrt(x * x + y * y)


def balance_score(max_tilt: float) -> int:
    return clamp_score(100.0 * (1.0 - max_tilt / BALANCE_MAX_TILT))


def categorize(score: int) -> SobrietyTier:
    """
    Convert a 0..100 score into a tier. Also used to colour single test scores.
    """
    if score >= ALERT_THRESHOLD:
        return SobrietyTier.ALERT
    if score >= SLOW_THRESHOLD:
        return SobrietyTier.SOMEWHAT_SLOW
    return SobrietyTier.IMPAIRED


def composite(scores: Sequence[int]) -> Tuple[int, SobrietyTier]:
    """Integer average of the test scores plus its tier."""
    if not scores:
        raise ValueError("composite score needs at least one test score")
    total = sum(scores) // len(scores)
    return total, categorize(total)
