# sobriety/balance_game.py

from __future__ import annotations

from typing import Optional, Tuple

from core.logging_config import get_logger
from sobriety.i_sobriety_game import ISobrietyGame
from sobriety.scoring import balance_score, tilt_magnitude

logger = get_logger("sobriety.balance")

TEST_DURATION_SECONDS = 3.0
SAMPLE_INTERVAL_SECONDS = 0.1


class BalanceGame(ISobrietyGame):
    """
    Hold steady for three seconds. Tilt is sampled every 0.1s and the
    largest dampened magnitude decides the score.
    """

    title = "Balance"
    instructions = "Hold steady for 3 seconds"

    def __init__(self, *, duration: float = TEST_DURATION_SECONDS) -> None:
        self.duration = duration

        self.max_tilt = 0.0
        self.sample_count = 0
        self._start_time: Optional[float] = None
        self._score: Optional[int] = None

    def start(self, now: float) -> None:
        self.cleanup()
        self._start_time = now

    def sample(self, tilt: Optional[Tuple[float, float]], now: float) -> Optional[int]:
        """
        Feed one reading (None when the sampler had nothing). Returns the
        score once the window has elapsed, None before that.
        """
        if self._score is not None:
            return self._score
        if self._start_time is None:
            raise RuntimeError("BalanceGame.sample() called before start()")

        if tilt is not None:
            self.max_tilt = max(self.max_tilt, tilt_magnitude(*tilt))
            self.sample_count += 1

        if now - self._start_time >= self.duration:
            return self.finish()
        return None

    def finish(self) -> int:
        if self._score is None:
            self._score = balance_score(self.max_tilt)
            logger.info(
                "Balance max tilt %.3f over %d samples -> %d",
                self.max_tilt, self.sample_count, self._score,
            )
        return self._score

    def fail_unavailable(self) -> int:
        """No motion source at all: the test scores 0."""
        logger.warning("No tilt sampler available; balance test scores 0")
        self._score = 0
        return self._score

    def progress(self, now: float) -> float:
        if self._start_time is None:
            return 0.0
        return max(0.0, min((now - self._start_time) / self.duration, 1.0))

    def remaining(self, now: float) -> float:
        if self._start_time is None:
            return self.duration
        return max(0.0, self.duration - (now - self._start_time))

    @property
    def score(self) -> Optional[int]:
        return self._score

    def cleanup(self) -> None:
        self.max_tilt = 0.0
        self.sample_count = 0
        self._start_time = None
        self._score = None
