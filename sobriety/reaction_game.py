# sobriety/reaction_game.py

from __future__ import annotations

import random
from typing import Optional

from core.logging_config import get_logger
from sobriety.i_sobriety_game import ISobrietyGame
from sobriety.scoring import reaction_score

logger = get_logger("sobriety.reaction")


class ReactionGame(ISobrietyGame):
    """
    Screen starts red, turns green after a random 1-3s delay; the player taps
    as soon as it turns green. Tapping while it is still red scores 0.
    """

    title = "Reaction"
    instructions = "Tap the screen when it turns GREEN!"

    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        min_delay: float = 1.0,
        max_delay: float = 3.0,
    ) -> None:
        self.rng = rng or random.Random()
        self.min_delay = min_delay
        self.max_delay = max_delay

        self._stimulus_time: Optional[float] = None
        self._score: Optional[int] = None
        self.reaction_time: Optional[float] = None

    def start(self) -> float:
        """Reset and return how long to wait before `show_stimulus()`."""
        self.cleanup()
        return self.rng.uniform(self.min_delay, self.max_delay)

    def show_stimulus(self, now: float) -> None:
        if self._score is None:
            self._stimulus_time = now

    @property
    def stimulus_shown(self) -> bool:
        return self._stimulus_time is not None

    def tap(self, now: float) -> int:
        if self._score is not None:
            return self._score

        if self._stimulus_time is None:
            logger.info("Tapped before the stimulus")
            self._score = 0
            return self._score

        self.reaction_time = now - self._stimulus_time
        self._score = reaction_score(self.reaction_time)
        logger.info("Reaction %.3fs -> %d", self.reaction_time, self._score)
        return self._score

    @property
    def score(self) -> Optional[int]:
        return self._score

    def cleanup(self) -> None:
        self._stimulus_time = None
        self._score = None
        self.reaction_time = None
