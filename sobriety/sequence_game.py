# sobriety/sequence_game.py

from __future__ import annotations

import random
from typing import List, Optional, Set

from core.logging_config import get_logger
from sobriety.i_sobriety_game import ISobrietyGame
from sobriety.scoring import sequence_score

logger = get_logger("sobriety.sequence")

TARGET_COUNT = 4


class SequenceGame(ISobrietyGame):
    """
    Four numbered targets in shuffled positions, tapped in ascending order.
    Any out-of-order tap ends the test with 0.
    """

    title = "Sequence"
    instructions = "Tap the buttons in order: 1, 2, 3, 4"

    def __init__(self, *, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

        self.layout: List[int] = []
        self.tapped: Set[int] = set()
        self._next_number = 1
        self._start_time: Optional[float] = None
        self._score: Optional[int] = None
        self.completion_time: Optional[float] = None

    def start(self, now: float) -> List[int]:
        """Reset, start the clock and return the target numbers in grid order."""
        self.cleanup()
        self.layout = list(range(1, TARGET_COUNT + 1))
        self.rng.shuffle(self.layout)
        self._start_time = now
        return list(self.layout)

    @property
    def next_number(self) -> int:
        return self._next_number

    def tap(self, number: int, now: float) -> Optional[int]:
        """
        Returns the final score once the test ends, None while it continues.
        """
        if self._score is not None:
            return self._score
        if self._start_time is None:
            raise RuntimeError("SequenceGame.tap() called before start()")

        if number != self._next_number:
            logger.info("Tapped %d while expecting %d", number, self._next_number)
            self._score = 0
            return self._score

        self.tapped.add(number)
        if number < TARGET_COUNT:
            self._next_number += 1
            return None

        self.completion_time = now - self._start_time
        self._score = sequence_score(self.completion_time)
        logger.info("Sequence finished in %.2fs -> %d", self.completion_time, self._score)
        return self._score

    @property
    def score(self) -> Optional[int]:
        return self._score

    def cleanup(self) -> None:
        self.layout = []
        self.tapped = set()
        self._next_number = 1
        self._start_time = None
        self._score = None
        self.completion_time = None
