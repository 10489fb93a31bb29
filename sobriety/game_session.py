# sobriety/game_session.py

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from core.logging_config import get_logger
from sobriety.balance_game import BalanceGame
from sobriety.i_sobriety_game import ISobrietyGame
from sobriety.reaction_game import ReactionGame
from sobriety.scoring import DISCLAIMER, SobrietyTier, categorize, composite
from sobriety.sequence_game import SequenceGame

logger = get_logger("sobriety.session")


@dataclass
class SessionResult:
    """
    Outcome of one full run of the three tests.
    """
    total_score: int
    tier: SobrietyTier
    test_scores: List[int] = field(default_factory=list)
    test_titles: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return self.tier.message

    def score_lines(self) -> List[tuple]:
        """(label, tier) per test, e.g. ("Reaction: 85/100", ALERT)."""
        return [
            (f"{title}: {score}/100", categorize(score))
            for title, score in zip(self.test_titles, self.test_scores)
        ]

    def summary(self) -> str:
        return f"Final Score: {self.total_score}/100\n\n{self.message}\n\n{DISCLAIMER}"


class GameSession:
    """
    Runs reaction, sequence and balance in that order.

    The host window starts `current_game`, drives it, then calls
    `record(score)`. After the third score `result` is available.
    Scores are kept for this session only.
    """

    def __init__(self, games: Optional[List[ISobrietyGame]] = None, *, rng: Optional[random.Random] = None):
        if games is None:
            rng = rng or random.Random()
            games = [ReactionGame(rng=rng), SequenceGame(rng=rng), BalanceGame()]
        if not games:
            raise ValueError("a session needs at least one game")

        self.games = games
        self.scores: List[int] = []

    @property
    def current_index(self) -> int:
        return len(self.scores)

    @property
    def current_game(self) -> Optional[ISobrietyGame]:
        if self.is_finished:
            return None
        return self.games[self.current_index]

    @property
    def is_finished(self) -> bool:
        return len(self.scores) >= len(self.games)

    def progress_label(self) -> str:
        if self.is_finished:
            return "Done"
        return f"Test {self.current_index + 1} of {len(self.games)}"

    def instructions(self) -> str:
        game = self.current_game
        if game is None:
            return ""
        return f"{self.progress_label()}\n\n{game.instructions}"

    def record(self, score: int) -> None:
        if self.is_finished:
            raise RuntimeError("all tests already have a score")
        if not 0 <= score <= 100:
            raise ValueError(f"score must be between 0 and 100, got {score}")

        game = self.games[self.current_index]
        game.cleanup()
        self.scores.append(int(score))
        logger.info("%s scored %d", game.title, score)

    @property
    def result(self) -> Optional[SessionResult]:
        if not self.is_finished:
            return None

        total, tier = composite(self.scores)
        return SessionResult(
            total_score=total,
            tier=tier,
            test_scores=list(self.scores),
            test_titles=[g.title for g in self.games],
        )

    def restart(self) -> None:
        for game in self.games:
            game.cleanup()
        self.scores = []
