from abc import ABC, abstractmethod
from typing import Optional


class ISobrietyGame(ABC):
    """
    Base interface for the sobriety check tests.
    Examples:
      - ReactionGame
      - SequenceGame
      - BalanceGame

    Games keep no timers of their own; the window that hosts them feeds in
    taps, samples and timestamps (seconds from a monotonic clock).
    """

    title: str = ""
    instructions: str = ""

    @property
    @abstractmethod
    def score(self) -> Optional[int]:
        """Final 0..100 score, or None while the test is still running."""
        raise NotImplementedError

    @property
    def is_finished(self) -> bool:
        return self.score is not None

    @abstractmethod
    def cleanup(self) -> None:
        """Reset so the game can be started again."""
        raise NotImplementedError
