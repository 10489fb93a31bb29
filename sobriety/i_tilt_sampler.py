from abc import ABC, abstractmethod
from typing import Optional, Tuple


class ITiltSampler(ABC):
    """
    Source of tilt readings for the balance test, polled at a fixed interval.
    Readings are (x, y) on a gravity-like scale where each axis is in -1..1
    and (0, 0) is perfectly steady.
    Examples:
      - CameraTiltSampler
      - CursorTiltSampler (ui)
    """

    @abstractmethod
    def start(self) -> bool:
        """Open the device. Returns False if it is not available."""
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        """Release the device."""
        raise NotImplementedError

    @abstractmethod
    def tilt(self) -> Optional[Tuple[float, float]]:
        """Latest reading, or None when nothing could be measured."""
        raise NotImplementedError
