# ui/cursor_tilt_sampler.py

from __future__ import annotations

from typing import Optional, Tuple

from PyQt5.QtCore import QPoint
from PyQt5.QtGui import QCursor

from sobriety.i_tilt_sampler import ITiltSampler


class CursorTiltSampler(ITiltSampler):
    """
    Mouse version of the balance test: the player holds the pointer still,
    and drift from where it was at the start counts as tilt.
    A drift of `full_scale_px` pixels equals a full tilt of 1.0 on that axis.
    """

    def __init__(self, *, full_scale_px: int = 200) -> None:
        self.full_scale_px = full_scale_px
        self._anchor: Optional[QPoint] = None

    def start(self) -> bool:
        self._anchor = QCursor.pos()
        return True

    def stop(self) -> None:
        self._anchor = None

    def tilt(self) -> Optional[Tuple[float, float]]:
        if self._anchor is None:
            return None

        pos = QCursor.pos()
        dx = (pos.x() - self._anchor.x()) / self.full_scale_px
        dy = (pos.y() - self._anchor.y()) / self.full_scale_px
        return max(-1.0, min(1.0, dx)), max(-1.0, min(1.0, dy))
