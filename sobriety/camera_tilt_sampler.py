# sobriety/camera_tilt_sampler.py

from __future__ import annotations

from typing import Optional, Tuple

import cv2

from core.logging_config import get_logger
from sobriety.i_tilt_sampler import ITiltSampler

logger = get_logger("sobriety.camera")


def face_offset(face: Tuple[int, int, int, int], frame_w: int, frame_h: int) -> Tuple[float, float]:
    """
    Offset of a face rectangle's centre from the frame centre,
    scaled so each axis is in -1..1.
    """
    x, y, w, h = face
    cx = x + w / 2
    cy = y + h / 2
    half_w = frame_w / 2
    half_h = frame_h / 2
    off_x = (cx - half_w) / half_w if half_w else 0.0
    off_y = (cy - half_h) / half_h if half_h else 0.0
    return max(-1.0, min(1.0, off_x)), max(-1.0, min(1.0, off_y))


class CameraTiltSampler(ITiltSampler):
    """
    Desktop stand-in for the phone's motion sensor: the webcam watches the
    player's head, and how far the face drifts from where it started counts
    as tilt.

    The first detected face becomes the reference position, so sitting
    off-centre is not penalised.
    """

    def __init__(self, *, camera_index: int = 0) -> None:
        self.camera_index = camera_index
        self._cap: Optional[cv2.VideoCapture] = None
        self._reference: Optional[Tuple[float, float]] = None

        self.face_detector = cv2.CascadeClassifier(
            cv2.data.haarcascades + "haarcascade_frontalface_default.xml"
        )

    def start(self) -> bool:
        if self._cap is not None:
            return True

        self._cap = cv2.VideoCapture(self.camera_index)
        if not self._cap.isOpened():
            logger.error("Cannot open camera (index=%s)", self.camera_index)
            self._cap = None
            return False

        # Small frames are enough for a face centre
        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, 640)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, 360)
        self._cap.set(cv2.CAP_PROP_BUFFERSIZE, 1)

        self._reference = None
        return True

    def stop(self) -> None:
        if self._cap is not None:
            self._cap.release()
        self._cap = None
        self._reference = None

    def tilt(self) -> Optional[Tuple[float, float]]:
        if self._cap is None:
            return None

        ok, frame = self._cap.read()
        if not ok or frame is None:
            logger.debug("Camera read failed")
            return None

        position = self.detect_face_position(frame)
        if position is None:
            return None

        if self._reference is None:
            self._reference = position
            return 0.0, 0.0

        return (
            max(-1.0, min(1.0, position[0] - self._reference[0])),
            max(-1.0, min(1.0, position[1] - self._reference[1])),
        )

    def detect_face_position(self, frame) -> Optional[Tuple[float, float]]:
        """Normalised centre of the largest face, or None if no face is found."""
        gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)

        # downscale for speed
        small = cv2.resize(gray, None, fx=0.5, fy=0.5)
        frame_h, frame_w = small.shape

        faces = self.face_detector.detectMultiScale(small, 1.3, 5)
        if len(faces) == 0:
            return None

        largest = max(faces, key=lambda r: r[2] * r[3])
        return face_offset(tuple(int(v) for v in largest), frame_w, frame_h)
