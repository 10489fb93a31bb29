"""
Face-position math for the webcam balance sampler (no camera needed).
"""

import pytest

from sobriety.camera_tilt_sampler import face_offset


class TestFaceOffset:
    def test_centred_face(self):
        assert face_offset((270, 130, 100, 100), 640, 360) == (0.0, 0.0)

    def test_right_and_down(self):
        x, y = face_offset((480, 225, 80, 90), 640, 360)
        assert x == pytest.approx(0.625)
        assert y == pytest.approx(0.5)

    def test_clamped(self):
        assert face_offset((-400, -400, 10, 10), 640, 360) == (-1.0, -1.0)

    def test_empty_frame(self):
        assert face_offset((0, 0, 0, 0), 0, 0) == (0.0, 0.0)
