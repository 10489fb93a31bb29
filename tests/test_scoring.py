"""
Score curves for the three tests and the composite tiers.
"""

import pytest

from sobriety.scoring import (
    DISCLAIMER,
    SobrietyTier,
    balance_score,
    categorize,
    clamp_score,
    composite,
    reaction_score,
    sequence_score,
    tilt_magnitude,
)


class TestReactionScore:
    @pytest.mark.parametrize("seconds,expected", [
        (0.0, 100),
        (0.2, 100),
        (0.6, 50),
        (1.0, 0),
        (1.5, 0),
    ])
    def test_curve(self, seconds, expected):
        assert reaction_score(seconds) == expected


class TestSequenceScore:
    @pytest.mark.parametrize("seconds,expected", [
        (1.0, 100),
        (2.0, 100),
        (5.0, 50),
        (8.0, 0),
        (12.0, 0),
    ])
    def test_curve(self, seconds, expected):
        assert sequence_score(seconds) == expected


class TestBalanceScore:
    @pytest.mark.parametrize("max_tilt,expected", [
        (0.0, 100),
        (0.75, 50),
        (1.5, 0),
        (3.0, 0),
    ])
    def test_curve(self, max_tilt, expected):
        assert balance_score(max_tilt) == expected

    def test_tilt_is_dampened(self):
        assert tilt_magnitude(1.0, 0.0) == pytest.approx(0.7)
        assert tilt_magnitude(-0.3, 0.4) == pytest.approx(0.35)


class TestClamp:
    def test_bounds(self):
        assert clamp_score(-20) == 0
        assert clamp_score(140) == 100
        assert clamp_score(49.5) == 50
        assert clamp_score(49.4) == 49


class TestComposite:
    def test_floor_of_mean(self):
        assert composite([100, 90, 81]) == (90, SobrietyTier.ALERT)
        assert composite([80, 80, 81]) == (80, SobrietyTier.ALERT)

    @pytest.mark.parametrize("score,tier", [
        (100, SobrietyTier.ALERT),
        (80, SobrietyTier.ALERT),
        (79, SobrietyTier.SOMEWHAT_SLOW),
        (60, SobrietyTier.SOMEWHAT_SLOW),
        (59, SobrietyTier.IMPAIRED),
        (0, SobrietyTier.IMPAIRED),
    ])
    def test_tier_boundaries(self, score, tier):
        assert categorize(score) == tier

    def test_just_below_alert(self):
        # 239 / 3 = 79.67 -> 79
        assert composite([80, 80, 79]) == (79, SobrietyTier.SOMEWHAT_SLOW)

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            composite([])

    def test_messages(self):
        assert SobrietyTier.ALERT.message == "You seem to be fully alert!"
        assert "don't drive or text" in SobrietyTier.IMPAIRED.message
        assert "medically accurate" in DISCLAIMER
