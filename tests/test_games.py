"""
The three sobriety tests driven by hand: taps, samples and timestamps
are fed in directly, so no timers are involved.
"""

import random

import pytest

from sobriety.balance_game import BalanceGame
from sobriety.game_session import GameSession
from sobriety.reaction_game import ReactionGame
from sobriety.scoring import SobrietyTier
from sobriety.sequence_game import SequenceGame


@pytest.fixture
def rng():
    return random.Random(1234)


# =============================================================================
# Reaction
# =============================================================================

class TestReactionGame:
    def test_delay_within_bounds(self, rng):
        game = ReactionGame(rng=rng)
        for _ in range(50):
            assert 1.0 <= game.start() <= 3.0

    def test_tap_before_green_scores_zero(self, rng):
        game = ReactionGame(rng=rng)
        game.start()
        assert game.tap(now=5.0) == 0
        assert game.is_finished

    def test_fast_tap(self, rng):
        game = ReactionGame(rng=rng)
        game.start()
        game.show_stimulus(now=10.0)
        assert game.stimulus_shown
        assert game.tap(now=10.2) == 100
        assert game.reaction_time == pytest.approx(0.2)

    def test_slow_tap(self, rng):
        game = ReactionGame(rng=rng)
        game.start()
        game.show_stimulus(now=10.0)
        assert game.tap(now=11.5) == 0

    def test_second_tap_keeps_first_score(self, rng):
        game = ReactionGame(rng=rng)
        game.start()
        game.tap(now=1.0)
        game.show_stimulus(now=2.0)
        assert game.tap(now=2.2) == 0

    def test_cleanup_resets(self, rng):
        game = ReactionGame(rng=rng)
        game.start()
        game.tap(now=1.0)
        game.cleanup()
        assert game.score is None
        assert not game.stimulus_shown


# =============================================================================
# Sequence
# =============================================================================

class TestSequenceGame:
    def test_layout_is_a_shuffle_of_one_to_four(self, rng):
        game = SequenceGame(rng=rng)
        assert sorted(game.start(now=0.0)) == [1, 2, 3, 4]

    def test_in_order_scores_by_time(self, rng):
        game = SequenceGame(rng=rng)
        game.start(now=100.0)
        assert game.tap(1, now=100.5) is None
        assert game.tap(2, now=101.0) is None
        assert game.next_number == 3
        assert game.tap(3, now=101.5) is None
        assert game.tap(4, now=102.0) == 100
        assert game.completion_time == pytest.approx(2.0)

    def test_slow_completion(self, rng):
        game = SequenceGame(rng=rng)
        game.start(now=0.0)
        for n in (1, 2, 3):
            game.tap(n, now=1.0)
        assert game.tap(4, now=5.0) == 50

    def test_wrong_order_scores_zero(self, rng):
        game = SequenceGame(rng=rng)
        game.start(now=0.0)
        game.tap(1, now=0.5)
        assert game.tap(3, now=0.7) == 0
        # further taps do not change the result
        assert game.tap(2, now=0.8) == 0

    def test_tap_before_start(self, rng):
        with pytest.raises(RuntimeError):
            SequenceGame(rng=rng).tap(1, now=0.0)


# =============================================================================
# Balance
# =============================================================================

class TestBalanceGame:
    def test_perfectly_still(self):
        game = BalanceGame()
        game.start(now=0.0)
        t = 0.0
        score = None
        while score is None:
            t += 0.1
            score = game.sample((0.0, 0.0), now=t)
        assert score == 100
        assert game.sample_count >= 29

    def test_window_closes_after_duration(self):
        game = BalanceGame()
        game.start(now=0.0)
        assert game.sample((0.1, 0.0), now=2.9) is None
        assert game.sample((0.1, 0.0), now=3.0) is not None

    def test_max_tilt_decides(self):
        game = BalanceGame()
        game.start(now=0.0)
        game.sample((0.0, 0.0), now=0.5)
        game.sample((1.0, 0.0), now=1.0)   # 0.7 after dampening
        game.sample((0.2, 0.0), now=1.5)
        assert game.max_tilt == pytest.approx(0.7)
        assert game.sample(None, now=3.0) == 53

    def test_missing_samples_are_skipped(self):
        game = BalanceGame()
        game.start(now=0.0)
        game.sample(None, now=1.0)
        assert game.sample_count == 0
        assert game.sample(None, now=3.0) == 100

    def test_no_sampler_scores_zero(self):
        game = BalanceGame()
        assert game.fail_unavailable() == 0
        assert game.is_finished

    def test_progress(self):
        game = BalanceGame()
        assert game.progress(now=5.0) == 0.0
        game.start(now=10.0)
        assert game.progress(now=11.5) == pytest.approx(0.5)
        assert game.remaining(now=11.5) == pytest.approx(1.5)
        assert game.progress(now=20.0) == 1.0


# =============================================================================
# Session
# =============================================================================

class TestGameSession:
    def test_runs_three_tests_in_order(self, rng):
        session = GameSession(rng=rng)
        assert [g.title for g in session.games] == ["Reaction", "Sequence", "Balance"]
        assert session.progress_label() == "Test 1 of 3"
        assert session.instructions().endswith("Tap the screen when it turns GREEN!")

        session.record(90)
        assert session.progress_label() == "Test 2 of 3"
        assert isinstance(session.current_game, SequenceGame)
        session.record(70)
        assert session.result is None
        session.record(61)

        result = session.result
        assert session.is_finished
        assert result.total_score == 73
        assert result.tier == SobrietyTier.SOMEWHAT_SLOW
        assert result.test_scores == [90, 70, 61]
        assert result.score_lines()[0] == ("Reaction: 90/100", SobrietyTier.ALERT)
        assert "Final Score: 73/100" in result.summary()

    def test_record_validates(self, rng):
        session = GameSession(rng=rng)
        with pytest.raises(ValueError):
            session.record(101)

    def test_record_after_finish(self, rng):
        session = GameSession(rng=rng)
        for _ in range(3):
            session.record(50)
        with pytest.raises(RuntimeError):
            session.record(50)

    def test_restart_forgets_scores(self, rng):
        session = GameSession(rng=rng)
        session.record(100)
        session.restart()
        assert session.current_index == 0
        assert session.scores == []
