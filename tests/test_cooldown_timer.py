"""
Countdown behind the hard warning: it expires after exactly N ticks and
a cancel stops it for good.
"""

import pytest

from policy.cooldown_timer import CooldownStatus, CooldownTimer


class TestCountdown:
    def test_starts_idle(self):
        timer = CooldownTimer(10)
        assert timer.status == CooldownStatus.IDLE
        assert timer.remaining_seconds == 10
        assert not timer.can_proceed

    def test_expires_after_exactly_n_ticks(self):
        timer = CooldownTimer(10)
        timer.start()

        for i in range(9):
            timer.tick()
            assert timer.status == CooldownStatus.COUNTING_DOWN, f"expired early at tick {i + 1}"
            assert not timer.confirm()

        timer.tick()
        assert timer.status == CooldownStatus.EXPIRED
        assert timer.remaining_seconds == 0
        assert timer.confirm()
        assert timer.is_finished

    def test_remaining_counts_down(self):
        timer = CooldownTimer(3)
        timer.start()
        seen = []
        for _ in range(3):
            timer.tick()
            seen.append(timer.remaining_seconds)
        assert seen == [2, 1, 0]

    def test_ticks_before_start_ignored(self):
        timer = CooldownTimer(2)
        timer.tick()
        timer.tick()
        assert timer.status == CooldownStatus.IDLE
        assert timer.remaining_seconds == 2

    def test_extra_ticks_after_expiry_ignored(self):
        timer = CooldownTimer(1)
        timer.start()
        timer.tick()
        timer.tick()
        assert timer.status == CooldownStatus.EXPIRED
        assert timer.remaining_seconds == 0

    def test_start_only_from_idle(self):
        timer = CooldownTimer(5)
        timer.start()
        timer.tick()
        timer.start()
        assert timer.remaining_seconds == 4

    def test_seconds_must_be_positive(self):
        with pytest.raises(ValueError):
            CooldownTimer(0)


class TestCancel:
    def test_cancel_at_tick_three_never_expires(self):
        timer = CooldownTimer(10)
        timer.start()
        for _ in range(3):
            timer.tick()

        timer.cancel()
        assert timer.status == CooldownStatus.CANCELLED
        assert timer.remaining_seconds == 10

        for _ in range(20):
            timer.tick()
        assert timer.status == CooldownStatus.CANCELLED
        assert not timer.confirm()

    def test_cancel_twice_is_noop(self):
        updates = []
        timer = CooldownTimer(5, on_update=updates.append)
        timer.start()
        timer.cancel()
        timer.cancel()
        assert [s.status for s in updates] == [CooldownStatus.COUNTING_DOWN, CooldownStatus.CANCELLED]


class TestUpdates:
    def test_on_update_reports_every_change(self):
        updates = []
        timer = CooldownTimer(2, on_update=updates.append)
        timer.start()
        timer.tick()
        timer.tick()

        assert [(s.status, s.remaining_seconds) for s in updates] == [
            (CooldownStatus.COUNTING_DOWN, 2),
            (CooldownStatus.COUNTING_DOWN, 1),
            (CooldownStatus.EXPIRED, 0),
        ]
        assert updates[-1].can_proceed
        assert updates[-1].total_seconds == 2

    def test_snapshot(self):
        timer = CooldownTimer(4)
        timer.start()
        snap = timer.snapshot()
        assert snap.status == CooldownStatus.COUNTING_DOWN
        assert snap.remaining_seconds == 4
        assert not snap.can_proceed
