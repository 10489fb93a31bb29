# ui/sobriety_game_window.py

from __future__ import annotations

import time
from typing import Optional

from PyQt5.QtCore import QTimer, Qt
from PyQt5.QtWidgets import (
    QFrame,
    QGridLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from core.logging_config import get_logger
from sobriety.balance_game import SAMPLE_INTERVAL_SECONDS, BalanceGame
from sobriety.camera_tilt_sampler import CameraTiltSampler
from sobriety.game_session import GameSession
from sobriety.i_tilt_sampler import ITiltSampler
from sobriety.reaction_game import ReactionGame
from sobriety.sequence_game import SequenceGame
from ui.cursor_tilt_sampler import CursorTiltSampler
from ui.widgets.score_widget import ScoreWidget

logger = get_logger("ui.sobriety")

RED = "#FF3B30"
GREEN = "#34C759"


class ReactionPad(QFrame):
    """Big coloured area that reports clicks."""

    def __init__(self, on_tap, parent=None):
        super().__init__(parent)
        self.on_tap = on_tap
        self.setMinimumSize(320, 240)
        self.set_color(RED)

    def set_color(self, color: str):
        self.setStyleSheet(f"background-color: {color}; border-radius: 16px;")

    def mousePressEvent(self, event):
        self.on_tap()
        super().mousePressEvent(event)


class SobrietyGameWindow(QWidget):
    """
    Hosts the three tests one after another and shows the combined score.

    The games hold the rules; this window owns the timers and feeds them
    taps, tilt samples and monotonic timestamps.
    """

    def __init__(self, session: Optional[GameSession] = None, tilt_sampler: Optional[ITiltSampler] = None):
        super().__init__()

        self.setWindowTitle("Sobriety Check")
        self.setMinimumSize(420, 480)

        self.session = session or GameSession()
        self.tilt_sampler = tilt_sampler

        # -------- timers --------
        self.stimulus_timer = QTimer(self)
        self.stimulus_timer.setSingleShot(True)
        self.stimulus_timer.timeout.connect(self.show_stimulus)

        self.balance_timer = QTimer(self)
        self.balance_timer.setInterval(int(SAMPLE_INTERVAL_SECONDS * 1000))
        self.balance_timer.timeout.connect(self.sample_balance)

        # -------- layout --------
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(12)

        self.label_progress = QLabel("")
        self.label_progress.setObjectName("MutedLabel")
        layout.addWidget(self.label_progress)

        self.label_instructions = QLabel("")
        self.label_instructions.setObjectName("TitleLabel")
        self.label_instructions.setWordWrap(True)
        self.label_instructions.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.label_instructions)

        self.stack = QStackedWidget()
        layout.addWidget(self.stack, 1)

        # intro page
        intro = QWidget()
        intro_layout = QVBoxLayout(intro)
        intro_text = QLabel("Three quick tests: reaction, sequence and balance.")
        intro_text.setWordWrap(True)
        intro_text.setAlignment(Qt.AlignCenter)
        intro_layout.addWidget(intro_text)
        start_btn = QPushButton("Start")
        start_btn.clicked.connect(self.start_current)
        intro_layout.addWidget(start_btn)
        self.page_intro = self.stack.addWidget(intro)

        # reaction page
        self.reaction_pad = ReactionPad(self.reaction_tap)
        self.page_reaction = self.stack.addWidget(self.reaction_pad)

        # sequence page
        sequence = QWidget()
        self.sequence_grid = QGridLayout(sequence)
        self.sequence_buttons = []
        for i in range(4):
            btn = QPushButton("")
            btn.setMinimumSize(120, 120)
            btn.setStyleSheet("font-size: 28px;")
            btn.clicked.connect(lambda _checked=False, idx=i: self.sequence_tap(idx))
            self.sequence_grid.addWidget(btn, i // 2, i % 2)
            self.sequence_buttons.append(btn)
        self.page_sequence = self.stack.addWidget(sequence)

        # balance page
        balance = QWidget()
        balance_layout = QVBoxLayout(balance)
        self.label_balance = QLabel("")
        self.label_balance.setAlignment(Qt.AlignCenter)
        balance_layout.addWidget(self.label_balance)
        self.balance_progress = QProgressBar()
        self.balance_progress.setRange(0, 100)
        self.balance_progress.setTextVisible(False)
        balance_layout.addWidget(self.balance_progress)
        balance_layout.addStretch(1)
        self.page_balance = self.stack.addWidget(balance)

        # results page
        results = QWidget()
        results_layout = QVBoxLayout(results)
        self.score_widget = ScoreWidget()
        results_layout.addWidget(self.score_widget)
        again_btn = QPushButton("Try Again")
        again_btn.clicked.connect(self.restart)
        results_layout.addWidget(again_btn)
        self.page_results = self.stack.addWidget(results)

        self.show_intro()

    # ---------------------------------------------------
    # Flow
    # ---------------------------------------------------
    def show_intro(self):
        self.label_progress.setText(self.session.progress_label())
        self.label_instructions.setText(self.session.current_game.instructions)
        self.stack.setCurrentIndex(self.page_intro)

    def start_current(self):
        game = self.session.current_game
        if game is None:
            return

        self.label_progress.setText(self.session.progress_label())
        self.label_instructions.setText(game.instructions)

        if isinstance(game, ReactionGame):
            self.reaction_pad.set_color(RED)
            self.stack.setCurrentIndex(self.page_reaction)
            delay = game.start()
            self.stimulus_timer.start(int(delay * 1000))

        elif isinstance(game, SequenceGame):
            layout = game.start(time.monotonic())
            for btn, number in zip(self.sequence_buttons, layout):
                btn.setText(str(number))
                btn.setEnabled(True)
            self.stack.setCurrentIndex(self.page_sequence)

        elif isinstance(game, BalanceGame):
            self.stack.setCurrentIndex(self.page_balance)
            self.balance_progress.setValue(0)
            self.start_balance(game)

    def record(self, score: int):
        self.stop_timers()
        self.session.record(score)

        if self.session.is_finished:
            self.show_results()
        else:
            self.start_current()

    def show_results(self):
        result = self.session.result
        self.label_progress.setText("")
        self.label_instructions.setText("Results")
        self.score_widget.show_result(result)
        self.stack.setCurrentIndex(self.page_results)

    def restart(self):
        self.stop_timers()
        self.session.restart()
        self.show_intro()

    # ---------------------------------------------------
    # Reaction
    # ---------------------------------------------------
    def show_stimulus(self):
        game = self.session.current_game
        if isinstance(game, ReactionGame):
            game.show_stimulus(time.monotonic())
            self.reaction_pad.set_color(GREEN)

    def reaction_tap(self):
        game = self.session.current_game
        if not isinstance(game, ReactionGame):
            return
        self.record(game.tap(time.monotonic()))

    # ---------------------------------------------------
    # Sequence
    # ---------------------------------------------------
    def sequence_tap(self, button_index: int):
        game = self.session.current_game
        if not isinstance(game, SequenceGame):
            return

        btn = self.sequence_buttons[button_index]
        score = game.tap(int(btn.text()), time.monotonic())
        btn.setEnabled(False)
        if score is not None:
            self.record(score)

    # ---------------------------------------------------
    # Balance
    # ---------------------------------------------------
    def _ensure_sampler(self) -> Optional[ITiltSampler]:
        if self.tilt_sampler is not None:
            return self.tilt_sampler

        camera = CameraTiltSampler()
        if camera.start():
            self.tilt_sampler = camera
            return camera

        logger.info("Camera unavailable; using the mouse pointer for the balance test")
        cursor = CursorTiltSampler()
        if cursor.start():
            self.tilt_sampler = cursor
            return cursor
        return None

    def start_balance(self, game: BalanceGame):
        sampler = self._ensure_sampler()
        if sampler is None or not sampler.start():
            self.label_balance.setText("Motion detection is not available.")
            self.record(game.fail_unavailable())
            return

        if isinstance(sampler, CameraTiltSampler):
            self.label_balance.setText("Look at the camera and keep your head still.")
        else:
            self.label_balance.setText("Keep the mouse pointer perfectly still.")

        game.start(time.monotonic())
        self.balance_timer.start()

    def sample_balance(self):
        game = self.session.current_game
        if not isinstance(game, BalanceGame) or self.tilt_sampler is None:
            self.balance_timer.stop()
            return

        now = time.monotonic()
        score = game.sample(self.tilt_sampler.tilt(), now)
        self.balance_progress.setValue(int(game.progress(now) * 100))
        if score is not None:
            self.tilt_sampler.stop()
            self.record(score)

    # ---------------------------------------------------
    # Cleanup
    # ---------------------------------------------------
    def stop_timers(self):
        self.stimulus_timer.stop()
        self.balance_timer.stop()

    def closeEvent(self, event):
        self.stop_timers()
        if self.tilt_sampler is not None:
            self.tilt_sampler.stop()
        super().closeEvent(event)
