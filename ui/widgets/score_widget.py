# ui/widgets/score_widget.py

from __future__ import annotations

from PyQt5.QtWidgets import QLabel, QVBoxLayout, QWidget

from sobriety.game_session import SessionResult
from sobriety.scoring import DISCLAIMER
from ui.theme import TIER_COLORS


class ScoreWidget(QWidget):
    """
    Results panel for the sobriety check:
      - Final score and message
      - One coloured line per test
      - Disclaimer

    The game window calls `show_result(...)` once the last test ends.
    """

    def __init__(self, parent=None):
        super().__init__(parent)

        self.label_total = QLabel("Final Score: -")
        self.label_total.setObjectName("TitleLabel")
        self.label_message = QLabel("")
        self.label_message.setWordWrap(True)

        self.score_layout = QVBoxLayout()

        self.label_disclaimer = QLabel(DISCLAIMER)
        self.label_disclaimer.setObjectName("MutedLabel")
        self.label_disclaimer.setWordWrap(True)

        layout = QVBoxLayout()
        layout.addWidget(self.label_total)
        layout.addWidget(self.label_message)
        layout.addLayout(self.score_layout)
        layout.addWidget(self.label_disclaimer)
        layout.addStretch(1)
        self.setLayout(layout)

    def show_result(self, result: SessionResult) -> None:
        self.label_total.setText(f"Final Score: {result.total_score}/100")
        self.label_message.setText(result.message)

        # Clear previous score labels
        while self.score_layout.count():
            item = self.score_layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()

        for text, tier in result.score_lines():
            label = QLabel(text)
            label.setStyleSheet(f"color: {TIER_COLORS[tier]}; font-size: 16px;")
            self.score_layout.addWidget(label)
