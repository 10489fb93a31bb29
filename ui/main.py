# ui/main.py

import sys

from PyQt5.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from core.clock import SystemClock
from core.config import load_settings
from core.database import Database
from core.errors import StoreUnavailableError
from core.key_value_store import SqliteKeyValueStore
from core.logging_config import get_logger, setup_logging
from core.services.contact_service import ContactService
from core.services.rating_service import RatingService
from core.services.time_range_service import TimeRangeService
from policy.risk_gate import RiskGate
from policy.time_window_policy import TimeWindowPolicy
from ui.send_guard import ComposeWidget
from ui.settings_window import SettingsWidget
from ui.sobriety_game_window import SobrietyGameWindow
from ui.theme import apply_theme

logger = get_logger("ui.main")


class MainWindow(QMainWindow):
    def __init__(self, gate: RiskGate, time_range_service, rating_service, contact_service=None):
        super().__init__()

        self.gate = gate
        self._game_window = None

        self.setWindowTitle("NoDrunkText")
        self.setMinimumSize(720, 560)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(12)

        header = QHBoxLayout()
        title = QLabel("NoDrunkText")
        title.setObjectName("TitleLabel")
        header.addWidget(title)
        header.addStretch(1)

        test_btn = QPushButton("Test Yourself")
        test_btn.setObjectName("SecondaryButton")
        test_btn.clicked.connect(self.open_sobriety_check)
        header.addWidget(test_btn)
        layout.addLayout(header)

        self.tabs = QTabWidget()
        self.compose = ComposeWidget(gate, time_range_service, contact_service)
        self.settings = SettingsWidget(time_range_service, contact_service, rating_service)
        self.tabs.addTab(self.compose, "Compose")
        self.tabs.addTab(self.settings, "Settings")
        self.tabs.currentChanged.connect(self.on_tab_changed)
        layout.addWidget(self.tabs)

        self.setCentralWidget(central)

    def on_tab_changed(self, index: int):
        # contacts or ranges may have changed in Settings
        if self.tabs.widget(index) is self.compose:
            self.compose.load_contacts()
            self.compose.refresh_status()

    def showEvent(self, event):
        super().showEvent(event)
        self.compose.maybe_show_setup_prompt()

    # ---------------------------------------------------
    # OPEN SOBRIETY CHECK
    # ---------------------------------------------------
    def open_sobriety_check(self):
        # fresh window each time; scores are not kept between runs
        if self._game_window is not None:
            self._game_window.close()
        self._game_window = SobrietyGameWindow()
        self._game_window.show()


# ---------------------------------------------------
# MAIN ENTRY
# ---------------------------------------------------
def main():
    settings = load_settings()
    setup_logging(settings)

    store = None
    contact_service = None
    try:
        db = Database(settings.db_path)
        store = SqliteKeyValueStore(db)
        contact_service = ContactService(db)
    except StoreUnavailableError as e:
        # run without storage; nothing will be blocked
        logger.error("Storage unavailable, warnings disabled: %s", e)

    time_range_service = TimeRangeService(store)
    rating_service = RatingService(store)
    policy = TimeWindowPolicy(SystemClock(), day_filtering=settings.day_filtering)
    gate = RiskGate(
        rating_service,
        time_range_service,
        policy,
        cooldown_seconds=settings.cooldown_seconds,
    )

    app = QApplication(sys.argv)
    apply_theme(app)
    window = MainWindow(gate, time_range_service, rating_service, contact_service)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
