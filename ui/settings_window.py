# ui/settings_window.py

from __future__ import annotations

from datetime import time
from typing import Optional, Set

from PyQt5.QtCore import QTime, Qt
from PyQt5.QtWidgets import (
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QTabWidget,
    QTimeEdit,
    QVBoxLayout,
    QWidget,
)

from core.errors import InvalidTimeRangeError, StoreUnavailableError
from core.logging_config import get_logger
from core.models.contact import Contact, RiskRating
from core.models.time_range import DAY_NAMES, REPEAT_PRESETS, TimeRange, describe_repeat_days
from core.services.contact_service import ContactService
from core.services.rating_service import RatingService
from core.services.time_range_service import TimeRangeService

logger = get_logger("ui.settings")

DEFAULT_START = QTime(22, 0)
DEFAULT_END = QTime(5, 0)

RATING_LABELS = {
    RiskRating.NONE: "No warning",
    RiskRating.CAUTION: "Caution",
    RiskRating.HIGH_RISK: "Risky",
}


def _to_time(qtime: QTime) -> time:
    return time(qtime.hour(), qtime.minute())


class TimeRangesTab(QWidget):
    """Add / edit / delete active time ranges."""

    def __init__(self, time_range_service: TimeRangeService, parent=None):
        super().__init__(parent)

        self.time_range_service = time_range_service
        self.ranges = []
        self.editing_index: Optional[int] = None
        self.selected_days: Set[int] = set()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(10)

        title = QLabel("Active Time Ranges")
        title.setObjectName("TitleLabel")
        layout.addWidget(title)

        hint = QLabel("Messages to rated contacts trigger a warning inside these hours. "
                      "An end time before the start time runs past midnight.")
        hint.setObjectName("MutedLabel")
        hint.setWordWrap(True)
        layout.addWidget(hint)

        # ---------------- EDITOR ----------------
        form = QHBoxLayout()

        self.name_input = QLineEdit()
        self.name_input.setPlaceholderText("Name (e.g., Friday night)")
        form.addWidget(self.name_input)

        self.start_edit = QTimeEdit(DEFAULT_START)
        self.start_edit.setDisplayFormat("HH:mm")
        form.addWidget(QLabel("From"))
        form.addWidget(self.start_edit)

        self.end_edit = QTimeEdit(DEFAULT_END)
        self.end_edit.setDisplayFormat("HH:mm")
        form.addWidget(QLabel("To"))
        form.addWidget(self.end_edit)

        self.repeat_combo = QComboBox()
        for label, _days in REPEAT_PRESETS:
            self.repeat_combo.addItem(label)
        self.repeat_combo.addItem("Custom...")
        self.repeat_combo.currentIndexChanged.connect(self._on_repeat_changed)
        form.addWidget(self.repeat_combo)

        layout.addLayout(form)

        # Custom day toggles (Sun..Sat), shown for "Custom..."
        self.day_row = QWidget()
        day_layout = QHBoxLayout(self.day_row)
        day_layout.setContentsMargins(0, 0, 0, 0)
        self.day_checks = {}
        for day in range(1, 8):
            check = QCheckBox(DAY_NAMES[day])
            check.toggled.connect(self._on_day_toggled)
            day_layout.addWidget(check)
            self.day_checks[day] = check
        self.day_row.setVisible(False)
        layout.addWidget(self.day_row)

        buttons = QHBoxLayout()
        self.save_button = QPushButton("Add Time Range")
        self.save_button.clicked.connect(self.save_range)
        buttons.addWidget(self.save_button)

        self.cancel_edit_button = QPushButton("Cancel Edit")
        self.cancel_edit_button.setObjectName("SecondaryButton")
        self.cancel_edit_button.clicked.connect(self.reset_editor)
        self.cancel_edit_button.setVisible(False)
        buttons.addWidget(self.cancel_edit_button)
        buttons.addStretch(1)
        layout.addLayout(buttons)

        # ---------------- SAVED RANGES ----------------
        self.table = QTableWidget()
        self.table.setColumnCount(3)
        self.table.setHorizontalHeaderLabels(["Name", "Time", "Repeat"])
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        layout.addWidget(self.table)

        row_buttons = QHBoxLayout()
        edit_btn = QPushButton("Edit Selected")
        edit_btn.setObjectName("SecondaryButton")
        edit_btn.clicked.connect(self.edit_selected)
        row_buttons.addWidget(edit_btn)

        delete_btn = QPushButton("Delete Selected")
        delete_btn.setObjectName("DangerButton")
        delete_btn.clicked.connect(self.delete_selected)
        row_buttons.addWidget(delete_btn)
        row_buttons.addStretch(1)
        layout.addLayout(row_buttons)

        self.load_ranges()

    # ---------------------------------------------------
    # Load saved ranges
    # ---------------------------------------------------
    def load_ranges(self):
        self.ranges = self.time_range_service.load()
        self.table.setRowCount(0)

        for row_idx, time_range in enumerate(self.ranges):
            self.table.insertRow(row_idx)
            self.table.setItem(row_idx, 0, QTableWidgetItem(time_range.name or "-"))
            self.table.setItem(row_idx, 1, QTableWidgetItem(time_range.label()))
            self.table.setItem(row_idx, 2, QTableWidgetItem(time_range.repeat_description()))

    # ---------------------------------------------------
    # Repeat picker
    # ---------------------------------------------------
    def _on_repeat_changed(self, index: int):
        is_custom = index >= len(REPEAT_PRESETS)
        self.day_row.setVisible(is_custom)
        if is_custom:
            self._on_day_toggled(True)
        else:
            self.selected_days = set(REPEAT_PRESETS[index][1])

    def _on_day_toggled(self, _checked: bool):
        self.selected_days = {day for day, check in self.day_checks.items() if check.isChecked()}
        self.repeat_combo.setToolTip(describe_repeat_days(self.selected_days))

    def _set_repeat_days(self, days):
        days = set(days)
        for index, (_label, preset) in enumerate(REPEAT_PRESETS):
            if set(preset) == days:
                self.repeat_combo.setCurrentIndex(index)
                return

        self.repeat_combo.setCurrentIndex(len(REPEAT_PRESETS))
        for day, check in self.day_checks.items():
            check.setChecked(day in days)
        self.selected_days = days

    # ---------------------------------------------------
    # Add / update
    # ---------------------------------------------------
    def save_range(self):
        try:
            time_range = self.time_range_service.build_range(
                _to_time(self.start_edit.time()),
                _to_time(self.end_edit.time()),
                name=self.name_input.text().strip(),
                repeat_days=self.selected_days,
            )
            if self.editing_index is None:
                self.time_range_service.add(time_range)
            else:
                self.time_range_service.update(self.editing_index, time_range)
        except InvalidTimeRangeError as e:
            QMessageBox.warning(self, "Invalid Time Range", str(e))
            return
        except StoreUnavailableError as e:
            logger.error("Saving time range failed: %s", e)
            QMessageBox.critical(self, "Save Error", f"Failed to save time ranges: {e}")
            return

        self.reset_editor()
        self.load_ranges()

    def edit_selected(self):
        row = self.table.currentRow()
        if row < 0 or row >= len(self.ranges):
            QMessageBox.information(self, "Select Range", "Please select a time range first.")
            return

        time_range: TimeRange = self.ranges[row]
        self.editing_index = row
        self.name_input.setText(time_range.name)
        self.start_edit.setTime(QTime(time_range.start_minute_of_day // 60, time_range.start_minute_of_day % 60))
        self.end_edit.setTime(QTime(time_range.end_minute_of_day // 60, time_range.end_minute_of_day % 60))
        self._set_repeat_days(time_range.repeat_days)
        self.save_button.setText("Update Time Range")
        self.save_button.setObjectName("CautionButton")
        self.save_button.style().polish(self.save_button)
        self.cancel_edit_button.setVisible(True)

    def delete_selected(self):
        row = self.table.currentRow()
        if row < 0 or row >= len(self.ranges):
            QMessageBox.information(self, "Select Range", "Please select a time range first.")
            return

        if self.editing_index == row:
            self.reset_editor()

        try:
            self.time_range_service.delete(row)
        except (IndexError, StoreUnavailableError) as e:
            QMessageBox.critical(self, "Delete Error", str(e))
            return
        self.load_ranges()

    def reset_editor(self):
        self.editing_index = None
        self.name_input.clear()
        self.start_edit.setTime(DEFAULT_START)
        self.end_edit.setTime(DEFAULT_END)
        self.repeat_combo.setCurrentIndex(0)
        for check in self.day_checks.values():
            check.setChecked(False)
        self.selected_days = set()
        self.save_button.setText("Add Time Range")
        self.save_button.setObjectName("")
        self.save_button.style().polish(self.save_button)
        self.cancel_edit_button.setVisible(False)


class ContactsTab(QWidget):
    """Address book with a rating per contact."""

    def __init__(self, contact_service: ContactService, rating_service: RatingService, parent=None):
        super().__init__(parent)

        self.contact_service = contact_service
        self.rating_service = rating_service
        self.visible_contacts = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(10)

        title = QLabel("Contacts")
        title.setObjectName("TitleLabel")
        layout.addWidget(title)

        hint = QLabel("Select 'Risky' for contacts you shouldn't message when drinking, "
                      "and 'Caution' for contacts that need extra care.")
        hint.setObjectName("MutedLabel")
        hint.setWordWrap(True)
        layout.addWidget(hint)

        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search contacts")
        self.search_input.textChanged.connect(self.load_contacts)
        layout.addWidget(self.search_input)

        self.table = QTableWidget()
        self.table.setColumnCount(3)
        self.table.setHorizontalHeaderLabels(["Name", "Number / ID", "Rating"])
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        layout.addWidget(self.table)

        # ---------------- ADD CONTACT FORM ----------------
        layout.addWidget(QLabel("Add Contact:"))
        form = QHBoxLayout()

        self.name_input = QLineEdit()
        self.name_input.setPlaceholderText("Name")
        form.addWidget(self.name_input)

        self.identifier_input = QLineEdit()
        self.identifier_input.setPlaceholderText("Phone number")
        form.addWidget(self.identifier_input)

        add_button = QPushButton("Add Contact")
        add_button.clicked.connect(self.add_contact)
        form.addWidget(add_button)
        layout.addLayout(form)

        self.load_contacts()

    # ---------------------------------------------------
    # Load contacts with their ratings
    # ---------------------------------------------------
    def load_contacts(self, *_args):
        self.visible_contacts = self.contact_service.search(self.search_input.text())
        ratings = self.rating_service.ratings_by_identifier()

        self.table.setRowCount(0)
        for row_idx, contact in enumerate(self.visible_contacts):
            self.table.insertRow(row_idx)
            self.table.setItem(row_idx, 0, QTableWidgetItem(contact.display_name))
            self.table.setItem(row_idx, 1, QTableWidgetItem(contact.identifier))

            combo = QComboBox()
            for rating in RiskRating:
                combo.addItem(RATING_LABELS[rating], int(rating))
            combo.setCurrentIndex(int(ratings.get(contact.identifier, RiskRating.NONE)))
            combo.currentIndexChanged.connect(
                lambda index, ident=contact.identifier: self.rate_contact(ident, index)
            )
            self.table.setCellWidget(row_idx, 2, combo)

    def rate_contact(self, identifier: str, rating: int):
        try:
            if rating == RiskRating.NONE:
                self.rating_service.clear_rating(identifier)
            else:
                self.rating_service.set_rating(identifier, rating)
        except StoreUnavailableError as e:
            QMessageBox.critical(self, "Save Error", f"Failed to save rating: {e}")
            self.load_contacts()

    # ---------------------------------------------------
    # Add contact
    # ---------------------------------------------------
    def add_contact(self):
        name = self.name_input.text().strip()
        identifier = self.identifier_input.text().strip()

        if not name or not identifier:
            QMessageBox.warning(self, "Missing Data", "Please fill all fields.")
            return

        self.contact_service.add_contact(Contact(identifier=identifier, display_name=name))
        self.name_input.clear()
        self.identifier_input.clear()
        self.load_contacts()


class SettingsWidget(QTabWidget):
    def __init__(
        self,
        time_range_service: TimeRangeService,
        contact_service: Optional[ContactService],
        rating_service: RatingService,
        parent=None,
    ):
        super().__init__(parent)

        self.time_ranges_tab = TimeRangesTab(time_range_service)
        self.addTab(self.time_ranges_tab, "Time Ranges")

        if contact_service is not None:
            self.contacts_tab = ContactsTab(contact_service, rating_service)
            self.addTab(self.contacts_tab, "Contacts")
        else:
            unavailable = QLabel("Contacts are unavailable until the app storage can be opened.")
            unavailable.setAlignment(Qt.AlignCenter)
            self.addTab(unavailable, "Contacts")
