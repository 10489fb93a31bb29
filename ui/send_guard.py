# ui/send_guard.py

from __future__ import annotations

from typing import Optional

from PyQt5.QtCore import QTimer, Qt
from PyQt5.QtWidgets import (
    QComboBox,
    QDialog,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from core.logging_config import get_logger
from core.services.contact_service import ContactService
from core.services.time_range_service import TimeRangeService
from policy.actions import HardWarn, SoftWarn
from policy.cooldown_timer import CooldownSnapshot, CooldownStatus, CooldownTimer
from policy.risk_gate import RiskGate

logger = get_logger("ui.send_guard")


class HardWarningDialog(QDialog):
    """
    Warning shown for risky contacts. "Send Anyway" stays disabled until the
    cooldown has run out; Cancel aborts the send.
    """

    def __init__(self, action: HardWarn, parent=None):
        super().__init__(parent)

        self.setWindowTitle("Wait a Moment")
        self.setModal(True)
        self.setMinimumWidth(380)

        self.cooldown = CooldownTimer(action.cooldown_seconds, on_update=self._on_cooldown_update)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(14)

        title = QLabel("Are you sure?")
        title.setObjectName("WarningTitle")
        title.setAlignment(Qt.AlignCenter)
        layout.addWidget(title)

        message = QLabel(action.message)
        message.setWordWrap(True)
        message.setAlignment(Qt.AlignCenter)
        layout.addWidget(message)

        self.label_countdown = QLabel("")
        self.label_countdown.setObjectName("MutedLabel")
        self.label_countdown.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.label_countdown)

        buttons = QHBoxLayout()
        cancel_btn = QPushButton("Cancel")
        cancel_btn.setObjectName("SecondaryButton")
        cancel_btn.clicked.connect(self.reject)
        buttons.addWidget(cancel_btn)

        self.send_btn = QPushButton("Send Anyway")
        self.send_btn.setObjectName("DangerButton")
        self.send_btn.setEnabled(False)
        self.send_btn.clicked.connect(self.send_anyway)
        buttons.addWidget(self.send_btn)
        layout.addLayout(buttons)

        # One tick per second drives the countdown
        self.timer = QTimer(self)
        self.timer.setInterval(1000)
        self.timer.timeout.connect(self.cooldown.tick)

        self.cooldown.start()
        self.timer.start()

    def _on_cooldown_update(self, snap: CooldownSnapshot):
        if snap.status == CooldownStatus.COUNTING_DOWN:
            self.label_countdown.setText(f"You can send in {snap.remaining_seconds}s")
            self.send_btn.setText(f"Send Anyway ({snap.remaining_seconds})")
        elif snap.status == CooldownStatus.EXPIRED:
            self.timer.stop()
            self.label_countdown.setText("You can send now.")
            self.send_btn.setText("Send Anyway")
            self.send_btn.setEnabled(True)
        elif snap.status == CooldownStatus.CANCELLED:
            self.timer.stop()
            self.send_btn.setEnabled(False)

    def send_anyway(self):
        if self.cooldown.confirm():
            self.accept()

    def reject(self):
        self.cooldown.cancel()
        super().reject()

    def closeEvent(self, event):
        self.timer.stop()
        if not self.cooldown.can_proceed:
            self.cooldown.cancel()
        super().closeEvent(event)


class ComposeWidget(QWidget):
    """
    Compose screen: pick a contact, write the message, press Send.
    Every send goes through the risk gate first.
    """

    def __init__(
        self,
        gate: RiskGate,
        time_range_service: TimeRangeService,
        contact_service: Optional[ContactService] = None,
        parent=None,
    ):
        super().__init__(parent)

        self.gate = gate
        self.time_range_service = time_range_service
        self.contact_service = contact_service
        self._setup_prompt_shown = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(10)

        title = QLabel("New Message")
        title.setObjectName("TitleLabel")
        layout.addWidget(title)

        self.label_active = QLabel("")
        layout.addWidget(self.label_active)

        # Contact picker; editable so a number can be typed directly
        self.contact_combo = QComboBox()
        self.contact_combo.setEditable(True)
        self.contact_combo.lineEdit().setPlaceholderText("To: name or number")
        layout.addWidget(self.contact_combo)

        self.message_input = QTextEdit()
        self.message_input.setPlaceholderText("Message")
        layout.addWidget(self.message_input)

        send_row = QHBoxLayout()
        self.label_status = QLabel("")
        self.label_status.setObjectName("MutedLabel")
        send_row.addWidget(self.label_status)
        send_row.addStretch(1)

        send_btn = QPushButton("Send")
        send_btn.clicked.connect(self.handle_send)
        send_row.addWidget(send_btn)
        layout.addLayout(send_row)

        # Keep the "active hours" label current
        self.status_timer = QTimer(self)
        self.status_timer.setInterval(30_000)
        self.status_timer.timeout.connect(self.refresh_status)
        self.status_timer.start()

        self.load_contacts()
        self.refresh_status()

    # ---------------------------------------------------
    # Contacts + status
    # ---------------------------------------------------
    def load_contacts(self):
        current = self.contact_combo.currentText()
        self.contact_combo.clear()

        if self.contact_service is not None:
            for contact in self.contact_service.list_contacts():
                self.contact_combo.addItem(f"{contact.display_name} ({contact.identifier})", contact.identifier)

        self.contact_combo.setEditText(current)

    def refresh_status(self):
        ranges = self.time_range_service.load()
        active = self.gate.policy.matching_range(self.gate.policy.clock.now(), ranges)

        if active is None:
            self.label_active.setText("Warnings are off right now.")
            self.label_active.setObjectName("StatusInactive")
        else:
            name = active.name or active.label()
            self.label_active.setText(f"Warnings are on ({name}).")
            self.label_active.setObjectName("StatusActive")
        self.label_active.style().polish(self.label_active)

    def selected_identifier(self) -> str:
        index = self.contact_combo.currentIndex()
        text = self.contact_combo.currentText().strip()
        if index >= 0 and self.contact_combo.itemText(index) == text:
            return str(self.contact_combo.itemData(index))
        return text

    # ---------------------------------------------------
    # Setup prompt
    # ---------------------------------------------------
    def maybe_show_setup_prompt(self) -> bool:
        """One-time hint to configure active hours. Returns True if shown."""
        if self._setup_prompt_shown or self.time_range_service.is_configured():
            return False

        self._setup_prompt_shown = True
        QMessageBox.information(
            self,
            "Setup Required",
            "Open Settings to choose the hours when NoDrunkText should warn you "
            "and to rate your contacts.",
        )
        return True

    # ---------------------------------------------------
    # Send
    # ---------------------------------------------------
    def handle_send(self):
        identifier = self.selected_identifier()
        text = self.message_input.toPlainText().strip()

        if not identifier or not text:
            QMessageBox.warning(self, "Missing Data", "Please choose a recipient and type a message.")
            return

        self.maybe_show_setup_prompt()

        action = self.gate.evaluate(identifier)

        if isinstance(action, SoftWarn):
            answer = QMessageBox.question(
                self,
                "Caution",
                action.message,
                QMessageBox.Yes | QMessageBox.Cancel,
                QMessageBox.Cancel,
            )
            if answer != QMessageBox.Yes:
                self.label_status.setText("Not sent.")
                return

        elif isinstance(action, HardWarn):
            dialog = HardWarningDialog(action, self)
            if dialog.exec_() != QDialog.Accepted:
                self.label_status.setText("Not sent.")
                return

        self.deliver(identifier, text)

    def deliver(self, identifier: str, text: str):
        # No carrier behind this screen; a send just clears the draft.
        logger.info("Message to %s sent (%d chars)", identifier, len(text))
        self.message_input.clear()
        self.label_status.setText(f"Sent to {self.contact_combo.currentText().strip()}.")

    def closeEvent(self, event):
        self.status_timer.stop()
        super().closeEvent(event)
