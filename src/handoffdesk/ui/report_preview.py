"""Preview pane showing the formatted SBAR report with copy and save actions."""

from __future__ import annotations

import html
import logging
from typing import Optional

from PySide6.QtCore import Signal
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from handoffdesk.report.model import ShiftRecord
from handoffdesk.report.sbar_writer import format_report, split_report

LOGGER = logging.getLogger(__name__)

_PLACEHOLDER = "Fill out the form and choose Generate Report Preview."


class ReportPreview(QWidget):
    """Read-only rendering of the report text; headers bold, line breaks preserved."""

    copied = Signal(bool)
    save_requested = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._record: Optional[ShiftRecord] = None
        self._report_text = ""
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        title = QLabel("Preview (SBAR Format)")
        title.setStyleSheet("font-size: 16px; font-weight: 700;")
        layout.addWidget(title)

        self.text_view = QTextBrowser()
        self.text_view.setObjectName("ReportText")
        self.text_view.setOpenLinks(False)
        self.text_view.setStyleSheet(
            "QTextBrowser#ReportText { background-color: #f9fafb; border: 1px solid #e5e7eb;"
            " border-radius: 6px; padding: 8px; }"
        )
        self.text_view.setPlaceholderText(_PLACEHOLDER)
        layout.addWidget(self.text_view, stretch=1)

        button_row = QHBoxLayout()
        button_row.setContentsMargins(0, 0, 0, 0)
        button_row.setSpacing(8)

        self.copy_button = QPushButton("Copy Report to Clipboard")
        self.copy_button.setEnabled(False)
        self.copy_button.clicked.connect(self.copy_to_clipboard)
        self.copy_button.setStyleSheet(
            """
            QPushButton {
                background-color: #16a34a;
                color: #F9FAFB;
                border-radius: 6px;
                padding: 8px 16px;
                font-weight: 600;
            }
            QPushButton:disabled {
                background-color: #1f2937;
                color: #9CA3AF;
            }
            """
        )
        button_row.addWidget(self.copy_button)

        self.save_button = QPushButton("Save TXT…")
        self.save_button.setEnabled(False)
        self.save_button.clicked.connect(self.save_requested)
        button_row.addWidget(self.save_button)
        button_row.addStretch(1)

        layout.addLayout(button_row)

    def set_record(self, record: ShiftRecord) -> None:
        self._record = record
        self._report_text = format_report(record)
        self.text_view.setHtml(_report_html(self._report_text))
        self.copy_button.setEnabled(True)
        self.save_button.setEnabled(True)

    def clear(self) -> None:
        self._record = None
        self._report_text = ""
        self.text_view.clear()
        self.copy_button.setEnabled(False)
        self.save_button.setEnabled(False)

    def record(self) -> Optional[ShiftRecord]:
        return self._record

    def report_text(self) -> str:
        return self._report_text

    def has_report(self) -> bool:
        return self._record is not None

    def copy_to_clipboard(self) -> bool:
        """Put the exact report text on the clipboard and report whether it stuck."""
        if not self._report_text:
            return False
        clipboard = QGuiApplication.clipboard()
        clipboard.setText(self._report_text)
        ok = clipboard.text() == self._report_text
        if ok:
            LOGGER.info("Report copied to clipboard (%d chars)", len(self._report_text))
        else:
            LOGGER.warning("Clipboard write could not be confirmed")
        self.copied.emit(ok)
        return ok


def _report_html(text: str) -> str:
    blocks = []
    for section in split_report(text):
        lines = []
        for line in section:
            escaped = html.escape(line.text)
            if line.is_header:
                lines.append(
                    f"<div style='color:#1d4ed8; margin-top:6px; margin-bottom:2px;'><b>{escaped}</b></div>"
                )
            else:
                lines.append(f"<div>{escaped or '&nbsp;'}</div>")
        blocks.append("".join(lines))
    body = "<div style='margin-top:10px;'></div>".join(blocks)
    return f"<div style='font-family: Menlo, monospace; font-size: 12px; white-space: pre-wrap;'>{body}</div>"


__all__ = ["ReportPreview"]
