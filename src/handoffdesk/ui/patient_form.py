"""SBAR handoff form: owns the current record and applies every edit to it."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QGridLayout,
    QGroupBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from handoffdesk.form.schema import ORIENTATION_GROUP, SECTION_LAYOUT, field_spec, orientation_specs
from handoffdesk.form.state import apply_change, field_value
from handoffdesk.report.model import ORIENTATION_KEYS, ShiftRecord, blank_record

from .field_widgets import FieldWidget, OrientationGrid, create_field_widget

LOGGER = logging.getLogger(__name__)


class PatientForm(QWidget):
    """Form widget grouped into Situation, Background, Assessment and Recommendation."""

    record_changed = Signal(object)
    submitted = Signal(object)

    SECTION_COLUMNS = 3
    FULL_WIDTH_FIELDS = frozenset({"history", "notes"})

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._record = blank_record()
        self._fields: Dict[str, FieldWidget] = {}
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(18)

        for title, entries in SECTION_LAYOUT:
            group = QGroupBox(title)
            group.setObjectName(f"Section:{title}")
            group.setStyleSheet(
                "QGroupBox { font-size: 16px; font-weight: 700; color: #1d4ed8; }"
            )
            grid = QGridLayout(group)
            grid.setHorizontalSpacing(16)
            grid.setVerticalSpacing(12)

            row, column = 0, 0
            for field_id, label in entries:
                if field_id == ORIENTATION_GROUP:
                    widget: QWidget = self._build_orientation_grid()
                else:
                    widget = self._add_field(field_id, label)
                if field_id in self.FULL_WIDTH_FIELDS:
                    if column:
                        row, column = row + 1, 0
                    grid.addWidget(widget, row, 0, 1, self.SECTION_COLUMNS)
                    row += 1
                    continue
                grid.addWidget(widget, row, column, Qt.AlignmentFlag.AlignTop)
                column += 1
                if column == self.SECTION_COLUMNS:
                    row, column = row + 1, 0
            layout.addWidget(group)

        self.submit_button = QPushButton("Generate Report Preview")
        self.submit_button.setObjectName("SubmitButton")
        self.submit_button.setStyleSheet(
            """
            QPushButton {
                background-color: #2563EB;
                color: #F9FAFB;
                border-radius: 6px;
                padding: 10px 16px;
                font-size: 16px;
                font-weight: 600;
            }
            """
        )
        self.submit_button.clicked.connect(self.submit)
        layout.addWidget(self.submit_button)
        layout.addStretch(1)

    def _add_field(self, field_id: str, label: Optional[str]) -> FieldWidget:
        widget = create_field_widget(
            field_spec(field_id, label),
            field_value(self._record, field_id),
            self,
        )
        widget.value_changed.connect(self._on_field_changed)
        self._fields[field_id] = widget
        return widget

    def _build_orientation_grid(self) -> OrientationGrid:
        values = [getattr(self._record.orientation, key) for key in ORIENTATION_KEYS]
        grid = OrientationGrid(orientation_specs(), values, self)
        for widget in grid.fields:
            widget.value_changed.connect(self._on_field_changed)
            self._fields[widget.field_id] = widget
        return grid

    # --- state ------------------------------------------------------------------------

    def _on_field_changed(self, field_id: str, value: object) -> None:
        self._record = apply_change(self._record, field_id, value)  # type: ignore[arg-type]
        LOGGER.debug("Field changed: %s", field_id)
        self.record_changed.emit(self._record)

    def record(self) -> ShiftRecord:
        return self._record

    def set_record(self, record: ShiftRecord) -> None:
        """Replace the current record and refresh every control to match it."""
        self._record = record
        for field_id, widget in self._fields.items():
            widget.set_value(field_value(record, field_id))
        self.record_changed.emit(self._record)

    def reset(self) -> None:
        self.set_record(blank_record())

    def field_widget(self, field_id: str) -> FieldWidget:
        return self._fields[field_id]

    def field_ids(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def submit(self) -> None:
        """Hand the current record to listeners; the form keeps its contents."""
        LOGGER.info("Handoff form submitted")
        self.submitted.emit(self._record)


__all__ = ["PatientForm"]
