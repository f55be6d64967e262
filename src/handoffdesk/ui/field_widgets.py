"""Qt controls rendered from ``FieldSpec`` entries."""

from __future__ import annotations

from typing import Iterable, Optional

from PySide6.QtCore import QDate, QEvent, QObject, Signal
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDateEdit,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from handoffdesk.form.schema import ORIENTATION_CAPTION, FieldSpec
from handoffdesk.report.model import FieldValue

ISO_DATE_FORMAT = "yyyy-MM-dd"
EMPTY_DATE = QDate(1900, 1, 1)


class FieldWidget(QWidget):
    """Label plus input control for one field; emits ``(field_id, value)`` on edits."""

    value_changed = Signal(str, object)

    def __init__(self, spec: FieldSpec, value: FieldValue, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.spec = spec
        self.setObjectName(f"Field:{spec.field_id}")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        self.control = self._build_control()
        self.control.setObjectName(spec.field_id)
        self.clear_button: Optional[QPushButton] = None
        if spec.kind != "checkbox":
            label = QLabel(spec.label)
            label.setStyleSheet("font-weight: 600;")
            label.setBuddy(self.control)
            layout.addWidget(label)
        if isinstance(self.control, QDateEdit):
            row = QHBoxLayout()
            row.setContentsMargins(0, 0, 0, 0)
            row.setSpacing(6)
            self.clear_button = QPushButton("Clear")
            self.clear_button.setObjectName(f"Clear:{spec.field_id}")
            self.clear_button.clicked.connect(self.clear_date)
            row.addWidget(self.control, stretch=1)
            row.addWidget(self.clear_button)
            layout.addLayout(row)
            # The popup re-syncs its page to the control's date each time it opens.
            self.control.calendarWidget().installEventFilter(self)
        else:
            layout.addWidget(self.control)

        self.set_value(value)
        self._connect_control()

    @property
    def field_id(self) -> str:
        return self.spec.field_id

    # --- control construction ------------------------------------------------------

    def _build_control(self) -> QWidget:
        kind = self.spec.kind
        if kind == "date":
            widget = QDateEdit()
            widget.setCalendarPopup(True)
            widget.setDisplayFormat(ISO_DATE_FORMAT)
            widget.setMinimumDate(EMPTY_DATE)
            widget.setSpecialValueText("Select Date")
            return widget
        if kind == "select":
            combo = QComboBox()
            for value, text in self.spec.options:
                combo.addItem(text, value)
            return combo
        if kind == "checkbox":
            return QCheckBox(self.spec.label)
        if kind == "textarea":
            editor = QPlainTextEdit()
            editor.setTabChangesFocus(True)
            padding = int(editor.document().documentMargin() * 2) + editor.frameWidth() * 2
            editor.setFixedHeight(editor.fontMetrics().lineSpacing() * self.spec.rows + padding)
            return editor
        return QLineEdit()

    def _connect_control(self) -> None:
        control = self.control
        if isinstance(control, QDateEdit):
            control.dateChanged.connect(lambda _date: self._emit())
        elif isinstance(control, QComboBox):
            control.currentIndexChanged.connect(lambda _index: self._emit())
        elif isinstance(control, QCheckBox):
            control.toggled.connect(lambda _checked: self._emit())
        elif isinstance(control, QPlainTextEdit):
            control.textChanged.connect(self._emit)
        elif isinstance(control, QLineEdit):
            control.textChanged.connect(lambda _text: self._emit())

    def _emit(self) -> None:
        self.value_changed.emit(self.spec.field_id, self.value())

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802
        if event.type() == QEvent.Type.Show and self.value() == "":
            self._show_current_month()
        return super().eventFilter(watched, event)

    # --- date helpers ----------------------------------------------------------------

    def clear_date(self) -> None:
        """Reset a date field to empty; emits ``""`` when it held a date."""
        control = self.control
        if not isinstance(control, QDateEdit):
            return
        control.setDate(control.minimumDate())
        self._show_current_month()

    def _show_current_month(self) -> None:
        control = self.control
        if not isinstance(control, QDateEdit):
            return
        today = QDate.currentDate()
        control.calendarWidget().setCurrentPage(today.year(), today.month())

    # --- value access ----------------------------------------------------------------

    def value(self) -> FieldValue:
        control = self.control
        if isinstance(control, QDateEdit):
            current = control.date()
            if current == control.minimumDate():
                return ""
            return current.toString(ISO_DATE_FORMAT)
        if isinstance(control, QComboBox):
            data = control.currentData()
            return "" if data is None else str(data)
        if isinstance(control, QCheckBox):
            return control.isChecked()
        if isinstance(control, QPlainTextEdit):
            return control.toPlainText()
        return control.text()  # type: ignore[union-attr]

    def set_value(self, value: FieldValue) -> None:
        """Show ``value`` in the control without emitting ``value_changed``."""
        control = self.control
        control.blockSignals(True)
        try:
            if isinstance(control, QDateEdit):
                parsed = QDate.fromString(str(value), ISO_DATE_FORMAT) if value else QDate()
                control.setDate(parsed if parsed.isValid() else control.minimumDate())
                if not parsed.isValid():
                    self._show_current_month()
            elif isinstance(control, QComboBox):
                index = control.findData(str(value))
                control.setCurrentIndex(index if index >= 0 else 0)
            elif isinstance(control, QCheckBox):
                control.setChecked(bool(value))
            elif isinstance(control, QPlainTextEdit):
                if control.toPlainText() != value:
                    control.setPlainText(str(value))
            elif isinstance(control, QLineEdit):
                if control.text() != value:
                    control.setText(str(value))
        finally:
            control.blockSignals(False)


class OrientationGrid(QWidget):
    """Alert & oriented checklist laid out as a fixed two-column grid."""

    COLUMNS = 2

    def __init__(
        self,
        specs: Iterable[FieldSpec],
        values: Iterable[bool],
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("OrientationGrid")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        caption = QLabel(ORIENTATION_CAPTION)
        caption.setStyleSheet("font-weight: 600;")
        layout.addWidget(caption)

        grid = QGridLayout()
        grid.setHorizontalSpacing(16)
        grid.setVerticalSpacing(4)
        self.fields: list[FieldWidget] = []
        for index, (spec, value) in enumerate(zip(specs, values)):
            widget = FieldWidget(spec, value, self)
            grid.addWidget(widget, index // self.COLUMNS, index % self.COLUMNS)
            self.fields.append(widget)
        layout.addLayout(grid)


def create_field_widget(
    spec: FieldSpec,
    value: FieldValue,
    parent: Optional[QWidget] = None,
) -> FieldWidget:
    return FieldWidget(spec, value, parent)


__all__ = ["EMPTY_DATE", "FieldWidget", "ISO_DATE_FORMAT", "OrientationGrid", "create_field_widget"]
