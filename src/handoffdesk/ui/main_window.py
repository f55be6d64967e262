"""Main application window for the HandoffDesk client."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, Slot, QUrl
from PySide6.QtGui import QAction, QDesktopServices
from PySide6.QtWidgets import (
    QFileDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QScrollArea,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from handoffdesk.fs.exports import exports_dir, sanitize_filename, suggest_report_filename
from handoffdesk.report.model import ShiftRecord
from handoffdesk.report.sbar_writer import write_report

from .patient_form import PatientForm
from .report_preview import ReportPreview

LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Form on the left, report preview on the right."""

    SETTINGS_FILENAME = "settings.json"
    STATUS_TIMEOUT_MS = 4000

    def __init__(self, app_support_dir: Path, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("HandoffDesk — End-of-Shift Report")
        self.resize(1280, 820)

        self._app_support_dir = app_support_dir
        self._settings_path = self._app_support_dir / self.SETTINGS_FILENAME
        self._exports_dir = exports_dir()
        self._last_report_path: Optional[Path] = None
        self._active_toasts: list[QMessageBox] = []

        self._load_settings()
        self._build_ui()
        self._create_actions()

    # --- UI assembly -----------------------------------------------------------------

    def _build_ui(self) -> None:
        central = QWidget(self)
        central_layout = QVBoxLayout(central)
        central_layout.setContentsMargins(24, 24, 24, 24)
        central_layout.setSpacing(18)

        heading = QLabel("End-of-Shift Report Generator")
        heading.setObjectName("Heading")
        heading.setAlignment(Qt.AlignmentFlag.AlignCenter)
        heading.setStyleSheet("font-size: 22px; font-weight: 700;")

        self.status_banner = QLabel()
        self.status_banner.setObjectName("StatusBanner")
        self.status_banner.setWordWrap(True)
        self.status_banner.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.status_banner.setTextFormat(Qt.TextFormat.RichText)
        self.status_banner.setTextInteractionFlags(Qt.TextInteractionFlag.TextBrowserInteraction)
        self.status_banner.setStyleSheet(
            """
            QLabel#StatusBanner {
                background-color: #fff4c2;
                border: 1px solid #ffd166;
                border-radius: 8px;
                padding: 8px 12px;
                color: #5c4400;
                font-weight: 500;
            }
            QLabel#StatusBanner a {
                color: #1d4ed8;
                text-decoration: underline;
            }
            """
        )
        self.status_banner.linkActivated.connect(self._on_status_link_activated)
        self.status_banner.hide()

        self.patient_form = PatientForm()
        self.patient_form.submitted.connect(self._on_form_submitted)

        form_scroll = QScrollArea()
        form_scroll.setWidgetResizable(True)
        form_scroll.setWidget(self.patient_form)

        self.report_preview = ReportPreview()
        self.report_preview.copied.connect(self._on_report_copied)
        self.report_preview.save_requested.connect(self._save_report_txt)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(form_scroll)
        splitter.addWidget(self.report_preview)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 2)

        central_layout.addWidget(heading)
        central_layout.addWidget(self.status_banner)
        central_layout.addWidget(splitter, stretch=1)

        self.setCentralWidget(central)
        self.statusBar()

    def _create_actions(self) -> None:
        toolbar = self.addToolBar("Actions")
        toolbar.setMovable(False)

        self.preview_action = QAction("Generate Preview", self)
        self.preview_action.setShortcut("Ctrl+Return")
        self.preview_action.triggered.connect(self.patient_form.submit)

        self.copy_action = QAction("Copy Report", self)
        self.copy_action.setEnabled(False)
        self.copy_action.setShortcut("Ctrl+Shift+C")
        self.copy_action.triggered.connect(self.report_preview.copy_to_clipboard)

        self.save_action = QAction("Save TXT", self)
        self.save_action.setEnabled(False)
        self.save_action.setShortcut("Ctrl+S")
        self.save_action.triggered.connect(self._save_report_txt)

        self.clear_action = QAction("Clear Form", self)
        self.clear_action.triggered.connect(self._confirm_clear_form)

        toolbar.addAction(self.preview_action)
        toolbar.addAction(self.copy_action)
        toolbar.addAction(self.save_action)
        toolbar.addSeparator()
        toolbar.addAction(self.clear_action)

    # --- Settings -------------------------------------------------------------------

    def _load_settings(self) -> None:
        self._settings: dict[str, str] = {}
        if not self._settings_path.exists():
            return
        try:
            loaded = json.loads(self._settings_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            LOGGER.warning("Ignoring unreadable settings at %s", self._settings_path)
            return
        if isinstance(loaded, dict):
            self._settings = {str(key): str(value) for key, value in loaded.items()}

    def _save_settings(self) -> None:
        try:
            self._settings_path.write_text(json.dumps(self._settings, indent=2), encoding="utf-8")
        except OSError as exc:
            QMessageBox.warning(self, "Settings Error", f"Unable to persist settings: {exc}")

    # --- Actions --------------------------------------------------------------------

    @Slot(object)
    def _on_form_submitted(self, record: ShiftRecord) -> None:
        self.report_preview.set_record(record)
        self.copy_action.setEnabled(True)
        self.save_action.setEnabled(True)
        if self.status_banner.isVisible():
            self.status_banner.hide()
        self.statusBar().showMessage("Report preview updated.", self.STATUS_TIMEOUT_MS)
        LOGGER.info("Report preview generated")

    @Slot(bool)
    def _on_report_copied(self, ok: bool) -> None:
        if ok:
            if self.status_banner.isVisible():
                self.status_banner.hide()
            self.statusBar().showMessage("Report copied to clipboard.", self.STATUS_TIMEOUT_MS)
            return
        self.status_banner.setText(
            "Clipboard unavailable — the report was not copied. "
            "<a href='#save'>Save TXT instead</a>"
        )
        self.status_banner.show()

    def _on_status_link_activated(self, link: str) -> None:
        if link == "#save":
            self._save_report_txt()
            return
        self._open_export_folder()

    def _open_export_folder(self) -> None:
        target = self._last_report_path.parent if self._last_report_path else self._exports_dir
        target.mkdir(parents=True, exist_ok=True)
        QDesktopServices.openUrl(QUrl.fromLocalFile(str(target)))

    def _suggest_export_path(self) -> Path:
        record = self.report_preview.record() or self.patient_form.record()
        name = suggest_report_filename(record.date, record.shift, record.room)
        default_dir = self._settings.get("last_manual_save_dir") or str(self._exports_dir)
        base = Path(default_dir).expanduser()
        if not base.is_dir():
            base = self._exports_dir
        return base / name

    def _save_report_txt(self) -> None:
        if not self.report_preview.has_report():
            QMessageBox.warning(self, "Nothing to Save", "Generate the report preview before saving.")
            return
        filename, _ = QFileDialog.getSaveFileName(
            self,
            "Save Report TXT",
            str(self._suggest_export_path()),
            "Text Files (*.txt)",
        )
        if not filename:
            return
        target_path = Path(filename).expanduser()
        target_path = target_path.with_name(sanitize_filename(target_path.name))
        self.save_report_to(target_path)

    def save_report_to(self, target_path: Path) -> Optional[Path]:
        """Write the previewed report to ``target_path`` and remember its folder."""
        record = self.report_preview.record()
        if record is None:
            return None
        try:
            final_path = write_report(record, target_path)
        except OSError as exc:
            LOGGER.exception("Report save failed: %s", target_path)
            QMessageBox.warning(self, "Save Failed", f"Unable to save report: {exc}")
            return None

        self._last_report_path = final_path
        self._settings["last_manual_save_dir"] = str(final_path.parent)
        self._save_settings()
        LOGGER.info("Report saved: %s", final_path)

        if final_path != target_path:
            self.status_banner.setText(
                "Saved to Exports (permission fallback) – <a href='#exports'>[Open Exports]</a>"
            )
            self.status_banner.show()
        else:
            self._dismiss_toasts_with_title("Saved")
            self._show_toast("Saved", f"Saved to {_format_path_for_display(final_path)}")
        return final_path

    def _confirm_clear_form(self) -> None:
        answer = QMessageBox.question(
            self,
            "Clear Form",
            "Clear every field and start a new handoff?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        if answer == QMessageBox.StandardButton.Yes:
            self.clear_form()

    def clear_form(self) -> None:
        self.patient_form.reset()
        self.report_preview.clear()
        self.copy_action.setEnabled(False)
        self.save_action.setEnabled(False)
        self.status_banner.hide()
        LOGGER.info("Handoff form cleared")

    def _dismiss_toasts_with_title(self, title: str) -> None:
        for toast in list(self._active_toasts):
            if toast.windowTitle() == title:
                toast.close()

    def _show_toast(self, title: str, message: str) -> None:
        toast = QMessageBox(self)
        toast.setWindowTitle(title)
        toast.setText(message)
        toast.setIcon(QMessageBox.Icon.Information)
        toast.setStandardButtons(QMessageBox.StandardButton.Ok)
        toast.setModal(False)
        toast.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
        toast.finished.connect(lambda *_: self._active_toasts.remove(toast) if toast in self._active_toasts else None)
        self._active_toasts.append(toast)
        toast.open()


def _format_path_for_display(path: Path) -> str:
    path_str = str(path)
    home = str(Path.home())
    if path_str.startswith(home):
        suffix = path_str[len(home) :].lstrip("/")
        return f"~/{suffix}" if suffix else "~"
    return path_str


__all__ = ["MainWindow"]
