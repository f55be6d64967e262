"""Headless report runner used by the CLI and scripted checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from handoffdesk.form.schema import FIELD_SCHEMA
from handoffdesk.form.state import apply_change
from handoffdesk.logs.rotating import get_logger
from handoffdesk.report.model import FieldValue, ShiftRecord, blank_record
from handoffdesk.report.sbar_writer import format_report, write_report

LOGGER = logging.getLogger(__name__)

_TRUE_TOKENS = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_TOKENS = frozenset({"0", "false", "no", "n", "off", ""})


@dataclass(slots=True)
class HeadlessOptions:
    """Configuration for a headless report run."""

    assignments: List[Tuple[str, FieldValue]] = field(default_factory=list)
    output: Optional[Path] = None
    log_dir: Path = field(default_factory=lambda: Path("debug"))
    log_file: Optional[Path] = None
    trace: bool = False


@dataclass(slots=True)
class HeadlessResult:
    """Outcome of a headless report run."""

    exit_code: int
    record: ShiftRecord
    report_text: str
    txt_path: Optional[Path]
    log_file: Path
    warnings: List[str] = field(default_factory=list)


def parse_assignment(raw: str) -> Tuple[str, FieldValue]:
    """Parse ``FIELD=VALUE`` into a typed ``(field_id, value)`` pair.

    Checkbox fields take yes/no style tokens; every other field keeps the
    text verbatim. Raises ``ValueError`` for malformed input or unknown fields.
    """
    if "=" not in raw:
        raise ValueError(f"--set expects FIELD=VALUE, got {raw!r}")
    field_id, value = raw.split("=", 1)
    field_id = field_id.strip()
    spec = FIELD_SCHEMA.get(field_id)
    if spec is None:
        raise ValueError(f"Unknown field: {field_id!r}")
    if spec.kind != "checkbox":
        return field_id, value
    token = value.strip().lower()
    if token in _TRUE_TOKENS:
        return field_id, True
    if token in _FALSE_TOKENS:
        return field_id, False
    raise ValueError(f"{field_id} expects yes/no, got {value!r}")


def build_record(assignments: Sequence[Tuple[str, FieldValue]]) -> ShiftRecord:
    record = blank_record()
    for field_id, value in assignments:
        record = apply_change(record, field_id, value)
    return record


def execute_headless(options: HeadlessOptions) -> HeadlessResult:
    """Build a record from ``options`` and format its report without the GUI."""

    log_dir = options.log_dir.expanduser().resolve()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = (options.log_file or (log_dir / _default_log_name())).expanduser().resolve()

    base_logger, run_handler = _configure_logging(log_file, trace=options.trace)
    try:
        LOGGER.info("Headless start: %d field assignment(s)", len(options.assignments))
        if options.trace:
            base_logger.debug("Trace mode enabled for headless execution.")

        record = build_record(options.assignments)
        report_text = format_report(record)

        txt_path: Optional[Path] = None
        warnings: List[str] = []
        if options.output is not None:
            requested = options.output.expanduser()
            txt_path = write_report(record, requested)
            if txt_path != requested:
                warnings.append(f"Output redirected to {txt_path}")

        LOGGER.info("Headless run completed txt=%s", txt_path)
    finally:
        if run_handler is not None:
            base_logger.removeHandler(run_handler)
            run_handler.close()

    return HeadlessResult(
        exit_code=0,
        record=record,
        report_text=report_text,
        txt_path=txt_path,
        log_file=log_file,
        warnings=warnings,
    )


def _configure_logging(
    log_file: Path, *, trace: bool = False
) -> Tuple[logging.Logger, Optional[logging.Handler]]:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    base_logger = get_logger()
    level = logging.DEBUG if trace else logging.INFO
    base_logger.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if not any(isinstance(handler, logging.StreamHandler) for handler in root_logger.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(logging.WARNING)
        root_logger.addHandler(stream_handler)

    existing_paths = {
        getattr(handler, "baseFilename", None)
        for handler in base_logger.handlers
        if hasattr(handler, "baseFilename")
    }
    file_handler: Optional[logging.Handler] = None
    if str(log_file) not in existing_paths:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(formatter)
        base_logger.addHandler(file_handler)

    return base_logger, file_handler


def _default_log_name() -> str:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"headless_{timestamp}.log"


__all__ = ["HeadlessOptions", "HeadlessResult", "build_record", "execute_headless", "parse_assignment"]
