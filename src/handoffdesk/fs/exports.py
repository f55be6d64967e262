"""Helpers for safe TXT exports that avoid macOS TCC permission issues."""

from __future__ import annotations

import errno
import logging
import os
import re
from pathlib import Path
from typing import Final

from handoffdesk._paths import app_support_dir

_LOGGER = logging.getLogger(__name__)

_SAFE_CHAR_RE: Final[re.Pattern[str]] = re.compile(r"[^a-zA-Z0-9._\- ]+")
_SPACE_RE: Final[re.Pattern[str]] = re.compile(r"\s+")
_DOUBLE_DOT_RE: Final[re.Pattern[str]] = re.compile(r"\.{2,}")

_MAX_FILENAME_LEN: Final[int] = 120
_DEFAULT_STEM: Final[str] = "SBAR"


def exports_dir() -> Path:
    """Return the default Exports directory, creating it if needed."""
    path = app_support_dir() / "Exports"
    path.mkdir(parents=True, exist_ok=True)
    return path


def suggest_report_filename(date: str, shift: str, room: str) -> str:
    """Return a sanitized ``SBAR_<date>_<shift>_<room>.txt`` name.

    Empty parts are skipped so a blank form still yields ``SBAR.txt``.
    """
    parts = [_DEFAULT_STEM]
    for token in (date, shift, room):
        cleaned = (token or "").strip()
        if cleaned:
            parts.append(cleaned.replace("/", "-"))
    return sanitize_filename("_".join(parts) + ".txt")


def sanitize_filename(base: str) -> str:
    """Sanitize ``base`` so it is safe for filesystem use."""
    base = (base or "").strip()
    name, ext = os.path.splitext(base)
    if not name:
        name = _DEFAULT_STEM
    if ext and not ext.startswith("."):
        ext = f".{ext}"

    sanitized_name = _SAFE_CHAR_RE.sub("_", name)
    sanitized_name = _SPACE_RE.sub(" ", sanitized_name)
    sanitized_name = _DOUBLE_DOT_RE.sub(".", sanitized_name)
    sanitized_name = sanitized_name.strip(" .") or _DEFAULT_STEM

    sanitized_ext = _SAFE_CHAR_RE.sub("", ext)
    sanitized_ext = _DOUBLE_DOT_RE.sub(".", sanitized_ext)

    candidate = f"{sanitized_name}{sanitized_ext}"
    if len(candidate) <= _MAX_FILENAME_LEN:
        return candidate

    trim_len = max(0, _MAX_FILENAME_LEN - len(sanitized_ext))
    trimmed_name = sanitized_name[:trim_len].rstrip(" .") or _DEFAULT_STEM
    return f"{trimmed_name}{sanitized_ext}"


def safe_write_text(path: Path, text: str) -> Path:
    """Persist ``text`` to ``path``, falling back to Exports on TCC denials."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path
    except OSError as exc:
        if exc.errno not in (errno.EPERM, errno.EACCES):
            raise
        fallback_path = exports_dir() / path.name
        _LOGGER.warning(
            "safe_write_text fallback (errno=%s) original=%s fallback=%s",
            exc.errno,
            path,
            fallback_path,
        )
        fallback_path.write_text(text, encoding="utf-8")
        return fallback_path


__all__ = ["exports_dir", "sanitize_filename", "safe_write_text", "suggest_report_filename"]
