"""Utility helpers for locating the per-user application support directory."""

from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "HandoffDesk"
HOME_ENV_VAR = "HANDOFFDESK_HOME"


def _default_support_root() -> Path:
    return Path.home() / "Library" / "Application Support" / APP_NAME


def app_support_dir() -> Path:
    """Return the Application Support directory, creating it if needed.

    ``HANDOFFDESK_HOME`` overrides the default location so tests and
    scripted runs can keep logs and exports out of the user's home.
    """
    override = os.getenv(HOME_ENV_VAR)
    root = Path(override).expanduser() if override else _default_support_root()
    root.mkdir(parents=True, exist_ok=True)
    return root


def logs_dir() -> Path:
    """Return the logs directory inside Application Support, ensuring it exists."""

    logs = app_support_dir() / "logs"
    logs.mkdir(parents=True, exist_ok=True)
    return logs


__all__ = ["APP_NAME", "HOME_ENV_VAR", "app_support_dir", "logs_dir"]
