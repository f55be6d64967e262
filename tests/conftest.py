from __future__ import annotations

import os
import shutil
import tempfile

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

_SUPPORT_HOME = tempfile.mkdtemp(prefix="handoffdesk-home-")
os.environ["HANDOFFDESK_HOME"] = _SUPPORT_HOME


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


def pytest_sessionfinish(session, exitstatus) -> None:
    shutil.rmtree(_SUPPORT_HOME, ignore_errors=True)
