"""Shared test fixtures."""

import pytest


@pytest.fixture(scope="session")
def qapp():
    """A Qt core application so timers and file watchers can run headless."""
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def spin(qapp):
    """Run the Qt event loop for `ms` milliseconds."""
    from PySide6.QtCore import QEventLoop, QTimer

    def _spin(ms: int) -> None:
        loop = QEventLoop()
        QTimer.singleShot(ms, loop.quit)
        loop.exec()

    return _spin
