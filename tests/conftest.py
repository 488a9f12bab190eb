"""pytest configuration and fixtures for pyqt-attrinspect tests."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from pyqt_attrinspect.host import RecordingHost
from pyqt_attrinspect.protocols import set_inspector_config
from pyqt_attrinspect.state import InMemoryBoolStore


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture
def host():
    """Headless host recording draw calls."""
    return RecordingHost()


@pytest.fixture
def settings():
    """Fresh in-memory foldout persistence."""
    return InMemoryBoolStore()


@pytest.fixture(autouse=True)
def reset_inspector_config():
    """Restore the default global config after every test."""
    yield
    set_inspector_config(None)
