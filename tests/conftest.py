"""
Pytest configuration and fixtures for PrismaGrid tests.
"""
import os

import pytest

# Widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Qt Application fixture for tests that need QWidget
_qt_app = None


@pytest.fixture(scope="session")
def qapp():
    """Create a QApplication for tests that need Qt widgets."""
    global _qt_app
    from PySide6.QtWidgets import QApplication
    if _qt_app is None:
        _qt_app = QApplication.instance() or QApplication([])
    yield _qt_app


@pytest.fixture
def temp_db_path(tmp_path):
    """Temporary theme library database path."""
    yield tmp_path / "themes.db"


@pytest.fixture
def library(temp_db_path):
    """Theme library on a temporary database."""
    from prismagrid.database.theme_library import ThemeLibrary
    lib = ThemeLibrary(temp_db_path)
    yield lib
    lib.close()


@pytest.fixture
def app_home(tmp_path, monkeypatch):
    """Point the application data directory at a temporary folder."""
    home = tmp_path / "prismagrid_home"
    home.mkdir()
    monkeypatch.setenv("PRISMAGRID_HOME", str(home))
    yield home
