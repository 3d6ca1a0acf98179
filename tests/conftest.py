import os

import pytest

# Widgets are created without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import settings_store  # noqa: E402


@pytest.fixture(autouse=True)
def tmp_config_path(tmp_path, monkeypatch):
    """Redirect the default config file to a temporary directory."""
    path = str(tmp_path / "data" / "viewer_config.json")
    monkeypatch.setattr(settings_store, "CONFIG_PATH", path)
    return path


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app
