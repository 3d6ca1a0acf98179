import logging

import pytest

from viewer_app import MainWindow, configure_logging
from viewport_models import ZoomSettings


@pytest.fixture()
def window(qapp):
    win = MainWindow(ZoomSettings(max_scale_factor=1.5))
    yield win
    win.close()
    win.deleteLater()


def test_label_follows_scale(window):
    assert window.zoom_label_text() == "100%"
    window.view().zoom_in()
    assert window.zoom_label_text() == "125%"
    window.view().zoom_in()
    assert window.zoom_label_text() == "150%"


def test_buttons_disabled_at_bounds(window):
    assert not window._zoom_out_btn.isEnabled()
    assert window._zoom_in_btn.isEnabled()
    window._zoom_in_btn.click()
    window._zoom_in_btn.click()
    assert window.view().scale_factor() == 1.5
    assert window._zoom_out_btn.isEnabled()
    assert not window._zoom_in_btn.isEnabled()


def test_configure_logging_debug(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    configure_logging(True)
    configure_logging(False)
    assert calls[0]["level"] == logging.DEBUG
    assert calls[1]["level"] == logging.INFO
