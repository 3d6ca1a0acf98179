"""Main entry point for the zoom/pan viewer demo."""
import logging
import sys
from typing import Optional

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QPainter, QPen
from PySide6.QtWidgets import (
    QApplication, QHBoxLayout, QLabel, QMainWindow, QPushButton,
    QSizePolicy, QVBoxLayout, QWidget,
)

import settings_store
from viewport_models import ZoomSettings
from zoom_scroll_view import ContentZoomScrollView

logger = logging.getLogger(__name__)

_GRID_STEP = 40  # pixels between grid lines, before zoom
_PEN_GRID_THIN = QPen(QColor(225, 225, 225), 1)
_PEN_GRID_THICK = QPen(QColor(190, 190, 190), 1)


class GridCanvas(QWidget):
    """Sample content: a labelled grid with a circle marking its centre."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMinimumSize(200, 150)

    def paintEvent(self, event):
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing)
        p.fillRect(self.rect(), QColor(255, 255, 255))
        w, h = self.width(), self.height()
        for i, x in enumerate(range(0, w, _GRID_STEP)):
            p.setPen(_PEN_GRID_THICK if i % 5 == 0 else _PEN_GRID_THIN)
            p.drawLine(x, 0, x, h)
        for i, y in enumerate(range(0, h, _GRID_STEP)):
            p.setPen(_PEN_GRID_THICK if i % 5 == 0 else _PEN_GRID_THIN)
            p.drawLine(0, y, w, y)
        p.setPen(QColor(120, 120, 120))
        for x in range(0, w, _GRID_STEP * 5):
            for y in range(0, h, _GRID_STEP * 5):
                p.drawText(QRectF(x + 3, y + 2, 80, 16), f"{x},{y}")
        p.setPen(QPen(Qt.GlobalColor.black, 2))
        p.drawEllipse(QPointF(w / 2, h / 2), 20, 20)
        p.end()


class MainWindow(QMainWindow):
    def __init__(self, settings: ZoomSettings, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Zoom/Pan Viewer")
        self.resize(900, 650)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)

        # ── Zoom controls ──
        toolbar = QWidget()
        tb = QHBoxLayout(toolbar)
        tb.setContentsMargins(4, 4, 4, 4)
        tb.setSpacing(4)
        for label, tip in [("−", "Zoom out"), ("+", "Zoom in")]:
            b = QPushButton(label)
            b.setFixedWidth(32)
            b.setToolTip(tip)
            if label == "−":
                self._zoom_out_btn = b
                tb.addWidget(b)
                self._zoom_label = QLabel("100%")
                self._zoom_label.setFixedWidth(50)
                self._zoom_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
                tb.addWidget(self._zoom_label)
            else:
                self._zoom_in_btn = b
                tb.addWidget(b)
        tb.addStretch(1)
        toolbar.setSizePolicy(QSizePolicy.Policy.Preferred, QSizePolicy.Policy.Fixed)
        layout.addWidget(toolbar)

        # ── Zoomable content ──
        self._view = ContentZoomScrollView.from_settings(GridCanvas(), settings)
        self._view.scale_factor_changed.connect(self._on_scale_changed)
        self._zoom_out_btn.clicked.connect(self._view.zoom_out)
        self._zoom_in_btn.clicked.connect(self._view.zoom_in)
        layout.addWidget(self._view, stretch=1)
        self._on_scale_changed(self._view.scale_factor())

        self.setCentralWidget(central)

    def view(self) -> ContentZoomScrollView:
        return self._view

    def zoom_label_text(self) -> str:
        return self._zoom_label.text()

    def _on_scale_changed(self, scale: float):
        self._zoom_label.setText(f"{round(scale * 100)}%")
        self._zoom_out_btn.setEnabled(scale > self._view.min_scale_factor())
        self._zoom_in_btn.setEnabled(scale < self._view.max_scale_factor())


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def main(argv: Optional[list] = None) -> None:
    argv = sys.argv if argv is None else argv
    config_path = argv[1] if len(argv) > 1 else None
    settings = settings_store.load_zoom_settings(config_path)
    configure_logging(settings.debug_mode)
    logger.info("Starting viewer: max zoom %.2f, step %.2f",
                settings.max_scale_factor, settings.delta_scale_factor)

    app = QApplication(argv)
    win = MainWindow(settings)
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
