"""Qt scroll view that adds wheel zoom and drag panning to any QWidget.

The content widget is embedded in a QGraphicsScene through a
QGraphicsProxyWidget. Scaling the proxy (rather than the view) keeps the
scene rect equal to the scaled content, so the view's scrollbars always
describe the zoomed content and the anchoring math in ``zoom_controller``
can work with plain scrollbar fractions.
"""
import logging
from typing import Callable, Dict, Optional, Tuple

from PySide6.QtCore import QEvent, QSizeF, Qt, Signal
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import QFrame, QGraphicsProxyWidget, QGraphicsScene, QGraphicsView, QScrollBar, QWidget

from viewport_models import MAX_SCALE, SCROLL_DELTA, PreferredSize, ZoomDirection, ZoomSettings
from zoom_controller import ScaleListener, ViewportHost, ZoomPanController

logger = logging.getLogger(__name__)


def _bar_state(bar: QScrollBar) -> Tuple[int, int, int]:
    return bar.minimum(), bar.maximum(), bar.value()


def _bar_fraction(bar: QScrollBar) -> float:
    span = bar.maximum() - bar.minimum()
    if span <= 0:
        return 0.0
    return (bar.value() - bar.minimum()) / span


def _set_bar_fraction(bar: QScrollBar, fraction: float) -> float:
    """Move *bar* to *fraction* and return the fraction it can actually show."""
    span = bar.maximum() - bar.minimum()
    if span <= 0:
        return 0.0
    fraction = min(1.0, max(0.0, fraction))
    bar.setValue(bar.minimum() + round(fraction * span))
    return fraction


class _GraphicsViewHost(ViewportHost):
    """Exposes a ContentZoomScrollView to the controller."""

    def __init__(self, view: "ContentZoomScrollView"):
        self._view = view
        # Exact fraction last written to each bar, with the (min, max, value)
        # it produced. Bars hold whole pixels only.
        self._exact: Dict[str, Tuple[float, Tuple[int, int, int]]] = {}

    def _fraction(self, axis: str, bar: QScrollBar) -> float:
        saved = self._exact.get(axis)
        if saved is not None and saved[1] == _bar_state(bar):
            return saved[0]
        # Panned by the user or range changed since the last zoom step.
        return _bar_fraction(bar)

    def _set_fraction(self, axis: str, bar: QScrollBar, fraction: float):
        shown = _set_bar_fraction(bar, fraction)
        self._exact[axis] = (shown, _bar_state(bar))

    def viewport_size(self) -> Tuple[float, float]:
        vp = self._view.viewport()
        return float(vp.width()), float(vp.height())

    def content_size(self) -> Tuple[float, float]:
        rect = self._view.content_proxy().sceneBoundingRect()
        return rect.width(), rect.height()

    def scroll_fractions(self) -> Tuple[float, float]:
        return (self._fraction("h", self._view.horizontalScrollBar()),
                self._fraction("v", self._view.verticalScrollBar()))

    def set_scroll_fractions(self, h: float, v: float) -> None:
        self._set_fraction("h", self._view.horizontalScrollBar(), h)
        self._set_fraction("v", self._view.verticalScrollBar(), v)

    def set_content_scale(self, scale: float) -> None:
        self._view.content_proxy().setScale(scale)
        # Scrollbar ranges must reflect the new scale before fractions are set.
        self._view.sync_scene_rect()

    def content_preferred_size(self) -> PreferredSize:
        # A widget pins an axis by making its minimum equal to its maximum
        # (setFixedWidth / setFixedHeight / setFixedSize).
        content = self._view.content()
        width = height = None
        if content.minimumWidth() == content.maximumWidth():
            width = float(content.minimumWidth())
        if content.minimumHeight() == content.maximumHeight():
            height = float(content.minimumHeight())
        return PreferredSize(width, height)

    def set_content_preferred_width(self, width: float) -> None:
        proxy = self._view.content_proxy()
        proxy.resize(QSizeF(width, proxy.size().height()))

    def set_content_preferred_height(self, height: float) -> None:
        proxy = self._view.content_proxy()
        proxy.resize(QSizeF(proxy.size().width(), height))


class ContentZoomScrollView(QGraphicsView):
    """Scrollable view of *content* with wheel zoom and drag panning.

    * Wheel up zooms in and wheel down zooms out, one *delta_scale_factor*
      step per event, keeping the content point under the cursor in place.
      Wheel events never scroll the view while zoom is enabled.
    * Left-drag pans (native hand drag). The content gets mouse events
      first and must accept the ones that should not pan.
    * Content that does not pin its width/height is stretched to the
      viewport on those axes.

    The scale never goes below 1 or above *max_scale_factor*.
    """

    scale_factor_changed = Signal(float)

    def __init__(self, content: QWidget,
                 max_scale_factor: float = MAX_SCALE,
                 delta_scale_factor: float = SCROLL_DELTA,
                 enable_zoom: bool = True,
                 enable_panning: bool = True,
                 enable_scrollbars: bool = False,
                 parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._content = content
        self._proxy: Optional[QGraphicsProxyWidget] = None
        self._controller = ZoomPanController(_GraphicsViewHost(self), content,
                                             max_scale_factor, delta_scale_factor)

        self._scene = QGraphicsScene(self)
        self._proxy = self._scene.addWidget(content)
        self._proxy.setPos(0, 0)
        self._proxy.geometryChanged.connect(self.sync_scene_rect)
        self.setScene(self._scene)
        self.sync_scene_rect()

        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setRenderHint(QPainter.RenderHint.Antialiasing)

        self._controller.add_scale_listener(self.scale_factor_changed.emit)

        if enable_zoom:
            # Intercept wheel events on the viewport before the scene or the
            # scrollbars see them.
            self.viewport().installEventFilter(self)
        if enable_panning:
            self.setDragMode(QGraphicsView.DragMode.ScrollHandDrag)
        self._set_scrollbars_visible(enable_scrollbars)
        logger.debug("Zoom view around %s: zoom=%s pan=%s scrollbars=%s",
                     type(content).__name__, enable_zoom, enable_panning, enable_scrollbars)

    @classmethod
    def from_settings(cls, content: QWidget, settings: ZoomSettings,
                      parent: Optional[QWidget] = None) -> "ContentZoomScrollView":
        return cls(content,
                   max_scale_factor=settings.max_scale_factor,
                   delta_scale_factor=settings.delta_scale_factor,
                   enable_zoom=settings.enable_zoom,
                   enable_panning=settings.enable_panning,
                   enable_scrollbars=settings.enable_scrollbars,
                   parent=parent)

    # ── Public API ────────────────────────────────────────────────────────────

    def content(self) -> QWidget:
        return self._content

    def content_proxy(self) -> QGraphicsProxyWidget:
        return self._proxy

    def scale_factor(self) -> float:
        return self._controller.scale_factor()

    def min_scale_factor(self) -> float:
        return self._controller.min_scale_factor()

    def max_scale_factor(self) -> float:
        return self._controller.max_scale_factor()

    def delta_scale_factor(self) -> float:
        return self._controller.delta_scale_factor()

    def add_scale_listener(self, listener: ScaleListener) -> Callable[[], None]:
        return self._controller.add_scale_listener(listener)

    def zoom_at(self, x: float, y: float, direction: ZoomDirection) -> bool:
        """Zoom one step around the viewport point (*x*, *y*)."""
        return self._controller.zoom_at(x, y, direction)

    def zoom_in(self) -> bool:
        """Zoom in one step around the centre of the viewport."""
        return self._zoom_at_center(ZoomDirection.IN)

    def zoom_out(self) -> bool:
        """Zoom out one step around the centre of the viewport."""
        return self._zoom_at_center(ZoomDirection.OUT)

    def sync_scene_rect(self):
        """Make the scrollable area match the scaled content."""
        if self._proxy is not None:
            self.setSceneRect(self._proxy.sceneBoundingRect())

    # ── Internals ─────────────────────────────────────────────────────────────

    def _zoom_at_center(self, direction: ZoomDirection) -> bool:
        vp = self.viewport()
        return self._controller.zoom_at(vp.width() / 2.0, vp.height() / 2.0, direction)

    def _set_scrollbars_visible(self, visible: bool):
        policy = (Qt.ScrollBarPolicy.ScrollBarAlwaysOn if visible
                  else Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setHorizontalScrollBarPolicy(policy)
        self.setVerticalScrollBarPolicy(policy)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        vp = self.viewport()
        self._controller.on_viewport_resized(vp.width(), vp.height())

    def eventFilter(self, obj, event):
        """Turn viewport wheel events into zoom steps."""
        if obj is self.viewport() and event.type() == QEvent.Type.Wheel:
            direction = ZoomDirection.IN if event.angleDelta().y() > 0 else ZoomDirection.OUT
            pos = event.position()
            self._controller.zoom_at(pos.x(), pos.y(), direction)
            event.accept()
            return True
        return super().eventFilter(obj, event)
