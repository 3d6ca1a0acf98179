"""Toolkit-independent zoom/pan state and the cursor-anchored zoom math.

The controller never touches widgets directly. Everything it needs from the
GUI toolkit goes through a :class:`ViewportHost`, which the Qt view in
``zoom_scroll_view`` implements and the tests replace with an in-memory fake.

Scroll fractions are normalised per axis: 0.0 shows the left/top edge of the
content, 1.0 the right/bottom edge.
"""
import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Tuple

from viewport_models import MAX_SCALE, MIN_SCALE, SCROLL_DELTA, PreferredSize, ZoomDirection

logger = logging.getLogger(__name__)

ScaleListener = Callable[[float], None]

# Ratio-based scale steps can land a hair past a bound (e.g. 4.75 -> 5.0).
_SCALE_EPSILON = 1e-9


class ViewportHost(ABC):
    """What the controller needs from the scrollable pane hosting the content."""

    @abstractmethod
    def viewport_size(self) -> Tuple[float, float]:
        """Visible area (width, height) in viewport pixels."""

    @abstractmethod
    def content_size(self) -> Tuple[float, float]:
        """Content extent (width, height) at the currently applied scale."""

    @abstractmethod
    def scroll_fractions(self) -> Tuple[float, float]:
        ...

    @abstractmethod
    def set_scroll_fractions(self, h: float, v: float) -> None:
        ...

    @abstractmethod
    def set_content_scale(self, scale: float) -> None:
        """Apply *scale* uniformly to the content's x and y axes."""

    @abstractmethod
    def content_preferred_size(self) -> PreferredSize:
        ...

    @abstractmethod
    def set_content_preferred_width(self, width: float) -> None:
        ...

    @abstractmethod
    def set_content_preferred_height(self, height: float) -> None:
        ...


# ── Zoom math ─────────────────────────────────────────────────────────────────

def zoom_step(current: float, direction: ZoomDirection, delta: float) -> Tuple[float, float]:
    """Return ``(candidate_scale, step_factor)`` for one zoom step.

    The candidate is computed through the step ratio so that it is exactly
    the scale the content ends up with after being multiplied by
    *step_factor*.
    """
    next_scale = current + direction.value * delta
    step_factor = next_scale / current
    return current * step_factor, step_factor


def _axis_fraction(center: float, viewport: float, content: float,
                   fraction: float, step_factor: float) -> float:
    center_pos = (content - viewport) * fraction + center
    new_center = center_pos * step_factor
    span = content * step_factor - viewport
    if span == 0:
        return math.nan
    return (new_center - center) / span


def anchored_scroll_fractions(
    zoom_center: Tuple[float, float],
    viewport_size: Tuple[float, float],
    content_size: Tuple[float, float],
    scroll_fractions: Tuple[float, float],
    step_factor: float,
) -> Optional[Tuple[float, float]]:
    """Scroll fractions that keep the content point under *zoom_center* fixed.

    *zoom_center* is the pointer in viewport coordinates and *content_size*
    is measured before the step is applied. Returns ``None`` when either
    axis is degenerate (scaled content exactly as large as the viewport).
    """
    h = _axis_fraction(zoom_center[0], viewport_size[0], content_size[0],
                       scroll_fractions[0], step_factor)
    v = _axis_fraction(zoom_center[1], viewport_size[1], content_size[1],
                       scroll_fractions[1], step_factor)
    if not (math.isfinite(h) and math.isfinite(v)):
        return None
    return h, v


# ── Controller ────────────────────────────────────────────────────────────────

class ZoomPanController:
    """Owns the scale factor of one content panel shown through a host viewport."""

    def __init__(self, host: ViewportHost, content: Any,
                 max_scale_factor: float = MAX_SCALE,
                 delta_scale_factor: float = SCROLL_DELTA):
        if content is None:
            raise ValueError("Content cannot be None.")
        if not max_scale_factor >= MIN_SCALE:
            raise ValueError("Maximum scale factor must be >= 1.")
        if not delta_scale_factor > 0:
            raise ValueError("Delta scale factor must be > 0.")

        self.content = content
        self._host = host
        self._min_scale = MIN_SCALE
        self._max_scale = float(max_scale_factor)
        self._delta_scale = float(delta_scale_factor)
        self._scale = self._min_scale
        self._listeners: List[ScaleListener] = []
        # Sizes the content asked for itself; other axes follow the viewport.
        self._preferred_size = host.content_preferred_size()
        logger.debug("Zoom controller created: max=%.2f delta=%.2f preferred=%s",
                     self._max_scale, self._delta_scale, self._preferred_size)

    # ── Accessors ─────────────────────────────────────────────────────────

    def scale_factor(self) -> float:
        return self._scale

    def min_scale_factor(self) -> float:
        return self._min_scale

    def max_scale_factor(self) -> float:
        return self._max_scale

    def delta_scale_factor(self) -> float:
        return self._delta_scale

    def preferred_size(self) -> PreferredSize:
        return self._preferred_size

    # ── Observers ─────────────────────────────────────────────────────────

    def add_scale_listener(self, listener: ScaleListener) -> Callable[[], None]:
        """Call *listener* with the new scale after every accepted zoom step.

        Returns a function that unsubscribes the listener again.
        """
        self._listeners.append(listener)

        def _remove():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def _set_scale(self, scale: float):
        self._scale = scale
        for listener in list(self._listeners):
            listener(scale)

    # ── Host notifications ────────────────────────────────────────────────

    def on_viewport_resized(self, width: float, height: float):
        """Stretch the content to the viewport on axes it did not size itself."""
        if not self._preferred_size.is_width_set() and width > 0:
            self._host.set_content_preferred_width(width)
        if not self._preferred_size.is_height_set() and height > 0:
            self._host.set_content_preferred_height(height)

    def zoom_at(self, x: float, y: float, direction: ZoomDirection) -> bool:
        """Zoom one step around the viewport point (*x*, *y*).

        Returns True when the scale changed. Steps that would leave
        [min, max] are ignored.
        """
        previous = self._scale
        candidate, step_factor = zoom_step(previous, direction, self._delta_scale)
        if (candidate < self._min_scale - _SCALE_EPSILON
                or candidate > self._max_scale + _SCALE_EPSILON):
            logger.debug("Zoom %s ignored at scale %.4f (candidate %.4f out of [%.2f, %.2f])",
                         direction.name, previous, candidate,
                         self._min_scale, self._max_scale)
            return False
        candidate = min(self._max_scale, max(self._min_scale, candidate))

        viewport = self._host.viewport_size()
        content = self._host.content_size()
        fractions = self._host.scroll_fractions()

        self._host.set_content_scale(candidate)

        new_fractions = anchored_scroll_fractions(
            (x, y), viewport, content, fractions, step_factor)
        if new_fractions is None:
            # Scale is still committed so the reported value matches what is drawn.
            logger.debug("Zoom %s to %.4f: degenerate scroll position, keeping %s",
                         direction.name, candidate, fractions)
        else:
            self._host.set_scroll_fractions(*new_fractions)

        self._set_scale(candidate)
        logger.debug("Zoom %s at (%.1f, %.1f): %.4f -> %.4f",
                     direction.name, x, y, previous, candidate)
        return True
