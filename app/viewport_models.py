"""Data models for the zoom/pan viewport."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

MIN_SCALE = 1.0      # zooming out past the unscaled content makes no sense
MAX_SCALE = 5.0
SCROLL_DELTA = 0.25  # scale change per wheel notch


class ZoomDirection(Enum):
    IN = 1
    OUT = -1


@dataclass(frozen=True)
class PreferredSize:
    """Explicit content size captured when the viewport is built.

    ``None`` on an axis means the content left that axis to the viewport,
    which then stretches the content to fill it.
    """
    width: Optional[float] = None
    height: Optional[float] = None

    def is_width_set(self) -> bool:
        return self.width is not None

    def is_height_set(self) -> bool:
        return self.height is not None


@dataclass
class ZoomSettings:
    max_scale_factor: float = MAX_SCALE    # upper zoom bound, >= 1
    delta_scale_factor: float = SCROLL_DELTA  # step per wheel notch, > 0
    enable_zoom: bool = True               # wheel zooms instead of scrolling
    enable_panning: bool = True            # left-drag pans the content
    enable_scrollbars: bool = False        # always shown vs never shown
    debug_mode: bool = False               # log every zoom step
