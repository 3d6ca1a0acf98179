"""Settings persistence: load/save the viewer config JSON."""
import json
import os
from typing import Optional

from viewport_models import MAX_SCALE, SCROLL_DELTA, ZoomSettings

_APP_DIR = os.path.dirname(os.path.abspath(__file__))
_APP_DATA_DIR = os.path.join(os.path.dirname(_APP_DIR), "data")
CONFIG_PATH = os.path.join(_APP_DATA_DIR, "viewer_config.json")


# ── Config file ───────────────────────────────────────────────────────────────

def load_config(path: Optional[str] = None) -> dict:
    """Read the config at *path* (default CONFIG_PATH); {} if it does not exist."""
    path = path or CONFIG_PATH
    if not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def save_config(config_data: dict, path: Optional[str] = None) -> None:
    path = path or CONFIG_PATH
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config_data, f, indent=2)
        f.write("\n")


# ── Zoom settings section ─────────────────────────────────────────────────────

def load_zoom_settings_from_config(config_data: dict) -> ZoomSettings:
    """Build a ZoomSettings from a parsed config dict.

    Values are converted but not range-checked here; the view rejects
    out-of-range scale factors when it is built.
    """
    zs = config_data.get("zoom_settings", {})
    return ZoomSettings(
        max_scale_factor=float(zs.get("max_scale_factor", MAX_SCALE)),
        delta_scale_factor=float(zs.get("delta_scale_factor", SCROLL_DELTA)),
        enable_zoom=bool(zs.get("enable_zoom", True)),
        enable_panning=bool(zs.get("enable_panning", True)),
        enable_scrollbars=bool(zs.get("enable_scrollbars", False)),
        debug_mode=bool(zs.get("debug_mode", False)),
    )


def save_zoom_settings_to_config(config_data: dict, settings: ZoomSettings) -> None:
    """Write *settings* into *config_data* in-place (call save_config to persist)."""
    config_data["zoom_settings"] = {
        "max_scale_factor": settings.max_scale_factor,
        "delta_scale_factor": settings.delta_scale_factor,
        "enable_zoom": settings.enable_zoom,
        "enable_panning": settings.enable_panning,
        "enable_scrollbars": settings.enable_scrollbars,
        "debug_mode": settings.debug_mode,
    }


def load_zoom_settings(path: Optional[str] = None) -> ZoomSettings:
    return load_zoom_settings_from_config(load_config(path))
