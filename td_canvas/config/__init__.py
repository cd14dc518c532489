"""Configuration models and environment helpers."""

from td_canvas.config.env import parse_bool_env, parse_int_env
from td_canvas.config.settings import (
    TABLE_GAP_HEIGHT_LIMIT,
    AppState,
    CanvasColours,
    CanvasSettings,
)

__all__ = [
    "AppState",
    "CanvasColours",
    "CanvasSettings",
    "TABLE_GAP_HEIGHT_LIMIT",
    "parse_bool_env",
    "parse_int_env",
]
