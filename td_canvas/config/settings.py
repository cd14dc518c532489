"""Read-only style and settings snapshot handed to widgets every frame."""

from __future__ import annotations

import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from rich.errors import StyleSyntaxError
from rich.style import Style

from td_canvas.config.env import parse_int_env
from td_canvas.core import theme
from td_canvas.errors import ConfigurationError, wrap_error

TABLE_GAP_HEIGHT_LIMIT = 7


class CanvasColours(BaseModel):
    """Rich style strings used by the widgets."""

    model_config = ConfigDict(frozen=True)

    border_style: str = theme.BORDER_STYLE
    highlighted_border_style: str = theme.HIGHLIGHTED_BORDER_STYLE
    text_style: str = theme.TEXT_STYLE
    currently_selected_text_style: str = theme.SELECTED_TEXT_STYLE
    table_header_style: str = theme.TABLE_HEADER_STYLE

    @field_validator("*")
    @classmethod
    def _parseable_style(cls, value: str) -> str:
        try:
            Style.parse(value)
        except StyleSyntaxError as exc:
            raise ValueError(str(exc)) from exc
        return value


class CanvasSettings(BaseModel):
    """User-configurable settings that influence layout."""

    model_config = ConfigDict(frozen=True)

    table_gap: int = Field(default=1, ge=0)
    table_gap_height_limit: int = Field(default=TABLE_GAP_HEIGHT_LIMIT, ge=0)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "CanvasSettings":
        """Build settings from ``TD_*`` environment variables."""
        env = os.environ if environ is None else environ
        overrides: dict[str, int] = {}
        gap = parse_int_env(env.get("TD_TABLE_GAP"))
        if gap is not None:
            overrides["table_gap"] = gap
        limit = parse_int_env(env.get("TD_TABLE_GAP_HEIGHT_LIMIT"))
        if limit is not None:
            overrides["table_gap_height_limit"] = limit
        try:
            return cls(**overrides)
        except ValidationError as exc:
            raise wrap_error(
                ConfigurationError,
                "Invalid canvas settings in environment",
                context=overrides,
                cause=exc,
            ) from exc


class AppState(BaseModel):
    """Snapshot of the application state consulted while drawing.

    The application builds a new snapshot whenever something changes (for
    example focus moving to another widget); widgets never mutate it.
    """

    model_config = ConfigDict(frozen=True)

    colours: CanvasColours = Field(default_factory=CanvasColours)
    settings: CanvasSettings = Field(default_factory=CanvasSettings)
    selected_widget_id: int | None = None

    def is_selected(self, widget_id: int) -> bool:
        return self.selected_widget_id == widget_id

    def focus(self, widget_id: int | None) -> "AppState":
        """Return a copy of the snapshot with a different focused widget."""
        return self.model_copy(update={"selected_widget_id": widget_id})
