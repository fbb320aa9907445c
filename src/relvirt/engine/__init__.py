"""Suppression policy, formatter contract and the render loop."""

from .formatter import (
    DEFAULT_STYLE,
    FormatResult,
    FormatterError,
    StyledText,
    TextOnly,
    default_format,
    normalize_format_result,
)
from .policy import SuppressReason, is_blank_line, should_suppress, suppression_reason
from .render import RenderEngine, RenderReport, Viewport, snapshot_viewport

__all__ = [
    "DEFAULT_STYLE",
    "FormatResult",
    "FormatterError",
    "StyledText",
    "TextOnly",
    "default_format",
    "normalize_format_result",
    "SuppressReason",
    "is_blank_line",
    "should_suppress",
    "suppression_reason",
    "RenderEngine",
    "RenderReport",
    "Viewport",
    "snapshot_viewport",
]
