"""Formatter results and the default relative-number formatter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

DEFAULT_STYLE = "LineNr"


@dataclass(frozen=True, slots=True)
class TextOnly:
    """Formatter output that takes the default style."""

    text: str


@dataclass(frozen=True, slots=True)
class StyledText:
    text: str
    style: str


FormatResult = Union[TextOnly, StyledText]
# Formatters may also return a bare ``str`` or a ``(text, style)`` pair.
FormatNumber = Callable[[int], object]


class FormatterError(TypeError):
    """Raised when a formatter returns something that is not text."""

    def __init__(self, value: object, *, offset: int | None = None) -> None:
        super().__init__(
            f"Formatter returned {type(value).__name__} {value!r}"
            + (f" for offset {offset}" if offset is not None else "")
        )
        self.value = value
        self.offset = offset


def default_format(rel: int) -> StyledText:
    """Absolute distance to the cursor, in the line-number style."""

    return StyledText(str(abs(rel)), DEFAULT_STYLE)


def normalize_format_result(value: object, *, offset: int | None = None) -> StyledText:
    """Collapse any accepted formatter output into a ``StyledText``."""

    if isinstance(value, StyledText):
        return value
    if isinstance(value, TextOnly):
        return StyledText(value.text, DEFAULT_STYLE)
    if isinstance(value, str):
        return StyledText(value, DEFAULT_STYLE)
    if isinstance(value, (tuple, list)) and len(value) == 2:
        text, style = value
        if isinstance(text, str) and isinstance(style, str):
            return StyledText(text, style)
    raise FormatterError(value, offset=offset)


__all__ = [
    "DEFAULT_STYLE",
    "FormatNumber",
    "FormatResult",
    "FormatterError",
    "StyledText",
    "TextOnly",
    "default_format",
    "normalize_format_result",
]
