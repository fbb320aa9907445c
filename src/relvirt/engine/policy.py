"""Per-line show/hide decision for relative-number annotations."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from relvirt.options import RelVirtOptions


class SuppressReason(str, Enum):
    CURSOR_LINE = "cursor_line"
    NEAR_CURSOR = "near_cursor"
    BLANK = "blank"
    OVERFLOW = "overflow"


# Only ASCII whitespace; a line of NBSPs still gets a number.
_BLANK_CHARS = " \t\n\r\v\f"


def is_blank_line(text: str) -> bool:
    return not text.strip(_BLANK_CHARS)


def suppression_reason(
    line: int,
    cursor_line: int,
    *,
    is_blank: bool,
    viewport_width: int,
    line_text_width: int,
    other_overlay_width: int,
    options: RelVirtOptions,
) -> Optional[SuppressReason]:
    """First rule that hides ``line``'s annotation, or ``None`` to show it.

    The overflow rule uses ``>=``: an annotation needs at least one free
    column after the text, other overlays and the reserve.
    """

    distance = abs(line - cursor_line)
    if distance == 0 and not options.show_on_cursor_line:
        return SuppressReason.CURSOR_LINE
    if distance <= options.min_line_distance:
        return SuppressReason.NEAR_CURSOR
    if is_blank and not options.show_on_blank_lines:
        return SuppressReason.BLANK
    occupied = line_text_width + other_overlay_width + options.space_reserve
    if occupied >= viewport_width:
        return SuppressReason.OVERFLOW
    return None


def should_suppress(
    line: int,
    cursor_line: int,
    *,
    is_blank: bool,
    viewport_width: int,
    line_text_width: int,
    other_overlay_width: int,
    options: RelVirtOptions,
) -> bool:
    return (
        suppression_reason(
            line,
            cursor_line,
            is_blank=is_blank,
            viewport_width=viewport_width,
            line_text_width=line_text_width,
            other_overlay_width=other_overlay_width,
            options=options,
        )
        is not None
    )


__all__ = ["SuppressReason", "is_blank_line", "should_suppress", "suppression_reason"]
