"""Display-width estimation for buffer lines and overlay text.

Widths are terminal columns, not code points: East Asian wide glyphs and
most emoji take two columns, combining marks take none.  Control
characters are shown by terminal editors in caret notation (``^A``) and so
take two columns; C1 controls are drawn in hex (``<80>``) and take four.  A
tab advances to the next multiple of ``tabstop``.
"""

from __future__ import annotations

import unicodedata
from typing import Iterable, Tuple

from wcwidth import wcswidth, wcwidth

CARET_WIDTH = 2
HEX_WIDTH = 4
DEFAULT_TABSTOP = 8


def char_width(char: str) -> int:
    """Columns occupied by a single character (tabs excluded)."""

    if unicodedata.category(char) == "Cc":
        return HEX_WIDTH if 0x80 <= ord(char) <= 0x9F else CARET_WIDTH
    if unicodedata.combining(char):
        return 0
    width = wcwidth(char)
    # -1 means "not printable"; anything left here renders as nothing.
    return width if width > 0 else 0


def display_width(text: str, *, tabstop: int = DEFAULT_TABSTOP) -> int:
    """Columns ``text`` occupies when drawn from column zero."""

    if tabstop < 1:
        raise ValueError("tabstop must be positive")
    if not text:
        return 0
    if "\t" not in text:
        width = wcswidth(text)
        if width >= 0:
            return width

    column = 0
    for char in text:
        if char == "\t":
            column += tabstop - (column % tabstop)
        else:
            column += char_width(char)
    return column


def annotation_width(chunks: Iterable[Tuple[str, str]]) -> int:
    """Summed width of every ``(text, style)`` chunk of an overlay."""

    return sum(display_width(text) for text, _style in chunks)


__all__ = [
    "CARET_WIDTH",
    "DEFAULT_TABSTOP",
    "HEX_WIDTH",
    "annotation_width",
    "char_width",
    "display_width",
]
