"""Textual demo host for relvirt."""

from .controller import TextualOverlayHooks, TextualRelVirtAdapter, ViewRow, layout_row

__all__ = ["TextualOverlayHooks", "TextualRelVirtAdapter", "ViewRow", "layout_row"]
