"""Overlay slots and display-width estimation."""

from .store import DEFAULT_NAMESPACE, Annotation, OverlayStore
from .width import annotation_width, char_width, display_width

__all__ = [
    "Annotation",
    "DEFAULT_NAMESPACE",
    "OverlayStore",
    "annotation_width",
    "char_width",
    "display_width",
]
