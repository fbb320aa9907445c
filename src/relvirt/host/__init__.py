"""Host editor boundary: protocols, event bus and the in-memory host."""

from .bus import EventBus
from .memory import HostBuffer, HostWindow, MemoryHost
from .protocol import (
    BUF_WIN_ENTER,
    CURSOR_MOVED,
    VIEWPORT_EVENTS,
    WIN_SCROLLED,
    EditorHost,
    Extmark,
    HostLookupError,
    OverlayPrimitive,
    ViewportEvent,
    VirtChunk,
)

__all__ = [
    "BUF_WIN_ENTER",
    "CURSOR_MOVED",
    "WIN_SCROLLED",
    "VIEWPORT_EVENTS",
    "EditorHost",
    "EventBus",
    "Extmark",
    "HostBuffer",
    "HostLookupError",
    "HostWindow",
    "MemoryHost",
    "OverlayPrimitive",
    "ViewportEvent",
    "VirtChunk",
]
