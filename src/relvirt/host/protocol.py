"""Boundary types describing what relvirt needs from a host editor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, NamedTuple, Optional, Protocol, Sequence, Tuple

BUF_WIN_ENTER = "BufWinEnter"
CURSOR_MOVED = "CursorMoved"
WIN_SCROLLED = "WinScrolled"

VIEWPORT_EVENTS: Tuple[str, ...] = (BUF_WIN_ENTER, CURSOR_MOVED, WIN_SCROLLED)


class VirtChunk(NamedTuple):
    """One ``(text, style)`` piece of overlay text."""

    text: str
    style: str


@dataclass(frozen=True, slots=True)
class Extmark:
    """Overlay attached to a buffer line, owned by ``namespace``."""

    namespace: str
    mark_id: int
    line: int
    chunks: Tuple[VirtChunk, ...]


@dataclass(frozen=True, slots=True)
class ViewportEvent:
    """Notification payload delivered to viewport-change handlers."""

    name: str
    buffer: int
    window: int


ViewportHandler = Callable[[ViewportEvent], object]


class HostLookupError(LookupError):
    """Raised when a window or buffer handle no longer exists."""

    def __init__(self, kind: str, handle: int) -> None:
        super().__init__(f"Unknown {kind} handle {handle}")
        self.kind = kind
        self.handle = handle


class OverlayPrimitive(Protocol):
    """Per-line overlay storage addressed by namespace + stable id."""

    def set_extmark(
        self,
        buffer: int,
        namespace: str,
        line: int,
        mark_id: int,
        chunks: Sequence[VirtChunk],
    ) -> None:
        ...

    def clear_namespace(
        self, buffer: int, namespace: str, start: int, end: int
    ) -> None:
        """Drop marks of ``namespace`` on lines ``[start, end)``; ``end=-1`` means EOF."""
        ...

    def get_extmarks(
        self, buffer: int, start: int, end: int, namespace: Optional[str] = None
    ) -> Sequence[Extmark]:
        """Marks on lines ``[start, end)``, from every namespace when ``None``."""
        ...


class EditorHost(OverlayPrimitive, Protocol):
    """Everything the engine and the binding layer read from the editor."""

    def line_count(self, buffer: int) -> int:
        ...

    def get_line(self, buffer: int, index: int) -> Optional[str]:
        ...

    def filetype(self, buffer: int) -> str:
        ...

    def tabstop(self, buffer: int) -> int:
        ...

    def current_window(self) -> int:
        ...

    def buffer_for_window(self, window: int) -> int:
        ...

    def visible_range(self, window: int) -> Tuple[int, int]:
        ...

    def window_width(self, window: int) -> int:
        ...

    def cursor_line(self, window: int) -> int:
        ...

    def subscribe(
        self, events: Iterable[str], handler: ViewportHandler, *, group: str
    ) -> None:
        ...

    def clear_group(self, group: str) -> None:
        ...

    def emit(self, event: str, buffer: int, window: int) -> None:
        ...

    def register_command(self, name: str, handler: Callable[[], object]) -> None:
        ...


__all__ = [
    "BUF_WIN_ENTER",
    "CURSOR_MOVED",
    "WIN_SCROLLED",
    "VIEWPORT_EVENTS",
    "EditorHost",
    "Extmark",
    "HostLookupError",
    "OverlayPrimitive",
    "ViewportEvent",
    "ViewportHandler",
    "VirtChunk",
]
