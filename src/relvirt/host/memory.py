"""In-memory editor host: buffers, windows, extmarks, events and commands.

Used by the test-suite and the Textual demo. It behaves like a small
subset of a terminal editor: every buffer holds at least one line, windows
scroll to keep the cursor visible, and extmarks are stored per namespace
keyed by their id so setting an existing id moves/replaces it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .bus import EventBus
from .protocol import (
    BUF_WIN_ENTER,
    CURSOR_MOVED,
    WIN_SCROLLED,
    Extmark,
    HostLookupError,
    ViewportHandler,
    VirtChunk,
)


@dataclass(slots=True)
class HostBuffer:
    handle: int
    lines: List[str] = field(default_factory=lambda: [""])
    filetype: str = ""
    tabstop: int = 8


@dataclass(slots=True)
class HostWindow:
    handle: int
    buffer: int
    width: int = 80
    height: int = 24
    top_line: int = 0
    cursor_line: int = 0


class MemoryHost:
    """Reference ``EditorHost`` implementation kept entirely in memory."""

    def __init__(self) -> None:
        self.bus = EventBus()
        self.commands: Dict[str, Callable[[], object]] = {}
        self._buffers: Dict[int, HostBuffer] = {}
        self._windows: Dict[int, HostWindow] = {}
        self._extmarks: Dict[int, Dict[str, Dict[int, Extmark]]] = {}
        self._current: Optional[int] = None
        self._buffer_ids = count(1)
        self._window_ids = count(1000)

    # ------------------------------------------------------------------
    # Buffers
    # ------------------------------------------------------------------
    def create_buffer(
        self, lines: Iterable[str] = (), *, filetype: str = "", tabstop: int = 8
    ) -> int:
        handle = next(self._buffer_ids)
        self._buffers[handle] = HostBuffer(
            handle=handle,
            lines=list(lines) or [""],
            filetype=filetype,
            tabstop=tabstop,
        )
        self._extmarks[handle] = {}
        return handle

    def set_lines(self, buffer: int, lines: Iterable[str]) -> None:
        """Replace the buffer text; extmarks past the new end are dropped."""

        state = self._buffer(buffer)
        state.lines = list(lines) or [""]
        last = len(state.lines) - 1
        for marks in self._extmarks[buffer].values():
            for mark_id in [mid for mid, mark in marks.items() if mark.line > last]:
                del marks[mark_id]
        for window in self._windows.values():
            if window.buffer == buffer:
                window.cursor_line = min(window.cursor_line, last)
                window.top_line = min(window.top_line, window.cursor_line)

    def set_filetype(self, buffer: int, filetype: str) -> None:
        self._buffer(buffer).filetype = filetype

    def wipe_buffer(self, buffer: int) -> None:
        self._buffer(buffer)
        for handle in [h for h, w in self._windows.items() if w.buffer == buffer]:
            self.close_window(handle)
        del self._buffers[buffer]
        del self._extmarks[buffer]

    def line_count(self, buffer: int) -> int:
        return len(self._buffer(buffer).lines)

    def get_line(self, buffer: int, index: int) -> Optional[str]:
        lines = self._buffer(buffer).lines
        if 0 <= index < len(lines):
            return lines[index]
        return None

    def filetype(self, buffer: int) -> str:
        return self._buffer(buffer).filetype

    def tabstop(self, buffer: int) -> int:
        return self._buffer(buffer).tabstop

    # ------------------------------------------------------------------
    # Windows
    # ------------------------------------------------------------------
    def open_window(self, buffer: int, *, width: int = 80, height: int = 24) -> int:
        """Open a window on ``buffer``, make it current and fire BufWinEnter."""

        self._buffer(buffer)
        if width < 1 or height < 1:
            raise ValueError("Window dimensions must be positive")
        handle = next(self._window_ids)
        self._windows[handle] = HostWindow(
            handle=handle, buffer=buffer, width=width, height=height
        )
        self._current = handle
        self.emit(BUF_WIN_ENTER, buffer, handle)
        return handle

    def close_window(self, window: int) -> None:
        self._window(window)
        del self._windows[window]
        if self._current == window:
            self._current = next(iter(self._windows), None)

    def set_current_window(self, window: int) -> None:
        self._window(window)
        self._current = window

    def enter_buffer(self, window: int, buffer: int) -> None:
        """Show ``buffer`` in ``window`` from its first line."""

        state = self._window(window)
        self._buffer(buffer)
        state.buffer = buffer
        state.top_line = 0
        state.cursor_line = 0
        self.emit(BUF_WIN_ENTER, buffer, window)

    def current_window(self) -> int:
        if self._current is None:
            raise HostLookupError("window", 0)
        return self._current

    def buffer_for_window(self, window: int) -> int:
        return self._window(window).buffer

    def visible_range(self, window: int) -> Tuple[int, int]:
        """First and last *screen* rows; the last may lie past EOF."""

        state = self._window(window)
        return state.top_line, state.top_line + state.height - 1

    def window_width(self, window: int) -> int:
        return self._window(window).width

    def cursor_line(self, window: int) -> int:
        return self._window(window).cursor_line

    def set_cursor(self, window: int, line: int) -> None:
        """Move the cursor, scrolling just enough to keep it on screen."""

        state = self._window(window)
        last = self.line_count(state.buffer) - 1
        target = max(0, min(line, last))
        top = state.top_line
        if target < top:
            top = target
        elif target > top + state.height - 1:
            top = target - state.height + 1
        scrolled = top != state.top_line
        moved = target != state.cursor_line
        state.top_line = top
        state.cursor_line = target
        if scrolled:
            self.emit(WIN_SCROLLED, state.buffer, window)
        if moved:
            self.emit(CURSOR_MOVED, state.buffer, window)

    def scroll(self, window: int, delta: int) -> None:
        """Scroll the view by ``delta`` lines, dragging the cursor along."""

        state = self._window(window)
        last = self.line_count(state.buffer) - 1
        state.top_line = max(0, min(state.top_line + delta, last))
        bottom = state.top_line + state.height - 1
        cursor = max(state.top_line, min(state.cursor_line, bottom, last))
        moved = cursor != state.cursor_line
        state.cursor_line = cursor
        self.emit(WIN_SCROLLED, state.buffer, window)
        if moved:
            self.emit(CURSOR_MOVED, state.buffer, window)

    def resize(
        self, window: int, *, width: Optional[int] = None, height: Optional[int] = None
    ) -> None:
        state = self._window(window)
        if width is not None:
            state.width = max(1, width)
        if height is not None:
            state.height = max(1, height)
        self.emit(WIN_SCROLLED, state.buffer, window)

    # ------------------------------------------------------------------
    # Extmarks
    # ------------------------------------------------------------------
    def set_extmark(
        self,
        buffer: int,
        namespace: str,
        line: int,
        mark_id: int,
        chunks: Sequence[VirtChunk],
    ) -> None:
        if not 0 <= line < self.line_count(buffer):
            raise IndexError(f"Line {line} outside buffer {buffer}")
        marks = self._extmarks[buffer].setdefault(namespace, {})
        marks[mark_id] = Extmark(
            namespace=namespace,
            mark_id=mark_id,
            line=line,
            chunks=tuple(VirtChunk(*chunk) for chunk in chunks),
        )

    def clear_namespace(
        self, buffer: int, namespace: str, start: int, end: int
    ) -> None:
        self._buffer(buffer)
        marks = self._extmarks[buffer].get(namespace)
        if not marks:
            return
        stop = self._stop(buffer, end)
        for mark_id in [mid for mid, mark in marks.items() if start <= mark.line < stop]:
            del marks[mark_id]

    def get_extmarks(
        self, buffer: int, start: int, end: int, namespace: Optional[str] = None
    ) -> Sequence[Extmark]:
        self._buffer(buffer)
        stop = self._stop(buffer, end)
        found = [
            mark
            for ns, marks in self._extmarks[buffer].items()
            if namespace is None or ns == namespace
            for mark in marks.values()
            if start <= mark.line < stop
        ]
        found.sort(key=lambda mark: (mark.line, mark.namespace, mark.mark_id))
        return found

    # ------------------------------------------------------------------
    # Events and commands
    # ------------------------------------------------------------------
    def subscribe(
        self, events: Iterable[str], handler: ViewportHandler, *, group: str
    ) -> None:
        self.bus.subscribe(events, handler, group=group)

    def clear_group(self, group: str) -> None:
        self.bus.clear_group(group)

    def emit(self, event: str, buffer: int, window: int) -> None:
        self.bus.emit(event, buffer, window)

    def register_command(self, name: str, handler: Callable[[], object]) -> None:
        self.commands[name] = handler

    def run_command(self, name: str) -> object:
        try:
            handler = self.commands[name]
        except KeyError:
            raise KeyError(f"Unknown command '{name}'") from None
        return handler()

    # ------------------------------------------------------------------
    def _buffer(self, handle: int) -> HostBuffer:
        try:
            return self._buffers[handle]
        except KeyError:
            raise HostLookupError("buffer", handle) from None

    def _window(self, handle: int) -> HostWindow:
        try:
            return self._windows[handle]
        except KeyError:
            raise HostLookupError("window", handle) from None

    def _stop(self, buffer: int, end: int) -> int:
        return self.line_count(buffer) if end < 0 else end


__all__ = ["HostBuffer", "HostWindow", "MemoryHost"]
