"""Textual-friendly controller driving a ``MemoryHost`` window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

from relvirt.host.memory import MemoryHost
from relvirt.overlay.width import display_width
from relvirt.plugin import TOGGLE_COMMAND, RelVirt


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(frozen=True, slots=True)
class ViewRow:
    line: int
    text: str
    annotation: str = ""
    style: str = ""
    is_cursor: bool = False


@dataclass(slots=True)
class TextualOverlayHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[List[ViewRow]], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualRelVirtAdapter:
    """Turns key names into host cursor/scroll changes and redraws rows."""

    def __init__(
        self,
        host: MemoryHost,
        plugin: RelVirt,
        window: int,
        hooks: TextualOverlayHooks,
    ) -> None:
        self.host = host
        self.plugin = plugin
        self.window = window
        self.hooks = hooks
        self._actions: Dict[str, Callable[[], None]] = {
            "j": lambda: self._move(1),
            "down": lambda: self._move(1),
            "k": lambda: self._move(-1),
            "up": lambda: self._move(-1),
            "ctrl+d": lambda: self._scroll(1),
            "ctrl+u": lambda: self._scroll(-1),
            "g": lambda: self.host.set_cursor(self.window, 0),
            "G": lambda: self.host.set_cursor(self.window, self._line_count() - 1),
            "t": lambda: self.host.run_command(TOGGLE_COMMAND),
        }
        self.refresh()

    def handle_textual_key(self, key: str) -> bool:
        action = self._actions.get(key)
        if action is None:
            return False
        self.hooks.log(f"key -> {key}")
        action()
        self.refresh()
        return True

    def resize(self, width: int, height: int) -> None:
        self.host.resize(self.window, width=width, height=height)
        self.refresh()

    def refresh(self) -> None:
        rows = self.compose_rows()
        self.hooks.update_view(rows)
        self.hooks.update_status(self._status(rows))

    def compose_rows(self) -> List[ViewRow]:
        buffer = self.host.buffer_for_window(self.window)
        first, last = self.host.visible_range(self.window)
        last = min(last, self._line_count() - 1)
        cursor = self.host.cursor_line(self.window)
        annotations = self.plugin.store.annotations(buffer)
        rows: List[ViewRow] = []
        for line in range(max(0, first), last + 1):
            annotation = annotations.get(line)
            rows.append(
                ViewRow(
                    line=line,
                    text=self.host.get_line(buffer, line) or "",
                    annotation=annotation.text if annotation else "",
                    style=annotation.style if annotation else "",
                    is_cursor=line == cursor,
                )
            )
        return rows

    def _move(self, delta: int) -> None:
        self.host.set_cursor(self.window, self.host.cursor_line(self.window) + delta)

    def _scroll(self, direction: int) -> None:
        first, last = self.host.visible_range(self.window)
        half = max(1, (last - first + 1) // 2)
        self.host.scroll(self.window, direction * half)

    def _line_count(self) -> int:
        return self.host.line_count(self.host.buffer_for_window(self.window))

    def _status(self, rows: Sequence[ViewRow]) -> str:
        state = "on" if self.plugin.flag.enabled else "off"
        cursor = self.host.cursor_line(self.window) + 1
        shown = sum(1 for row in rows if row.annotation)
        return f"relvirt {state} | line {cursor}/{self._line_count()} | {shown} numbers"


def layout_row(row: ViewRow, width: int, *, tabstop: int = 8) -> str:
    """Plain-text rendering of a row: text, one space, then the annotation."""

    text = row.text.expandtabs(tabstop)
    if not row.annotation:
        return text
    padded = f"{text} {row.annotation}"
    if display_width(padded, tabstop=tabstop) > width:
        return text
    return padded


__all__ = ["TextualOverlayHooks", "TextualRelVirtAdapter", "ViewRow", "layout_row"]
