"""Executable Textual app that shows a file with relvirt annotations."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use relvirt.adapters.textual.app"
    ) from exc

from relvirt.host.memory import MemoryHost
from relvirt.plugin import RelVirt, setup

from .controller import TextualOverlayHooks, TextualRelVirtAdapter, ViewRow, layout_row

STYLE_MAP = {"LineNr": "dim", "CursorLineNr": "bold yellow"}


class RelVirtDemoApp(App[None]):
    """Read-only file viewer with relative numbers at the end of lines."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		padding: 0 1;
		overflow: hidden;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        lines: Sequence[str],
        *,
        filetype: str = "",
        options: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__()
        self._lines = list(lines)
        self._filetype = filetype
        self._options = options or {}
        self.host: MemoryHost | None = None
        self.plugin: RelVirt | None = None
        self.adapter: TextualRelVirtAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._rows: List[ViewRow] = []

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        self._buffer_widget = Static("", id="buffer-view")
        yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        self.host = MemoryHost()
        self.plugin = setup(self.host, self._options)
        buffer = self.host.create_buffer(self._lines, filetype=self._filetype)
        width, height = self._view_size()
        window = self.host.open_window(buffer, width=width, height=height)
        hooks = TextualOverlayHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            log=self.log.debug,
        )
        self.adapter = TextualRelVirtAdapter(self.host, self.plugin, window, hooks)

    def on_resize(self, event: events.Resize) -> None:
        del event
        if self.adapter:
            width, height = self._view_size()
            self.adapter.resize(width, height)

    def on_key(self, event: events.Key) -> None:
        if self.adapter and self.adapter.handle_textual_key(event.key):
            event.stop()

    def _view_size(self) -> tuple[int, int]:
        if self._buffer_widget is None:
            return 80, 24
        size = self._buffer_widget.content_size
        return max(1, size.width), max(1, size.height)

    def _update_view(self, rows: List[ViewRow]) -> None:
        self._rows = rows
        if self._buffer_widget is None or self.host is None or self.adapter is None:
            return
        width = self.host.window_width(self.adapter.window)
        rendered = Text()
        for index, row in enumerate(rows):
            if index:
                rendered.append("\n")
            line = layout_row(row, width)
            text_part = row.text.expandtabs(8)
            rendered.append(text_part, style="reverse" if row.is_cursor else "")
            if line != text_part:
                rendered.append(" ")
                rendered.append(row.annotation, style=STYLE_MAP.get(row.style, ""))
        self._buffer_widget.update(rendered)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _env_int(key: str, fallback: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Show a file with relative line numbers at the end of lines."
    )
    parser.add_argument("path", type=Path, help="File to display")
    parser.add_argument(
        "--filetype",
        default=None,
        help="Filetype reported to relvirt (default: the file suffix)",
    )
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Filetype pattern to leave without numbers (repeatable)",
    )
    parser.add_argument(
        "--min-distance",
        type=int,
        default=_env_int("RELVIRT_DEMO_MIN_DISTANCE", 1),
        help="Hide numbers this close to the cursor (default: 1)",
    )
    parser.add_argument(
        "--space-reserve",
        type=int,
        default=_env_int("RELVIRT_DEMO_SPACE_RESERVE", 0),
        help="Columns to keep free at the end of each line (default: 0)",
    )
    parser.add_argument(
        "--show-blank", action="store_true", help="Number blank lines too"
    )
    parser.add_argument(
        "--hide-cursor-line",
        action="store_true",
        help="Never number the cursor line",
    )
    return parser.parse_args(argv)


def options_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        "ignored_filetypes": tuple(args.ignore),
        "min_line_distance": args.min_distance,
        "space_reserve": args.space_reserve,
        "show_on_blank_lines": args.show_blank,
        "show_on_cursor_line": not args.hide_cursor_line,
    }


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    text = args.path.read_text(encoding="utf-8", errors="replace")
    filetype = args.filetype if args.filetype is not None else args.path.suffix.lstrip(".")
    app = RelVirtDemoApp(
        text.splitlines(), filetype=filetype, options=options_from_args(args)
    )
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
