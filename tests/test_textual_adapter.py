from __future__ import annotations

from typing import List

import relvirt
from relvirt.adapters.textual import (
    TextualOverlayHooks,
    TextualRelVirtAdapter,
    ViewRow,
    layout_row,
)
from relvirt.host import MemoryHost


def make_adapter(
    line_count: int = 10, *, height: int = 5, width: int = 40
) -> tuple[TextualRelVirtAdapter, List[List[ViewRow]], List[str]]:
    host = MemoryHost()
    plugin = relvirt.setup(host)
    buffer = host.create_buffer([f"line {i}" for i in range(line_count)])
    window = host.open_window(buffer, width=width, height=height)
    views: List[List[ViewRow]] = []
    statuses: List[str] = []
    hooks = TextualOverlayHooks(update_view=views.append, update_status=statuses.append)
    adapter = TextualRelVirtAdapter(host, plugin, window, hooks)
    return adapter, views, statuses


def annotations(rows: List[ViewRow]) -> dict[int, str]:
    return {row.line: row.annotation for row in rows if row.annotation}


def test_initial_view_shows_numbers() -> None:
    _adapter, views, statuses = make_adapter()

    assert [row.line for row in views[-1]] == [0, 1, 2, 3, 4]
    assert annotations(views[-1]) == {2: "2", 3: "3", 4: "4"}
    assert views[-1][0].is_cursor
    assert statuses[-1] == "relvirt on | line 1/10 | 3 numbers"


def test_cursor_keys_move_and_rerender() -> None:
    adapter, views, _statuses = make_adapter()

    assert adapter.handle_textual_key("j") is True
    assert annotations(views[-1]) == {3: "2", 4: "3"}

    adapter.handle_textual_key("k")
    assert annotations(views[-1]) == {2: "2", 3: "3", 4: "4"}


def test_jump_to_end_scrolls() -> None:
    adapter, views, _statuses = make_adapter()

    adapter.handle_textual_key("G")

    assert [row.line for row in views[-1]] == [5, 6, 7, 8, 9]
    assert annotations(views[-1]) == {5: "4", 6: "3", 7: "2"}


def test_half_page_scroll() -> None:
    adapter, views, _statuses = make_adapter()

    adapter.handle_textual_key("ctrl+d")

    assert views[-1][0].line == 2
    assert views[-1][0].is_cursor


def test_toggle_key_hides_numbers() -> None:
    adapter, views, statuses = make_adapter()

    adapter.handle_textual_key("t")

    assert annotations(views[-1]) == {}
    assert statuses[-1].startswith("relvirt off")

    adapter.handle_textual_key("t")
    assert annotations(views[-1]) == {2: "2", 3: "3", 4: "4"}


def test_unknown_key_is_not_consumed() -> None:
    adapter, views, _statuses = make_adapter()
    count = len(views)

    assert adapter.handle_textual_key("x") is False
    assert len(views) == count


def test_resize_rerenders_with_new_width() -> None:
    adapter, views, _statuses = make_adapter(width=40)

    adapter.resize(6, 5)

    assert annotations(views[-1]) == {}


def test_layout_row_pads_annotation() -> None:
    row = ViewRow(line=3, text="abc", annotation="2", style="LineNr")

    assert layout_row(row, 10) == "abc 2"
    assert layout_row(row, 4) == "abc"
    assert layout_row(ViewRow(line=0, text="\tx"), 20) == "        x"
