from typing import List

import pytest

from relvirt.host import (
    BUF_WIN_ENTER,
    CURSOR_MOVED,
    WIN_SCROLLED,
    EventBus,
    HostLookupError,
    MemoryHost,
    ViewportEvent,
    VirtChunk,
)


def record_events(host: MemoryHost) -> List[ViewportEvent]:
    seen: List[ViewportEvent] = []
    host.subscribe(
        (BUF_WIN_ENTER, CURSOR_MOVED, WIN_SCROLLED), seen.append, group="test"
    )
    return seen


def make_window(line_count: int = 20, height: int = 5) -> tuple[MemoryHost, int, int]:
    host = MemoryHost()
    buffer = host.create_buffer([f"line {i}" for i in range(line_count)])
    window = host.open_window(buffer, height=height)
    return host, buffer, window


def test_empty_buffer_has_one_line() -> None:
    host = MemoryHost()
    buffer = host.create_buffer()

    assert host.line_count(buffer) == 1
    assert host.get_line(buffer, 0) == ""
    assert host.get_line(buffer, 1) is None


def test_open_window_fires_buf_win_enter() -> None:
    host = MemoryHost()
    seen = record_events(host)
    buffer = host.create_buffer(["x"])

    window = host.open_window(buffer)

    assert seen == [ViewportEvent(BUF_WIN_ENTER, buffer, window)]
    assert host.current_window() == window


def test_visible_range_may_extend_past_eof() -> None:
    host, _buffer, window = make_window(line_count=3, height=5)

    assert host.visible_range(window) == (0, 4)


def test_set_cursor_scrolls_to_keep_cursor_visible() -> None:
    host, buffer, window = make_window()
    seen = record_events(host)

    host.set_cursor(window, 8)

    assert host.visible_range(window) == (4, 8)
    assert [event.name for event in seen] == [WIN_SCROLLED, CURSOR_MOVED]
    assert all(event.buffer == buffer for event in seen)


def test_set_cursor_clamps_and_skips_noop_moves() -> None:
    host, _buffer, window = make_window(line_count=3)
    seen = record_events(host)

    host.set_cursor(window, 0)
    host.set_cursor(window, 99)

    assert host.cursor_line(window) == 2
    assert [event.name for event in seen] == [CURSOR_MOVED]


def test_scroll_drags_cursor_into_view() -> None:
    host, _buffer, window = make_window()
    seen = record_events(host)

    host.scroll(window, 6)

    assert host.visible_range(window) == (6, 10)
    assert host.cursor_line(window) == 6
    assert [event.name for event in seen] == [WIN_SCROLLED, CURSOR_MOVED]


def test_scroll_is_clamped_to_buffer() -> None:
    host, _buffer, window = make_window(line_count=4)

    host.scroll(window, -3)
    assert host.visible_range(window)[0] == 0

    host.scroll(window, 50)
    assert host.visible_range(window)[0] == 3


def test_resize_updates_width_and_fires_scroll() -> None:
    host, _buffer, window = make_window()
    seen = record_events(host)

    host.resize(window, width=40, height=3)

    assert host.window_width(window) == 40
    assert host.visible_range(window) == (0, 2)
    assert [event.name for event in seen] == [WIN_SCROLLED]


def test_extmarks_filtered_by_range_and_namespace() -> None:
    host, buffer, _window = make_window()
    host.set_extmark(buffer, "a", 1, 1, [VirtChunk("x", "S")])
    host.set_extmark(buffer, "b", 1, 1, [VirtChunk("y", "S")])
    host.set_extmark(buffer, "a", 5, 2, [VirtChunk("z", "S")])

    assert [m.namespace for m in host.get_extmarks(buffer, 1, 2)] == ["a", "b"]
    assert [m.line for m in host.get_extmarks(buffer, 0, -1, "a")] == [1, 5]

    host.clear_namespace(buffer, "a", 0, -1)
    assert [m.namespace for m in host.get_extmarks(buffer, 0, -1)] == ["b"]


def test_setting_existing_mark_id_moves_it() -> None:
    host, buffer, _window = make_window()
    host.set_extmark(buffer, "a", 1, 7, [VirtChunk("x", "S")])
    host.set_extmark(buffer, "a", 3, 7, [("y", "S")])

    marks = host.get_extmarks(buffer, 0, -1)
    assert [(m.line, m.chunks) for m in marks] == [(3, (VirtChunk("y", "S"),))]


def test_extmark_outside_buffer_rejected() -> None:
    host, buffer, _window = make_window(line_count=2)

    with pytest.raises(IndexError):
        host.set_extmark(buffer, "a", 2, 1, [VirtChunk("x", "S")])


def test_set_lines_drops_marks_past_end_and_clamps_cursor() -> None:
    host, buffer, window = make_window()
    host.set_cursor(window, 9)
    host.set_extmark(buffer, "a", 1, 1, [VirtChunk("x", "S")])
    host.set_extmark(buffer, "a", 8, 2, [VirtChunk("x", "S")])

    host.set_lines(buffer, ["one", "two", "three"])

    assert [m.line for m in host.get_extmarks(buffer, 0, -1)] == [1]
    assert host.cursor_line(window) == 2
    assert host.visible_range(window)[0] <= 2


def test_unknown_handles_raise_lookup_error() -> None:
    host, buffer, window = make_window()
    host.close_window(window)

    with pytest.raises(HostLookupError):
        host.window_width(window)
    with pytest.raises(HostLookupError):
        host.current_window()
    with pytest.raises(HostLookupError):
        host.line_count(buffer + 1)


def test_wipe_buffer_closes_its_windows() -> None:
    host, buffer, window = make_window()

    host.wipe_buffer(buffer)

    with pytest.raises(HostLookupError):
        host.cursor_line(window)
    with pytest.raises(HostLookupError):
        host.filetype(buffer)


def test_enter_buffer_resets_view() -> None:
    host, _buffer, window = make_window()
    host.set_cursor(window, 12)
    other = host.create_buffer(["x"], filetype="help")
    seen = record_events(host)

    host.enter_buffer(window, other)

    assert host.buffer_for_window(window) == other
    assert host.cursor_line(window) == 0
    assert seen == [ViewportEvent(BUF_WIN_ENTER, other, window)]


def test_run_command() -> None:
    host = MemoryHost()
    host.register_command("Hello", lambda: "hi")

    assert host.run_command("Hello") == "hi"
    with pytest.raises(KeyError):
        host.run_command("Missing")


def test_bus_clear_group_only_removes_that_group() -> None:
    bus = EventBus()
    calls: List[str] = []
    bus.subscribe(["Ev"], lambda event: calls.append("a"), group="a")
    bus.subscribe(["Ev"], lambda event: calls.append("b"), group="b")

    bus.clear_group("a")
    bus.emit("Ev", 1, 2)

    assert calls == ["b"]
    assert bus.subscriber_count("Ev") == 1
