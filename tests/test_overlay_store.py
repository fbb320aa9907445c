from relvirt.host import MemoryHost, VirtChunk
from relvirt.overlay import Annotation, OverlayStore


def make_store(line_count: int = 6) -> tuple[MemoryHost, OverlayStore, int]:
    host = MemoryHost()
    buffer = host.create_buffer([f"line {i}" for i in range(line_count)])
    return host, OverlayStore(host), buffer


def test_set_annotation_replaces_in_place() -> None:
    host, store, buffer = make_store()

    store.set_annotation(buffer, 2, "3", "LineNr")
    store.set_annotation(buffer, 2, "4", "CursorLineNr")

    marks = host.get_extmarks(buffer, 0, -1, "rel_lines")
    assert len(marks) == 1
    assert marks[0].mark_id == 3
    assert store.annotations(buffer) == {2: Annotation(2, "4", "CursorLineNr")}


def test_clear_range_is_inclusive_and_idempotent() -> None:
    _host, store, buffer = make_store()
    for line in range(4):
        store.set_annotation(buffer, line, str(line), "LineNr")

    store.clear_range(buffer, 1, 2)
    store.clear_range(buffer, 1, 2)

    assert sorted(store.annotations(buffer)) == [0, 3]


def test_clear_range_with_empty_span_is_noop() -> None:
    _host, store, buffer = make_store()
    store.set_annotation(buffer, 1, "1", "LineNr")

    store.clear_range(buffer, 3, 2)

    assert sorted(store.annotations(buffer)) == [1]


def test_clear_outside_keeps_only_the_window() -> None:
    _host, store, buffer = make_store()
    for line in range(6):
        store.set_annotation(buffer, line, str(line), "LineNr")

    store.clear_outside(buffer, 2, 3)

    assert sorted(store.annotations(buffer)) == [2, 3]


def test_clear_all_leaves_other_namespaces() -> None:
    host, store, buffer = make_store()
    store.set_annotation(buffer, 0, "1", "LineNr")
    host.set_extmark(buffer, "diagnostics", 0, 1, [VirtChunk("E", "Error")])

    store.clear_all(buffer)

    assert store.annotations(buffer) == {}
    assert [mark.namespace for mark in host.get_extmarks(buffer, 0, -1)] == [
        "diagnostics"
    ]


def test_total_width_counts_every_namespace() -> None:
    host, store, buffer = make_store()
    host.set_extmark(
        buffer,
        "diagnostics",
        2,
        7,
        [VirtChunk("error", "Error"), VirtChunk(" 日", "Comment")],
    )
    store.set_annotation(buffer, 2, "12", "LineNr")

    assert store.total_width_at(buffer, 2) == 10
    assert store.total_width_at(buffer, 3) == 0


def test_custom_namespace_isolated_from_default() -> None:
    host, store, buffer = make_store()
    other = OverlayStore(host, namespace="rel_lines_alt")

    store.set_annotation(buffer, 1, "1", "LineNr")
    other.clear_all(buffer)

    assert sorted(store.annotations(buffer)) == [1]
    assert other.annotations(buffer) == {}
