"""Render relative-number annotations for one window's visible lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from relvirt.host.protocol import EditorHost, HostLookupError
from relvirt.overlay.store import OverlayStore
from relvirt.overlay.width import display_width
from relvirt.runtime import telemetry

from .formatter import normalize_format_result
from .policy import SuppressReason, is_blank_line, suppression_reason

if TYPE_CHECKING:
    from relvirt.options import RelVirtOptions

LOGGER_NAME = "relvirt.engine"


@dataclass(frozen=True, slots=True)
class Viewport:
    """Clamped snapshot of a window; rebuilt on every render."""

    window: int
    buffer: int
    first_line: int
    last_line: int
    width: int
    cursor_line: int

    @property
    def lines(self) -> range:
        return range(self.first_line, self.last_line + 1)


@dataclass(slots=True)
class RenderReport:
    viewport: Viewport
    annotated: List[int] = field(default_factory=list)
    suppressed: Dict[int, SuppressReason] = field(default_factory=dict)


def snapshot_viewport(host: EditorHost, buffer: int, window: int) -> Optional[Viewport]:
    """Read window geometry, clamped to the buffer; ``None`` if nothing shows."""

    line_count = host.line_count(buffer)
    if line_count <= 0:
        return None
    first, last = host.visible_range(window)
    first = max(0, first)
    last = min(line_count - 1, last)
    if last < first:
        return None
    return Viewport(
        window=window,
        buffer=buffer,
        first_line=first,
        last_line=last,
        width=host.window_width(window),
        cursor_line=host.cursor_line(window),
    )


class RenderEngine:
    """Clears and repopulates one namespace over a window's visible range."""

    def __init__(
        self, host: EditorHost, store: OverlayStore, options: "RelVirtOptions"
    ) -> None:
        self.host = host
        self.store = store
        self.options = options

    def render(self, buffer: int, window: int) -> Optional[RenderReport]:
        try:
            viewport = snapshot_viewport(self.host, buffer, window)
            tabstop = self.host.tabstop(buffer)
        except HostLookupError as exc:
            self._skipped(buffer, window, str(exc))
            return None
        if viewport is None:
            self._skipped(buffer, window, "empty")
            return None

        with telemetry.span(
            name=f"render::{buffer}",
            logger_name=LOGGER_NAME,
            component="render",
            metadata={
                "window": window,
                "range": f"{viewport.first_line}-{viewport.last_line}",
                "cursor": viewport.cursor_line,
            },
        ) as handle:
            report = self._render_viewport(viewport, tabstop)
            handle.add_metadata("annotated", len(report.annotated))
        return report

    def _render_viewport(self, viewport: Viewport, tabstop: int) -> RenderReport:
        buffer = viewport.buffer
        options = self.options
        report = RenderReport(viewport=viewport)
        # Lines that scrolled out of view must not keep stale numbers either.
        self.store.clear_range(buffer, viewport.first_line, viewport.last_line)
        self.store.clear_outside(buffer, viewport.first_line, viewport.last_line)

        for line in viewport.lines:
            text = self.host.get_line(buffer, line) or ""
            reason = suppression_reason(
                line,
                viewport.cursor_line,
                is_blank=is_blank_line(text),
                viewport_width=viewport.width,
                line_text_width=display_width(text, tabstop=tabstop),
                other_overlay_width=self.store.total_width_at(buffer, line),
                options=options,
            )
            if reason is not None:
                report.suppressed[line] = reason
                continue

            offset = line - viewport.cursor_line
            styled = normalize_format_result(options.format_number(offset), offset=offset)
            self.store.set_annotation(buffer, line, styled.text, styled.style)
            report.annotated.append(line)
        return report

    @staticmethod
    def _skipped(buffer: int, window: int, reason: str) -> None:
        telemetry.record_event(
            "render.skipped",
            level="debug",
            data={"buffer": buffer, "window": window, "reason": reason},
            logger_name=LOGGER_NAME,
        )


__all__ = ["RenderEngine", "RenderReport", "Viewport", "snapshot_viewport"]
