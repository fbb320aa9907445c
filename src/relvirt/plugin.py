"""Event binding: wires host notifications and the toggle command to renders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from relvirt.engine.render import RenderEngine, RenderReport
from relvirt.host.protocol import (
    CURSOR_MOVED,
    VIEWPORT_EVENTS,
    EditorHost,
    HostLookupError,
    ViewportEvent,
)
from relvirt.options import RelVirtOptions, merge_options
from relvirt.overlay.store import DEFAULT_NAMESPACE, OverlayStore
from relvirt.runtime import telemetry

AUGROUP = "RelVirt"
TOGGLE_COMMAND = "RelvirtToggle"
LOGGER_NAME = "relvirt.plugin"
SESSION_ATTR = "_relvirt_session"


@dataclass(slots=True)
class EnableFlag:
    """Session-wide on/off switch shared by every window."""

    enabled: bool = True

    def toggle(self) -> bool:
        self.enabled = not self.enabled
        return self.enabled


class RelVirt:
    """Relative numbers as end-of-line overlays for one host session."""

    def __init__(
        self,
        host: EditorHost,
        *,
        options: Optional[RelVirtOptions] = None,
        flag: Optional[EnableFlag] = None,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> None:
        self.host = host
        self.flag = flag or EnableFlag()
        self.store = OverlayStore(host, namespace=namespace)
        self.engine = RenderEngine(host, self.store, options or RelVirtOptions())

    @property
    def options(self) -> RelVirtOptions:
        return self.engine.options

    def setup(self, opts: Optional[Mapping[str, Any]] = None) -> RelVirtOptions:
        """Merge ``opts`` over the current options and (re)bind host hooks."""

        self.engine.options = merge_options(self.engine.options, opts)
        self.host.register_command(TOGGLE_COMMAND, self.toggle)
        self.host.clear_group(AUGROUP)
        self.host.subscribe(VIEWPORT_EVENTS, self.on_viewport_change, group=AUGROUP)
        telemetry.record_event(
            "relvirt.setup",
            data={
                "options": sorted(opts or ()),
                "ignored_filetypes": self.options.ignored_filetypes,
            },
            logger_name=LOGGER_NAME,
        )
        return self.options

    def is_ignored(self, buffer: int) -> bool:
        return self.options.is_ignored_filetype(self.host.filetype(buffer))

    def on_viewport_change(self, event: ViewportEvent) -> Optional[RenderReport]:
        try:
            if self.is_ignored(event.buffer):
                return None
        except HostLookupError:
            return None
        if not self.flag.enabled:
            return None
        return self.engine.render(event.buffer, event.window)

    def refresh(self, window: Optional[int] = None) -> None:
        """Simulate a cursor move so the window redraws through the handlers."""

        window = self.host.current_window() if window is None else window
        self.host.emit(CURSOR_MOVED, self.host.buffer_for_window(window), window)

    def toggle(self) -> bool:
        enabled = self.flag.toggle()
        telemetry.record_event(
            "relvirt.toggle", data={"enabled": enabled}, logger_name=LOGGER_NAME
        )
        try:
            window = self.host.current_window()
            buffer = self.host.buffer_for_window(window)
        except HostLookupError:
            return enabled

        if enabled:
            self.refresh(window)
        elif not self.is_ignored(buffer):
            self.store.clear_all(buffer)
        return enabled


def setup(
    host: EditorHost,
    opts: Optional[Mapping[str, Any]] = None,
    *,
    flag: Optional[EnableFlag] = None,
) -> RelVirt:
    """Apply ``opts`` to the session of ``host`` and bind its hooks.

    The first call creates the session; later calls merge onto its current
    options and keep its enable flag unless another ``flag`` is passed.
    """

    plugin: Optional[RelVirt] = getattr(host, SESSION_ATTR, None)
    if plugin is None:
        plugin = RelVirt(host, flag=flag)
        setattr(host, SESSION_ATTR, plugin)
    elif flag is not None:
        plugin.flag = flag
    plugin.setup(opts)
    return plugin


__all__ = ["AUGROUP", "EnableFlag", "RelVirt", "TOGGLE_COMMAND", "setup"]
