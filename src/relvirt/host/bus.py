"""Synchronous event bus with named subscription groups."""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from .protocol import ViewportEvent, ViewportHandler


class EventBus:
    """Delivers viewport events to handlers, in subscription order.

    Subscriptions belong to a group so a plugin can re-run its setup and
    replace its handlers instead of stacking duplicates.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Tuple[str, ViewportHandler]]] = {}

    def subscribe(
        self, events: Iterable[str], handler: ViewportHandler, *, group: str
    ) -> None:
        for event in events:
            self._subscribers.setdefault(event, []).append((group, handler))

    def clear_group(self, group: str) -> None:
        for event, entries in list(self._subscribers.items()):
            kept = [entry for entry in entries if entry[0] != group]
            if kept:
                self._subscribers[event] = kept
            else:
                del self._subscribers[event]

    def subscriber_count(self, event: str) -> int:
        return len(self._subscribers.get(event, ()))

    def emit(self, event: str, buffer: int, window: int) -> None:
        payload = ViewportEvent(name=event, buffer=buffer, window=window)
        for _group, handler in list(self._subscribers.get(event, ())):
            handler(payload)


__all__ = ["EventBus"]
