"""Synchronous event bus shared by the buffer, engine and host adapters."""

from __future__ import annotations

from typing import Callable, Dict, List

EventCallback = Callable[[object], None]


class EventBus:
    """Minimal publish/subscribe hub; callbacks run on the caller's thread."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[EventCallback]] = {}

    def subscribe(self, event: str, callback: EventCallback) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: EventCallback) -> None:
        callbacks = self._subscribers.get(event)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, ())):
            callback(payload)


__all__ = ["EventBus", "EventCallback"]
