"""In-process publisher for window store changes (launch, move, phase, viewport)."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

EventHandler = Callable[[dict[str, Any]], None]

WILDCARD = "*"


class EventBus:
    """Dispatches events to subscribers by event name.

    Handlers registered under ``"*"`` receive every event; the event name is
    added to their payload under ``"event"``.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        """Register ``handler`` for ``event_name``, or for every event under ``"*"``."""
        self._handlers[event_name].append(handler)

    def unsubscribe(self, event_name: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_name, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event_name: str, payload: dict[str, Any]) -> None:
        """Emit an event to all subscribers."""
        for handler in list(self._handlers.get(event_name, [])):
            handler(payload)
        if event_name != WILDCARD:
            for handler in list(self._handlers.get(WILDCARD, [])):
                handler({**payload, "event": event_name})
