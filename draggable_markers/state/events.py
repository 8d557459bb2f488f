"""EventEmitter - Fire-and-forget notification events to the host."""

import logging
from collections import defaultdict
from collections.abc import Callable

from draggable_markers.constants import EventNames

logger = logging.getLogger(__name__)


class EventEmitter:
    """Emits named, payload-free notifications (drag end, viewport changed, rotate end).

    Emitted names are also recorded in order so hosts can render an event log.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Callable[[], None]]] = defaultdict(list)
        self.history: list[str] = []

    def on(self, name: str, handler: Callable[[], None]) -> None:
        """Register a handler for a notification event."""
        if name not in EventNames.ALL:
            raise KeyError(f"Unknown event '{name}'")
        self._handlers[name].append(handler)

    def emit(self, name: str) -> None:
        """Fire a notification event."""
        logger.info(f"[EVENT] {name}")
        self.history.append(name)
        for handler in list(self._handlers[name]):
            handler()

    def count(self, name: str) -> int:
        """How many times an event was emitted."""
        return self.history.count(name)
