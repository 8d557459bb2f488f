"""HostStateStore - In-process stand-in for the host's data-binding layer.

Holds one value per declared binding and notifies subscribers on change.
Every notification carries a ChangeOrigin so a handler can ignore changes it
caused itself (camera write-back must not re-center the camera).

Change detection:
- Lists and mappings compare by identity: a new list is a change even when
  equal, the same list object is never a change.
- Scalars compare by equality.

Notification is reentrant: a subscriber may set the same binding again. The
nested set notifies every subscriber with the newer value, and the outer
dispatch stops, so no subscriber sees a stale value last.
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from enum import Enum
from typing import Any

from draggable_markers.state.bindings import BINDINGS, BINDINGS_BY_NAME

logger = logging.getLogger(__name__)


class ChangeOrigin(Enum):
    """Who caused a binding change."""

    HOST = "host"  # Host/user edited the value
    COMPONENT = "component"  # Written back by the map component


ChangeCallback = Callable[[Any, ChangeOrigin], None]


def _is_change(old: Any, new: Any) -> bool:
    if isinstance(new, (list, dict)) or isinstance(old, (list, dict)):
        return new is not old
    return bool(new != old)


class HostStateStore:
    """Named binding values with change subscriptions.

    Example:
        store = HostStateStore()
        store.subscribe("points", lambda value, origin: print(value))
        store.set("points", [{"longitude": "1", "latitude": "2"}])
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        """Initialize with binding defaults, overridden by initial.

        Args:
            initial: Host-replayed values by binding name

        Raises:
            KeyError: If initial names an undeclared binding
        """
        self._values: dict[str, Any] = {}
        self._subscribers: dict[str, list[ChangeCallback]] = defaultdict(list)
        for name, value in (initial or {}).items():
            self._require(name)
            self._seed(name, value)
        for spec in BINDINGS:
            self._seed(spec.name, spec.initial_value())

    def _require(self, name: str) -> None:
        if name not in BINDINGS_BY_NAME:
            raise KeyError(f"Unknown binding '{name}'")

    def _seed(self, name: str, value: Any) -> None:
        # First value wins: host-replayed values before binding defaults
        if not self._has(name):
            self._write(name, value)

    def _has(self, name: str) -> bool:
        return name in self._values

    def _read(self, name: str) -> Any:
        return self._values[name]

    def _write(self, name: str, value: Any) -> None:
        self._values[name] = value

    def get(self, name: str) -> Any:
        """Current value of a binding."""
        self._require(name)
        return self._read(name)

    def set(self, name: str, value: Any, origin: ChangeOrigin = ChangeOrigin.HOST) -> bool:
        """Set a binding and notify subscribers if the value changed.

        Returns:
            True if the value changed and subscribers were notified.
        """
        self._require(name)
        old = self._read(name)
        if not _is_change(old, value):
            return False
        self._write(name, value)
        logger.debug(f"[STORE] {name} changed ({origin.value})")
        for callback in list(self._subscribers[name]):
            if self._read(name) is not value:
                # A nested set replaced the value and already notified everyone
                logger.debug(f"[STORE] {name} superseded during notification, stopping dispatch")
                break
            callback(value, origin)
        return True

    def subscribe(self, name: str, callback: ChangeCallback) -> Callable[[], None]:
        """Register a change callback.

        Returns:
            Function that removes the subscription.
        """
        self._require(name)
        self._subscribers[name].append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers[name]:
                self._subscribers[name].remove(callback)

        return unsubscribe

    def snapshot(self) -> dict[str, Any]:
        """All current values by binding name."""
        return {spec.name: self._read(spec.name) for spec in BINDINGS}
