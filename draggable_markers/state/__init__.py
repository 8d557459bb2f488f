"""Host state boundary: bindings, change-notifying store, notification events."""

from draggable_markers.state.bindings import (
    BINDINGS,
    BINDINGS_BY_NAME,
    BindingKind,
    BindingName,
    BindingSpec,
)
from draggable_markers.state.events import EventEmitter
from draggable_markers.state.store import ChangeOrigin, HostStateStore

__all__ = [
    "BINDINGS",
    "BINDINGS_BY_NAME",
    "BindingKind",
    "BindingName",
    "BindingSpec",
    "ChangeOrigin",
    "EventEmitter",
    "HostStateStore",
]
