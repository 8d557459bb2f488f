"""Map lifecycle state machine.

Uses python-statemachine to make the two gates of the component explicit:
"a map exists" and "the map finished its initial load".

States (3 states):
    INERT: No map yet (no mount target or blank access token)
    CREATED: Map instance exists, initial load still pending
    LOADED: Initial "load" event fired; geometry updates are accepted

Transitions:
    INERT -> CREATED: create (map instance built, stored on the context)
    CREATED -> LOADED: finish_load
    CREATED/LOADED -> INERT: unmount (map reference dropped)

The map instance lives on MapContext (model pattern), so the camera, the
overlay reconciler and the geometry sync all reference the same single map
without owning it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from statemachine import State, StateMachine

if TYPE_CHECKING:
    from draggable_markers.engine.base import MapHandle

logger = logging.getLogger(__name__)


@dataclass
class MapContext:
    """Shared model for the lifecycle machine.

    Note: The 'state' field is managed by python-statemachine when this
    object is passed as the model.
    """

    state: str | None = None
    container: str | None = None
    map: MapHandle | None = None

    def __repr__(self) -> str:
        return f"MapContext(state={self.state}, container={self.container!r}, has_map={self.map is not None})"


class LifecycleLogListener:
    """Logs every lifecycle transition."""

    def after_transition(self, event: str, source: State, target: State) -> None:
        logger.info(f"[LIFECYCLE] {source.name} --({event})--> {target.name}")


class MapLifecycle(StateMachine):
    """Lifecycle of the single map instance owned by a component."""

    inert = State("Inert", initial=True)
    created = State("Created")
    loaded = State("Loaded")

    create = inert.to(created)
    finish_load = created.to(loaded)
    unmount = created.to(inert) | loaded.to(inert)

    def __init__(self, context: MapContext | None = None) -> None:
        """Initialize state machine with model pattern.

        Args:
            context: Shared context/model (creates new if None)
        """
        super().__init__(model=context or MapContext())
        self.add_listener(LifecycleLogListener())

    @property
    def context(self) -> MapContext:
        """Alias for model."""
        return self.model

    @property
    def map(self) -> MapHandle | None:
        return self.context.map

    # ==========================================================================
    # Actions
    # ==========================================================================

    def before_create(self, map_handle: MapHandle) -> None:
        self.context.map = map_handle

    def after_unmount(self) -> None:
        self.context.map = None

    # ==========================================================================
    # State Check Properties
    # ==========================================================================

    @property
    def is_inert(self) -> bool:
        return self.inert.is_active

    @property
    def is_created(self) -> bool:
        """True once a map exists (loaded or not)."""
        return self.created.is_active or self.loaded.is_active

    @property
    def is_loaded(self) -> bool:
        return self.loaded.is_active

    def __repr__(self) -> str:
        return f"MapLifecycle(state={self.current_state.name}, model={self.context!r})"
