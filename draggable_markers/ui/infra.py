"""Infrastructure utilities for Streamlit UI operations.

Abstracts Streamlit-specific infrastructure (st.rerun, component reset) to
enable mockability in tests.

Pattern: UI code imports from this module. Tests patch these functions instead
of every place where st.rerun might be called directly.
"""

import logging

import streamlit as st

logger = logging.getLogger(__name__)

COMPONENT_KEY = "component"


def trigger_rerun(scope: str = "app") -> None:
    """Trigger Streamlit rerun with optional scope.

    This is a mockable wrapper around st.rerun() for testability.
    In tests, patch 'draggable_markers.ui.infra.trigger_rerun' to prevent
    actual reruns (which raise StopExecution).

    Args:
        scope: Rerun scope - "app" for full rerun, "fragment" for partial.
    """
    st.rerun(scope=scope)


def reset_component() -> None:
    """Close the session's component, drop its host state and rerun.

    The next run creates a fresh component with binding defaults.
    """
    component = st.session_state.get(COMPONENT_KEY)
    if component is not None:
        component.close()
        component.store.clear()
        del st.session_state[COMPONENT_KEY]
        logger.info("[UI] Component reset to defaults")
    trigger_rerun()
