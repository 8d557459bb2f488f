"""Streamlit host integration for draggable markers.

File Structure:
- session_store.py: SessionStateStore (host bindings kept in st.session_state)
- sidebar.py: SidebarRenderer (binding inspector + gesture controls)
- infra.py: Mockable st.rerun wrapper and component reset
"""

from draggable_markers.ui.infra import reset_component, trigger_rerun
from draggable_markers.ui.session_store import SessionStateStore
from draggable_markers.ui.sidebar import SidebarRenderer

__all__ = [
    "SessionStateStore",
    "SidebarRenderer",
    "reset_component",
    "trigger_rerun",
]
