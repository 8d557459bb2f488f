"""SessionStateStore - Host state kept in Streamlit's session state.

The host owns persistence: binding values live in st.session_state under a
key prefix, so they survive reruns and can be inspected like any other
session value. Change notifications work exactly as in HostStateStore.
"""

from typing import Any

import streamlit as st

from draggable_markers.constants import AppConfig
from draggable_markers.state.store import HostStateStore


class SessionStateStore(HostStateStore):
    """HostStateStore whose values are stored in st.session_state.

    Values already present in the session (from a previous run) are kept;
    initial values and binding defaults only fill the gaps.
    """

    def __init__(
        self,
        initial: dict[str, Any] | None = None,
        prefix: str = AppConfig.SESSION_PREFIX,
    ) -> None:
        self.prefix = prefix
        super().__init__(initial=initial)

    def session_key(self, name: str) -> str:
        return f"{self.prefix}{name}"

    def _has(self, name: str) -> bool:
        return self.session_key(name) in st.session_state

    def _read(self, name: str) -> Any:
        return st.session_state[self.session_key(name)]

    def _write(self, name: str, value: Any) -> None:
        st.session_state[self.session_key(name)] = value

    def clear(self) -> None:
        """Drop all binding values from the session."""
        for name in self.snapshot():
            key = self.session_key(name)
            if key in st.session_state:
                del st.session_state[key]
