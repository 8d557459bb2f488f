"""Message - User-facing messages for the draggable markers UI.

The core never raises user-visible errors. It logs, and the host UI decides
whether to show one of these messages.

Design Principles:
- Messages know their own display level (error/warning/info)
- Validators return Optional[Message]: None if fine, a Message otherwise
- Caller controls when/how to display the message
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from draggable_markers.constants import AppConfig

logger = logging.getLogger(__name__)


class MessageLevel(Enum):
    """Display level for UI messages."""

    INFO = "info"  # Blue - context/status
    WARNING = "warning"  # Yellow - missing configuration
    ERROR = "error"  # Red - user mistakes


@dataclass(frozen=True)
class Message(ABC):
    """Abstract base class for user-facing messages displayed inline.

    These messages are rendered as st.info/st.warning/st.error blocks that persist
    in the UI until replaced.
    """

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for display in Streamlit."""
        raise NotImplementedError

    @property
    @abstractmethod
    def level(self) -> MessageLevel:
        """Display level."""
        raise NotImplementedError

    def display(self) -> None:
        """Render this message using the appropriate Streamlit function."""
        import streamlit as st

        render_fn = {
            MessageLevel.INFO: st.info,
            MessageLevel.WARNING: st.warning,
            MessageLevel.ERROR: st.error,
        }[self.level]
        render_fn(self.message)


@dataclass(frozen=True)
class MissingAccessTokenMessage(Message):
    """No map is created until the host supplies a non-blank access token."""

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.WARNING

    @property
    def message(self) -> str:
        return (
            "No Mapbox Access Token provided. Please provide one in the component settings "
            f"or via the {AppConfig.TOKEN_ENV_VAR} environment variable. "
            "You can get one at https://account.mapbox.com/access-tokens/create."
        )


@dataclass(frozen=True)
class InvalidCoordinateMessage(Message):
    """Viewport holds a value that did not parse as a number."""

    field_name: str
    raw_value: str

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        return f"Invalid {self.field_name}: '{self.raw_value}' is not a number, the map position is undefined."


def validate_access_token(token: str | None) -> Message | None:
    """Validate the access credential.

    Returns:
        None if usable, MissingAccessTokenMessage if blank.
    """
    if token is None or token.strip() == "":
        return MissingAccessTokenMessage()
    return None


def validate_coordinate(field_name: str, raw_value: object, parsed: float) -> Message | None:
    """Validate a parsed viewport coordinate.

    Returns:
        None if numeric, InvalidCoordinateMessage if it parsed to NaN.
    """
    if math.isnan(parsed):
        return InvalidCoordinateMessage(field_name=field_name, raw_value=str(raw_value))
    return None
