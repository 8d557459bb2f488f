"""Data model classes for draggable markers.

- PointFields / PointRecord: Host point records keyed by configurable field names
- Viewport: Read-only camera snapshot published to the host
- Message: User-facing messages (missing token, invalid coordinates)
"""

from draggable_markers.model.message import (
    InvalidCoordinateMessage,
    Message,
    MessageLevel,
    MissingAccessTokenMessage,
    validate_access_token,
    validate_coordinate,
)
from draggable_markers.model.point import (
    PointFields,
    PointList,
    PointRecord,
    format_coordinate,
    parse_coordinate,
    replace_point,
)
from draggable_markers.model.viewport import Viewport

__all__ = [
    "PointFields",
    "PointList",
    "PointRecord",
    "Viewport",
    "Message",
    "MessageLevel",
    "MissingAccessTokenMessage",
    "InvalidCoordinateMessage",
    "format_coordinate",
    "parse_coordinate",
    "replace_point",
    "validate_access_token",
    "validate_coordinate",
]
