"""Point records - Host-owned marker positions keyed by configurable field names.

A point record is a plain mapping. Which keys hold longitude and latitude is
configuration (PointFields), so records can carry arbitrary extra fields.
Identity is positional: the record's index in the host's point list.

The point list is treated as an immutable snapshot. Changes are always
submitted as a full replacement list (copy-on-write), never patched in place.
"""

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from draggable_markers.constants import FieldConfig

logger = logging.getLogger(__name__)

PointRecord = Mapping[str, Any]
PointList = Sequence[PointRecord]


def parse_coordinate(value: Any) -> float:
    """Parse a coordinate value the way a lenient host would.

    Numbers pass through, numeric strings are parsed. Anything else becomes NaN
    and is handed on unchanged - the render engine decides what NaN means.

    Example:
        parse_coordinate("-122.4194")  # -122.4194
        parse_coordinate("abc")        # nan
    """
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        logger.debug(f"[POINT] Unparsable coordinate {value!r} -> NaN")
        return math.nan


def format_coordinate(value: float, decimals: int) -> str:
    """Format a coordinate as a fixed-precision string (e.g. '-122.437600')."""
    return f"{value:.{decimals}f}"


@dataclass(frozen=True)
class PointFields:
    """Resolved field names for longitude/latitude inside point records.

    Attributes:
        longitude: Key holding the longitude value
        latitude: Key holding the latitude value
    """

    longitude: str = FieldConfig.LONGITUDE
    latitude: str = FieldConfig.LATITUDE

    def lon_lat(self, record: PointRecord) -> tuple[float, float]:
        """Return parsed (lon, lat) of a record. Missing or bad values become NaN.

        An entry that is not a mapping (e.g. null in the host list) has no
        fields and is placed at (NaN, NaN).
        """
        if not isinstance(record, Mapping):
            logger.debug(f"[POINT] Non-mapping point entry {record!r} -> NaN")
            return (math.nan, math.nan)
        return (
            parse_coordinate(record.get(self.longitude)),
            parse_coordinate(record.get(self.latitude)),
        )

    def make_record(
        self,
        lon: float,
        lat: float,
        base: PointRecord | None = None,
    ) -> dict[str, Any]:
        """Build a new record at (lon, lat).

        Args:
            lon: Longitude to store
            lat: Latitude to store
            base: Record whose extra fields are carried over. None drops them.
        """
        record: dict[str, Any] = dict(base) if base is not None else {}
        record[self.longitude] = lon
        record[self.latitude] = lat
        return record


def replace_point(
    points: PointList,
    index: int,
    record: PointRecord,
) -> list[PointRecord]:
    """Return a full copy of points with the entry at index replaced.

    The input list is never mutated.
    """
    new_points = list(points)
    new_points[index] = record
    return new_points
