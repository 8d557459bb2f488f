"""Viewport - Read-only snapshot of the camera for host consumers."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Viewport:
    """Composite camera snapshot published to the host's viewport binding.

    Attributes:
        longitude: Camera center longitude in decimal degrees
        latitude: Camera center latitude in decimal degrees
        zoom: Camera zoom level

    Example:
        Viewport(longitude=-122.4376, latitude=37.7577, zoom=9).to_dict()
    """

    longitude: float
    latitude: float
    zoom: float

    @property
    def lon_lat(self) -> tuple[float, float]:
        """Return (lon, lat) tuple - GeoJSON/Pydeck order."""
        return (self.longitude, self.latitude)

    def to_dict(self) -> dict[str, float]:
        """Plain dict for the host state store."""
        return asdict(self)
