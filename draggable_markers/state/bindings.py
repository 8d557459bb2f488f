"""Binding definitions - Named host values the component reads and writes.

Each binding is a named external value with an initial value and a setter the
core may invoke. The host owns the values and replays them into the component;
the component only ever reads them or submits full replacements.

| Name                                    | Direction | Kind   |
|-----------------------------------------|-----------|--------|
| accessToken                             | in        | string |
| longitude, latitude                     | in/out    | string |
| zoom                                    | in/out    | number |
| points                                  | in/out    | array  |
| latitudeFieldName, longitudeFieldName   | in        | string |
| geoJSON                                 | in        | object |
| mapStyle                                | in        | string |
| viewport                                | out       | object |
"""

import copy
from dataclasses import dataclass
from typing import Any

from draggable_markers.constants import Defaults, FieldConfig, MapConfig


class BindingName:
    """Binding names shared by the host and the core."""

    ACCESS_TOKEN = "accessToken"
    LONGITUDE = "longitude"
    LATITUDE = "latitude"
    ZOOM = "zoom"
    POINTS = "points"
    LATITUDE_FIELD_NAME = "latitudeFieldName"
    LONGITUDE_FIELD_NAME = "longitudeFieldName"
    GEOJSON = "geoJSON"
    MAP_STYLE = "mapStyle"
    VIEWPORT = "viewport"


class BindingKind:
    """Value shapes a binding can hold."""

    STRING = "string"
    NUMBER = "number"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class BindingSpec:
    """Declaration of one host binding.

    Attributes:
        name: Binding name (see BindingName)
        kind: Value shape (see BindingKind)
        initial: Initial value when the host has none
        label: Short human label for inspectors
        description: Longer help text
        hidden: True for derived, read-only outputs not shown for editing
    """

    name: str
    kind: str
    initial: Any
    label: str
    description: str = ""
    hidden: bool = False

    def initial_value(self) -> Any:
        """Fresh copy of the initial value (mutable defaults are never shared)."""
        return copy.deepcopy(self.initial)


BINDINGS: tuple[BindingSpec, ...] = (
    BindingSpec(
        name=BindingName.ACCESS_TOKEN,
        kind=BindingKind.STRING,
        initial="",
        label="Access Token",
        description="Mapbox access token, e.g. `pk.eyJ1...`. Required before a map is created.",
    ),
    BindingSpec(
        name=BindingName.LONGITUDE,
        kind=BindingKind.STRING,
        initial=MapConfig.START_CENTER_LON,
        label="Longitude",
        description="Longitude of the map center, e.g. `-122.4376`.",
    ),
    BindingSpec(
        name=BindingName.LATITUDE,
        kind=BindingKind.STRING,
        initial=MapConfig.START_CENTER_LAT,
        label="Latitude",
        description="Latitude of the map center, e.g. `37.7577`.",
    ),
    BindingSpec(
        name=BindingName.POINTS,
        kind=BindingKind.ARRAY,
        initial=Defaults.POINTS,
        label="Points",
        description=(
            "Points to render. Each must have the keys named by the longitude "
            "and latitude field names."
        ),
    ),
    BindingSpec(
        name=BindingName.LATITUDE_FIELD_NAME,
        kind=BindingKind.STRING,
        initial=FieldConfig.LATITUDE,
        label="Latitude field name",
        description="The name of the field containing latitude data.",
    ),
    BindingSpec(
        name=BindingName.LONGITUDE_FIELD_NAME,
        kind=BindingKind.STRING,
        initial=FieldConfig.LONGITUDE,
        label="Longitude field name",
        description="The name of the field containing longitude data.",
    ),
    BindingSpec(
        name=BindingName.GEOJSON,
        kind=BindingKind.OBJECT,
        initial=Defaults.GEOJSON,
        label="GeoJSON",
        description="GeoJSON feature collection rendered as a fill layer (polygons, linestrings).",
    ),
    BindingSpec(
        name=BindingName.ZOOM,
        kind=BindingKind.NUMBER,
        initial=MapConfig.DEFAULT_ZOOM,
        label="Zoom",
        description="Zoom level of the map, e.g. `9`.",
    ),
    BindingSpec(
        name=BindingName.MAP_STYLE,
        kind=BindingKind.STRING,
        initial=MapConfig.DEFAULT_STYLE,
        label="Style",
    ),
    BindingSpec(
        name=BindingName.VIEWPORT,
        kind=BindingKind.OBJECT,
        initial=None,
        label="Viewport",
        description="Current viewport: longitude, latitude and zoom of the map.",
        hidden=True,
    ),
)

BINDINGS_BY_NAME: dict[str, BindingSpec] = {spec.name: spec for spec in BINDINGS}
