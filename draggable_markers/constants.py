"""Configuration constants for Draggable Markers.

All configurable parameters are centralized here for easy tuning.

Classes:
    AppConfig: Streamlit demo application settings
    MapConfig: Default map view parameters
    FieldConfig: Default point record field names
    MarkerConfig: Draggable marker styling and write-back behavior
    GeoJSONConfig: Geometry source/layer ids and fill paint
    EventNames: Notification events emitted to the host
    MapEvents: Render engine lifecycle event names
    Defaults: Initial binding values (points, GeoJSON)
"""


class AppConfig:
    """UI application settings."""

    TITLE = "Draggable Markers"
    ICON = "📍"
    LAYOUT = "wide"

    # Environment variable the demo app reads the initial access token from
    TOKEN_ENV_VAR = "MAPBOX_ACCESS_TOKEN"

    # Session state key prefix for host-owned binding values
    SESSION_PREFIX = "dm_"


class MapConfig:
    """Default map view parameters."""

    # Initial center: San Francisco
    START_CENTER_LON = "-122.4376"  # Numeric string, as held by the host
    START_CENTER_LAT = "37.7577"
    DEFAULT_ZOOM = 9

    DEFAULT_STYLE = "mapbox://styles/mapbox/light-v11"

    # Longitude/latitude are written back as fixed-precision strings
    COORDINATE_DECIMALS = 6

    # Below this difference (degrees) a requested center equals the live camera
    CENTER_EPSILON = 1e-6

    ATTRIBUTION_CONTROL = False

    HEIGHT_PX = 600


class FieldConfig:
    """Default field names inside each point record."""

    LONGITUDE = "longitude"
    LATITUDE = "latitude"


class MarkerConfig:
    """Draggable marker styling and drag write-back behavior."""

    # Each marker element carries "marker-<index>" as its tag
    TAG_PREFIX = "marker-"

    ICON_URL = "https://cyboticx.retool.com/api/file/f86d27e9-4312-4c1f-8539-713bcf0097be"
    WIDTH_PX = 24
    HEIGHT_PX = 48

    # False: a dragged record keeps only the longitude/latitude fields
    PRESERVE_EXTRA_FIELDS = False

    LAYER_ID = "draggable-markers"


class GeoJSONConfig:
    """Geometry source/layer ids and paint style."""

    SOURCE_ID = "geojson-polygon"
    LAYER_ID = "geojson-polygon-layer"
    LAYER_TYPE = "fill"

    FILL_COLOR = "#0080ff"  # Blue fill
    FILL_OPACITY = 0.5

    PAINT = {
        "fill-color": FILL_COLOR,
        "fill-opacity": FILL_OPACITY,
    }


class EventNames:
    """Notification events emitted to the host (no payload)."""

    DRAG_END = "on-drag-end"
    VIEWPORT_CHANGED = "on-viewport-changed"
    ROTATE_END = "on-rotate-end"

    ALL = [DRAG_END, VIEWPORT_CHANGED, ROTATE_END]


class MapEvents:
    """Render engine lifecycle events consumed by the core."""

    LOAD = "load"
    MOVE_END = "moveend"
    ROTATE_END = "rotateend"
    RENDER = "render"
    DRAG_END = "dragend"


class Defaults:
    """Initial values for the array/object bindings."""

    POINTS = [
        {"longitude": "-122.4194", "latitude": "37.7949"},
        {"longitude": "-122.4794", "latitude": "37.7749"},
        {"longitude": "-122.4194", "latitude": "37.7049"},
    ]

    GEOJSON = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [
                        [
                            ["-122.454", "37.766"],
                            ["-122.51", "37.764"],
                            ["-122.51", "37.772"],
                            ["-122.455", "37.773"],
                        ]
                    ],
                },
            }
        ],
    }
