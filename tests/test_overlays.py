"""Tests for OverlayReconciler - destroy-and-recreate markers and drag write-back.

Includes Hypothesis property tests: for any point list of length N, a clean
reconciliation leaves exactly N live markers with N distinct tags, and
reconciling again never accumulates markers.
"""

import math

import pytest
from hypothesis import given, settings, strategies as st

from draggable_markers.constants import Defaults, EventNames, MarkerConfig
from draggable_markers.core.component import DraggableMarkersMap
from draggable_markers.core.overlays import overlay_tag
from draggable_markers.engine.deck_map import DeckMap, DeckMapEngine
from draggable_markers.state.bindings import BindingName
from draggable_markers.state.events import EventEmitter
from draggable_markers.state.store import HostStateStore
from tests.conftest import CONTAINER, TOKEN


def _mounted(points: list[dict], **kwargs: object) -> DraggableMarkersMap:
    store = HostStateStore(initial={BindingName.ACCESS_TOKEN: TOKEN, BindingName.POINTS: points})
    component = DraggableMarkersMap(store=store, engine=DeckMapEngine(), **kwargs)
    component.mount(CONTAINER)
    return component


coordinates = st.tuples(
    st.floats(min_value=-180, max_value=180, allow_nan=False),
    st.floats(min_value=-90, max_value=90, allow_nan=False),
)


# =============================================================================
# RECONCILIATION
# =============================================================================


class TestReconciliation:
    """One marker per point, rebuilt from scratch on every list change."""

    def test_default_points_get_one_marker_each(self, component: DraggableMarkersMap, deck_map: DeckMap) -> None:
        """Three default points: three draggable markers at parsed positions."""
        assert [marker.lng_lat for marker in deck_map.markers] == [
            (-122.4194, 37.7949),
            (-122.4794, 37.7749),
            (-122.4194, 37.7049),
        ]
        assert all(marker.draggable for marker in deck_map.markers)
        assert [overlay.index for overlay in component.live_overlays] == [0, 1, 2]
        assert [marker.element_id for marker in deck_map.markers] == ["marker-0", "marker-1", "marker-2"]

    def test_new_list_retires_old_markers(self, component: DraggableMarkersMap, deck_map: DeckMap) -> None:
        """Every old marker is removed before the new set is built."""
        old_markers = deck_map.markers

        component.store.set(BindingName.POINTS, [{"longitude": "1.0", "latitude": "2.0"}])

        assert all(marker.is_removed for marker in old_markers)
        assert [marker.lng_lat for marker in deck_map.markers] == [(1.0, 2.0)]

    def test_equal_but_new_list_rebuilds(self, component: DraggableMarkersMap, deck_map: DeckMap) -> None:
        """List identity, not content, decides: an equal copy is a change."""
        old_markers = deck_map.markers

        component.store.set(BindingName.POINTS, [dict(point) for point in Defaults.POINTS])

        assert len(deck_map.markers) == 3
        assert all(marker.is_removed for marker in old_markers)

    def test_same_list_object_is_not_a_change(self, component: DraggableMarkersMap) -> None:
        """Re-submitting the same list object keeps the current overlays."""
        overlays = component.live_overlays
        component.store.set(BindingName.POINTS, component.store.get(BindingName.POINTS))
        assert component.live_overlays == overlays

    def test_empty_list_has_no_markers(self, component: DraggableMarkersMap, deck_map: DeckMap) -> None:
        component.store.set(BindingName.POINTS, [])
        assert deck_map.markers == []
        assert component.live_overlays == []

    def test_malformed_values_place_at_nan(self) -> None:
        """Non-numeric or missing fields are not validated; placement is NaN."""
        component = _mounted([{"longitude": "abc", "latitude": "37.0"}, {"latitude": "1.0"}])
        first, second = component.map.markers

        assert math.isnan(first.lng_lat[0]) and first.lng_lat[1] == 37.0
        assert math.isnan(second.lng_lat[0])

    @pytest.mark.parametrize("bad_entry", [None, "not-a-record", 42])
    def test_non_mapping_entry_places_at_nan(self, bad_entry: object) -> None:
        """A null or scalar entry gets a NaN marker; later lists leave exactly N markers."""
        component = _mounted([{"longitude": "1", "latitude": "2"}, bad_entry])
        deck_map = component.map

        first, second = deck_map.markers
        assert first.lng_lat == (1.0, 2.0)
        assert math.isnan(second.lng_lat[0]) and math.isnan(second.lng_lat[1])
        assert len(component.live_overlays) == 2

        component.store.set(BindingName.POINTS, [{"longitude": "5", "latitude": "6"}])

        assert [marker.lng_lat for marker in deck_map.markers] == [(5.0, 6.0)]
        assert first.is_removed and second.is_removed
        assert len(component.live_overlays) == 1

    def test_drag_of_non_mapping_entry_with_preserved_fields(self) -> None:
        """Nothing to carry over from a null entry: only the coordinates are written."""
        component = _mounted([None], preserve_extra_fields=True)
        component.map.drag_marker(overlay_tag(0), lon=3.0, lat=4.0)
        assert component.store.get(BindingName.POINTS) == [{"longitude": 3.0, "latitude": 4.0}]

    def test_field_names_select_record_keys(self) -> None:
        """Configured field names pick longitude/latitude out of each record."""
        store = HostStateStore(
            initial={
                BindingName.ACCESS_TOKEN: TOKEN,
                BindingName.LONGITUDE_FIELD_NAME: "lng",
                BindingName.LATITUDE_FIELD_NAME: "lat",
                BindingName.POINTS: [{"lng": "1.5", "lat": "2.5", "name": "A"}],
            }
        )
        component = DraggableMarkersMap(store=store, engine=DeckMapEngine())
        component.mount(CONTAINER)

        assert [marker.lng_lat for marker in component.map.markers] == [(1.5, 2.5)]

    def test_field_name_change_rebuilds(self, component: DraggableMarkersMap, deck_map: DeckMap) -> None:
        """Switching field names re-reads every record."""
        component.store.set(BindingName.POINTS, [{"longitude": "1", "latitude": "2", "x": "5", "y": "6"}])
        component.store.set(BindingName.LONGITUDE_FIELD_NAME, "x")
        component.store.set(BindingName.LATITUDE_FIELD_NAME, "y")

        assert [marker.lng_lat for marker in deck_map.markers] == [(5.0, 6.0)]

    def test_no_map_no_overlays(self, events: EventEmitter) -> None:
        """Without a map (blank token) reconciliation is a no-op."""
        component = DraggableMarkersMap(store=HostStateStore(), events=events, engine=DeckMapEngine())
        component.mount(CONTAINER)
        assert component.overlays.reconcile() == []

    @given(points=st.lists(coordinates, max_size=25))
    @settings(max_examples=40, deadline=None)
    def test_n_points_give_n_unique_markers(self, points: list[tuple[float, float]]) -> None:
        """Property: N records -> N live markers, each at its record, N distinct tags."""
        records = [{"longitude": str(lon), "latitude": str(lat)} for lon, lat in points]
        component = _mounted(records)

        markers = component.map.markers
        assert len(markers) == len(points)
        assert [marker.lng_lat for marker in markers] == points
        tags = [overlay.tag for overlay in component.live_overlays]
        assert len(set(tags)) == len(points)

    @given(points=st.lists(coordinates, max_size=15))
    @settings(max_examples=25, deadline=None)
    def test_reconciling_twice_does_not_accumulate(self, points: list[tuple[float, float]]) -> None:
        """Property: retirement always precedes creation."""
        records = [{"longitude": lon, "latitude": lat} for lon, lat in points]
        component = _mounted(records)

        component.overlays.reconcile()
        component.overlays.reconcile()

        assert len(component.map.markers) == len(points)


# =============================================================================
# DRAG WRITE-BACK
# =============================================================================


class TestDragWriteBack:
    """Dropping a marker replaces its record in a fresh copy of the list."""

    def test_single_point_drag_scenario(self, single_point_component: DraggableMarkersMap, events: EventEmitter) -> None:
        """Drag to (-122.40, 37.80): points hold the new coordinates, one drag-end event.

        Dragged coordinates are written back as numbers (the marker's final
        lng/lat), not as the numeric strings the initial records hold.
        """
        single_point_component.map.drag_marker("marker-0", lon=-122.40, lat=37.80)

        assert single_point_component.store.get(BindingName.POINTS) == [{"longitude": -122.40, "latitude": 37.80}]
        assert events.history == [EventNames.DRAG_END]

    def test_drag_rebuilds_markers_at_new_position(self, single_point_component: DraggableMarkersMap) -> None:
        """The written-back list is a list change, so markers are rebuilt from it."""
        deck_map = single_point_component.map
        dragged = deck_map.markers[0]

        deck_map.drag_marker("marker-0", lon=-122.40, lat=37.80)

        assert dragged.is_removed
        assert [marker.lng_lat for marker in deck_map.markers] == [(-122.40, 37.80)]

    def test_drag_is_copy_on_write(self, component: DraggableMarkersMap, deck_map: DeckMap) -> None:
        """The previous list is never mutated; untouched records are carried over."""
        before = component.store.get(BindingName.POINTS)
        snapshot = [dict(point) for point in before]

        deck_map.drag_marker("marker-1", lon=-122.0, lat=37.0)

        after = component.store.get(BindingName.POINTS)
        assert after is not before
        assert before == snapshot
        assert after[0] is before[0]
        assert after[2] is before[2]
        assert after[1] == {"longitude": -122.0, "latitude": 37.0}

    def test_extra_fields_dropped_by_default(self) -> None:
        """A dragged record keeps only the configured coordinate fields."""
        component = _mounted([{"longitude": "1", "latitude": "2", "name": "Depot"}])
        component.map.drag_marker(overlay_tag(0), lon=3.0, lat=4.0)
        assert component.store.get(BindingName.POINTS) == [{"longitude": 3.0, "latitude": 4.0}]

    def test_extra_fields_preserved_when_enabled(self) -> None:
        component = _mounted([{"longitude": "1", "latitude": "2", "name": "Depot"}], preserve_extra_fields=True)
        component.map.drag_marker(overlay_tag(0), lon=3.0, lat=4.0)
        assert component.store.get(BindingName.POINTS) == [{"longitude": 3.0, "latitude": 4.0, "name": "Depot"}]

    def test_custom_field_names_on_write_back(self) -> None:
        store = HostStateStore(
            initial={
                BindingName.ACCESS_TOKEN: TOKEN,
                BindingName.LONGITUDE_FIELD_NAME: "lng",
                BindingName.LATITUDE_FIELD_NAME: "lat",
                BindingName.POINTS: [{"lng": "1.5", "lat": "2.5"}],
            }
        )
        component = DraggableMarkersMap(store=store, engine=DeckMapEngine())
        component.mount(CONTAINER)

        component.map.drag_marker("marker-0", lon=7.0, lat=8.0)

        assert store.get(BindingName.POINTS) == [{"lng": 7.0, "lat": 8.0}]

    def test_retired_marker_cannot_write_back(self, component: DraggableMarkersMap, deck_map: DeckMap) -> None:
        """A marker from a stale list has no handlers left after teardown."""
        stale = deck_map.markers[0]
        component.store.set(BindingName.POINTS, [{"longitude": "1", "latitude": "2"}])
        current = component.store.get(BindingName.POINTS)

        stale.finish_drag((50.0, 50.0))

        assert component.store.get(BindingName.POINTS) is current
        assert component.events.count(EventNames.DRAG_END) == 0

    def test_tag_uses_configured_prefix(self) -> None:
        assert overlay_tag(7) == f"{MarkerConfig.TAG_PREFIX}7"

    @pytest.mark.parametrize("index", [0, 1, 2])
    def test_each_marker_writes_its_own_index(self, component: DraggableMarkersMap, deck_map: DeckMap, index: int) -> None:
        """Only the dragged marker's record changes."""
        before = component.store.get(BindingName.POINTS)

        deck_map.drag_marker(overlay_tag(index), lon=0.5, lat=0.25)

        after = component.store.get(BindingName.POINTS)
        for i, record in enumerate(after):
            if i == index:
                assert record == {"longitude": 0.5, "latitude": 0.25}
            else:
                assert record is before[i]
