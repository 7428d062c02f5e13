"""Unit tests for loading route trips."""

import pytest

from src.gtfs_bc.diagram.errors import NoShapesError, NoTripsError
from src.gtfs_bc.diagram.trip_loader import is_timepoint, load_trips
from src.gtfs_bc.feed.infrastructure.services.gtfs_store import GTFSStore
from src.gtfs_bc.stop_time.domain.entities.stop_time import StopTime


class TestIsTimepoint:
    """Tests for the timepoint rule."""

    def test_flag_one(self):
        st = StopTime("T1", "A", 1, "", "", timepoint=1)
        assert is_timepoint(st) is True

    def test_flag_zero_with_times(self):
        """An explicit 0 wins over filled-in times."""
        st = StopTime("T1", "A", 1, "08:00:00", "08:00:00", timepoint=0)
        assert is_timepoint(st) is False

    def test_no_flag_with_both_times(self):
        st = StopTime("T1", "A", 1, "08:00:00", "08:01:00")
        assert is_timepoint(st) is True

    def test_no_flag_missing_arrival(self):
        st = StopTime("T1", "A", 1, "", "08:01:00")
        assert is_timepoint(st) is False


class TestLoadTrips:
    """Tests for load_trips."""

    def test_loads_route_trips(self, gtfs_store):
        trips = load_trips(gtfs_store, "R1", ["WK"])
        assert [t.id for t in trips] == ["T1", "T2", "T3"]

    def test_filters_by_service(self, gtfs_store):
        trips = load_trips(gtfs_store, "R1", ["SAT"])
        assert [t.id for t in trips] == ["T_SAT"]

    def test_filters_by_direction(self, gtfs_store):
        trips = load_trips(gtfs_store, "R1", ["WK"], direction_id=1)
        assert [t.id for t in trips] == ["T3"]

    def test_stop_times_sorted_by_sequence(self, feed_rows):
        """Stop times should come back ascending even if the feed is not."""
        feed_rows["stop_times"].reverse()
        store = GTFSStore.from_rows(feed_rows)

        for trip in load_trips(store, "R1", ["WK"]):
            sequences = [st.stop_sequence for st in trip.stop_times]
            assert sequences == sorted(sequences)

    def test_non_timepoints_removed(self, feed_rows):
        for row in feed_rows["stop_times"]:
            if row["trip_id"] == "T1" and row["stop_id"] == "S2":
                row["arrival_time"] = ""
                row["departure_time"] = ""
        store = GTFSStore.from_rows(feed_rows)

        trips = {t.id: t for t in load_trips(store, "R1", ["WK"])}
        assert [st.stop_id for st in trips["T1"].stop_times] == ["S1", "S3"]
        assert [st.stop_id for st in trips["T2"].stop_times] == ["S1", "S2", "S3"]

    def test_no_trips(self, gtfs_store):
        """Should raise NoTripsError naming the route."""
        with pytest.raises(NoTripsError, match="R1"):
            load_trips(gtfs_store, "R1", ["NOPE"])

    def test_unknown_route(self, gtfs_store):
        with pytest.raises(NoTripsError):
            load_trips(gtfs_store, "UNKNOWN", ["WK"])

    def test_no_shapes(self, gtfs_store):
        with pytest.raises(NoShapesError, match="R_NOSHAPE"):
            load_trips(gtfs_store, "R_NOSHAPE", ["WK"])

    def test_does_not_modify_store(self, gtfs_store):
        """Loaded trips are copies; a second load starts from the feed again."""
        first = load_trips(gtfs_store, "R1", ["WK"])
        first[0].stop_times.clear()

        second = load_trips(gtfs_store, "R1", ["WK"])
        assert len(second[0].stop_times) == 3
