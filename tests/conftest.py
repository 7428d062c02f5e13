"""Pytest configuration and fixtures."""

import copy
from datetime import date

import pytest
from fastapi.testclient import TestClient

from src.gtfs_bc.feed.infrastructure.services.gtfs_store import GTFSStore
from src.gtfs_bc.stop_time.domain.entities.stop_time import StopTime
from src.gtfs_bc.trip.domain.entities.trip import Trip


def _stop_time_rows(trip_id, rows):
    return [
        {
            "trip_id": trip_id,
            "stop_id": stop_id,
            "stop_sequence": str(seq),
            "arrival_time": arrival,
            "departure_time": departure,
            "shape_dist_traveled": dist,
        }
        for seq, (stop_id, arrival, departure, dist) in enumerate(rows, start=1)
    ]


# Small feed: route R1 with two trips outbound and one inbound on weekdays.
# T1 ends at S3 and its vehicle (block B1) carries on as T4 on route R2 from
# S3B, a platform of the same station.
SAMPLE_FEED = {
    "routes": [
        {"route_id": "R1", "route_short_name": "1", "route_long_name": "Main Line", "route_type": "3"},
        {"route_id": "R2", "route_short_name": "2", "route_long_name": "Branch Line", "route_type": "3"},
        {"route_id": "R_NOSHAPE", "route_short_name": "9", "route_long_name": "No Shape", "route_type": "3"},
    ],
    "stops": [
        {"stop_id": "S1", "stop_name": "First Street", "stop_lat": "40.0", "stop_lon": "-3.0"},
        {"stop_id": "S2", "stop_name": "Second Street", "stop_lat": "40.01", "stop_lon": "-3.0"},
        {"stop_id": "P", "stop_name": "Central Station", "stop_lat": "40.02", "stop_lon": "-3.0",
         "location_type": "1"},
        {"stop_id": "S3", "stop_name": "Central Platform 1", "stop_lat": "40.02", "stop_lon": "-3.0",
         "parent_station": "P"},
        {"stop_id": "S3B", "stop_name": "Central Platform 2", "stop_lat": "40.02", "stop_lon": "-3.0",
         "parent_station": "P"},
        {"stop_id": "X", "stop_name": "Branch End", "stop_lat": "40.05", "stop_lon": "-3.05"},
    ],
    "calendar": [
        {"service_id": "WK", "monday": "1", "tuesday": "1", "wednesday": "1", "thursday": "1",
         "friday": "1", "saturday": "0", "sunday": "0", "start_date": "20240101", "end_date": "20241231"},
        {"service_id": "SAT", "monday": "0", "tuesday": "0", "wednesday": "0", "thursday": "0",
         "friday": "0", "saturday": "1", "sunday": "0", "start_date": "20240101", "end_date": "20241231"},
    ],
    "calendar_dates": [
        {"service_id": "EXTRA", "date": "20240304", "exception_type": "1"},
        {"service_id": "WK", "date": "20241225", "exception_type": "2"},
    ],
    "trips": [
        {"route_id": "R1", "service_id": "WK", "trip_id": "T1", "direction_id": "0",
         "block_id": "B1", "shape_id": "SH1", "trip_headsign": "Central"},
        {"route_id": "R1", "service_id": "WK", "trip_id": "T2", "direction_id": "0",
         "shape_id": "SH1", "trip_headsign": "Central"},
        {"route_id": "R1", "service_id": "WK", "trip_id": "T3", "direction_id": "1",
         "shape_id": "SH2", "trip_headsign": "First Street"},
        {"route_id": "R1", "service_id": "SAT", "trip_id": "T_SAT", "direction_id": "0",
         "shape_id": "SH1", "trip_headsign": "Central"},
        {"route_id": "R1", "service_id": "EXTRA", "trip_id": "T_EXTRA", "direction_id": "0",
         "shape_id": "SH1", "trip_headsign": "Central"},
        {"route_id": "R2", "service_id": "WK", "trip_id": "T4", "direction_id": "0",
         "block_id": "B1", "shape_id": "SH3", "trip_headsign": "Branch End"},
        {"route_id": "R_NOSHAPE", "service_id": "WK", "trip_id": "T_NOSHAPE", "direction_id": "0"},
    ],
    "stop_times": (
        _stop_time_rows("T1", [
            ("S1", "08:00:00", "08:00:00", "0"),
            ("S2", "08:10:00", "08:10:00", "5"),
            ("S3", "08:20:00", "08:20:00", "10"),
        ])
        + _stop_time_rows("T2", [
            ("S1", "09:00:00", "09:00:00", "0"),
            ("S2", "09:10:00", "09:10:00", "5"),
            ("S3", "09:20:00", "09:20:00", "10"),
        ])
        + _stop_time_rows("T3", [
            ("S3", "08:30:00", "08:30:00", "0"),
            ("S2", "08:40:00", "08:40:00", "4"),
            ("S1", "08:50:00", "08:50:00", "8"),
        ])
        + _stop_time_rows("T_SAT", [
            ("S1", "10:00:00", "10:00:00", "0"),
            ("S2", "10:10:00", "10:10:00", "5"),
            ("S3", "10:20:00", "10:20:00", "10"),
        ])
        + _stop_time_rows("T_EXTRA", [
            ("S1", "11:00:00", "11:00:00", "0"),
            ("S2", "11:10:00", "11:10:00", "5"),
            ("S3", "11:20:00", "11:20:00", "10"),
        ])
        + _stop_time_rows("T4", [
            ("S3B", "08:40:00", "08:40:00", ""),
            ("X", "09:00:00", "09:00:00", ""),
        ])
        + _stop_time_rows("T_NOSHAPE", [
            ("S1", "07:00:00", "07:00:00", ""),
            ("S2", "07:10:00", "07:10:00", ""),
        ])
    ),
    "frequencies": [],
}

# Monday, WK runs and EXTRA is added through calendar_dates
SERVICE_DATE = date(2024, 3, 4)


@pytest.fixture
def feed_rows():
    """GTFS rows of the sample feed, safe to modify in a test."""
    return copy.deepcopy(SAMPLE_FEED)


@pytest.fixture
def gtfs_store(feed_rows):
    """In-memory gateway over the sample feed."""
    return GTFSStore.from_rows(feed_rows)


@pytest.fixture
def service_date():
    return SERVICE_DATE


@pytest.fixture
def make_trip():
    """Build a Trip from (stop_id, arrival, departure) tuples."""

    def _make_trip(trip_id, stops, route_id="R1", service_id="WK", **kwargs):
        stop_times = [
            StopTime(
                trip_id=trip_id,
                stop_id=stop_id,
                stop_sequence=seq,
                arrival_time=arrival,
                departure_time=departure,
            )
            for seq, (stop_id, arrival, departure) in enumerate(stops, start=1)
        ]
        return Trip(id=trip_id, route_id=route_id, service_id=service_id, stop_times=stop_times, **kwargs)

    return _make_trip


@pytest.fixture
def client(gtfs_store):
    """Create a test client for the FastAPI app backed by the sample feed."""
    from app import app
    from adapters.http.api.gtfs.routers.diagram_router import get_feed_gateway
    from core.rate_limiter import limiter

    app.dependency_overrides[get_feed_gateway] = lambda: gtfs_store
    limiter.enabled = False
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
        limiter.enabled = True


@pytest.fixture
def api_base_url():
    """Base URL for GTFS API endpoints."""
    return "/api/v1/gtfs"
