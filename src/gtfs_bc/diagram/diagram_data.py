"""Output records of the diagram engine.

Everything here converts to plain JSON-friendly data with ``to_dict()`` so
it can be handed to a template, a chart script or an HTTP response.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Tuple

from src.gtfs_bc.stop_time.domain.entities.stop_time import StopTime
from src.gtfs_bc.trip.domain.entities.trip import Trip, TripContinuation

STRAIGHT_LINE_NOTE = "Distance between stops calculated assuming a straight line."


@dataclass(frozen=True)
class Station:
    """A stop on the distance axis of a diagram."""

    stop_id: str
    name: str
    distance: float  # Cumulative from the first stop, in shape units or miles
    direction_id: Optional[int]
    type: Optional[str] = None  # "arrival" / "departure" for split stops

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stop_id": self.stop_id,
            "name": self.name,
            "distance": self.distance,
            "direction_id": self.direction_id,
            "type": self.type,
        }


def _continuation_to_dict(continuation: Optional[TripContinuation]) -> Optional[Dict[str, Any]]:
    if continuation is None:
        return None
    return {
        "trip_id": continuation.trip_id,
        "route_id": continuation.route_id,
        "route_short_name": continuation.route_short_name,
        "route_long_name": continuation.route_long_name,
    }


def stop_time_to_dict(stop_time: StopTime) -> Dict[str, Any]:
    return {
        "stop_id": stop_time.stop_id,
        "stop_sequence": stop_time.stop_sequence,
        "arrival_time": stop_time.arrival_time,
        "departure_time": stop_time.departure_time,
        "shape_dist_traveled": stop_time.shape_dist_traveled,
        "timepoint": stop_time.timepoint,
    }


def trip_to_dict(trip: Trip) -> Dict[str, Any]:
    return {
        "trip_id": trip.id,
        "route_id": trip.route_id,
        "service_id": trip.service_id,
        "direction_id": trip.direction_id,
        "trip_headsign": trip.headsign,
        "block_id": trip.block_id,
        "shape_id": trip.shape_id,
        "stoptimes": [stop_time_to_dict(st) for st in trip.stop_times],
        "continues_from_trip": _continuation_to_dict(trip.continues_from),
        "continues_as_trip": _continuation_to_dict(trip.continues_as),
    }


@dataclass(frozen=True)
class DiagramData:
    """Resolved trips and stations for one route on one date."""

    route_id: str
    date: date
    trips: Tuple[Trip, ...]
    stations: Tuple[Station, ...]
    notes: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "route_id": self.route_id,
            "date": self.date.strftime("%Y%m%d"),
            "trips": [trip_to_dict(trip) for trip in self.trips],
            "stations": [station.to_dict() for station in self.stations],
            "notes": list(self.notes),
        }
