"""Diagram response schemas."""

from typing import Optional, List
from pydantic import BaseModel


class StopTimeSchema(BaseModel):
    stop_id: str
    stop_sequence: int
    arrival_time: str  # HH:MM:SS, hours may exceed 24
    departure_time: str
    shape_dist_traveled: Optional[float] = None
    timepoint: Optional[int] = None


class TripContinuationSchema(BaseModel):
    """Trip of another route run by the same vehicle."""
    trip_id: str
    route_id: str
    route_short_name: Optional[str] = None
    route_long_name: Optional[str] = None


class TripSchema(BaseModel):
    trip_id: str
    route_id: str
    service_id: str
    direction_id: Optional[int] = None
    trip_headsign: Optional[str] = None
    block_id: Optional[str] = None
    shape_id: Optional[str] = None
    stoptimes: List[StopTimeSchema]
    continues_from_trip: Optional[TripContinuationSchema] = None
    continues_as_trip: Optional[TripContinuationSchema] = None


class StationSchema(BaseModel):
    """A stop on the distance axis."""
    stop_id: str
    name: str
    distance: float
    direction_id: Optional[int] = None
    type: Optional[str] = None  # 'arrival', 'departure' or None


class DiagramResponse(BaseModel):
    """Trips and stations of a route diagram for one date."""
    route_id: str
    date: str  # YYYYMMDD
    trips: List[TripSchema]
    stations: List[StationSchema]
    notes: List[str] = []
