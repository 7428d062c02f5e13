from dataclasses import dataclass
from typing import Optional
from enum import IntEnum


class LocationType(IntEnum):
    """GTFS Location types."""
    STOP = 0  # Stop or platform
    STATION = 1  # Station
    ENTRANCE_EXIT = 2  # Station entrance/exit
    GENERIC_NODE = 3  # Generic node
    BOARDING_AREA = 4  # Boarding area


@dataclass
class Stop:
    """GTFS Stop entity - represents a stop/station."""

    id: str
    name: str
    lat: float
    lon: float
    code: Optional[str] = None
    location_type: LocationType = LocationType.STOP
    parent_station_id: Optional[str] = None

    @classmethod
    def from_gtfs(cls, row: dict) -> "Stop":
        """Create Stop from GTFS CSV row.

        Raises ValueError when stop_lat or stop_lon is blank.
        """
        stop_id = row.get("stop_id", "")
        lat = row.get("stop_lat")
        lon = row.get("stop_lon")
        if lat in (None, "") or lon in (None, ""):
            raise ValueError(f"Stop {stop_id!r} has no coordinates")

        return cls(
            id=stop_id,
            name=row.get("stop_name", ""),
            lat=float(lat),
            lon=float(lon),
            code=row.get("stop_code") or None,
            location_type=LocationType(int(row.get("location_type", 0) or 0)),
            parent_station_id=row.get("parent_station") or None,
        )
