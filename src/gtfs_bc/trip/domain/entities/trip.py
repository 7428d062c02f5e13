from dataclasses import dataclass, field
from typing import Optional, Sequence

from src.gtfs_bc.stop_time.domain.entities.stop_time import StopTime


@dataclass(frozen=True)
class TripContinuation:
    """Reference to the trip a vehicle continues from or as, on another route."""

    trip_id: str
    route_id: str
    route_short_name: Optional[str] = None
    route_long_name: Optional[str] = None


@dataclass(frozen=True)
class Trip:
    """GTFS Trip entity - represents a scheduled trip."""

    id: str
    route_id: str
    service_id: str
    headsign: Optional[str] = None
    direction_id: Optional[int] = None  # 0 = outbound, 1 = inbound
    block_id: Optional[str] = None
    shape_id: Optional[str] = None
    stop_times: Sequence[StopTime] = field(default_factory=list)
    continues_from: Optional[TripContinuation] = None
    continues_as: Optional[TripContinuation] = None

    @classmethod
    def from_gtfs(cls, row: dict) -> "Trip":
        """Create Trip from GTFS CSV row."""
        return cls(
            id=row.get("trip_id", ""),
            route_id=row.get("route_id", ""),
            service_id=row.get("service_id", ""),
            headsign=row.get("trip_headsign"),
            direction_id=int(row["direction_id"]) if row.get("direction_id") not in (None, "") else None,
            block_id=row.get("block_id") or None,
            shape_id=row.get("shape_id") or None,
        )
