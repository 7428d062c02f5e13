from dataclasses import dataclass
from typing import Optional

from src.gtfs_bc.stop_time.domain.value_objects.gtfs_time import time_to_seconds


@dataclass(frozen=True)
class StopTime:
    """GTFS StopTime entity - represents a stop time in a trip."""

    trip_id: str
    stop_id: str
    stop_sequence: int
    arrival_time: str  # HH:MM:SS format (can be > 24:00:00), "" when not a timepoint
    departure_time: str
    shape_dist_traveled: Optional[float] = None
    timepoint: Optional[int] = None  # None when the feed omits the column

    @classmethod
    def from_gtfs(cls, row: dict) -> "StopTime":
        """Create StopTime from GTFS CSV row."""
        return cls(
            trip_id=row.get("trip_id", ""),
            stop_id=row.get("stop_id", ""),
            stop_sequence=int(row.get("stop_sequence", 0)),
            arrival_time=(row.get("arrival_time") or "").strip(),
            departure_time=(row.get("departure_time") or "").strip(),
            shape_dist_traveled=float(row["shape_dist_traveled"]) if row.get("shape_dist_traveled") not in (None, "") else None,
            timepoint=int(row["timepoint"]) if row.get("timepoint") not in (None, "") else None,
        )

    def arrival_seconds(self) -> Optional[int]:
        """Arrival time in seconds since midnight, None if blank."""
        return time_to_seconds(self.arrival_time)

    def departure_seconds(self) -> Optional[int]:
        """Departure time in seconds since midnight, None if blank."""
        return time_to_seconds(self.departure_time)
