from dataclasses import dataclass

from src.gtfs_bc.stop_time.domain.value_objects.gtfs_time import time_to_seconds


@dataclass
class FrequencyRule:
    """GTFS Frequency entity - headway-based service template for a trip."""

    trip_id: str
    start_time: str  # HH:MM:SS, can be > 24:00:00
    end_time: str
    headway_secs: int
    exact_times: int = 0  # 0 = frequency-based, 1 = schedule-based

    @classmethod
    def from_gtfs(cls, row: dict) -> "FrequencyRule":
        """Create FrequencyRule from GTFS CSV row."""
        return cls(
            trip_id=row.get("trip_id", ""),
            start_time=(row.get("start_time") or "").strip(),
            end_time=(row.get("end_time") or "").strip(),
            headway_secs=int(row.get("headway_secs") or 0),
            exact_times=int(row.get("exact_times") or 0),
        )

    @property
    def start_seconds(self) -> int:
        return time_to_seconds(self.start_time) or 0

    @property
    def end_seconds(self) -> int:
        return time_to_seconds(self.end_time) or 0

    def __repr__(self):
        mins = self.headway_secs // 60
        return f"<FrequencyRule {self.trip_id} {self.start_time}-{self.end_time}: every {mins}m>"
