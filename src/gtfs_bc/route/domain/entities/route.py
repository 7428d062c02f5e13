from dataclasses import dataclass
from typing import Optional


@dataclass
class Route:
    """GTFS Route entity - represents a transit route/line."""

    id: str
    short_name: str
    long_name: str
    route_type: int = 3  # Extended route types (e.g. 700) are allowed
    agency_id: Optional[str] = None
    color: Optional[str] = None
    text_color: Optional[str] = None

    @classmethod
    def from_gtfs(cls, row: dict) -> "Route":
        """Create Route from GTFS CSV row."""
        return cls(
            id=row.get("route_id", ""),
            short_name=row.get("route_short_name") or "",
            long_name=row.get("route_long_name") or "",
            route_type=int(row.get("route_type") or 3),
            agency_id=row.get("agency_id") or None,
            color=row.get("route_color") or None,
            text_color=row.get("route_text_color") or None,
        )
