from dataclasses import dataclass
from datetime import date
from enum import IntEnum


WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class ExceptionType(IntEnum):
    """GTFS Calendar Date exception types."""
    ADDED = 1  # Service added for this date
    REMOVED = 2  # Service removed for this date


def parse_gtfs_date(date_str: str) -> date:
    """Parse YYYYMMDD date string."""
    date_str = date_str.strip()
    if len(date_str) != 8 or not date_str.isdigit():
        raise ValueError(f"Invalid GTFS date: {date_str!r}")
    return date(int(date_str[:4]), int(date_str[4:6]), int(date_str[6:8]))


@dataclass
class Calendar:
    """GTFS Calendar entity - represents service availability by day."""

    service_id: str
    monday: bool
    tuesday: bool
    wednesday: bool
    thursday: bool
    friday: bool
    saturday: bool
    sunday: bool
    start_date: date
    end_date: date

    @classmethod
    def from_gtfs(cls, row: dict) -> "Calendar":
        """Create Calendar from GTFS CSV row."""
        return cls(
            service_id=row.get("service_id", ""),
            monday=str(row.get("monday", "0")) == "1",
            tuesday=str(row.get("tuesday", "0")) == "1",
            wednesday=str(row.get("wednesday", "0")) == "1",
            thursday=str(row.get("thursday", "0")) == "1",
            friday=str(row.get("friday", "0")) == "1",
            saturday=str(row.get("saturday", "0")) == "1",
            sunday=str(row.get("sunday", "0")) == "1",
            start_date=parse_gtfs_date(row.get("start_date", "")),
            end_date=parse_gtfs_date(row.get("end_date", "")),
        )

    def runs_on_weekday(self, weekday: str) -> bool:
        return getattr(self, weekday)


@dataclass
class CalendarDate:
    """GTFS CalendarDate entity - represents service exceptions."""

    service_id: str
    date: date
    exception_type: ExceptionType

    @classmethod
    def from_gtfs(cls, row: dict) -> "CalendarDate":
        """Create CalendarDate from GTFS CSV row."""
        return cls(
            service_id=row.get("service_id", ""),
            date=parse_gtfs_date(row.get("date", "")),
            exception_type=ExceptionType(int(row.get("exception_type", 1))),
        )
