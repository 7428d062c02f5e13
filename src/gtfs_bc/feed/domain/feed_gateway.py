"""Read-only access to a GTFS feed.

The diagram engine only talks to the feed through this interface. Every
method is a pure read returning domain entities, so one gateway can serve
many route resolutions at once.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, List, Optional

from src.gtfs_bc.calendar.domain.entities.calendar import Calendar, CalendarDate
from src.gtfs_bc.frequency.domain.entities.frequency import FrequencyRule
from src.gtfs_bc.route.domain.entities.route import Route
from src.gtfs_bc.stop.domain.entities.stop import Stop
from src.gtfs_bc.stop_time.domain.entities.stop_time import StopTime
from src.gtfs_bc.trip.domain.entities.trip import Trip


class FeedGateway(ABC):
    """Interface for GTFS feed queries."""

    @abstractmethod
    def get_route(self, route_id: str) -> Optional[Route]:
        """Get a route by id."""
        pass

    @abstractmethod
    def get_trips(
        self,
        route_id: str,
        service_ids: Iterable[str],
        direction_id: Optional[int] = None,
    ) -> List[Trip]:
        """Get trips of a route running on any of the given services.

        Stop times are not attached.
        """
        pass

    @abstractmethod
    def get_trips_by_block(self, block_id: str, service_ids: Iterable[str]) -> List[Trip]:
        """Get all trips sharing a block id on any of the given services."""
        pass

    @abstractmethod
    def get_stop_times(self, trip_id: str) -> List[StopTime]:
        """Get the stop times of a trip ordered by stop_sequence."""
        pass

    @abstractmethod
    def get_stop(self, stop_id: str) -> Optional[Stop]:
        """Get a stop by id."""
        pass

    @abstractmethod
    def get_stops_by_parent(self, parent_station_id: str) -> List[Stop]:
        """Get the child stops of a parent station."""
        pass

    @abstractmethod
    def get_calendars(self, target_date: date, weekday: str) -> List[Calendar]:
        """Get calendars covering target_date with the weekday flag set."""
        pass

    @abstractmethod
    def get_calendar_dates(self, target_date: date) -> List[CalendarDate]:
        """Get calendar exceptions for target_date."""
        pass

    @abstractmethod
    def get_frequencies(self, trip_ids: Iterable[str]) -> List[FrequencyRule]:
        """Get frequency rules for the given trips."""
        pass
