"""Feed gateway over the GTFS tables through SQLAlchemy."""

from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from src.gtfs_bc.calendar.domain.entities.calendar import WEEKDAY_NAMES, Calendar, CalendarDate
from src.gtfs_bc.calendar.infrastructure.models import CalendarModel, CalendarDateModel
from src.gtfs_bc.feed.domain.feed_gateway import FeedGateway
from src.gtfs_bc.frequency.domain.entities.frequency import FrequencyRule
from src.gtfs_bc.frequency.infrastructure.models import FrequencyModel
from src.gtfs_bc.route.domain.entities.route import Route
from src.gtfs_bc.route.infrastructure.models import RouteModel
from src.gtfs_bc.stop.domain.entities.stop import Stop
from src.gtfs_bc.stop.infrastructure.models import StopModel
from src.gtfs_bc.stop_time.domain.entities.stop_time import StopTime
from src.gtfs_bc.stop_time.infrastructure.models import StopTimeModel
from src.gtfs_bc.trip.domain.entities.trip import Trip
from src.gtfs_bc.trip.infrastructure.models import TripModel


class SQLAlchemyFeedGateway(FeedGateway):
    """Feed gateway reading from a SQLAlchemy session.

    Rows are converted to domain entities before they leave this class.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_route(self, route_id: str) -> Optional[Route]:
        route = self.db.query(RouteModel).filter(RouteModel.id == route_id).first()
        return route.to_entity() if route else None

    def get_trips(
        self,
        route_id: str,
        service_ids: Iterable[str],
        direction_id: Optional[int] = None,
    ) -> List[Trip]:
        query = self.db.query(TripModel).filter(
            TripModel.route_id == route_id,
            TripModel.service_id.in_(list(service_ids)),
        )
        if direction_id is not None:
            query = query.filter(TripModel.direction_id == direction_id)

        return [trip.to_entity() for trip in query.order_by(TripModel.id).all()]

    def get_trips_by_block(self, block_id: str, service_ids: Iterable[str]) -> List[Trip]:
        trips = (
            self.db.query(TripModel)
            .filter(
                TripModel.block_id == block_id,
                TripModel.service_id.in_(list(service_ids)),
            )
            .order_by(TripModel.id)
            .all()
        )
        return [trip.to_entity() for trip in trips]

    def get_stop_times(self, trip_id: str) -> List[StopTime]:
        stop_times = (
            self.db.query(StopTimeModel)
            .filter(StopTimeModel.trip_id == trip_id)
            .order_by(StopTimeModel.stop_sequence)
            .all()
        )
        return [st.to_entity() for st in stop_times]

    def get_stop(self, stop_id: str) -> Optional[Stop]:
        stop = self.db.query(StopModel).filter(StopModel.id == stop_id).first()
        return stop.to_entity() if stop else None

    def get_stops_by_parent(self, parent_station_id: str) -> List[Stop]:
        stops = (
            self.db.query(StopModel)
            .filter(StopModel.parent_station_id == parent_station_id)
            .order_by(StopModel.id)
            .all()
        )
        return [stop.to_entity() for stop in stops]

    def get_calendars(self, target_date: date, weekday: str) -> List[Calendar]:
        if weekday not in WEEKDAY_NAMES:
            raise ValueError(f"Unknown weekday: {weekday}")

        calendars = (
            self.db.query(CalendarModel)
            .filter(
                CalendarModel.start_date <= target_date,
                CalendarModel.end_date >= target_date,
                getattr(CalendarModel, weekday).is_(True),
            )
            .order_by(CalendarModel.service_id)
            .all()
        )
        return [calendar.to_entity() for calendar in calendars]

    def get_calendar_dates(self, target_date: date) -> List[CalendarDate]:
        calendar_dates = (
            self.db.query(CalendarDateModel)
            .filter(CalendarDateModel.date == target_date)
            .order_by(CalendarDateModel.service_id)
            .all()
        )
        return [cd.to_entity() for cd in calendar_dates]

    def get_frequencies(self, trip_ids: Iterable[str]) -> List[FrequencyRule]:
        trip_ids = list(trip_ids)
        if not trip_ids:
            return []

        frequencies = (
            self.db.query(FrequencyModel)
            .filter(FrequencyModel.trip_id.in_(trip_ids))
            .order_by(FrequencyModel.trip_id, FrequencyModel.start_time, FrequencyModel.id)
            .all()
        )
        return [frequency.to_entity() for frequency in frequencies]
