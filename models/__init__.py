# Models registry
# Import all SQLAlchemy models here so Base.metadata knows every GTFS table

from src.gtfs_bc.route.infrastructure.models import RouteModel
from src.gtfs_bc.stop.infrastructure.models import StopModel
from src.gtfs_bc.trip.infrastructure.models import TripModel
from src.gtfs_bc.stop_time.infrastructure.models import StopTimeModel
from src.gtfs_bc.calendar.infrastructure.models import CalendarModel, CalendarDateModel
from src.gtfs_bc.frequency.infrastructure.models import FrequencyModel

__all__ = [
    "RouteModel",
    "StopModel",
    "TripModel",
    "StopTimeModel",
    "CalendarModel",
    "CalendarDateModel",
    "FrequencyModel",
]
