"""Load a route's trips with their timepoint stop times."""

import logging
from dataclasses import replace
from typing import Iterable, List, Optional

from src.gtfs_bc.diagram.errors import NoShapesError, NoTripsError
from src.gtfs_bc.feed.domain.feed_gateway import FeedGateway
from src.gtfs_bc.stop_time.domain.entities.stop_time import StopTime
from src.gtfs_bc.trip.domain.entities.trip import Trip

logger = logging.getLogger(__name__)


def is_timepoint(stop_time: StopTime) -> bool:
    """Determine if a stop time is a timepoint.

    An explicit timepoint flag wins; without one, a stop time counts as a
    timepoint when both of its times are filled in.
    """
    if stop_time.timepoint is None:
        return stop_time.arrival_time != "" and stop_time.departure_time != ""

    return stop_time.timepoint == 1


def load_trips(
    gateway: FeedGateway,
    route_id: str,
    service_ids: Iterable[str],
    direction_id: Optional[int] = None,
) -> List[Trip]:
    """Get the trips of a route with their stop times attached.

    Stop times come back ordered by stop_sequence and keep only timepoints.

    Raises:
        NoTripsError: if the route has no trip on the given services
        NoShapesError: if none of the trips references a shape
    """
    service_ids = list(service_ids)
    trips = gateway.get_trips(route_id, service_ids, direction_id)

    if not trips:
        raise NoTripsError(
            f"No trips found for route_id={route_id}, direction_id={direction_id}, "
            f"service_ids={service_ids}"
        )

    if not any(trip.shape_id for trip in trips):
        raise NoShapesError(f"No shapes found for route_id={route_id}")

    loaded = []
    for trip in trips:
        stop_times = sorted(gateway.get_stop_times(trip.id), key=lambda st: st.stop_sequence)
        timepoints = [st for st in stop_times if is_timepoint(st)]

        if not timepoints:
            logger.warning(f"No stoptimes found for trip_id={trip.id}, route_id={route_id}")

        loaded.append(replace(trip, stop_times=timepoints))

    logger.debug(f"Loaded {len(loaded)} trips for route_id={route_id}")
    return loaded
