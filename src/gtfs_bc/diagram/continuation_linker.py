"""Block continuations: trips whose vehicle carries on as another route."""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Set, Tuple

from src.gtfs_bc.diagram.errors import MissingStopError, MissingStoptimesError
from src.gtfs_bc.feed.domain.feed_gateway import FeedGateway
from src.gtfs_bc.stop_time.domain.entities.stop_time import StopTime
from src.gtfs_bc.trip.domain.entities.trip import Trip, TripContinuation

logger = logging.getLogger(__name__)

MAX_CONTINUATION_WAIT_SECONDS = 60 * 60


@dataclass
class BlockTrip:
    """A trip on the same block, reduced to its first and last stop times."""
    trip: Trip
    first_stop_time: StopTime
    last_stop_time: StopTime

    @property
    def first_departure(self) -> int:
        return _departure_seconds(self.first_stop_time)

    @property
    def last_arrival(self) -> int:
        return _arrival_seconds(self.last_stop_time)


def _departure_seconds(stop_time: StopTime) -> int:
    seconds = stop_time.departure_seconds()
    if seconds is None:
        seconds = stop_time.arrival_seconds()
    if seconds is None:
        raise MissingStoptimesError(
            f"No time at stop_id={stop_time.stop_id} for trip_id={stop_time.trip_id}"
        )
    return seconds


def _arrival_seconds(stop_time: StopTime) -> int:
    seconds = stop_time.arrival_seconds()
    if seconds is None:
        seconds = stop_time.departure_seconds()
    if seconds is None:
        raise MissingStoptimesError(
            f"No time at stop_id={stop_time.stop_id} for trip_id={stop_time.trip_id}"
        )
    return seconds


def get_all_station_stop_ids(gateway: FeedGateway, stop_id: str) -> Set[str]:
    """Get every stop_id belonging to the same station as stop_id.

    Includes the stop itself, its parent station, the parent's other
    children, and the stop's own children when it is a parent station.

    Raises:
        MissingStopError: if stop_id is not in the feed
    """
    stop = gateway.get_stop(stop_id)
    if stop is None:
        raise MissingStopError(f"No stop found for stop_id={stop_id}")

    stop_ids = {stop_id}
    stop_ids.update(child.id for child in gateway.get_stops_by_parent(stop_id))

    if stop.parent_station_id:
        stop_ids.add(stop.parent_station_id)
        stop_ids.update(child.id for child in gateway.get_stops_by_parent(stop.parent_station_id))

    return stop_ids


def get_trips_with_same_block(
    gateway: FeedGateway,
    block_id: str,
    service_ids: List[str],
) -> List[BlockTrip]:
    """Get the trips of a block with their end stop times, by first departure.

    Raises:
        MissingStoptimesError: if one of the block trips has no stop times
    """
    block_trips = []
    for trip in gateway.get_trips_by_block(block_id, service_ids):
        stop_times = gateway.get_stop_times(trip.id)
        if not stop_times:
            raise MissingStoptimesError(f"No stoptimes found for trip_id={trip.id}, block_id={block_id}")

        block_trips.append(BlockTrip(trip=trip, first_stop_time=stop_times[0], last_stop_time=stop_times[-1]))

    return sorted(block_trips, key=lambda bt: bt.first_departure)


def _to_continuation(gateway: FeedGateway, block_trip: BlockTrip) -> TripContinuation:
    route = gateway.get_route(block_trip.trip.route_id)
    return TripContinuation(
        trip_id=block_trip.trip.id,
        route_id=block_trip.trip.route_id,
        route_short_name=route.short_name if route else None,
        route_long_name=route.long_name if route else None,
    )


def find_continuations(
    gateway: FeedGateway,
    trip: Trip,
    block_trips: List[BlockTrip],
) -> Tuple[Optional[TripContinuation], Optional[TripContinuation]]:
    """Get the (continues_from, continues_as) references for a trip.

    The previous block trip continues into this one when it is a different
    route, arrives no more than an hour before this trip departs, and ends
    at the station this trip starts from. "Continues as" is the same check
    against the next block trip.
    """
    first_stop_time = trip.stop_times[0]
    last_stop_time = trip.stop_times[-1]
    first_departure = _departure_seconds(first_stop_time)
    last_arrival = _arrival_seconds(last_stop_time)
    candidates = [bt for bt in block_trips if bt.trip.id != trip.id]

    continues_from = None
    # "Continues From" trips must be the previous trip chronologically.
    previous_trip = None
    for block_trip in candidates:
        if block_trip.last_arrival <= first_departure:
            previous_trip = block_trip

    if (
        previous_trip is not None
        and previous_trip.trip.route_id != trip.route_id
        and previous_trip.last_arrival >= first_departure - MAX_CONTINUATION_WAIT_SECONDS
        and previous_trip.last_stop_time.stop_id in get_all_station_stop_ids(gateway, first_stop_time.stop_id)
    ):
        continues_from = _to_continuation(gateway, previous_trip)

    continues_as = None
    # "Continues As" trips must be the next trip chronologically.
    next_trip = next((bt for bt in candidates if bt.first_departure >= last_arrival), None)

    if (
        next_trip is not None
        and next_trip.trip.route_id != trip.route_id
        and next_trip.first_departure <= last_arrival + MAX_CONTINUATION_WAIT_SECONDS
        and next_trip.first_stop_time.stop_id in get_all_station_stop_ids(gateway, last_stop_time.stop_id)
    ):
        continues_as = _to_continuation(gateway, next_trip)

    return continues_from, continues_as


def link_continuations(
    gateway: FeedGateway,
    trips: Iterable[Trip],
    service_ids: Iterable[str],
) -> List[Trip]:
    """Return the trips with continues_from / continues_as filled in.

    Only trips with a block_id are looked up. A block with a trip lacking
    stop times is logged and its links are left empty; every other trip is
    still processed.
    """
    service_ids = list(service_ids)
    # None marks a block that failed to load
    block_cache: Dict[str, Optional[List[BlockTrip]]] = {}
    linked = []

    for trip in trips:
        if not trip.block_id or not trip.stop_times:
            linked.append(trip)
            continue

        if trip.block_id not in block_cache:
            try:
                block_cache[trip.block_id] = get_trips_with_same_block(gateway, trip.block_id, service_ids)
            except MissingStoptimesError as e:
                logger.warning(f"Skipping continuations for block_id={trip.block_id}: {e}")
                block_cache[trip.block_id] = None

        block_trips = block_cache[trip.block_id]
        if block_trips is None:
            linked.append(trip)
            continue

        try:
            continues_from, continues_as = find_continuations(gateway, trip, block_trips)
        except MissingStoptimesError as e:
            logger.warning(f"Skipping continuation for trip_id={trip.id}: {e}")
            linked.append(trip)
            continue

        if continues_from or continues_as:
            logger.debug(
                f"trip_id={trip.id} continues from {continues_from and continues_from.trip_id}, "
                f"as {continues_as and continues_as.trip_id}"
            )
        linked.append(replace(trip, continues_from=continues_from, continues_as=continues_as))

    return linked
