"""Stations and distances along the diagram's horizontal axis.

Each direction gets its own station list taken from its longest trip.
Directions after the first are mirrored and rescaled onto the first
direction's total distance so every trip shares one axis.
"""

import logging
from collections import defaultdict
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from src.gtfs_bc.diagram.diagram_config import DiagramConfig
from src.gtfs_bc.diagram.diagram_data import STRAIGHT_LINE_NOTE, Station
from src.gtfs_bc.diagram.errors import MissingStopError
from src.gtfs_bc.diagram.trip_sorter import get_longest_trip_stop_times
from src.gtfs_bc.feed.domain.feed_gateway import FeedGateway
from src.gtfs_bc.stop.domain.entities.stop import Stop
from src.gtfs_bc.stop.domain.value_objects.geo import straight_line_distance
from src.gtfs_bc.stop_time.domain.entities.stop_time import StopTime
from src.gtfs_bc.trip.domain.entities.trip import Trip

logger = logging.getLogger(__name__)


def _direction_key(direction_id: Optional[int]) -> Tuple[bool, int]:
    return (direction_id is None, direction_id if direction_id is not None else 0)


def group_trips_by_direction(trips: Iterable[Trip]) -> Dict[Optional[int], List[Trip]]:
    """Group trips by direction_id, directions ordered with None last."""
    groups: Dict[Optional[int], List[Trip]] = defaultdict(list)
    for trip in trips:
        groups[trip.direction_id].append(trip)

    return {direction_id: groups[direction_id] for direction_id in sorted(groups, key=_direction_key)}


def _get_stop(gateway: FeedGateway, stop_id: str) -> Stop:
    stop = gateway.get_stop(stop_id)
    if stop is None:
        raise MissingStopError(f"No stop found for stop_id={stop_id}")
    return stop


def build_direction_stations(
    gateway: FeedGateway,
    stop_times: Sequence[StopTime],
    direction_id: Optional[int],
) -> Tuple[List[Station], bool]:
    """Build the stations of one direction from its longest trip.

    Returns:
        (stations, straight_line) where straight_line tells whether
        distances were synthesized from stop coordinates
    """
    stops = [_get_stop(gateway, st.stop_id) for st in stop_times]
    use_shape_dist = all(st.shape_dist_traveled is not None for st in stop_times)

    stations = []
    distance = 0.0
    previous_stop: Optional[Stop] = None

    for stop_time, stop in zip(stop_times, stops):
        if use_shape_dist:
            distance = stop_time.shape_dist_traveled
        elif previous_stop is not None:
            distance += straight_line_distance(previous_stop.lat, previous_stop.lon, stop.lat, stop.lon)

        stations.append(Station(
            stop_id=stop.id,
            name=stop.name,
            distance=distance,
            direction_id=direction_id,
        ))
        previous_stop = stop

    return stations, not use_shape_dist


def rescale_stations(stations: List[Station], reference_total: float) -> List[Station]:
    """Mirror stations and scale them onto reference_total.

    The first station ends up at reference_total and the last at 0.
    """
    if not stations:
        return []

    total = stations[-1].distance
    if not total:
        logger.warning(
            f"Cannot rescale direction_id={stations[0].direction_id}: total distance is {total}"
        )
        return list(stations)

    return [
        replace(station, distance=(total - station.distance) * reference_total / total)
        for station in stations
    ]


def _dwell_minutes(stop_time: StopTime) -> Optional[int]:
    arrival = stop_time.arrival_seconds()
    departure = stop_time.departure_seconds()
    if arrival is None or departure is None:
        return None
    # Whole minutes, truncated towards zero
    return int((departure - arrival) / 60)


def expand_arrival_departure_stops(
    stations: Sequence[Station],
    trips: Iterable[Trip],
    min_difference: Optional[float],
) -> List[Station]:
    """Split stations where trips dwell into an arrival and a departure.

    A station is duplicated when any trip waits at least min_difference
    minutes there. The first and last stations are never split and no
    station is split twice. Returns a new list.
    """
    if min_difference is None or not stations:
        return list(stations)

    stop_ids = [station.stop_id for station in stations]
    last_index = len(stop_ids) - 1
    split_indexes = set()

    for trip in trips:
        for stop_time in trip.stop_times:
            dwell = _dwell_minutes(stop_time)
            if dwell is None or dwell < min_difference:
                continue

            if stop_time.stop_id not in stop_ids:
                continue

            index = stop_ids.index(stop_time.stop_id)
            if index == 0 or index == last_index:
                continue

            # Already split in the feed itself
            if stop_ids[index - 1] == stop_time.stop_id or stop_ids[index + 1] == stop_time.stop_id:
                continue

            split_indexes.add(index)

    expanded = []
    for index, station in enumerate(stations):
        if index in split_indexes:
            expanded.append(replace(station, type="arrival"))
            expanded.append(replace(station, type="departure"))
        else:
            expanded.append(station)

    return expanded


def resolve_stations(
    gateway: FeedGateway,
    trips: Iterable[Trip],
    config: DiagramConfig,
) -> Tuple[List[Station], List[str]]:
    """Get the stations of all directions and the notes about them.

    Raises:
        MissingStopError: if a stop time references an unknown stop
    """
    notes: List[str] = []
    stations: List[Station] = []
    reference_total: Optional[float] = None

    for direction_id, direction_trips in group_trips_by_direction(trips).items():
        longest = get_longest_trip_stop_times(direction_trips, config.show_only_timepoint)
        if not longest:
            logger.warning(f"No stoptimes to build stations for direction_id={direction_id}")
            continue

        direction_stations, straight_line = build_direction_stations(gateway, longest, direction_id)
        if straight_line and STRAIGHT_LINE_NOTE not in notes:
            notes.append(STRAIGHT_LINE_NOTE)

        if reference_total is None:
            reference_total = direction_stations[-1].distance
        else:
            direction_stations = rescale_stations(direction_stations, reference_total)

        stations.extend(expand_arrival_departure_stops(
            direction_stations,
            direction_trips,
            config.show_arrival_on_difference,
        ))

    return stations, notes
