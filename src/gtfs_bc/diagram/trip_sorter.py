"""Chronological ordering and de-duplication of trips.

Sorting algorithms (``DiagramConfig.sorting_algorithm``):

- first: departure time at each trip's first stop
- last: departure time at each trip's last stop
- common: departure time at the first stop every trip serves
- beginning / end: walk the stops of the longest trip from the start (or
  from the end), re-sorting after each stop so trips that skip a stop keep
  their place next to the trips around them
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from src.gtfs_bc.diagram.diagram_config import DiagramConfig
from src.gtfs_bc.diagram.trip_loader import is_timepoint
from src.gtfs_bc.stop_time.domain.entities.stop_time import StopTime
from src.gtfs_bc.trip.domain.entities.trip import Trip

logger = logging.getLogger(__name__)


def _find_stop_time(trip: Trip, stop_id: str) -> Optional[StopTime]:
    for stop_time in trip.stop_times:
        if stop_time.stop_id == stop_id:
            return stop_time
    return None


def _none_last_key(seconds: Optional[int]) -> Tuple[bool, int]:
    """Sort key placing missing times after every real time."""
    return (seconds is None, seconds if seconds is not None else 0)


def get_longest_trip_stop_times(
    trips: Iterable[Trip],
    show_only_timepoint: bool = False,
) -> Optional[List[StopTime]]:
    """Find the longest trip (most stops) and return its stop times.

    Ties go to the first trip in the list. Returns None for no trips.
    """
    if show_only_timepoint:
        candidates = [[st for st in trip.stop_times if is_timepoint(st)] for trip in trips]
    else:
        candidates = [trip.stop_times for trip in trips]

    if not candidates:
        return None

    return max(candidates, key=len)


def find_common_stop_id(trips: List[Trip], show_only_timepoint: bool = False) -> Optional[str]:
    """Find the first stop_id of the longest trip that all trips have in common."""
    longest_trip_stop_times = get_longest_trip_stop_times(trips, show_only_timepoint)

    if not longest_trip_stop_times:
        return None

    last_stop_id = longest_trip_stop_times[-1].stop_id

    for idx, stop_time in enumerate(longest_trip_stop_times):
        # If longest trip is a loop (first and last stops the same), then skip first stoptime
        if idx == 0 and stop_time.stop_id == last_stop_id:
            continue

        # If stoptime isn't a timepoint, skip it
        if stop_time.arrival_time == "":
            continue

        if all(_find_stop_time(trip, stop_time.stop_id) for trip in trips):
            return stop_time.stop_id

    return None


def deduplicate_trips(trips: Iterable[Trip], common_stop_id: Optional[str] = None) -> List[Trip]:
    """Drop trips repeating an earlier trip's departure times.

    Overlapping service_ids can load the same run twice. Only trips leaving
    the common stop (or their first stop) at the same time are compared in
    full. The first occurrence is kept; trips without stop times are always
    kept.
    """
    unique_trips: List[Trip] = []

    for trip in trips:
        if not unique_trips or not trip.stop_times:
            unique_trips.append(trip)
            continue

        departures = [st.departure_time for st in trip.stop_times]

        selected_stop_time = None
        if common_stop_id:
            selected_stop_time = _find_stop_time(trip, common_stop_id)
        if selected_stop_time is None:
            selected_stop_time = trip.stop_times[0]

        # Find all kept trips where the selected stop has the same departure time
        similar_trips = []
        for kept in unique_trips:
            stop_time = _find_stop_time(kept, selected_stop_time.stop_id)
            if stop_time is not None and stop_time.departure_time == selected_stop_time.departure_time:
                similar_trips.append(kept)

        is_unique = all(
            departures != [st.departure_time for st in similar.stop_times]
            for similar in similar_trips
        )

        if is_unique:
            unique_trips.append(trip)
        else:
            logger.debug(f"Dropping duplicate trip_id={trip.id}")

    return unique_trips


def _sort_by_selected_stop_time(
    trips: List[Trip],
    sorting_algorithm: str,
    common_stop_id: Optional[str],
) -> List[Trip]:
    def sort_key(trip: Trip) -> Tuple[bool, int]:
        if not trip.stop_times:
            return _none_last_key(None)

        selected_stop_time = None
        if common_stop_id:
            selected_stop_time = _find_stop_time(trip, common_stop_id)
        if selected_stop_time is None:
            if sorting_algorithm == "last":
                selected_stop_time = trip.stop_times[-1]
            else:
                selected_stop_time = trip.stop_times[0]

        return _none_last_key(selected_stop_time.departure_seconds())

    return sorted(trips, key=sort_key)


def sort_trips_by_start_or_end(trips: List[Trip], config: DiagramConfig) -> List[Trip]:
    """Sort trips by propagating times along the longest trip's stops.

    For each reference stop, a trip serving it as a timepoint takes its
    departure there as sorting time. Other trips take the sorting time of
    the trip just before them in the current order, unless that would move
    them backwards. The list is re-sorted after every reference stop.
    """
    longest = get_longest_trip_stop_times(trips, config.show_only_timepoint) or []

    if config.sorting_algorithm == "end":
        reference_stop_times = sorted(longest, key=lambda st: st.stop_sequence, reverse=True)
        sorting_direction = -1
    else:
        reference_stop_times = sorted(longest, key=lambda st: st.stop_sequence)
        sorting_direction = 1
    descending = sorting_direction == -1

    # {trip_id: seconds} kept apart from the Trip records
    sorting_times: Dict[str, Optional[int]] = {}
    sorted_trips = list(trips)

    for reference in reference_stop_times:
        previous_sorting_time: Optional[int] = None

        for trip in sorted_trips:
            sorting_time = sorting_times.get(trip.id) if trip.stop_times else None
            selected_stop_time = _find_stop_time(trip, reference.stop_id)

            if selected_stop_time is not None and is_timepoint(selected_stop_time):
                sorting_time = selected_stop_time.departure_seconds()
            elif sorting_time is None or (
                previous_sorting_time is not None
                and sorting_time * sorting_direction < previous_sorting_time * sorting_direction
            ):
                sorting_time = previous_sorting_time

            sorting_times[trip.id] = sorting_time
            previous_sorting_time = sorting_time

        sorted_trips = sorted(
            sorted_trips,
            key=lambda t: _none_last_key(sorting_times.get(t.id)),
            reverse=descending,
        )

    if descending:
        sorted_trips.reverse()

    return sorted_trips


def sort_trips(trips: Iterable[Trip], config: DiagramConfig) -> List[Trip]:
    """Sort trips chronologically, then remove duplicates."""
    trips = list(trips)
    common_stop_id = None

    if config.sorting_algorithm in ("beginning", "end"):
        sorted_trips = sort_trips_by_start_or_end(trips, config)
    else:
        if config.sorting_algorithm == "common":
            common_stop_id = find_common_stop_id(trips, config.show_only_timepoint)
            logger.debug(f"Common stop for sorting: {common_stop_id}")

        sorted_trips = _sort_by_selected_stop_time(trips, config.sorting_algorithm, common_stop_id)

    return deduplicate_trips(sorted_trips, common_stop_id)
