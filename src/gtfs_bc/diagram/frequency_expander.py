"""Expand frequency-based trips into concrete trip instances."""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from src.gtfs_bc.diagram.errors import FrequencyTemplateMissingError
from src.gtfs_bc.frequency.domain.entities.frequency import FrequencyRule
from src.gtfs_bc.stop_time.domain.entities.stop_time import StopTime
from src.gtfs_bc.stop_time.domain.value_objects.gtfs_time import seconds_to_time
from src.gtfs_bc.trip.domain.entities.trip import Trip

logger = logging.getLogger(__name__)


def _shift(offset: Optional[int], start_seconds: int) -> str:
    if offset is None:
        return ""
    return seconds_to_time(start_seconds + offset)


def _find_template(trips_by_id: Dict[str, Trip], rule: FrequencyRule) -> Trip:
    template = trips_by_id.get(rule.trip_id)
    if template is None:
        raise FrequencyTemplateMissingError(
            f"Frequency {rule.start_time}-{rule.end_time} references trip_id={rule.trip_id}, "
            f"which is not a loaded trip"
        )
    return template


def generate_trips_by_frequency(template: Trip, rule: FrequencyRule) -> List[Trip]:
    """Repeat a template trip every headway between the rule's start and end.

    Each stop time keeps its offset from the template's first departure, so
    dwell and running times are preserved. Instance ids are
    ``{template_id}_{HH:MM:SS start}``.
    """
    first = template.stop_times[0]
    base = first.departure_seconds()
    if base is None:
        base = first.arrival_seconds()
    if base is None:
        raise ValueError(f"Trip {template.id} has no time at its first stop")

    # (stop_time, arrival offset, departure offset)
    offsets = []
    for stop_time in template.stop_times:
        arrival = stop_time.arrival_seconds()
        departure = stop_time.departure_seconds()
        offsets.append((
            stop_time,
            arrival - base if arrival is not None else None,
            departure - base if departure is not None else None,
        ))

    instances = []
    current_time = rule.start_seconds
    while current_time < rule.end_seconds:
        trip_id = f"{template.id}_{seconds_to_time(current_time)}"
        stop_times: List[StopTime] = [
            replace(
                stop_time,
                trip_id=trip_id,
                arrival_time=_shift(arrival_offset, current_time),
                departure_time=_shift(departure_offset, current_time),
            )
            for stop_time, arrival_offset, departure_offset in offsets
        ]
        instances.append(replace(template, id=trip_id, stop_times=stop_times))
        current_time += rule.headway_secs

    return instances


def expand_frequencies(trips: Iterable[Trip], rules: Iterable[FrequencyRule]) -> List[Trip]:
    """Replace every frequency template trip with its generated instances.

    Trips without frequency rules pass through unchanged and in place; the
    instances of a template take the template's position in the list.
    Rules whose template trip is missing, or that cannot be expanded, are
    skipped with a warning.
    """
    trips = list(trips)
    rules = list(rules)
    if not rules:
        return trips

    trips_by_id = {trip.id: trip for trip in trips}
    instances_by_template: Dict[str, List[Trip]] = {}

    for rule in rules:
        try:
            template = _find_template(trips_by_id, rule)
        except FrequencyTemplateMissingError as e:
            logger.warning(str(e))
            continue

        if rule.headway_secs <= 0:
            logger.warning(f"Skipping frequency for trip_id={rule.trip_id}: headway_secs={rule.headway_secs}")
            continue

        if not template.stop_times:
            logger.warning(f"Skipping frequency for trip_id={rule.trip_id}: template has no stoptimes")
            continue

        try:
            instances = generate_trips_by_frequency(template, rule)
        except ValueError as e:
            logger.warning(f"Skipping frequency for trip_id={rule.trip_id}: {e}")
            continue

        instances_by_template.setdefault(template.id, []).extend(instances)
        logger.debug(f"Frequency {rule!r} generated {len(instances)} trips")

    expanded = []
    for trip in trips:
        if trip.id in instances_by_template:
            expanded.extend(instances_by_template[trip.id])
        else:
            expanded.append(trip)

    return expanded
