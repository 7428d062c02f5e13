"""GTFSStore - in-memory feed gateway.

Builds lookup indexes once from GTFS rows (dicts keyed by the GTFS column
names, e.g. as produced by ``csv.DictReader``) and answers every gateway
query from memory. The store is never mutated after construction, so a
single instance can back concurrent diagram resolutions.
"""

import logging
import time
from collections import defaultdict
from dataclasses import replace
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional

from src.gtfs_bc.calendar.domain.entities.calendar import Calendar, CalendarDate
from src.gtfs_bc.feed.domain.feed_gateway import FeedGateway
from src.gtfs_bc.frequency.domain.entities.frequency import FrequencyRule
from src.gtfs_bc.route.domain.entities.route import Route
from src.gtfs_bc.stop.domain.entities.stop import Stop
from src.gtfs_bc.stop_time.domain.entities.stop_time import StopTime
from src.gtfs_bc.trip.domain.entities.trip import Trip

logger = logging.getLogger(__name__)


class GTFSStore(FeedGateway):
    """Feed gateway backed by in-memory indexes."""

    def __init__(self):
        # {route_id: Route}
        self.routes_info: Dict[str, Route] = {}

        # {trip_id: Trip} without stop times, in feed order
        self.trips_info: Dict[str, Trip] = {}

        # {route_id: [trip_id, ...]} and {block_id: [trip_id, ...]}
        self.trips_by_route: Dict[str, List[str]] = defaultdict(list)
        self.trips_by_block: Dict[str, List[str]] = defaultdict(list)

        # {trip_id: [StopTime, ...]} ordered by stop_sequence
        self.stop_times_by_trip: Dict[str, List[StopTime]] = {}

        # {stop_id: Stop}
        self.stops_info: Dict[str, Stop] = {}

        # {parent_station_id: [child_stop_id, ...]}
        self.children_by_parent: Dict[str, List[str]] = defaultdict(list)

        self.calendars: List[Calendar] = []

        # {date: [CalendarDate, ...]}
        self.calendar_exceptions: Dict[date, List[CalendarDate]] = defaultdict(list)

        # {trip_id: [FrequencyRule, ...]}
        self.frequencies_by_trip: Dict[str, List[FrequencyRule]] = defaultdict(list)

        self.stats: Dict[str, int] = {}
        self.load_time_seconds = 0.0

    @classmethod
    def from_rows(cls, tables: Mapping[str, Iterable[dict]]) -> "GTFSStore":
        """Build a store from GTFS tables.

        Args:
            tables: Mapping of GTFS file name without extension ("routes",
                "trips", "stop_times", "stops", "calendar",
                "calendar_dates", "frequencies") to an iterable of rows.
                Missing tables are treated as empty.
        """
        store = cls()
        store._load(tables)
        return store

    def _load(self, tables: Mapping[str, Iterable[dict]]) -> None:
        start = time.time()

        for row in tables.get("stops", ()):
            stop = Stop.from_gtfs(row)
            self.stops_info[stop.id] = stop
            if stop.parent_station_id:
                self.children_by_parent[stop.parent_station_id].append(stop.id)

        for row in tables.get("routes", ()):
            route = Route.from_gtfs(row)
            self.routes_info[route.id] = route

        for row in tables.get("calendar", ()):
            self.calendars.append(Calendar.from_gtfs(row))

        for row in tables.get("calendar_dates", ()):
            calendar_date = CalendarDate.from_gtfs(row)
            self.calendar_exceptions[calendar_date.date].append(calendar_date)

        for row in tables.get("trips", ()):
            trip = Trip.from_gtfs(row)
            self.trips_info[trip.id] = trip
            self.trips_by_route[trip.route_id].append(trip.id)
            if trip.block_id:
                self.trips_by_block[trip.block_id].append(trip.id)

        temp_stop_times: Dict[str, List[StopTime]] = defaultdict(list)
        count = 0
        for row in tables.get("stop_times", ()):
            stop_time = StopTime.from_gtfs(row)
            temp_stop_times[stop_time.trip_id].append(stop_time)
            count += 1

        self.stop_times_by_trip = {
            trip_id: sorted(stop_times, key=lambda st: st.stop_sequence)
            for trip_id, stop_times in temp_stop_times.items()
        }

        for row in tables.get("frequencies", ()):
            rule = FrequencyRule.from_gtfs(row)
            self.frequencies_by_trip[rule.trip_id].append(rule)

        self.stats = {
            "stops": len(self.stops_info),
            "routes": len(self.routes_info),
            "calendars": len(self.calendars),
            "trips": len(self.trips_info),
            "stop_times": count,
            "frequencies": sum(len(rules) for rules in self.frequencies_by_trip.values()),
        }
        self.load_time_seconds = time.time() - start
        logger.info(f"GTFS store loaded in {self.load_time_seconds:.2f}s: {self.stats}")

    # =========================================================================
    # Gateway queries
    # =========================================================================

    def get_route(self, route_id: str) -> Optional[Route]:
        return self.routes_info.get(route_id)

    def get_trips(
        self,
        route_id: str,
        service_ids: Iterable[str],
        direction_id: Optional[int] = None,
    ) -> List[Trip]:
        active = set(service_ids)
        trips = []
        for trip_id in self.trips_by_route.get(route_id, []):
            trip = self.trips_info[trip_id]
            if trip.service_id not in active:
                continue
            if direction_id is not None and trip.direction_id != direction_id:
                continue
            # Fresh copy so callers never share entities between resolutions
            trips.append(replace(trip, stop_times=[]))
        return trips

    def get_trips_by_block(self, block_id: str, service_ids: Iterable[str]) -> List[Trip]:
        active = set(service_ids)
        return [
            replace(self.trips_info[trip_id], stop_times=[])
            for trip_id in self.trips_by_block.get(block_id, [])
            if self.trips_info[trip_id].service_id in active
        ]

    def get_stop_times(self, trip_id: str) -> List[StopTime]:
        return [replace(st) for st in self.stop_times_by_trip.get(trip_id, [])]

    def get_stop(self, stop_id: str) -> Optional[Stop]:
        return self.stops_info.get(stop_id)

    def get_stops_by_parent(self, parent_station_id: str) -> List[Stop]:
        return [self.stops_info[stop_id] for stop_id in self.children_by_parent.get(parent_station_id, [])]

    def get_calendars(self, target_date: date, weekday: str) -> List[Calendar]:
        return [
            calendar for calendar in self.calendars
            if calendar.start_date <= target_date <= calendar.end_date
            and calendar.runs_on_weekday(weekday)
        ]

    def get_calendar_dates(self, target_date: date) -> List[CalendarDate]:
        return list(self.calendar_exceptions.get(target_date, []))

    def get_frequencies(self, trip_ids: Iterable[str]) -> List[FrequencyRule]:
        rules = []
        for trip_id in dict.fromkeys(trip_ids):
            rules.extend(self.frequencies_by_trip.get(trip_id, []))
        return rules
