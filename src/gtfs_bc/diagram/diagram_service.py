"""Diagram Service - resolves the data behind a route's time-distance diagram.

Pipeline for one route on one date:
- active service ids for the date
- trips with their timepoint stop times
- frequency based trips expanded into concrete trips
- trips sorted and de-duplicated
- block continuations linked
- stations with distances for each direction
"""

import logging
from dataclasses import replace
from typing import Optional

from src.gtfs_bc.diagram.continuation_linker import link_continuations
from src.gtfs_bc.diagram.diagram_config import DiagramConfig
from src.gtfs_bc.diagram.diagram_data import DiagramData
from src.gtfs_bc.diagram.errors import (
    MissingStopError,
    NoServiceError,
    NoShapesError,
    NoTripsError,
    RouteNotFoundError,
)
from src.gtfs_bc.diagram.frequency_expander import expand_frequencies
from src.gtfs_bc.diagram.service_window import resolve_service_ids
from src.gtfs_bc.diagram.station_resolver import resolve_stations
from src.gtfs_bc.diagram.trip_loader import load_trips
from src.gtfs_bc.diagram.trip_sorter import sort_trips
from src.gtfs_bc.feed.domain.feed_gateway import FeedGateway
from src.gtfs_bc.route.domain.entities.route import Route

logger = logging.getLogger(__name__)


class DiagramService:
    """High-level service building DiagramData from a feed gateway.

    Holds no state between calls; every build_diagram call reads the feed
    afresh.
    """

    def __init__(self, gateway: FeedGateway):
        self.gateway = gateway

    def get_route(self, route_id: str) -> Route:
        route = self.gateway.get_route(route_id)
        if route is None:
            raise RouteNotFoundError(f"Route not found: {route_id}")
        return route

    def build_diagram(self, route_id: str, config: Optional[DiagramConfig] = None) -> DiagramData:
        """Resolve trips and stations of a route for config.target_date.

        Raises:
            RouteNotFoundError: route_id is not in the feed
            NoServiceError, NoTripsError, NoShapesError, MissingStopError:
                the route cannot be diagrammed on that date; the message
                names the route and the date
        """
        config = config or DiagramConfig()
        self.get_route(route_id)

        try:
            data = self._build(route_id, config)
        except (NoServiceError, NoTripsError, NoShapesError, MissingStopError) as e:
            logger.warning(f"Diagram failed for route_id={route_id} on {config.date_label}: {e}")
            raise type(e)(f"route_id={route_id}, date={config.date_label}: {e}") from e

        logger.info(
            f"Diagram for route_id={route_id} on {config.date_label}: "
            f"{len(data.trips)} trips, {len(data.stations)} stations"
        )
        return data

    def _build(self, route_id: str, config: DiagramConfig) -> DiagramData:
        service_ids = resolve_service_ids(self.gateway, config.target_date, config.include_exceptions)

        trips = load_trips(self.gateway, route_id, service_ids, config.direction_id)

        rules = self.gateway.get_frequencies(trip.id for trip in trips)
        trips = expand_frequencies(trips, rules)

        trips = sort_trips(trips, config)

        if config.show_trip_continuation:
            trips = link_continuations(self.gateway, trips, service_ids)

        stations, notes = resolve_stations(self.gateway, trips, config)

        return DiagramData(
            route_id=route_id,
            date=config.target_date,
            trips=tuple(replace(trip, stop_times=tuple(trip.stop_times)) for trip in trips),
            stations=tuple(stations),
            notes=tuple(notes),
        )
