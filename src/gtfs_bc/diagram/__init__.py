"""Diagram module for time-distance (string line) diagrams.

Resolves, for one route on one date, the trips to draw and the stations
along the distance axis.

Entry point:
- DiagramService: runs the whole pipeline against a FeedGateway

Configuration:
- DiagramConfig: per-call options (sorting, timepoints, date...)
"""

from .diagram_config import DiagramConfig
from .diagram_data import DiagramData, Station
from .diagram_service import DiagramService
from .errors import (
    DiagramError,
    FrequencyTemplateMissingError,
    MissingStopError,
    MissingStoptimesError,
    NoServiceError,
    NoShapesError,
    NoTripsError,
    RouteNotFoundError,
)

__all__ = [
    "DiagramConfig",
    "DiagramData",
    "DiagramService",
    "Station",
    "DiagramError",
    "FrequencyTemplateMissingError",
    "MissingStopError",
    "MissingStoptimesError",
    "NoServiceError",
    "NoShapesError",
    "NoTripsError",
    "RouteNotFoundError",
]
