"""Errors raised while resolving a route diagram.

Route-fatal errors (RouteNotFoundError, NoServiceError, NoTripsError,
NoShapesError, MissingStopError) abort the diagram for that route.
MissingStoptimesError and FrequencyTemplateMissingError only affect one
continuation link or one frequency rule; they are logged as warnings and
resolution carries on.
"""


class DiagramError(Exception):
    """Base class for diagram resolution errors."""


class NoServiceError(DiagramError):
    """No calendar is active on the target date."""


class NoTripsError(DiagramError):
    """The route has no trips in the active service window."""


class NoShapesError(DiagramError):
    """No trip of the route references a shape, so it cannot be diagrammed."""


class MissingStopError(DiagramError):
    """A stop time references a stop id that is not in the feed."""


class MissingStoptimesError(DiagramError):
    """A trip sharing a block has no stop times."""


class FrequencyTemplateMissingError(DiagramError):
    """A frequency rule references a trip that was not loaded."""


class RouteNotFoundError(DiagramError):
    """The requested route_id is not in the feed."""
