from .route_model import RouteModel

__all__ = ["RouteModel"]
