"""Route diagram API endpoints."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_db
from core.rate_limiter import limiter, RateLimits
from adapters.http.api.gtfs.schemas import DiagramResponse
from src.gtfs_bc.diagram import (
    DiagramConfig,
    DiagramService,
    MissingStopError,
    NoServiceError,
    NoShapesError,
    NoTripsError,
    RouteNotFoundError,
)
from src.gtfs_bc.feed.domain.feed_gateway import FeedGateway
from src.gtfs_bc.feed.infrastructure.services.sqlalchemy_feed_gateway import SQLAlchemyFeedGateway

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/gtfs", tags=["Diagrams"])


def get_feed_gateway(db: Session = Depends(get_db)) -> FeedGateway:
    """Feed gateway for the request's database session."""
    return SQLAlchemyFeedGateway(db)


@router.get("/routes/{route_id}/diagram", response_model=DiagramResponse)
@limiter.limit(RateLimits.DIAGRAM)
def get_route_diagram(
    request: Request,
    route_id: str,
    date: Optional[str] = Query(None, description="Service date, YYYYMMDD or YYYY-MM-DD. Default: today"),
    sorting: Optional[str] = Query(
        None,
        description="Trip ordering: first, last, common, beginning, end",
    ),
    show_only_timepoint: Optional[bool] = Query(None, description="Use only timepoints to pick the longest trip"),
    include_exceptions: Optional[bool] = Query(None, description="Add services added in calendar_dates"),
    show_arrival_on_difference: Optional[float] = Query(
        None,
        ge=0,
        description="Split stations where trips wait at least this many minutes",
    ),
    direction_id: Optional[int] = Query(None, ge=0, le=1, description="Only trips in this direction"),
    gateway: FeedGateway = Depends(get_feed_gateway),
):
    """Get the trips and stations needed to draw a route's time-distance diagram.

    Trips are sorted chronologically and carry the trips of other routes
    they continue from/as on the same block. Stations carry the cumulative
    distance along the route; the opposite direction is mirrored onto the
    same axis.
    """
    try:
        config = DiagramConfig.from_settings(
            settings,
            target_date=date,
            sorting_algorithm=sorting,
            show_only_timepoint=show_only_timepoint,
            include_exceptions=include_exceptions,
            show_arrival_on_difference=show_arrival_on_difference,
            direction_id=direction_id,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid diagram options: {e.errors()[0]['msg']}")

    service = DiagramService(gateway)

    try:
        diagram = service.build_diagram(route_id, config)
    except RouteNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (NoServiceError, NoTripsError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NoShapesError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except MissingStopError as e:
        logger.error(f"Feed error building diagram: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return diagram.to_dict()
