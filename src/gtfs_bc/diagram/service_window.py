"""Active service ids for a date."""

import logging
from datetime import date
from typing import List

from src.gtfs_bc.calendar.domain.entities.calendar import WEEKDAY_NAMES, ExceptionType
from src.gtfs_bc.diagram.errors import NoServiceError
from src.gtfs_bc.feed.domain.feed_gateway import FeedGateway

logger = logging.getLogger(__name__)


def resolve_service_ids(
    gateway: FeedGateway,
    target_date: date,
    include_exceptions: bool = False,
) -> List[str]:
    """Get the service_ids running on target_date.

    Calendars whose date range covers target_date and whose weekday flag is
    set are active. With include_exceptions, services added for that date in
    calendar_dates are added as well.

    Returns:
        Service ids in feed order, without duplicates

    Raises:
        NoServiceError: if no service runs on target_date
    """
    weekday = WEEKDAY_NAMES[target_date.weekday()]
    calendars = gateway.get_calendars(target_date, weekday)

    service_ids = list(dict.fromkeys(calendar.service_id for calendar in calendars))

    if include_exceptions:
        added = [
            calendar_date.service_id
            for calendar_date in gateway.get_calendar_dates(target_date)
            if calendar_date.exception_type == ExceptionType.ADDED
        ]
        service_ids = list(dict.fromkeys(service_ids + added))

    if not service_ids:
        raise NoServiceError(f"No active calendars found for {target_date:%Y%m%d} ({weekday})")

    logger.debug(f"{len(service_ids)} active services on {target_date:%Y%m%d}: {service_ids}")
    return service_ids
