"""Unit tests for active service resolution."""

from datetime import date

import pytest

from src.gtfs_bc.diagram.errors import NoServiceError
from src.gtfs_bc.diagram.service_window import resolve_service_ids


class TestResolveServiceIds:
    """Tests for resolve_service_ids."""

    def test_weekday_calendar(self, gtfs_store, service_date):
        """A Monday should only activate the weekday calendar."""
        assert resolve_service_ids(gtfs_store, service_date) == ["WK"]

    def test_saturday_calendar(self, gtfs_store):
        assert resolve_service_ids(gtfs_store, date(2024, 3, 9)) == ["SAT"]

    def test_exceptions_ignored_by_default(self, gtfs_store, service_date):
        """Added services only count when exceptions are requested."""
        assert "EXTRA" not in resolve_service_ids(gtfs_store, service_date)

    def test_include_added_exceptions(self, gtfs_store, service_date):
        service_ids = resolve_service_ids(gtfs_store, service_date, include_exceptions=True)
        assert service_ids == ["WK", "EXTRA"]

    def test_removed_exceptions_are_not_subtracted(self, gtfs_store):
        """Type 2 exceptions are never added and never remove a calendar."""
        service_ids = resolve_service_ids(gtfs_store, date(2024, 12, 25), include_exceptions=True)
        assert service_ids == ["WK"]

    def test_date_outside_calendar_range(self, gtfs_store):
        """Should raise NoServiceError naming the date when nothing runs."""
        with pytest.raises(NoServiceError, match="20250106"):
            resolve_service_ids(gtfs_store, date(2025, 1, 6))

    def test_sunday_without_service(self, gtfs_store):
        with pytest.raises(NoServiceError, match="sunday"):
            resolve_service_ids(gtfs_store, date(2024, 3, 10))

    def test_exception_alone_is_enough(self, feed_rows):
        """A date with only an added service is not an error."""
        from src.gtfs_bc.feed.infrastructure.services.gtfs_store import GTFSStore

        feed_rows["calendar_dates"].append(
            {"service_id": "SPECIAL", "date": "20240310", "exception_type": "1"}
        )
        store = GTFSStore.from_rows(feed_rows)

        assert resolve_service_ids(store, date(2024, 3, 10), include_exceptions=True) == ["SPECIAL"]

    def test_duplicate_service_ids_removed(self, feed_rows):
        from src.gtfs_bc.feed.infrastructure.services.gtfs_store import GTFSStore

        feed_rows["calendar_dates"].append(
            {"service_id": "WK", "date": "20240304", "exception_type": "1"}
        )
        store = GTFSStore.from_rows(feed_rows)

        service_ids = resolve_service_ids(store, date(2024, 3, 4), include_exceptions=True)
        assert service_ids == ["WK", "EXTRA"]
