from datetime import date
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from core.config import Settings
from src.gtfs_bc.calendar.domain.entities.calendar import parse_gtfs_date

SortingAlgorithm = Literal["first", "last", "common", "beginning", "end"]


class DiagramConfig(BaseModel):
    """Options for one route diagram.

    Passed explicitly into every pipeline step. Accepts both snake_case and
    the camelCase keys used by JSON config files (``sortingAlgorithm``,
    ``chartDate``...).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sorting_algorithm: SortingAlgorithm = Field("first", alias="sortingAlgorithm")
    show_only_timepoint: bool = Field(False, alias="showOnlyTimepoint")
    show_arrival_on_difference: Optional[float] = Field(None, alias="showArrivalOnDifference")
    target_date: date = Field(
        default_factory=date.today,
        validation_alias=AliasChoices("target_date", "targetDate", "chartDate", "chart_date"),
    )
    include_exceptions: bool = Field(False, alias="includeExceptions")
    show_trip_continuation: bool = Field(True, alias="showTripContinuation")
    direction_id: Optional[int] = Field(None, alias="directionId")

    @field_validator("target_date", mode="before")
    @classmethod
    def parse_compact_date(cls, value):
        """Accept GTFS-style YYYYMMDD strings besides ISO dates."""
        if isinstance(value, str) and len(value.strip()) == 8 and value.strip().isdigit():
            return parse_gtfs_date(value)
        return value

    @classmethod
    def from_settings(cls, settings: Settings, **overrides) -> "DiagramConfig":
        """Build a config from application settings, then apply overrides.

        Overrides set to None are ignored so optional query parameters can be
        passed straight through.
        """
        values = {
            "sorting_algorithm": settings.diagram.DIAGRAM_SORTING_ALGORITHM,
            "show_only_timepoint": settings.diagram.DIAGRAM_SHOW_ONLY_TIMEPOINT,
            "show_arrival_on_difference": settings.diagram.DIAGRAM_SHOW_ARRIVAL_ON_DIFFERENCE,
            "include_exceptions": settings.diagram.DIAGRAM_INCLUDE_EXCEPTIONS,
            "show_trip_continuation": settings.diagram.DIAGRAM_SHOW_TRIP_CONTINUATION,
        }
        if settings.diagram.DIAGRAM_DATE:
            values["target_date"] = settings.diagram.DIAGRAM_DATE
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    @property
    def date_label(self) -> str:
        """Target date as YYYYMMDD, for messages."""
        return self.target_date.strftime("%Y%m%d")
