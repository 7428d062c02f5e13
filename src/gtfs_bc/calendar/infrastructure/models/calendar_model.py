from sqlalchemy import Column, String, Boolean, Date, Integer, Index

from core.base import Base
from src.gtfs_bc.calendar.domain.entities.calendar import Calendar, CalendarDate, ExceptionType


class CalendarModel(Base):
    """SQLAlchemy model for GTFS Calendar."""

    __tablename__ = "gtfs_calendar"

    service_id = Column(String(100), primary_key=True)
    monday = Column(Boolean, nullable=False, default=False)
    tuesday = Column(Boolean, nullable=False, default=False)
    wednesday = Column(Boolean, nullable=False, default=False)
    thursday = Column(Boolean, nullable=False, default=False)
    friday = Column(Boolean, nullable=False, default=False)
    saturday = Column(Boolean, nullable=False, default=False)
    sunday = Column(Boolean, nullable=False, default=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    def to_entity(self) -> Calendar:
        return Calendar(
            service_id=self.service_id,
            monday=bool(self.monday),
            tuesday=bool(self.tuesday),
            wednesday=bool(self.wednesday),
            thursday=bool(self.thursday),
            friday=bool(self.friday),
            saturday=bool(self.saturday),
            sunday=bool(self.sunday),
            start_date=self.start_date,
            end_date=self.end_date,
        )


class CalendarDateModel(Base):
    """SQLAlchemy model for GTFS CalendarDate (exceptions)."""

    __tablename__ = "gtfs_calendar_dates"

    # Composite primary key; service ids may exist only in calendar_dates
    service_id = Column(String(100), primary_key=True)
    date = Column(Date, primary_key=True)

    exception_type = Column(Integer, nullable=False)  # 1 = added, 2 = removed

    __table_args__ = (
        Index("ix_calendar_dates_date", "date"),
    )

    def to_entity(self) -> CalendarDate:
        return CalendarDate(
            service_id=self.service_id,
            date=self.date,
            exception_type=ExceptionType(self.exception_type),
        )
