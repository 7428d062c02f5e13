from sqlalchemy import Column, String, Integer, Index, ForeignKey
from sqlalchemy.orm import relationship

from core.base import Base
from src.gtfs_bc.frequency.domain.entities.frequency import FrequencyRule


class FrequencyModel(Base):
    """SQLAlchemy model for GTFS frequencies.

    Each row turns its trip into a template repeated every headway_secs
    between start_time and end_time.
    """
    __tablename__ = "gtfs_frequencies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    trip_id = Column(String(100), ForeignKey("gtfs_trips.id"), nullable=False)

    # Time period, HH:MM:SS (may exceed 24:00:00)
    start_time = Column(String(10), nullable=False)
    end_time = Column(String(10), nullable=False)

    # Frequency
    headway_secs = Column(Integer, nullable=False)  # Seconds between departures
    exact_times = Column(Integer, nullable=False, default=0)

    # Relationship
    trip = relationship("TripModel", backref="frequencies")

    __table_args__ = (
        Index("ix_frequencies_trip_id", "trip_id", "start_time"),
    )

    def __repr__(self):
        mins = self.headway_secs // 60
        return f"<Frequency {self.trip_id} {self.start_time}-{self.end_time}: every {mins}m>"

    def to_entity(self) -> FrequencyRule:
        return FrequencyRule(
            trip_id=self.trip_id,
            start_time=self.start_time,
            end_time=self.end_time,
            headway_secs=self.headway_secs,
            exact_times=self.exact_times or 0,
        )
