from sqlalchemy import Column, String, Integer, Float, ForeignKey, Index
from sqlalchemy.orm import relationship

from core.base import Base
from src.gtfs_bc.stop_time.domain.entities.stop_time import StopTime


class StopTimeModel(Base):
    """SQLAlchemy model for GTFS StopTime."""

    __tablename__ = "gtfs_stop_times"

    # Composite primary key
    trip_id = Column(String(100), ForeignKey("gtfs_trips.id"), primary_key=True)
    stop_sequence = Column(Integer, primary_key=True)

    stop_id = Column(String(100), ForeignKey("gtfs_stops.id"), nullable=False)
    arrival_time = Column(String(10), nullable=False, default="")  # HH:MM:SS, "" if interpolated
    departure_time = Column(String(10), nullable=False, default="")
    shape_dist_traveled = Column(Float, nullable=True)
    timepoint = Column(Integer, nullable=True)  # NULL when the feed has no timepoint column

    # Relationships
    trip = relationship("TripModel", backref="stop_times")

    # Indexes for common queries
    __table_args__ = (
        Index("ix_stop_times_stop_id", "stop_id"),
    )

    def to_entity(self) -> StopTime:
        return StopTime(
            trip_id=self.trip_id,
            stop_id=self.stop_id,
            stop_sequence=self.stop_sequence,
            arrival_time=self.arrival_time or "",
            departure_time=self.departure_time or "",
            shape_dist_traveled=self.shape_dist_traveled,
            timepoint=self.timepoint,
        )
