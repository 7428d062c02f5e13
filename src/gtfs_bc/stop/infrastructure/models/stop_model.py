from sqlalchemy import Column, String, Float, Integer, ForeignKey, Index
from sqlalchemy.orm import relationship

from core.base import Base
from src.gtfs_bc.stop.domain.entities.stop import LocationType, Stop


class StopModel(Base):
    """SQLAlchemy model for GTFS Stop."""

    __tablename__ = "gtfs_stops"

    id = Column(String(100), primary_key=True)
    name = Column(String(255), nullable=False)
    lat = Column(Float, nullable=False)
    lon = Column(Float, nullable=False)
    code = Column(String(50), nullable=True)
    location_type = Column(Integer, nullable=False, default=0)
    parent_station_id = Column(String(100), ForeignKey("gtfs_stops.id"), nullable=True)

    # Self-referential relationship for parent station
    parent_station = relationship("StopModel", remote_side=[id], backref="child_stops")

    __table_args__ = (
        Index("ix_stops_parent_station_id", "parent_station_id"),
    )

    def to_entity(self) -> Stop:
        return Stop(
            id=self.id,
            name=self.name,
            lat=float(self.lat),
            lon=float(self.lon),
            code=self.code,
            location_type=LocationType(self.location_type or 0),
            parent_station_id=self.parent_station_id or None,
        )
