from sqlalchemy import Column, String, Integer, ForeignKey, Index
from sqlalchemy.orm import relationship

from core.base import Base
from src.gtfs_bc.trip.domain.entities.trip import Trip


class TripModel(Base):
    """SQLAlchemy model for GTFS Trip."""

    __tablename__ = "gtfs_trips"

    id = Column(String(100), primary_key=True)
    route_id = Column(String(100), ForeignKey("gtfs_routes.id"), nullable=False)
    service_id = Column(String(100), nullable=False)
    headsign = Column(String(255), nullable=True)
    direction_id = Column(Integer, nullable=True)  # 0 = outbound, 1 = inbound
    block_id = Column(String(100), nullable=True)
    shape_id = Column(String(100), nullable=True)

    # Relationships
    route = relationship("RouteModel", backref="trips")

    __table_args__ = (
        Index("ix_trips_route_service", "route_id", "service_id"),
        Index("ix_trips_block_id", "block_id"),
    )

    def to_entity(self) -> Trip:
        return Trip(
            id=self.id,
            route_id=self.route_id,
            service_id=self.service_id,
            headsign=self.headsign,
            direction_id=self.direction_id,
            block_id=self.block_id or None,
            shape_id=self.shape_id or None,
        )
