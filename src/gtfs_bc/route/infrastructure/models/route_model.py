from sqlalchemy import Column, String, Integer

from core.base import Base
from src.gtfs_bc.route.domain.entities.route import Route


class RouteModel(Base):
    """SQLAlchemy model for GTFS Route."""

    __tablename__ = "gtfs_routes"

    id = Column(String(100), primary_key=True)
    agency_id = Column(String(100), nullable=True)
    short_name = Column(String(50), nullable=False, default="")
    long_name = Column(String(255), nullable=False, default="")
    route_type = Column(Integer, nullable=False, default=3)  # 3 = Bus
    color = Column(String(6), nullable=True)  # Hex color without #
    text_color = Column(String(6), nullable=True)

    def to_entity(self) -> Route:
        return Route(
            id=self.id,
            short_name=self.short_name or "",
            long_name=self.long_name or "",
            route_type=self.route_type if self.route_type is not None else 3,
            agency_id=self.agency_id,
            color=self.color,
            text_color=self.text_color,
        )
