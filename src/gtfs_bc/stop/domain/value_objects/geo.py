from dataclasses import dataclass
from math import acos, cos, pi, sin


# Nautical miles per degree of arc, converted to statute miles
MILES_PER_DEGREE = 60 * 1.1515


@dataclass(frozen=True)
class GeoPoint:
    """Geographic point with latitude and longitude."""
    latitude: float
    longitude: float

    def distance_to(self, other: "GeoPoint") -> float:
        """Straight-line distance to another point in statute miles."""
        return straight_line_distance(
            self.latitude, self.longitude,
            other.latitude, other.longitude
        )


def straight_line_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points using the spherical law of cosines.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        Distance in statute miles
    """
    if lat1 == lat2 and lon1 == lon2:
        return 0.0

    radlat1 = pi * lat1 / 180
    radlat2 = pi * lat2 / 180
    radtheta = pi * (lon1 - lon2) / 180

    dist = sin(radlat1) * sin(radlat2) + cos(radlat1) * cos(radlat2) * cos(radtheta)
    # Rounding can push the cosine just past 1 for nearby points
    dist = min(dist, 1.0)

    dist = acos(dist)
    dist = dist * 180 / pi

    return dist * MILES_PER_DEGREE
