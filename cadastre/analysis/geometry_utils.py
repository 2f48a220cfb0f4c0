"""
Geometry utility functions

Distance, perimeter and area of cadastral parcels given in [lon, lat] degrees.

Measurements use the outer ring (index 0) only and never add a closing edge:
a ring contributes its last edge only when the data repeats the first
coordinate at the end.
"""

import math
from typing import List, Sequence, Tuple

EARTH_RADIUS_M = 6371000  # Earth radius in meters

Coordinate = Sequence[float]  # [lon, lat]
Ring = Sequence[Coordinate]
Polygon = Sequence[Ring]


def haversine_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float
) -> float:
    """Calculate distance between two points in meters"""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = math.sin(delta_phi/2)**2 + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda/2)**2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1-a))

    return EARTH_RADIUS_M * c


def distance(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in meters between two [lon, lat] coordinates"""
    return haversine_distance(a[1], a[0], b[1], b[0])


def _outer_ring(polygon: Polygon) -> Ring:
    if not polygon:
        return []
    return polygon[0]


def calculate_perimeter(polygon: Polygon) -> float:
    """
    Calculate perimeter of a polygon's outer ring in meters

    Args:
        polygon: List of rings, each a list of [lon, lat]

    Returns:
        Sum of haversine distances between consecutive vertices
    """
    coords = _outer_ring(polygon)
    if len(coords) < 2:
        return 0.0

    perimeter = 0.0
    for i in range(len(coords) - 1):
        perimeter += distance(coords[i], coords[i + 1])

    return perimeter


def calculate_area(polygon: Polygon) -> float:
    """
    Calculate area of a polygon's outer ring in square meters (shoelace formula)

    The shoelace sum is taken directly over degree values and then scaled by
    R^2 * cos(latitude of the first vertex). This is a small-area planar
    approximation; it is not valid for rings spanning large latitude ranges,
    the anti-meridian or the poles.

    Args:
        polygon: List of rings, each a list of [lon, lat]

    Returns:
        Approximate area in square meters
    """
    coords = _outer_ring(polygon)
    if len(coords) < 3:
        return 0.0

    area = 0.0
    for i in range(len(coords) - 1):
        lon1, lat1 = coords[i][0], coords[i][1]
        lon2, lat2 = coords[i + 1][0], coords[i + 1][1]
        area += lon1 * lat2 - lon2 * lat1

    lat = math.radians(coords[0][1])
    return abs(area) / 2 * EARTH_RADIUS_M * EARTH_RADIUS_M * math.cos(lat)


def is_ring_closed(coords: Ring) -> bool:
    """True if the ring repeats its first coordinate at the end"""
    if len(coords) < 2:
        return False
    return list(coords[0][:2]) == list(coords[-1][:2])


def close_ring(coords: Ring) -> List[List[float]]:
    """Ensure ring is closed (first point == last point)"""
    ring = [list(c) for c in coords]
    if not ring:
        return ring

    if not is_ring_closed(ring):
        ring.append(list(ring[0]))

    return ring


def ring_bounds(coords: Ring) -> Tuple[float, float, float, float]:
    """Get (min_lon, min_lat, max_lon, max_lat) of a ring"""
    if not coords:
        return (0.0, 0.0, 0.0, 0.0)

    lons = [c[0] for c in coords]
    lats = [c[1] for c in coords]
    return (min(lons), min(lats), max(lons), max(lats))
