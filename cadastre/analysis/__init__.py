"""
Analysis modules for Cadastre Collector
"""

from .geometry_utils import (
    EARTH_RADIUS_M,
    haversine_distance,
    distance,
    calculate_perimeter,
    calculate_area,
    is_ring_closed,
    close_ring,
)

__all__ = [
    "EARTH_RADIUS_M",
    "haversine_distance",
    "distance",
    "calculate_perimeter",
    "calculate_area",
    "is_ring_closed",
    "close_ring",
]
