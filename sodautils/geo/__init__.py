"""Geographic helpers: datum conversion and distances."""

from .coordinate import (
    in_china,
    wgs84_to_gcj02,
    gcj02_to_wgs84,
    bd09_to_gcj02,
    gcj02_to_bd09,
    bd09_to_wgs84,
    wgs84_to_bd09,
)
from .distance import Coord, get_distance, get_coord, ONE_LNG, ONE_LAT

__all__ = [
    'in_china',
    'wgs84_to_gcj02',
    'gcj02_to_wgs84',
    'bd09_to_gcj02',
    'gcj02_to_bd09',
    'bd09_to_wgs84',
    'wgs84_to_bd09',
    'Coord',
    'get_distance',
    'get_coord',
    'ONE_LNG',
    'ONE_LAT',
]
