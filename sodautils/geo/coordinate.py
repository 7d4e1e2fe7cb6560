"""Conversion between WGS84, GCJ-02 and BD-09 coordinates.

WGS84 is the GPS datum. GCJ-02 ("Mars coordinates") is the obfuscated datum
required for maps published in mainland China. BD-09 is Baidu's further
offset of GCJ-02. Every function takes and returns (longitude, latitude).

The GCJ-02 -> WGS84 direction is the usual single-step approximation, good
to a few metres.
"""

import math
from typing import Sequence, Tuple

X_PI = math.pi * 3000.0 / 180.0
KRASOVSKY_A = 6378245.0
KRASOVSKY_EE = 0.00669342162296594323

Point = Tuple[float, float]

# Mainland bounding rectangles, as (corner, opposite corner)
_CHINA_REGIONS = (
    ((79.4462, 49.2204), (96.33, 42.8899)),
    ((109.6872, 54.1415), (135.0002, 39.3742)),
    ((73.1246, 42.8899), (124.143255, 29.5297)),
    ((82.9684, 29.5297), (97.0352, 26.7186)),
    ((97.0253, 29.5297), (124.367395, 20.414096)),
    ((107.975793, 20.414096), (111.744104, 17.871542)),
)

# Areas inside the rectangles above that are not offset (Taiwan and border areas)
_CHINA_EXCLUDES = (
    ((119.921265, 25.398623), (122.497559, 21.785006)),
    ((101.8652, 22.284), (106.665, 20.0988)),
    ((106.4525, 21.5422), (108.051, 20.4878)),
    ((109.0323, 55.8175), (119.127, 50.3257)),
    ((127.4568, 55.8175), (137.0227, 49.5574)),
    ((131.2662, 44.8922), (137.0227, 42.5692)),
)


def _in_rectangle(coordinate: Sequence[float], start: Sequence[float], end: Sequence[float]) -> bool:
    longitude, latitude = coordinate[0], coordinate[1]
    return (
        min(start[0], end[0]) <= longitude <= max(start[0], end[0])
        and min(start[1], end[1]) <= latitude <= max(start[1], end[1])
    )


def in_china(coordinate: Sequence[float]) -> bool:
    """Check whether a (longitude, latitude) lies in the area where GCJ-02 applies."""
    return (
        any(_in_rectangle(coordinate, start, end) for start, end in _CHINA_REGIONS)
        and not any(_in_rectangle(coordinate, start, end) for start, end in _CHINA_EXCLUDES)
    )


def _coordinate_offset(x: float, y: float) -> Point:
    """Raw GCJ-02 offset for a point relative to (105, 35)."""
    d_lng = 300.0 + x + 2.0 * y + 0.1 * x * x + 0.1 * x * y + 0.1 * math.sqrt(abs(x))
    d_lng += (20.0 * math.sin(6.0 * x * math.pi) + 20.0 * math.sin(2.0 * x * math.pi)) * 2.0 / 3.0
    d_lng += (20.0 * math.sin(x * math.pi) + 40.0 * math.sin(x / 3.0 * math.pi)) * 2.0 / 3.0
    d_lng += (150.0 * math.sin(x / 12.0 * math.pi) + 300.0 * math.sin(x / 30.0 * math.pi)) * 2.0 / 3.0

    d_lat = -100.0 + 2.0 * x + 3.0 * y + 0.2 * y * y + 0.1 * x * y + 0.2 * math.sqrt(abs(x))
    d_lat += (20.0 * math.sin(6.0 * x * math.pi) + 20.0 * math.sin(2.0 * x * math.pi)) * 2.0 / 3.0
    d_lat += (20.0 * math.sin(y * math.pi) + 40.0 * math.sin(y / 3.0 * math.pi)) * 2.0 / 3.0
    d_lat += (160.0 * math.sin(y / 12.0 * math.pi) + 320.0 * math.sin(y * math.pi / 30.0)) * 2.0 / 3.0
    return d_lng, d_lat


def _gcj02_delta(longitude: float, latitude: float) -> Point:
    """Offset in degrees between WGS84 and GCJ-02 around a point."""
    d_lng, d_lat = _coordinate_offset(longitude - 105.0, latitude - 35.0)
    rad_lat = latitude / 180.0 * math.pi
    magic = 1 - KRASOVSKY_EE * math.sin(rad_lat) ** 2
    sqrt_magic = math.sqrt(magic)
    d_lng = d_lng * 180.0 / (KRASOVSKY_A / sqrt_magic * math.cos(rad_lat) * math.pi)
    d_lat = d_lat * 180.0 / (KRASOVSKY_A * (1 - KRASOVSKY_EE) / (magic * sqrt_magic) * math.pi)
    return d_lng, d_lat


def wgs84_to_gcj02(coordinate: Sequence[float]) -> Point:
    longitude, latitude = coordinate[0], coordinate[1]
    d_lng, d_lat = _gcj02_delta(longitude, latitude)
    return longitude + d_lng, latitude + d_lat


def gcj02_to_wgs84(coordinate: Sequence[float]) -> Point:
    longitude, latitude = coordinate[0], coordinate[1]
    d_lng, d_lat = _gcj02_delta(longitude, latitude)
    return longitude - d_lng, latitude - d_lat


def bd09_to_gcj02(coordinate: Sequence[float]) -> Point:
    x = coordinate[0] - 0.0065
    y = coordinate[1] - 0.006
    z = math.sqrt(x * x + y * y) - 0.00002 * math.sin(y * X_PI)
    theta = math.atan2(y, x) - 0.000003 * math.cos(x * X_PI)
    return z * math.cos(theta), z * math.sin(theta)


def gcj02_to_bd09(coordinate: Sequence[float]) -> Point:
    longitude, latitude = coordinate[0], coordinate[1]
    z = math.sqrt(longitude * longitude + latitude * latitude) + 0.00002 * math.sin(latitude * X_PI)
    theta = math.atan2(latitude, longitude) + 0.000003 * math.cos(longitude * X_PI)
    return z * math.cos(theta) + 0.0065, z * math.sin(theta) + 0.006


def bd09_to_wgs84(coordinate: Sequence[float]) -> Point:
    return gcj02_to_wgs84(bd09_to_gcj02(coordinate))


def wgs84_to_bd09(coordinate: Sequence[float]) -> Point:
    return gcj02_to_bd09(wgs84_to_gcj02(coordinate))
