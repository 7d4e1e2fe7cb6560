"""Great-circle distances and two-circle position fixing."""

import math
from typing import List, NamedTuple

from ..errors import InvalidInputError

EARTH_RADIUS = 6378137  # metres, WGS84 equatorial radius

# Approximate metres per degree around the Yangtze delta
ONE_LNG = 92693
ONE_LAT = 111319


class Coord(NamedTuple):
    """A geographic coordinate in degrees."""
    longitude: float
    latitude: float


def get_distance(coord: Coord, coord2: Coord) -> float:
    """Haversine distance between two coordinates, in metres."""
    rad_lat1 = math.radians(coord.latitude)
    rad_lat2 = math.radians(coord2.latitude)
    delta_lat = rad_lat1 - rad_lat2
    delta_lng = math.radians(coord.longitude) - math.radians(coord2.longitude)
    a = (math.sin(delta_lat / 2) ** 2
         + math.cos(rad_lat1) * math.cos(rad_lat2) * math.sin(delta_lng / 2) ** 2)
    return 2 * math.asin(math.sqrt(a)) * EARTH_RADIUS


def get_coord(coord: Coord, coord2: Coord, d: float, d2: float) -> List[Coord]:
    """Find the points at distance ``d`` from ``coord`` and ``d2`` from ``coord2``.

    The neighbourhood of ``coord`` is treated as a flat plane scaled by the
    local metres-per-degree along each axis, and the two circles are
    intersected there. Accurate for distances of a few kilometres.

    Args:
        coord: First reference point
        coord2: Second reference point
        d: Distance from ``coord`` in metres
        d2: Distance from ``coord2`` in metres

    Returns:
        Up to two candidate coordinates; empty when the circles do not meet

    Raises:
        InvalidInputError: If the reference points share a latitude or a
            longitude (the local scale along that axis is undefined)
    """
    m = coord2.latitude - coord.latitude
    n = coord2.longitude - coord.longitude
    if m == 0 or n == 0:
        raise InvalidInputError("Reference points must differ in both latitude and longitude")

    # Signed metres per degree along each axis
    s = get_distance(coord, Coord(coord.longitude, coord2.latitude)) / m
    t = get_distance(coord, Coord(coord2.longitude, coord.latitude)) / n

    e = m * s
    f = n * t
    g = -e / f
    h = (e ** 2 + f ** 2 + d ** 2 - d2 ** 2) / (2 * f)

    a = g ** 2 + 1
    b = 2 * g * h
    c = h ** 2 - d ** 2
    discriminant = b ** 2 - 4 * a * c
    if discriminant < 0:
        return []

    root = math.sqrt(discriminant)
    results = []
    for ox in ((-b + root) / (2 * a), (-b - root) / (2 * a)):
        oy = g * ox + h
        results.append(Coord(longitude=oy / t + coord.longitude, latitude=ox / s + coord.latitude))
    return results
