"""Planar geometry helpers.

Points are (x, y) sequences. Segment tests run on exact rational
arithmetic, so touching and collinear cases are decided without floating
point error.
"""

import math
from fractions import Fraction
from typing import Callable, List, Optional, Sequence, Tuple

from .config import DrawArcOptions
from .errors import InvalidInputError

Point = Sequence[float]
DistanceFunc = Callable[[Point, Point], float]


def euclidean_distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def get_point_to_line_min_distance(point: Point,
                                   line: Sequence[Point],
                                   get_dis: Optional[DistanceFunc] = None) -> float:
    """Shortest distance from a point to a polyline.

    For each segment the closest point is the perpendicular foot when it
    falls strictly inside the segment, else the nearer endpoint. Distances
    are measured with ``get_dis``, so a geodesic function can be plugged in
    for longitude/latitude pairs.

    Args:
        point: The point (x, y)
        line: Polyline vertices, at least two
        get_dis: Distance function between two points (default Euclidean)

    Raises:
        InvalidInputError: If the point is not 2D or the line has fewer than two vertices
    """
    method = get_dis or euclidean_distance
    if len(point) != 2:
        raise InvalidInputError("Point must have exactly two coordinates")
    if len(line) < 2:
        raise InvalidInputError("Line must contain at least two points")

    x0, y0 = point
    distances = []
    for (x1, y1), (x2, y2) in zip(line[:-1], line[1:]):
        if (x0, y0) in ((x1, y1), (x2, y2)):
            distances.append(0)
            continue
        if x1 == x2 and y1 == y2:
            distances.append(method(point, (x1, y1)))
            continue

        dx, dy = x2 - x1, y2 - y1
        t = ((x0 - x1) * dx + (y0 - y1) * dy) / (dx * dx + dy * dy)
        if 0 < t < 1:
            distances.append(method(point, (x1 + t * dx, y1 + t * dy)))
        else:
            distances.append(min(method(point, (x1, y1)), method(point, (x2, y2))))

    return min(distances)


def _orientation(a: Tuple[Fraction, Fraction],
                 b: Tuple[Fraction, Fraction],
                 c: Tuple[Fraction, Fraction]) -> int:
    cross = (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])
    return (cross > 0) - (cross < 0)


def _on_segment(a, b, p) -> bool:
    return (min(a[0], b[0]) <= p[0] <= max(a[0], b[0])
            and min(a[1], b[1]) <= p[1] <= max(a[1], b[1]))


def _exact(point: Point) -> Tuple[Fraction, Fraction]:
    return (Fraction(point[0]), Fraction(point[1]))


def if_two_segments_intersect(line1: Sequence[Point], line2: Sequence[Point]) -> bool:
    """Check whether two segments share at least one point.

    Touching endpoints and collinear overlap count as intersecting.
    """
    a, b = _exact(line1[0]), _exact(line1[1])
    c, d = _exact(line2[0]), _exact(line2[1])

    o1 = _orientation(a, b, c)
    o2 = _orientation(a, b, d)
    o3 = _orientation(c, d, a)
    o4 = _orientation(c, d, b)

    if o1 != o2 and o3 != o4:
        return True

    # Collinear touching cases
    if o1 == 0 and _on_segment(a, b, c):
        return True
    if o2 == 0 and _on_segment(a, b, d):
        return True
    if o3 == 0 and _on_segment(c, d, a):
        return True
    if o4 == 0 and _on_segment(c, d, b):
        return True
    return False


def can_coords_be_polygon(coords: Sequence[Point]) -> bool:
    """Check whether vertices, in order, form a simple polygon.

    Needs at least three vertices, and no two non-adjacent edges may touch.
    """
    length = len(coords)
    if length < 3:
        return False

    edges = [(coords[i], coords[(i + 1) % length]) for i in range(length)]
    for i in range(length):
        for j in range(i + 2, length):
            if i == 0 and j == length - 1:
                continue  # first and last edges share a vertex
            if if_two_segments_intersect(edges[i], edges[j]):
                return False
    return True


def remain(a: float, b: float) -> float:
    """Remainder of a / b that is never negative for a negative ``a``.

    NaN when ``b`` is zero or ``a`` is infinite.
    """
    if b == 0 or math.isinf(a):
        return math.nan
    r = math.fmod(a, b)
    if a >= 0 or r == 0:
        return r
    return r + abs(b)


def _format_number(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return repr(value)


def draw_arc(x: float, y: float, radius: float, start_angle: float, end_angle: float,
             options: Optional[DrawArcOptions] = None) -> str:
    """Build an SVG path fragment for a circular arc.

    Args:
        x: Centre x
        y: Centre y
        radius: Arc radius
        start_angle: Start angle in radians, measured from the x axis
        end_angle: End angle in radians
        options: Whether to line-to the start point, and sweep direction

    Returns:
        Path text such as ``"M 20 10 A 10 10 0 0 1 10 20"``
    """
    options = options or DrawArcOptions()
    start_angle = remain(start_angle, math.pi * 2)
    end_angle = remain(end_angle, math.pi * 2)

    if options.anticlockwise:
        flags = "0 0" if start_angle > end_angle else "1 0"
    else:
        flags = "1 1" if start_angle > end_angle else "0 1"

    parts: List[str] = [
        "L" if options.line else "M",
        _format_number(x + radius * math.cos(start_angle)),
        _format_number(y + radius * math.sin(start_angle)),
        "A",
        _format_number(radius),
        _format_number(radius),
        "0",
        flags,
        _format_number(x + radius * math.cos(end_angle)),
        _format_number(y + radius * math.sin(end_angle)),
    ]
    return " ".join(parts)
