"""
Plane geometry used while turning voronoi edges into a weighted skeleton.
"""
from typing import Tuple

import math

from shapely.geometry import LineString, Point  # type: ignore

from island_supports.helpers import Vertex

Line = Tuple[Vertex, Vertex]


def point_distance(a: Vertex, b: Vertex) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def segment_distance(line: Line, point: Vertex) -> float:
    """ Distance from point to the closest part of a finite segment. """
    if line[0] == line[1]:
        return point_distance(line[0], point)
    return LineString(line).distance(Point(point))


def perp_distance(line: Line, point: Vertex) -> float:
    """ Distance from point to the infinite line passing through both ends of line. """
    (x0, y0), (x1, y1) = line
    length = point_distance(line[0], line[1])
    if length == 0:
        return point_distance(line[0], point)
    cross = (x1 - x0) * (point[1] - y0) - (y1 - y0) * (point[0] - x0)
    return abs(cross) / length


def parabola_length(focus: Vertex, directrix: Line, start: Vertex, end: Vertex) -> float:
    """
    Arc length of the parabola section between 2 points on it.

    The parabola is the set of points equidistant from focus and the
    directrix line.

    Arguments:
        focus: The point generator of the parabola.
        directrix: The line generator of the parabola.
        start, end: Points on the parabola.
    Returns:
        Length measured along the curve.
    """
    (x0, y0), (x1, y1) = directrix
    line_length = point_distance(directrix[0], directrix[1])
    if line_length == 0:
        return point_distance(start, end)
    ux = (x1 - x0) / line_length
    uy = (y1 - y0) / line_length

    # Foot of the perpendicular from focus to the directrix.
    along = (focus[0] - x0) * ux + (focus[1] - y0) * uy
    foot = (x0 + along * ux, y0 + along * uy)
    focal_dist = point_distance(focus, foot)
    if focal_dist <= 1e-12:
        # Focus on the directrix. The parabola collapses into a ray.
        return point_distance(start, end)

    apex = ((focus[0] + foot[0]) / 2, (focus[1] + foot[1]) / 2)

    def integral(point: Vertex) -> float:
        # With the apex at the origin: y = x^2 / (2 * focal_dist).
        x = (point[0] - apex[0]) * ux + (point[1] - apex[1]) * uy
        ratio = x / focal_dist
        return x / 2 * math.sqrt(1 + ratio * ratio) + focal_dist / 2 * math.asinh(ratio)

    return abs(integral(end) - integral(start))


def interpolate(start: Vertex, end: Vertex, ratio: float) -> Vertex:
    """ Point on the straight line start -> end. ratio is clamped to [0, 1]. """
    ratio = min(1.0, max(0.0, ratio))
    return (start[0] + (end[0] - start[0]) * ratio,
            start[1] + (end[1] - start[1]) * ratio)
