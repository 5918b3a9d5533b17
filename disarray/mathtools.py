"""2D collision tests and small vector helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .matrix import Vector3D, rotation_axis


@dataclass(frozen=True)
class SegmentIntersection:
    """Parameters along both segments where their lines meet."""

    r: float
    s: float
    intersects: bool


def round_half_away(x: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(x + 0.5) if x > 0.0 else int(x - 0.5)


def collision_circle_circle(x1: float, y1: float, radius1: float,
                            x2: float, y2: float, radius2: float) -> bool:
    return math.hypot(x1 - x2, y1 - y2) < radius1 + radius2


def collision_circle_rectangle(circle_x: float, circle_y: float, radius: float,
                               rect_x: float, rect_y: float,
                               rect_width: float, rect_height: float) -> bool:
    nearest_x = min(max(circle_x, rect_x), rect_x + rect_width)
    nearest_y = min(max(circle_y, rect_y), rect_y + rect_height)
    return math.hypot(nearest_x - circle_x, nearest_y - circle_y) < radius


def collision_rectangle_rectangle(x1: float, y1: float, width1: float, height1: float,
                                  x2: float, y2: float, width2: float, height2: float) -> bool:
    return (x1 + width1 >= x2 and x1 <= x2 + width2
            and y1 + height1 >= y2 and y1 <= y2 + height2)


def collision_circle_segment(x1: float, y1: float, x2: float, y2: float,
                             circle_x: float, circle_y: float, radius: float) -> bool:
    start = Vector3D(x1, y1, 0)
    end = Vector3D(x2, y2, 0)
    centre = Vector3D(circle_x, circle_y, 0)
    segment = end - start
    unit = segment.normalize()
    projection = (centre - start).dot(unit)

    if projection <= 0.0:
        closest = start
    elif projection >= segment.length():
        closest = end
    else:
        closest = start + unit * projection

    return (centre - closest).length() <= radius


def segment_intersection(ax: float, ay: float, bx: float, by: float,
                         cx: float, cy: float, dx: float, dy: float
                         ) -> SegmentIntersection | None:
    """Intersect segment AB with segment CD.

    Returns None for parallel lines or when either numerator is zero;
    otherwise the line parameters and whether both lie strictly inside (0, 1).
    """
    denominator = (bx - ax) * (dy - cy) - (by - ay) * (dx - cx)
    if denominator == 0:
        return None

    numerator_r = (ay - cy) * (dx - cx) - (ax - cx) * (dy - cy)
    numerator_s = (ay - cy) * (bx - ax) - (ax - cx) * (by - ay)
    if numerator_r == 0 or numerator_s == 0:
        return None

    r = numerator_r / denominator
    s = numerator_s / denominator
    return SegmentIntersection(r, s, 0 < r < 1 and 0 < s < 1)


def make_vector(speed_x: float, speed_y: float, angle: float) -> Vector3D:
    """Rotate the 2D velocity ``(speed_x, speed_y)`` by ``angle`` about -Z."""
    rotated = Vector3D(speed_x, speed_y, 0).transform(rotation_axis(angle, Vector3D(0, 0, -1)))
    return Vector3D(rotated.x, rotated.y, rotated.z)


def reflect_2d(vector: Vector3D, plane: Vector3D) -> Vector3D:
    """Unit reflection of ``vector`` off a line running along ``plane``."""
    perpendicular = Vector3D(plane.y, -plane.x, 0)
    scaled = vector * perpendicular.dot(perpendicular)
    offset = perpendicular * (2 * perpendicular.dot(vector))
    return (scaled - offset).normalize()


def lerp(origin: Vector3D, destination: Vector3D, progress: float) -> Vector3D:
    return origin + (destination - origin) * progress