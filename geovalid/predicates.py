"""
Geometric primitives used by the validity rules.

Provides:
- Finite coordinate check
- Robust orientation predicate (adaptive float filter + exact rationals)
- Degenerate (repeated) point reduction
- Exact segment intersection and self-intersection detection
- Ring orientation and point-in-ring location (GEOS through shapely)

All predicates that take coordinates assume they are finite. Callers are
expected to run coord_is_not_finite() first.
"""

import math
from enum import Enum
from fractions import Fraction
from typing import Iterable, Sequence

import shapely

from .geometry import Coord


# ============================================================
# Finite coordinates
# ============================================================

def coord_is_not_finite(coord: Iterable[float]) -> bool:
    """True if any component of the coordinate is NaN or infinite."""
    return not all(math.isfinite(c) for c in coord)


# ============================================================
# Robust orientation
# ============================================================

class Orientation(str, Enum):
    COUNTERCLOCKWISE = "counterclockwise"
    CLOCKWISE = "clockwise"
    COLLINEAR = "collinear"


# Shewchuk, "Adaptive Precision Floating-Point Arithmetic and Fast Robust
# Geometric Predicates", stage A bound for orient2d.
_EPSILON = 2.0 ** -53
_CCW_ERRBOUND_A = (3.0 + 16.0 * _EPSILON) * _EPSILON


def _orient2d_exact(ax: float, ay: float, bx: float, by: float, cx: float, cy: float) -> float:
    det = (Fraction(ax) - Fraction(cx)) * (Fraction(by) - Fraction(cy)) - (
        Fraction(ay) - Fraction(cy)
    ) * (Fraction(bx) - Fraction(cx))
    if det == 0:
        return 0.0
    value = float(det)
    if value == 0.0:
        # underflow; keep the sign
        value = math.copysign(5e-324, det)
    return value


def orient2d(pa: Coord, pb: Coord, pc: Coord) -> float:
    """
    Orientation determinant of three points with an exact sign.

    Args:
        pa, pb, pc: Coordinates (promoted to double precision)

    Returns:
        Positive if pa, pb, pc turn counterclockwise, negative if clockwise,
        zero if they are exactly collinear. Only the sign is meaningful.
    """
    ax, ay = float(pa.x), float(pa.y)
    bx, by = float(pb.x), float(pb.y)
    cx, cy = float(pc.x), float(pc.y)

    detleft = (ax - cx) * (by - cy)
    detright = (ay - cy) * (bx - cx)
    det = detleft - detright

    if detleft > 0.0:
        if detright <= 0.0:
            return det
        detsum = detleft + detright
    elif detleft < 0.0:
        if detright >= 0.0:
            return det
        detsum = -detleft - detright
    else:
        return det

    errbound = _CCW_ERRBOUND_A * detsum
    if det >= errbound or -det >= errbound:
        return det

    return _orient2d_exact(ax, ay, bx, by, cx, cy)


def orientation(pa: Coord, pb: Coord, pc: Coord) -> Orientation:
    det = orient2d(pa, pb, pc)
    if det > 0:
        return Orientation.COUNTERCLOCKWISE
    if det < 0:
        return Orientation.CLOCKWISE
    return Orientation.COLLINEAR


def points_are_collinear(p0: Coord, p1: Coord, p2: Coord) -> bool:
    """True if p2 lies exactly on the line through p0 and p1."""
    return orient2d(p0, p1, p2) == 0.0


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


# ============================================================
# Degenerate point reduction
# ============================================================

def same_coord(a: Coord, b: Coord) -> bool:
    """Component-wise IEEE equality; a NaN component never matches."""
    return a.x == b.x and a.y == b.y


def remove_repeated_points(coords: Sequence[Coord]) -> list[tuple[int, Coord]]:
    """
    Collapse runs of consecutive identical coordinates.

    Returns:
        List of (original index, coord) pairs, one per run, keeping the index
        of the first coordinate of each run.
    """
    kept: list[tuple[int, Coord]] = []
    for i, coord in enumerate(coords):
        if kept and same_coord(kept[-1][1], coord):
            continue
        kept.append((i, coord))
    return kept


def count_distinct_points(coords: Sequence[Coord]) -> int:
    return len(remove_repeated_points(coords))


def check_too_few_points(coords: Sequence[Coord], is_ring: bool) -> bool:
    """True if the sequence has fewer points than its kind requires (2, or 4 for a ring)."""
    n_pts = 4 if is_ring else 2
    return count_distinct_points(coords) < n_pts


# ============================================================
# Segment intersection
# ============================================================

def _in_box(p: Coord, q: Coord, r: Coord) -> bool:
    """r lies within the bounding box of segment pq."""
    return min(p.x, q.x) <= r.x <= max(p.x, q.x) and min(p.y, q.y) <= r.y <= max(p.y, q.y)


def segments_intersect(p1: Coord, p2: Coord, q1: Coord, q2: Coord) -> bool:
    """Exact test for any contact between closed segments p1p2 and q1q2."""
    d1 = _sign(orient2d(q1, q2, p1))
    d2 = _sign(orient2d(q1, q2, p2))
    d3 = _sign(orient2d(p1, p2, q1))
    d4 = _sign(orient2d(p1, p2, q2))

    if d1 * d2 < 0 and d3 * d4 < 0:
        return True
    if d1 == 0 and _in_box(q1, q2, p1):
        return True
    if d2 == 0 and _in_box(q1, q2, p2):
        return True
    if d3 == 0 and _in_box(p1, p2, q1):
        return True
    if d4 == 0 and _in_box(p1, p2, q2):
        return True
    return False


def segments_cross_or_overlap(p1: Coord, p2: Coord, q1: Coord, q2: Coord) -> bool:
    """
    True if the segments cross at a single interior point of both, or share
    a collinear stretch of positive length. Touching at an isolated point
    (endpoint on the other segment) is not counted.
    """
    d1 = _sign(orient2d(q1, q2, p1))
    d2 = _sign(orient2d(q1, q2, p2))
    d3 = _sign(orient2d(p1, p2, q1))
    d4 = _sign(orient2d(p1, p2, q2))

    if d1 * d2 < 0 and d3 * d4 < 0:
        return True
    if d1 == d2 == d3 == d4 == 0:
        axis = 0 if p1.x != p2.x else 1
        p_lo, p_hi = sorted((tuple(p1)[axis], tuple(p2)[axis]))
        q_lo, q_hi = sorted((tuple(q1)[axis], tuple(q2)[axis]))
        return min(p_hi, q_hi) > max(p_lo, q_lo)
    return False


def _is_spike(a: Coord, b: Coord, c: Coord) -> bool:
    """Consecutive edges ab, bc fold back onto each other at b."""
    if orient2d(a, b, c) != 0.0:
        return False
    return _in_box(a, b, c) or _in_box(b, c, a)


def _edges(coords: Sequence[Coord]) -> list[tuple[int, Coord, Coord]]:
    """Non-degenerate edges as (original start index, start, end)."""
    kept = remove_repeated_points(coords)
    return [(kept[k][0], kept[k][1], kept[k + 1][1]) for k in range(len(kept) - 1)]


# ============================================================
# Self-intersection
# ============================================================

def self_intersections(coords: Sequence[Coord], closed: bool = True) -> list[int]:
    """
    Find edges involved in an improper intersection.

    Every unordered pair of edges is tested (quadratic, no spatial index).
    Edges adjacent by index (and, for a closed sequence, the last and first
    edge) may only meet at their shared vertex; a collinear fold-back (spike)
    counts as an intersection. Any contact between non-adjacent edges counts,
    including a touch at a vertex.

    Args:
        coords: Coordinate sequence; repeated consecutive points are ignored
        closed: Treat the sequence as a ring (first and last edge adjacent)

    Returns:
        Sorted original start indices of the later edge of each offending pair
    """
    edges = _edges(coords)
    n = len(edges)
    found: set[int] = set()

    for i in range(n):
        _, a0, a1 = edges[i]
        for j in range(i + 1, n):
            start_j, b0, b1 = edges[j]
            if j == i + 1:
                hit = _is_spike(a0, a1, b1)
            elif closed and i == 0 and j == n - 1 and n > 2:
                hit = _is_spike(b0, b1, a1)
            else:
                hit = segments_intersect(a0, a1, b0, b1)
            if hit:
                found.add(start_j)

    return sorted(found)


def linestring_has_self_intersection(coords: Sequence[Coord], closed: bool = True) -> bool:
    return bool(self_intersections(coords, closed))


def rings_intersections(ring: Sequence[Coord], other: Sequence[Coord]) -> list[int]:
    """
    Sorted original start indices of edges of `ring` that cross or overlap
    an edge of `other`.
    """
    other_edges = _edges(other)
    found: list[int] = []
    for start, a0, a1 in _edges(ring):
        for _, b0, b1 in other_edges:
            if segments_cross_or_overlap(a0, a1, b0, b1):
                found.append(start)
                break
    return found


# ============================================================
# Rings
# ============================================================

def ring_orientation(coords: Sequence[Coord]) -> Orientation:
    """
    Winding direction of a closed ring.

    A ring whose distinct vertices all lie on one line has no winding and is
    reported as COLLINEAR; otherwise GEOS decides the direction.
    """
    points = [c for _, c in remove_repeated_points(coords)]
    if len(points) > 1 and same_coord(points[0], points[-1]):
        points.pop()
    if len(points) < 3 or all(points_are_collinear(points[0], points[1], p) for p in points[2:]):
        return Orientation.COLLINEAR

    ring = shapely.LinearRing([tuple(p) for p in points])
    return Orientation.COUNTERCLOCKWISE if ring.is_ccw else Orientation.CLOCKWISE


class PointLocation(str, Enum):
    INSIDE = "inside"
    OUTSIDE = "outside"
    BOUNDARY = "boundary"


def points_in_ring(points: Sequence[Coord], ring: Sequence[Coord]) -> list[PointLocation]:
    """
    Locate many points against one closed ring.

    The ring is built and prepared once, so this is the form to use when a
    whole ring is tested against another.

    Args:
        points: Points to locate
        ring: Closed ring with at least three distinct vertices

    Returns:
        One PointLocation per input point, in input order
    """
    boundary = shapely.LinearRing([tuple(c) for c in ring])
    area = shapely.Polygon(boundary)
    shapely.prepare(boundary)
    shapely.prepare(area)

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    on_boundary = shapely.intersects_xy(boundary, xs, ys)
    inside = shapely.contains_xy(area, xs, ys)

    locations = []
    for touches, contained in zip(on_boundary, inside):
        if touches:
            locations.append(PointLocation.BOUNDARY)
        elif contained:
            locations.append(PointLocation.INSIDE)
        else:
            locations.append(PointLocation.OUTSIDE)
    return locations


def point_in_ring(point: Coord, ring: Sequence[Coord]) -> PointLocation:
    """Locate a point against a closed ring."""
    return points_in_ring([point], ring)[0]
