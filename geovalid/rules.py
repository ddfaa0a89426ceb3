"""
Validity rules, one per geometry kind.

Every rule is a generator of ProblemAtPosition in traversal order (members
ascending, exterior ring before interiors, coordinates ascending). Consumers
that only need a verdict stop at the first item; consumers that need the
full explanation drain it.

Rule summary:
- Point:              coordinate is finite
- LineString:         >= 2 distinct points, every coordinate finite
- Polygon:            per ring: >= 4 points, closed, finite, no
                      self-intersection; interiors wind opposite to the
                      exterior, lie inside it, do not nest, and no
                      two rings cross
- Multi* / GeometryCollection: every member valid, positions tagged
"""

from typing import Callable, Iterator, Sequence

from .config import Settings
from .errors import UnsupportedGeometryError
from .geometry import (
    Coord,
    Geometry,
    GeometryCollection,
    GeometryKind,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from .predicates import (
    Orientation,
    PointLocation,
    check_too_few_points,
    coord_is_not_finite,
    points_in_ring,
    ring_orientation,
    rings_intersections,
    self_intersections,
)
from .problems import (
    CoordinatePosition,
    LineStringPosition,
    PointPosition,
    PolygonPosition,
    Problem,
    ProblemAtPosition,
    RingRole,
    tag_member,
)

Rule = Callable[[Geometry, Settings], Iterator[ProblemAtPosition]]


# ============================================================
# Point / LineString
# ============================================================

def point_problems(point: Point, settings: Settings) -> Iterator[ProblemAtPosition]:
    if coord_is_not_finite(point.coord):
        yield ProblemAtPosition(Problem.NOT_FINITE, PointPosition())


def linestring_problems(line: LineString, settings: Settings) -> Iterator[ProblemAtPosition]:
    """
    In PostGIS a LineString needs at least 2 points. Repeated points are
    collapsed first, so [(0, 0), (0, 0)] is too short. An empty LineString
    is invalid here even though GEOS accepts it.
    """
    if check_too_few_points(line.coords, is_ring=False):
        yield ProblemAtPosition(
            Problem.TOO_FEW_POINTS, LineStringPosition(CoordinatePosition(0))
        )

    for i, coord in enumerate(line.coords):
        if coord_is_not_finite(coord):
            yield ProblemAtPosition(
                Problem.NOT_FINITE, LineStringPosition(CoordinatePosition(i))
            )


# ============================================================
# Polygon
# ============================================================

def _at(role: RingRole, index: int | None = None) -> PolygonPosition:
    return PolygonPosition(role, None if index is None else CoordinatePosition(index))


def _ring_structure_problems(ring: LineString, role: RingRole) -> list[ProblemAtPosition]:
    """Point count, closure and finiteness of a single ring."""
    problems = []
    coords = ring.coords

    if check_too_few_points(coords, is_ring=True):
        problems.append(ProblemAtPosition(Problem.TOO_FEW_POINTS, _at(role, 0)))

    # Closure is only decidable between finite endpoints
    if (
        coords
        and not coord_is_not_finite(coords[0])
        and not coord_is_not_finite(coords[-1])
        and not ring.is_closed()
    ):
        problems.append(ProblemAtPosition(Problem.RING_NOT_CLOSED, _at(role)))

    for i, coord in enumerate(coords):
        if coord_is_not_finite(coord):
            problems.append(ProblemAtPosition(Problem.NOT_FINITE, _at(role, i)))

    return problems


def _self_intersection_problems(ring: LineString, role: RingRole) -> Iterator[ProblemAtPosition]:
    for index in self_intersections(ring.coords, closed=True):
        yield ProblemAtPosition(Problem.SELF_INTERSECTION, _at(role, index))


def _encloses(outer: Sequence[Coord], inner: Sequence[Coord]) -> bool:
    """Every vertex of `inner` is inside or on `outer`, and at least one is strictly inside."""
    locations = points_in_ring(inner, outer)
    return PointLocation.OUTSIDE not in locations and PointLocation.INSIDE in locations


def polygon_problems(polygon: Polygon, settings: Settings) -> Iterator[ProblemAtPosition]:
    """
    Geometric checks (self-intersection, orientation, containment, nesting,
    ring crossings) only run on rings that are closed, finite and long enough.
    """
    exterior = polygon.exterior
    exterior_role = RingRole.exterior()

    structure = _ring_structure_problems(exterior, exterior_role)
    yield from structure
    exterior_sound = not structure

    sound_rings = []
    sound_holes = []
    exterior_orientation = None
    if exterior_sound:
        yield from _self_intersection_problems(exterior, exterior_role)
        sound_rings.append(exterior.coords)
        exterior_orientation = ring_orientation(exterior.coords)

    for i, ring in enumerate(polygon.interiors):
        role = RingRole.interior(i)
        structure = _ring_structure_problems(ring, role)
        if structure:
            yield from structure
            continue

        yield from _self_intersection_problems(ring, role)

        if exterior_sound:
            if (
                settings.check_ring_orientation
                and exterior_orientation is not Orientation.COLLINEAR
                and ring_orientation(ring.coords) is exterior_orientation
            ):
                yield ProblemAtPosition(Problem.WRONG_ORIENTATION, _at(role))

            if (
                settings.check_ring_containment
                and PointLocation.OUTSIDE in points_in_ring(ring.coords, exterior.coords)
            ):
                yield ProblemAtPosition(Problem.INTERIOR_RING_NOT_CONTAINED, _at(role))

        if settings.check_ring_containment and any(
            _encloses(hole, ring.coords) or _encloses(ring.coords, hole)
            for hole in sound_holes
        ):
            yield ProblemAtPosition(Problem.NESTED_INTERIOR_RING, _at(role))

        if settings.check_ring_intersections:
            crossing: set[int] = set()
            for other in sound_rings:
                crossing.update(rings_intersections(ring.coords, other))
            for index in sorted(crossing):
                yield ProblemAtPosition(Problem.INTERSECTING_RINGS, _at(role, index))

        sound_rings.append(ring.coords)
        sound_holes.append(ring.coords)


# ============================================================
# Collections
# ============================================================

def multipoint_problems(multi: MultiPoint, settings: Settings) -> Iterator[ProblemAtPosition]:
    """PostGIS puts no constraint on MultiPoint; we still require finite points."""
    for i, point in enumerate(multi.points):
        yield from tag_member(GeometryKind.MULTI_POINT, i, point_problems(point, settings))


def multilinestring_problems(
    multi: MultiLineString, settings: Settings
) -> Iterator[ProblemAtPosition]:
    for i, line in enumerate(multi.lines):
        yield from tag_member(
            GeometryKind.MULTI_LINE_STRING, i, linestring_problems(line, settings)
        )


def multipolygon_problems(multi: MultiPolygon, settings: Settings) -> Iterator[ProblemAtPosition]:
    for i, polygon in enumerate(multi.polygons):
        yield from tag_member(
            GeometryKind.MULTI_POLYGON, i, polygon_problems(polygon, settings)
        )


def collection_problems(
    collection: GeometryCollection, settings: Settings
) -> Iterator[ProblemAtPosition]:
    for i, geometry in enumerate(collection.geometries):
        yield from tag_member(
            GeometryKind.GEOMETRY_COLLECTION, i, geometry_problems(geometry, settings)
        )


# ============================================================
# Dispatch
# ============================================================

RULES: dict[GeometryKind, Rule] = {
    GeometryKind.POINT: point_problems,
    GeometryKind.LINE_STRING: linestring_problems,
    GeometryKind.POLYGON: polygon_problems,
    GeometryKind.MULTI_POINT: multipoint_problems,
    GeometryKind.MULTI_LINE_STRING: multilinestring_problems,
    GeometryKind.MULTI_POLYGON: multipolygon_problems,
    GeometryKind.GEOMETRY_COLLECTION: collection_problems,
}

_missing = set(GeometryKind) - set(RULES)
if _missing:
    raise ValueError(f"No validity rule registered for: {sorted(k.value for k in _missing)}")


def geometry_problems(geometry: Geometry, settings: Settings) -> Iterator[ProblemAtPosition]:
    """
    Problems of any geometry, dispatched on its kind tag.

    Raises:
        UnsupportedGeometryError: the value carries no known GeometryKind
    """
    rule = RULES.get(getattr(geometry, "kind", None))
    if rule is None:
        raise UnsupportedGeometryError(geometry)
    return rule(geometry, settings)
