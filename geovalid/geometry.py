"""
Geometry value types consumed by the validity engine.

These are plain, read-only containers. Constructors never validate their
input: an empty LineString, a one-point ring or an unclosed ring are all
representable, because deciding whether they are valid is the engine's job.

Usage:
    from geovalid.geometry import LineString, Polygon

    line = LineString([(0, 0), (1, 1)])
    square = Polygon([(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)])
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Iterable, Iterator


class GeometryKind(str, Enum):
    """Tag identifying the variant of a geometry value."""

    POINT = "Point"
    LINE_STRING = "LineString"
    POLYGON = "Polygon"
    MULTI_POINT = "MultiPoint"
    MULTI_LINE_STRING = "MultiLineString"
    MULTI_POLYGON = "MultiPolygon"
    GEOMETRY_COLLECTION = "GeometryCollection"


@dataclass(frozen=True)
class Coord:
    """A 2D coordinate."""

    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


def _to_coord(value: Any) -> Coord:
    if isinstance(value, Coord):
        return value
    if isinstance(value, Point):
        return value.coord
    x, y = value
    return Coord(x, y)


def _to_coords(values: Iterable[Any]) -> tuple[Coord, ...]:
    return tuple(_to_coord(v) for v in values)


# ============================================================
# Primitive geometries
# ============================================================

@dataclass(frozen=True, init=False)
class Point:
    """A single position."""

    kind: ClassVar[GeometryKind] = GeometryKind.POINT
    coord: Coord

    def __init__(self, x: Any, y: float | None = None):
        coord = _to_coord(x) if y is None else Coord(x, y)
        object.__setattr__(self, "coord", coord)

    @property
    def x(self) -> float:
        return self.coord.x

    @property
    def y(self) -> float:
        return self.coord.y


@dataclass(frozen=True, init=False)
class LineString:
    """An ordered sequence of coordinates, open or closed."""

    kind: ClassVar[GeometryKind] = GeometryKind.LINE_STRING
    coords: tuple[Coord, ...]

    def __init__(self, coords: Iterable[Any] = ()):
        object.__setattr__(self, "coords", _to_coords(coords))

    def __len__(self) -> int:
        return len(self.coords)

    def __iter__(self) -> Iterator[Coord]:
        return iter(self.coords)

    def is_closed(self) -> bool:
        """True when the first and last coordinates are identical."""
        if not self.coords:
            return False
        first, last = self.coords[0], self.coords[-1]
        return first.x == last.x and first.y == last.y

    def lines(self) -> Iterator[tuple[Coord, Coord]]:
        """Yield consecutive (start, end) segments."""
        for i in range(len(self.coords) - 1):
            yield self.coords[i], self.coords[i + 1]


def _to_ring(value: Any) -> LineString:
    return value if isinstance(value, LineString) else LineString(value)


@dataclass(frozen=True, init=False)
class Polygon:
    """An exterior ring plus zero or more interior rings (holes)."""

    kind: ClassVar[GeometryKind] = GeometryKind.POLYGON
    exterior: LineString
    interiors: tuple[LineString, ...]

    def __init__(self, exterior: Any = (), interiors: Iterable[Any] = ()):
        object.__setattr__(self, "exterior", _to_ring(exterior))
        object.__setattr__(self, "interiors", tuple(_to_ring(r) for r in interiors))

    def rings(self) -> Iterator[LineString]:
        """Exterior first, then interiors in order."""
        yield self.exterior
        yield from self.interiors


# ============================================================
# Collections
# ============================================================

@dataclass(frozen=True, init=False)
class MultiPoint:
    kind: ClassVar[GeometryKind] = GeometryKind.MULTI_POINT
    points: tuple[Point, ...]

    def __init__(self, points: Iterable[Any] = ()):
        object.__setattr__(
            self, "points", tuple(p if isinstance(p, Point) else Point(p) for p in points)
        )

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)


@dataclass(frozen=True, init=False)
class MultiLineString:
    kind: ClassVar[GeometryKind] = GeometryKind.MULTI_LINE_STRING
    lines: tuple[LineString, ...]

    def __init__(self, lines: Iterable[Any] = ()):
        object.__setattr__(self, "lines", tuple(_to_ring(line) for line in lines))

    def __iter__(self) -> Iterator[LineString]:
        return iter(self.lines)


@dataclass(frozen=True, init=False)
class MultiPolygon:
    kind: ClassVar[GeometryKind] = GeometryKind.MULTI_POLYGON
    polygons: tuple[Polygon, ...]

    def __init__(self, polygons: Iterable[Polygon] = ()):
        object.__setattr__(self, "polygons", tuple(polygons))

    def __iter__(self) -> Iterator[Polygon]:
        return iter(self.polygons)


@dataclass(frozen=True, init=False)
class GeometryCollection:
    """Heterogeneous collection; members may themselves be collections."""

    kind: ClassVar[GeometryKind] = GeometryKind.GEOMETRY_COLLECTION
    geometries: tuple["Geometry", ...]

    def __init__(self, geometries: Iterable["Geometry"] = ()):
        object.__setattr__(self, "geometries", tuple(geometries))

    def __iter__(self) -> Iterator["Geometry"]:
        return iter(self.geometries)


Geometry = (
    Point
    | LineString
    | Polygon
    | MultiPoint
    | MultiLineString
    | MultiPolygon
    | GeometryCollection
)
