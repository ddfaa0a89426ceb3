"""
Problems, positions and the position-tagging aggregator.

A report is a list of ProblemAtPosition pairs. Positions nest to the depth
of the geometry: a problem on coordinate 7 of the second interior ring of
polygon 3 in a MultiPolygon is

    MultiPolygonPosition(GeometryPosition(3), RingRole.interior(1), CoordinatePosition(7))

and a GeometryCollection wraps whatever position its member produced.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar, Iterable, Iterator, NamedTuple, Union

from .errors import PositionKindMismatchError
from .geometry import GeometryKind


class Problem(str, Enum):
    """Kinds of validity violation."""

    NOT_FINITE = "NotFinite"
    TOO_FEW_POINTS = "TooFewPoints"
    RING_NOT_CLOSED = "RingNotClosed"
    SELF_INTERSECTION = "SelfIntersection"
    WRONG_ORIENTATION = "WrongOrientation"
    INTERIOR_RING_NOT_CONTAINED = "InteriorRingNotContained"
    INTERSECTING_RINGS = "IntersectingRings"
    NESTED_INTERIOR_RING = "NestedInteriorRing"


# ============================================================
# Leaf locators
# ============================================================

@dataclass(frozen=True)
class CoordinatePosition:
    """Index of a coordinate within a line-string-like sequence."""

    index: int


@dataclass(frozen=True)
class GeometryPosition:
    """Index of a member within a collection."""

    index: int


@dataclass(frozen=True)
class RingRole:
    """Which ring of a polygon: exterior (index None) or interior `index`."""

    index: int | None = None

    @classmethod
    def exterior(cls) -> "RingRole":
        return cls(None)

    @classmethod
    def interior(cls, index: int) -> "RingRole":
        return cls(index)

    @property
    def is_exterior(self) -> bool:
        return self.index is None


# ============================================================
# Positions, one variant per geometry kind
# ============================================================

@dataclass(frozen=True)
class PointPosition:
    kind: ClassVar[GeometryKind] = GeometryKind.POINT


@dataclass(frozen=True)
class LineStringPosition:
    kind: ClassVar[GeometryKind] = GeometryKind.LINE_STRING
    coord: CoordinatePosition


@dataclass(frozen=True)
class PolygonPosition:
    """A coordinate of a ring, or the whole ring when `coord` is None."""

    kind: ClassVar[GeometryKind] = GeometryKind.POLYGON
    ring: RingRole
    coord: CoordinatePosition | None


@dataclass(frozen=True)
class MultiPointPosition:
    kind: ClassVar[GeometryKind] = GeometryKind.MULTI_POINT
    member: GeometryPosition


@dataclass(frozen=True)
class MultiLineStringPosition:
    kind: ClassVar[GeometryKind] = GeometryKind.MULTI_LINE_STRING
    member: GeometryPosition
    coord: CoordinatePosition


@dataclass(frozen=True)
class MultiPolygonPosition:
    kind: ClassVar[GeometryKind] = GeometryKind.MULTI_POLYGON
    member: GeometryPosition
    ring: RingRole
    coord: CoordinatePosition | None


@dataclass(frozen=True)
class GeometryCollectionPosition:
    kind: ClassVar[GeometryKind] = GeometryKind.GEOMETRY_COLLECTION
    member: GeometryPosition
    inner: "Position"


Position = Union[
    PointPosition,
    LineStringPosition,
    PolygonPosition,
    MultiPointPosition,
    MultiLineStringPosition,
    MultiPolygonPosition,
    GeometryCollectionPosition,
]


class ProblemAtPosition(NamedTuple):
    problem: Problem
    position: Position


# ============================================================
# Aggregation
# ============================================================

# (parent kind, child position kind) -> wrapper
_NESTERS: dict[
    tuple[GeometryKind, GeometryKind], Callable[[GeometryPosition, Position], Position]
] = {
    (GeometryKind.MULTI_POINT, GeometryKind.POINT): lambda member, pos: MultiPointPosition(member),
    (GeometryKind.MULTI_LINE_STRING, GeometryKind.LINE_STRING): (
        lambda member, pos: MultiLineStringPosition(member, pos.coord)
    ),
    (GeometryKind.MULTI_POLYGON, GeometryKind.POLYGON): (
        lambda member, pos: MultiPolygonPosition(member, pos.ring, pos.coord)
    ),
}


def nest_position(parent_kind: GeometryKind, member: GeometryPosition, position: Position) -> Position:
    """
    Wrap a member's position one level deeper.

    Raises:
        PositionKindMismatchError: the position cannot belong to a member of
            `parent_kind` (an engine bug, not bad input)
    """
    if parent_kind is GeometryKind.GEOMETRY_COLLECTION:
        return GeometryCollectionPosition(member, position)
    nester = _NESTERS.get((parent_kind, getattr(position, "kind", None)))
    if nester is None:
        raise PositionKindMismatchError(parent_kind.value, position)
    return nester(member, position)


def tag_member(
    parent_kind: GeometryKind,
    index: int,
    problems: Iterable[ProblemAtPosition],
) -> Iterator[ProblemAtPosition]:
    """Prepend member `index` to every position of a member's problems, lazily."""
    member = GeometryPosition(index)
    for problem, position in problems:
        yield ProblemAtPosition(problem, nest_position(parent_kind, member, position))
