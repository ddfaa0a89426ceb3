"""
geovalid

OGC Simple Features validity checking with exhaustive, precisely located
explanations of every violation.
"""

__version__ = "0.1.0"

from geovalid.batch import BatchValidityResult, check_many
from geovalid.config import Settings, get_settings
from geovalid.errors import GeoValidError
from geovalid.geometry import (
    Coord,
    GeometryCollection,
    GeometryKind,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from geovalid.problems import Problem, ProblemAtPosition
from geovalid.validity import explain_invalidity, is_valid

__all__ = [
    "is_valid",
    "explain_invalidity",
    "check_many",
    "BatchValidityResult",
    "Problem",
    "ProblemAtPosition",
    "GeoValidError",
    "Settings",
    "get_settings",
    "Coord",
    "GeometryKind",
    "Point",
    "LineString",
    "Polygon",
    "MultiPoint",
    "MultiLineString",
    "MultiPolygon",
    "GeometryCollection",
]
