"""
Public validity API.

Usage:
    from geovalid import is_valid, explain_invalidity
    from geovalid.geometry import LineString

    line = LineString([(0, 0), (0, 0)])
    is_valid(line)             # False
    explain_invalidity(line)   # [ProblemAtPosition(TOO_FEW_POINTS, LineStringPosition(...))]

Both functions agree by construction: is_valid() is True exactly when
explain_invalidity() returns None.
"""

from .config import Settings, get_settings
from .geometry import Geometry
from .logger import get_logger, log_check
from .problems import ProblemAtPosition
from .rules import geometry_problems

logger = get_logger(__name__)


@log_check(logger, "is_valid")
def is_valid(geometry: Geometry, settings: Settings | None = None) -> bool:
    """
    Check whether a geometry is valid, stopping at the first violation.

    Args:
        geometry: Geometry value to check
        settings: Optional settings override (default: get_settings())

    Returns:
        True if the geometry has no validity problem
    """
    problems = geometry_problems(geometry, settings or get_settings())
    return next(problems, None) is None


@log_check(logger, "explain_invalidity")
def explain_invalidity(
    geometry: Geometry,
    settings: Settings | None = None,
) -> list[ProblemAtPosition] | None:
    """
    List every validity problem of a geometry.

    Args:
        geometry: Geometry value to check
        settings: Optional settings override (default: get_settings())

    Returns:
        None if the geometry is valid, otherwise the non-empty list of
        problems in traversal order
    """
    problems = list(geometry_problems(geometry, settings or get_settings()))
    return problems or None
