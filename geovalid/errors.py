"""
Custom exceptions for geovalid.

An invalid geometry is never an exception: it produces a report. The
exceptions here signal programming errors, either in the caller (passing
something that is not a geometry) or in the engine itself (an internal
invariant broken while assembling a report).

Usage:
    from geovalid.errors import GeoValidError, ErrorCode

    try:
        report = explain_invalidity(geom)
    except GeoValidError as e:
        logger.error("Validity check failed", extra=e.to_dict())
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes."""

    INTERNAL_INVARIANT = "INTERNAL_INVARIANT"
    UNSUPPORTED_GEOMETRY = "UNSUPPORTED_GEOMETRY"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class GeoValidError(Exception):
    """Base exception for geovalid errors.

    Attributes:
        message: Human-readable error message
        code: ErrorCode for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a standardized error dict."""
        result = {
            "error": self.message,
            "code": self.code.value,
        }
        if self.details:
            result["details"] = self.details
        return result


class PositionKindMismatchError(GeoValidError):
    """Raised when a member report carries a position the parent cannot wrap.

    This is an engine bug, never a property of the input geometry.
    """

    def __init__(self, parent_kind: str, position: Any):
        super().__init__(
            message=f"Cannot nest {type(position).__name__} inside a {parent_kind} position",
            code=ErrorCode.INTERNAL_INVARIANT,
            details={"parent_kind": parent_kind, "position": repr(position)},
        )
        self.parent_kind = parent_kind
        self.position = position


class UnsupportedGeometryError(GeoValidError):
    """Raised when the value handed to the engine is not a known geometry."""

    def __init__(self, value: Any):
        type_name = type(value).__name__
        super().__init__(
            message=f"Unsupported geometry type: {type_name}",
            code=ErrorCode.UNSUPPORTED_GEOMETRY,
            details={"type": type_name},
        )
