"""
Pytest configuration and fixtures for geovalid tests.

This module provides:
- Path configuration for imports
- Test environment variables
- Sample geometries
"""

import os
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

os.environ.setdefault("LOG_LEVEL", "DEBUG")

from geovalid.geometry import (  # noqa: E402
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)


# ============================================================================
# Sample Geometry Fixtures
# ============================================================================

@pytest.fixture
def square_ring():
    """Counterclockwise 10x10 square, closed."""
    return [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]


@pytest.fixture
def clockwise_hole():
    """Clockwise 2x2 square inside the 10x10 square."""
    return [(2, 2), (2, 4), (4, 4), (4, 2), (2, 2)]


@pytest.fixture
def bowtie_ring():
    """Figure-eight ring whose edges 0 and 2 cross at (0.5, 0.5)."""
    return [(0, 0), (1, 1), (1, 0), (0, 1), (0, 0)]


@pytest.fixture
def sample_geometries(square_ring, clockwise_hole, bowtie_ring):
    """A mix of valid and invalid geometries of every kind."""
    return [
        Point(0, 0),
        Point(float("nan"), 0),
        LineString([(0, 0), (1, 1)]),
        LineString([]),
        LineString([(0, 0), (0, 0)]),
        Polygon(square_ring, [clockwise_hole]),
        Polygon(bowtie_ring),
        MultiPoint([(0, float("inf")), (float("nan"), 1)]),
        MultiLineString([[(0, 0), (1, 1)], [(0, 0), (0, 0)]]),
        MultiPolygon([Polygon(square_ring), Polygon(bowtie_ring)]),
        GeometryCollection([Point(1, 1), LineString([(0, 0)])]),
        GeometryCollection([]),
    ]
