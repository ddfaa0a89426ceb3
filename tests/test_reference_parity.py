"""
Cross-check verdicts against GEOS (through shapely).

Where both engines implement the same OGC rule the verdicts must agree.
Deliberate divergences are pinned explicitly so they stay visible.
"""

import pytest
import shapely.geometry as shapely_geometry

from geovalid import is_valid
from geovalid.geometry import LineString, MultiPolygon, Polygon


def to_shapely_polygon(exterior, interiors=()):
    return shapely_geometry.Polygon(exterior, list(interiors))


class TestLineStringParity:
    """LineString verdicts versus GEOS."""

    @pytest.mark.parametrize("points", [
        [(0.0, 0.0), (1.0, 1.0)],
        [(0.0, 0.0), (0.0, 0.0)],
        [(0.0, 0.0), (1.0, 0.0), (0.0, 0.0)],
        [(0.0, 0.0), (2.0, 2.0), (2.0, 0.0), (0.0, 2.0)],
    ])
    def test_same_verdict(self, points):
        ours = is_valid(LineString(points))
        theirs = shapely_geometry.LineString(points).is_valid
        assert ours == theirs

    def test_empty_linestring_diverges(self):
        """Empty LineStrings are invalid here and valid in GEOS."""
        assert is_valid(LineString([])) is False
        assert shapely_geometry.LineString().is_valid is True


class TestPolygonParity:
    """Polygon verdicts versus GEOS."""

    @pytest.mark.parametrize("exterior, interiors", [
        ([(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)], []),
        ([(0, 0), (1, 0), (0, 1), (0, 0)], []),
        ([(0, 0), (1, 1), (1, 0), (0, 1), (0, 0)], []),
        (
            [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)],
            [[(2, 2), (2, 4), (4, 4), (4, 2), (2, 2)]],
        ),
        (
            [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)],
            [[(0, 5), (3, 7), (3, 3), (0, 5)]],
        ),
        (
            [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)],
            [[(20, 20), (20, 22), (22, 22), (22, 20), (20, 20)]],
        ),
        (
            [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)],
            [[(8, 2), (8, 4), (12, 4), (12, 2), (8, 2)]],
        ),
        (
            [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)],
            [
                [(2, 2), (2, 6), (6, 6), (6, 2), (2, 2)],
                [(4, 4), (4, 8), (8, 8), (8, 4), (4, 4)],
            ],
        ),
        (
            [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)],
            [
                [(1, 1), (1, 9), (9, 9), (9, 1), (1, 1)],
                [(3, 3), (3, 5), (5, 5), (5, 3), (3, 3)],
            ],
        ),
        ([(0, 0), (4, 0), (4, 4), (4, 6), (4, 4), (0, 4), (0, 0)], []),
    ])
    def test_same_verdict(self, exterior, interiors):
        ours = is_valid(Polygon(exterior, interiors))
        theirs = to_shapely_polygon(exterior, interiors).is_valid
        assert ours == theirs

    def test_multipolygon_member_verdict(self):
        square = [(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)]
        bowtie = [(5, 5), (6, 6), (6, 5), (5, 6), (5, 5)]
        ours = is_valid(MultiPolygon([Polygon(square), Polygon(bowtie)]))
        theirs = shapely_geometry.MultiPolygon(
            [to_shapely_polygon(square), to_shapely_polygon(bowtie)]
        ).is_valid
        assert ours is theirs is False

    def test_hole_orientation_diverges(self):
        """GEOS ignores ring direction; holes must wind against the shell here."""
        exterior = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
        hole = [(2, 2), (4, 2), (4, 4), (2, 4), (2, 2)]
        assert is_valid(Polygon(exterior, [hole])) is False
        assert to_shapely_polygon(exterior, [hole]).is_valid is True
