"""Tests for export/wkt.py"""
import pytest

from common.types import GeoPoint
from export.wkt import format_linestring, format_point, format_polygon, to_csv_row


A = GeoPoint(37.5, -121.5)
B = GeoPoint(37.6, -121.5)
C = GeoPoint(37.6, -121.4)


def test_point():
    assert format_point(A) == "POINT (-121.5 37.5)"


def test_linestring_longitude_first():
    assert format_linestring([A, B]) == "LINESTRING (-121.5 37.5,-121.5 37.6)"


def test_linestring_empty():
    assert format_linestring([]) == "LINESTRING EMPTY"


def test_polygon_closes_ring():
    assert format_polygon([A, B, C]) == \
        "POLYGON ((-121.5 37.5,-121.5 37.6,-121.4 37.6,-121.5 37.5))"


def test_polygon_already_closed():
    assert format_polygon([A, B, C, A]) == format_polygon([A, B, C])


def test_polygon_empty():
    assert format_polygon([]) == "POLYGON EMPTY"


def test_csv_row():
    row = to_csv_row("LINESTRING EMPTY", "nolaSouth", "starting at end of C3")
    assert row == '"LINESTRING EMPTY", "nolaSouth", "starting at end of C3"'


@pytest.mark.parametrize("points", [[A], [A, B], [A, B, A]])
def test_polygon_too_few_points(points):
    with pytest.raises(ValueError, match="at least 3"):
        format_polygon(points)
