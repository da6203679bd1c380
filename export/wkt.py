"""
WKT export of traverse results.

Coordinates are written `longitude latitude`, the axis order WKT consumers
(QGIS delimited-text layers, PostGIS) expect for geographic data. Rows are
produced in the quoted `"<wkt>", "<name>", "<description>"` form that can be
pasted into a delimited-text layer file.
"""

from typing import Sequence

from common.types import GeoPoint


def _coordinates(points: Sequence[GeoPoint]) -> str:
    return ",".join(p.to_wkt_pair() for p in points)


def format_point(point: GeoPoint) -> str:
    return f"POINT ({point.to_wkt_pair()})"


def format_linestring(points: Sequence[GeoPoint]) -> str:
    """Format points as a WKT LINESTRING.

    >>> format_linestring([GeoPoint(51.0, 0.0), GeoPoint(51.1, 0.1)])
    'LINESTRING (0.0 51.0,0.1 51.1)'
    """
    if not points:
        return "LINESTRING EMPTY"
    return f"LINESTRING ({_coordinates(points)})"


def format_polygon(points: Sequence[GeoPoint]) -> str:
    """Format points as a single-ring WKT POLYGON.

    The ring is closed by repeating the first point when the traverse
    does not already end on it. No survey closure check is made.

    Raises
    ------
    ValueError
        If the closed ring would hold fewer than four positions, which
        WKT does not allow.
    """
    if not points:
        return "POLYGON EMPTY"
    ring = list(points)
    if ring[0] != ring[-1]:
        ring.append(ring[0])
    if len(ring) < 4:
        raise ValueError(
            f"A polygon ring needs at least 3 distinct points, got {len(points)} point(s)"
        )
    return f"POLYGON (({_coordinates(ring)}))"


def to_csv_row(wkt: str, name: str = "", description: str = "") -> str:
    """Quote a WKT string with its name and description as one delimited row."""
    return f'"{wkt}", "{name}", "{description}"'
