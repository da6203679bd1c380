"""
Export Module for the Traverse Reconstruction System.

Renders result sequences as WKT geometry text.
"""

from export.wkt import format_point, format_linestring, format_polygon, to_csv_row

__all__ = [
    "format_point",
    "format_linestring",
    "format_polygon",
    "to_csv_row",
]
