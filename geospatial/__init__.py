"""
Geospatial Module for the Traverse Reconstruction System.

All Earth-surface calculations system-wide originate from this module.
No downstream module projects points or parses bearings on its own.

This module provides:
- Bearing and angle parsing (quadrant bearings, DMS angles)
- Great-circle projection and bearings on a spherical Earth
"""

from geospatial.spherical import (
    EARTH_RADIUS_M,
    normalize_360,
    destination_point,
    initial_bearing,
    final_bearing,
    distance,
)

from geospatial.bearings import (
    parse_angle,
    parse_bearing,
    opposite_bearing,
    format_bearing,
)

__all__ = [
    # Spherical primitives
    "EARTH_RADIUS_M",
    "normalize_360",
    "destination_point",
    "initial_bearing",
    "final_bearing",
    "distance",
    # Bearings
    "parse_angle",
    "parse_bearing",
    "opposite_bearing",
    "format_bearing",
]
