"""
Circular Curve Resolution.

Given the tangent a curve starts on and its recorded radius, length and
delta, find where the curve ends.

Construction
------------
1. The incoming tangent is the final bearing of the previous leg
   (previous point -> starting point).
2. Swinging from that tangent by the turn-for-center (normally ±90°)
   and projecting one radius gives the curve's center.
3. The bearing from the center back to the starting point is rotated by
   the delta angle; projecting one radius along it gives the endpoint.
   Direction TRUE rotates clockwise (center on the right of travel),
   FALSE counter-clockwise.

Arc length is treated as laid out on the sphere's surface; the chord/arc
distinction within one curve is ignored, which is well below recording
precision for survey-scale radii.
"""

from typing import Any, Optional

from common.constants import GeodeticConstants
from common.exceptions import MissingContextError, UnknownDirectionError
from common.logging_config import get_logger
from common.types import ArcRecord, GeoPoint
from common.units import length_to_meters
from geospatial.bearings import parse_angle
from geospatial.spherical import (
    EARTH_RADIUS_M,
    destination_point,
    final_bearing,
    normalize_360,
)

logger = get_logger(__name__)

_DERIVE_DELTA = ("", "?")


def parse_direction(direction: Any) -> bool:
    """Interpret a TRUE/FALSE direction field.

    Raises
    ------
    UnknownDirectionError
        For anything other than TRUE or FALSE (case-insensitive).
    """
    text = str(direction).strip().upper()
    if text == "TRUE":
        return True
    if text == "FALSE":
        return False
    raise UnknownDirectionError(f"Unknown direction: {direction!r}")


def arc_delta(distance: float, radius: float) -> float:
    """Central angle in degrees of an arc of length `distance` on radius `radius`.

    Both lengths must be in the same unit.

    >>> round(arc_delta(100.0, 100.0), 4)
    57.2958
    """
    radius = float(radius)
    if radius <= 0:
        raise ValueError(f"Curve radius must be positive, got {radius}")
    return GeodeticConstants.central_angle_deg(float(distance), radius)


def resolve_delta(record: ArcRecord) -> float:
    """Delta angle of a curve: the recorded one, or derived from its length."""
    delta = record.delta
    if delta is None or (isinstance(delta, str) and delta.strip() in _DERIVE_DELTA):
        return arc_delta(record.distance, record.radius)
    if isinstance(delta, (int, float)) and not isinstance(delta, bool):
        return float(delta)
    return parse_angle(delta)


def resolve_turn(
    record: ArcRecord,
    clockwise: bool,
    default_turn: float = GeodeticConstants.RIGHT_ANGLE_DEG
) -> float:
    """Signed angle from the incoming tangent to the center.

    An explicit `turn_for_center` always wins. Without one the center is
    taken square to the tangent, on the side the curve bends toward.
    """
    turn = record.turn_for_center
    if turn is None or (isinstance(turn, str) and not turn.strip()):
        return default_turn if clockwise else -default_turn
    return float(turn)


def resolve_arc(
    previous_point: Optional[GeoPoint],
    starting_point: Optional[GeoPoint],
    record: ArcRecord,
    *,
    radius_m: float = EARTH_RADIUS_M,
    distance_unit: str = "foot",
    default_turn: float = GeodeticConstants.RIGHT_ANGLE_DEG
) -> GeoPoint:
    """Compute the far endpoint of a curve.

    Parameters
    ----------
    previous_point : GeoPoint
        The point before the curve's starting point.
    starting_point : GeoPoint
        Where the curve begins (the current traverse position).
    record : ArcRecord
        Curve call with references already resolved.
    radius_m : float
        Radius of the Earth sphere.
    distance_unit : str
        Unit of the record's radius and arc length.
    default_turn : float
        Turn-for-center magnitude used when the record has none.

    Returns
    -------
    GeoPoint
        End of the curve.

    Raises
    ------
    MissingContextError
        If either point is missing.
    UnknownDirectionError
        If the direction is neither TRUE nor FALSE.
    """
    if previous_point is None or starting_point is None:
        raise MissingContextError(
            f"Curve {record.label!r} needs two prior points to find its tangent"
        )

    clockwise = parse_direction(record.direction)
    delta = resolve_delta(record)
    turn = resolve_turn(record, clockwise, default_turn)
    curve_radius_m = length_to_meters(record.radius, distance_unit)

    tangent = final_bearing(previous_point, starting_point, radius_m)
    center_bearing = normalize_360(tangent + turn)
    center = destination_point(starting_point, curve_radius_m, center_bearing, radius_m)

    # Bearing at the center pointing away from the starting point
    radial = final_bearing(starting_point, center, radius_m)
    if clockwise:
        radial -= GeodeticConstants.HALF_CIRCLE_DEG - delta
    else:
        radial += GeodeticConstants.HALF_CIRCLE_DEG - delta

    endpoint = destination_point(center, curve_radius_m, normalize_360(radial), radius_m)

    logger.debug(
        f"Curve {record.label}: tangent={tangent:.6f} delta={delta:.6f} "
        f"turn={turn:+.1f} center=({center.latitude:.8f}, {center.longitude:.8f})"
    )
    return endpoint
