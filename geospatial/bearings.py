"""
Bearing and Angle Parsing.

Legal descriptions write directions as quadrant bearings
(`N45°30'15"E`: 45°30'15" east of north) and curve angles as
degrees-minutes-seconds. This module converts both into decimal degrees and
is the only place in the system that knows their textual grammar.

Conventions
-----------
- Azimuths are degrees clockwise from north in [0, 360).
- Quadrant bearings are measured from north or south toward east or west:
    N θ E ->       θ
    S θ E -> 180 - θ
    S θ W -> 180 + θ
    N θ W -> 360 - θ
- A leading `-` is accepted in place of `N`.
"""

import re
from typing import Union

from common.constants import GeodeticConstants
from common.exceptions import FormatError
from geospatial.spherical import normalize_360

_ANGLE_PATTERN = re.compile(
    r"""^\ *(\d+)°?\ *(\d{1,2})'?\ *(\d{1,2})"?\ *$""",
    re.IGNORECASE | re.VERBOSE,
)

_BEARING_PATTERN = re.compile(
    r"""^\ *([NS-])?\ *(\d+)°?\ *(\d{1,2})'?\ *(\d{1,2})"?\ *([EW])?\ *$""",
    re.IGNORECASE | re.VERBOSE,
)

_AZIMUTH_PATTERN = re.compile(r"^\s*[-+]?\d+(?:\.\d*)?\s*$")

AngleInput = Union[str, float, int]


def _dms_to_degrees(degrees: str, minutes: str, seconds: str) -> float:
    return (
        int(degrees)
        + int(minutes) / GeodeticConstants.MINUTES_PER_DEGREE
        + int(seconds) / GeodeticConstants.SECONDS_PER_DEGREE
    )


def parse_angle(text: str) -> float:
    """Convert a degrees-minutes-seconds string to decimal degrees.

    Parameters
    ----------
    text : str
        Angle such as `12°30'00"` or `12 30 00`. Minutes and seconds are
        one or two digits and are both required.

    Returns
    -------
    float
        The angle in decimal degrees (not normalized).

    Raises
    ------
    FormatError
        If the text does not match the angle grammar.

    Examples
    --------
    >>> parse_angle("57°17'45\\"")
    57.29583333333333
    """
    match = _ANGLE_PATTERN.match(str(text))
    if match is None:
        raise FormatError(f"Invalid angle: {text!r}")
    return _dms_to_degrees(*match.groups())


def parse_bearing(bearing: AngleInput) -> float:
    """Convert a bearing to an azimuth in degrees.

    Parameters
    ----------
    bearing : str or float
        Quadrant bearing (`N45°30'15"E`, `S45 0 0 W`), or an azimuth
        already in degrees given as a number or numeric string.

    Returns
    -------
    float
        Azimuth in [0, 360).

    Raises
    ------
    FormatError
        If the bearing is neither numeric nor a valid quadrant bearing.
    """
    if isinstance(bearing, bool):
        raise FormatError(f"Invalid bearing: {bearing!r}")
    if isinstance(bearing, (int, float)):
        return normalize_360(bearing)

    text = str(bearing)
    if _AZIMUTH_PATTERN.match(text):
        return normalize_360(float(text))

    match = _BEARING_PATTERN.match(text)
    if match is None:
        raise FormatError(f"Invalid bearing: {text!r}")

    leading, degrees, minutes, seconds, trailing = match.groups()
    leading = (leading or "").upper()
    trailing = (trailing or "").upper()

    angle = _dms_to_degrees(degrees, minutes, seconds)
    if trailing == "W":
        if leading == "S":
            angle += GeodeticConstants.HALF_CIRCLE_DEG
        else:
            angle = GeodeticConstants.FULL_CIRCLE_DEG - angle
    elif leading == "S":
        angle = GeodeticConstants.HALF_CIRCLE_DEG - angle

    return normalize_360(angle)


def opposite_bearing(bearing: AngleInput) -> float:
    """Azimuth pointing the other way along the same line."""
    return normalize_360(parse_bearing(bearing) + GeodeticConstants.HALF_CIRCLE_DEG)


def format_bearing(azimuth: float, quadrant: bool = False) -> str:
    """Format an azimuth as degrees-minutes-seconds.

    Parameters
    ----------
    azimuth : float
        Azimuth in degrees; normalized before formatting.
    quadrant : bool
        If True, write a quadrant bearing (`S45°0'0"W`) instead of a
        plain azimuth (`225°0'0"`).

    Returns
    -------
    str
        Formatted bearing, rounded to the nearest second.
    """
    full_circle_s = int(GeodeticConstants.FULL_CIRCLE_DEG * GeodeticConstants.SECONDS_PER_DEGREE)
    total_s = int(round(normalize_360(azimuth) * GeodeticConstants.SECONDS_PER_DEGREE)) % full_circle_s
    az = total_s / GeodeticConstants.SECONDS_PER_DEGREE

    if not quadrant:
        return _format_dms(total_s)

    if az <= 90.0:
        return "N" + _format_dms(total_s) + "E"
    if az <= 180.0:
        return "S" + _format_dms(180 * 3600 - total_s) + "E"
    if az < 270.0:
        return "S" + _format_dms(total_s - 180 * 3600) + "W"
    return "N" + _format_dms(full_circle_s - total_s) + "W"


def _format_dms(total_seconds: int) -> str:
    degrees, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{degrees}°{minutes}'{seconds}\""
