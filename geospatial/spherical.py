"""
Great-Circle Calculations on a Spherical Earth.

This module provides the projection primitives used to walk a traverse:
forward projection along a bearing, initial and final bearings between two
points, and angle normalization.

Scientific Context
------------------
Domain: Spherical trigonometry, survey computation
Model: Sphere of fixed mean radius (6 371 000 m by default)

Why a Sphere Is Acceptable Here
-------------------------------
Survey calls are tens to hundreds of feet long. Over such distances the
difference between the spherical and WGS84 solutions is well below the
precision of the recorded bearings (one second of arc). The whole traverse
uses one model, so its shape is internally consistent.

Implementation
--------------
This module wraps the `pyproj` library's `Geod` built on a sphere
(a = b). On a sphere GeographicLib's geodesic is the great circle,
so the results match the classic navigation formulae:
    φ2 = asin(sin φ1 cos δ + cos φ1 sin δ cos θ)
    λ2 = λ1 + atan2(sin θ sin δ cos φ1, cos δ − sin φ1 sin φ2)

References
----------
- Karney, C.F.F. (2013). Algorithms for geodesics. Journal of Geodesy, 87(1), 43-55.
- Veness, C. Calculate distance, bearing and more between Latitude/Longitude points.
"""

from functools import lru_cache
from typing import Tuple

import numpy as np
from pyproj import Geod

from common.constants import GeodeticConstants
from common.types import GeoPoint

EARTH_RADIUS_M = GeodeticConstants.EARTH_MEAN_RADIUS.value


@lru_cache(maxsize=8)
def sphere_geod(radius_m: float = EARTH_RADIUS_M) -> Geod:
    """Return the geodesic calculator for a sphere of `radius_m` meters."""
    if radius_m <= 0:
        raise ValueError(f"Sphere radius must be positive, got {radius_m}")
    return Geod(a=radius_m, b=radius_m)


def normalize_360(degrees: float) -> float:
    """Normalize an angle to [0, 360).

    Parameters
    ----------
    degrees : float
        Any angle in degrees.

    Returns
    -------
    float
        Equivalent angle in [0, 360).

    Notes
    -----
    Tiny negative inputs make the floating modulo return exactly 360.0;
    that case is folded back to 0.
    """
    wrapped = float(np.mod(float(degrees), GeodeticConstants.FULL_CIRCLE_DEG))
    if wrapped >= GeodeticConstants.FULL_CIRCLE_DEG:
        wrapped = 0.0
    return wrapped


def destination_point(
    origin: GeoPoint,
    distance_m: float,
    bearing_deg: float,
    radius_m: float = EARTH_RADIUS_M
) -> GeoPoint:
    """Project a point along a great circle.

    Parameters
    ----------
    origin : GeoPoint
        Starting point.
    distance_m : float
        Distance to travel in meters.
    bearing_deg : float
        Initial bearing in degrees clockwise from north.
    radius_m : float
        Radius of the sphere.

    Returns
    -------
    GeoPoint
        The destination point.

    Examples
    --------
    >>> p = destination_point(GeoPoint(0.0, 0.0), 111_194.93, 90.0)
    >>> round(p.longitude, 4)
    1.0
    """
    lon2, lat2, _ = sphere_geod(radius_m).fwd(
        origin.longitude, origin.latitude, normalize_360(bearing_deg), distance_m
    )
    return GeoPoint(latitude=float(lat2), longitude=float(lon2))


def inverse(
    start: GeoPoint,
    end: GeoPoint,
    radius_m: float = EARTH_RADIUS_M
) -> Tuple[float, float, float]:
    """Solve the inverse problem between two points.

    Returns
    -------
    Tuple[float, float, float]
        (forward_azimuth_deg, back_azimuth_deg, distance_m), azimuths in
        [0, 360). The back azimuth is the bearing at `end` looking back
        toward `start`.
    """
    az_forward, az_back, distance_m = sphere_geod(radius_m).inv(
        start.longitude, start.latitude, end.longitude, end.latitude
    )
    return normalize_360(az_forward), normalize_360(az_back), float(distance_m)


def initial_bearing(
    start: GeoPoint,
    end: GeoPoint,
    radius_m: float = EARTH_RADIUS_M
) -> float:
    """Bearing at `start` of the great circle toward `end`, in [0, 360)."""
    return inverse(start, end, radius_m)[0]


def final_bearing(
    start: GeoPoint,
    end: GeoPoint,
    radius_m: float = EARTH_RADIUS_M
) -> float:
    """Bearing of travel on arrival at `end` when coming from `start`.

    Computed as the initial bearing from `end` back to `start`, reversed.
    For a traverse this is the tangent direction of the incoming leg at
    its far end.
    """
    return normalize_360(
        initial_bearing(end, start, radius_m) + GeodeticConstants.HALF_CIRCLE_DEG
    )


def distance(
    start: GeoPoint,
    end: GeoPoint,
    radius_m: float = EARTH_RADIUS_M
) -> float:
    """Great-circle distance in meters."""
    return inverse(start, end, radius_m)[2]
