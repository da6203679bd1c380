"""
Geodetic and Survey Constants for Traverse Reconstruction.

This module provides the constants used by the spherical traverse model,
each with its unit and source so that every coordinate produced can be traced
back to the numbers it was computed from.

References
----------
- Mean Earth radius: IUGG, rounded as used by spherical navigation formulae
- International foot: International Yard and Pound Agreement, 1959
- U.S. survey foot: Federal Register Notice 60-5442, 1959
"""

from dataclasses import dataclass
from typing import Final
import numpy as np


@dataclass(frozen=True)
class Constant:
    """A geodetic constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The SI unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class GeodeticConstants:
    """Registry of constants used throughout the traverse system.

    Spherical Earth
    ---------------
    Traverses are reconstructed on a sphere. The radius below is the one
    used by the great-circle navigation formulae; survey-scale calls are
    short enough that the ellipsoidal correction is not applied.

    Survey Conventions
    ------------------
    Legal descriptions state distances in feet and bearings in degrees,
    minutes and seconds.
    """

    # =========================================================================
    # Spherical Earth Model
    # =========================================================================

    EARTH_MEAN_RADIUS: Final[Constant] = Constant(
        value=6_371_000.0,
        uncertainty=10.0,
        unit="m",
        source="IUGG mean radius (rounded)",
        description="Radius of the sphere used for all traverse projections"
    )

    # =========================================================================
    # Length Units
    # =========================================================================

    INTERNATIONAL_FOOT_TO_M: Final[Constant] = Constant(
        value=0.3048,
        uncertainty=0.0,  # Defined exactly
        unit="m per ft",
        source="International Yard and Pound Agreement (1959)",
        description="Conversion factor from international feet to meters"
    )

    US_SURVEY_FOOT_TO_M: Final[Constant] = Constant(
        value=1200.0 / 3937.0,
        uncertainty=0.0,  # Defined exactly
        unit="m per ft",
        source="Federal Register Notice 60-5442 (1959)",
        description="Conversion factor from U.S. survey feet to meters"
    )

    # =========================================================================
    # Angular Conventions
    # =========================================================================

    FULL_CIRCLE_DEG: Final[float] = 360.0
    HALF_CIRCLE_DEG: Final[float] = 180.0
    RIGHT_ANGLE_DEG: Final[float] = 90.0

    MINUTES_PER_DEGREE: Final[float] = 60.0
    SECONDS_PER_DEGREE: Final[float] = 3600.0

    @staticmethod
    def central_angle_deg(arc_length: float, radius: float) -> float:
        """Compute the central angle subtended by an arc.

        Parameters
        ----------
        arc_length : float
            Arc length, in the same unit as `radius`.
        radius : float
            Circle radius.

        Returns
        -------
        float
            Central angle in degrees.

        Notes
        -----
        Δ = L · 360 / (2πR)
        """
        return arc_length * GeodeticConstants.FULL_CIRCLE_DEG / (radius * 2 * np.pi)
