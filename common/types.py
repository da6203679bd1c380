"""
Type Definitions for Traverse Reconstruction.

This module defines the point type and the closed set of record variants
that make up a traverse. These types are the interface between the record
loader, the interpreter and the exporters.

Design Rationale
----------------
Each survey call is its own frozen dataclass instead of a loose dict:
1. Field names describe the call (bearing, radius, delta...)
2. A record is never mutated; symbol substitution produces a new record
3. The interpreter dispatches over a fixed set of classes, so an
   unrecognized object is rejected instead of half-evaluated
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Tuple, Type, Union

import numpy as np


@dataclass(frozen=True)
class GeoPoint:
    """A point on the spherical Earth.

    Attributes
    ----------
    latitude : float
        Latitude in DEGREES. Range: [-90, 90].
    longitude : float
        Longitude in DEGREES, positive east.

    Notes
    -----
    Unlike radian-based geodesy code, traverse points stay in decimal
    degrees throughout: that is how record files state fixed points and
    how WKT consumers expect them.

    Examples
    --------
    >>> p = GeoPoint(37.4, -121.8)
    >>> p.to_wkt_pair()
    '-121.8 37.4'
    """
    latitude: float
    longitude: float

    def __post_init__(self):
        """Validate coordinate ranges."""
        if not np.isfinite(self.latitude) or not np.isfinite(self.longitude):
            raise ValueError(
                f"Non-finite coordinate ({self.latitude}, {self.longitude})"
            )
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(
                f"Latitude {self.latitude} out of range [-90, 90]. "
                f"Were latitude and longitude swapped?"
            )

    def to_radians(self) -> Tuple[float, float]:
        """Return (latitude, longitude) in radians."""
        return float(np.radians(self.latitude)), float(np.radians(self.longitude))

    def to_wkt_pair(self) -> str:
        """Return the point as a WKT coordinate pair (longitude first)."""
        return f"{self.longitude} {self.latitude}"


@dataclass(frozen=True)
class SymbolRef:
    """Reference to a value bound earlier in the traverse.

    In record files a reference is written `$name`.
    """
    name: str

    def __str__(self) -> str:
        return f"${self.name}"


# A record field holds either a literal or a reference to resolve first
FieldValue = Union[str, float, int, SymbolRef]


def as_field_value(value: Any, marker: str = "$") -> Any:
    """Turn a marker-prefixed string (`$name`) into a SymbolRef.

    Any other value is returned unchanged.
    """
    if isinstance(value, str) and marker and value.startswith(marker):
        return SymbolRef(value[len(marker):])
    return value


@dataclass(frozen=True)
class PointRecord:
    """An absolute fixed point (P)."""
    kind: ClassVar[str] = "P"

    latitude: FieldValue
    longitude: FieldValue
    memo: str = ""

    @property
    def label(self) -> str:
        return self.kind + self.memo


@dataclass(frozen=True)
class LineRecord:
    """A straight leg (L).

    Attributes
    ----------
    bearing : str or float
        Quadrant bearing (`N45°30'15"E`) or azimuth in degrees.
    distance : float
        Leg length in FEET.
    direction : str
        "TRUE" to walk along the bearing, "FALSE" to walk the opposite way.
    """
    kind: ClassVar[str] = "L"

    bearing: FieldValue
    distance: FieldValue
    direction: FieldValue = "TRUE"
    memo: str = ""

    @property
    def label(self) -> str:
        return self.kind + self.memo


@dataclass(frozen=True)
class ArcRecord:
    """A circular curve (C).

    Attributes
    ----------
    distance : float
        Arc length in FEET.
    direction : str
        "TRUE" or "FALSE"; selects which way the radial swings around
        the center.
    radius : float
        Curve radius in FEET.
    delta : str, optional
        Central angle as a DMS string. None, "" or "?" means derive it
        from arc length and radius.
    turn_for_center : float, optional
        Signed degrees from the incoming tangent to the center. When
        None it is derived from `direction`.
    """
    kind: ClassVar[str] = "C"

    distance: FieldValue
    direction: FieldValue
    radius: FieldValue
    delta: Optional[FieldValue] = None
    turn_for_center: Optional[FieldValue] = None
    memo: str = ""

    @property
    def label(self) -> str:
        return self.kind + self.memo


@dataclass(frozen=True)
class FunctionRecord:
    """A call into the function registry (F)."""
    kind: ClassVar[str] = "F"

    name: str
    args: Tuple[FieldValue, ...] = ()
    memo: str = ""

    @property
    def label(self) -> str:
        return self.kind + self.memo


@dataclass(frozen=True)
class VariableRecord:
    """Binds the most recent result under `name` (V)."""
    kind: ClassVar[str] = "V"

    name: str
    memo: str = ""

    @property
    def label(self) -> str:
        return self.kind + self.memo


Record = Union[PointRecord, LineRecord, ArcRecord, FunctionRecord, VariableRecord]

RECORD_TYPES: Dict[str, Type[Any]] = {
    cls.kind: cls
    for cls in (PointRecord, LineRecord, ArcRecord, FunctionRecord, VariableRecord)
}


@dataclass(frozen=True)
class Station:
    """A computed point paired with the label of the record that produced it."""
    label: str
    point: GeoPoint
    record_index: int
