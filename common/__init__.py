"""
Common utilities and infrastructure for the Traverse Reconstruction System.

This package provides foundational components used across all modules:
- Geodetic constants with provenance
- Unit registry and length conversion
- Point and record type definitions
- Error kinds
- Logging and audit trail infrastructure
"""

from common.constants import GeodeticConstants
from common.units import UnitRegistry, feet_to_meters, length_to_meters
from common.types import (
    GeoPoint,
    SymbolRef,
    PointRecord,
    LineRecord,
    ArcRecord,
    FunctionRecord,
    VariableRecord,
    Record,
    Station,
)
from common.exceptions import (
    TraverseError,
    FormatError,
    UnknownDirectionError,
    MissingContextError,
    UnresolvedSymbolError,
    UnknownFunctionError,
    FunctionArgumentError,
    UnknownRecordTypeError,
    RecordFileError,
)
from common.logging_config import get_logger, AuditLogger

__all__ = [
    "GeodeticConstants",
    "UnitRegistry",
    "feet_to_meters",
    "length_to_meters",
    "GeoPoint",
    "SymbolRef",
    "PointRecord",
    "LineRecord",
    "ArcRecord",
    "FunctionRecord",
    "VariableRecord",
    "Record",
    "Station",
    "TraverseError",
    "FormatError",
    "UnknownDirectionError",
    "MissingContextError",
    "UnresolvedSymbolError",
    "UnknownFunctionError",
    "FunctionArgumentError",
    "UnknownRecordTypeError",
    "RecordFileError",
    "get_logger",
    "AuditLogger",
]
