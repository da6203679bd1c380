"""
Per-evaluation interpreter state.

A `TraverseContext` is created for one traverse evaluation and threaded
through every step of it. It owns the symbol table, the result sequence and
the last two points visited. Nothing here is shared between evaluations.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

from common.exceptions import UnresolvedSymbolError
from common.types import GeoPoint, Station, SymbolRef, as_field_value


@dataclass
class TraverseContext:
    """Mutable state of one traverse evaluation.

    Attributes
    ----------
    symbols : dict
        Name -> value bound by variable records. Grows during a run and is
        cleared only by `reset`.
    points : list of GeoPoint
        The result sequence, one entry per point-producing record.
    stations : list of Station
        `points` paired with the label of the producing record.
    previous_point, current_point : GeoPoint, optional
        The last two points visited. Curves need both to recover the
        incoming tangent.
    last_result : Any
        The value produced by the most recent non-variable record.
    reference_marker : str
        Prefix that marks a string field as a symbol reference.
    """
    symbols: Dict[str, Any] = field(default_factory=dict)
    points: List[GeoPoint] = field(default_factory=list)
    stations: List[Station] = field(default_factory=list)
    previous_point: Optional[GeoPoint] = None
    current_point: Optional[GeoPoint] = None
    last_result: Any = None
    reference_marker: str = "$"

    def bind(self, name: str, value: Any) -> None:
        self.symbols[name] = value

    def lookup(self, name: str) -> Any:
        """Return the value bound to `name`.

        Raises
        ------
        UnresolvedSymbolError
            If nothing is bound under `name`.
        """
        try:
            return self.symbols[name]
        except KeyError:
            raise UnresolvedSymbolError(name) from None

    def resolve(self, value: Any) -> Any:
        """Resolve a field value: references are looked up, literals pass through."""
        value = as_field_value(value, self.reference_marker)
        if isinstance(value, SymbolRef):
            return self.lookup(value.name)
        return value

    def substitute(self, record: Any) -> Any:
        """Return a copy of `record` with every reference field resolved.

        The original record is left untouched. Records without references
        are returned as-is.
        """
        changes = {}
        for f in fields(record):
            value = getattr(record, f.name)
            if isinstance(value, tuple):
                resolved = tuple(self.resolve(v) for v in value)
                if resolved != value:
                    changes[f.name] = resolved
            elif f.name != "memo":
                resolved = self.resolve(value)
                if resolved is not value:
                    changes[f.name] = resolved
        if not changes:
            return record
        return replace(record, **changes)

    def advance(self, point: GeoPoint, label: str = "", record_index: int = -1) -> None:
        """Append a computed point and shift the point-tracking window."""
        self.points.append(point)
        self.stations.append(Station(label=label, point=point, record_index=record_index))
        self.previous_point = self.current_point
        self.current_point = point

    def clear_points(self) -> None:
        """Empty the result sequence; the current position is kept."""
        self.points.clear()
        self.stations.clear()

    def reset(self) -> None:
        """Forget everything: symbols, results and position."""
        self.symbols.clear()
        self.clear_points()
        self.previous_point = None
        self.current_point = None
        self.last_result = None
