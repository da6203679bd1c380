"""
Traverse Interpreter.

Walks an ordered list of survey records and turns them into a chain of
points on the sphere. Each record is evaluated exactly once, in input order,
against a `TraverseContext` that belongs to this evaluation alone.

Record Kinds
------------
- P (PointRecord): a fixed point; the traverse jumps there.
- L (LineRecord): a straight leg from the current point.
- C (ArcRecord): a curve continuing the previous leg's tangent.
- F (FunctionRecord): calls a registered function; point results join
  the traverse, other results are only remembered.
- V (VariableRecord): binds the last result under a name that later
  records reference as `$name`.

Failure Model
-------------
The first error aborts the evaluation and propagates unchanged. Points
appended before the failing record stay on the context for inspection.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional
import logging
import uuid

import pint

from common.constants import GeodeticConstants
from common.exceptions import MissingContextError, UnknownRecordTypeError
from common.logging_config import AuditLogger, get_logger
from common.types import (
    ArcRecord,
    FunctionRecord,
    GeoPoint,
    LineRecord,
    PointRecord,
    Station,
    VariableRecord,
)
from common.units import length_to_meters
from geospatial.bearings import opposite_bearing, parse_bearing
from geospatial.spherical import EARTH_RADIUS_M, destination_point
from traverse.arcs import parse_direction, resolve_arc
from traverse.context import TraverseContext
from traverse.functions import FunctionRegistry, default_registry


@dataclass
class TraverseConfig:
    """Configuration for traverse evaluation.

    Attributes
    ----------
    earth_radius_m : float
        Radius of the sphere all projections run on.
    distance_unit : str
        pint unit of record distances and radii ('foot', 'survey_foot'...).
    reference_marker : str
        Prefix marking a string field as a symbol reference.
    default_turn_for_center : float
        Turn-for-center magnitude for curves that do not state one.
    log_level : int
        Lowest level this interpreter emits at. The shared
        "TraverseInterpreter" logger level still applies on top of it.
    """
    earth_radius_m: float = EARTH_RADIUS_M
    distance_unit: str = "foot"
    reference_marker: str = "$"
    default_turn_for_center: float = GeodeticConstants.RIGHT_ANGLE_DEG
    log_level: int = logging.INFO

    def __post_init__(self):
        """Validate the sphere radius and distance unit."""
        if self.earth_radius_m <= 0:
            raise ValueError(f"Earth radius must be positive, got {self.earth_radius_m}")
        try:
            length_to_meters(1.0, self.distance_unit)
        except pint.errors.PintError as e:
            raise ValueError(f"Unsupported distance unit {self.distance_unit!r}: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class TraverseResult:
    """Output of one evaluation.

    Attributes
    ----------
    points : list of GeoPoint
        Result sequence, 1:1 with point-producing records.
    stations : list of Station
        The same points with the labels of the records that produced them.
    symbols : dict
        Final symbol table.
    """
    points: List[GeoPoint]
    stations: List[Station] = field(default_factory=list)
    symbols: Dict[str, Any] = field(default_factory=dict)

    def index_of(self, label: str) -> int:
        """Position in `points` of the first point produced by `label` (e.g. "C3")."""
        for i, station in enumerate(self.stations):
            if station.label == label:
                return i
        raise KeyError(f"No point produced by record {label!r}")

    def point_for(self, label: str) -> GeoPoint:
        return self.points[self.index_of(label)]

    def __len__(self) -> int:
        return len(self.points)


class TraverseInterpreter:
    """Evaluates traverse records into points.

    The interpreter itself holds no per-run state; every call to
    `evaluate` gets a fresh `TraverseContext` unless one is supplied, so
    one interpreter can serve many traverses.

    Examples
    --------
    >>> records = [
    ...     PointRecord(latitude=37.4, longitude=-121.8, memo="1"),
    ...     LineRecord(bearing="N90°0'0\\"E", distance=100, direction="TRUE", memo="1"),
    ... ]
    >>> result = TraverseInterpreter().evaluate(records)
    >>> len(result.points)
    2
    """

    def __init__(
        self,
        config: Optional[TraverseConfig] = None,
        functions: Optional[FunctionRegistry] = None,
        audit: Optional[AuditLogger] = None
    ):
        """Initialize the interpreter.

        Parameters
        ----------
        config : TraverseConfig, optional
            Evaluation settings.
        functions : FunctionRegistry, optional
            Function table for F records. Defaults to `default_registry()`.
        audit : AuditLogger, optional
            If given, every evaluation is recorded as an audit run.
        """
        self.config = config or TraverseConfig()
        self.functions = functions if functions is not None else default_registry()
        self.audit = audit
        self._logger = get_logger(self.__class__.__name__)
        self._handlers: Dict[type, Callable[[TraverseContext, Any], Any]] = {
            PointRecord: self._eval_point,
            LineRecord: self._eval_line,
            ArcRecord: self._eval_arc,
            FunctionRecord: self._eval_function,
            VariableRecord: self._eval_variable,
        }

    def new_context(self) -> TraverseContext:
        return TraverseContext(reference_marker=self.config.reference_marker)

    def evaluate(
        self,
        records: Iterable[Any],
        context: Optional[TraverseContext] = None,
        run_id: Optional[str] = None
    ) -> TraverseResult:
        """Evaluate records in order and return the result sequence.

        Parameters
        ----------
        records : iterable of Record
            The traverse.
        context : TraverseContext, optional
            State to evaluate against. Pass one to inspect partial results
            after a failure.
        run_id : str, optional
            Audit run identifier; generated when auditing without one.

        Returns
        -------
        TraverseResult
            Points, stations and final symbols.
        """
        if context is None:
            context = self.new_context()

        if self.audit is None:
            self._run(records, context)
        else:
            run_id = run_id or f"traverse_{uuid.uuid4().hex[:8]}"
            with self.audit.run_context(run_id, self.config.to_dict()):
                self._run(records, context)

        return TraverseResult(
            points=list(context.points),
            stations=list(context.stations),
            symbols=dict(context.symbols),
        )

    def get_destination_points(self, records: Iterable[Any]) -> List[GeoPoint]:
        """Evaluate on fresh state and return only the points."""
        return self.evaluate(records).points

    def _log(self, level: int, message: str) -> None:
        if level >= self.config.log_level:
            self._logger.log(level, message)

    def _run(self, records: Iterable[Any], context: TraverseContext) -> None:
        count = 0
        for index, record in enumerate(records):
            self.step(context, record, index)
            count += 1
        self._log(
            logging.INFO,
            f"Evaluated {count} records into {len(context.points)} points"
        )

    def step(self, context: TraverseContext, record: Any, index: int = -1) -> Any:
        """Evaluate a single record against `context`.

        Returns
        -------
        Any
            The value the record produced (a GeoPoint for point records).

        Raises
        ------
        UnknownRecordTypeError
            If `record` is not one of the record variants.
        """
        handler = self._handlers.get(type(record))
        if handler is None:
            raise UnknownRecordTypeError(f"Unexpected record type: {record!r}")

        self._log(logging.DEBUG, f"record {index}: {record}")
        result = handler(context, record)

        produced_point = False
        if not isinstance(record, VariableRecord):
            context.last_result = result
            if isinstance(result, GeoPoint):
                context.advance(result, record.label, index)
                produced_point = True

        if self.audit is not None:
            self.audit.log_step(index, record.label, record.kind, repr(result), produced_point)
        return result

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _eval_point(self, context: TraverseContext, record: PointRecord) -> GeoPoint:
        record = context.substitute(record)
        return GeoPoint(latitude=float(record.latitude), longitude=float(record.longitude))

    def _eval_line(self, context: TraverseContext, record: LineRecord) -> GeoPoint:
        record = context.substitute(record)
        if context.current_point is None:
            raise MissingContextError(
                f"Line {record.label!r} has no starting point"
            )

        if parse_direction(record.direction):
            bearing = parse_bearing(record.bearing)
        else:
            bearing = opposite_bearing(record.bearing)

        distance_m = length_to_meters(record.distance, self.config.distance_unit)
        return destination_point(
            context.current_point, distance_m, bearing, self.config.earth_radius_m
        )

    def _eval_arc(self, context: TraverseContext, record: ArcRecord) -> GeoPoint:
        record = context.substitute(record)
        return resolve_arc(
            context.previous_point,
            context.current_point,
            record,
            radius_m=self.config.earth_radius_m,
            distance_unit=self.config.distance_unit,
            default_turn=self.config.default_turn_for_center,
        )

    def _eval_function(self, context: TraverseContext, record: FunctionRecord) -> Any:
        record = context.substitute(record)
        return self.functions.call(record.name, record.args, context)

    def _eval_variable(self, context: TraverseContext, record: VariableRecord) -> Any:
        context.bind(record.name, context.last_result)
        return context.last_result


def evaluate_traverse(
    records: Iterable[Any],
    config: Optional[TraverseConfig] = None
) -> TraverseResult:
    """Evaluate `records` with a fresh interpreter and default functions."""
    return TraverseInterpreter(config=config).evaluate(records)
