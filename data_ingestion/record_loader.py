"""
Record File Loader for Traverse Reconstruction.

This module reads the header-driven delimited files that traverses are
written in and produces typed records for the interpreter.

File Format
-----------
- Blank lines and lines starting with `#` are ignored.
- `H,<kind>,<column>,<column>...` declares the columns of one record kind.
- Every other line starts with a kind tag and holds one record, its cells
  mapped onto the declared columns in order.
- A last column written `Name...` collects the rest of the line as a list.

Example
-------
    H,P,Memo,Latitude,Longitude
    H,L,Memo,Bearing,Distance,Direction
    H,C,Memo,Distance,Direction,Radius,Delta,TurnForCenter
    H,F,Memo,Name,Args...
    H,V,Memo,Name
    P,1,37.413523321,-121.820213695
    L,1,N45°30'15"E,100.00,TRUE
    C,1,39.27,TRUE,25.00,?,90

Design Principles
-----------------
- Column names are mapped onto record fields; unknown columns are
  reported and dropped.
- Numeric columns are converted on ingest so errors carry a line number.
- `$name` cells become SymbolRef and are resolved during evaluation.
"""

from dataclasses import dataclass, fields
from pathlib import Path
import re
from typing import Any, Dict, List, Optional, Union

from common.exceptions import RecordFileError, UnknownRecordTypeError
from common.logging_config import get_logger
from common.types import RECORD_TYPES, SymbolRef, as_field_value

# Columns whose literal values are numbers
NUMERIC_FIELDS = frozenset({
    "latitude", "longitude", "distance", "radius", "turn_for_center",
})

# Columns where an empty cell means "not given"
OPTIONAL_FIELDS = frozenset({"delta", "turn_for_center"})


@dataclass
class RecordFileConfig:
    """Configuration for record file parsing.

    Attributes
    ----------
    delimiter : str
        Cell separator.
    comment_prefix : str
        Lines starting with this are skipped.
    header_tag : str
        Kind tag of header lines.
    rest_suffix : str
        Suffix marking a rest-of-line column.
    reference_marker : str
        Prefix marking a symbol reference.
    encoding : str
        Text encoding of record files.
    """
    delimiter: str = ","
    comment_prefix: str = "#"
    header_tag: str = "H"
    rest_suffix: str = "..."
    reference_marker: str = "$"
    encoding: str = "utf-8"


def column_to_field(column: str) -> str:
    """Map a header column name to a record field name (`TurnForCenter` -> `turn_for_center`)."""
    name = column.strip()
    name = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name)
    return name.replace(" ", "_").lower()


class RecordFileLoader:
    """Loader for header-driven record files."""

    def __init__(self, config: Optional[RecordFileConfig] = None):
        """Initialize the loader.

        Parameters
        ----------
        config : RecordFileConfig, optional
            Parsing settings.
        """
        self.config = config or RecordFileConfig()
        self._logger = get_logger(self.__class__.__name__)

    def load(self, path: Union[str, Path]) -> List[Any]:
        """Load all records from a file.

        Parameters
        ----------
        path : str or Path
            Record file.

        Returns
        -------
        list of Record
            Records in file order.

        Raises
        ------
        OSError
            If the file cannot be read.
        RecordFileError
            If a line cannot be mapped to a record.
        """
        path = Path(path)
        self._logger.info(f"Loading records from {path}")
        return self.parse(path.read_text(encoding=self.config.encoding))

    def parse(self, text: str) -> List[Any]:
        """Parse record file contents."""
        headers: Dict[str, List[str]] = {}
        records = []

        for line_number, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith(self.config.comment_prefix):
                continue

            cells = [c.strip() for c in line.split(self.config.delimiter)]
            kind = cells[0]

            if kind == self.config.header_tag:
                if len(cells) < 2 or not cells[1]:
                    raise RecordFileError("Header line without a record kind", line_number)
                headers[cells[1]] = cells[1:]
                continue

            if kind not in headers:
                raise RecordFileError(f"Unknown type: {kind}", line_number)

            records.append(self._build_record(kind, headers[kind], cells, line_number))

        self._logger.info(f"Parsed {len(records)} records")
        return records

    def _build_record(
        self,
        kind: str,
        columns: List[str],
        cells: List[str],
        line_number: int
    ) -> Any:
        record_cls = RECORD_TYPES.get(kind)
        if record_cls is None:
            raise UnknownRecordTypeError(
                f"line {line_number}: unsupported record kind {kind!r}"
            )

        known = {f.name for f in fields(record_cls)}
        values: Dict[str, Any] = {}
        last = len(columns) - 1

        for i in range(1, len(columns)):
            column = columns[i]
            is_rest = i == last and column.endswith(self.config.rest_suffix)
            if is_rest:
                column = column[: -len(self.config.rest_suffix)]

            name = column_to_field(column)
            if name not in known:
                self._logger.warning(
                    f"line {line_number}: ignoring column {column!r} for kind {kind}"
                )
                continue

            if is_rest:
                rest = cells[i:]
                while rest and not rest[-1]:
                    rest.pop()
                values[name] = tuple(self._convert(name, c, line_number) for c in rest)
            elif i < len(cells):
                value = self._convert(name, cells[i], line_number)
                if value is not None:
                    values[name] = value

        try:
            return record_cls(**values)
        except TypeError as e:
            raise RecordFileError(f"Incomplete {kind} record: {e}", line_number) from e

    def _convert(self, name: str, cell: str, line_number: Optional[int] = None) -> Any:
        if name == "memo":
            return cell
        value = as_field_value(cell, self.config.reference_marker)
        if isinstance(value, SymbolRef):
            return value
        if name in OPTIONAL_FIELDS and value == "":
            return None
        if name in NUMERIC_FIELDS:
            try:
                return float(value)
            except ValueError:
                raise RecordFileError(
                    f"Column {name!r} expects a number, got {value!r}", line_number
                ) from None
        return value


def parse_records(text: str, config: Optional[RecordFileConfig] = None) -> List[Any]:
    """Parse record file contents into records."""
    return RecordFileLoader(config).parse(text)


def load_records(path: Union[str, Path], config: Optional[RecordFileConfig] = None) -> List[Any]:
    """Load records from a record file."""
    return RecordFileLoader(config).load(path)
