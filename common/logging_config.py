"""
Logging Configuration and Audit Trail Infrastructure.

This module provides structured logging for traverse evaluations. A run can
also be captured as an audit trail: which record produced which point, from
which configuration, so that a reconstructed parcel outline can be traced
back to the calls it came from.

Audit Contents
--------------
Every audited run records:
- Configuration hash
- Record count and point count
- One step entry per evaluated record (label, kind, result)
- The error that aborted the run, if any
"""

import hashlib
import json
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from contextlib import contextmanager


# Configure root logger for the package
def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a logger configured for the traverse system.

    Parameters
    ----------
    name : str
        Logger name (typically __name__).
    level : int, optional
        Logging level. A logger created without one starts at INFO; an
        existing logger keeps its level unless one is given.

    Returns
    -------
    logging.Logger
        Configured logger instance.

    Notes
    -----
    Records go to stderr; stdout is reserved for exported geometry.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        if level is None:
            level = logging.INFO

    if level is not None:
        logger.setLevel(level)
    return logger


@dataclass
class StepRecord:
    """Record of one evaluated traverse call.

    Attributes
    ----------
    timestamp : datetime
        When the record was evaluated.
    index : int
        0-based position of the record in the traverse.
    label : str
        Kind tag plus memo (e.g. "C3").
    kind : str
        Record kind tag.
    result : str
        Printable form of the value the record produced.
    produced_point : bool
        Whether the record appended a point to the result sequence.
    """
    timestamp: datetime
    index: int
    label: str
    kind: str
    result: str
    produced_point: bool


@dataclass
class RunMetadata:
    """Metadata for one traverse evaluation."""
    run_id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    config_hash: str = ""
    record_count: int = 0
    point_count: int = 0
    steps: List[StepRecord] = field(default_factory=list)
    error: Optional[str] = None

    def compute_config_hash(self, config: Dict[str, Any]) -> str:
        """Compute a deterministic hash of the configuration.

        Parameters
        ----------
        config : dict
            The configuration dictionary.

        Returns
        -------
        str
            SHA-256 hash of the configuration.
        """
        config_str = json.dumps(config, sort_keys=True, default=str)
        self.config_hash = hashlib.sha256(config_str.encode()).hexdigest()[:16]
        return self.config_hash


class AuditLogger:
    """Collects audit trails for traverse evaluations.

    One instance may hold several runs; each evaluation opens its own run
    with `run_context`. Instances are independent, so concurrent
    evaluations should each be given their own logger.

    Examples
    --------
    >>> audit = AuditLogger()
    >>> with audit.run_context("parcel_12", {"earth_radius_m": 6371000.0}):
    ...     audit.log_step(0, "P1", "P", "(37.4, -121.8)", produced_point=True)
    >>> audit.get_run_summary("parcel_12")["point_count"]
    1
    """

    def __init__(self):
        """Initialize the audit logger."""
        self._runs: Dict[str, RunMetadata] = {}
        self._current_run_id: Optional[str] = None
        self._logger = get_logger("audit")
        self._file_logger: Optional[logging.Logger] = None
        self._file_handler: Optional[logging.FileHandler] = None

    def set_output_dir(self, output_dir: Path) -> None:
        """Set the directory for audit log files.

        Parameters
        ----------
        output_dir : Path
            Directory to write audit logs.
        """
        self.close()
        output_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(
            output_dir / f"audit_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        )
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s | %(levelname)s | %(message)s')
        )
        self._file_logger = logging.getLogger(f"audit.file.{id(self)}")
        self._file_logger.propagate = False
        self._file_logger.addHandler(file_handler)
        self._file_logger.setLevel(logging.DEBUG)
        self._file_handler = file_handler

    def close(self) -> None:
        """Detach and close the audit log file, if one is open.

        Collected runs stay available for summaries and export.
        """
        if self._file_handler is None:
            return
        self._file_logger.removeHandler(self._file_handler)
        self._file_handler.close()
        self._file_handler = None
        self._file_logger = None

    @property
    def current_run(self) -> Optional[RunMetadata]:
        if self._current_run_id is None:
            return None
        return self._runs.get(self._current_run_id)

    @contextmanager
    def run_context(self, run_id: str, config: Optional[Dict[str, Any]] = None):
        """Context manager for a traverse evaluation.

        Parameters
        ----------
        run_id : str
            Unique identifier for this run.
        config : dict, optional
            Configuration to compute hash from.

        Yields
        ------
        RunMetadata
            The metadata object for this run.
        """
        metadata = RunMetadata(
            run_id=run_id,
            start_time=datetime.now()
        )

        if config:
            metadata.compute_config_hash(config)

        self._runs[run_id] = metadata
        self._current_run_id = run_id

        self._logger.info(f"Starting run {run_id} with config hash {metadata.config_hash}")

        try:
            yield metadata
        except Exception as exc:
            metadata.error = f"{type(exc).__name__}: {exc}"
            self._emit(logging.ERROR, f"RUN FAILED | {run_id} | {metadata.error}")
            raise
        finally:
            metadata.end_time = datetime.now()
            self._current_run_id = None
            self._logger.info(
                f"Completed run {run_id}. "
                f"Records: {metadata.record_count}, "
                f"Points: {metadata.point_count}"
            )

    def log_step(
        self,
        index: int,
        label: str,
        kind: str,
        result: str,
        produced_point: bool = False
    ) -> None:
        """Log one evaluated record against the current run.

        Parameters
        ----------
        index : int
            Position of the record in the traverse.
        label : str
            Kind tag plus memo.
        kind : str
            Record kind tag.
        result : str
            Printable result value.
        produced_point : bool
            Whether a point was appended.
        """
        step = StepRecord(
            timestamp=datetime.now(),
            index=index,
            label=label,
            kind=kind,
            result=result,
            produced_point=produced_point
        )

        run = self.current_run
        if run is not None:
            run.steps.append(step)
            run.record_count += 1
            if produced_point:
                run.point_count += 1

        self._emit(logging.DEBUG, f"STEP | {index} | {label} | {result}")

    def _emit(self, level: int, message: str) -> None:
        self._logger.log(level, message)
        if self._file_logger is not None:
            self._file_logger.log(level, message)

    def get_run_summary(self, run_id: str) -> Dict[str, Any]:
        """Get a summary of a traverse run.

        Parameters
        ----------
        run_id : str
            The run identifier.

        Returns
        -------
        dict
            Summary including record and point counts.
        """
        if run_id not in self._runs:
            raise KeyError(f"No run found with ID {run_id}")

        metadata = self._runs[run_id]

        kind_counts: Dict[str, int] = {}
        for step in metadata.steps:
            kind_counts[step.kind] = kind_counts.get(step.kind, 0) + 1

        return {
            "run_id": run_id,
            "config_hash": metadata.config_hash,
            "start_time": metadata.start_time.isoformat(),
            "end_time": metadata.end_time.isoformat() if metadata.end_time else None,
            "record_count": metadata.record_count,
            "point_count": metadata.point_count,
            "records_by_kind": kind_counts,
            "error": metadata.error,
        }

    def export_run_artifacts(self, run_id: str, output_path: Path) -> None:
        """Export all audit artifacts for a run to JSON.

        Parameters
        ----------
        run_id : str
            The run identifier.
        output_path : Path
            Path to write the JSON file.
        """
        if run_id not in self._runs:
            raise KeyError(f"No run found with ID {run_id}")

        artifacts = self.get_run_summary(run_id)
        artifacts["steps"] = [
            {
                "timestamp": s.timestamp.isoformat(),
                "index": s.index,
                "label": s.label,
                "kind": s.kind,
                "result": s.result,
                "produced_point": s.produced_point,
            }
            for s in self._runs[run_id].steps
        ]

        with open(output_path, 'w') as f:
            json.dump(artifacts, f, indent=2)

        self._logger.info(f"Exported audit artifacts to {output_path}")
