"""Command line entry point: record file in, WKT row out.

Usage:
  traverse-wkt data/nolaSouth.csv --name nolaSouth --description "starting at end of C3"
  traverse-wkt data/building.csv --polygon --audit-dir runs/
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from common.exceptions import TraverseError
from common.logging_config import AuditLogger, get_logger
from data_ingestion.record_loader import load_records
from export.wkt import format_linestring, format_polygon, to_csv_row
from traverse.interpreter import TraverseConfig, TraverseInterpreter

# Loggers whose level follows --verbose
LOGGER_NAMES = ("traverse.cli", "traverse.arcs", "TraverseInterpreter", "RecordFileLoader", "audit")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="traverse-wkt",
        description="Reconstruct a survey traverse and print it as WKT",
    )
    ap.add_argument("file", type=Path, help="Header-driven record file")
    ap.add_argument("--name", default=None, help="Geometry name (default: file stem)")
    ap.add_argument("--description", default="", help="Geometry description")
    ap.add_argument("--polygon", action="store_true", help="Emit a closed POLYGON instead of a LINESTRING")
    ap.add_argument(
        "--distance-unit",
        default="foot",
        help="Unit of record distances and radii (any pint length unit, e.g. survey_foot)",
    )
    ap.add_argument("--verbose", action="store_true", help="Log every record evaluated")
    ap.add_argument("--audit-dir", type=Path, default=None, help="Write an audit trail to this directory")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING
    for name in LOGGER_NAMES:
        get_logger(name, level)

    try:
        config = TraverseConfig(distance_unit=args.distance_unit, log_level=level)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    audit = None
    if args.audit_dir is not None:
        audit = AuditLogger()
        audit.set_output_dir(args.audit_dir)
    try:
        return _run(args, TraverseInterpreter(config=config, audit=audit))
    finally:
        if audit is not None:
            audit.close()


def _run(args: argparse.Namespace, interpreter: TraverseInterpreter) -> int:
    logger = get_logger("traverse.cli")
    audit = interpreter.audit

    try:
        records = load_records(args.file)
    except (OSError, TraverseError) as e:
        print(f"Unable to retrieve records: {e}", file=sys.stderr)
        return 1

    run_id = args.file.stem
    try:
        result = interpreter.evaluate(records, run_id=run_id)
    except (TraverseError, ValueError, TypeError) as e:
        print(f"Traverse evaluation failed: {e}", file=sys.stderr)
        return 1
    finally:
        if audit is not None:
            audit.export_run_artifacts(run_id, args.audit_dir / f"{run_id}_audit.json")

    logger.debug(f"{len(result.points)} points from {len(records)} records")

    try:
        wkt = format_polygon(result.points) if args.polygon else format_linestring(result.points)
    except ValueError as e:
        print(f"Cannot export traverse: {e}", file=sys.stderr)
        return 1
    print(to_csv_row(wkt, args.name or run_id, args.description))
    return 0


if __name__ == "__main__":
    sys.exit(main())
