"""
Data Ingestion Module for the Traverse Reconstruction System.

This module reads header-driven record files into typed traverse records.
"""

from data_ingestion.record_loader import (
    RecordFileLoader,
    RecordFileConfig,
    load_records,
    parse_records,
)

__all__ = [
    "RecordFileLoader",
    "RecordFileConfig",
    "load_records",
    "parse_records",
]
