"""
CSV Ingestion Package

Parses uploaded transaction CSV files into Transaction models and a
row-level data-quality report.

Key Components:
- row_parser: one line to a Transaction or a MalformedRowError
- csv_ingestor: header resolution, per-row parsing, whole-file failures

Example Usage:
    from findash.ingest import ingest_csv_text

    result = ingest_csv_text(content)
    if result.has_issues:
        ...  # show result.malformed_rows for review
"""

from .csv_ingestor import (
    CsvIngestionError,
    EmptyCsvError,
    IngestionResult,
    MissingColumnsError,
    NoValidTransactionsError,
    ingest_csv_text,
    load_csv_file,
    resolve_columns,
)
from .row_parser import ColumnIndices, MalformedRowError, batch_id_factory, parse_row, split_line

__all__ = [
    "ColumnIndices",
    "CsvIngestionError",
    "EmptyCsvError",
    "IngestionResult",
    "MalformedRowError",
    "MissingColumnsError",
    "NoValidTransactionsError",
    "batch_id_factory",
    "ingest_csv_text",
    "load_csv_file",
    "parse_row",
    "resolve_columns",
    "split_line",
]
