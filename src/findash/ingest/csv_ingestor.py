#!/usr/bin/env python3
"""
Transaction CSV Ingestor

Splits uploaded CSV text into a header and data rows, resolves the column
positions and runs every data row through the row parser. Results are
partitioned into valid transactions and malformed rows, in file order.

Whole-file failures raise a CsvIngestionError:
- the file has no non-blank lines
- the header lacks one or more required columns
- every data row was rejected

Anything else, including a mix of valid and malformed rows, is returned to the
caller as a data-quality report for review.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from ..core.dates import DEFAULT_DATE_FORMATS
from ..core.models import MalformedRow, Transaction
from .row_parser import ColumnIndices, IdFactory, MalformedRowError, batch_id_factory, parse_row, split_line

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("date", "description", "category", "amount", "type")
DESCRIPTION_ALIAS = "transaction description"
REQUIRED_HEADERS_TEXT = "date, description (or transaction description), category, amount, type"

BYTE_ORDER_MARK = "\ufeff"
_LINE_BREAK = re.compile(r"\r?\n")


class CsvIngestionError(ValueError):
    """Base class for failures that abort an import entirely."""


class EmptyCsvError(CsvIngestionError):
    def __init__(self) -> None:
        super().__init__("CSV file is empty or contains only blank lines.")


class MissingColumnsError(CsvIngestionError):
    """The header row is missing required logical columns."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"CSV must contain headers: {REQUIRED_HEADERS_TEXT}. Missing: {', '.join(missing)}.")


class NoValidTransactionsError(CsvIngestionError):
    """Every data row was malformed."""

    def __init__(self, malformed_rows: list[MalformedRow]):
        self.malformed_rows = malformed_rows
        super().__init__(
            f"No valid transactions found in the file ({len(malformed_rows)} malformed rows). "
            "Please check the data format."
        )


@dataclass
class IngestionResult:
    """Outcome of a CSV import awaiting user confirmation."""

    valid_transactions: list[Transaction] = field(default_factory=list)
    malformed_rows: list[MalformedRow] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        """True when some rows need review before accepting."""
        return bool(self.malformed_rows)

    @property
    def total_rows(self) -> int:
        """Number of non-blank data rows processed."""
        return len(self.valid_transactions) + len(self.malformed_rows)

    def malformed_by_reason(self) -> dict[str, int]:
        """Count malformed rows per reason, in first-seen order."""
        counts: dict[str, int] = {}
        for row in self.malformed_rows:
            counts[row.reason.value] = counts.get(row.reason.value, 0) + 1
        return counts


def resolve_columns(header_line: str) -> ColumnIndices:
    """
    Find the position of each required column in a header line.

    Header cells are trimmed and lower-cased. ``description`` falls back to
    ``transaction description``. Column order does not matter.

    Raises:
        MissingColumnsError: Naming every unresolved logical column
    """
    header = [cell.strip().lower() for cell in split_line(header_line)]

    def index_of(name: str) -> int | None:
        return header.index(name) if name in header else None

    indices: dict[str, int | None] = {name: index_of(name) for name in REQUIRED_COLUMNS}
    if indices["description"] is None:
        indices["description"] = index_of(DESCRIPTION_ALIAS)

    missing = [name for name in REQUIRED_COLUMNS if indices[name] is None]
    if missing:
        raise MissingColumnsError(missing)

    return ColumnIndices(**indices)  # type: ignore[arg-type]


def ingest_csv_text(
    content: str,
    id_factory: IdFactory | None = None,
    date_formats: tuple[str, ...] = DEFAULT_DATE_FORMATS,
) -> IngestionResult:
    """
    Parse CSV text into valid transactions and malformed rows.

    Args:
        content: Full file content
        id_factory: Maps a data row index to a transaction id.
                    Defaults to a timestamp-bound batch factory.
        date_formats: Fallback date formats after ISO-8601

    Returns:
        IngestionResult with both collections in original row order

    Raises:
        EmptyCsvError: No non-blank lines
        MissingColumnsError: Required header columns absent
        NoValidTransactionsError: Data rows present but none valid
    """
    content = content.removeprefix(BYTE_ORDER_MARK)
    numbered = [(number, line) for number, line in enumerate(_LINE_BREAK.split(content), start=1) if line.strip()]
    if not numbered:
        raise EmptyCsvError()

    _, header_line = numbered[0]
    columns = resolve_columns(header_line)

    make_id = id_factory or batch_id_factory()
    result = IngestionResult()

    for row_index, (line_number, line) in enumerate(numbered[1:]):
        values = split_line(line)
        try:
            transaction = parse_row(values, columns, make_id(row_index), date_formats)
        except MalformedRowError as e:
            logger.warning("Rejected line %d: %s", line_number, e)
            result.malformed_rows.append(MalformedRow(row=tuple(values), reason=e.reason, line_number=line_number))
            continue
        result.valid_transactions.append(transaction)

    if not result.valid_transactions and result.malformed_rows:
        raise NoValidTransactionsError(result.malformed_rows)

    logger.info(
        "Ingested %d valid transactions, %d malformed rows",
        len(result.valid_transactions),
        len(result.malformed_rows),
    )
    return result


def load_csv_file(
    path: str | Path,
    encoding: str = "utf-8-sig",
    id_factory: IdFactory | None = None,
    date_formats: tuple[str, ...] = DEFAULT_DATE_FORMATS,
) -> IngestionResult:
    """
    Read a CSV file from disk and ingest it.

    Raises:
        FileNotFoundError: If the file does not exist
        CsvIngestionError: On whole-file failures
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found: {path}")

    content = path.read_text(encoding=encoding)
    logger.debug("Read %d characters from %s", len(content), path)
    return ingest_csv_text(content, id_factory=id_factory, date_formats=date_formats)
