"""Ledger file reading and import pipeline."""

import csv
import io
import json
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from supportbank.domain.account import Account
from supportbank.domain.aggregator import aggregate_entries
from supportbank.domain.entities import Entry
from supportbank.domain.errors import (
    StructuralError,
    UnsupportedFormatError,
    unsupported_format,
)
from supportbank.domain.normalizer import EntryNormalizer, LedgerFormat, RawLedger

logger = structlog.get_logger(__name__)


@dataclass
class ImportResult:
    """Outcome of importing one ledger file."""

    entries: tuple[Entry, ...]
    accounts: list[Account]
    has_errors: bool = False
    error_lines: list[int] = field(default_factory=list)


def detect_format(path: str) -> LedgerFormat:
    """Return the ledger format implied by a file extension.

    Raises:
        UnsupportedFormatError: If the extension is not csv, json or xml
    """
    suffix = Path(path).suffix.lower()
    for ledger_format in LedgerFormat:
        if ledger_format.value == suffix:
            return ledger_format
    raise UnsupportedFormatError(unsupported_format(path))


def decode_ledger(text: str, ledger_format: LedgerFormat, source: str = "") -> RawLedger:
    """Decode ledger text into raw records for the given format.

    Raises:
        StructuralError: If the text is not valid CSV, JSON or XML
    """
    if ledger_format is LedgerFormat.CSV:
        reader = csv.reader(io.StringIO(text))
        try:
            rows = [(reader.line_num, row) for row in reader]
        except csv.Error as e:
            logger.error("csv_decode_failed", source=source, line=reader.line_num, error=str(e))
            raise StructuralError(f"Could not parse CSV in '{source}': {e}")
        return RawLedger(format=ledger_format, records=rows, source=source)

    if ledger_format is LedgerFormat.JSON:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error("json_decode_failed", source=source, error=str(e))
            raise StructuralError(f"Could not parse JSON in '{source}': {e}")
        return RawLedger(format=ledger_format, records=data, source=source)

    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        logger.error("xml_parse_failed", source=source, error=str(e))
        raise StructuralError(f"Could not parse XML in '{source}': {e}")
    return RawLedger(format=ledger_format, records=root, source=source)


def read_ledger_file(path: str) -> RawLedger:
    """Read a ledger file and decode it according to its extension.

    Args:
        path: Path to a .csv, .json or .xml file

    Returns:
        Format-tagged raw ledger

    Raises:
        UnsupportedFormatError: If the extension is not supported
        FileNotFoundError: If the file doesn't exist
        StructuralError: If the file cannot be read or decoded
    """
    logger.debug("opening_file", path=path)

    # Reject unknown formats before touching the file
    ledger_format = detect_format(path)

    file_path = Path(path)
    if not file_path.is_file():
        logger.error("file_not_found", path=path)
        raise FileNotFoundError(f"File not found: {path}")

    try:
        with open(file_path, "r", encoding="utf-8-sig", newline="") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        logger.error("file_decode_failed", path=path, error=str(e))
        raise StructuralError(f"Could not decode '{path}' as UTF-8")
    except OSError as e:
        logger.error("file_read_failed", path=path, error=str(e))
        raise StructuralError(f"Could not read '{path}': {e}")

    logger.debug("file_opened", path=path, format=ledger_format.name)
    return decode_ledger(text, ledger_format, source=path)


class LedgerImportService:
    """Service for importing a ledger file into a set of accounts."""

    def __init__(self, normalizer: EntryNormalizer | None = None):
        """Initialize ledger import service.

        Args:
            normalizer: Entry normalizer; a default one is created if omitted
        """
        self.normalizer = normalizer or EntryNormalizer()

    def import_raw(self, raw_ledger: RawLedger) -> ImportResult:
        """Normalize and aggregate already decoded records."""
        result = self.normalizer.normalize(raw_ledger)
        accounts = aggregate_entries(result.entries)
        logger.info(
            "ledger_imported",
            source=raw_ledger.source,
            entries=len(result.entries),
            accounts=len(accounts),
            has_errors=result.has_errors,
        )
        return ImportResult(
            entries=result.entries,
            accounts=accounts,
            has_errors=result.has_errors,
            error_lines=list(result.error_lines),
        )

    def import_file(self, path: str) -> ImportResult:
        """Import a ledger file.

        Args:
            path: Path to the ledger file

        Returns:
            Import result with entries in file order and accounts in
            first-seen order

        Raises:
            UnsupportedFormatError: If the extension is not supported
            FileNotFoundError: If the file doesn't exist
            StructuralError: If the file as a whole cannot be read
        """
        return self.import_raw(read_ledger_file(path))
