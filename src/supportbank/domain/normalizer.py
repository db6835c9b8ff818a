"""Entry normalization.

Turns the raw records of each supported ledger format into canonical
``Entry`` values. Per-record problems (an amount or date that does not
parse) are logged and flagged but never stop the import; the entry is still
produced so that line numbers in diagnostics keep lining up with the file.
A structural problem with the file as a whole raises ``StructuralError``.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Iterator, Optional
import xml.etree.ElementTree as ET

import structlog

from supportbank.domain.entities import INVALID_AMOUNT, Entry
from supportbank.domain.errors import StructuralError, missing_root_element
from supportbank.utils.amount_parser import parse_amount
from supportbank.utils.date_parser import parse_date, parse_serial_date

logger = structlog.get_logger(__name__)

CSV_FIELD_COUNT = 5

XML_ROOT_TAG = "TransactionList"
XML_TRANSACTION_TAG = "SupportTransaction"


class LedgerFormat(Enum):
    """Encodings a ledger file can arrive in, keyed by file extension."""

    CSV = ".csv"
    JSON = ".json"
    XML = ".xml"


@dataclass(frozen=True)
class RawLedger:
    """Decoded but unvalidated ledger content, tagged with its format.

    ``records`` holds ``(line, row)`` pairs for CSV, the decoded top-level
    JSON value for JSON, and the root element for XML.
    """

    format: LedgerFormat
    records: Any
    source: str = ""


@dataclass(frozen=True)
class RawRecord:
    """One transaction's fields as found in the source, not yet validated."""

    line: int
    date: Any
    from_account: Any
    to_account: Any
    narrative: Any
    amount: Any


@dataclass(frozen=True)
class NormalizationResult:
    """Entries in source order plus whether any record failed validation."""

    entries: tuple[Entry, ...]
    has_errors: bool
    error_lines: tuple[int, ...] = ()


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _element_text(node: ET.Element, path: str) -> Optional[str]:
    child = node.find(path)
    if child is None or child.text is None:
        return None
    return child.text.strip()


class EntryNormalizer:
    """Converts format-tagged raw records into validated entries."""

    def normalize(self, raw_ledger: RawLedger) -> NormalizationResult:
        """Normalize a raw ledger.

        Args:
            raw_ledger: Decoded ledger content

        Returns:
            Normalization result; ``has_errors`` is set when at least one
            record had an invalid amount or date

        Raises:
            StructuralError: If the ledger's overall shape is wrong
        """
        logger.debug("creating_entries", source=raw_ledger.source, format=raw_ledger.format.name)

        if raw_ledger.format is LedgerFormat.CSV:
            records = self.csv_records(raw_ledger.records)
            date_parser = parse_date
        elif raw_ledger.format is LedgerFormat.JSON:
            records = self.json_records(raw_ledger.records)
            date_parser = parse_date
        else:
            records = self.xml_records(raw_ledger.records)
            date_parser = parse_serial_date

        return self.normalize_records(records, date_parser)

    def normalize_records(
        self, records: Iterator[RawRecord], date_parser: Callable[[Any], date] = parse_date
    ) -> NormalizationResult:
        """Validate raw records and build one entry per record."""
        entries = []
        error_lines = []
        for record in records:
            entry, valid = self.build_entry(record, date_parser)
            entries.append(entry)
            if not valid:
                error_lines.append(record.line)

        if error_lines:
            logger.warning("entries_created_with_errors", count=len(entries), error_lines=error_lines)
        else:
            logger.debug("entries_created", count=len(entries))

        return NormalizationResult(
            entries=tuple(entries),
            has_errors=bool(error_lines),
            error_lines=tuple(error_lines),
        )

    def build_entry(
        self, record: RawRecord, date_parser: Callable[[Any], date] = parse_date
    ) -> tuple[Entry, bool]:
        """Build an entry from one raw record.

        Returns:
            The entry and whether both its date and amount were valid
        """
        valid = True

        try:
            entry_date = date_parser(record.date)
        except ValueError as e:
            logger.error("invalid_date", line=record.line, value=record.date, error=str(e))
            entry_date = None
            valid = False

        try:
            amount = parse_amount(record.amount)
        except ValueError as e:
            logger.error("invalid_amount", line=record.line, value=record.amount, error=str(e))
            amount = INVALID_AMOUNT
            valid = False

        entry = Entry(
            date=entry_date,
            from_account=_text(record.from_account),
            to_account=_text(record.to_account),
            narrative=_text(record.narrative),
            amount=amount,
            line=record.line,
        )
        return entry, valid

    def csv_records(self, rows: list[tuple[int, list[str]]]) -> Iterator[RawRecord]:
        """Yield records from ``(line, fields)`` rows, skipping the header row."""
        header_seen = False
        for line, fields in rows:
            # csv yields an empty list for a blank line
            if not fields or all(not f.strip() for f in fields):
                continue
            if not header_seen:
                header_seen = True
                if len(fields) != CSV_FIELD_COUNT:
                    logger.warning("unexpected_header", line=line, fields=len(fields))
                continue

            if len(fields) > CSV_FIELD_COUNT:
                logger.warning("extra_fields_ignored", line=line, fields=len(fields))
            padded = list(fields[:CSV_FIELD_COUNT]) + [""] * (CSV_FIELD_COUNT - len(fields))

            yield RawRecord(
                line=line,
                date=padded[0].strip(),
                from_account=padded[1],
                to_account=padded[2],
                narrative=padded[3],
                amount=padded[4].strip(),
            )

    def json_records(self, data: Any) -> Iterator[RawRecord]:
        """Yield records from a decoded JSON array of transaction objects.

        Raises:
            StructuralError: If the top-level value is not an array
        """
        if not isinstance(data, list):
            logger.error("json_not_array", found=type(data).__name__)
            raise StructuralError("JSON ledger must be an array of transactions")
        return self._json_records(data)

    def _json_records(self, data: list) -> Iterator[RawRecord]:
        for index, item in enumerate(data, start=1):
            if not isinstance(item, dict):
                logger.warning("json_record_not_object", line=index, found=type(item).__name__)
                item = {}
            yield RawRecord(
                line=index,
                date=item.get("Date"),
                from_account=item.get("FromAccount"),
                to_account=item.get("ToAccount"),
                narrative=item.get("Narrative"),
                amount=item.get("Amount"),
            )

    def xml_records(self, root: Optional[ET.Element]) -> Iterator[RawRecord]:
        """Yield records from a ``TransactionList`` root element.

        Raises:
            StructuralError: If the root element is missing or misnamed
        """
        if root is None or root.tag != XML_ROOT_TAG:
            found = "nothing" if root is None else root.tag
            logger.error("xml_root_missing", expected=XML_ROOT_TAG, found=found)
            raise StructuralError(missing_root_element(XML_ROOT_TAG, found))
        return self._xml_records(root)

    def _xml_records(self, root: ET.Element) -> Iterator[RawRecord]:
        for index, node in enumerate(root.findall(XML_TRANSACTION_TAG), start=1):
            yield RawRecord(
                line=index,
                date=node.get("Date"),
                from_account=_element_text(node, "Parties/From"),
                to_account=_element_text(node, "Parties/To"),
                narrative=_element_text(node, "Description"),
                amount=_element_text(node, "Value"),
            )
