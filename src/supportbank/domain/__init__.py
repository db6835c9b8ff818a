"""Domain layer for supportbank application."""

from supportbank.domain.account import Account
from supportbank.domain.aggregator import LedgerAggregator, aggregate_entries
from supportbank.domain.entities import Entry
from supportbank.domain.ledger_import import LedgerImportService
from supportbank.domain.normalizer import EntryNormalizer
from supportbank.domain.query import LedgerQueryService

__all__ = [
    "Account",
    "Entry",
    "EntryNormalizer",
    "LedgerAggregator",
    "LedgerImportService",
    "LedgerQueryService",
    "aggregate_entries",
]
