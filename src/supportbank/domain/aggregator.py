"""Folding entries into accounts."""

from typing import Iterable

import structlog

from supportbank.domain.account import Account
from supportbank.domain.entities import Entry

logger = structlog.get_logger(__name__)


class LedgerAggregator:
    """Builds the set of accounts referenced by a sequence of entries.

    Accounts are keyed by exact, case-sensitive name. The mapping keeps
    insertion order, so accounts are listed in the order their names were
    first seen (payer before payee within an entry).
    """

    def __init__(self):
        self._accounts: dict[str, Account] = {}

    @property
    def accounts(self) -> list[Account]:
        return list(self._accounts.values())

    def add_entry(self, entry: Entry) -> None:
        """Attach an entry to its payer and payee, creating them if needed."""
        self._attach(entry.from_account, entry)
        # A self-transfer is attached once; the account's balance already
        # applies both sides of it.
        if not entry.is_self_transfer:
            self._attach(entry.to_account, entry)

    def _attach(self, name: str, entry: Entry) -> None:
        account = self._accounts.get(name)
        if account is None:
            self._accounts[name] = Account(name, entry)
        else:
            account.add_entry(entry)


def aggregate_entries(entries: Iterable[Entry]) -> list[Account]:
    """Fold entries, in order, into a list of accounts.

    Args:
        entries: Entries in source order

    Returns:
        Accounts in first-seen order
    """
    aggregator = LedgerAggregator()
    count = 0
    for entry in entries:
        aggregator.add_entry(entry)
        count += 1
    accounts = aggregator.accounts
    logger.debug("entries_aggregated", entries=count, accounts=len(accounts))
    return accounts
