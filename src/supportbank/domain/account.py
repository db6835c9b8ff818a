"""Account aggregate and balance computation."""

from decimal import Decimal
from typing import Optional

import structlog

from supportbank.domain.entities import Entry

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")


class Account:
    """A named account and the entries that move money in or out of it.

    The balance is derived from the entries: every entry paid from this
    account subtracts its amount, every entry paid to it adds its amount.
    Entries with an invalid amount contribute nothing. Entries are shared
    with the other account they reference and are never modified here.
    """

    def __init__(self, name: str, entry: Optional[Entry] = None):
        """Initialize account.

        Args:
            name: Account name
            entry: Optional first entry to seed the account with
        """
        self.name = name
        self._entries: list[Entry] = []
        self._balance = ZERO
        if entry is not None:
            self._entries.append(entry)
            self.recompute_balance()
        logger.debug("account_created", account=name)

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._entries)

    def entry_delta(self, entry: Entry) -> Decimal:
        """Return how much an entry changes this account's balance.

        A self-transfer is both debited and credited, netting to zero.
        """
        if entry.from_account != self.name and entry.to_account != self.name:
            return ZERO

        if not entry.has_valid_amount:
            logger.error(
                "invalid_amount_skipped",
                account=self.name,
                line=entry.line,
                amount=str(entry.amount),
            )
            return ZERO

        delta = ZERO
        if entry.from_account == self.name:
            delta -= entry.amount
        if entry.to_account == self.name:
            delta += entry.amount
        return delta

    def recompute_balance(self) -> Decimal:
        """Recompute the balance by folding over every attached entry."""
        logger.debug("processing_all_entries", account=self.name, count=len(self._entries))
        balance = ZERO
        for entry in self._entries:
            balance += self.entry_delta(entry)
        self._balance = balance
        return balance

    def add_entry(self, entry: Entry) -> None:
        """Attach an entry and adjust the balance by its delta.

        Assumes the balance was consistent with the entries attached so far.
        """
        logger.debug("entry_added", account=self.name, line=entry.line)
        self._entries.append(entry)
        self._balance += self.entry_delta(entry)

    def __repr__(self) -> str:
        return f"Account(name={self.name!r}, balance={self._balance}, entries={len(self._entries)})"
