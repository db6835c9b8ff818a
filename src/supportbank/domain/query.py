"""Account balance and history reporting."""

from decimal import Decimal
from typing import Iterable, Optional

import structlog

from supportbank.domain.account import Account
from supportbank.domain.entities import Entry

logger = structlog.get_logger(__name__)

CURRENCY_SYMBOL = "£"
DATE_FORMAT = "%d/%m/%Y"
INVALID_DATE = "Invalid Date"


def format_currency(amount: Decimal) -> str:
    """Format an amount as pounds with two decimals, e.g. -£12.50."""
    if not amount.is_finite():
        return f"{CURRENCY_SYMBOL}NaN"
    # abs() also drops the sign of a negative zero
    if amount < 0:
        return f"-{CURRENCY_SYMBOL}{abs(amount):.2f}"
    return f"{CURRENCY_SYMBOL}{abs(amount):.2f}"


def format_entry(entry: Entry) -> str:
    """Format one entry as a history line."""
    entry_date = entry.date.strftime(DATE_FORMAT) if entry.date is not None else INVALID_DATE
    return (
        f"{entry_date}, from {entry.from_account} to {entry.to_account}, "
        f"{entry.narrative}, {format_currency(entry.amount)}"
    )


class LedgerQueryService:
    """Service for reporting on aggregated accounts."""

    def __init__(self, accounts: Iterable[Account]):
        """Initialize query service.

        Args:
            accounts: Accounts in aggregation order
        """
        self.accounts = list(accounts)

    def get_account(self, name: str) -> Optional[Account]:
        for account in self.accounts:
            if account.name == name:
                return account
        return None

    def list_all(self) -> list[str]:
        """Return one ``name: balance`` line per account."""
        logger.debug("listing_all_accounts", count=len(self.accounts))
        return [f"{account.name}: {format_currency(account.balance)}" for account in self.accounts]

    def list_one(self, name: str) -> Optional[list[str]]:
        """Return the history of one account, or None if there is no such account."""
        logger.debug("looking_for_account", account=name)
        account = self.get_account(name)
        if account is None:
            logger.warning("account_not_found", account=name)
            return None
        return [format_entry(entry) for entry in account.entries]
