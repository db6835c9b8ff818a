"""Domain model entities for supportbank.

Entries are the canonical, immutable form of a transaction once it has been
read from any of the supported ledger formats. Business logic only ever sees
entries, never the raw rows, objects or nodes they came from.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


INVALID_AMOUNT = Decimal("NaN")


@dataclass(frozen=True)
class Entry:
    """A single transfer of money from one account to another.

    ``date`` is None and ``amount`` is NaN when the source value failed
    validation; the entry is still kept so that it shows up in histories.
    """

    date: Optional[date]
    from_account: str
    to_account: str
    narrative: str
    amount: Decimal
    line: int

    @property
    def has_valid_amount(self) -> bool:
        return isinstance(self.amount, Decimal) and self.amount.is_finite()

    @property
    def has_valid_date(self) -> bool:
        return self.date is not None

    @property
    def is_self_transfer(self) -> bool:
        return self.from_account == self.to_account
