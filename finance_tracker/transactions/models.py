"""Mini README: Transaction record types.

Structure:
    * TransactionType - enum representing income versus expense entries.
    * Transaction - dataclass storing a ledger entry and its JSON export.
    * parse_transaction_date - ISO 8601 parsing shared by validation and sorting.

Field names follow Python conventions internally; ``Transaction.as_dict``
renders the camelCase names clients send and receive.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional


class TransactionType(str, Enum):
    """Enumerate the supported transaction kinds."""

    INCOME = "income"
    EXPENSE = "expense"


def parse_transaction_date(value: str) -> datetime:
    """Parse an ISO 8601 date or date-time into a naive UTC datetime.

    Plain dates map to midnight. Offsets are converted to UTC so that values
    submitted with and without timezones remain comparable.
    """

    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def format_timestamp(moment: datetime) -> str:
    """Render a UTC timestamp with millisecond precision and a ``Z`` suffix."""

    utc_moment = moment.astimezone(timezone.utc)
    return utc_moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(slots=True)
class Transaction:
    """Represent a single income or expense entry."""

    transaction_id: str
    title: str
    amount: float
    transaction_type: TransactionType
    category: str
    date: str
    note: Optional[str]
    created_at: str

    @property
    def occurred_at(self) -> datetime:
        return parse_transaction_date(self.date)

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction with the public field names."""

        return {
            "id": self.transaction_id,
            "title": self.title,
            "amount": self.amount,
            "type": self.transaction_type.value,
            "category": self.category,
            "date": self.date,
            "note": self.note,
            "createdAt": self.created_at,
        }
