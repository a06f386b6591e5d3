"""Mini README: Transaction recording and aggregation.

This package groups the transaction record types, the validator, the
in-memory store, and the summary aggregator. The web interface depends only
on the names exported here.
"""

from .errors import TransactionNotFoundError, TransactionValidationError
from .models import Transaction, TransactionType
from .store import TransactionStore
from .summary import TransactionSummary, summarise_transactions
from .validation import MISSING, TransactionDraft, validate_transaction

__all__ = [
    "MISSING",
    "Transaction",
    "TransactionDraft",
    "TransactionNotFoundError",
    "TransactionStore",
    "TransactionSummary",
    "TransactionType",
    "TransactionValidationError",
    "summarise_transactions",
    "validate_transaction",
]
