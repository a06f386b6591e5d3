"""Mini README: In-memory transaction store.

Structure:
    * TransactionStore - owns the collection and exposes CRUD-like operations.

The store keeps transactions in insertion order inside a dictionary keyed by
identifier. It validates submissions, trims text fields, and assigns
identifiers and creation timestamps. ``id`` and ``createdAt`` are never taken
from callers. Nothing is persisted: a store starts empty and lives as long as
the application that created it. There is no locking, so mutations must not
run concurrently.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Union
from uuid import uuid4

from ..logging_utils import get_logger
from .errors import TransactionNotFoundError, TransactionValidationError
from .models import Transaction, TransactionType, format_timestamp
from .summary import TransactionSummary, summarise_transactions
from .validation import BODY_NOT_OBJECT, TransactionDraft, validate_transaction

LOGGER = get_logger(__name__)

Submission = Union[TransactionDraft, Mapping[str, Any]]


def _new_identifier() -> str:
    return str(uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TransactionStore:
    """Manage the process-wide collection of transactions."""

    def __init__(
        self,
        *,
        id_factory: Callable[[], str] = _new_identifier,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._transactions: Dict[str, Transaction] = {}
        self._id_factory = id_factory
        self._clock = clock
        LOGGER.debug("Transaction store initialised")

    def __len__(self) -> int:
        return len(self._transactions)

    def _register(self, transaction: Transaction) -> None:
        """Store a transaction ensuring identifiers remain unique."""

        if transaction.transaction_id in self._transactions:
            raise ValueError(f"Transaction {transaction.transaction_id} already exists.")
        self._transactions[transaction.transaction_id] = transaction

    def list_transactions(self) -> List[Transaction]:
        """Return transactions ordered by most recent date first."""

        return sorted(
            self._transactions.values(),
            key=lambda transaction: transaction.occurred_at,
            reverse=True,
        )

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Retrieve a transaction, raising ``TransactionNotFoundError`` when missing."""

        try:
            return self._transactions[transaction_id]
        except KeyError:
            raise TransactionNotFoundError(transaction_id) from None

    def create_transaction(self, submission: Submission) -> Transaction:
        """Validate a full submission and store it as a new transaction."""

        draft = _as_draft(submission)
        errors = validate_transaction(draft)
        if errors:
            raise TransactionValidationError(errors)

        fields = _normalise_fields(draft.supplied())
        fields.setdefault("note", None)
        transaction = Transaction(
            transaction_id=self._id_factory(),
            created_at=format_timestamp(self._clock()),
            **fields,
        )
        self._register(transaction)
        LOGGER.info(
            "Created %s transaction %s (%.2f)",
            transaction.transaction_type.value,
            transaction.transaction_id,
            transaction.amount,
        )
        return transaction

    def update_transaction(self, transaction_id: str, submission: Submission) -> Transaction:
        """Merge the supplied fields onto an existing transaction.

        The identifier is resolved before the body is validated, so unknown
        identifiers report not-found even for invalid bodies.
        """

        existing = self.get_transaction(transaction_id)
        draft = _as_draft(submission)
        errors = validate_transaction(draft, partial=True)
        if errors:
            raise TransactionValidationError(errors)

        changes = _normalise_fields(draft.supplied())
        updated = replace(existing, **changes)
        self._transactions[transaction_id] = updated
        LOGGER.info(
            "Updated transaction %s fields: %s", transaction_id, ", ".join(sorted(changes)) or "none"
        )
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        """Remove a transaction, raising ``TransactionNotFoundError`` when missing."""

        if self._transactions.pop(transaction_id, None) is None:
            raise TransactionNotFoundError(transaction_id)
        LOGGER.info("Deleted transaction %s", transaction_id)

    def summarise(self) -> TransactionSummary:
        return summarise_transactions(self._transactions.values())

    def clear(self) -> None:
        """Drop every stored transaction."""

        LOGGER.debug("Clearing %s transactions", len(self))
        self._transactions.clear()


def _as_draft(submission: Submission) -> TransactionDraft:
    if isinstance(submission, TransactionDraft):
        return submission
    if isinstance(submission, Mapping):
        return TransactionDraft.from_payload(submission)
    raise TransactionValidationError([BODY_NOT_OBJECT])


def _normalise_fields(supplied: Dict[str, Any]) -> Dict[str, Any]:
    """Map validated draft fields onto ``Transaction`` attributes."""

    normalised: Dict[str, Any] = {}
    for key, value in supplied.items():
        if key in {"title", "category"}:
            normalised[key] = value.strip()
        elif key == "amount":
            normalised[key] = float(value)
        elif key == "type":
            normalised["transaction_type"] = TransactionType(value)
        elif key == "date":
            normalised[key] = value
        elif key == "note":
            normalised[key] = (value.strip() or None) if isinstance(value, str) else None
    return normalised
