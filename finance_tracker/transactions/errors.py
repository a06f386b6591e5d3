"""Domain exceptions raised by the transaction store."""

from __future__ import annotations

from typing import List, Sequence


class TransactionValidationError(ValueError):
    """Raised when a submitted transaction fails validation."""

    def __init__(self, errors: Sequence[str]) -> None:
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors))


class TransactionNotFoundError(KeyError):
    """Raised when no transaction exists for the requested identifier."""

    def __init__(self, transaction_id: str) -> None:
        self.transaction_id = transaction_id
        self.message = f"Transaction '{transaction_id}' not found"
        super().__init__(self.message)

    def __str__(self) -> str:
        # KeyError would otherwise wrap the message in quotes.
        return self.message
