"""Mini README: Aggregate totals across stored transactions.

Structure:
    * TransactionSummary - income, expense, and net totals for JSON responses.
    * summarise_transactions - linear pass that sums amounts per type.

Totals are rounded half-up to two decimal places so float noise such as
``0.1 + 0.2`` is reported as ``0.3``. The net balance is derived from the
unrounded totals before rounding.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable

from .models import Transaction, TransactionType

CURRENCY_SCALE = 100


@dataclass(frozen=True, slots=True)
class TransactionSummary:
    """Aggregate view of the ledger."""

    total_income: float
    total_expenses: float
    net_balance: float

    def as_dict(self) -> Dict[str, float]:
        return {
            "totalIncome": self.total_income,
            "totalExpenses": self.total_expenses,
            "netBalance": self.net_balance,
        }


def _round_cents(value: float) -> float:
    """Round to cents with halves going up, so 0.125 becomes 0.13."""

    return math.floor(value * CURRENCY_SCALE + 0.5) / CURRENCY_SCALE


def summarise_transactions(transactions: Iterable[Transaction]) -> TransactionSummary:
    """Sum income and expenses and derive the net balance."""

    income = 0.0
    expenses = 0.0
    for transaction in transactions:
        if transaction.transaction_type is TransactionType.INCOME:
            income += transaction.amount
        else:
            expenses += transaction.amount
    return TransactionSummary(
        total_income=_round_cents(income),
        total_expenses=_round_cents(expenses),
        net_balance=_round_cents(income - expenses),
    )
