"""Mini README: Validation of submitted transaction bodies.

Structure:
    * MISSING - sentinel marking a field that was not supplied at all.
    * TransactionDraft - a submitted body split into present and absent fields.
    * validate_transaction - returns ordered, human readable error messages.

Full validation requires every mandatory field. Partial validation, used for
updates, checks only the fields present on the draft. A field explicitly sent
as ``null`` counts as present, so ``{"title": null}`` is rejected on update
while an omitted title is left untouched.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, List, Mapping, Union

from .models import TransactionType, parse_transaction_date


class _Missing(Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing.MISSING

BODY_NOT_OBJECT = "body: must be a JSON object"
TRANSACTION_TYPES = tuple(kind.value for kind in TransactionType)


@dataclass(frozen=True)
class TransactionDraft:
    """Submitted transaction fields, each either a value or ``MISSING``."""

    title: Any = MISSING
    amount: Any = MISSING
    type: Any = MISSING
    category: Any = MISSING
    date: Any = MISSING
    note: Any = MISSING

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TransactionDraft":
        """Pick the known fields out of a decoded JSON object."""

        known = {field.name for field in fields(cls)}
        return cls(**{key: value for key, value in payload.items() if key in known})

    def is_present(self, name: str) -> bool:
        return getattr(self, name) is not MISSING

    def supplied(self) -> Dict[str, Any]:
        """Return only the fields that were present in the submission."""

        return {
            field.name: getattr(self, field.name)
            for field in fields(self)
            if self.is_present(field.name)
        }


def validate_transaction(
    submission: Union[TransactionDraft, Mapping[str, Any]], partial: bool = False
) -> List[str]:
    """Validate a draft (or raw mapping) and return the list of problems."""

    if isinstance(submission, TransactionDraft):
        draft = submission
    elif isinstance(submission, Mapping):
        draft = TransactionDraft.from_payload(submission)
    else:
        return [BODY_NOT_OBJECT]

    required = not partial
    errors: List[str] = []

    if required or draft.is_present("title"):
        if not _is_non_blank_string(draft.title):
            errors.append("title: required, must be a non-empty string")

    if required or draft.is_present("amount"):
        if draft.amount is MISSING or draft.amount is None:
            errors.append("amount: required")
        elif not _is_positive_number(draft.amount):
            errors.append("amount: must be a positive number")

    if required or draft.is_present("type"):
        if _is_falsy(draft.type):
            errors.append("type: required")
        elif draft.type not in TRANSACTION_TYPES:
            errors.append('type: must be "income" or "expense"')

    if required or draft.is_present("category"):
        if not _is_non_blank_string(draft.category):
            errors.append("category: required, must be a non-empty string")

    if required or draft.is_present("date"):
        if _is_falsy(draft.date):
            errors.append("date: required")
        elif not _is_iso_date(draft.date):
            errors.append("date: must be a valid ISO 8601 date string")

    if draft.is_present("note") and draft.note is not None:
        if not isinstance(draft.note, str):
            errors.append("note: must be a string or null")

    return errors


def _is_falsy(value: Any) -> bool:
    # Empty lists and objects are values, not omissions.
    if value is MISSING or value is None:
        return True
    return isinstance(value, (str, int, float)) and not value


def _is_non_blank_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_positive_number(value: Any) -> bool:
    # bool is an int subclass but JSON true/false are not amounts.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        as_float = float(value)
    except OverflowError:
        return False
    return math.isfinite(as_float) and as_float > 0


def _is_iso_date(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        parse_transaction_date(value)
    except ValueError:
        return False
    return True
