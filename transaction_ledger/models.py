"""Data models and type aliases for ``transaction_ledger``.

``Transaction`` is the in-memory record held by the store. It is a frozen
``dataclass`` with parsed ``date``/``float`` values; the raw JSON shape lives
in :class:`transaction_ledger.ingest.TransactionRow`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Literal, NamedTuple, TypeAlias

# English month names, fixed so labels never depend on the process locale.
_MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single financial transaction record.

    Attributes
    ----------
    transaction_id:
        Opaque identifier. Not guaranteed unique.
    transaction_date:
        Calendar date, or ``None`` when the source value could not be parsed.
    transaction_amount:
        Amount as ``float``; ``NaN`` when the source value could not be parsed.
    transaction_type:
        Free-form tag. Only ``"debit"`` and ``"credit"`` get special treatment.
    transaction_description:
        Free text.
    merchant_name:
        Counterparty name.
    card_type:
        Carried through untouched; no operation inspects it.
    """

    transaction_id: str
    transaction_date: date | None
    transaction_amount: float
    transaction_type: str
    transaction_description: str = ""
    merchant_name: str = ""
    card_type: str = ""


class MonthKey(NamedTuple):
    """Calendar month grouping key (``month`` is 1-indexed)."""

    year: int
    month: int

    @classmethod
    def of(cls, d: date) -> MonthKey:
        return cls(d.year, d.month)

    @property
    def label(self) -> str:
        """Human-readable label such as ``"January 2019"``."""
        return f"{_MONTH_NAMES[self.month - 1]} {self.year}"


TypeComparison: TypeAlias = Literal["debit", "credit", "equal"]
"""Outcome of comparing debit and credit record counts."""


__all__ = ["MonthKey", "Transaction", "TypeComparison"]
