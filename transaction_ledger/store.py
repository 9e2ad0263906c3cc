"""In-memory transaction store with query, filter and aggregation operations.

Every read runs a linear scan over a snapshot of the current records. Nothing
is cached or indexed between calls, so results always reflect the latest
``add_transaction``.

Empty-collection policy
-----------------------
- ``calculate_average_transaction_amount`` returns ``NaN`` on an empty store.
- ``find_most_transactions_month`` and ``find_most_debit_transaction_month``
  raise :class:`EmptyStoreError` when there is no dated record to group.

Month tie-break
---------------
When several months share the highest count, the month whose first record
appears earliest in store order wins.
"""

from __future__ import annotations

import math
import threading
from collections.abc import Callable, Iterable, Sequence
from datetime import date

from .logging_setup import get_logger
from .models import MonthKey, Transaction, TypeComparison
from .normalizers import parse_transaction_date

DEBIT = "debit"
CREDIT = "credit"

_logger = get_logger("transaction_ledger.store")


class EmptyStoreError(ValueError):
    """Raised by operations that have no defined result on an empty collection."""


def _as_bound(value: date | str | None) -> date | None:
    # Range bounds follow the same lenient rule as record dates.
    return parse_transaction_date(value)


def _sum_amounts(transactions: Iterable[Transaction]) -> float:
    total = 0.0
    for t in transactions:
        total += t.transaction_amount
    return total


def _most_frequent_month(counts: dict[MonthKey, int], *, operation: str) -> str:
    if not counts:
        raise EmptyStoreError(f"{operation}: no dated transactions to group")
    # max() returns the first maximal key, so the earliest-seen month wins ties.
    return max(counts, key=counts.__getitem__).label


class TransactionStore:
    """Ordered, append-only collection of :class:`Transaction` records."""

    def __init__(self, transactions: Iterable[Transaction] = ()) -> None:
        self._transactions: list[Transaction] = list(transactions)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._transactions)

    def __repr__(self) -> str:
        return f"TransactionStore(<{len(self)} transactions>)"

    def _snapshot(self) -> tuple[Transaction, ...]:
        with self._lock:
            return tuple(self._transactions)

    def _select(self, predicate: Callable[[Transaction], bool]) -> list[Transaction]:
        return [t for t in self._snapshot() if predicate(t)]

    # ---- mutation ------------------------------------------------------------

    def add_transaction(self, transaction: Transaction) -> None:
        """Append ``transaction`` to the end of the store."""

        with self._lock:
            self._transactions.append(transaction)
            size = len(self._transactions)
        _logger.debug("appended transaction %r (size=%d)", transaction.transaction_id, size)

    # ---- bulk reads ----------------------------------------------------------

    def get_all_transactions(self) -> list[Transaction]:
        """Return every record in store order (a copy of the sequence)."""
        return list(self._snapshot())

    def get_unique_transaction_types(self) -> set[str]:
        return {t.transaction_type for t in self._snapshot()}

    def map_transaction_descriptions(self) -> list[str]:
        return [t.transaction_description for t in self._snapshot()]

    # ---- aggregation ---------------------------------------------------------

    def calculate_total_amount(self) -> float:
        """Sum of all amounts; ``0.0`` for an empty store."""
        return _sum_amounts(self._snapshot())

    def calculate_total_amount_by_date(
        self,
        year: int | None = None,
        month: int | None = None,
        day: int | None = None,
    ) -> float:
        """Sum amounts of records matching every supplied date component.

        ``None`` or ``0`` leaves a component unconstrained. ``month`` is
        1-indexed. A record without a parseable date only matches when no
        component is supplied.
        """

        def matches(t: Transaction) -> bool:
            if not (year or month or day):
                return True
            d = t.transaction_date
            if d is None:
                return False
            return (
                (not year or d.year == year)
                and (not month or d.month == month)
                and (not day or d.day == day)
            )

        return _sum_amounts(self._select(matches))

    def calculate_average_transaction_amount(self) -> float:
        """Mean amount; ``NaN`` when the store is empty."""

        snapshot = self._snapshot()
        if not snapshot:
            _logger.warning("average requested on an empty store; returning NaN")
            return math.nan
        return _sum_amounts(snapshot) / len(snapshot)

    def calculate_total_debit_amount(self) -> float:
        return _sum_amounts(self.get_transactions_by_type(DEBIT))

    # ---- filters -------------------------------------------------------------

    def get_transactions_by_type(self, transaction_type: str) -> list[Transaction]:
        return self._select(lambda t: t.transaction_type == transaction_type)

    def get_transactions_in_date_range(
        self, start: date | str, end: date | str
    ) -> list[Transaction]:
        """Records dated within ``[start, end]`` (both ends inclusive)."""

        lo, hi = _as_bound(start), _as_bound(end)
        if lo is None or hi is None:
            return []
        return self._select(
            lambda t: t.transaction_date is not None and lo <= t.transaction_date <= hi
        )

    def get_transactions_by_merchant(self, merchant_name: str) -> list[Transaction]:
        return self._select(lambda t: t.merchant_name == merchant_name)

    def get_transactions_by_amount_range(
        self, min_amount: float, max_amount: float
    ) -> list[Transaction]:
        """Records with ``min_amount <= amount <= max_amount``; NaN never matches."""
        return self._select(lambda t: min_amount <= t.transaction_amount <= max_amount)

    def get_transactions_before_date(self, before: date | str) -> list[Transaction]:
        """Records dated strictly earlier than ``before``."""

        bound = _as_bound(before)
        if bound is None:
            return []
        return self._select(
            lambda t: t.transaction_date is not None and t.transaction_date < bound
        )

    def find_transaction_by_id(self, transaction_id: str) -> Transaction | None:
        """First record (in store order) with a matching id, else ``None``."""

        for t in self._snapshot():
            if t.transaction_id == transaction_id:
                return t
        return None

    # ---- grouping ------------------------------------------------------------

    def count_by_month(
        self, transactions: Sequence[Transaction] | None = None
    ) -> dict[MonthKey, int]:
        """Count dated records per calendar month, keyed in first-seen order."""

        source = self._snapshot() if transactions is None else transactions
        counts: dict[MonthKey, int] = {}
        for t in source:
            if t.transaction_date is None:
                continue
            key = MonthKey.of(t.transaction_date)
            counts[key] = counts.get(key, 0) + 1
        return counts

    def count_by_type(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for t in self._snapshot():
            counts[t.transaction_type] = counts.get(t.transaction_type, 0) + 1
        return counts

    def find_most_transactions_month(self) -> str:
        """Label of the month with the most records, e.g. ``"January 2019"``."""
        return _most_frequent_month(
            self.count_by_month(), operation="find_most_transactions_month"
        )

    def find_most_debit_transaction_month(self) -> str:
        """Label of the month with the most debit records."""
        return _most_frequent_month(
            self.count_by_month(self.get_transactions_by_type(DEBIT)),
            operation="find_most_debit_transaction_month",
        )

    def most_transaction_types(self) -> TypeComparison:
        """Compare debit and credit counts; other types are ignored."""

        counts = self.count_by_type()
        debits, credits = counts.get(DEBIT, 0), counts.get(CREDIT, 0)
        if debits > credits:
            return "debit"
        if credits > debits:
            return "credit"
        return "equal"


__all__ = ["CREDIT", "DEBIT", "EmptyStoreError", "TransactionStore"]
