"""Public interface for the ``transaction_ledger`` package.

Re-exports the store, the record model and the loader as the stable import
surface. There is no runtime logic here, only symbol re-exports.
"""

from .ingest import TransactionRow, load_store, load_transactions, parse_transactions
from .models import MonthKey, Transaction, TypeComparison
from .normalizers import parse_transaction_amount, parse_transaction_date
from .store import CREDIT, DEBIT, EmptyStoreError, TransactionStore

__all__ = [
    # Store
    "TransactionStore",
    "EmptyStoreError",
    "DEBIT",
    "CREDIT",
    # Models / types
    "Transaction",
    "MonthKey",
    "TypeComparison",
    # Ingestion
    "TransactionRow",
    "load_store",
    "load_transactions",
    "parse_transactions",
    "parse_transaction_amount",
    "parse_transaction_date",
]
