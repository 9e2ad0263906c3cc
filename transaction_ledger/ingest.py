"""Load a JSON transaction dataset into a :class:`TransactionStore`.

Input format: a single JSON array of objects using the record field names
(``transaction_id``, ``transaction_date``, ``transaction_amount``,
``transaction_type``, ``transaction_description``, ``merchant_name``,
``card_type``).

Records are not validated. Missing text fields default to ``""``, non-string
scalars are stringified, and extra keys are ignored. Dates and amounts go
through the lenient parsers in :mod:`transaction_ledger.normalizers`.
Structural problems (invalid JSON, a top-level value that is not an array,
an element that is not an object) raise ``ValueError``.
"""

from __future__ import annotations

import json
import os
from os import PathLike
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .logging_setup import get_logger
from .models import Transaction
from .normalizers import parse_transaction_amount, parse_transaction_date
from .store import TransactionStore

DATA_PATH_ENV_VAR = "TRANSACTION_LEDGER_DATA"
DEFAULT_DATA_FILE = "transactions.json"

_logger = get_logger("transaction_ledger.ingest")


class TransactionRow(BaseModel):
    """One raw JSON record as found in the dataset file."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    transaction_id: str = ""
    transaction_date: Any = None
    transaction_amount: Any = None
    transaction_type: str = ""
    transaction_description: str = ""
    merchant_name: str = ""
    card_type: str = ""

    @field_validator(
        "transaction_id",
        "transaction_type",
        "transaction_description",
        "merchant_name",
        "card_type",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    def to_transaction(self) -> Transaction:
        return Transaction(
            transaction_id=self.transaction_id,
            transaction_date=parse_transaction_date(self.transaction_date),
            transaction_amount=parse_transaction_amount(self.transaction_amount),
            transaction_type=self.transaction_type,
            transaction_description=self.transaction_description,
            merchant_name=self.merchant_name,
            card_type=self.card_type,
        )


def parse_transactions(payload: Any) -> list[Transaction]:
    """Convert a decoded JSON array into :class:`Transaction` records."""

    if not isinstance(payload, list):
        raise ValueError(
            f"expected a JSON array of transactions, got {type(payload).__name__}"
        )
    out: list[Transaction] = []
    for i, item in enumerate(payload):
        if not isinstance(item, dict):
            raise ValueError(f"transaction #{i} is not a JSON object")
        try:
            row = TransactionRow.model_validate(item)
        except ValidationError as e:
            raise ValueError(f"transaction #{i} could not be read: {e}") from e
        out.append(row.to_transaction())
    return out


def resolve_data_path(path: str | PathLike[str] | None = None) -> Path:
    """Return the dataset path: explicit argument, then env var, then CWD default."""

    if path is not None:
        return Path(path)
    env_val = os.getenv(DATA_PATH_ENV_VAR)
    if env_val and env_val.strip():
        return Path(env_val.strip()).expanduser()
    return Path.cwd() / DEFAULT_DATA_FILE


def load_transactions(path: str | PathLike[str]) -> list[Transaction]:
    """Read a UTF-8 JSON dataset and return its records in file order.

    Filesystem errors (``FileNotFoundError``, ``PermissionError``) propagate.
    """

    p = Path(path)
    text = p.read_text(encoding="utf-8")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON in {p}: {e}") from e
    transactions = parse_transactions(payload)
    _logger.info("loaded %d transactions from %s", len(transactions), p)
    return transactions


def load_store(path: str | PathLike[str] | None = None) -> TransactionStore:
    """Load the dataset at ``path`` (or the resolved default) into a new store."""
    return TransactionStore(load_transactions(resolve_data_path(path)))


__all__ = [
    "DATA_PATH_ENV_VAR",
    "TransactionRow",
    "load_store",
    "load_transactions",
    "parse_transactions",
    "resolve_data_path",
]
