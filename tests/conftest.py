"""Pytest configuration for test isolation.

The CLI reads ``TRANSACTION_LEDGER_DATA`` and ``TRANSACTION_LEDGER_LOG_LEVEL``
from the environment (and from a ``.env`` in the working directory) and
configures the package logger once per process. Both would leak between
tests, so every test gets a clean environment, a private working directory
and a fresh logging state.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from tests.helpers.records import SAMPLE_ROWS, write_dataset
from transaction_ledger import TransactionStore, parse_transactions
from transaction_ledger.logging_setup import reset_logging


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear ledger env vars, chdir into ``tmp_path`` and reset logging afterwards."""

    monkeypatch.delenv("TRANSACTION_LEDGER_DATA", raising=False)
    monkeypatch.delenv("TRANSACTION_LEDGER_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    reset_logging()


@pytest.fixture
def sample_store() -> TransactionStore:
    return TransactionStore(parse_transactions(SAMPLE_ROWS))


@pytest.fixture
def sample_dataset(tmp_path: Path) -> Path:
    return write_dataset(tmp_path / "data" / "transactions.json", SAMPLE_ROWS)
