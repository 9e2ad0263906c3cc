import json
import math
from datetime import date
from pathlib import Path

import pytest

from tests.helpers.records import SAMPLE_ROWS, write_dataset
from transaction_ledger import Transaction, TransactionRow, load_store, load_transactions
from transaction_ledger.ingest import parse_transactions, resolve_data_path


def test_row_converts_to_parsed_transaction():
    t = TransactionRow.model_validate(SAMPLE_ROWS[0]).to_transaction()
    assert t == Transaction(
        transaction_id="1",
        transaction_date=date(2019, 1, 1),
        transaction_amount=100.0,
        transaction_type="debit",
        transaction_description="Groceries",
        merchant_name="SuperMart",
        card_type="Visa",
    )


def test_row_tolerates_missing_fields_and_extras():
    t = TransactionRow.model_validate({"transaction_id": 7, "note": "extra"}).to_transaction()
    assert t.transaction_id == "7"
    assert t.transaction_date is None
    assert math.isnan(t.transaction_amount)
    assert t.transaction_type == ""
    assert t.merchant_name == ""


def test_row_drops_unknown_keys():
    row = TransactionRow.model_validate({"transaction_id": "1", "note": "extra"})
    assert not hasattr(row, "note")
    assert row.model_extra is None


def test_row_accepts_numeric_amount_and_null_text():
    row = TransactionRow.model_validate(
        {"transaction_amount": 12.5, "merchant_name": None, "transaction_date": "bad"}
    )
    t = row.to_transaction()
    assert t.transaction_amount == 12.5
    assert t.merchant_name == ""
    assert t.transaction_date is None


def test_parse_transactions_keeps_file_order():
    ids = [t.transaction_id for t in parse_transactions(SAMPLE_ROWS)]
    assert ids == ["1", "2", "3", "4", "5"]


@pytest.mark.parametrize("payload", [{"transaction_id": "1"}, "text", 3, None])
def test_parse_transactions_requires_array(payload):
    with pytest.raises(ValueError, match="JSON array"):
        parse_transactions(payload)


def test_parse_transactions_reports_bad_element_index():
    with pytest.raises(ValueError, match="#1"):
        parse_transactions([SAMPLE_ROWS[0], ["not", "an", "object"]])


def test_load_transactions_reads_file(sample_dataset: Path, caplog: pytest.LogCaptureFixture):
    with caplog.at_level("INFO", logger="transaction_ledger.ingest"):
        txs = load_transactions(sample_dataset)
    assert len(txs) == 5
    assert txs[2].transaction_amount == 75.5
    assert "loaded 5 transactions" in caplog.text


def test_load_transactions_invalid_json(tmp_path: Path):
    p = tmp_path / "broken.json"
    p.write_text("[{", encoding="utf-8")
    with pytest.raises(ValueError, match="invalid JSON"):
        load_transactions(p)


def test_load_transactions_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_transactions(tmp_path / "absent.json")


def test_load_store_from_explicit_path(sample_dataset: Path):
    store = load_store(sample_dataset)
    assert len(store) == 5
    assert store.find_transaction_by_id("5").merchant_name == "Employer"


def test_resolve_data_path_precedence(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    # conftest chdirs into tmp_path
    assert resolve_data_path() == Path.cwd() / "transactions.json"

    monkeypatch.setenv("TRANSACTION_LEDGER_DATA", str(tmp_path / "env.json"))
    assert resolve_data_path() == tmp_path / "env.json"

    assert resolve_data_path("explicit.json") == Path("explicit.json")


def test_load_store_uses_default_file_in_cwd(tmp_path: Path):
    write_dataset(tmp_path / "transactions.json", SAMPLE_ROWS[:2])
    assert len(load_store()) == 2


def test_round_trip_through_json_file(tmp_path: Path):
    rows = [dict(r, transaction_amount=float(r["transaction_amount"])) for r in SAMPLE_ROWS]
    p = tmp_path / "numeric.json"
    p.write_text(json.dumps(rows), encoding="utf-8")
    assert load_transactions(p) == parse_transactions(SAMPLE_ROWS)
