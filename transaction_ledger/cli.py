# ruff: noqa: I001
"""CLI for the ``transaction_ledger`` package.

Exposes callable command handlers (``cmd_report``, ``cmd_lookup``,
``cmd_months``) and a Typer-based console interface. Environment variables
(``TRANSACTION_LEDGER_DATA``, ``TRANSACTION_LEDGER_LOG_LEVEL``) are loaded
from a local ``.env`` via ``python-dotenv`` before any command runs. Query
logic lives in :mod:`transaction_ledger.store`.
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from typer.models import OptionInfo

from .ingest import load_transactions, resolve_data_path
from .logging_setup import configure_logging, get_logger
from .models import Transaction
from .normalizers import parse_transaction_date
from .report import ReportParams, build_report, render_report, transactions_table
from .store import EmptyStoreError, TransactionStore

_logger = get_logger("transaction_ledger.cli")


# ---- Small module-level helpers ---------------------------------------------


def _read_transactions(path: Path) -> list[Transaction] | None:
    """Read a dataset file, printing a concise error and returning ``None`` on failure."""

    try:
        return load_transactions(path)
    except FileNotFoundError:
        print(f"Error: File not found: {path}", file=sys.stderr)
    except PermissionError:
        print(f"Error: Permission denied: {path}", file=sys.stderr)
    except OSError as e:
        print(f"Error: Unexpected failure reading '{path}': {e}", file=sys.stderr)
    except ValueError as e:
        print(f"Error: Failed to load transactions: {e}", file=sys.stderr)
    return None


def _open_store(json_path: Path | None) -> TransactionStore | None:
    transactions = _read_transactions(resolve_data_path(json_path))
    if transactions is None:
        return None
    return TransactionStore(transactions)


def _parse_date_option(value: str | None) -> date | None:
    if value is None:
        return None
    parsed = parse_transaction_date(value)
    if parsed is None:
        raise typer.BadParameter(f"expected a YYYY-MM-DD date, got {value!r}")
    return parsed


# ---- Command handlers ---------------------------------------------------------


def cmd_report(
    json_path: Path | None = None,
    *,
    append_path: Path | None = None,
    params: ReportParams | None = None,
) -> int:
    """Load the dataset, optionally append more records, and print the report."""

    store = _open_store(json_path)
    if store is None:
        return 1

    if append_path is not None:
        extra = _read_transactions(append_path)
        if extra is None:
            return 1
        for t in extra:
            store.add_transaction(t)
        _logger.info("appended %d transactions from %s", len(extra), append_path)

    render_report(build_report(store, params), Console())
    return 0


def cmd_lookup(transaction_id: str, json_path: Path | None = None) -> int:
    """Print the first record with ``transaction_id``; exit status 1 when absent."""

    store = _open_store(json_path)
    if store is None:
        return 1
    found = store.find_transaction_by_id(transaction_id)
    if found is None:
        print(f"Error: No transaction with id {transaction_id!r}", file=sys.stderr)
        return 1
    Console().print(transactions_table([found]))
    return 0


def cmd_months(json_path: Path | None = None, *, debit_only: bool = False) -> int:
    """Print per-month record counts (first-seen order) and the busiest month."""

    store = _open_store(json_path)
    if store is None:
        return 1

    console = Console()
    subset = store.get_transactions_by_type("debit") if debit_only else None
    for key, n in store.count_by_month(subset).items():
        console.print(f"{key.label}\t{n}")
    try:
        busiest = (
            store.find_most_debit_transaction_month()
            if debit_only
            else store.find_most_transactions_month()
        )
    except EmptyStoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    console.print(f"Busiest month: {busiest}")
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Query and summarize a JSON transaction ledger. "
        "Loads TRANSACTION_LEDGER_* settings from a local .env before running."
    ),
)

# Module-level option object to satisfy ruff B008 (no calls in defaults).
JSON_PATH_OPTION: OptionInfo = typer.Option(
    "--json-path",
    help=(
        "Path to the JSON dataset "
        "(falls back to TRANSACTION_LEDGER_DATA, then ./transactions.json)."
    ),
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files itself
)


@app.command("report")
def report_cmd(
    json_path: Annotated[Path | None, JSON_PATH_OPTION] = None,
    append: Annotated[
        Path | None,
        typer.Option(
            help="JSON file whose records are appended before reporting.",
            dir_okay=False,
        ),
    ] = None,
    start: Annotated[str, typer.Option(help="Date range start (inclusive).")] = "2019-01-01",
    end: Annotated[str, typer.Option(help="Date range end (inclusive).")] = "2019-01-02",
    merchant: Annotated[str, typer.Option(help="Merchant name to filter by.")] = "SuperMart",
    transaction_type: Annotated[
        str, typer.Option("--type", help="Transaction type to filter by.")
    ] = "debit",
    before: Annotated[str, typer.Option(help="Show transactions before this date.")] = (
        "2019-01-01"
    ),
    transaction_id: Annotated[str, typer.Option("--id", help="Transaction id to look up.")] = (
        "12345"
    ),
    min_amount: Annotated[float, typer.Option(help="Amount range minimum.")] = 50.0,
    max_amount: Annotated[float, typer.Option(help="Amount range maximum.")] = 200.0,
    year: Annotated[int, typer.Option(help="Year for the dated total (0 for any).")] = 2019,
    month: Annotated[int, typer.Option(help="Month 1-12 for the dated total (0 for any).")] = 1,
    day: Annotated[int, typer.Option(help="Day for the dated total (0 for any).")] = 1,
) -> None:
    """Run every query against the dataset and print the results."""

    params = ReportParams(
        range_start=_parse_date_option(start),
        range_end=_parse_date_option(end),
        merchant_name=merchant,
        transaction_type=transaction_type,
        before=_parse_date_option(before),
        transaction_id=transaction_id,
        min_amount=min_amount,
        max_amount=max_amount,
        year=year,
        month=month,
        day=day,
    )
    code = cmd_report(json_path, append_path=append, params=params)
    if code:
        raise typer.Exit(code)


@app.command("lookup")
def lookup_cmd(
    transaction_id: Annotated[str, typer.Argument(help="Transaction id to find.")],
    json_path: Annotated[Path | None, JSON_PATH_OPTION] = None,
) -> None:
    """Show the first transaction with the given id."""

    code = cmd_lookup(transaction_id, json_path)
    if code:
        raise typer.Exit(code)


@app.command("months")
def months_cmd(
    json_path: Annotated[Path | None, JSON_PATH_OPTION] = None,
    debit_only: Annotated[bool, typer.Option(help="Count debit transactions only.")] = False,
) -> None:
    """Show transaction counts per month and the busiest month."""

    code = cmd_months(json_path, debit_only=debit_only)
    if code:
        raise typer.Exit(code)


@app.callback()
def _root(
    log_level: Annotated[
        str | None,
        typer.Option(help="Log level (falls back to TRANSACTION_LEDGER_LOG_LEVEL)."),
    ] = None,
) -> None:
    """Load ``.env`` from the working directory and configure logging."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)


if __name__ == "__main__":  # pragma: no cover
    app()
