"""Console report that exercises every store query.

``build_report`` runs the queries and returns titled results;
``render_report`` formats them with ``rich``. Keeping the two apart lets
tests assert on values without parsing console output.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .models import Transaction
from .store import EmptyStoreError, TransactionStore


@dataclass(frozen=True, slots=True)
class ReportParams:
    """Arguments for the parameterized queries in the report."""

    range_start: date = date(2019, 1, 1)
    range_end: date = date(2019, 1, 2)
    merchant_name: str = "SuperMart"
    transaction_type: str = "debit"
    before: date = date(2019, 1, 1)
    transaction_id: str = "12345"
    min_amount: float = 50.0
    max_amount: float = 200.0
    year: int | None = 2019
    month: int | None = 1
    day: int | None = 1


@dataclass(frozen=True, slots=True)
class ReportEntry:
    title: str
    value: Any = None
    error: str | None = None


def _entry(title: str, compute: Callable[[], Any]) -> ReportEntry:
    try:
        return ReportEntry(title, compute())
    except EmptyStoreError as e:
        return ReportEntry(title, error=str(e))


def build_report(
    store: TransactionStore, params: ReportParams | None = None
) -> list[ReportEntry]:
    """Run each store query once and collect the results in display order."""

    p = params or ReportParams()
    return [
        _entry("Unique transaction types", lambda: sorted(store.get_unique_transaction_types())),
        _entry("Total amount", store.calculate_total_amount),
        _entry("Average amount", store.calculate_average_transaction_amount),
        _entry(
            f"Transactions from {p.range_start} to {p.range_end}",
            lambda: store.get_transactions_in_date_range(p.range_start, p.range_end),
        ),
        _entry(
            f"Transactions at {p.merchant_name!r}",
            lambda: store.get_transactions_by_merchant(p.merchant_name),
        ),
        _entry("All transactions", store.get_all_transactions),
        _entry(
            f"Transactions of type {p.transaction_type!r}",
            lambda: store.get_transactions_by_type(p.transaction_type),
        ),
        _entry(
            f"Transactions before {p.before}",
            lambda: store.get_transactions_before_date(p.before),
        ),
        _entry(
            f"Transaction with id {p.transaction_id!r}",
            lambda: store.find_transaction_by_id(p.transaction_id),
        ),
        _entry("Month with most transactions", store.find_most_transactions_month),
        _entry("Month with most debit transactions", store.find_most_debit_transaction_month),
        _entry("Most frequent transaction type", store.most_transaction_types),
        _entry("Descriptions", store.map_transaction_descriptions),
        _entry("Total debit amount", store.calculate_total_debit_amount),
        _entry(
            f"Transactions between {p.min_amount:g} and {p.max_amount:g}",
            lambda: store.get_transactions_by_amount_range(p.min_amount, p.max_amount),
        ),
        _entry(
            f"Total for {p.year or '*'}-{p.month or '*'}-{p.day or '*'}",
            lambda: store.calculate_total_amount_by_date(p.year, p.month, p.day),
        ),
    ]


def format_amount(value: float) -> str:
    return "n/a" if math.isnan(value) else f"{value:.2f}"


def transactions_table(transactions: Sequence[Transaction], *, title: str | None = None) -> Table:
    table = Table(title=title, show_lines=False)
    for column in ("ID", "Date", "Amount", "Type", "Description", "Merchant", "Card"):
        table.add_column(column, justify="right" if column == "Amount" else "left")
    for t in transactions:
        table.add_row(
            t.transaction_id,
            t.transaction_date.isoformat() if t.transaction_date else "invalid",
            format_amount(t.transaction_amount),
            t.transaction_type,
            t.transaction_description,
            t.merchant_name,
            t.card_type,
        )
    return table


def render_entry(entry: ReportEntry, console: Console) -> None:
    if entry.error is not None:
        console.print(
            f"[bold]{escape(entry.title)}:[/bold] [yellow]{escape(entry.error)}[/yellow]"
        )
        return
    value = entry.value
    if isinstance(value, Transaction):
        console.print(transactions_table([value], title=entry.title))
    elif value is None:
        console.print(f"[bold]{escape(entry.title)}:[/bold] not found")
    elif isinstance(value, float):
        console.print(f"[bold]{escape(entry.title)}:[/bold] {format_amount(value)}")
    elif isinstance(value, list) and value and isinstance(value[0], Transaction):
        console.print(transactions_table(value, title=entry.title))
    elif isinstance(value, list):
        shown = ", ".join(str(v) for v in value) if value else "(none)"
        console.print(f"[bold]{escape(entry.title)}:[/bold] {escape(shown)}")
    else:
        console.print(f"[bold]{escape(entry.title)}:[/bold] {escape(str(value))}")


def render_report(entries: Sequence[ReportEntry], console: Console | None = None) -> None:
    out = console or Console()
    for entry in entries:
        render_entry(entry, out)


__all__ = [
    "ReportEntry",
    "ReportParams",
    "build_report",
    "format_amount",
    "render_report",
    "transactions_table",
]
