"""Lenient date/amount parsers applied at the ingestion boundary.

Raw records carry dates and amounts as strings. They are parsed exactly once,
when a :class:`~transaction_ledger.models.Transaction` is built, so the store
never re-parses strings.

Neither parser raises on malformed input:

- dates that do not parse become ``None`` and are excluded from every date
  comparison downstream;
- amounts that do not parse become ``NaN`` and propagate through sums.

An amount string must be a plain decimal number: an optional sign, digits
with an optional fraction, and an optional exponent (``"-12.5"``, ``".5"``,
``"1e3"``). Underscore separators, ``inf``, ``nan`` and trailing text such as
a currency code are rejected.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any

from .logging_setup import get_logger

_logger = get_logger("transaction_ledger.normalizers")

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _iso_date_part(raw: str) -> str:
    # Accept 'YYYY-MM-DD', 'YYYY-MM-DDTHH:MM:SS' and 'YYYY-MM-DD HH:MM:SS'.
    first = raw.split()[0]
    return first.split("T", 1)[0]


def parse_transaction_date(raw: Any) -> date | None:
    """Parse an ISO calendar date, returning ``None`` when it cannot be read.

    ``date`` instances pass through (``datetime`` values are truncated to
    their date). Strings must start with ``YYYY-MM-DD``; any time suffix is
    dropped.
    """

    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        return None
    s = raw.strip()
    if not s:
        return None
    try:
        return date.fromisoformat(_iso_date_part(s))
    except ValueError:
        _logger.debug("unparseable transaction date %r", raw)
        return None


def parse_transaction_amount(raw: Any) -> float:
    """Parse a decimal amount as ``float``; ``NaN`` when it cannot be read."""

    # bool is an int subclass but never a meaningful amount
    if isinstance(raw, bool):
        return math.nan
    if isinstance(raw, int | float):
        return float(raw)
    if not isinstance(raw, str):
        return math.nan
    s = raw.strip()
    if not _DECIMAL_RE.fullmatch(s):
        _logger.debug("unparseable transaction amount %r", raw)
        return math.nan
    return float(s)


__all__ = ["parse_transaction_amount", "parse_transaction_date"]
