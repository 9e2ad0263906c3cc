import io
import logging

import pytest

from transaction_ledger.logging_setup import configure_logging, get_logger


def test_get_logger_is_silent_by_default():
    get_logger("transaction_ledger.test")
    pkg = logging.getLogger("transaction_ledger")
    assert any(isinstance(h, logging.NullHandler) for h in pkg.handlers)


def test_configure_logging_attaches_single_stream_handler():
    buf = io.StringIO()
    configure_logging("DEBUG", fmt="%(name)s %(levelname)s %(message)s", stream=buf)
    configure_logging("ERROR", stream=io.StringIO())  # second call is a no-op

    get_logger("transaction_ledger.store").debug("hello")

    pkg = logging.getLogger("transaction_ledger")
    handlers = [h for h in pkg.handlers if not isinstance(h, logging.NullHandler)]
    assert len(handlers) == 1
    assert pkg.propagate is False
    assert buf.getvalue().strip() == "transaction_ledger.store DEBUG hello"


def test_level_falls_back_to_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TRANSACTION_LEDGER_LOG_LEVEL", "warning")
    configure_logging(stream=io.StringIO())
    assert logging.getLogger("transaction_ledger").level == logging.WARNING


@pytest.mark.parametrize(
    ("level", "expected"),
    [("15", 15), (" debug ", logging.DEBUG), ("nonsense", logging.INFO), (logging.ERROR, 40)],
)
def test_level_parsing(level, expected):
    configure_logging(level, stream=io.StringIO())
    assert logging.getLogger("transaction_ledger").level == expected
