import io
import logging
import sys

from twapi.logging import LogfmtFormatter, quote, setup_logging


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("twapi.engine", logging.DEBUG, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_logfmt_includes_known_extras_only():
    line = LogfmtFormatter().format(
        _record("tw.request", method="GET", status=200, duration_ms=12, secret="x")
    )
    assert line == (
        "level=debug logger=twapi.engine event=tw.request "
        "method=GET status=200 duration_ms=12"
    )


def test_logfmt_quotes_values_with_spaces():
    line = LogfmtFormatter().format(_record("Registered tool", tool="list_tasks"))
    assert 'event="Registered tool"' in line
    assert "tool=list_tasks" in line


def test_setup_logging_replaces_handlers():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging("debug")
        setup_logging("warning")
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, LogfmtFormatter)
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_quote():
    assert quote(True) == "true"
    assert quote(1.5) == "1.5"
    assert quote("") == '""'
    assert quote('say "hi"') == '"say \\"hi\\""'
    assert quote("a=b") == '"a=b"'


def test_logfmt_renders_exception_and_custom_fields():
    try:
        raise ValueError("bad thing")
    except ValueError:
        record = logging.LogRecord(
            "twapi", logging.ERROR, __file__, 1, "", None, sys.exc_info()
        )
    record.tenant = "acme"
    line = LogfmtFormatter(fields=("tenant",)).format(record)
    assert line == (
        'level=error logger=twapi tenant=acme exc_type=ValueError exc="bad thing"'
    )


def test_setup_logging_writes_to_stream():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    stream = io.StringIO()
    try:
        setup_logging("info", stream=stream)
        logging.getLogger("twapi.test").info("hello", extra={"page": 2})
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
    assert stream.getvalue() == "level=info logger=twapi.test event=hello page=2\n"
