import logging

import pytest

from riskwatch.pipeline.core.logging import SecretRedactor, setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    httpx_level = logging.getLogger("httpx").level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger("httpx").setLevel(httpx_level)


def redactors(root):
    return [f for handler in root.handlers for f in handler.filters if isinstance(f, SecretRedactor)]


def test_verbose_setup_enables_debug_and_httpx(restore_logging):
    setup_logging(verbose=True, secret="s3cret")
    root = restore_logging
    assert root.level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.DEBUG
    found = redactors(root)
    assert found and all(f.secret == "s3cret" for f in found)
    assert len(found) == len(root.handlers)


def test_quiet_setup_silences_httpx(restore_logging):
    setup_logging(verbose=False, secret="s3cret")
    root = restore_logging
    assert root.level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING
    assert redactors(root)


def test_redactor_masks_key_in_formatted_output(restore_logging):
    setup_logging(verbose=True, secret="s3cret")
    handler = restore_logging.handlers[0]
    record = logging.LogRecord("riskwatch", logging.DEBUG, __file__, 1, "Fetching with key %s", ("s3cret",), None)
    assert handler.filter(record)
    assert "s3cret" not in handler.format(record)
    assert "[REDACTED]" in handler.format(record)
