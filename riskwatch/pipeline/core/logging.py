"""Logging helpers for the assessment pipeline."""
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class SecretRedactor(logging.Filter):
    """Filter that masks the API key in log records."""

    def __init__(self, secret: str) -> None:
        super().__init__()
        self.secret = secret

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        if not self.secret:
            return True
        message = record.getMessage()
        if self.secret in message:
            record.msg = message.replace(self.secret, "[REDACTED]")
            record.args = None
        return True


def setup_logging(*, verbose: bool = False, secret: str = "") -> None:
    """Configure global logging handlers.

    Verbose mode echoes request URLs, raw bodies and retries at DEBUG level.
    """

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    redactor = SecretRedactor(secret)
    for handler in logging.getLogger().handlers:
        handler.addFilter(redactor)
    # httpx logs every request at INFO; keep it for verbose runs only
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
