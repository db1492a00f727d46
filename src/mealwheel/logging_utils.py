"""Root logger setup: plain or JSON output with token redaction."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Iterable, Pattern, Tuple

REDACTED = "[redacted]"

# Each pattern keeps group 1 and replaces whatever follows it.
TOKEN_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"(bearer\s+)[\w\-.~+/=]+", re.IGNORECASE),
    re.compile(r"(api_token=)[^&\s]+", re.IGNORECASE),
)

# Extra record attributes lifted into JSON output.
CONTEXT_FIELDS = ("request_id", "user_id", "weeks")

PLAIN_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_QUIET_LOGGERS = {"sqlalchemy.engine": logging.WARNING}
_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def redact(text: str, secrets: Iterable[str] = ()) -> str:
    for pattern in TOKEN_PATTERNS:
        text = pattern.sub(lambda match: match.group(1) + REDACTED, text)
    for secret in secrets:
        text = text.replace(secret, REDACTED)
    return text


class SensitiveDataFilter(logging.Filter):
    """Rewrites a record's rendered message when it carries a token or configured secret."""

    def __init__(self, secrets: Iterable[str]):
        super().__init__()
        self.secrets = tuple(secret.strip() for secret in secrets if secret and secret.strip())

    def filter(self, record: logging.LogRecord) -> bool:
        rendered = record.getMessage()
        cleaned = redact(rendered, self.secrets)
        if cleaned != rendered:
            record.msg, record.args = cleaned, ()
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line, including request context when the record has it."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (name, getattr(record, name))
            for name in CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level_name: str, fmt: str, secrets: Iterable[str]) -> None:
    """Replace root handlers with a single redacting stream handler."""

    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO

    redactor = SensitiveDataFilter(secrets)
    handler = logging.StreamHandler()
    handler.addFilter(redactor)
    if fmt.lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    logging.captureWarnings(True)

    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)
    for name in _UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers = []
        server_logger.setLevel(level)
        server_logger.propagate = True
        server_logger.addFilter(redactor)


__all__ = ["JsonFormatter", "SensitiveDataFilter", "configure_logging", "redact"]
