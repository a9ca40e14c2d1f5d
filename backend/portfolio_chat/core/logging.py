"""JSON logging for the chat service and CLI.

Records carry the same millisecond ``Z`` timestamps as chat responses, and
the provider credential is masked wherever it shows up in a record.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Iterable

import orjson

from portfolio_chat.core.config import CREDENTIAL_ENV, ENV_PREFIX
from portfolio_chat.utils.time import iso_timestamp

_DEFAULT_LEVEL = os.environ.get(f"{ENV_PREFIX}LOG_LEVEL", "INFO")
REDACTED = "[redacted]"


def _credential_values() -> list[str]:
    values = (os.environ.get(CREDENTIAL_ENV), os.environ.get(f"{ENV_PREFIX}API_KEY"))
    return [value for value in values if value and value.strip()]


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with ``ctx_*`` extras copied through.

    ``secrets`` defaults to the credential values found in the environment
    at format time.
    """

    def __init__(self, secrets: Iterable[str] | None = None) -> None:
        super().__init__()
        self._secrets = list(secrets) if secrets is not None else None

    def _redact(self, text: str) -> str:
        secrets = self._secrets if self._secrets is not None else _credential_values()
        for secret in secrets:
            text = text.replace(secret, REDACTED)
        return text

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "timestamp": iso_timestamp(created),
            "level": record.levelname,
            "name": record.name,
            "message": self._redact(record.getMessage()),
        }
        if record.exc_info:
            payload["exc_info"] = self._redact(self.formatException(record.exc_info))
        if record.stack_info:
            payload["stack"] = record.stack_info
        for key, value in record.__dict__.items():
            if key.startswith("ctx_"):
                payload[key] = self._redact(value) if isinstance(value, str) else value
        return orjson.dumps(payload, default=str).decode("utf-8")


def configure_logging(level: str | int = _DEFAULT_LEVEL, use_json: bool = True) -> None:
    """Install a single stdout handler on the root logger."""
    logging.captureWarnings(True)
    root = logging.getLogger()
    root.setLevel(level)
    handler = logging.StreamHandler(sys.stdout)
    if use_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.handlers = [handler]


def get_logger(name: str = "portfolio_chat") -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


__all__ = ["JsonFormatter", "REDACTED", "configure_logging", "get_logger"]
