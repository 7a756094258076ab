"""Logging setup for Wallet Explorer.

Records go to ``~/.wallet-explorer/explorer.log`` (and optionally stdout)
as readable lines or JSON objects. API tokens are redacted before anything
is written. Loggers returned by `get_logger` attach wallet fields such as
the address and coin to every record they emit.
"""

from __future__ import annotations

import json
import logging
import os
import re
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

LOG_DIR_NAME = ".wallet-explorer"
LOG_FILENAME = "explorer.log"
LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
REDACTED = "[REDACTED]"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_format: str = "human"
    to_file: bool = True
    to_stdout: bool = False
    log_dir: Path | None = None

    @classmethod
    def from_environment(cls) -> "LoggingConfig":
        level = os.getenv("WALLET_EXPLORER_LOG_LEVEL", "INFO").upper()
        log_format = os.getenv("WALLET_EXPLORER_LOG_FORMAT", "human").lower()
        return cls(
            level=level if level in LEVEL_NAMES else "INFO",
            log_format="json" if log_format == "json" else "human",
            to_stdout=_env_flag("WALLET_EXPLORER_LOG_STDOUT"),
        )

    @property
    def log_file(self) -> Path:
        return (self.log_dir or Path.home() / LOG_DIR_NAME) / LOG_FILENAME


_TOKEN_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"([?&]token=)([^&\s'\"]+)", re.IGNORECASE),
    re.compile(
        r"((?:api[_-]?)?token['\"]?\s*[:=]\s*['\"]?)([A-Za-z0-9]{16,})",
        re.IGNORECASE,
    ),
)
_SECRET_KEYS = ("token", "secret")


def redact(text: str) -> str:
    """Hide API tokens in `text`. Wallet addresses are public and stay."""
    for pattern in _TOKEN_PATTERNS:
        text = pattern.sub(r"\1" + REDACTED, text)
    return text


def redact_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Copy `fields`, hiding values under secret-looking keys and tokens in strings."""
    result: dict[str, Any] = {}
    for key, value in fields.items():
        if any(name in key.lower() for name in _SECRET_KEYS):
            result[key] = REDACTED
        elif isinstance(value, str):
            result[key] = redact(value)
        elif isinstance(value, Mapping):
            result[key] = redact_fields(value)
        else:
            result[key] = value
    return result


# First match wins.
_ERROR_DESCRIPTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (
        re.compile(r"timeout|timed out"),
        "Connection timed out. Try again later or check your network connection.",
    ),
    (
        re.compile(r"connection refused|cannot connect|connection error"),
        "Unable to connect to the API. Check your internet connection.",
    ),
    (
        re.compile(r"rate limit|too many requests|\b429\b"),
        "Too many requests. Wait a moment or set BLOCKCYPHER_TOKEN.",
    ),
    (
        re.compile(r"not found|\b404\b"),
        "The wallet was not found. Check the address and the selected blockchain.",
    ),
    (
        re.compile(r"invalid.*address|address.*invalid|\b400\b"),
        "The address is not valid. Scan the QR code again or type the address.",
    ),
    (
        re.compile(r"invalid response|malformed"),
        "The API returned data that could not be read.",
    ),
)


def describe_error(error: Exception | str) -> str:
    """Readable wording for a failed wallet lookup."""
    text = str(error).lower()
    for pattern, description in _ERROR_DESCRIPTIONS:
        if pattern.search(text):
            return description
    return "An unexpected error occurred."


def _record_context(record: logging.LogRecord) -> dict[str, Any]:
    context = getattr(record, "context", None)
    if isinstance(context, Mapping):
        return redact_fields(context)
    return {}


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": redact(record.getMessage()),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        context = _record_context(record)
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = redact(self.formatException(record.exc_info))
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """``time - logger - LEVEL - message [key=value ...]`` lines."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = _record_context(record)
        if context:
            fields = " ".join(f"{key}={value}" for key, value in context.items())
            line = f"{line} [{fields}]"
        return line

    def format(self, record: logging.LogRecord) -> str:
        return redact(super().format(record))


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that stores its fields on each record as ``context``."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = kwargs.get("extra") or {}
        context = {**(self.extra or {}), **extra.get("context", {})}
        kwargs["extra"] = {**extra, "context": context}
        return msg, kwargs

    def bind(self, **context: Any) -> "ContextLogger":
        return ContextLogger(self.logger, {**(self.extra or {}), **context})


def get_logger(name: str, **context: Any) -> ContextLogger:
    return ContextLogger(logging.getLogger(name), context)


_configured = False


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Install the file and stdout handlers on the root logger, once."""
    global _configured

    if _configured:
        return

    config = config or LoggingConfig.from_environment()
    formatter: logging.Formatter = (
        JsonFormatter() if config.log_format == "json" else TextFormatter()
    )

    handlers: list[logging.Handler] = []
    if config.to_file:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.FileHandler(config.log_file, mode="a", encoding="utf-8")
        )
    if config.to_stdout:
        handlers.append(logging.StreamHandler(sys.stdout))

    root = logging.getLogger()
    root.setLevel(config.level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    _configured = True
