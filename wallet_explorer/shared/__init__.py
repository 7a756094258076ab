"""Shared utilities for Wallet Explorer."""

from wallet_explorer.shared.clipboard import ClipboardWriter, copy_text
from wallet_explorer.shared.logging import (
    ContextLogger,
    LoggingConfig,
    describe_error,
    get_logger,
    redact,
    redact_fields,
    setup_logging,
)
from wallet_explorer.shared.network import (
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    TimeoutConfig,
)

__all__ = [
    "ClipboardWriter",
    "copy_text",
    "NetworkClient",
    "NetworkError",
    "NetworkErrorType",
    "TimeoutConfig",
    "ContextLogger",
    "LoggingConfig",
    "describe_error",
    "get_logger",
    "redact",
    "redact_fields",
    "setup_logging",
]
