"""Tests for logging configuration, redaction and error descriptions."""

import json
import logging

import pytest

from wallet_explorer.features.wallets.service import WalletFetchError
from wallet_explorer.shared import logging as explorer_logging
from wallet_explorer.shared.logging import (
    ContextLogger,
    JsonFormatter,
    LoggingConfig,
    TextFormatter,
    describe_error,
    get_logger,
    redact,
    redact_fields,
    setup_logging,
)
from wallet_explorer.shared.network import NetworkError, NetworkErrorType
from wallet_explorer.wallet import WalletType

pytestmark = pytest.mark.unit

ADDRESS = "1DEP8i3QJCsomS4BSMY2RpU1upv62aGvhD"


def _record(message, **extra):
    record = logging.LogRecord(
        name="wallet_explorer.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLoggingConfig:
    def test_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        config = LoggingConfig()

        assert config.level == "INFO"
        assert config.log_format == "human"
        assert config.to_file is True
        assert config.to_stdout is False
        assert config.log_file == tmp_path / ".wallet-explorer" / "explorer.log"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("WALLET_EXPLORER_LOG_LEVEL", "debug")
        monkeypatch.setenv("WALLET_EXPLORER_LOG_STDOUT", "yes")
        monkeypatch.setenv("WALLET_EXPLORER_LOG_FORMAT", "JSON")

        config = LoggingConfig.from_environment()

        assert config.level == "DEBUG"
        assert config.to_stdout is True
        assert config.log_format == "json"

    def test_unknown_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("WALLET_EXPLORER_LOG_LEVEL", "chatty")
        monkeypatch.setenv("WALLET_EXPLORER_LOG_FORMAT", "xml")

        config = LoggingConfig.from_environment()

        assert config.level == "INFO"
        assert config.log_format == "human"


class TestRedaction:
    def test_token_query_parameter(self):
        message = "GET /btc/main/addrs/abc/full?limit=50&token=0123456789abcdef failed"

        redacted = redact(message)

        assert "0123456789abcdef" not in redacted
        assert "token=[REDACTED]" in redacted

    def test_token_assignment(self):
        assert "0123456789abcdef0123" not in redact("api_token: 0123456789abcdef0123")

    def test_addresses_are_kept(self):
        assert redact(f"Fetching {ADDRESS}") == f"Fetching {ADDRESS}"

    def test_redact_fields(self):
        fields = {
            "token": "abc",
            "nested": {"client_secret": "xyz", "url": "/x?token=abcdef"},
            "limit": 50,
        }

        result = redact_fields(fields)

        assert result["token"] == "[REDACTED]"
        assert result["nested"]["client_secret"] == "[REDACTED]"
        assert result["nested"]["url"] == "/x?token=[REDACTED]"
        assert result["limit"] == 50
        assert fields["token"] == "abc"


class TestDescribeError:
    @pytest.mark.parametrize(
        "error,expected",
        [
            ("Connection timeout. API may be unavailable", "Connection timed out"),
            ("Cannot connect to API", "Unable to connect"),
            ("HTTP error 429: Limits reached", "Too many requests"),
            ("HTTP error 404: Wallet not found", "The wallet was not found."),
            ("Invalid response from API", "could not be read"),
        ],
    )
    def test_known_errors(self, error, expected):
        assert expected in describe_error(error)

    def test_unknown_error(self):
        assert describe_error(RuntimeError("boom")) == "An unexpected error occurred."

    def test_status_codes_are_not_matched_inside_addresses(self):
        address = "1A4001111404111111111111111111111"
        cause = NetworkError(NetworkErrorType.UNKNOWN, "Network error: boom")

        message = describe_error(WalletFetchError(address, WalletType.BITCOIN, cause))

        assert message == "An unexpected error occurred."


class TestFormatters:
    def test_json_formatter_includes_redacted_context(self):
        record = _record("lookup", context={"address": ADDRESS, "token": "abc"})

        data = json.loads(JsonFormatter().format(record))

        assert data["message"] == "lookup"
        assert data["level"] == "INFO"
        assert data["context"] == {"address": ADDRESS, "token": "[REDACTED]"}

    def test_text_formatter_appends_context(self):
        record = _record("GET /x?token=abcdef", context={"coin": "btc"})

        output = TextFormatter().format(record)

        assert "abcdef" not in output
        assert "wallet_explorer.test - INFO" in output
        assert output.endswith("[coin=btc]")


class TestContextLogger:
    def test_fields_reach_the_record(self, caplog):
        log = get_logger("wallet_explorer.test", coin="btc").bind(address=ADDRESS)

        with caplog.at_level(logging.INFO, logger="wallet_explorer.test"):
            log.info("lookup")

        assert caplog.records[-1].context == {"coin": "btc", "address": ADDRESS}

    def test_call_context_is_merged(self):
        log = ContextLogger(logging.getLogger("x"), {"coin": "btc"})

        _, kwargs = log.process("msg", {"extra": {"context": {"limit": 50}}})

        assert kwargs["extra"]["context"] == {"coin": "btc", "limit": 50}


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def reset_logging(self, monkeypatch):
        root = logging.getLogger()
        handlers = root.handlers[:]
        level = root.level
        monkeypatch.setattr(explorer_logging, "_configured", False)
        yield
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in handlers:
            root.addHandler(handler)
        root.setLevel(level)

    def test_writes_log_file(self, tmp_path):
        setup_logging(LoggingConfig(log_dir=tmp_path, level="DEBUG"))

        get_logger("wallet_explorer.test", address=ADDRESS).info("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()

        text = (tmp_path / "explorer.log").read_text(encoding="utf-8")
        assert "hello" in text
        assert f"[address={ADDRESS}]" in text

    def test_json_format(self, tmp_path):
        setup_logging(LoggingConfig(log_dir=tmp_path, log_format="json"))

        logging.getLogger("wallet_explorer.test").warning("careful")
        for handler in logging.getLogger().handlers:
            handler.flush()

        line = (tmp_path / "explorer.log").read_text(encoding="utf-8").splitlines()[-1]
        assert json.loads(line)["message"] == "careful"

    def test_setup_is_idempotent(self, tmp_path):
        setup_logging(LoggingConfig(log_dir=tmp_path))
        count = len(logging.getLogger().handlers)

        setup_logging(LoggingConfig(log_dir=tmp_path))

        assert len(logging.getLogger().handlers) == count
