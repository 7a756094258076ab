"""Unit tests for network timeout handling and error classification."""

from unittest.mock import Mock

import pytest
from requests.exceptions import ConnectionError, HTTPError, Timeout

from wallet_explorer.shared.network import (
    DEFAULT_TIMEOUT_CONFIG,
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    TimeoutConfig,
    classify_error,
    create_network_error,
)

BASE_URL = "https://api.blockcypher.com/v1"


class TestTimeoutConfig:
    def test_default_values(self):
        config = TimeoutConfig()
        assert config.connect_timeout == 5.0
        assert config.read_timeout == 15.0

    def test_request_timeout_tuple(self):
        config = TimeoutConfig(connect_timeout=3.0, read_timeout=10.0)
        assert config.request_timeout == (3.0, 10.0)


class TestClassifyError:
    def test_timeout(self):
        assert classify_error(Timeout()) == NetworkErrorType.TIMEOUT

    def test_connection_error(self):
        assert classify_error(ConnectionError()) == NetworkErrorType.CONNECTION_ERROR

    def test_http_error(self):
        assert classify_error(HTTPError()) == NetworkErrorType.HTTP_ERROR

    def test_value_error_is_invalid_response(self):
        assert classify_error(ValueError("bad json")) == NetworkErrorType.INVALID_RESPONSE

    def test_unknown(self):
        assert classify_error(RuntimeError("boom")) == NetworkErrorType.UNKNOWN


class TestCreateNetworkError:
    def test_timeout_message_names_api(self):
        error = create_network_error(Timeout(), BASE_URL, "Bitcoin wallet lookup")

        assert error.error_type == NetworkErrorType.TIMEOUT
        assert error.message.startswith("Bitcoin wallet lookup: ")
        assert BASE_URL in error.message

    def test_http_error_keeps_status(self):
        response = Mock(status_code=404, text='{"error": "Wallet not found"}')
        error = create_network_error(HTTPError(response=response), BASE_URL)

        assert error.error_type == NetworkErrorType.HTTP_ERROR
        assert error.status_code == 404
        assert error.response_text == '{"error": "Wallet not found"}'
        assert str(error) == 'HTTP error 404: {"error": "Wallet not found"}'

    def test_original_error_is_kept(self):
        original = ConnectionError("refused")
        error = create_network_error(original, BASE_URL)

        assert error.original_error is original
        assert "Check your network connection" in error.message


class TestNetworkClient:
    def _client(self, response=None, side_effect=None):
        session = Mock()
        session.get.return_value = response
        session.get.side_effect = side_effect
        return NetworkClient(BASE_URL + "/", session=session), session

    def test_get_returns_json(self):
        response = Mock()
        response.json.return_value = {"address": "abc"}
        client, session = self._client(response=response)

        result = client.get("/btc/main/addrs/abc/full", params={"limit": 50})

        assert result == {"address": "abc"}
        session.get.assert_called_once_with(
            f"{BASE_URL}/btc/main/addrs/abc/full",
            timeout=DEFAULT_TIMEOUT_CONFIG.request_timeout,
            params={"limit": 50},
        )

    def test_explicit_timeout_overrides_default(self):
        response = Mock()
        response.json.return_value = {}
        client, session = self._client(response=response)

        client.get("/x", timeout=1.0)

        assert session.get.call_args.kwargs["timeout"] == 1.0

    def test_timeout_raises_network_error_once(self):
        client, session = self._client(side_effect=Timeout())

        with pytest.raises(NetworkError) as exc_info:
            client.get("/x", context="lookup")

        assert exc_info.value.error_type == NetworkErrorType.TIMEOUT
        assert session.get.call_count == 1

    def test_http_status_raises_network_error(self):
        response = Mock(status_code=429, text="Limits reached")
        response.raise_for_status.side_effect = HTTPError(response=response)
        client, _ = self._client(response=response)

        with pytest.raises(NetworkError) as exc_info:
            client.get("/x")

        assert exc_info.value.status_code == 429

    def test_invalid_json_raises_network_error(self):
        response = Mock()
        response.json.side_effect = ValueError("Expecting value")
        client, _ = self._client(response=response)

        with pytest.raises(NetworkError) as exc_info:
            client.get("/x")

        assert exc_info.value.error_type == NetworkErrorType.INVALID_RESPONSE
