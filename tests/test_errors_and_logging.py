"""Tests for the error taxonomy and structured logging."""

import json
import logging

from osint_analyst.errors import AnalysisError, ConfigError, NetworkError, ProviderError
from osint_analyst.observability import CustomJsonFormatter, bind_request_id, get_request_id, reset_request_id


class TestErrors:
    def test_config_error_dict(self):
        error = ConfigError("provider_id", "Provider nope not found")
        assert isinstance(error, AnalysisError)
        assert error.to_dict() == {
            "error": {
                "code": "CONFIG_ERROR",
                "message": "Invalid configuration for 'provider_id': Provider nope not found",
                "details": {"field": "provider_id", "reason": "Provider nope not found"},
            }
        }

    def test_provider_error_message(self):
        error = ProviderError("openai", 429, "Too Many Requests")
        assert str(error) == "openai API error: 429 Too Many Requests"
        assert error.to_dict()["error"]["details"]["status_code"] == 429

    def test_network_error_is_provider_error(self):
        error = NetworkError("anthropic", "connection reset")
        assert isinstance(error, ProviderError)
        assert error.status_code is None
        assert error.error_code == "NETWORK_ERROR"
        assert str(error) == "anthropic API error: connection reset"


class TestJsonLogging:
    def test_request_id_is_injected(self):
        formatter = CustomJsonFormatter("%(levelname)s %(name)s %(message)s")
        record = logging.LogRecord("osint_analyst.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)

        token = bind_request_id("req-123")
        try:
            payload = json.loads(formatter.format(record))
        finally:
            reset_request_id(token)

        assert payload["request_id"] == "req-123"
        assert payload["message"] == "hello world"
        assert payload["level"] == "INFO"
        assert "timestamp" in payload
        assert get_request_id() == "system"
