"""Unit tests for the exceptions module.

Tests all exception classes defined in http_base_client.exceptions.
"""

import pytest

from http_base_client.exceptions import (
    BaseClientError,
    BaseClientHTTPError,
    BaseClientValidationError,
    TokenAcquisitionError,
)


class TestBaseClientError:
    """Tests for the base BaseClientError exception."""

    def test_can_be_caught_as_exception(self):
        with pytest.raises(Exception):  # noqa: B017
            raise BaseClientError("https://api.example.com/x", "get", "boom")

    def test_method_is_upper_cased(self):
        error = BaseClientError("https://api.example.com/x", "patch")
        assert error.method == "PATCH"

    def test_stores_url_and_message(self):
        error = BaseClientError("https://api.example.com/x", "GET", "boom")
        assert error.url == "https://api.example.com/x"
        assert str(error) == "boom"


class TestBaseClientValidationError:
    """Tests for BaseClientValidationError."""

    def test_can_be_caught_as_base_client_error(self):
        with pytest.raises(BaseClientError):
            raise BaseClientValidationError("u", "POST", "request", "✖ Field required")

    def test_stores_phase_and_message(self):
        error = BaseClientValidationError(
            "https://api.example.com/users", "post", "response", "✖ Field required\n  → at id"
        )
        assert error.phase == "response"
        assert error.validation_error_message == "✖ Field required\n  → at id"
        assert str(error) == "✖ Field required\n  → at id"
        assert error.method == "POST"


class TestBaseClientHTTPError:
    """Tests for BaseClientHTTPError."""

    def test_stores_response_verbatim(self):
        body = {"error": "not found", "details": [1, 2]}
        error = BaseClientHTTPError(
            "https://api.example.com/users/1",
            "get",
            status_code=404,
            status_text="Not Found",
            data=body,
            message="Request failed with status code 404",
        )
        assert error.status_code == 404
        assert error.status_text == "Not Found"
        assert error.data is body
        assert error.url == "https://api.example.com/users/1"
        assert error.method == "GET"
        assert str(error) == "Request failed with status code 404"

    def test_data_defaults_to_none(self):
        error = BaseClientHTTPError("u", "GET", status_code=500, status_text="Internal Server Error")
        assert error.data is None


class TestTokenAcquisitionError:
    """Tests for TokenAcquisitionError."""

    def test_is_base_client_error_with_post_method(self):
        error = TokenAcquisitionError("https://auth.example.com/token", "rejected", status_code=401)
        assert isinstance(error, BaseClientError)
        assert error.method == "POST"
        assert error.status_code == 401
        assert error.data is None
