# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the HTTP base client.

Every error the request pipeline constructs inherits from BaseClientError and
carries the fully-qualified request URL and the upper-cased HTTP method, so
callers can branch on where a failure happened without parsing messages.

Failures raised by the transport itself (network errors, timeouts,
cancellation) live in :mod:`http_base_client.transport` and are re-raised
unmodified unless an error translator supplies a replacement.
"""

from typing import Any, Literal

ValidationPhase = Literal["request", "response", "query"]


class BaseClientError(Exception):
    """Base exception for all errors produced by the request pipeline.

    Attributes:
        url: Fully-qualified URL of the request that failed.
        method: HTTP method of the request, upper-cased.

    Example:
        try:
            user = await client.get_user(42)
        except BaseClientError as e:
            logger.error(f"{e.method} {e.url} failed: {e}")
    """

    def __init__(self, url: str, method: str, message: str = ""):
        super().__init__(message)
        self.url = url
        self.method = method.upper()


class BaseClientValidationError(BaseClientError):
    """Raised when a payload does not match its schema.

    The phase tells which payload was rejected: the outbound body
    (``"request"``), the inbound body (``"response"``) or the query object
    (``"query"``). A request that fails in the ``"request"`` or ``"query"``
    phase is never dispatched.

    Attributes:
        phase: Which payload failed validation.
        validation_error_message: Human readable description of every
            violation, as produced by the schema engine's formatter.

    Example:
        try:
            await client.create_user(payload)
        except BaseClientValidationError as e:
            if e.phase == "request":
                return {"errors": e.validation_error_message}
            raise
    """

    def __init__(
        self,
        url: str,
        method: str,
        phase: ValidationPhase,
        validation_error_message: str,
    ):
        super().__init__(url, method, validation_error_message)
        self.phase = phase
        self.validation_error_message = validation_error_message


class BaseClientHTTPError(BaseClientError):
    """Raised when the upstream answered with a non-success status.

    The status code, status text and body are kept exactly as received.

    Attributes:
        status_code: HTTP status code of the response.
        status_text: Reason phrase of the response.
        data: Response body as decoded by the transport (JSON value, text or
            bytes depending on the configured response type).

    Example:
        try:
            await client.get_user(42)
        except BaseClientHTTPError as e:
            if e.status_code == 404:
                return None
            raise
    """

    def __init__(
        self,
        url: str,
        method: str,
        status_code: int,
        status_text: str,
        data: Any = None,
        message: str = "",
    ):
        super().__init__(url, method, message)
        self.status_code = status_code
        self.status_text = status_text
        self.data = data


class TokenAcquisitionError(BaseClientError):
    """Raised when a credential exchange with a token issuer fails.

    Attributes:
        status_code: HTTP status returned by the issuer, or None when the
            issuer answered successfully but with an unusable token payload.
        data: Raw issuer response body, if any.
    """

    def __init__(
        self,
        url: str,
        message: str,
        status_code: int | None = None,
        data: Any = None,
    ):
        super().__init__(url, "POST", message)
        self.status_code = status_code
        self.data = data


__all__ = [
    "BaseClientError",
    "BaseClientHTTPError",
    "BaseClientValidationError",
    "TokenAcquisitionError",
    "ValidationPhase",
]
