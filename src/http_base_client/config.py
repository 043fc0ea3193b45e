# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client Configuration for the HTTP base client

This module provides the configuration dataclass consumed by BaseClient,
along with the enums for query-array encoding and response decoding.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx

    from .protocols.authorization import AuthorizationProvider
    from .protocols.errors import ErrorTranslator

from .types.auth import BypassSetting


class ArrayFormat(Enum):
    """How sequences inside a query object are encoded.

    - INDICES: ``ids[0]=1&ids[1]=2``
    - BRACKETS: ``ids[]=1&ids[]=2``
    - REPEAT: ``ids=1&ids=2``
    - COMMA: ``ids=1,2``
    """

    INDICES = "indices"
    BRACKETS = "brackets"
    REPEAT = "repeat"
    COMMA = "comma"


class ResponseType(Enum):
    """How the transport decodes response bodies.

    - JSON: parsed JSON, falling back to text when the body is not JSON
    - TEXT: decoded text
    - BYTES: raw bytes
    """

    JSON = "json"
    TEXT = "text"
    BYTES = "bytes"


@dataclass
class BasicAuthCredentials:
    """HTTP basic auth credentials applied to every request by the transport."""

    username: str
    password: str


@dataclass
class ClientConfig:
    """
    Configuration for a BaseClient.

    Only base_url is required; every other option falls back to the
    transport's defaults.
    """

    # === Transport ===

    base_url: str
    """Base URL every request path is resolved against."""

    headers: dict[str, str] = field(default_factory=dict)
    """Default headers sent with every request."""

    basic_auth: BasicAuthCredentials | None = None
    """Basic auth credentials applied by the transport."""

    max_redirects: int | None = None
    """Maximum redirects to follow. 0 disables redirects, None uses httpx's default."""

    response_type: ResponseType = ResponseType.JSON
    """How response bodies are decoded."""

    response_encoding: str | None = None
    """Text encoding override for TEXT and JSON responses."""

    timeout: float | None = None
    """Request timeout in seconds. None disables the timeout."""

    timeout_error_message: str | None = None
    """Message of the TransportTimeoutError raised when a request times out."""

    transport: "httpx.AsyncBaseTransport | None" = None
    """Optional httpx transport, e.g. httpx.MockTransport in tests."""

    # === Authorization ===

    authorization_provider: "AuthorizationProvider | None" = None
    """Authorization strategy. Defaults to a no-op provider."""

    auth_bypass_rules: BypassSetting = None
    """None (never bypass), True (always bypass) or an ordered list of rules."""

    # === Query string ===

    params_array_format: ArrayFormat = ArrayFormat.BRACKETS
    """Encoding used for sequences inside query objects."""

    params_date_serializer: Callable[[date], str] | None = None
    """Serializer for date/datetime query values. Defaults to ISO 8601."""

    # === Errors ===

    error_translator: "ErrorTranslator | None" = None
    """Optional translator turning transport failures into domain errors."""

    # === Metrics ===

    metrics_enabled: bool = True
    """Enable in-process request metrics."""

    prometheus_enabled: bool = False
    """Also export Prometheus metrics (requires the 'metrics' extra)."""

    prometheus_registry: Any = None
    """CollectorRegistry for Prometheus metrics. None uses the default registry."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.base_url:
            raise ValueError("base_url is required")
        if self.max_redirects is not None and self.max_redirects < 0:
            raise ValueError("max_redirects must be at least 0")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if isinstance(self.params_array_format, str):
            self.params_array_format = ArrayFormat(self.params_array_format)
        if isinstance(self.response_type, str):
            self.response_type = ResponseType(self.response_type)
        if self.auth_bypass_rules is False:
            self.auth_bypass_rules = None
        if self.auth_bypass_rules is not None and self.auth_bypass_rules is not True:
            if not isinstance(self.auth_bypass_rules, list):
                raise ValueError("auth_bypass_rules must be None, True or a list of rules")
            for rule in self.auth_bypass_rules:
                if not isinstance(rule, (str, re.Pattern)) and not callable(rule):
                    raise ValueError(
                        f"auth bypass rule must be a pattern or a callable, got {type(rule).__name__}"
                    )


__all__ = [
    "ArrayFormat",
    "BasicAuthCredentials",
    "ClientConfig",
    "ResponseType",
]
