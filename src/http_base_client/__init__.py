# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""HTTP Base Client - Foundation for typed async API clients.

This library standardizes what every hand-written API client ends up
re-implementing: request dispatch, authorization injection, schema validation
of queries and bodies, and normalized errors.

Key Features:
    - Single request pipeline with strictly ordered stages
    - Pluggable authorization providers (bearer token, client credentials,
      OAuth 2.0) with per-request bypass rules
    - Single-flight token refresh shared by concurrent requests
    - pydantic validation of query objects, request bodies and responses
    - Typed errors carrying URL, method, phase and HTTP status
    - qs-style query strings with configurable array encoding

Quick Start:
    >>> from pydantic import BaseModel
    >>> from http_base_client import BaseClient, ClientConfig, RequestSpec
    >>>
    >>> class User(BaseModel):
    ...     id: int
    ...     name: str
    >>>
    >>> class UsersClient(BaseClient):
    ...     async def get_user(self, user_id: int) -> User:
    ...         return await self.request(
    ...             RequestSpec("GET", f"/users/{user_id}", output_schema=User)
    ...         )
    >>>
    >>> async with UsersClient(ClientConfig(base_url="https://api.example.com")) as client:
    ...     user = await client.get_user(42)

Main Exports:
    - BaseClient, ClientConfig, RequestSpec: Core pipeline components
    - BearerTokenAuthProvider, ClientCredentialsAuthProvider,
      OAuth2ClientCredentialsProvider: Authorization strategies
    - BaseClientError and subclasses: Error taxonomy
    - HTTPTransport, TransportError: Transport layer

Note: Prometheus metrics require the 'metrics' extra. Install with:
    pip install http-base-client[metrics]

Version: 1.0.0
"""

__version__ = "1.0.0"

from .authorization import (
    BearerTokenAuthProvider,
    ClientCredentialsAuthProvider,
    DefaultAuthorizationProvider,
    OAuth2ClientCredentialsProvider,
)
from .bypass import AuthBypassRules
from .client import BaseClient
from .config import (
    ArrayFormat,
    BasicAuthCredentials,
    ClientConfig,
    ResponseType,
)
from .exceptions import (
    BaseClientError,
    BaseClientHTTPError,
    BaseClientValidationError,
    TokenAcquisitionError,
)
from .observability import ClientMetrics
from .protocols import (
    AuthorizationProvider,
    ErrorTranslator,
)
from .transport import (
    HTTPTransport,
    RequestCancelledError,
    TransportError,
    TransportRequest,
    TransportResponse,
    TransportTimeoutError,
)
from .types import BypassRule, RequestSpec, TokenGrant

__all__ = [
    "ArrayFormat",
    "AuthBypassRules",
    # Protocols
    "AuthorizationProvider",
    # Core
    "BaseClient",
    # Exceptions
    "BaseClientError",
    "BaseClientHTTPError",
    "BaseClientValidationError",
    "BasicAuthCredentials",
    # Authorization
    "BearerTokenAuthProvider",
    "BypassRule",
    "ClientConfig",
    "ClientCredentialsAuthProvider",
    "ClientMetrics",
    "DefaultAuthorizationProvider",
    "ErrorTranslator",
    # Transport
    "HTTPTransport",
    "OAuth2ClientCredentialsProvider",
    "RequestCancelledError",
    "RequestSpec",
    "ResponseType",
    "TokenAcquisitionError",
    "TokenGrant",
    "TransportError",
    "TransportRequest",
    "TransportResponse",
    "TransportTimeoutError",
]
