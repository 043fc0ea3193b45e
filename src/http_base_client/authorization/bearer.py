# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Static bearer token authorization."""

from typing import TYPE_CHECKING

from ..types.auth import BypassRule

if TYPE_CHECKING:
    from ..transport import HTTPTransport, TransportRequest


class BearerTokenAuthProvider:
    """
    Attaches a fixed ``Authorization: Bearer <token>`` header to every request.

    Example:
        >>> client = BaseClient(
        ...     ClientConfig(
        ...         base_url="https://api.example.com",
        ...         authorization_provider=BearerTokenAuthProvider("s3cr3t"),
        ...     )
        ... )
    """

    def __init__(self, token: str):
        self._token = token

    def get_auth_bypass_rules(self) -> list[BypassRule]:
        return []

    def authorize_request(
        self, transport: "HTTPTransport", request: "TransportRequest"
    ) -> "TransportRequest":
        request.headers["Authorization"] = f"Bearer {self._token}"
        return request
