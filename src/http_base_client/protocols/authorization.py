# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for authorization strategies."""

from collections.abc import Awaitable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..types.auth import BypassRule

if TYPE_CHECKING:
    from ..transport import HTTPTransport, TransportRequest


@runtime_checkable
class AuthorizationProvider(Protocol):
    """
    Capability set every authorization strategy implements.

    A provider attaches credentials to outgoing requests and declares the
    requests it must never be asked to authorize (typically its own token
    endpoint). It never dispatches the request it is given; it may use the
    transport to talk to a credential issuer.
    """

    def get_auth_bypass_rules(self) -> list[BypassRule]:
        """Rules merged into the client's bypass configuration at construction."""
        ...

    def authorize_request(
        self, transport: "HTTPTransport", request: "TransportRequest"
    ) -> "TransportRequest | Awaitable[TransportRequest]":
        """Return the request with authorization material attached."""
        ...
