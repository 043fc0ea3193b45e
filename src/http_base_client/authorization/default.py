# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""No-op authorization provider used when a client is configured without one."""

from typing import TYPE_CHECKING

from ..types.auth import BypassRule

if TYPE_CHECKING:
    from ..transport import HTTPTransport, TransportRequest


class DefaultAuthorizationProvider:
    """Declares no bypass rules and leaves every request untouched."""

    def get_auth_bypass_rules(self) -> list[BypassRule]:
        return []

    def authorize_request(
        self, transport: "HTTPTransport", request: "TransportRequest"
    ) -> "TransportRequest":
        return request
