# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for translating transport failures into domain errors."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..transport import TransportError


@runtime_checkable
class ErrorTranslator(Protocol):
    """
    Optional hook set consulted by BaseClient when a request fails.

    Returning an exception makes the client raise it instead of the default
    error; returning None declines and the default handling applies.
    """

    def translate_http_error(
        self, error: "TransportError", url: str
    ) -> Exception | None:
        """Translate a failure that carries a structured HTTP response."""
        ...

    def translate_unknown_error(self, error: Exception, url: str) -> Exception | None:
        """Translate a failure without a structured response (network, timeout)."""
        ...
