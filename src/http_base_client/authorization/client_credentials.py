# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Credential-exchange authorization with single-flight token refresh.

ClientCredentialsAuthProvider caches a bearer token and its absolute expiry,
refreshing it shortly before it expires. Concurrent requests never trigger
more than one credential exchange: the first caller starts a refresh task and
every caller arriving while it runs awaits that same task.

Concurrency model:
    All state lives on the event loop. The check for an in-flight refresh and
    the registration of a new one happen without an intervening ``await``, so
    no other coroutine can observe the gap between them. Waiters await the
    shared task through ``asyncio.shield``: cancelling one request abandons its
    own wait but never the refresh other requests depend on.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..types.auth import BypassRule, TokenGrant

if TYPE_CHECKING:
    from ..observability.metrics import ClientMetrics
    from ..transport import HTTPTransport, TransportRequest

logger = logging.getLogger(__name__)


class ClientCredentialsAuthProvider(ABC):
    """
    Base class for strategies that exchange client credentials for a token.

    Subclasses implement :meth:`obtain_token` (the actual exchange) and
    :meth:`get_auth_bypass_rules`, which must at least exempt the token
    endpoint when the exchange goes through the same transport; otherwise the
    token request would try to authorize itself.

    Attributes:
        client_id: Client identifier presented to the issuer.
        client_secret: Client secret presented to the issuer.
        refresh_lead_time: Seconds before expiry at which the token is
            considered stale and refreshed.
        metrics: Optional metrics sink for refresh outcomes.

    Example:
        >>> class ExampleAuth(ClientCredentialsAuthProvider):
        ...     def get_auth_bypass_rules(self):
        ...         return [re.compile(r"^/?auth/token")]
        ...
        ...     async def obtain_token(self, transport):
        ...         response = await transport.request(
        ...             "/auth/token",
        ...             method="POST",
        ...             data={"id": self.client_id, "secret": self.client_secret},
        ...         )
        ...         return TokenGrant(response.data["token"], response.data["ttl"])
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        refresh_lead_time: float = 0.5,
        metrics: "ClientMetrics | None" = None,
    ):
        if refresh_lead_time < 0:
            raise ValueError("refresh_lead_time must be non-negative")
        self.client_id = client_id
        self.client_secret = client_secret
        self.refresh_lead_time = refresh_lead_time
        self.metrics = metrics

        self._bearer_token: str | None = None
        self._bearer_token_expires_at: float = 0.0
        self._refresh_task: asyncio.Task[str] | None = None

    @property
    def token(self) -> str | None:
        """Last acquired token, or None before the first exchange."""
        return self._bearer_token

    @property
    def expires_at(self) -> float:
        """Unix timestamp at which the current token expires."""
        return self._bearer_token_expires_at

    @property
    def refresh_in_flight(self) -> bool:
        return self._refresh_task is not None

    @abstractmethod
    def get_auth_bypass_rules(self) -> list[BypassRule]:
        pass

    @abstractmethod
    async def obtain_token(self, transport: "HTTPTransport") -> TokenGrant:
        """Exchange the client credentials for a new token.

        Args:
            transport: The client's transport, usable for the exchange request.

        Returns:
            The new token and its lifetime in seconds.
        """
        pass

    def after_token_refreshed(self, token: str, ttl: float, expires_at: float) -> None:
        """Called after every successful exchange. Override to log or propagate."""
        pass

    async def authorize_request(
        self, transport: "HTTPTransport", request: "TransportRequest"
    ) -> "TransportRequest":
        token = await self.get_valid_token(transport)
        request.headers["Authorization"] = f"Bearer {token}"
        return request

    async def get_valid_token(self, transport: "HTTPTransport") -> str:
        """
        Return a token that is not about to expire.

        At most one refresh runs at a time: callers arriving while one is in
        flight share its result, or its exception.
        """
        task = self._refresh_task
        if task is None:
            task = asyncio.create_task(self._run_refresh(transport))
            task.add_done_callback(self._on_refresh_done)
            self._refresh_task = task
        return await asyncio.shield(task)

    async def _run_refresh(self, transport: "HTTPTransport") -> str:
        try:
            return await self.refresh_token(transport)
        finally:
            self._refresh_task = None

    @staticmethod
    def _on_refresh_done(task: "asyncio.Task[str]") -> None:
        # Retrieve the exception so it is reported even when every waiter was cancelled
        if not task.cancelled() and task.exception() is not None:
            logger.warning(f"Token refresh failed: {task.exception()!r}")

    async def refresh_token(self, transport: "HTTPTransport") -> str:
        """Exchange credentials if the cached token is missing or stale."""
        if (
            not self._bearer_token
            or time.time() + self.refresh_lead_time > self._bearer_token_expires_at
        ):
            try:
                grant = await self.obtain_token(transport)
            except Exception:
                if self.metrics is not None:
                    self.metrics.record_token_refresh(False)
                raise

            self._bearer_token = grant.token
            self._bearer_token_expires_at = time.time() + grant.ttl
            if self.metrics is not None:
                self.metrics.record_token_refresh(True)
            logger.info(
                f"Obtained new bearer token for client {self.client_id} "
                f"(ttl={grant.ttl}s)"
            )
            self.after_token_refreshed(
                grant.token, grant.ttl, self._bearer_token_expires_at
            )

        return self._bearer_token

    def invalidate_token(self) -> None:
        """Drop the cached token so the next request performs a new exchange."""
        self._bearer_token = None
        self._bearer_token_expires_at = 0.0
        logger.debug(f"Bearer token for client {self.client_id} invalidated")
