# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
BaseClient: the request pipeline typed API clients are built on.

Every call to :meth:`BaseClient.request` runs the same stages in order:

1. Query validation (when a query schema is given) and query-string
   composition. The fully-qualified URL is computed for diagnostics.
2. Outbound body validation (when an input schema is given). A failure
   raises BaseClientValidationError and the request is never dispatched.
3. Dispatch through the transport. The transport runs the authorization
   interceptor first: bypass rules are evaluated and, unless they match, the
   authorization provider attaches credentials (possibly after awaiting a
   token refresh).
4. Error mapping. Structured HTTP failures become BaseClientHTTPError unless
   :meth:`BaseClient.on_request_error` supplies a replacement; failures without
   a response are re-raised unchanged unless
   :meth:`BaseClient.on_unknown_request_error` supplies one.
5. Inbound body validation (when an output schema is given).

Example:
    >>> class UsersClient(BaseClient):
    ...     async def get_user(self, user_id: int) -> User:
    ...         return await self.request(
    ...             RequestSpec("GET", f"/users/{user_id}", output_schema=User)
    ...         )
    >>>
    >>> async with UsersClient(ClientConfig(base_url="https://api.example.com")) as users:
    ...     user = await users.get_user(42)
"""

import inspect
import logging
import time
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError
from typing_extensions import Self

from .authorization.client_credentials import ClientCredentialsAuthProvider
from .authorization.default import DefaultAuthorizationProvider
from .bypass import AuthBypassRules
from .config import ClientConfig
from .exceptions import BaseClientHTTPError, BaseClientValidationError, ValidationPhase
from .observability.metrics import ClientMetrics, PrometheusClientMetrics
from .protocols.authorization import AuthorizationProvider
from .query import append_query_string, join_url
from .transport import HTTPTransport, TransportError, TransportRequest
from .types.auth import BypassRule
from .types.request import OutT, RequestSpec
from .validation import prettify_validation_error, to_query, to_wire, validate

logger = logging.getLogger(__name__)


class BaseClient:
    """
    Base class for typed API clients.

    Subclasses add one method per endpoint, each building a RequestSpec and
    awaiting :meth:`request`. The two ``on_*`` hooks may be overridden to turn
    transport failures into domain-specific exceptions.

    Attributes:
        config: The client configuration.
        transport: Transport used for every request, including token exchanges.
        authorization_provider: Strategy attaching credentials to requests.
        auth_bypass_rules: Merged bypass configuration.
        metrics: Request metrics, or None when metrics are disabled.
    """

    def __init__(self, config: ClientConfig):
        self.config = config
        self.transport = HTTPTransport.from_config(config)
        self.authorization_provider: AuthorizationProvider = (
            config.authorization_provider or DefaultAuthorizationProvider()
        )

        self.metrics: ClientMetrics | None = None
        if config.metrics_enabled:
            self.metrics = ClientMetrics()
            if config.prometheus_enabled:
                self.metrics.prometheus = PrometheusClientMetrics(config.prometheus_registry)
        if (
            isinstance(self.authorization_provider, ClientCredentialsAuthProvider)
            and self.authorization_provider.metrics is None
        ):
            self.authorization_provider.metrics = self.metrics

        self.auth_bypass_rules = AuthBypassRules(config.auth_bypass_rules)
        self.add_auth_bypass_rules(self.authorization_provider.get_auth_bypass_rules())

        self.transport.add_request_interceptor(self._authorization_interceptor)

    def add_auth_bypass_rules(self, rules: "Iterable[BypassRule | str] | None") -> None:
        """Merge additional bypass rules into the client's configuration."""
        self.auth_bypass_rules.add(rules)

    def should_bypass_auth(self, method: str, url: str) -> bool:
        return self.auth_bypass_rules.should_bypass(method, url)

    async def _authorization_interceptor(self, request: TransportRequest) -> TransportRequest:
        if self.should_bypass_auth(request.method, request.url):
            logger.debug(f"Skipping authorization for {request.method} {request.url}")
            return request

        result = self.authorization_provider.authorize_request(self.transport, request)
        if inspect.isawaitable(result):
            result = await result
        return result

    def get_full_request_url(self, endpoint_uri: str) -> str:
        return join_url(self.config.base_url, endpoint_uri)

    async def request(self, spec: RequestSpec[OutT]) -> OutT:
        """
        Execute a request through the pipeline.

        Args:
            spec: The request description.

        Returns:
            The response body validated against ``spec.output_schema``, or the
            raw decoded body when no output schema is given.

        Raises:
            BaseClientValidationError: The query, the outbound body or the
                response body did not match its schema.
            BaseClientHTTPError: The upstream answered outside the 2xx range.
            TransportError: Timeout or cancellation, re-raised unchanged.
            httpx.RequestError: Network failure, re-raised unchanged.
        """
        started = time.monotonic()
        method = spec.method

        query = spec.query
        if spec.query_schema is not None:
            try:
                query = to_query(query if query is not None else {}, spec.query_schema)
            except ValidationError as e:
                url = self.get_full_request_url(spec.path)
                raise self._validation_error(url, method, "query", e, started) from e

        endpoint_uri = append_query_string(
            spec.path,
            query,
            self.config.params_array_format,
            self.config.params_date_serializer,
        )
        request_url = self.get_full_request_url(endpoint_uri)

        data = spec.data
        if spec.input_schema is not None:
            try:
                data = to_wire(data, spec.input_schema)
            except ValidationError as e:
                raise self._validation_error(request_url, method, "request", e, started) from e

        logger.debug(f"{method} {request_url}")
        try:
            response = await self.transport.request(
                endpoint_uri,
                method=method,
                data=data,
                headers=spec.headers,
                signal=spec.signal,
            )
        except Exception as e:
            error = self._map_request_error(e, request_url, method, started)
            if error is e:
                raise
            raise error from e

        if spec.output_schema is not None:
            try:
                result = validate(response.data, spec.output_schema)
            except ValidationError as e:
                raise self._validation_error(request_url, method, "response", e, started) from e
        else:
            result = response.data

        if self.metrics is not None:
            self.metrics.record_success(method, time.monotonic() - started)
        return result

    def _validation_error(
        self,
        url: str,
        method: str,
        phase: ValidationPhase,
        error: ValidationError,
        started: float,
    ) -> BaseClientValidationError:
        logger.debug(f"{method} {url}: {phase} validation failed")
        if self.metrics is not None:
            self.metrics.record_validation_error(method, phase, time.monotonic() - started)
        return BaseClientValidationError(
            url=url,
            method=method,
            phase=phase,
            validation_error_message=prettify_validation_error(error),
        )

    def _map_request_error(
        self, error: Exception, url: str, method: str, started: float
    ) -> Exception:
        duration = time.monotonic() - started
        if isinstance(error, TransportError) and error.response is not None:
            response = error.response
            logger.debug(f"{method} {url} failed with status {response.status}")
            if self.metrics is not None:
                self.metrics.record_http_error(method, response.status, duration)
            translated = self.on_request_error(error, url)
            if translated is not None:
                return translated
            return BaseClientHTTPError(
                url=url,
                method=method,
                status_code=response.status,
                status_text=response.status_text,
                data=response.data,
                message=error.message,
            )

        logger.debug(f"{method} {url} failed: {error!r}")
        if self.metrics is not None:
            self.metrics.record_transport_error(method, duration)
        translated = self.on_unknown_request_error(error, url)
        if translated is not None:
            return translated
        return error

    # region Overridable methods

    def on_request_error(self, error: TransportError, url: str) -> Exception | None:
        """Translate a failure carrying an HTTP response. Return None to decline."""
        if self.config.error_translator is not None:
            return self.config.error_translator.translate_http_error(error, url)
        return None

    def on_unknown_request_error(self, error: Exception, url: str) -> Exception | None:
        """Translate a failure without an HTTP response. Return None to decline."""
        if self.config.error_translator is not None:
            return self.config.error_translator.translate_unknown_error(error, url)
        return None

    # endregion

    # region Convenience verbs

    async def get(self, path: str, **options: Any) -> Any:
        return await self.request(RequestSpec("GET", path, **options))

    async def post(self, path: str, **options: Any) -> Any:
        return await self.request(RequestSpec("POST", path, **options))

    async def put(self, path: str, **options: Any) -> Any:
        return await self.request(RequestSpec("PUT", path, **options))

    async def patch(self, path: str, **options: Any) -> Any:
        return await self.request(RequestSpec("PATCH", path, **options))

    async def delete(self, path: str, **options: Any) -> Any:
        return await self.request(RequestSpec("DELETE", path, **options))

    # endregion

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = ["BaseClient"]
