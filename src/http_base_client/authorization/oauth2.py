# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""OAuth 2.0 client-credentials grant (RFC 6749 section 4.4)."""

import base64
import logging
import re
from typing import TYPE_CHECKING, Literal
from urllib.parse import quote_plus

from pydantic import BaseModel, ConfigDict, ValidationError

from ..exceptions import TokenAcquisitionError
from ..query import join_url
from ..transport import FORM_CONTENT_TYPE, TransportError
from ..types.auth import BypassRule, TokenGrant
from ..validation import prettify_validation_error
from .client_credentials import ClientCredentialsAuthProvider

if TYPE_CHECKING:
    from ..observability.metrics import ClientMetrics
    from ..transport import HTTPTransport

logger = logging.getLogger(__name__)


class OAuth2TokenResponse(BaseModel):
    """Successful token response from an OAuth 2.0 issuer."""

    model_config = ConfigDict(extra="allow")

    access_token: str
    token_type: str = "Bearer"
    expires_in: float | None = None
    scope: str | None = None


class OAuth2ClientCredentialsProvider(ClientCredentialsAuthProvider):
    """
    Obtains bearer tokens from an OAuth 2.0 token endpoint.

    The token request is sent through the client's own transport as a
    ``grant_type=client_credentials`` form. The token endpoint is exempted
    from authorization through a bypass rule.

    Args:
        token_url: Token endpoint, absolute or relative to the client's base URL.
        client_id: OAuth client id.
        client_secret: OAuth client secret.
        scope: Requested scope(s); lists are space-joined.
        audience: Optional ``audience`` form parameter (Auth0 and similar).
        auth_method: ``"basic"`` sends credentials in an HTTP Basic header
            (client_secret_basic), ``"body"`` sends them as form fields
            (client_secret_post).
        default_ttl: Lifetime assumed when the issuer omits ``expires_in``.
        refresh_lead_time: Seconds before expiry at which to refresh.
    """

    def __init__(
        self,
        token_url: str,
        client_id: str,
        client_secret: str,
        scope: str | list[str] | None = None,
        audience: str | None = None,
        auth_method: Literal["basic", "body"] = "basic",
        default_ttl: float = 3600.0,
        refresh_lead_time: float = 0.5,
        metrics: "ClientMetrics | None" = None,
    ):
        super().__init__(client_id, client_secret, refresh_lead_time, metrics)
        if auth_method not in ("basic", "body"):
            raise ValueError("auth_method must be 'basic' or 'body'")
        if default_ttl <= 0:
            raise ValueError("default_ttl must be positive")
        self.token_url = token_url
        self.scope = " ".join(scope) if isinstance(scope, list) else scope
        self.audience = audience
        self.auth_method = auth_method
        self.default_ttl = default_ttl

    def _is_absolute(self) -> bool:
        return self.token_url.startswith(("http://", "https://"))

    def get_auth_bypass_rules(self) -> list[BypassRule]:
        if self._is_absolute():
            pattern = re.escape(self.token_url)
        else:
            pattern = "/?" + re.escape(self.token_url.lstrip("/"))
        return [re.compile(f"^{pattern}(?:\\?|$)")]

    async def obtain_token(self, transport: "HTTPTransport") -> TokenGrant:
        url = self.token_url if self._is_absolute() else join_url(transport.base_url, self.token_url)
        form = {"grant_type": "client_credentials"}
        headers = {"Content-Type": FORM_CONTENT_TYPE, "Accept": "application/json"}
        if self.scope:
            form["scope"] = self.scope
        if self.audience:
            form["audience"] = self.audience
        if self.auth_method == "basic":
            credentials = f"{quote_plus(self.client_id)}:{quote_plus(self.client_secret)}"
            encoded = base64.b64encode(credentials.encode()).decode()
            headers["Authorization"] = f"Basic {encoded}"
        else:
            form["client_id"] = self.client_id
            form["client_secret"] = self.client_secret

        logger.debug(f"Requesting client-credentials token from {url}")
        try:
            response = await transport.request(
                self.token_url, method="POST", data=form, headers=headers
            )
        except TransportError as e:
            if e.response is None:
                raise
            raise TokenAcquisitionError(
                url,
                f"Token request failed with status code {e.response.status}",
                status_code=e.response.status,
                data=e.response.data,
            ) from e

        try:
            payload = OAuth2TokenResponse.model_validate(response.data)
        except ValidationError as e:
            raise TokenAcquisitionError(
                url,
                f"Invalid token response:\n{prettify_validation_error(e)}",
                data=response.data,
            ) from e

        ttl = payload.expires_in if payload.expires_in is not None else self.default_ttl
        return TokenGrant(token=payload.access_token, ttl=ttl)
