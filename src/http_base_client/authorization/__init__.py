# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Authorization strategies.

- DefaultAuthorizationProvider: no-op, used when none is configured
- BearerTokenAuthProvider: static bearer token
- ClientCredentialsAuthProvider: base class for credential exchange with
  single-flight token refresh
- OAuth2ClientCredentialsProvider: OAuth 2.0 client-credentials grant
"""

from .bearer import BearerTokenAuthProvider
from .client_credentials import ClientCredentialsAuthProvider
from .default import DefaultAuthorizationProvider
from .oauth2 import OAuth2ClientCredentialsProvider, OAuth2TokenResponse

__all__ = [
    "BearerTokenAuthProvider",
    "ClientCredentialsAuthProvider",
    "DefaultAuthorizationProvider",
    "OAuth2ClientCredentialsProvider",
    "OAuth2TokenResponse",
]
