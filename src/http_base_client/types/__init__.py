# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Type definitions for the HTTP base client.

This module exports the value types shared between the pipeline, the
authorization providers and the transport.
"""

from .auth import BypassRule, BypassSetting, TokenGrant
from .request import HTTPMethod, OutT, RequestSpec, Schema

__all__ = [
    "BypassRule",
    "BypassSetting",
    "HTTPMethod",
    "OutT",
    "RequestSpec",
    "Schema",
    "TokenGrant",
]
