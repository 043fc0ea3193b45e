# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for pluggable client components.

Available protocols:
- AuthorizationProvider: Interface for strategies that attach credentials
- ErrorTranslator: Interface for mapping transport failures to domain errors
"""

from .authorization import AuthorizationProvider
from .errors import ErrorTranslator

__all__ = [
    "AuthorizationProvider",
    "ErrorTranslator",
]
