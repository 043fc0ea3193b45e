# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Authorization-related value types."""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal, Union

# A rule either matches the resolved request path (regex search) or is a
# predicate over (method, path).
BypassRule = Union[re.Pattern[str], Callable[[str, str], bool]]

# None: never bypass. True: bypass every request. List: first match wins.
BypassSetting = Union[None, Literal[True], list[BypassRule]]


@dataclass
class TokenGrant:
    """Credential returned by a token issuer.

    Attributes:
        token: The bearer token.
        ttl: Lifetime of the token in seconds, counted from acquisition.
    """

    token: str
    ttl: float


__all__ = ["BypassRule", "BypassSetting", "TokenGrant"]
