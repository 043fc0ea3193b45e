# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Authorization bypass rules.

Decides, per outgoing request, whether the authorization step is skipped.
The configured setting is merged with the rules the authorization provider
declares for itself (for example its own token endpoint) when the client is
constructed.
"""

import logging
import re
from collections.abc import Iterable

from .types.auth import BypassRule, BypassSetting

logger = logging.getLogger(__name__)


def _compile(rule: "BypassRule | str") -> BypassRule:
    if isinstance(rule, str):
        return re.compile(rule)
    return rule


class AuthBypassRules:
    """
    Merged, ordered bypass configuration.

    The setting is one of:

    * ``None``: never bypass.
    * ``True``: bypass every request.
    * a list of rules: bypass when any rule matches, first match wins. A
      pattern rule is searched in the request path; a predicate rule is called
      with ``(method, path)``.

    Predicate rules that raise are treated as "no match" and the request is
    authorized as usual.

    Example:
        >>> rules = AuthBypassRules([re.compile(r"^/?health")])
        >>> rules.should_bypass("GET", "/health")
        True
        >>> rules.should_bypass("GET", "/users")
        False
    """

    def __init__(self, configured: "BypassSetting | list[BypassRule | str]" = None):
        self._setting: BypassSetting
        if configured is None or configured is True:
            self._setting = configured
        else:
            self._setting = [_compile(rule) for rule in configured]

    @property
    def setting(self) -> BypassSetting:
        return self._setting

    def add(self, rules: "Iterable[BypassRule | str] | None") -> None:
        """
        Merge rules declared by an authorization provider.

        * No configured setting: the provider's rules are adopted as-is.
        * ``True``: bypass-all is kept; provider rules cannot narrow it.
        * A rule list: the provider's rules are appended after it.
        """
        compiled = [_compile(rule) for rule in rules or ()]
        if self._setting is None:
            self._setting = compiled
        elif self._setting is True:
            return
        else:
            self._setting.extend(compiled)

    def should_bypass(self, method: str, url: str) -> bool:
        if self._setting is None:
            return False
        if self._setting is True:
            return True

        method = method.upper()
        for rule in self._setting:
            if isinstance(rule, re.Pattern):
                if rule.search(url):
                    return True
            elif callable(rule):
                try:
                    if rule(method, url):
                        return True
                except Exception as e:
                    logger.warning(f"Auth bypass predicate {rule!r} raised {e!r}; treating as no match")
        return False

    def __repr__(self) -> str:
        return f"AuthBypassRules({self._setting!r})"


__all__ = ["AuthBypassRules"]
