"""Container inclusion policy.

The policy is an ordered list of rules. Each rule returns True (allow),
False (deny) or None (no opinion); the first definitive answer wins:

1. includes_pattern - allow only names matching the pattern
2. excludes_pattern - deny names matching the pattern
3. includes        - allow only names in the include list
4. excludes        - deny names in the exclude list
5. default         - allow

A configured pattern always answers, so the lists are ignored when either
pattern is set, and the exclude list is never consulted while the include
list is non-empty.
"""
from __future__ import annotations

import re
from typing import Callable, Iterable

from dockwatch.errors import ConfigError

Rule = Callable[[str], "bool | None"]


def _compile(field: str, pattern: str) -> re.Pattern | None:
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigError(field, f"failed to compile {pattern!r}: {e}", pattern) from e


class InclusionPolicy:
    """Decides whether a resolved container name is observable.

    Immutable after construction. Patterns are searched, not anchored, so
    "web" matches "web-1" unless written as "^web$".
    """

    def __init__(
        self,
        excludes: Iterable[str] = (),
        includes: Iterable[str] = (),
        includes_pattern: str = "",
        excludes_pattern: str = "",
    ):
        """Initialize the policy.

        Args:
            excludes: Container names to deny
            includes: Container names to allow, everything else is denied
            includes_pattern: Regex of names to allow, empty to disable
            excludes_pattern: Regex of names to deny, empty to disable

        Raises:
            ConfigError: If a pattern does not compile
        """
        self.excludes = frozenset(excludes)
        self.includes = frozenset(includes)
        self.includes_regexp = _compile("includes_pattern", includes_pattern)
        self.excludes_regexp = _compile("excludes_pattern", excludes_pattern)
        self._rules: tuple[tuple[str, Rule], ...] = (
            ("includes_pattern", self._includes_pattern_rule),
            ("excludes_pattern", self._excludes_pattern_rule),
            ("includes", self._includes_rule),
            ("excludes", self._excludes_rule),
        )

    def _includes_pattern_rule(self, name: str) -> bool | None:
        if self.includes_regexp is None:
            return None
        return self.includes_regexp.search(name) is not None

    def _excludes_pattern_rule(self, name: str) -> bool | None:
        if self.excludes_regexp is None:
            return None
        return self.excludes_regexp.search(name) is None

    def _includes_rule(self, name: str) -> bool | None:
        if not self.includes:
            return None
        return name in self.includes

    def _excludes_rule(self, name: str) -> bool | None:
        if name in self.excludes:
            return False
        return None

    def decide(self, name: str) -> tuple[bool, str]:
        """Evaluate the rules in order.

        Returns:
            Tuple of (allowed, name of the rule that decided)
        """
        for rule_name, rule in self._rules:
            verdict = rule(name)
            if verdict is not None:
                return verdict, rule_name
        return True, "default"

    def is_allowed(self, name: str) -> bool:
        return self.decide(name)[0]

    def __repr__(self) -> str:
        return (
            f"InclusionPolicy(excludes={sorted(self.excludes)}, includes={sorted(self.includes)}, "
            f"includes_pattern={self.includes_regexp.pattern if self.includes_regexp else ''!r}, "
            f"excludes_pattern={self.excludes_regexp.pattern if self.excludes_regexp else ''!r})"
        )
