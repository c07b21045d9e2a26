# robots_policy/parser/pattern.py
"""
Compiler for robots.txt path patterns (``Allow``/``Disallow``/``Clean-param``).

``*`` matches any sequence of characters, a ``$`` marks the end of the URI
(a trailing newline does not satisfy it).
Patterns without either are plain prefixes and never touch the regex engine.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

__all__ = ("PrefixMatcher", "RegexMatcher", "Matcher", "compile_pattern")


@dataclass(frozen=True, slots=True)
class PrefixMatcher:
    """Literal pattern: matches every string starting with ``pattern``."""

    pattern: str

    def matches(self, s: str) -> bool:
        return s.startswith(self.pattern)


@dataclass(frozen=True, slots=True)
class RegexMatcher:
    """Wildcard pattern compiled to a ``^``-anchored regular expression."""

    pattern: str
    regex: re.Pattern[str]

    def matches(self, s: str) -> bool:
        return self.regex.match(s) is not None


Matcher = Union[PrefixMatcher, RegexMatcher]


def compile_pattern(pattern: str) -> Matcher:
    """Compile a path pattern once, at parse time.

    Trailing ``*`` are dropped: every pattern already matches any suffix.

    >>> compile_pattern("/page*")
    PrefixMatcher(pattern='/page')
    >>> compile_pattern("/*.php$").matches("/index.php")
    True
    """
    stripped = pattern.rstrip("*")
    if "*" not in stripped and "$" not in stripped:
        return PrefixMatcher(stripped)

    expr = re.escape(stripped).replace(r"\*", ".*").replace(r"\$", r"\Z")
    return RegexMatcher(stripped, re.compile("^" + expr))
