# robots_policy/policy/models.py
"""
Data model of a parsed robots.txt: per-agent rule groups and the policy snapshot.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from types import MappingProxyType
from typing import Mapping, Optional, Tuple
from urllib.parse import SplitResult

from robots_policy.parser.pattern import Matcher

__all__ = ("VisitTime", "CleanParamRule", "Group", "Config", "match_group", "WILDCARD")

WILDCARD = "*"


@dataclass(frozen=True, slots=True)
class VisitTime:
    """Daily wall-clock window in which crawling is welcome."""

    start: time
    end: time


@dataclass(frozen=True, slots=True)
class CleanParamRule:
    """Query parameters to strip from URLs whose request-URI matches ``pattern``."""

    pattern: Matcher
    params: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Group:
    """Directives collected for one user-agent token.

    Immutable: the parser accumulates rules in its own draft and builds the
    Group once the stream is consumed. ``crawl_delay`` of ``0.0`` means
    "not specified".
    """

    disallows: Tuple[Matcher, ...] = ()
    allows: Tuple[Matcher, ...] = ()
    clean_params: Tuple[CleanParamRule, ...] = ()
    crawl_delay: float = 0.0
    visit_time: Optional[VisitTime] = None

    def __post_init__(self) -> None:
        # any iterable of rules is stored as a tuple
        for name in ("disallows", "allows", "clean_params"):
            object.__setattr__(self, name, tuple(getattr(self, name)))


@dataclass(frozen=True)
class Config:
    """Read-only policy built from one robots.txt.

    ``group_keys`` holds lower-cased agent tokens, longest first, ``*`` last.
    """

    group_keys: Tuple[str, ...] = ()
    groups: Mapping[str, Group] = field(default_factory=lambda: MappingProxyType({}))
    sitemaps: Mapping[str, SplitResult] = field(default_factory=lambda: MappingProxyType({}))
    host: Optional[SplitResult] = None

    @classmethod
    def empty(cls) -> Config:
        """Policy without groups: everything is allowed."""
        return cls()

    @classmethod
    def build(
        cls,
        groups: dict[str, Group],
        keys: list[str],
        sitemaps: dict[str, SplitResult],
        host: Optional[SplitResult],
    ) -> Config:
        ordered = sorted(keys, key=lambda k: (k == WILDCARD, -len(k)))
        return cls(
            group_keys=tuple(ordered),
            groups=MappingProxyType(dict(groups)),
            sitemaps=MappingProxyType(dict(sitemaps)),
            host=host,
        )

    def match_group(self, user_agent: str) -> Group:
        return match_group(self, user_agent)


def match_group(config: Config, user_agent: str) -> Group:
    """Return the group for *user_agent*; never ``None``.

    A key matches when it occurs anywhere in the lower-cased user-agent, so
    ``googlebot`` matches ``Mozilla/5.0 (compatible; Googlebot/2.1)``. Longer
    keys are tried first, ``*`` is the fallback. Without any match an empty
    group (allow everything) is returned.
    """
    ua = user_agent.lower()
    for key in config.group_keys:
        if key != WILDCARD and key in ua:
            return config.groups[key]
    default = config.groups.get(WILDCARD)
    if default is not None:
        return default
    return Group()
