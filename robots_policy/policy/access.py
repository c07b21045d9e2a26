# robots_policy/policy/access.py
"""
Allow/disallow resolution for a single rule group.
"""
from __future__ import annotations

from robots_policy.policy.models import Group
from robots_policy.utils import UrlLike, request_uri

__all__ = ("is_allowed", "is_allowed_url")


def is_allowed(group: Group, uri: str) -> bool:
    """Return True if *uri* (path plus query, matched verbatim) may be fetched.

    A group without Disallow rules permits everything. Otherwise the first
    matching Disallow denies and the first matching Allow overrides any denial;
    rule length plays no part.
    """
    if not group.disallows:
        return True

    allowed = not any(rule.matches(uri) for rule in group.disallows)
    if any(rule.matches(uri) for rule in group.allows):
        return True
    return allowed


def is_allowed_url(group: Group, url: UrlLike) -> bool:
    """Same as :func:`is_allowed` for a full URL (its request-URI is checked)."""
    return is_allowed(group, request_uri(url))
