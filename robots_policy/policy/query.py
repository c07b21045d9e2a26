# robots_policy/policy/query.py
"""
Clean-param normalisation: drop tracking/session parameters before fetching or caching.
"""
from __future__ import annotations

from typing import Dict, List, Set
from urllib.parse import parse_qs, urlencode, urlunsplit

from robots_policy.policy.models import Group
from robots_policy.utils import UrlLike, as_split, request_uri

__all__ = ("clean_param",)


def clean_param(group: Group, url: UrlLike) -> str:
    """Return *url* without the query parameters named by matching Clean-param rules.

    Every rule is matched against the request-URI of the URL as given, so
    earlier rules never change what later rules see. Remaining parameters are
    re-encoded sorted by name; the result is stable under repeated cleaning.
    """
    parts = as_split(url)
    uri = request_uri(parts)

    removed: Set[str] = set()
    for rule in group.clean_params:
        if rule.pattern.matches(uri):
            removed.update(rule.params)

    values: Dict[str, List[str]] = parse_qs(parts.query, keep_blank_values=True)
    kept = {name: vals for name, vals in values.items() if name not in removed}
    query = urlencode(sorted(kept.items()), doseq=True)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))
