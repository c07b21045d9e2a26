# File: robots_policy/policy/__init__.py
"""robots_policy.policy: Модель правил robots.txt и проверки доступа."""

from .access import is_allowed, is_allowed_url
from .models import CleanParamRule, Config, Group, VisitTime, match_group
from .query import clean_param

__all__ = [
    "CleanParamRule",
    "Config",
    "Group",
    "VisitTime",
    "clean_param",
    "is_allowed",
    "is_allowed_url",
    "match_group",
]
