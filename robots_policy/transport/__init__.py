# File: robots_policy/transport/__init__.py
"""robots_policy.transport: классификация HTTP-ответов ответов и загрузка robots.txt."""

from .fetcher import fetch_config
from .response import classify_and_parse, parse_response

__all__ = ["classify_and_parse", "fetch_config", "parse_response"]
