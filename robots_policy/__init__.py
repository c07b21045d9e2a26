# robots_policy/__init__.py
"""
robots_policy package initializer.
Defines package version and exposes the parsing and matching API.
"""
__version__ = "0.1.0"

from robots_policy.exceptions import (
    InvalidContentError,
    RobotsPolicyError,
    UnavailableError,
    WrongContentTypeError,
)
from robots_policy.parser.pattern import Matcher, PrefixMatcher, RegexMatcher, compile_pattern
from robots_policy.parser.robots_parser import parse_file, parse_stream, parse_text
from robots_policy.policy import (
    CleanParamRule,
    Config,
    Group,
    VisitTime,
    clean_param,
    is_allowed,
    is_allowed_url,
    match_group,
)
from robots_policy.transport import classify_and_parse, fetch_config, parse_response

__all__ = [
    "__version__",
    "CleanParamRule",
    "Config",
    "Group",
    "InvalidContentError",
    "Matcher",
    "PrefixMatcher",
    "RegexMatcher",
    "RobotsPolicyError",
    "UnavailableError",
    "VisitTime",
    "WrongContentTypeError",
    "classify_and_parse",
    "clean_param",
    "compile_pattern",
    "fetch_config",
    "is_allowed",
    "is_allowed_url",
    "match_group",
    "parse_file",
    "parse_response",
    "parse_stream",
    "parse_text",
]
