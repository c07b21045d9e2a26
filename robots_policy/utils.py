# File: robots_policy/utils.py
"""robots_policy.utils: Утилиты для разбора URL и построения request-URI."""

from __future__ import annotations

from typing import Optional, Sequence, Union
from urllib.parse import SplitResult, quote, urlsplit, urlunsplit

from robots_policy.logger import logger

__all__: Sequence[str] = (
    "UrlLike",
    "as_split",
    "parse_url",
    "request_uri",
    "robots_url",
    "is_remote_source",
)

UrlLike = Union[str, SplitResult]

# Символы, которые допустимы в пути без процентного кодирования (RFC 3986).
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"


def as_split(url: UrlLike) -> SplitResult:
    """Приводит строку или SplitResult к SplitResult."""
    return url if isinstance(url, SplitResult) else urlsplit(url)


def parse_url(value: str, *, netloc_only: bool = False) -> Optional[SplitResult]:
    """Разбирает значение директивы как URL; возвращает None для некорректных значений.

    При ``netloc_only=True`` значение без схемы (``example.com``) трактуется
    как сетевой адрес, а не как путь.
    """
    if not value:
        return None
    if netloc_only and "://" not in value and not value.startswith("//"):
        value = "//" + value
    try:
        parsed = urlsplit(value)
        # обращение к port валидирует порт и скобки IPv6
        parsed.port
    except ValueError as exc:
        logger.debug("Ignoring malformed URL %r: %s", value, exc)
        return None
    return parsed


def request_uri(url: UrlLike) -> str:
    """Возвращает request-URI: экранированный путь (``/`` по умолчанию) и ``?query``."""
    parts = as_split(url)
    path = quote(parts.path, safe=_PATH_SAFE) or "/"
    if parts.query:
        return f"{path}?{parts.query}"
    return path


def robots_url(url: UrlLike) -> str:
    """Строит адрес ``scheme://netloc/robots.txt`` для любого URL сайта."""
    parts = as_split(url)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"URL must be absolute: {urlunsplit(parts)!r}")
    return urlunsplit((parts.scheme, parts.netloc, "/robots.txt", "", ""))


def is_remote_source(source: str) -> bool:
    """Проверяет, что источник robots.txt является http(s)-адресом, а не файлом."""
    return urlsplit(source).scheme in ("http", "https")
