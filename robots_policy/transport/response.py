# robots_policy/transport/response.py
"""
Response classifier: decides from HTTP status and Content-Type whether a
robots.txt response is parsed, treated as "no restrictions" or rejected.
"""
from __future__ import annotations

import io
from typing import Any, Optional

from robots_policy.exceptions import UnavailableError, WrongContentTypeError
from robots_policy.parser.robots_parser import AgentGrouping, Source, parse_stream
from robots_policy.policy.models import Config

__all__ = ("classify_and_parse", "parse_response")


def classify_and_parse(
    status: Optional[int],
    content_type: Optional[str],
    body: Optional[Source] = None,
    *,
    agent_grouping: AgentGrouping = "last",
) -> Config:
    """Map a transport response onto a Config.

    * ``status is None`` (no response at all) -> empty Config
    * Content-Type without ``text/plain`` -> :class:`WrongContentTypeError`
    * 4xx -> empty Config (client errors mean "no restrictions")
    * 2xx -> the body is parsed
    * anything else -> :class:`UnavailableError`

    The body is handed to the parser untouched; it is never read here.
    """
    if status is None:
        return Config.empty()

    if "text/plain" not in (content_type or ""):
        raise WrongContentTypeError(content_type)

    if 400 <= status < 500:
        return Config.empty()

    if 200 <= status < 300:
        if body is None:
            body = io.BytesIO(b"")
        return parse_stream(body, agent_grouping=agent_grouping)

    raise UnavailableError(status)


def parse_response(response: Any, *, agent_grouping: AgentGrouping = "last") -> Config:
    """Classify a response-like object (``status``, ``headers`` and a body).

    The body is taken from ``content``, ``body`` or ``raw``, whichever exists.
    ``bytes``/``str`` bodies are wrapped into a stream. ``None`` means there
    was no response.

    Only synchronous bodies are supported. An async reader (for example
    ``aiohttp.ClientResponse.content``) raises :class:`TypeError`; read it
    first and pass the bytes to :func:`classify_and_parse`.
    """
    if response is None:
        return Config.empty()

    status = getattr(response, "status", None)
    if status is None:
        status = getattr(response, "status_code")
    headers = getattr(response, "headers", None) or {}
    content_type = headers.get("Content-Type") or headers.get("content-type")

    body = None
    for attr in ("content", "body", "raw"):
        body = getattr(response, attr, None)
        if body is not None:
            break
    if isinstance(body, (bytes, bytearray)):
        body = io.BytesIO(bytes(body))
    elif isinstance(body, str):
        body = io.StringIO(body)
    elif hasattr(body, "__aiter__") and not hasattr(body, "__iter__"):
        raise TypeError(f"Async response body is not supported: {type(body).__name__}")

    return classify_and_parse(status, content_type, body, agent_grouping=agent_grouping)
