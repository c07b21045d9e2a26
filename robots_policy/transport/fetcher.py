# robots_policy/transport/fetcher.py
"""
Fetcher module: downloads /robots.txt over HTTP and classifies the response.
"""
from __future__ import annotations

import asyncio
import io

from aiohttp import ClientError, ClientSession, ClientTimeout

from robots_policy.exceptions import UnavailableError
from robots_policy.logger import logger
from robots_policy.parser.robots_parser import AgentGrouping
from robots_policy.policy.models import Config
from robots_policy.transport.response import classify_and_parse
from robots_policy.utils import robots_url

__all__ = ("DEFAULT_USER_AGENT", "fetch_config")

DEFAULT_USER_AGENT = "RobotsPolicy/1.0"


async def fetch_config(
    url: str,
    *,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = 10.0,
    agent_grouping: AgentGrouping = "last",
) -> Config:
    """
    Fetch robots.txt of the site *url* belongs to and build its Config.

    One GET, no retries. Redirects are followed by aiohttp; the status of the
    final response decides. Network failures and timeouts become
    :class:`UnavailableError`.
    """
    target = robots_url(url)
    logger.debug("GET %s (User-Agent: %s)", target, user_agent)
    try:
        async with ClientSession(
            timeout=ClientTimeout(total=timeout),
            headers={"User-Agent": user_agent},
            raise_for_status=False,
        ) as session:
            async with session.get(target) as resp:
                body = await resp.read()
                status = resp.status
                content_type = resp.headers.get("Content-Type", "")
    except (ClientError, asyncio.TimeoutError) as exc:
        logger.warning("Failed to fetch %s: %s", target, exc)
        raise UnavailableError(url=target) from exc

    logger.debug("%s -> HTTP %s, %s, %d bytes", target, status, content_type, len(body))
    try:
        return classify_and_parse(
            status, content_type, io.BytesIO(body), agent_grouping=agent_grouping
        )
    except UnavailableError as exc:
        raise UnavailableError(exc.status, target) from exc
