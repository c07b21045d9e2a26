# File: tests/test_fetcher.py
# Fetch adapter against a local aiohttp server
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web

from robots_policy.exceptions import UnavailableError, WrongContentTypeError
from robots_policy.policy.access import is_allowed
from robots_policy.transport.fetcher import fetch_config

ROBOTS = "User-agent: TestAgent\nDisallow: /private\nCrawl-delay: 3\n"


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


def _app(handler) -> web.Application:
    app = web.Application()
    app.router.add_get("/robots.txt", handler)
    return app


@pytest_asyncio.fixture
async def server_ok(unused_tcp_port: int) -> AsyncIterator[str]:
    async def handle_robots(request):
        # only the expected User-Agent gets the rules
        if "TestAgent" not in request.headers.get("User-Agent", ""):
            return web.Response(status=403, text="", content_type="text/plain")
        return web.Response(text=ROBOTS, content_type="text/plain")

    async for url in _serve_app(_app(handle_robots), unused_tcp_port):
        yield url


@pytest_asyncio.fixture
async def server_status(request, unused_tcp_port: int) -> AsyncIterator[str]:
    status, content_type = request.param

    async def handle_robots(_):
        return web.Response(status=status, text="oops", content_type=content_type)

    async for url in _serve_app(_app(handle_robots), unused_tcp_port):
        yield url


@pytest_asyncio.fixture
async def server_slow(unused_tcp_port: int) -> AsyncIterator[str]:
    async def handle_robots(_):
        await asyncio.sleep(2)
        return web.Response(text=ROBOTS, content_type="text/plain")

    async for url in _serve_app(_app(handle_robots), unused_tcp_port):
        yield url


@pytest.mark.asyncio()
async def test_fetch_and_parse(server_ok: str):
    config = await fetch_config(f"{server_ok}/some/page?x=1", user_agent="TestAgent/1.0")
    group = config.match_group("TestAgent/1.0")
    assert group.crawl_delay == 3
    assert not is_allowed(group, "/private/area")
    assert is_allowed(group, "/public")


@pytest.mark.asyncio()
@pytest.mark.parametrize("server_status", [(404, "text/plain"), (410, "text/plain")], indirect=True)
async def test_client_error_means_no_restrictions(server_status: str):
    config = await fetch_config(server_status)
    assert len(config.groups) == 0


@pytest.mark.asyncio()
@pytest.mark.parametrize("server_status", [(503, "text/plain")], indirect=True)
async def test_server_error_is_unavailable(server_status: str):
    with pytest.raises(UnavailableError) as excinfo:
        await fetch_config(server_status)
    assert excinfo.value.status == 503
    assert excinfo.value.url == f"{server_status}/robots.txt"


@pytest.mark.asyncio()
@pytest.mark.parametrize("server_status", [(200, "text/html")], indirect=True)
async def test_html_is_wrong_content_type(server_status: str):
    with pytest.raises(WrongContentTypeError):
        await fetch_config(server_status)


@pytest.mark.asyncio()
async def test_timeout_is_unavailable(server_slow: str):
    with pytest.raises(UnavailableError):
        await fetch_config(server_slow, timeout=0.5)


@pytest.mark.asyncio()
async def test_connection_refused_is_unavailable(unused_tcp_port: int):
    with pytest.raises(UnavailableError):
        await fetch_config(f"http://localhost:{unused_tcp_port}/")


@pytest.mark.asyncio()
async def test_relative_url_rejected():
    with pytest.raises(ValueError):
        await fetch_config("/robots.txt")


@pytest.mark.asyncio()
async def test_user_agent_header_is_sent(server_ok: str):
    # default agent is refused with 403, which means "no restrictions"
    config = await fetch_config(server_ok)
    assert len(config.groups) == 0
