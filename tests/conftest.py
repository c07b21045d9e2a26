# File: tests/conftest.py
from pathlib import Path

import pytest

from robots_policy.parser.robots_parser import parse_file
from robots_policy.policy.models import Config

ROBOTS_TXT = """\
# Reference robots.txt used across the test-suite
User-agent: *
Disallow: /

User-agent: YahooBot
Crawl-delay: 1234567890
Disallow: /

User-agent: GoogleBot      # search
Crawl-delay: 0.5
Request-rate: 1/10
Visit-time: 0600-0845
Clean-param: sid&sort /posts/
Clean-param: utm_source
Disallow: /admin
Disallow: /*.php$

User-agent: case-1
Disallow: /
Allow: /p

User-agent: case-2
Disallow: /folder
Allow: /folder

User-agent: case-4
Disallow: /
Allow: /$

User-agent: case-5
Disallow: /*.htm$
Allow: /page$

Host: https://example.com
Sitemap: https://example.com/sitemap.xml
Sitemap: https://example.com/sitemap-news.xml
"""


@pytest.fixture()
def robots_file(tmp_path) -> Path:
    """
    Write the reference robots.txt to a temporary file and return its path.
    """
    path = tmp_path / "robots.txt"
    path.write_text(ROBOTS_TXT, encoding="utf-8")
    return path


@pytest.fixture()
def robots_config(robots_file) -> Config:
    """
    Return the Config parsed from the reference robots.txt.
    """
    return parse_file(robots_file)
