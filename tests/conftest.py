# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Dict, List, Union

import pytest
from aiohttp import web

from meta_scout.config import CrawlerConfig
from meta_scout.crawler.models import FetchError, FetchErrorKind, FetchResult

PageSpec = Union[str, FetchResult, FetchError]


class FakeFetcher:
    """
    In-memory fetcher: maps URL -> HTML body, FetchResult or FetchError.
    Unknown URLs answer HTTP 404. Every requested URL is recorded in *calls*.
    """

    def __init__(self, pages: Dict[str, PageSpec]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def fetch(self, url: str):
        self.calls.append(url)
        spec = self.pages.get(url)
        if spec is None:
            return FetchError(url=url, kind=FetchErrorKind.HTTP_STATUS, message="HTTP 404 Not Found", status=404)
        if isinstance(spec, (FetchResult, FetchError)):
            return spec
        return FetchResult(requested_url=url, url=url, status=200, body=spec)


@pytest.fixture()
def fake_fetcher():
    """Factory fixture: ``fake_fetcher({url: html, ...})``."""
    return FakeFetcher


@pytest.fixture()
def make_config():
    """Factory for CrawlerConfig with test-friendly defaults."""

    def _make(**overrides) -> CrawlerConfig:
        params = {"max_depth": 1, "timeout": 2.0, "user_agent": "TestAgent/1.0"}
        params.update(overrides)
        return CrawlerConfig(**params)

    return _make


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()
