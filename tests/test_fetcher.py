# File: tests/test_fetcher.py
# Live aiohttp server tests for Fetcher and an end-to-end crawl
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import ClientSession, web

from conftest import serve_app
from meta_scout.crawler.crawler import AsyncCrawler
from meta_scout.crawler.fetcher import Fetcher
from meta_scout.crawler.models import FetchError, FetchErrorKind, FetchResult


@pytest_asyncio.fixture
async def site(unused_tcp_port: int) -> AsyncIterator[str]:
    app = web.Application()

    async def root(_):
        return web.Response(
            text=(
                "<html><head><title>Root</title>"
                '<meta name="keywords" content="alpha, beta,alpha"></head>'
                '<body><h1>Main</h1><a href="/about">About</a>'
                f'<a href="http://localhost:{unused_tcp_port}/elsewhere">Other host</a>'
                '<a href="/old">Moved</a></body></html>'
            ),
            content_type="text/html",
        )

    async def about(_):
        return web.Response(
            text='<title>About</title><h2>Team</h2><a href="/">Home</a>', content_type="text/html"
        )

    async def old(_):
        raise web.HTTPFound("/mid")

    async def mid(_):
        raise web.HTTPFound("/new")

    async def new(_):
        return web.Response(text="<title>New</title>", content_type="text/html")

    async def missing(_):
        return web.Response(status=404, text="nope")

    async def broken(_):
        return web.Response(status=500, text="boom")

    async def slow(_):
        await asyncio.sleep(1.0)
        return web.Response(text="<title>Slow</title>", content_type="text/html")

    for path, handler in (
        ("/", root),
        ("/about", about),
        ("/old", old),
        ("/mid", mid),
        ("/new", new),
        ("/missing", missing),
        ("/broken", broken),
        ("/slow", slow),
        ("/elsewhere", root),
    ):
        app.router.add_get(path, handler)

    async for url in serve_app(app, unused_tcp_port):
        yield url


async def fetch(config, url: str):
    async with ClientSession() as session:
        return await Fetcher(session, config).fetch(url)


@pytest.mark.asyncio()
async def test_fetch_ok(make_config, site: str):
    result = await fetch(make_config(), f"{site}/about")
    assert isinstance(result, FetchResult)
    assert result.status == 200
    assert "<h2>Team</h2>" in result.body
    assert not result.redirected
    assert result.redirect_chain == []
    assert result.redirect_count == 0


@pytest.mark.asyncio()
async def test_fetch_follows_redirect_chain(make_config, site: str):
    result = await fetch(make_config(), f"{site}/old")
    assert isinstance(result, FetchResult)
    assert result.requested_url == f"{site}/old"
    assert result.url == f"{site}/new"
    assert result.redirected
    assert result.redirect_count == 2
    assert result.redirect_chain == [f"{site}/mid", f"{site}/new"]


@pytest.mark.asyncio()
@pytest.mark.parametrize("path,status", [("/missing", 404), ("/broken", 500)])
async def test_fetch_http_status_error(make_config, site: str, path: str, status: int):
    result = await fetch(make_config(), f"{site}{path}")
    assert isinstance(result, FetchError)
    assert result.kind is FetchErrorKind.HTTP_STATUS
    assert result.status == status


@pytest.mark.asyncio()
async def test_fetch_timeout(make_config, site: str):
    result = await fetch(make_config(timeout=0.2), f"{site}/slow")
    assert isinstance(result, FetchError)
    assert result.kind is FetchErrorKind.TIMEOUT


@pytest.mark.asyncio()
async def test_fetch_transport_error(make_config, unused_tcp_port_factory):
    port = unused_tcp_port_factory()
    result = await fetch(make_config(), f"http://127.0.0.1:{port}/")
    assert isinstance(result, FetchError)
    assert result.kind is FetchErrorKind.TRANSPORT
    assert result.status is None


@pytest.mark.asyncio()
async def test_end_to_end_crawl(make_config, site: str):
    async with AsyncCrawler(make_config(max_depth=2)) as crawler:
        tree = await crawler.crawl(site)

    assert tree.record.url == f"{site}/"
    assert tree.record.title == "Root"
    assert tree.record.keywords == ["alpha", "beta", "alpha"]
    children = {c.record.url: c.record for c in tree.children}
    assert set(children) == {f"{site}/about", f"{site}/old"}
    assert children[f"{site}/about"].h2 == ["Team"]
    moved = children[f"{site}/old"]
    assert moved.final_url == f"{site}/new"
    assert moved.redirect_count == 2
    assert moved.title == "New"


LONG_LABEL_HOST = "http://" + "a" * 70 + ".test/"


@pytest.mark.asyncio()
async def test_fetch_unencodable_host_is_transport_error(make_config):
    result = await fetch(make_config(), LONG_LABEL_HOST)
    assert isinstance(result, FetchError)
    assert result.kind is FetchErrorKind.TRANSPORT
    assert result.url == LONG_LABEL_HOST


@pytest.mark.asyncio()
async def test_bad_seed_does_not_abort_other_seeds(make_config, unused_tcp_port_factory):
    port = unused_tcp_port_factory()
    seeds = [f"http://127.0.0.1:{port}/", LONG_LABEL_HOST, f"http://127.0.0.1:{port}/x"]

    async with AsyncCrawler(make_config()) as crawler:
        trees = await crawler.crawl_all(seeds)

    assert [t.record.url for t in trees] == seeds
    for tree in trees:
        assert tree.children == []
        assert tree.record.error.startswith("transport: ")
