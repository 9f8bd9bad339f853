# === FILE: meta_scout/crawler/crawler.py ===
from __future__ import annotations

import time
from typing import List, Optional, Protocol, Sequence

from aiohttp import ClientSession

from meta_scout.config import CrawlerConfig
from meta_scout.crawler.fetcher import Fetcher, FetchOutcome
from meta_scout.crawler.link_resolver import ResolutionError, hostname, normalize_url, resolve, same_host
from meta_scout.crawler.models import CrawlContext, CrawlTreeNode, FetchError, PageRecord
from meta_scout.logger import logger
from meta_scout.parser.html_parser import extract, extract_hrefs, parse
from meta_scout.parser.text_cleaner import TextCleaner
from meta_scout.seeds import normalize_seed

__all__ = ("AsyncCrawler", "PageFetcher")


class PageFetcher(Protocol):
    async def fetch(self, url: str) -> FetchOutcome: ...


class AsyncCrawler:
    """
    Depth-first, domain-scoped, cycle-safe crawler.

    One fetch is in flight at a time: each page is fully awaited before any
    of its links are resolved or followed. Every call to :meth:`crawl` owns a
    fresh :class:`CrawlContext`, so seeds never share a visited set.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        fetcher: Optional[PageFetcher] = None,
        cleaner: Optional[TextCleaner] = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher
        self.cleaner = cleaner or TextCleaner.from_artifacts(config.text_artifacts)
        self.session: Optional[ClientSession] = None

    async def __aenter__(self) -> AsyncCrawler:
        if self.fetcher is None:
            self.session = ClientSession(
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self.fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl_all(self, seeds: Sequence[str]) -> List[CrawlTreeNode]:
        """Crawl each seed in turn and return one tree per seed."""
        trees: List[CrawlTreeNode] = []
        for seed in seeds:
            tree = await self.crawl(seed)
            if tree is not None:
                trees.append(tree)
        return trees

    async def crawl(self, seed: str) -> Optional[CrawlTreeNode]:
        if self.fetcher is None:
            raise RuntimeError("Crawler not entered; use 'async with AsyncCrawler(...)'")
        url = normalize_seed(seed)
        if url is None:
            logger.warning("Skipped malformed seed: %r", seed)
            return None
        logger.info("Crawl started: %s (max_depth=%d)", url, self.config.max_depth)
        start = time.monotonic()
        ctx = CrawlContext(max_depth=self.config.max_depth)
        tree = await self._visit(normalize_url(url), 1, ctx)
        duration = time.monotonic() - start
        pages = sum(1 for _ in tree.iter_records()) if tree else 0
        logger.info("Crawl finished %s: %d pages in %.2f s", url, pages, duration)
        return tree

    async def _visit(self, url: str, depth: int, ctx: CrawlContext) -> Optional[CrawlTreeNode]:
        if url in ctx.visited or depth > ctx.max_depth:
            return None
        ctx.visited.add(url)
        if depth == 1:
            ctx.scope_domain = hostname(url)

        outcome = await self.fetcher.fetch(url)  # type: ignore[union-attr]
        if isinstance(outcome, FetchError):
            logger.warning("Failed %s: %s", url, outcome)
            return CrawlTreeNode(PageRecord.from_error(depth, outcome))

        final_url = normalize_url(outcome.url)
        ctx.visited.add(final_url)
        soup = parse(outcome.body)
        record = PageRecord.from_fetch(depth, outcome, extract(soup, final_url, self.cleaner))
        node = CrawlTreeNode(record)
        logger.info("Page [%d]: %s (%s)", depth, url, outcome.status)

        if depth >= ctx.max_depth:
            return node

        for href in extract_hrefs(soup):
            try:
                link = resolve(final_url, href)
            except ResolutionError as exc:
                logger.debug("Skip link on %s: %s", url, exc)
                continue
            if not same_host(link, ctx.scope_domain or ""):
                continue
            if link in ctx.visited:
                continue
            child = await self._visit(link, depth + 1, ctx)
            if child is not None:
                node.children.append(child)
        return node

