# File: meta_scout/engine.py
"""meta_scout.engine: Orchestration layer для запуска обхода и агрегации результатов."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from meta_scout.aggregator import CrawlReport, aggregate
from meta_scout.config import CrawlerConfig
from meta_scout.crawler.crawler import AsyncCrawler
from meta_scout.crawler.models import CrawlTreeNode
from meta_scout.logger import logger

__all__ = ["Engine", "CrawlRun", "start_scan"]


async def start_scan(cfg: CrawlerConfig, seeds: Sequence[str]) -> List[CrawlTreeNode]:
    """
    Запускает краулер в контексте и последовательно обходит все seed-URL.

    Returns
    -------
    List[CrawlTreeNode]
        Одно дерево обхода на каждый корректный seed.
    """
    async with AsyncCrawler(cfg) as crawler:
        return await crawler.crawl_all(seeds)


@dataclass(slots=True)
class CrawlRun:
    """Сырые деревья и агрегированный отчёт одного запуска."""

    trees: List[CrawlTreeNode] = field(default_factory=list)
    report: CrawlReport = field(default_factory=CrawlReport)


class Engine:
    """Фасад для CLI и тестов: запуск обхода и агрегация результатов."""

    def __init__(self, config: CrawlerConfig) -> None:
        """Инициализирует Engine с заданной конфигурацией обхода."""
        self.config = config

    def run(self, seeds: Sequence[str], scan_timeout: Optional[float] = None) -> CrawlRun:
        """Запускает обход (опционально с общим таймаутом) и возвращает агрегированный результат."""
        logger.info("Starting crawl of %d seed(s)…", len(seeds))

        try:
            if scan_timeout:
                trees = asyncio.run(asyncio.wait_for(start_scan(self.config, seeds), timeout=scan_timeout))
            else:
                trees = asyncio.run(start_scan(self.config, seeds))
        except asyncio.TimeoutError:
            logger.error("Crawl did not finish within %s seconds", scan_timeout)
            raise
        except Exception as exc:
            logger.error("Crawl failed: %s", exc)
            raise

        try:
            return CrawlRun(trees=trees, report=aggregate(trees))
        except Exception as exc:
            logger.error("Aggregation failed: %s", exc)
            raise
