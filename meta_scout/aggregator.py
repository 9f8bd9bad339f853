# File: meta_scout/aggregator.py
"""meta_scout.aggregator: сведение деревьев обхода в строки отчёта."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Iterable, Iterator, List, Tuple

from meta_scout.crawler.models import CrawlTreeNode, PageRecord
from meta_scout.utils import remove_duplicates

CSV_HEADER: Tuple[str, ...] = (
    "URL",
    "Page Titles",
    "Meta Descriptions",
    "Meta Keywords",
    "H1 Titles",
    "H2 Titles",
)


@dataclass(frozen=True, slots=True)
class AggregatedRow:
    """Плоская дедуплицированная проекция одной PageRecord."""

    url: str
    title: str
    description: str
    keywords: str
    h1: str
    h2: str

    def as_tuple(self) -> Tuple[str, ...]:
        """Порядок полей совпадает с CSV_HEADER."""
        return (self.url, self.title, self.description, self.keywords, self.h1, self.h2)


@dataclass(slots=True)
class CrawlReport:
    """Результаты агрегации: родительские, дочерние и все строки."""

    parent_rows: List[AggregatedRow] = field(default_factory=list)
    child_rows: List[AggregatedRow] = field(default_factory=list)
    all_rows: List[AggregatedRow] = field(default_factory=list)

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)


def dedupe_join(values: Iterable[str], sep: str = ", ") -> str:
    """Убирает дубликаты (с сохранением порядка) и пустые значения, склеивает через sep."""
    return sep.join(v for v in remove_duplicates(list(values)) if v)


def to_row(record: PageRecord) -> AggregatedRow:
    """Строка для одной страницы. Страница с ошибкой даёт пустые поля."""
    return AggregatedRow(
        url=record.url,
        title=record.title,
        description=record.description,
        keywords=dedupe_join(record.keywords),
        h1=dedupe_join(record.h1),
        h2=dedupe_join(record.h2),
    )


def walk(trees: Iterable[CrawlTreeNode]) -> Iterator[PageRecord]:
    """Обход всех деревьев в прямом порядке (pre-order)."""
    for tree in trees:
        yield from tree.iter_records()


def aggregate(trees: Iterable[CrawlTreeNode]) -> CrawlReport:
    """Собирает CrawlReport: depth == 1 -> parent_rows, depth > 1 -> child_rows."""
    report = CrawlReport()
    for record in walk(trees):
        row = to_row(record)
        if record.is_child:
            report.child_rows.append(row)
        else:
            report.parent_rows.append(row)
        report.all_rows.append(row)
    return report
