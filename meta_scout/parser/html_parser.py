# meta_scout/parser/html_parser.py
"""HTML parsing utilities for MetaScout.

:func:`extract` pulls the structural text a report needs out of a document:

* title: first ``<title>`` text or ``""`` if absent.
* h1 / h2: text of every heading of that level, in document order.
* description: ``content`` of ``<meta name="description">`` or ``""``.
* keywords: ``content`` of ``<meta name="keywords">`` split on commas, or ``[]``.

Every string goes through a :class:`~meta_scout.parser.text_cleaner.TextCleaner`.
Absence is always an empty string or an empty list, never ``None``.
"""
from __future__ import annotations

import re
from collections.abc import Sequence

from bs4 import BeautifulSoup
from bs4.element import Tag

from meta_scout.crawler.models import ExtractedFields
from meta_scout.logger import logger
from meta_scout.parser.text_cleaner import TextCleaner, default_cleaner

__all__: Sequence[str] = ("extract", "extract_hrefs", "parse")


def parse(body: str) -> BeautifulSoup:
    return BeautifulSoup(body, "html.parser")


def _meta_content(soup: BeautifulSoup, name: str) -> str | None:
    tag = soup.find("meta", attrs={"name": re.compile(f"^{name}$", re.I)})
    if not isinstance(tag, Tag):
        return None
    content = tag.get("content")
    return content if isinstance(content, str) else None


def _headings(soup: BeautifulSoup, level: str, cleaner: TextCleaner) -> list[str]:
    return [cleaner(h.get_text(" ")) for h in soup.find_all(level)]


def extract(
    body: str | BeautifulSoup, url: str = "", cleaner: TextCleaner = default_cleaner
) -> ExtractedFields:
    """Parse *body* and return its cleaned structural fields.

    Parameters
    ----------
    body
        Raw markup, or an already parsed soup (so the crawler parses each
        page once for both fields and links).
    url
        Page URL, used only in debug logging.
    cleaner
        Text pipeline applied to each extracted string.
    """
    soup = body if isinstance(body, BeautifulSoup) else parse(body)

    title_tag = soup.find("title")
    title = cleaner(title_tag.get_text()) if title_tag else ""

    description = cleaner(_meta_content(soup, "description"))

    raw_keywords = _meta_content(soup, "keywords")
    keywords: list[str] = []
    if raw_keywords:
        keywords = [kw for kw in (cleaner(tok) for tok in raw_keywords.split(",")) if kw]

    fields = ExtractedFields(
        title=title,
        h1=_headings(soup, "h1", cleaner),
        h2=_headings(soup, "h2", cleaner),
        description=description,
        keywords=keywords,
    )
    logger.debug(
        "Extracted %s: title=%r h1=%d h2=%d keywords=%d",
        url or "<document>", fields.title, len(fields.h1), len(fields.h2), len(fields.keywords),
    )
    return fields


def extract_hrefs(body: str | BeautifulSoup) -> list[str]:
    """Return the raw ``href`` of every ``<a>`` element, in document order."""
    soup = body if isinstance(body, BeautifulSoup) else parse(body)
    hrefs: list[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if isinstance(href_val, str):
            hrefs.append(href_val)
    return hrefs
