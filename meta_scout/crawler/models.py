# meta_scout/crawler/models.py
"""
Data models for the MetaScout crawler.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterator, List, Optional, Set


def utc_now_iso() -> str:
    """Return current UTC time in ISO format."""
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


@dataclass(slots=True)
class FetchResult:
    """Successful response: final URL after redirects, status and body text."""

    requested_url: str
    url: str
    status: int
    body: str
    redirect_chain: List[str] = field(default_factory=list)
    redirect_count: int = 0

    @property
    def redirected(self) -> bool:
        return self.redirect_count > 0 or self.url != self.requested_url


class FetchErrorKind(str, Enum):
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"


@dataclass(slots=True)
class FetchError:
    """Classified fetch failure, returned as a value instead of raised."""

    url: str
    kind: FetchErrorKind
    message: str
    status: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(slots=True)
class ExtractedFields:
    """Structural text pulled out of one document."""

    title: str = ""
    h1: List[str] = field(default_factory=list)
    h2: List[str] = field(default_factory=list)
    description: str = ""
    keywords: List[str] = field(default_factory=list)


@dataclass(slots=True)
class PageRecord:
    """One visited (or attempted) page."""

    url: str
    depth: int
    title: str = ""
    h1: List[str] = field(default_factory=list)
    h2: List[str] = field(default_factory=list)
    description: str = ""
    keywords: List[str] = field(default_factory=list)
    error: Optional[str] = None
    status: Optional[int] = None
    final_url: Optional[str] = None
    redirect_chain: List[str] = field(default_factory=list)
    redirect_count: int = 0
    fetched_at: str = field(default_factory=utc_now_iso)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def is_child(self) -> bool:
        return self.depth > 1

    @classmethod
    def from_fetch(cls, depth: int, result: FetchResult, fields: ExtractedFields) -> PageRecord:
        return cls(
            url=result.requested_url,
            depth=depth,
            title=fields.title,
            h1=list(fields.h1),
            h2=list(fields.h2),
            description=fields.description,
            keywords=list(fields.keywords),
            status=result.status,
            final_url=result.url,
            redirect_chain=list(result.redirect_chain),
            redirect_count=result.redirect_count,
        )

    @classmethod
    def from_error(cls, depth: int, error: FetchError) -> PageRecord:
        return cls(url=error.url, depth=depth, error=str(error), status=error.status)


@dataclass(slots=True)
class CrawlTreeNode:
    """A page record plus the child pages followed from it, in discovery order."""

    record: PageRecord
    children: List[CrawlTreeNode] = field(default_factory=list)

    def iter_records(self) -> Iterator[PageRecord]:
        """Pre-order walk over this node and its descendants."""
        yield self.record
        for child in self.children:
            yield from child.iter_records()


@dataclass(slots=True)
class CrawlContext:
    """Per-seed traversal state. Never shared between two seeds."""

    max_depth: int
    scope_domain: Optional[str] = None
    visited: Set[str] = field(default_factory=set)
