# meta_scout/crawler/fetcher.py
"""
Fetcher module: single HTTP GET per URL with transparent redirects and timeout.
"""
from __future__ import annotations

import asyncio
from typing import Union

from aiohttp import ClientError, ClientSession, ClientTimeout

from meta_scout.config import CrawlerConfig
from meta_scout.crawler.models import FetchError, FetchErrorKind, FetchResult
from meta_scout.logger import logger

FetchOutcome = Union[FetchResult, FetchError]


class Fetcher:
    """Fetches pages over a shared session. Never raises for network failures."""

    def __init__(self, session: ClientSession, config: CrawlerConfig) -> None:
        self.session = session
        self.config = config

    async def fetch(self, url: str) -> FetchOutcome:
        """
        GET *url*, following redirects.

        Returns FetchResult for 2xx responses, FetchError otherwise.
        No retries.
        """
        try:
            async with self.session.get(
                url,
                allow_redirects=True,
                timeout=ClientTimeout(total=self.config.timeout),
            ) as resp:
                final_url = str(resp.url)
                if not 200 <= resp.status < 300:
                    return FetchError(
                        url=url,
                        kind=FetchErrorKind.HTTP_STATUS,
                        message=f"HTTP {resp.status} {resp.reason or ''}".strip(),
                        status=resp.status,
                    )
                body = await resp.text(errors="replace")
                # history holds one response per redirect hop, starting with the requested URL
                chain = [str(hop.url) for hop in resp.history[1:]]
                if resp.history:
                    chain.append(final_url)
                    logger.debug("Redirected %s -> %s (%d hops)", url, final_url, len(resp.history))
                return FetchResult(
                    requested_url=url,
                    url=final_url,
                    status=resp.status,
                    body=body,
                    redirect_chain=chain,
                    redirect_count=len(resp.history),
                )
        except asyncio.TimeoutError:
            return FetchError(
                url=url,
                kind=FetchErrorKind.TIMEOUT,
                message=f"no response within {self.config.timeout:g} s",
            )
        except ClientError as exc:
            return FetchError(
                url=url,
                kind=FetchErrorKind.TRANSPORT,
                message=str(exc) or type(exc).__name__,
            )
        except (ValueError, OSError) as exc:
            # host names the resolver rejects (e.g. an IDNA label over 63 chars)
            return FetchError(
                url=url,
                kind=FetchErrorKind.TRANSPORT,
                message=f"{type(exc).__name__}: {exc}",
            )
