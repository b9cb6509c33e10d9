# canon_scout/crawler/fetcher.py
"""
Fetcher module: HTTP access for the audit (pages, sitemaps, canonical targets).

One ``aiohttp.ClientSession`` per audit run, with an explicit per-request
timeout. Failures are raised as :class:`~canon_scout.exceptions.FetchError`,
including URLs aiohttp refuses to encode (``ValueError``, e.g. an IDNA host
label over 63 characters); there is no retry.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from canon_scout.config import AuditConfig
from canon_scout.crawler.models import PageData, TargetStatus
from canon_scout.exceptions import FetchError
from canon_scout.logger import logger

# statuses on which a HEAD probe is repeated with GET
_HEAD_FALLBACK_STATUS = frozenset({405, 501})


def _describe(exc: BaseException, timeout: float) -> str:
    if isinstance(exc, asyncio.TimeoutError):
        return f"request timed out after {timeout:g} s"
    return str(exc) or type(exc).__name__


class PageFetcher:
    """Async HTTP client used by the audit engine.

    Usage::

        async with PageFetcher(config) as fetcher:
            page = await fetcher.fetch_page(url)
    """

    def __init__(self, config: AuditConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self._session = session
        self._own_session = session is None

    async def __aenter__(self) -> PageFetcher:
        if self._session is None:
            self._session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._own_session and self._session and not self._session.closed:
            await self._session.close()

    @property
    def session(self) -> ClientSession:
        if self._session is None:
            raise RuntimeError("Session not initialized. Use async context manager.")
        return self._session

    async def fetch_page(self, url: str) -> PageData:
        """GET *url* following redirects and return its decoded body."""
        try:
            async with self.session.get(url) as resp:
                text = await resp.text(errors="replace")
                if resp.status != 200:
                    logger.warning("Page %s returned HTTP %s", url, resp.status)
                return PageData(url=url, status=resp.status, content=text)
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise FetchError(url, _describe(exc, self.config.timeout)) from exc

    async def fetch_sitemap(self, url: str) -> bytes:
        """Download a sitemap document; any non-2xx status is an error."""
        logger.info("Fetching sitemap from: %s", url)
        try:
            async with self.session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, f"HTTP {resp.status}")
                return await resp.read()
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise FetchError(url, _describe(exc, self.config.timeout)) from exc

    async def fetch_status(self, url: str) -> TargetStatus:
        """Resolve the HTTP status of a canonical target without following redirects."""
        try:
            status = await self._probe(url, self.config.status_method)
            if self.config.status_method == "HEAD" and status in _HEAD_FALLBACK_STATUS:
                logger.debug("HEAD not supported by %s (HTTP %s), retrying with GET", url, status)
                status = await self._probe(url, "GET")
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise FetchError(url, _describe(exc, self.config.timeout)) from exc
        return TargetStatus.from_status(url, status)

    async def _probe(self, url: str, method: str) -> int:
        async with self.session.request(method, url, allow_redirects=False) as resp:
            return resp.status
