# canon_scout/crawler/sitemap.py
"""
Sitemap loader: download a sitemap and return its page URLs in document order.

A sitemap index is expanded one level deep: each child sitemap must be a
``<urlset>``.
"""
from __future__ import annotations

from typing import List

from canon_scout.crawler.fetcher import PageFetcher
from canon_scout.logger import logger
from canon_scout.parser.sitemap_parser import is_sitemap_index, parse_sitemap, parse_sitemap_index


async def load_sitemap_urls(fetcher: PageFetcher, sitemap_url: str) -> List[str]:
    """Fetch *sitemap_url* and return the URLs it lists.

    Raises FetchError or SitemapParseError; the caller decides how fatal that is.
    """
    content = await fetcher.fetch_sitemap(sitemap_url)
    if not is_sitemap_index(content):
        urls = parse_sitemap(content)
    else:
        children = parse_sitemap_index(content)
        logger.info("Sitemap index %s lists %d sitemaps", sitemap_url, len(children))
        urls = []
        for child in children:
            urls.extend(parse_sitemap(await fetcher.fetch_sitemap(child)))
    logger.info("Sitemap fetched successfully. Found %d URLs to check.", len(urls))
    return urls
