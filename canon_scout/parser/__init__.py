# File: canon_scout/parser/__init__.py
"""canon_scout.parser: Разбор sitemap.xml и поиск canonical-ссылок в HTML."""

from .html_parser import CanonicalLink, find_canonical_links
from .sitemap_parser import is_sitemap_index, parse_sitemap, parse_sitemap_index

__all__ = [
    "CanonicalLink",
    "find_canonical_links",
    "is_sitemap_index",
    "parse_sitemap",
    "parse_sitemap_index",
]
