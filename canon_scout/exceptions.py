# File: canon_scout/exceptions.py
"""canon_scout.exceptions: Исключения, которые пайплайн аудита перехватывает и логирует."""

from __future__ import annotations

__all__ = ["CanonScoutError", "FetchError", "SitemapParseError"]


class CanonScoutError(Exception):
    """Базовое исключение CanonScout."""


class FetchError(CanonScoutError):
    """Сетевая или HTTP-ошибка при загрузке страницы, sitemap или canonical URL."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url
        self.message = message


class SitemapParseError(CanonScoutError, ValueError):
    """Sitemap не является корректным XML с корнем <urlset> (или <sitemapindex>)."""
