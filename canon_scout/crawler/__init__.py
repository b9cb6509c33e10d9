# File: canon_scout/crawler/__init__.py
"""canon_scout.crawler: HTTP-доступ аудита: страницы, sitemap и статусы canonical URL."""
