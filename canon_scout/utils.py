# File: canon_scout/utils.py
"""canon_scout.utils: Нормализация и сравнение URL, имена отчётов и прочие утилиты."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Mapping, Optional, Sequence
from urllib.parse import urlsplit, urlunsplit

from canon_scout.logger import logger

__all__: Sequence[str] = (
    "DEFAULT_PORTS",
    "normalize_url",
    "urls_equivalent",
    "extract_domain",
    "sitemap_name",
    "generation_timestamp",
)

DEFAULT_PORTS: Mapping[str, int] = {"http": 80, "https": 443}

_SITEMAP_NAME_RE = re.compile(r"^https?://[^/]+/|\.xml$", re.IGNORECASE)


def normalize_url(url: str) -> str:
    """Приводит URL к форме для сравнения эквивалентности.

    Регистр, завершающий слеш (кроме корня), порт по умолчанию, префикс ``www.``,
    query и fragment не влияют на результат. Нормализация идемпотентна.
    Если строку нельзя разобрать как абсолютный URL, она возвращается без
    изменений с предупреждением в логе.
    """
    try:
        parts = urlsplit(url.strip())
        port = parts.port
    except ValueError as exc:
        logger.warning("Cannot normalize URL %s: %s", url, exc)
        return url
    if not parts.scheme or not parts.hostname:
        logger.warning("Cannot normalize URL %s: not an absolute URL", url)
        return url

    scheme = parts.scheme.lower()
    host = parts.hostname.lower()
    if ":" in host:
        host = f"[{host}]"
    while host.startswith("www."):
        host = host[len("www."):]
    if port is not None and port != DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"

    userinfo = parts.netloc.rpartition("@")[0]
    netloc = f"{userinfo.lower()}@{host}" if userinfo else host

    path = parts.path.lower().rstrip("/") or "/"
    return urlunsplit((scheme, netloc, path, "", ""))


def urls_equivalent(first: str, second: str) -> bool:
    """True, если нормализованные формы URL совпадают посимвольно."""
    return normalize_url(first) == normalize_url(second)


def extract_domain(url: str) -> str:
    """Возвращает hostname из URL (без порта и userinfo)."""
    return urlsplit(url).hostname or ""


def sitemap_name(sitemap_url: str) -> str:
    """Имя sitemap для файла отчёта: путь без схемы, хоста и `.xml`, `/` заменены на `-`."""
    name = _SITEMAP_NAME_RE.sub("", sitemap_url).strip("/").replace("/", "-")
    return name or "sitemap"


def generation_timestamp(moment: Optional[datetime] = None) -> str:
    """Метка времени генерации отчёта в формате ``YYYYMMDD_HHMMSS``."""
    return (moment or datetime.now()).strftime("%Y%m%d_%H%M%S")
