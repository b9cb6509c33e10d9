# File: canon_scout/parser/sitemap_parser.py
"""canon_scout.parser.sitemap_parser: Модуль для парсинга sitemap.xml и извлечения URL."""

from __future__ import annotations

from typing import List, Union

from lxml import etree

from canon_scout.exceptions import SitemapParseError

__all__ = ["parse_sitemap", "parse_sitemap_index", "is_sitemap_index"]

_XmlT = Union[str, bytes]


def _parse_root(xml_content: _XmlT) -> etree._Element:
    data = xml_content.encode("utf-8") if isinstance(xml_content, str) else xml_content
    parser = etree.XMLParser(ns_clean=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise SitemapParseError(f"Некорректный XML sitemap: {exc}") from exc
    if root is None:
        raise SitemapParseError("Пустой документ sitemap")
    return root


def _locs(root: etree._Element, entry: str) -> List[str]:
    return [
        loc.text.strip()
        for loc in root.findall(f"{{*}}{entry}/{{*}}loc")
        if loc.text and loc.text.strip()
    ]


def _root_name(root: etree._Element) -> str:
    return etree.QName(root).localname


def is_sitemap_index(xml_content: _XmlT) -> bool:
    """Проверяет, является ли документ индексом sitemap (корень <sitemapindex>)."""
    return _root_name(_parse_root(xml_content)) == "sitemapindex"


def parse_sitemap(xml_content: _XmlT) -> List[str]:
    """Разбирает sitemap и возвращает URL из тегов <url><loc> в порядке документа.

    Args:
        xml_content: содержимое sitemap.xml (строка или байты).

    Returns:
        Список абсолютных URL.

    Raises:
        SitemapParseError: XML некорректен или корень не <urlset>.

    Пример:
    ```python
    from canon_scout.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', encoding='utf-8') as f:
        urls = parse_sitemap(f.read())
    ```
    """
    root = _parse_root(xml_content)
    name = _root_name(root)
    if name != "urlset":
        raise SitemapParseError(f"Ожидался корневой элемент <urlset>, получен <{name}>")
    return _locs(root, "url")


def parse_sitemap_index(xml_content: _XmlT) -> List[str]:
    """Разбирает индекс sitemap и возвращает URL вложенных sitemap из <sitemap><loc>."""
    root = _parse_root(xml_content)
    name = _root_name(root)
    if name != "sitemapindex":
        raise SitemapParseError(f"Ожидался корневой элемент <sitemapindex>, получен <{name}>")
    return _locs(root, "sitemap")
