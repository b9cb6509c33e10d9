# === FILE: canon_scout/parser/html_parser.py ===
"""HTML parsing utilities for CanonScout.

Only what the canonical rules need is extracted from a document:

* every ``<link rel="canonical">`` element, in document order;
* its raw ``href`` (``None`` if the attribute is absent);
* whether the element is a descendant of ``<head>``.

Parsing uses BeautifulSoup with the ``lxml`` backend, so optional tags are
implied the way browsers do it: a ``<link>`` before any body content lands in
an implied ``<head>``, and a ``<body>`` start tag closes a ``<head>`` that was
never closed.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = ("CanonicalLink", "find_canonical_links")


@dataclass(slots=True, frozen=True)
class CanonicalLink:
    """One canonical declaration found in a document."""

    href: Optional[str]
    in_head: bool

    @property
    def is_blank(self) -> bool:
        return self.href is None or not self.href.strip()


def _is_canonical(tag: Tag) -> bool:
    # bs4 exposes rel as a multi-valued attribute (list of tokens)
    rel = tag.get("rel")
    if rel is None:
        return False
    tokens = rel if isinstance(rel, list) else str(rel).split()
    return any(token.lower() == "canonical" for token in tokens)


def find_canonical_links(html: str) -> list[CanonicalLink]:
    """Return all canonical link elements of *html* in document order."""
    soup = BeautifulSoup(html, "lxml")
    links: list[CanonicalLink] = []
    for tag in soup.find_all("link"):
        if not isinstance(tag, Tag) or not _is_canonical(tag):
            continue
        href = tag.get("href")
        links.append(
            CanonicalLink(
                href=href if isinstance(href, str) else None,
                in_head=tag.find_parent("head") is not None,
            )
        )
    return links
