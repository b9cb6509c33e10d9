# canon_scout/crawler/models.py
"""
Data models returned by the CanonScout page fetcher.
"""
from __future__ import annotations

from dataclasses import dataclass

REDIRECT_STATUSES: frozenset[int] = frozenset({301, 302, 307, 308})


@dataclass(slots=True, frozen=True)
class PageData:
    """Holds the requested URL, the final HTTP status and the decoded HTML."""

    url: str
    status: int
    content: str


@dataclass(slots=True, frozen=True)
class TargetStatus:
    """Answer of a status resolver for a canonical target URL."""

    url: str
    status: int
    redirected: bool = False

    @classmethod
    def from_status(cls, url: str, status: int) -> TargetStatus:
        return cls(url=url, status=status, redirected=status in REDIRECT_STATUSES)
