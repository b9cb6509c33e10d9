# File: tests/conftest.py
from typing import Callable, Dict, List, Optional

import pytest

from canon_scout.config import AuditConfig
from canon_scout.crawler.models import TargetStatus
from canon_scout.exceptions import FetchError


def make_html(*hrefs: Optional[str], in_head: bool = True) -> str:
    """
    Build a small HTML document with one <link rel="canonical"> per href.
    None produces a link without href attribute.
    """
    links = "".join(
        '<link rel="canonical">' if href is None else f'<link rel="canonical" href="{href}">'
        for href in hrefs
    )
    head, body = (links, "") if in_head else ("", links)
    return f"<html><head><title>T</title>{head}</head><body><p>text</p>{body}</body></html>"


class FakeResolver:
    """
    Async status resolver stub: answers with a fixed status (or per-URL status)
    and records every URL it was asked about.
    """

    def __init__(self, status: int = 200, statuses: Optional[Dict[str, int]] = None, error: str = ""):
        self.status = status
        self.statuses = statuses or {}
        self.error = error
        self.calls: List[str] = []

    async def __call__(self, url: str) -> TargetStatus:
        self.calls.append(url)
        if self.error:
            raise FetchError(url, self.error)
        return TargetStatus.from_status(url, self.statuses.get(url, self.status))


@pytest.fixture()
def resolver_factory() -> Callable[..., FakeResolver]:
    return FakeResolver


@pytest.fixture()
def ok_resolver() -> FakeResolver:
    return FakeResolver(200)


@pytest.fixture()
def basic_config(tmp_path) -> AuditConfig:
    """
    Return a basic valid AuditConfig writing reports under tmp_path.
    """
    return AuditConfig(
        sitemap_urls=["https://example.com/sitemap.xml"],
        timeout=2.0,
        user_agent="TestAgent/1.0",
        results_dir=tmp_path / "results",
    )


@pytest.fixture()
def html() -> Callable[..., str]:
    """Expose make_html to tests."""
    return make_html
