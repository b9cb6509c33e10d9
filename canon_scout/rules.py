# File: canon_scout/rules.py
"""Canonical tag rule set.

:class:`CanonicalEvaluator` inspects the canonical declaration of one page and
returns a :class:`~canon_scout.models.PageCheckResult` whose ``reasons`` are
violation codes in rule order:

==========================  ==================================================
code                        meaning
==========================  ==================================================
``missing``                 no ``<link rel="canonical">`` (nothing else checked)
``multiple``                more than one canonical link (first one is used)
``empty``                   href absent or blank (nothing else checked)
``not-in-head``             the link is outside ``<head>``
``bad-status:<code>``       canonical target answered with a non-200 status
``redirecting``             canonical target answered with a redirect
``canonical-unreachable:…`` canonical target could not be fetched
``not-absolute``            canonical URL is not an http(s) URL
``cross-domain``            canonical host differs from the page host
``cross-protocol``          canonical scheme differs from the page scheme
``not-lowercase``           canonical URL contains upper-case characters
``not-self-referencing``    canonical URL does not point back at the page
``parse-error:…``           page or canonical URL cannot be parsed
``fetch-error:…``           the page itself could not be fetched
==========================  ==================================================

The target status is obtained through an injected async *resolver*, so the
rules run offline in tests.
"""
from __future__ import annotations

from enum import Enum
from typing import Awaitable, Callable, List, Sequence
from urllib.parse import urljoin, urlsplit, urlunsplit

from canon_scout.crawler.models import REDIRECT_STATUSES, TargetStatus
from canon_scout.exceptions import FetchError
from canon_scout.logger import logger
from canon_scout.models import PageCheckResult
from canon_scout.parser.html_parser import find_canonical_links
from canon_scout.reasons import (
    BAD_STATUS,
    CANONICAL_UNREACHABLE,
    CROSS_DOMAIN,
    CROSS_PROTOCOL,
    EMPTY,
    MISSING,
    MULTIPLE,
    NOT_ABSOLUTE,
    NOT_IN_HEAD,
    NOT_LOWERCASE,
    NOT_SELF_REFERENCING,
    PARSE_ERROR,
    REDIRECTING,
    explain,
    fetch_error,
    with_detail,
)
from canon_scout.utils import urls_equivalent

__all__: Sequence[str] = (
    "StatusResolver",
    "SelfReferencePolicy",
    "CanonicalEvaluator",
    "resolve_canonical_url",
    "explain",
    "fetch_error",
)

StatusResolver = Callable[[str], Awaitable[TargetStatus]]


class SelfReferencePolicy(str, Enum):
    """Whether the canonical URL must point back at the checked page.

    ``ignore`` (default) skips the check, ``equivalent`` compares normalized
    forms, ``exact`` requires the resolved canonical URL to equal the page URL.
    """

    IGNORE = "ignore"
    EQUIVALENT = "equivalent"
    EXACT = "exact"


def _lower_host(url: str) -> str:
    parts = urlsplit(url)
    userinfo, at, hostport = parts.netloc.rpartition("@")
    path = parts.path or ("/" if parts.netloc else "")
    return urlunsplit((parts.scheme, f"{userinfo}{at}{hostport.lower()}", path, parts.query, parts.fragment))


def resolve_canonical_url(page_url: str, href: str) -> str:
    """Resolve *href* against *page_url*; host is lower-cased, an empty path becomes ``/``."""
    return _lower_host(urljoin(page_url, href.strip()))


class CanonicalEvaluator:
    """Applies the canonical rule set to one page."""

    def __init__(self, self_reference: SelfReferencePolicy | str = SelfReferencePolicy.IGNORE) -> None:
        self.self_reference = SelfReferencePolicy(self_reference)

    async def evaluate(self, page_url: str, page_html: str, resolve_status: StatusResolver) -> PageCheckResult:
        links = find_canonical_links(page_html)
        if not links:
            return PageCheckResult.from_reasons(page_url, [MISSING])

        reasons: List[str] = []
        if len(links) > 1:
            reasons.append(MULTIPLE)

        link = links[0]
        if link.is_blank:
            reasons.append(EMPTY)
            return PageCheckResult.from_reasons(page_url, reasons)

        try:
            canonical_url = resolve_canonical_url(page_url, link.href or "")
        except ValueError as exc:
            reasons.append(with_detail(PARSE_ERROR, exc))
            return PageCheckResult.from_reasons(page_url, reasons)

        if not link.in_head:
            reasons.append(NOT_IN_HEAD)

        reasons.extend(await self._check_target(canonical_url, resolve_status))
        reasons.extend(self.check_urls(page_url, canonical_url))

        result = PageCheckResult.from_reasons(page_url, reasons)
        logger.debug("Canonical of %s -> %s: %s", page_url, canonical_url, result.reasons or "OK")
        return result

    @staticmethod
    async def _check_target(canonical_url: str, resolve_status: StatusResolver) -> List[str]:
        try:
            target = await resolve_status(canonical_url)
        except FetchError as exc:
            logger.warning("Error fetching canonical URL %s: %s", canonical_url, exc.message)
            return [with_detail(CANONICAL_UNREACHABLE, exc.message)]

        reasons: List[str] = []
        if target.status != 200:
            reasons.append(with_detail(BAD_STATUS, target.status))
        if target.redirected or target.status in REDIRECT_STATUSES:
            reasons.append(REDIRECTING)
        return reasons

    def check_urls(self, page_url: str, canonical_url: str) -> List[str]:
        """URL-only rules: absoluteness, domain, protocol, case, self-reference."""
        reasons: List[str] = []
        page, canonical = urlsplit(page_url), urlsplit(canonical_url)

        if not canonical_url.startswith(("http://", "https://")):
            reasons.append(NOT_ABSOLUTE)
        if page.hostname != canonical.hostname:
            reasons.append(CROSS_DOMAIN)
        if page.scheme.lower() != canonical.scheme.lower():
            reasons.append(CROSS_PROTOCOL)
        if canonical_url != canonical_url.lower():
            reasons.append(NOT_LOWERCASE)

        if self.self_reference is SelfReferencePolicy.EXACT:
            # страница приводится к тому же виду, что и resolve_canonical_url
            self_referencing = canonical_url == _lower_host(page_url)
        elif self.self_reference is SelfReferencePolicy.EQUIVALENT:
            self_referencing = urls_equivalent(canonical_url, page_url)
        else:
            self_referencing = True
        if not self_referencing:
            reasons.append(NOT_SELF_REFERENCING)
        return reasons
