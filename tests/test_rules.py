# File: tests/test_rules.py
"""Тесты правил canonical: каждый код нарушения и их комбинации, без сети."""
import pytest

from canon_scout.models import CheckStatus
from canon_scout.rules import (
    CanonicalEvaluator,
    SelfReferencePolicy,
    explain,
    resolve_canonical_url,
)

PAGE = "https://example.com/page"


async def evaluate(html, resolver, page_url=PAGE, **kwargs):
    return await CanonicalEvaluator(**kwargs).evaluate(page_url, html, resolver)


@pytest.mark.asyncio()
async def test_missing_canonical(html, ok_resolver):
    result = await evaluate(html(), ok_resolver)
    assert result.status == CheckStatus.FAIL
    assert result.reasons == ("missing",)
    assert ok_resolver.calls == []


@pytest.mark.asyncio()
async def test_valid_canonical(html, ok_resolver):
    result = await evaluate(html(PAGE), ok_resolver)
    assert result.status == CheckStatus.OK
    assert result.reasons == ()
    assert result.explanation == "No errors"
    assert ok_resolver.calls == [PAGE]


@pytest.mark.asyncio()
async def test_redirecting_target_reports_status_and_redirect(html, resolver_factory):
    result = await evaluate(html(PAGE), resolver_factory(301))
    assert result.status == CheckStatus.FAIL
    assert "bad-status:301" in result.reasons
    assert "redirecting" in result.reasons


@pytest.mark.parametrize("code", [302, 307, 308])
@pytest.mark.asyncio()
async def test_other_redirect_codes(html, resolver_factory, code):
    result = await evaluate(html(PAGE), resolver_factory(code))
    assert result.reasons == (f"bad-status:{code}", "redirecting")


@pytest.mark.asyncio()
async def test_not_found_target(html, resolver_factory):
    result = await evaluate(html(PAGE), resolver_factory(404))
    assert result.reasons == ("bad-status:404",)


@pytest.mark.asyncio()
async def test_uppercase_other_protocol_canonical(html, ok_resolver):
    result = await evaluate(html("HTTP://Example.COM/Page"), ok_resolver)
    assert "cross-protocol" in result.reasons
    assert "not-lowercase" in result.reasons
    assert result.reasons.index("cross-protocol") < result.reasons.index("not-lowercase")
    assert "cross-domain" not in result.reasons


@pytest.mark.asyncio()
async def test_multiple_canonicals_use_first(html, resolver_factory):
    resolver = resolver_factory(200)
    result = await evaluate(html(PAGE, "https://example.com/OTHER"), resolver)
    assert result.reasons == ("multiple",)
    assert resolver.calls == [PAGE]


@pytest.mark.parametrize("href", [None, "", "   "])
@pytest.mark.asyncio()
async def test_empty_href(html, ok_resolver, href):
    result = await evaluate(html(href), ok_resolver)
    assert result.reasons == ("empty",)
    assert ok_resolver.calls == []


@pytest.mark.asyncio()
async def test_multiple_with_empty_first(html, ok_resolver):
    result = await evaluate(html("", PAGE), ok_resolver)
    assert result.reasons == ("multiple", "empty")


@pytest.mark.asyncio()
async def test_canonical_outside_head(html, ok_resolver):
    result = await evaluate(html(PAGE, in_head=False), ok_resolver)
    assert result.reasons == ("not-in-head",)


@pytest.mark.asyncio()
async def test_relative_href_is_resolved_against_page(html, ok_resolver):
    result = await evaluate(html("/page"), ok_resolver)
    assert result.ok
    assert ok_resolver.calls == [PAGE]


@pytest.mark.asyncio()
async def test_cross_domain(html, ok_resolver):
    result = await evaluate(html("https://other.example.org/page"), ok_resolver)
    assert result.reasons == ("cross-domain",)


@pytest.mark.asyncio()
async def test_not_absolute(html, ok_resolver):
    result = await evaluate(html("ftp://example.com/page"), ok_resolver)
    assert result.reasons == ("not-absolute", "cross-protocol")


@pytest.mark.asyncio()
async def test_unreachable_target_keeps_checking(html, resolver_factory):
    resolver = resolver_factory(error="connection refused")
    result = await evaluate(html("https://other.example.org/Page"), resolver)
    assert result.reasons == (
        "canonical-unreachable:connection refused",
        "cross-domain",
        "not-lowercase",
    )
    assert "Error fetching canonical URL: connection refused." in result.explanation


@pytest.mark.asyncio()
async def test_rel_matching_is_token_based(ok_resolver):
    doc = f'<html><head><link rel="alternate" href="/a"><link rel="Canonical" href="{PAGE}"></head></html>'
    result = await evaluate(doc, ok_resolver)
    assert result.ok


@pytest.mark.parametrize(
    "policy,href,expected",
    [
        (SelfReferencePolicy.IGNORE, "https://example.com/other", ()),
        (SelfReferencePolicy.EQUIVALENT, "https://example.com/page/", ()),
        (SelfReferencePolicy.EQUIVALENT, "https://www.example.com/page?utm=1", ("cross-domain",)),
        (SelfReferencePolicy.EQUIVALENT, "https://example.com/other", ("not-self-referencing",)),
        (SelfReferencePolicy.EXACT, PAGE, ()),
        (SelfReferencePolicy.EXACT, "https://example.com/page/", ("not-self-referencing",)),
        ("exact", "https://example.com/other", ("not-self-referencing",)),
    ],
)
@pytest.mark.asyncio()
async def test_self_reference_policy(html, ok_resolver, policy, href, expected):
    result = await evaluate(html(href), ok_resolver, self_reference=policy)
    assert result.reasons == expected


def test_unknown_policy_rejected():
    with pytest.raises(ValueError):
        CanonicalEvaluator("sometimes")


@pytest.mark.asyncio()
async def test_unparseable_canonical(html, ok_resolver):
    result = await evaluate(html("http://[broken/page"), ok_resolver)
    assert result.status == CheckStatus.FAIL
    assert len(result.reasons) == 1
    assert result.reasons[0].startswith("parse-error:")


def test_resolve_canonical_url():
    assert resolve_canonical_url(PAGE, "other") == "https://example.com/other"
    assert resolve_canonical_url(PAGE, " HTTPS://Example.COM ") == "https://example.com/"
    assert resolve_canonical_url(PAGE, "//cdn.example.com/X") == "https://cdn.example.com/X"


@pytest.mark.parametrize(
    "code,text",
    [
        ("missing", "Canonical tag is missing."),
        ("bad-status:404", "Canonical URL returned status 404."),
        ("fetch-error:timeout", "Fetch error: timeout"),
        ("something-else", "something-else"),
    ],
)
def test_explain(code, text):
    assert explain(code) == text


@pytest.mark.asyncio()
async def test_optional_head_tags_are_implied(ok_resolver):
    doc = f"<!doctype html><title>T</title><link rel=canonical href={PAGE}><p>text"
    result = await evaluate(doc, ok_resolver)
    assert result.ok


@pytest.mark.parametrize(
    "page_url,href",
    [
        ("https://Example.com/page", "https://Example.com/page"),
        ("https://example.com", "https://example.com"),
    ],
)
@pytest.mark.asyncio()
async def test_exact_self_reference_ignores_host_case_and_empty_path(html, ok_resolver, page_url, href):
    result = await evaluate(html(href), ok_resolver, page_url=page_url, self_reference="exact")
    assert result.reasons == ()
