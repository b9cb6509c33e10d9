# File: tests/test_aggregator.py
import pytest

from canon_scout.aggregator import grand_total, run_to_dict, summarize
from canon_scout.models import AuditRun, AuditSummary, CheckStatus, PageCheckResult, SitemapAudit


def _results():
    return [
        PageCheckResult.from_reasons("https://example.com/a", []),
        PageCheckResult.from_reasons("https://example.com/b", ["missing"]),
        PageCheckResult.from_reasons("https://example.com/c", ["multiple", "not-lowercase"]),
    ]


def test_summarize_folds_results():
    assert summarize(_results()) == AuditSummary(total_checked=3, total_ok=1, total_fail=2)
    assert summarize([]) == AuditSummary()


def test_grand_total_adds_sitemaps():
    audits = [
        SitemapAudit("https://example.com/s1.xml", [], AuditSummary(3, 1, 2)),
        SitemapAudit("https://example.com/s2.xml", [], AuditSummary(2, 2, 0)),
    ]
    assert grand_total(audits) == AuditSummary(total_checked=5, total_ok=3, total_fail=2)


def test_result_invariant():
    with pytest.raises(ValueError):
        PageCheckResult("https://example.com/", CheckStatus.OK, ("missing",))
    with pytest.raises(ValueError):
        PageCheckResult("https://example.com/", CheckStatus.FAIL, ())


def test_explanation_joins_reasons():
    result = PageCheckResult.from_reasons("https://example.com/", ["multiple", "bad-status:500"])
    assert result.explanation == "Multiple canonical tags detected. Canonical URL returned status 500."


def test_run_to_dict():
    results = _results()
    run = AuditRun(
        sitemaps=[SitemapAudit("https://example.com/sitemap.xml", results, summarize(results))],
        failed={"https://example.com/broken.xml": "HTTP 404"},
    )
    run.total = grand_total(run.sitemaps)
    data = run_to_dict(run)
    assert data["total"] == {"total_checked": 3, "total_ok": 1, "total_fail": 2}
    assert data["failed_sitemaps"] == {"https://example.com/broken.xml": "HTTP 404"}
    rows = data["sitemaps"][0]["results"]
    assert [r["status"] for r in rows] == ["OK", "FAIL", "FAIL"]
    assert rows[1]["reasons"] == ["missing"]
    assert data["sitemaps"][0]["report_path"] is None
