# File: canon_scout/aggregator.py
"""canon_scout.aggregator: Свёртка результатов проверки в сводки AuditSummary."""

from __future__ import annotations

from functools import reduce
from typing import Any, Dict, Iterable, List

from canon_scout.models import AuditRun, AuditSummary, PageCheckResult, SitemapAudit


def _count(result: PageCheckResult) -> AuditSummary:
    """Сводка из одного результата."""
    return AuditSummary(
        total_checked=1,
        total_ok=1 if result.ok else 0,
        total_fail=0 if result.ok else 1,
    )


def summarize(results: Iterable[PageCheckResult]) -> AuditSummary:
    """Сворачивает результаты одного sitemap в AuditSummary."""
    return reduce(lambda acc, result: acc + _count(result), results, AuditSummary())


def grand_total(audits: Iterable[SitemapAudit]) -> AuditSummary:
    """Общая сводка по всем sitemap запуска."""
    return reduce(lambda acc, audit: acc + audit.summary, audits, AuditSummary())


def summary_dict(summary: AuditSummary) -> Dict[str, int]:
    return {
        "total_checked": summary.total_checked,
        "total_ok": summary.total_ok,
        "total_fail": summary.total_fail,
    }


def run_to_dict(run: AuditRun) -> Dict[str, Any]:
    """Представление AuditRun для JSON- и HTML-отчётов."""
    sitemaps: List[Dict[str, Any]] = []
    for audit in run.sitemaps:
        sitemaps.append(
            {
                "sitemap_url": audit.sitemap_url,
                "report_path": str(audit.report_path) if audit.report_path else None,
                "summary": summary_dict(audit.summary),
                "results": [
                    {
                        "url": r.url,
                        "status": r.status.value,
                        "reasons": list(r.reasons),
                        "explanation": r.explanation,
                    }
                    for r in audit.results
                ],
            }
        )
    return {
        "sitemaps": sitemaps,
        "failed_sitemaps": dict(run.failed),
        "total": summary_dict(run.total),
    }
