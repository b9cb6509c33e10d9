# File: canon_scout/models.py
"""canon_scout.models: Результаты проверки страниц и сводки аудита."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from canon_scout.reasons import explain

__all__: Sequence[str] = (
    "CheckStatus",
    "PageCheckResult",
    "AuditSummary",
    "SitemapAudit",
    "AuditRun",
)


class CheckStatus(str, Enum):
    OK = "OK"
    FAIL = "FAIL"

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True, frozen=True)
class PageCheckResult:
    """Результат проверки одного URL: статус и упорядоченный список кодов нарушений."""

    url: str
    status: CheckStatus
    reasons: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if (self.status == CheckStatus.OK) == bool(self.reasons):
            raise ValueError("reasons must be empty iff status is OK")

    @classmethod
    def from_reasons(cls, url: str, reasons: Sequence[str]) -> PageCheckResult:
        reasons = tuple(reasons)
        return cls(url=url, status=CheckStatus.FAIL if reasons else CheckStatus.OK, reasons=reasons)

    @property
    def ok(self) -> bool:
        return self.status == CheckStatus.OK

    @property
    def explanation(self) -> str:
        """Человекочитаемое описание нарушений или ``"No errors"``."""
        return " ".join(explain(code) for code in self.reasons) or "No errors"


@dataclass(slots=True, frozen=True)
class AuditSummary:
    """Счётчики одного sitemap или всего запуска. Складываются через ``+``."""

    total_checked: int = 0
    total_ok: int = 0
    total_fail: int = 0

    def __add__(self, other: AuditSummary) -> AuditSummary:
        if not isinstance(other, AuditSummary):
            return NotImplemented
        return AuditSummary(
            total_checked=self.total_checked + other.total_checked,
            total_ok=self.total_ok + other.total_ok,
            total_fail=self.total_fail + other.total_fail,
        )


@dataclass(slots=True)
class SitemapAudit:
    """Итог аудита одного sitemap."""

    sitemap_url: str
    results: List[PageCheckResult]
    summary: AuditSummary
    report_path: Optional[Path] = None


@dataclass(slots=True)
class AuditRun:
    """Итог всего запуска: успешные sitemap, упавшие sitemap и общая сводка."""

    sitemaps: List[SitemapAudit] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    total: AuditSummary = field(default_factory=AuditSummary)
