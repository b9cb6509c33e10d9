# File: canon_scout/engine.py
"""canon_scout.engine: Оркестрация аудита: sitemap → страницы → правила → CSV-отчёты.

URL каждого sitemap проверяются строго последовательно. Ошибка загрузки одной
страницы превращается в FAIL для этой страницы; ошибка загрузки sitemap
прерывает только его аудит, остальные sitemap продолжают обрабатываться.
"""

from __future__ import annotations

from typing import List, Optional

from canon_scout.aggregator import grand_total, summarize
from canon_scout.config import AuditConfig
from canon_scout.crawler.fetcher import PageFetcher
from canon_scout.crawler.sitemap import load_sitemap_urls
from canon_scout.exceptions import FetchError, SitemapParseError
from canon_scout.logger import logger
from canon_scout.models import AuditRun, PageCheckResult, SitemapAudit
from canon_scout.reasons import fetch_error
from canon_scout.report.csv_report import report_path, write_csv_report
from canon_scout.rules import CanonicalEvaluator
from canon_scout.utils import extract_domain, generation_timestamp, sitemap_name

__all__ = ["AuditEngine", "start_audit", "check_urls", "progress_percent"]


def progress_percent(done: int, total: int) -> int:
    """Процент выполнения с округлением половины вверх (1 из 8 даёт 13)."""
    return int(done * 100 / total + 0.5)


class AuditEngine:
    """Фасад для CLI и тестов: проходит по sitemap из конфига и собирает AuditRun."""

    def __init__(self, config: AuditConfig, timestamp: Optional[str] = None) -> None:
        self.config = config
        self.evaluator = CanonicalEvaluator(config.self_reference)
        # одна метка времени на весь запуск
        self.timestamp = timestamp or generation_timestamp()

    async def run(self) -> AuditRun:
        """Аудит всех sitemap по порядку; упавшие sitemap попадают в ``AuditRun.failed``."""
        run = AuditRun()
        async with PageFetcher(self.config) as fetcher:
            for sitemap_url in self.config.sitemaps:
                try:
                    audit = await self.audit_sitemap(fetcher, sitemap_url)
                except (FetchError, SitemapParseError, OSError) as exc:
                    logger.error("Audit of sitemap %s failed: %s", sitemap_url, exc)
                    run.failed[sitemap_url] = str(exc)
                    continue
                run.sitemaps.append(audit)

        run.total = grand_total(run.sitemaps)
        logger.info(
            "Overall summary: OK %d, FAIL %d, checked %d",
            run.total.total_ok,
            run.total.total_fail,
            run.total.total_checked,
        )
        return run

    async def audit_sitemap(self, fetcher: PageFetcher, sitemap_url: str) -> SitemapAudit:
        """Проверяет все URL одного sitemap и пишет CSV-отчёт."""
        logger.info(
            "Starting canonical audit for: %s on %s",
            sitemap_name(sitemap_url),
            extract_domain(sitemap_url),
        )
        urls = await load_sitemap_urls(fetcher, sitemap_url)

        results: List[PageCheckResult] = []
        total = len(urls)
        for position, url in enumerate(urls, start=1):
            logger.info("Processing URL %d/%d: %s", position, total, url)
            results.append(await self.check_url(fetcher, url))
            logger.info("Completed %d/%d (%d%%)", position, total, progress_percent(position, total))

        summary = summarize(results)
        path = write_csv_report(
            results, summary, report_path(self.config.results_dir, sitemap_url, self.timestamp)
        )
        logger.info("Results saved to: %s", path)
        logger.info(
            "Audit completed for %s: OK %d, FAIL %d, checked %d",
            sitemap_name(sitemap_url),
            summary.total_ok,
            summary.total_fail,
            summary.total_checked,
        )
        return SitemapAudit(sitemap_url=sitemap_url, results=results, summary=summary, report_path=path)

    async def check_url(self, fetcher: PageFetcher, url: str) -> PageCheckResult:
        """Загружает страницу и применяет правила; сетевая ошибка даёт FAIL только этой странице."""
        try:
            page = await fetcher.fetch_page(url)
        except FetchError as exc:
            logger.error("Error checking URL: %s - %s", url, exc.message)
            return PageCheckResult.from_reasons(url, [fetch_error(exc.message)])
        return await self.evaluator.evaluate(url, page.content, fetcher.fetch_status)


async def start_audit(cfg: AuditConfig) -> AuditRun:
    """Корутина запуска аудита по конфигу (используется CLI)."""
    return await AuditEngine(cfg).run()


async def check_urls(cfg: AuditConfig, urls: List[str]) -> List[PageCheckResult]:
    """Проверяет отдельные страницы без sitemap и без записи отчёта."""
    engine = AuditEngine(cfg)
    async with PageFetcher(cfg) as fetcher:
        return [await engine.check_url(fetcher, url) for url in urls]
