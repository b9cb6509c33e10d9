# File: canon_scout/report/csv_report.py
"""canon_scout.report.csv_report: CSV-отчёт по одному sitemap.

Формат (его разбирают внешние потребители, порядок колонок и заголовок
менять нельзя)::

    URL,Status,Explanation
    https://example.com/a,OK,No errors
    https://example.com/b,FAIL,Canonical tag is missing.

    Total URLs Checked: 2
    Total OK: 1
    Total FAIL (Canonical Issues): 1
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Union

from canon_scout.models import AuditSummary, PageCheckResult
from canon_scout.utils import extract_domain, generation_timestamp, sitemap_name

HEADER = ("URL", "Status", "Explanation")


def report_path(results_dir: Union[str, Path], sitemap_url: str, timestamp: str | None = None) -> Path:
    """Путь отчёта: ``<results_dir>/<домен>/<имя sitemap>_<YYYYMMDD_HHMMSS>.csv``."""
    stamp = timestamp or generation_timestamp()
    return Path(results_dir) / extract_domain(sitemap_url) / f"{sitemap_name(sitemap_url)}_{stamp}.csv"


def write_csv_report(
    results: Iterable[PageCheckResult],
    summary: AuditSummary,
    output_path: Union[str, Path],
) -> Path:
    """Сохраняет строки результатов и итоговые счётчики в CSV, возвращает путь файла."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(HEADER)
        for result in results:
            writer.writerow((result.url, result.status.value, result.explanation))
        f.write("\n")
        f.write(f"Total URLs Checked: {summary.total_checked}\n")
        f.write(f"Total OK: {summary.total_ok}\n")
        f.write(f"Total FAIL (Canonical Issues): {summary.total_fail}\n")

    return output
