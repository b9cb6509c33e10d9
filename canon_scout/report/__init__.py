# File: canon_scout/report/__init__.py
"""canon_scout.report: Отчёты аудита: CSV по каждому sitemap, JSON и HTML по всему запуску."""

from .csv_report import report_path, write_csv_report
from .html_report import render_html
from .json_report import render_json

__all__ = ["report_path", "write_csv_report", "render_json", "render_html"]
