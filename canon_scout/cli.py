# === FILE: canon_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска аудита canonical-тегов CanonScout через командную строку.

Команды:
  audit      Проверить все URL из sitemap и сохранить CSV-отчёты
  check      Проверить отдельные страницы без sitemap
  normalize  Показать нормализованную форму URL
  config     Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования (e.g. "%(asctime)s %(levelname)s %(message)s")

Команда audit опции:
  SITEMAP_URL...        Sitemap для аудита (override sitemapUrls из конфига)
  --results-dir DIR     Каталог для CSV-отчётов
  --self-reference P    ignore | equivalent | exact
  --timeout SEC         Таймаут одного HTTP-запроса
  --json PATH           Сохранить JSON-отчёт по всему запуску
  --html PATH           Сохранить HTML-отчёт по всему запуску
  --template DIR        Папка с Jinja2-шаблоном report.html.j2
  --audit-timeout SEC   Таймаут всего аудита (секунд)

Дополнительно:
  --version, -v       Показать версию CanonScout

Пример:
  canon_scout audit https://example.com/sitemap.xml --json reports/audit.json
"""
import asyncio
import sys
from pathlib import Path
from typing import NoReturn

import click

from canon_scout import __version__
from canon_scout.config import AuditConfig, load_config
from canon_scout.engine import check_urls, start_audit
from canon_scout.logger import init_logging
from canon_scout.models import AuditSummary
from canon_scout.report.html_report import render_html
from canon_scout.report.json_report import render_json
from canon_scout.rules import SelfReferencePolicy
from canon_scout.utils import normalize_url, sitemap_name

CONTEXT_SETTINGS = dict(help_option_names=["--help"])
POLICY_CHOICES = [p.value for p in SelfReferencePolicy]


def print_error(message: str) -> NoReturn:
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _load_config(ctx: click.Context, **overrides) -> AuditConfig:
    try:
        return load_config(ctx.obj['config_path'], **overrides)
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


def _echo_summary(title: str, summary: AuditSummary) -> None:
    click.echo(title)
    click.secho(f'  OK: {summary.total_ok}', fg='green')
    click.secho(f'  FAIL (Canonical Issues): {summary.total_fail}', fg='red')
    click.echo(f'  Total Checked: {summary.total_checked}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='CanonScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON (default: configs/default.yaml).'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд CanonScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('audit', context_settings=CONTEXT_SETTINGS)
@click.argument('sitemap_urls', nargs=-1)
@click.option(
    '--results-dir', '-o', 'results_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог для CSV-отчётов (override results_dir)'
)
@click.option(
    '--self-reference', 'self_reference',
    default=None,
    type=click.Choice(POLICY_CHOICES),
    help='Политика самоссылки canonical (override self_reference)'
)
@click.option(
    '--timeout', 'timeout',
    type=float,
    default=None,
    help='Таймаут одного HTTP-запроса (секунд)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблоном (по умолчанию шаблон из пакета)'
)
@click.option(
    '--audit-timeout', 'audit_timeout',
    type=float,
    default=None,
    help='Таймаут всего аудита (секунд)'
)
@click.pass_context
def audit(ctx, sitemap_urls, results_dir, self_reference, timeout,
          json_output, html_output, template_dir, audit_timeout):
    """Проверить canonical-теги всех URL из sitemap и сохранить отчёты."""
    cfg = _load_config(
        ctx,
        sitemap_urls=list(sitemap_urls) or None,
        results_dir=results_dir,
        self_reference=self_reference,
        timeout=timeout,
    )
    click.echo(f'Starting canonical audit of {len(cfg.sitemaps)} sitemap(s)')
    try:
        if audit_timeout:
            run = asyncio.run(
                asyncio.wait_for(start_audit(cfg), timeout=audit_timeout)
            )
        else:
            run = asyncio.run(start_audit(cfg))
    except asyncio.TimeoutError:
        print_error(f'Аудит не завершён за {audit_timeout} секунд')

    for sitemap in run.sitemaps:
        _echo_summary(f'Audit completed for {sitemap_name(sitemap.sitemap_url)}:', sitemap.summary)
        if sitemap.report_path:
            click.echo(f'  Report: {sitemap.report_path}')
    for url, error in run.failed.items():
        click.secho(f'Sitemap {url} skipped: {error}', fg='yellow', err=True)
    _echo_summary('Overall Summary', run.total)

    # JSON-отчёт
    if json_output:
        try:
            saved_json = render_json(run, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    # HTML-отчёт
    if html_output:
        try:
            saved_html = render_html(run, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except OSError as e:
            print_error(f'Ошибка при сохранении HTML: {e}')

    if not run.sitemaps:
        print_error('Ни один sitemap не удалось проверить')


@cli.command('check', context_settings=CONTEXT_SETTINGS)
@click.argument('urls', nargs=-1, required=True)
@click.option(
    '--self-reference', 'self_reference',
    default=None,
    type=click.Choice(POLICY_CHOICES),
    help='Политика самоссылки canonical (override self_reference)'
)
@click.pass_context
def check(ctx, urls, self_reference):
    """Проверить отдельные страницы (таймаут и User-Agent берутся из конфига)."""
    # sitemap_urls не используются командой check, но обязательны в конфиге
    cfg = _load_config(ctx, sitemap_urls=list(urls), self_reference=self_reference)
    results = asyncio.run(check_urls(cfg, list(urls)))
    for result in results:
        color = 'green' if result.ok else 'red'
        click.secho(f'{result.url}\t{result.status.value}\t{result.explanation}', fg=color)
    if not all(r.ok for r in results):
        sys.exit(1)


@cli.command('normalize', context_settings=CONTEXT_SETTINGS)
@click.argument('urls', nargs=-1, required=True)
def normalize(urls):
    """Показать нормализованную форму URL (для сравнения эквивалентности)."""
    for url in urls:
        click.echo(normalize_url(url))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = _load_config(ctx)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
