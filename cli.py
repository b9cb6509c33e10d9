# cli.py

"""
Точка входа для запуска CanonScout без установки пакета.

Функционал тот же, что у команды ``canon_scout`` (см. canon_scout/cli.py):
- Загрузка конфигурации (Pydantic)
- Инициализация логирования
- Аудит canonical-тегов по sitemap (AuditEngine)
- CSV-отчёты по каждому sitemap, JSON и/или HTML по всему запуску

Пример запуска:
    python cli.py --config configs/default.yaml audit --json reports/audit.json
"""
from canon_scout.cli import cli


if __name__ == '__main__':
    cli()
