# canon_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта CanonScout.

Сериализация объекта AuditRun (все sitemap, результаты и сводки) в файл.
"""
import json
from pathlib import Path

from canon_scout.aggregator import run_to_dict
from canon_scout.models import AuditRun


def render_json(run: AuditRun, output_path: Path | str) -> Path:
    """
    Сохраняет итог аудита run в формате JSON по указанному пути.

    :param run: объект AuditRun с результатами аудита
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from canon_scout.report.json_report import render_json
    report_path = render_json(run, 'reports/audit.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    # Запись в файл с отступами и Unicode
    with output.open('w', encoding='utf-8') as f:
        json.dump(run_to_dict(run), f, ensure_ascii=False, indent=2)

    return output
