# meta_scout/report/csv_report.py

"""
Генерация CSV-отчётов для проекта MetaScout.

Три файла: родительские страницы, дочерние страницы и все страницы.
Поля экранируются модулем csv, поэтому запятые и переводы строк
в извлечённом тексте не ломают строки.
"""
import csv
from pathlib import Path
from typing import Dict, Iterable

from meta_scout.aggregator import CSV_HEADER, AggregatedRow, CrawlReport
from meta_scout.utils import ensure_dir


def write_rows(rows: Iterable[AggregatedRow], output_path: Path | str) -> Path:
    """Записывает строки с фиксированным заголовком в один CSV-файл."""
    output = Path(output_path)
    ensure_dir(output.parent)
    with output.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        writer.writerows(row.as_tuple() for row in rows)
    return output


def render_csv(report: CrawlReport, output_dir: Path | str, prefix: str = "crawl") -> Dict[str, Path]:
    """
    Сохраняет <prefix>_parent.csv, <prefix>_child.csv и <prefix>_all.csv.

    :param report: агрегированный CrawlReport
    :param output_dir: каталог для файлов
    :param prefix: префикс имён файлов
    :return: словарь {"parent"|"child"|"all": Path}

    Пример:
    ```python
    from meta_scout.report.csv_report import render_csv
    paths = render_csv(report, 'output', prefix='crawl')
    print(paths['all'])
    ```
    """
    out_dir = Path(output_dir)
    return {
        "parent": write_rows(report.parent_rows, out_dir / f"{prefix}_parent.csv"),
        "child": write_rows(report.child_rows, out_dir / f"{prefix}_child.csv"),
        "all": write_rows(report.all_rows, out_dir / f"{prefix}_all.csv"),
    }
