# meta_scout/report/json_report.py

"""
Генерация JSON-дампа деревьев обхода для проекта MetaScout.

В отличие от CSV, сохраняет всё: дерево страниц, статусы, ошибки
и цепочки редиректов, плюс идентификатор запуска и дату.
"""
import json
import uuid
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from meta_scout.crawler.models import CrawlTreeNode, utc_now_iso
from meta_scout.utils import ensure_dir


def trees_payload(
    trees: List[CrawlTreeNode],
    run_id: Optional[str] = None,
    scraped_at: Optional[str] = None,
) -> Dict[str, Any]:
    """Словарь для сериализации: {run_id, scraped_at, seeds: [...]}."""
    return {
        "run_id": run_id or uuid.uuid4().hex,
        "scraped_at": scraped_at or utc_now_iso(),
        "seeds": [asdict(tree) for tree in trees],
    }


def render_json(
    trees: List[CrawlTreeNode],
    output_path: Path | str,
    run_id: Optional[str] = None,
    scraped_at: Optional[str] = None,
) -> Path:
    """
    Сохраняет деревья обхода в формате JSON по указанному пути.

    :param trees: деревья CrawlTreeNode, по одному на seed
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    ensure_dir(output.parent)

    data = trees_payload(trees, run_id=run_id, scraped_at=scraped_at)

    # Запись в файл с отступами и Unicode
    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
