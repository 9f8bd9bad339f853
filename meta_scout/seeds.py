# File: meta_scout/seeds.py
"""meta_scout.seeds: чтение seed-адресов из CSV и их нормализация."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Optional, Union
from urllib.parse import urlsplit

from meta_scout.logger import logger

__all__ = ["normalize_seed", "load_seeds"]

_HEADER_CELLS = frozenset({"link", "url", "urls", "links"})


def normalize_seed(raw: Optional[str]) -> Optional[str]:
    """Обрезает пробелы и добавляет http://, если схема не указана. None для мусора."""
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None
    if not value.lower().startswith(("http://", "https://")):
        value = f"http://{value}"
    try:
        host = urlsplit(value).hostname
    except ValueError:
        return None
    return value if host else None


def load_seeds(path: Union[str, Path]) -> List[str]:
    """
    Читает CSV-файл и возвращает список seed-URL из первой колонки.

    Заголовок необязателен: ячейка ``link``/``url`` в первой строке пропускается.
    Пустые и некорректные строки пропускаются с предупреждением.
    """
    p = Path(path)
    if not p.is_file():
        logger.error("Seed file not found: %s", p)
        raise FileNotFoundError(f"Seed file not found: {p}")

    seeds: List[str] = []
    with p.open(newline="", encoding="utf-8-sig") as fh:
        for line_no, row in enumerate(csv.reader(fh), start=1):
            cell = row[0] if row else ""
            if line_no == 1 and cell.strip().lower() in _HEADER_CELLS:
                continue
            seed = normalize_seed(cell)
            if seed is None:
                logger.warning("Line %d: skipped malformed seed %r", line_no, cell)
                continue
            seeds.append(seed)
    logger.debug("Loaded %d seeds from %s", len(seeds), p)
    return seeds
