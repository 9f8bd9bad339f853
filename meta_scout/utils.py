# File: meta_scout/utils.py
"""meta_scout.utils: мелкие вспомогательные функции."""

from __future__ import annotations

from pathlib import Path
from typing import Collection, List, Sequence, TypeVar, Union

from meta_scout.logger import logger

__all__: Sequence[str] = (
    "remove_duplicates",
    "ensure_dir",
)

T = TypeVar("T")


def remove_duplicates(items: Collection[T]) -> List[T]:
    """Удаляет дубликаты из списка, сохраняя порядок первого появления."""
    unique = list(dict.fromkeys(items))
    removed = len(items) - len(unique)
    if removed:
        logger.debug("Removed %d duplicates", removed)
    return unique


def ensure_dir(path: Union[str, Path]) -> Path:
    """Создаёт каталог (с родителями), если его нет, и возвращает Path."""
    p = Path(path).expanduser()
    p.mkdir(parents=True, exist_ok=True)
    return p
