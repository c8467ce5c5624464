"""
StorageAccountant — volume de stockage de tous les médias de la séquence.

Toujours recalculé depuis l'état courant, jamais maintenu en cache.
"""
from typing import Iterable, Literal, Optional

from pydantic import BaseModel

from .. import config
from ..core.schemas import Block

StorageLevel = Literal["ok", "warning", "critical"]

_UNITS = ("B", "KB", "MB", "GB", "TB")


class StorageInfo(BaseModel):
    used: int
    limit: int
    percentage: float
    level: StorageLevel


def total_bytes(blocks: Iterable[Block]) -> int:
    return sum(m.storage_size_bytes for b in blocks for m in b.media)


def format_bytes(size: int) -> str:
    """1536 → '1.5 KB'."""
    value = float(size)
    for unit in _UNITS:
        if value < 1024 or unit == _UNITS[-1]:
            return f"{int(value)} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{size} B"


def storage_info(blocks: Iterable[Block], limit: Optional[int] = None) -> StorageInfo:
    limit = limit if limit is not None else config.STORAGE_LIMIT_BYTES
    used = total_bytes(blocks)
    percentage = (used / limit * 100) if limit > 0 else 100.0
    if percentage >= config.STORAGE_CRITICAL_PCT:
        level = "critical"
    elif percentage >= config.STORAGE_WARNING_PCT:
        level = "warning"
    else:
        level = "ok"
    return StorageInfo(used=used, limit=limit, percentage=round(percentage, 2), level=level)
