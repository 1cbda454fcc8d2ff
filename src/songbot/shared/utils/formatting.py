# 🧮 songbot/shared/utils/formatting.py
"""
🧮 Дрібні форматери: тривалість треку, розміри файлів, безпечні імена.
"""

from __future__ import annotations

import re
from typing import Optional, Union

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')		# 🚫 Недозволені в імені файлу символи
_SPACES = re.compile(r"\s+")

Number = Union[int, float]


def format_duration(milliseconds: Optional[Number]) -> str:
    """Мілісекунди → `mm:ss` (години додаються в хвилини)."""
    if not milliseconds or milliseconds < 0:
        return "00:00"
    total_seconds = int(milliseconds // 1000)
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def bytes_to_mb(size_in_bytes: Optional[Number]) -> str:
    """Байти → мегабайти з двома знаками після коми."""
    return f"{(size_in_bytes or 0) / (1024 * 1024):.2f}"


def to_gb_or_tb(size_in_bytes: Optional[Number]) -> str:
    """Розмір хмари: до 1 TB показуємо в GB, більше показуємо в TB."""
    size = float(size_in_bytes or 0)
    gigabytes = size / 1024 ** 3
    if gigabytes < 1024:
        return f"{gigabytes:.2f} GB"
    return f"{gigabytes / 1024:.2f} TB"


def sanitize_filename(name: str, *, fallback: str = "track") -> str:
    """Прибирає з імені файлу роздільники шляху та службові символи."""
    cleaned = _UNSAFE_CHARS.sub("", name or "")
    cleaned = _SPACES.sub(" ", cleaned).strip().strip(".")
    return cleaned or fallback


__all__ = ["format_duration", "bytes_to_mb", "to_gb_or_tb", "sanitize_filename"]
