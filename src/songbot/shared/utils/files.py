# 📁 songbot/shared/utils/files.py
"""
📁 Асинхронні файлові хелпери поверх `aiofiles.os`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import aiofiles.os                                                  # 💽 Неблокувальні stat/remove

# 🔠 Системні імпорти
import logging
import os
from typing import Optional

# 🧩 Внутрішні модулі проєкту
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(LOG_NAME)


async def file_size(path: str) -> Optional[int]:
    """Розмір файлу в байтах або None, якщо файлу (ще) немає."""
    try:
        stats = await aiofiles.os.stat(path)
    except FileNotFoundError:
        return None
    return int(stats.st_size)


async def remove_file(path: Optional[str]) -> bool:
    """Видаляє файл, якщо він існує. Повертає True, якщо щось видалено."""
    if not path:
        return False
    try:
        await aiofiles.os.remove(path)
    except FileNotFoundError:
        return False
    except OSError as exc:
        logger.warning("⚠️ Не вдалося видалити %s: %s", path, exc)
        return False
    logger.debug("🧺 Видалено файл: %s", path)
    return True


def split_extension(file_name: str) -> tuple[str, str]:
    """`"a - b.mp3"` → (`"a - b"`, `"mp3"`)."""
    base, ext = os.path.splitext(os.path.basename(file_name or ""))
    return base, ext.lstrip(".").lower()


__all__ = ["file_size", "remove_file", "split_extension"]
