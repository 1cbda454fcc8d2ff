# 💾 songbot/infrastructure/storage/json_store.py
"""
💾 JsonFileStore: асинхронне key-value сховище поверх одного JSON-файлу.

🔹 Реалізує доменний контракт `IKeyValueStore`.
🔹 Ліниво завантажує файл у памʼять; кожен запис одразу зберігається на диск.
🔹 Записи серіалізуються `asyncio.Lock` і підміняють файл атомарно (tmp + os.replace).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import aiofiles	# 📄 Асинхронне читання/запис JSON-файлу

# 🔠 Системні імпорти
import asyncio	# 🔐 Lock
import copy	# 🧬 Копії значень, щоб зовні не змінювали кеш
import json	# 📄 Робота з JSON-файлом
import logging	# 🧾 Логування операцій
import os	# 🗂️ Атомарний rename
from pathlib import Path	# 📁 Створення директорії
from typing import Any, Dict, Optional	# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from songbot.config.config_service import ConfigService	# ⚙️ Конфіг
from songbot.config.setup.constants import CONST	# 📖 Дефолти
from songbot.domain.music.interfaces import IKeyValueStore	# 📦 Доменний контракт
from songbot.shared.utils.logger import LOG_NAME	# 🏷️ Імʼя базового логера

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(LOG_NAME)


class JsonFileStore(IKeyValueStore):
    """💾 Локальне JSON-сховище з кешем у памʼяті."""

    def __init__(self, config: ConfigService) -> None:
        self._file_path = str(config.get("files.cache_store", CONST.DEFAULTS.CACHE_STORE))	# 🗂️ Шлях до файлу
        self._lock = asyncio.Lock()	# 🔐 Захист кешу/запису
        self._cache: Optional[Dict[str, Any]] = None	# 🧠 Лінивий кеш

        try:
            Path(self._file_path).parent.mkdir(parents=True, exist_ok=True)	# 🏗️ Створюємо директорію
        except OSError as exc:
            logger.warning("⚠️ Не вдалося створити директорію для %s: %s", self._file_path, exc)

        logger.info("💾 JsonFileStore init (file=%s)", self._file_path)

    # ================================
    # 📣 ПУБЛІЧНИЙ КОНТРАКТ
    # ================================
    async def get(self, key: str, default: Any = None) -> Any:
        async with self._lock:
            cache = await self._ensure_loaded()
            if key not in cache:
                return default
            return copy.deepcopy(cache[key])

    async def set(self, key: str, value: Any) -> None:
        async with self._lock:
            cache = await self._ensure_loaded()
            cache[key] = copy.deepcopy(value)
            await self._flush_locked()
        logger.debug("💾 set: %s", key)

    async def delete(self, key: str) -> None:
        async with self._lock:
            cache = await self._ensure_loaded()
            if cache.pop(key, None) is not None:
                await self._flush_locked()
        logger.debug("🧹 delete: %s", key)

    # ================================
    # 🧠 ВНУТРІШНЯ ЛОГІКА
    # ================================
    async def _ensure_loaded(self) -> Dict[str, Any]:
        """📥 Ліниво читає файл; відсутній або битий файл → порожнє сховище."""
        if self._cache is not None:
            return self._cache
        try:
            async with aiofiles.open(self._file_path, "r", encoding="utf-8") as file_handle:
                content = await file_handle.read()
            raw = json.loads(content) if content else {}
            if not isinstance(raw, dict):
                raise ValueError("Очікувався JSON-об'єкт.")
            self._cache = raw
            logger.info("📖 Сховище завантажено: %d ключ(ів).", len(raw))
        except FileNotFoundError:
            logger.info("📄 Файл сховища не знайдено, стартуємо з порожнього.")
            self._cache = {}
        except (json.JSONDecodeError, ValueError) as exc:
            logger.warning("⚠️ Некоректний формат сховища (%s). Стартуємо з порожнього.", exc)
            self._cache = {}
        return self._cache

    async def _flush_locked(self) -> None:
        payload = json.dumps(self._cache or {}, ensure_ascii=False, indent=2, sort_keys=True)
        tmp_path = f"{self._file_path}.tmp"
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as file_handle:
            await file_handle.write(payload)
        os.replace(tmp_path, self._file_path)	# 🔀 Атомарно підміняємо


__all__ = ["JsonFileStore"]
