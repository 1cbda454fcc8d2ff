# ⏳ songbot/infrastructure/music/file_watcher.py
"""
⏳ Очікування, доки файл від асинхронного продюсера стане цілим.

Файл вважається готовим, коли два послідовні спостереження дають
однаковий ненульовий розмір. Опитування кожні 0.5 с; на таймаут
припадає рівно `timeout_seconds / poll_interval` спостережень.
Повідомлення користувачу: відповідальність викликача.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio
import logging
from typing import Awaitable, Callable, Optional

# 🧩 Внутрішні модулі проєкту
from songbot.config.setup.constants import CONST
from songbot.shared.utils.files import file_size
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(LOG_NAME)


class FileReadinessWatcher:
    """⏳ Опитує розмір файлу до стабілізації або таймауту."""

    def __init__(
        self,
        poll_interval: float = CONST.DEFAULTS.WATCH_POLL_SEC,
        default_timeout: float = CONST.DEFAULTS.WATCH_TIMEOUT_SEC,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.poll_interval = float(poll_interval)
        self.default_timeout = float(default_timeout)
        self._sleep = sleep

    def max_attempts(self, timeout_seconds: float) -> int:
        return max(1, int(round(float(timeout_seconds) / self.poll_interval)))

    async def await_stable(self, path: str, timeout_seconds: Optional[float] = None) -> bool:
        timeout = self.default_timeout if timeout_seconds is None else float(timeout_seconds)
        attempts = self.max_attempts(timeout)
        last_size = -1
        logger.info("⏳ Очікуємо файл: %s", path)

        for _ in range(attempts):
            try:
                size = await file_size(path)
            except OSError as exc:
                logger.warning("⚠️ Не вдалося прочитати розмір %s: %s", path, exc)
                size = None

            if size is not None and size > 0 and size == last_size:
                logger.info("✅ Файл готовий: %s (%d байт)", path, size)
                return True
            last_size = size if size is not None else -1
            await self._sleep(self.poll_interval)

        logger.error("❌ Таймаут %.0f с: файл так і не стабілізувався: %s", timeout, path)
        return False


__all__ = ["FileReadinessWatcher"]
