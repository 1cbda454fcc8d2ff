# 🌍 songbot/infrastructure/netease/region_selector.py
"""
🌍 Вибір базового URL API каталогу.

🔹 Власний сервер (`netease.use_local_api` + `netease.api_server`) завжди має пріоритет.
🔹 Інакше читається збережений прапорець `{"os": bool}`; за його відсутності
   розгортання вважається закордонним і прапорець записується один раз.
🔹 Мережею регіон не визначається.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging

# 🧩 Внутрішні модулі проєкту
from songbot.config.config_service import ConfigService
from songbot.config.setup.constants import CONST
from songbot.domain.music.interfaces import IKeyValueStore
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(LOG_NAME)


class RegionSelector:
    """🌍 Повертає базовий URL каталогу для поточного розгортання."""

    def __init__(self, config: ConfigService, store: IKeyValueStore) -> None:
        self._config = config
        self._store = store

    async def is_overseas(self) -> bool:
        flag = await self._store.get(CONST.CACHE_KEYS.REGION)
        if not isinstance(flag, dict) or "os" not in flag:
            await self._store.set(CONST.CACHE_KEYS.REGION, {"os": True})	# 🌐 Перший запуск → закордон
            logger.info("🌍 Регіон не збережено, вважаємо розгортання закордонним")
            return True
        return bool(flag["os"])

    async def resolve_base_url(self) -> str:
        server = str(self._config.get("netease.api_server") or "").strip()
        if self._config.get("netease.use_local_api", False) and server:
            return server.rstrip("/")

        if await self.is_overseas():
            base = self._config.get("netease.api_overseas", "")
        else:
            base = self._config.get("netease.api_cn", "")
        return str(base or "").rstrip("/")


__all__ = ["RegionSelector"]
