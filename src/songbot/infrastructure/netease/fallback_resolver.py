# 🪂 songbot/infrastructure/netease/fallback_resolver.py
"""
🪂 Публічний резервний резолвер аудіо без авторизації.

Використовується, коли cookie недійсна або каталог не віддав URL.
Ніколи не піднімає винятків: у гіршому разі повертає порожній URL.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import Any, Mapping
from urllib.parse import quote

# 🧩 Внутрішні модулі проєкту
from songbot.config.config_service import ConfigService
from songbot.domain.music.entities import FallbackSong, Track
from songbot.shared.utils.logger import LOG_NAME
from .catalog_client import dig
from .http_client import NeteaseHttpClient

logger = logging.getLogger(LOG_NAME)


def _quality_of(payload: Mapping[str, Any]) -> str:
    for value in (payload.get("id"), dig(payload, "data", "quality"), payload.get("pay")):
        if value is not None:
            return str(value)
    return ""


class FallbackResolver:
    """🪂 Шукає трек у публічному API за «виконавець назва»."""

    def __init__(self, config: ConfigService, http: NeteaseHttpClient) -> None:
        self._config = config
        self._http = http

    async def resolve(self, track: Track) -> FallbackSong:
        template = str(self._config.get("netease.fallback_api") or "")
        if "{}" not in template:
            logger.warning("⚠️ netease.fallback_api не налаштовано")
            return FallbackSong()

        query = f"{track.artist} {track.title}".strip()
        payload = await self._http.get_json(template.replace("{}", quote(query)))
        if not isinstance(payload, Mapping):
            logger.warning("⚠️ Резервний резолвер нічого не повернув: %s", query)
            return FallbackSong()

        url = str(payload.get("music_url") or "")
        if not url:
            logger.warning("⚠️ Резервний резолвер без music_url: %s", query)
        return FallbackSong(url=url, quality_label=_quality_of(payload))


__all__ = ["FallbackResolver"]
