# 🔍 songbot/infrastructure/music/search_service.py
"""
🔍 Пошук пісень: хмара + каталог в одному списку.

Порядок роботи `search`:
    1. збіги зі знімка хмари (не більше `song_request.max_list`);
    2. каталог добирає рівно стільки, скільки лишилося місць;
    3. один запит `/song/detail` уточнює назви, виконавців і обкладинки;
    4. спочатку хмара, потім каталог;
    5. список зберігається як сесія розмови.
Порожній результат сесію не змінює.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import List, Optional

# 🧩 Внутрішні модулі проєкту
from songbot.config.config_service import ConfigService
from songbot.config.setup.constants import CONST
from songbot.domain.music.entities import SearchSession, Track
from songbot.infrastructure.netease.catalog_client import CatalogClient
from songbot.shared.utils.logger import LOG_NAME
from .personal_library import PersonalLibrary
from .session_store import SessionStore

logger = logging.getLogger(LOG_NAME)


class SongSearchService:
    """🔍 Об'єднаний пошук та вибір треку за номером."""

    def __init__(
        self,
        config: ConfigService,
        catalog: CatalogClient,
        library: PersonalLibrary,
        sessions: SessionStore,
    ) -> None:
        self._config = config
        self._catalog = catalog
        self._library = library
        self._sessions = sessions

    @property
    def max_list(self) -> int:
        try:
            return max(0, int(self._config.get("song_request.max_list", CONST.DEFAULTS.MAX_LIST)))
        except (TypeError, ValueError):
            return CONST.DEFAULTS.MAX_LIST

    async def search(self, conversation_id: str, keyword: str) -> List[Track]:
        max_list = self.max_list
        cloud_matches = (await self._library.search(keyword))[:max_list]
        remaining = max_list - len(cloud_matches)
        catalog_hits = await self._catalog.search(keyword, remaining) if remaining > 0 else []

        merged = cloud_matches + catalog_hits
        if not merged:
            logger.info("🔍 Нічого не знайдено: %r", keyword)
            return []

        merged = await self._apply_details(merged)
        await self._sessions.save(SearchSession(conversation_id=str(conversation_id), tracks=tuple(merged)))
        logger.info(
            "🔍 Пошук %r: хмара=%d каталог=%d (chat=%s)",
            keyword,
            len(cloud_matches),
            len(catalog_hits),
            conversation_id,
        )
        return merged

    async def search_single(self, keyword: str) -> Optional[Track]:
        """Перший збіг у каталозі (для прямого відтворення)."""
        hits = await self._catalog.search(keyword, 1)
        if not hits:
            return None
        return (await self._apply_details(hits[:1]))[0]

    async def resolve(self, conversation_id: str, ordinal: int) -> Optional[Track]:
        return await self._sessions.resolve(str(conversation_id), ordinal)

    async def has_session(self, conversation_id: str) -> bool:
        return await self._sessions.get(str(conversation_id)) is not None

    async def _apply_details(self, tracks: List[Track]) -> List[Track]:
        details = await self._catalog.detail(track.id for track in tracks)
        return [track.with_detail(details[track.id]) if track.id in details else track for track in tracks]


__all__ = ["SongSearchService"]
