# 📋 songbot/infrastructure/music/session_store.py
"""
📋 Останній список пошуку для кожної розмови.

Один запис на розмову, новий пошук перезаписує попередній. Без TTL.
Паралельні пошуки в одному чаті: виграє останній запис.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import Optional

# 🧩 Внутрішні модулі проєкту
from songbot.config.setup.constants import CONST
from songbot.domain.music.entities import SearchSession, Track
from songbot.domain.music.interfaces import IKeyValueStore
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(LOG_NAME)


class SessionStore:
    """📋 Сесії пошуку поверх `IKeyValueStore`."""

    def __init__(self, store: IKeyValueStore) -> None:
        self._store = store

    async def save(self, session: SearchSession) -> None:
        sessions = await self._store.get(CONST.CACHE_KEYS.SESSIONS) or {}
        sessions[session.conversation_id] = session.to_dict()
        await self._store.set(CONST.CACHE_KEYS.SESSIONS, sessions)
        logger.debug("📋 Сесію збережено: chat=%s tracks=%d", session.conversation_id, len(session.tracks))

    async def get(self, conversation_id: str) -> Optional[SearchSession]:
        sessions = await self._store.get(CONST.CACHE_KEYS.SESSIONS) or {}
        raw = sessions.get(str(conversation_id))
        return SearchSession.from_dict(raw) if raw else None

    async def resolve(self, conversation_id: str, ordinal: int) -> Optional[Track]:
        session = await self.get(conversation_id)
        return session.track_at(ordinal) if session else None


__all__ = ["SessionStore"]
