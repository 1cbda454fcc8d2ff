# 🎵 songbot/domain/music/interfaces.py
"""
🎵 Контракти домену музичних запитів.

🔹 `IKeyValueStore`: персистентне сховище (регіон, сесії, знімок хмари).
🔹 `IDeliveryChannel`: куди доставляється трек (Telegram-чат у продакшені).
🔹 `IAudioDownloader`: потокове завантаження аудіо на диск.
🔹 Не містить інфраструктури: лише протоколи для слабкого зв'язування.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Any, Optional, Protocol, runtime_checkable

# 🧩 Внутрішні модулі проєкту
from .entities import Track


@runtime_checkable
class IKeyValueStore(Protocol):
    """💾 Асинхронне key-value сховище JSON-сумісних значень."""

    async def get(self, key: str, default: Any = None) -> Any:
        ...

    async def set(self, key: str, value: Any) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...


@runtime_checkable
class IDeliveryChannel(Protocol):
    """
    📬 Канал доставки у конкретну розмову.

    `send_audio_card` піднімає `UnsupportedCardError` (або будь-який інший
    виняток), якщо структурована картка недоступна: оркестратор тоді
    надсилає сирий файл.
    """

    async def send_announcement(self, text: str, cover_url: Optional[str]) -> None:
        ...

    async def send_audio_card(self, track: Track, path: str) -> None:
        ...

    async def send_file(self, path: str, file_name: str) -> None:
        ...

    async def send_voice(self, path: str) -> None:
        ...


@runtime_checkable
class IAudioDownloader(Protocol):
    """⬇️ Завантажує `url` у `dest_path`; повертає фінальний шлях."""

    async def download(self, url: str, dest_path: str) -> str:
        ...


__all__ = ["IKeyValueStore", "IDeliveryChannel", "IAudioDownloader"]
