# 📤 songbot/bot/delivery/telegram_channel.py
"""
📤 Telegram-реалізація `IDeliveryChannel`.

🔹 Анонс: фото з підписом, якщо є обкладинка, інакше звичайний текст.
🔹 Картка: `reply_audio` з назвою та виконавцем.
🔹 Файл: `reply_document`; голосове: `reply_voice`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import Message
from telegram.constants import ParseMode
from telegram.error import BadRequest

# 🔠 Системні імпорти
import logging
from typing import Optional

# 🧩 Внутрішні модулі проєкту
from songbot.config.config_service import ConfigService
from songbot.domain.music.entities import Track
from songbot.errors.custom_errors import UnsupportedCardError
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(LOG_NAME)


class TelegramDeliveryChannel:
    """📤 Відповідає на конкретне повідомлення чату."""

    def __init__(self, message: Message, config: ConfigService) -> None:
        self._message = message
        self._config = config

    async def send_announcement(self, text: str, cover_url: Optional[str]) -> None:
        if cover_url:
            await self._message.reply_photo(photo=cover_url, caption=text, parse_mode=ParseMode.HTML)
            return
        await self._message.reply_text(text, parse_mode=ParseMode.HTML)

    async def send_audio_card(self, track: Track, path: str) -> None:
        """
        Raises:
            UnsupportedCardError: картки вимкнені або Telegram їх відхилив.
        """
        if not self._config.get("song_request.send_card", True):
            raise UnsupportedCardError("audio cards are disabled")
        try:
            with open(path, "rb") as audio_file:
                await self._message.reply_audio(
                    audio=audio_file,
                    title=track.title or None,
                    performer=track.artist or None,
                    disable_notification=True,
                )
        except BadRequest as exc:
            raise UnsupportedCardError("audio card rejected", details=str(exc)) from exc
        logger.debug("🎴 Картку надіслано: %s", track.display_name)

    async def send_file(self, path: str, file_name: str) -> None:
        with open(path, "rb") as document:
            await self._message.reply_document(document=document, filename=file_name)
        logger.debug("📁 Файл надіслано: %s", file_name)

    async def send_voice(self, path: str) -> None:
        with open(path, "rb") as voice:
            await self._message.reply_voice(voice=voice)


__all__ = ["TelegramDeliveryChannel"]
