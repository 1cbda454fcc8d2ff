# 🎶 songbot/bot/handlers/song_request_handler.py
"""
🎶 Обробник текстових команд музичного бота.

🔹 Одна точка входу `handle` розбирає текст і маршрутизує команду
🔹 Пошук та відтворення працюють лише в групах і під прапорцем `song_request.enabled`
🔹 Команди хмари доступні тільки адміністраторам (`bot.admin_ids`)
🔹 Усі винятки йдуть у `ExceptionHandlerService` через `make_error_handler`
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import Message, Update
from telegram.constants import ChatType, ParseMode
from telegram.ext import Application, ContextTypes, MessageHandler, filters

# 🔠 Системні імпорти
import logging
import os
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional, Set

# 🧩 Внутрішні модулі проєкту
from songbot.bot.delivery.telegram_channel import TelegramDeliveryChannel
from songbot.bot.ui import static_messages as msg
from songbot.bot.ui.formatters import render_cloud_summary, render_song_list
from songbot.config.config_service import ConfigService
from songbot.config.setup.constants import CONST
from songbot.domain.music.entities import ShareCard, Track
from songbot.errors.custom_errors import (
    DeliveryFailedError,
    FileNotReadyError,
    SessionNotFoundError,
    SongNotFoundError,
    UserVisibleError,
)
from songbot.infrastructure.music.cloud_uploader import CloudUploader
from songbot.infrastructure.music.delivery_orchestrator import DeliveryOrchestrator
from songbot.infrastructure.music.personal_library import PersonalLibrary
from songbot.infrastructure.music.search_service import SongSearchService
from songbot.infrastructure.music.share_card import parse_share_card
from songbot.infrastructure.netease.cloud_api import CloudApi
from songbot.shared.utils.files import remove_file
from songbot.shared.utils.formatting import sanitize_filename
from songbot.shared.utils.logger import LOG_NAME
from .command_parser import CommandKind, ParsedCommand, parse_command

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(LOG_NAME)

Route = Callable[[Message, ParsedCommand, str], Awaitable[None]]
ErrorWrapper = Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[Any]]]

_GROUP_CHATS = (ChatType.GROUP, ChatType.SUPERGROUP)
_GROUP_ONLY = frozenset({CommandKind.SEARCH, CommandKind.PICK, CommandKind.PLAY})
_ADMIN_ONLY = frozenset(
    {
        CommandKind.MY_CLOUD,
        CommandKind.CLOUD_REFRESH,
        CommandKind.CLOUD_UPLOAD,
        CommandKind.CLOUD_CLEAR,
        CommandKind.FILE_TO_CLOUD,
    }
)


# ================================
# 🏛️ ОБРОБНИК КОМАНД
# ================================
class SongRequestHandler:
    """
    🎶 Маршрутизує команди чату до пошуку, доставки та хмари.
    """

    def __init__(
        self,
        config: ConfigService,
        search: SongSearchService,
        orchestrator: DeliveryOrchestrator,
        uploader: CloudUploader,
        library: PersonalLibrary,
        cloud_api: CloudApi,
        error_handler: ErrorWrapper,
    ) -> None:
        self._config = config
        self._search = search
        self._orchestrator = orchestrator
        self._uploader = uploader
        self._library = library
        self._cloud_api = cloud_api
        self._error_handler = error_handler
        self._routes: Dict[CommandKind, Route] = {
            CommandKind.SEARCH: self._on_search,
            CommandKind.PICK: self._on_pick,
            CommandKind.PLAY: self._on_play,
            CommandKind.UPLOAD_TO_CHAT: self._on_upload_to_chat,
            CommandKind.MY_CLOUD: self._on_my_cloud,
            CommandKind.CLOUD_REFRESH: self._on_cloud_refresh,
            CommandKind.CLOUD_UPLOAD: self._on_cloud_upload,
            CommandKind.CLOUD_CLEAR: self._on_cloud_clear,
            CommandKind.FILE_TO_CLOUD: self._on_file_to_cloud,
        }

    # ================================
    # 🔌 РЕЄСТРАЦІЯ
    # ================================
    def register_handlers(self, application: Application) -> None:
        application.add_handler(
            MessageHandler(filters.TEXT & ~filters.COMMAND, self._error_handler(self.handle))
        )
        logger.info("🧾 Song request handler registered")

    # ================================
    # 🚦 ТОЧКА ВХОДУ
    # ================================
    async def handle(self, update: Update, context: Optional[ContextTypes.DEFAULT_TYPE] = None) -> None:
        message = update.effective_message
        if message is None or not message.text:
            return

        command = parse_command(message.text)
        if command is None:
            return
        if not self._config.get("song_request.enabled", True):
            logger.debug("🔕 Музичні команди вимкнено, пропускаємо %s", command.kind.value)
            return
        if command.kind in _GROUP_ONLY and message.chat.type not in _GROUP_CHATS:
            logger.debug("👥 %s доступна лише в групах", command.kind.value)
            return

        requester_id = self._requester_id(update)
        if command.kind in _ADMIN_ONLY and not self._is_admin(requester_id):
            await message.reply_text(msg.ADMIN_ONLY)
            return

        logger.info("🎶 Команда %s від %s у чаті %s", command.kind.value, requester_id, message.chat_id)
        await self._routes[command.kind](message, command, requester_id)

    # ================================
    # 🔍 ПОШУК І ВІДТВОРЕННЯ
    # ================================
    async def _on_search(self, message: Message, command: ParsedCommand, requester_id: str) -> None:
        tracks = await self._search.search(str(message.chat_id), command.keyword)
        if not tracks:
            raise SongNotFoundError(msg.SONG_NOT_FOUND, keyword=command.keyword)
        await message.reply_text(render_song_list(tracks), parse_mode=ParseMode.HTML)

    async def _on_pick(self, message: Message, command: ParsedCommand, requester_id: str) -> None:
        conversation_id = str(message.chat_id)
        track = await self._search.resolve(conversation_id, command.ordinal)
        if track is None:
            if not await self._search.has_session(conversation_id):
                raise SessionNotFoundError(msg.NO_SEARCH_SESSION)
            raise SessionNotFoundError(msg.BAD_ORDINAL.format(ordinal=command.ordinal))
        await self._deliver(message, track, requester_id)

    async def _on_play(self, message: Message, command: ParsedCommand, requester_id: str) -> None:
        track = await self._search.search_single(command.keyword)
        if track is None:
            raise SongNotFoundError(msg.SONG_NOT_FOUND, keyword=command.keyword)
        await self._deliver(message, track, requester_id)

    async def _deliver(self, message: Message, track: Track, requester_id: str) -> None:
        channel = TelegramDeliveryChannel(message, self._config)
        report = await self._orchestrator.deliver(track, requester_id, channel)
        if not report.delivered:
            raise DeliveryFailedError(msg.DELIVERY_FAILED.format(title=track.display_name))

    # ================================
    # 📤 ПОДІЛЕНІ ПІСНІ
    # ================================
    async def _on_upload_to_chat(self, message: Message, command: ParsedCommand, requester_id: str) -> None:
        card = self._share_card_from_reply(message)
        timeout = self._orchestrator.watch_timeout()
        path = await self._orchestrator.fetch_local_copy(card, requester_id, timeout)
        if path is None:
            raise FileNotReadyError(msg.FILE_WAIT_TIMEOUT.format(seconds=int(timeout)), timeout_sec=timeout)
        try:
            channel = TelegramDeliveryChannel(message, self._config)
            await channel.send_file(path, os.path.basename(path))
        finally:
            await remove_file(path)

    async def _on_cloud_upload(self, message: Message, command: ParsedCommand, requester_id: str) -> None:
        card = self._share_card_from_reply(message)
        await self._uploader.upload_share_card(card, requester_id)
        await message.reply_text(msg.CLOUD_UPLOAD_OK)

    # ================================
    # ☁️ ХМАРА
    # ================================
    async def _on_my_cloud(self, message: Message, command: ParsedCommand, requester_id: str) -> None:
        summary = await self._cloud_api.summary()
        await message.reply_text(render_cloud_summary(summary))

    async def _on_cloud_refresh(self, message: Message, command: ParsedCommand, requester_id: str) -> None:
        await self._library.clear()
        await self._library.refresh()
        await message.reply_text(msg.CLOUD_REFRESH_OK)
        await self._on_my_cloud(message, command, requester_id)

    async def _on_cloud_clear(self, message: Message, command: ParsedCommand, requester_id: str) -> None:
        await self._library.clear()
        await message.reply_text(msg.CLOUD_CACHE_CLEARED)

    async def _on_file_to_cloud(self, message: Message, command: ParsedCommand, requester_id: str) -> None:
        reply = message.reply_to_message
        attachment = None
        if reply is not None:
            attachment = reply.audio or reply.document
        if attachment is None:
            raise UserVisibleError(msg.REPLY_TO_AUDIO_FILE)

        file_name = attachment.file_name or ""

        async def materialize() -> str:
            target = Path(self._download_dir()) / sanitize_filename(requester_id, fallback="anonymous")
            target.mkdir(parents=True, exist_ok=True)
            path = str(target / sanitize_filename(file_name))
            tg_file = await attachment.get_file()
            await tg_file.download_to_drive(path)
            return path

        await self._uploader.upload_named_file(file_name, materialize)
        await message.reply_text(msg.CLOUD_UPLOAD_OK)

    # ================================
    # 🛠️ ДОПОМІЖНІ МЕТОДИ
    # ================================
    @staticmethod
    def _share_card_from_reply(message: Message) -> ShareCard:
        reply = message.reply_to_message
        text = ""
        if reply is not None:
            text = reply.text or reply.caption or ""
        return parse_share_card(text)

    @staticmethod
    def _requester_id(update: Update) -> str:
        user = update.effective_user
        return str(user.id) if user is not None else "anonymous"

    def _is_admin(self, requester_id: str) -> bool:
        admins: Set[str] = {str(admin) for admin in (self._config.get("bot.admin_ids") or [])}
        return requester_id in admins

    def _download_dir(self) -> str:
        return str(self._config.get("files.download_dir") or CONST.DEFAULTS.DOWNLOAD_DIR)


__all__ = ["SongRequestHandler"]
