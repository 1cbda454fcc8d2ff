# 🛡️ songbot/errors/exception_handler_service.py
"""
🛡️ Центральний сервіс обробки помилок для Telegram-бота.

🔹 Конвертує будь-які винятки в доменні `AppError`, використовуючи передані стратегії.
🔹 Визначає, що показати користувачу (`UserVisibleError` або загальний текст).
🔹 Логує повний контекст (user_id, код помилки, payload) і ніколи не валить хендлер.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import Update											# 🤖 Telegram DTO

# 🔠 Системні імпорти
import asyncio														# ⏱️ CancelledError
import logging														# 🧾 Логування кроків
from typing import Any, List, Mapping, Optional					# 📐 Типи

# 🧩 Внутрішні модулі проєкту
from songbot.bot.ui import static_messages as msg					# 💬 Стандартні повідомлення
from songbot.shared.utils.logger import LOG_NAME					# 🏷️ Спільний неймспейс логів
from .custom_errors import AppError, UserVisibleError				# ⚠️ Доменні винятки
from .strategies import IErrorHandlingStrategy						# 🧠 Конвертери винятків


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(LOG_NAME)


# ================================
# 🧠 СЕРВІС ОБРОБКИ ПОМИЛОК
# ================================
class ExceptionHandlerService:
    """🧠 Глобальний диспетчер помилок для асинхронних Telegram-хендлерів."""

    def __init__(self, strategies: List[IErrorHandlingStrategy]) -> None:
        self._strategies = list(strategies)							# 📦 Копія списку, щоб уникнути мутацій
        logger.info("🛡️ ExceptionHandlerService init", extra={"strategies": len(self._strategies)})

    # ================================
    # 🔑 ПУБЛІЧНИЙ API
    # ================================
    async def handle(self, error: BaseException, update: Optional[Update]) -> None:
        """
        Головна точка входу. Нічого не піднімає, окрім CancelledError.
        """
        if isinstance(error, asyncio.CancelledError):					# ⏹️ CancelledError передається вище
            logger.info("⏹️ CancelledError passthrough")
            raise error

        domain_error = self._convert_error(error)					# 🔄 Прагнемо отримати AppError
        user_id = self._extract_user_id(update)						# 🆔 Для логів

        if isinstance(domain_error, UserVisibleError):				# 👀 Показуємо повідомлення як є
            logger.warning(
                "⚠️ UserVisibleError for user=%s: %s",
                user_id,
                domain_error,
                extra=self._extract_extra(domain_error),
            )
            await self._safe_reply(update, domain_error.message)
            return

        logger.error("🔥 Unhandled exception for user=%s", user_id, exc_info=error)
        await self._safe_reply(update, msg.ERROR_UNEXPECTED)			# 🛟 Загальний фолбек

    # ================================
    # 🛠️ ДОПОМІЖНІ МЕТОДИ
    # ================================
    def _convert_error(self, error: BaseException) -> Optional[AppError]:
        """🔄 Пропускає виняток через стратегії й повертає `AppError`, якщо можливо."""
        if isinstance(error, AppError):								# 🧾 Уже доменний виняток
            return error

        for strategy in self._strategies:
            try:
                converted = strategy.handle(error)					# type: ignore[arg-type]
            except Exception as exc:									# noqa: BLE001
                logger.exception("🔥 Strategy failed: %r", strategy, exc_info=exc)
                continue
            if converted:
                logger.debug("🔁 Strategy converted error via %r", strategy)
                return converted
        return None

    def _extract_user_id(self, update: Optional[Update]) -> str:
        """🆔 Витягує user_id для логів, навіть якщо update None."""
        if not update:
            return "N/A"
        user = getattr(update, "effective_user", None)				# 👤 Telegram user (може бути None)
        return str(user.id) if user else "N/A"

    def _extract_extra(self, error: AppError) -> Optional[Mapping[str, Any]]:
        """📦 Викликає `to_log_extra` і повертає копію payload."""
        try:
            payload = error.to_log_extra()
        except Exception:											# noqa: BLE001
            logger.debug("⚠️ to_log_extra failed", exc_info=True)	# 🚫 Не ламаємо обробку
            return None
        return dict(payload) if isinstance(payload, Mapping) else None

    async def _safe_reply(self, update: Optional[Update], text: str) -> None:
        """💬 Тихо намагається відповісти користувачу, не валячи обробник."""
        if not update:
            return

        message = getattr(update, "effective_message", None) or getattr(update, "message", None)
        if not message:
            logger.debug("ℹ️ _safe_reply: no message object")
            return

        try:
            await message.reply_text(text)
        except Exception as send_err:								# noqa: BLE001
            logger.warning("⚠️ Failed to send error message: %s", send_err)


__all__ = ["ExceptionHandlerService"]
