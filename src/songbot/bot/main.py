# 🤖 songbot/bot/main.py
"""
🤖 Entry-point Telegram застосунку songbot.

🔹 Ініціалізує логування, DI-контейнер та Application PTB.
🔹 Реєструє обробники й глобальний error-handler, запускає `run_polling`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from dotenv import load_dotenv											# 🌱 Завантаження змінних оточення з .env
from telegram.ext import Application, ApplicationBuilder					# 🤖 PTB v21 Application API

# 🔠 Системні імпорти
import logging															# 🧾 Логування подій запуску
import os																# 🌍 Робота з оточенням/ENV
from typing import Optional												# 🧮 Анотації Optional

# 🧩 Внутрішні модулі проєкту
from songbot.config.config_service import ConfigService					# ⚙️ Завантаження конфігів
from songbot.config.setup.bot_registrar import BotRegistrar				# 📋 Реєстрація хендлерів
from songbot.config.setup.container import Container, bootstrap_logging	# 🚀 Логування + DI-контейнер
from songbot.shared.utils.logger import LOG_NAME						# 🏷️ Ім'я кореневого логера

logger = logging.getLogger(LOG_NAME)


# ================================
# 🧩 DI / APPLICATION BUILDER
# ================================
def build_application(token: str) -> Application:
    """
    Створює та повертає PTB Application із зареєстрованими обробниками.
    """
    config = ConfigService()													# ⚙️ Завантажуємо конфіги
    container = Container(config)												# 🧩 Інстансуємо контейнер

    async def _post_shutdown(_: Application) -> None:
        await container.aclose()												# 🛑 Закриваємо HTTP-клієнти

    application = (
        ApplicationBuilder()
        .token(token)															# 🔑 Передаємо токен
        .concurrent_updates(True)												# 🧵 Кожна команда: окрема задача
        .post_shutdown(_post_shutdown)
        .build()
    )
    application.bot_data["container"] = container								# 📦 Контейнер для дебагу/тестів

    BotRegistrar(application, container).register_handlers()					# ✅ Реєструємо всі хендлери

    async def _on_error(update, context) -> None:
        """
        Глобальний error-handler PTB: відправляє винятки у централізований сервіс.
        """
        err: Optional[Exception] = getattr(context, "error", None)
        if err is None:
            logger.debug("ℹ️ _on_error викликано без context.error")
            return
        logger.error("🔥 Виняток у PTB: %s", err, exc_info=err)
        try:
            await container.exception_handler_service.handle(err, update)
        except Exception as nested:  # noqa: BLE001
            logger.exception("💥 Global error handler failed: %s", nested)

    application.add_error_handler(_on_error)
    logger.info("✅ Application готовий до запуску")
    return application


# ================================
# 🚀 ENTRYPOINT
# ================================
def run() -> None:
    """
    Основна точка входу: читає токен і запускає бота.
    """
    load_dotenv()															# 🌱 Завантажуємо змінні з .env
    bootstrap_logging()														# 🪵 Піднімаємо конфіг логування

    token = os.getenv("TELEGRAM_TOKEN") or ConfigService().get("telegram.bot_token")
    if not token:
        logger.critical("🚨 Не знайдено токен Telegram")
        raise RuntimeError("Set TELEGRAM_TOKEN in environment or telegram.bot_token in config.")

    application = build_application(token)
    logger.info("🤖 Bot is starting…")
    application.run_polling()
    logger.info("👋 Bot stopped")


if __name__ == "__main__":
    run()
