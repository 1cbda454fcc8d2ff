# 🧾 songbot/config/setup/bot_registrar.py
"""
🧾 bot_registrar.py: Модуль для реєстрації всіх обробників у додатку.

🔹 Клас `BotRegistrar`:
- Ініціалізується додатком (Application) та контейнером залежностей (Container).
- Реєструє обробники всіх фіч зі списку контейнера.
"""

# 🌐 Зовнішні бібліотеки
from telegram.ext import Application

# 🔠 Системні імпорти
import logging

# 🧩 Внутрішні модулі проєкту
from songbot.config.setup.container import Container            # 📦 DI-контейнер усіх залежностей
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(LOG_NAME)


class BotRegistrar:
    """
    🔌 Реєструє всі обробники (хендлери) в Telegram Application.
    """

    def __init__(self, application: Application, container: Container):
        self.app = application
        self.container = container

    def register_handlers(self) -> None:
        logger.info("--- Починаю реєстрацію обробників ---")
        for feature in self.container.features:
            feature.register_handlers(self.app)
            logger.info(f"✅ Обробник '{feature.__class__.__name__}' успішно зареєстровано.")
        logger.info("--- Усі обробники зареєстровано ---")
