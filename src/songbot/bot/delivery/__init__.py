# 📤 songbot/bot/delivery/__init__.py
from .telegram_channel import TelegramDeliveryChannel

__all__ = ["TelegramDeliveryChannel"]
