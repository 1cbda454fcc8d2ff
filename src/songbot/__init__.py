# 🎵 songbot/__init__.py
"""🎵 songbot: Telegram-бот замовлення пісень з NetEase та персональною хмарою."""

__version__ = "0.1.0"
