# 🛠️ songbot/errors/error_handler.py
"""
🛠️ Декоратор, що передає винятки музичних хендлерів у `ExceptionHandlerService`.

Скасування задачі (`asyncio.CancelledError`) завжди йде далі.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from telegram import Update

# 🔠 Системні імпорти
import asyncio
import functools
import logging
from typing import Any, Awaitable, Callable, Iterable, Optional

# 🧩 Внутрішні модулі проєкту
from songbot.shared.utils.logger import LOG_NAME
from .exception_handler_service import ExceptionHandlerService

logger = logging.getLogger(LOG_NAME)

Handler = Callable[..., Awaitable[Any]]


def _find_update(args: Iterable[Any], kwargs: dict) -> Optional[Update]:
    candidate = kwargs.get("update")
    if isinstance(candidate, Update):
        return candidate
    return next((arg for arg in args if isinstance(arg, Update)), None)


def make_error_handler(service: ExceptionHandlerService) -> Callable[[Handler], Handler]:
    """Фабрика декоратора, замкненого на сервіс обробки помилок."""

    def decorator(func: Handler) -> Handler:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except asyncio.CancelledError:
                raise
            except Exception as exc:									# noqa: BLE001
                logger.debug("🎶 %s: %s", func.__qualname__, type(exc).__name__)
                await service.handle(exc, _find_update(args, kwargs))
                return None

        return wrapper

    return decorator


__all__ = ["make_error_handler"]
