# 🔁 songbot/shared/utils/retry.py
"""
🔁 Спільний примітив повторних спроб з експоненційним backoff.

🔹 Викликає async-фабрику до `attempts` разів.
🔹 Між спробами чекає `delay`, щоразу множачи його на `factor`.
🔹 `asyncio.CancelledError` ніколи не ковтається.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio
import logging
from typing import Awaitable, Callable, Tuple, Type, TypeVar

# 🧩 Внутрішні модулі проєкту
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(LOG_NAME)

T = TypeVar("T")


class RetryExhaustedError(Exception):
    """Усі спроби вичерпано; `last_error` містить останній виняток."""

    def __init__(self, attempts: int, last_error: BaseException) -> None:
        super().__init__(f"Retry exhausted after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error


async def retry_async(
    func: Callable[[], Awaitable[T]],
    *,
    attempts: int = 3,
    delay: float = 1.0,
    factor: float = 2.0,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    label: str = "operation",
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Виконує `func` з повторами.

    Args:
        func: Фабрика корутини; викликається заново на кожну спробу.
        attempts: Максимальна кількість спроб (мінімум 1).
        delay: Пауза перед другою спробою, секунди.
        factor: Множник паузи для наступних спроб.
        retry_on: Винятки, після яких варто пробувати ще.
        label: Назва операції для логів.
        sleep: Функція очікування (підміняється в тестах).

    Raises:
        RetryExhaustedError: якщо жодна спроба не вдалася.
    """
    total = max(1, int(attempts))
    pause = max(0.0, float(delay))
    last_error: BaseException = RuntimeError("no attempts made")

    for attempt in range(1, total + 1):
        try:
            return await func()
        except asyncio.CancelledError:
            raise												# ⏹️ Скасування передаємо вище
        except retry_on as exc:
            last_error = exc
            logger.warning("⚠️ %s: спроба %s/%s не вдалася: %s", label, attempt, total, exc)
            if attempt >= total:
                break
            await sleep(pause)									# 😴 Чекаємо перед повтором
            pause *= factor									# 📈 Збільшуємо backoff

    logger.error("❌ %s: вичерпано %s спроб", label, total)
    raise RetryExhaustedError(total, last_error)


__all__ = ["RetryExhaustedError", "retry_async"]
