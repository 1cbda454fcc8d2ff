# 🚀 songbot/shared/metrics/exporters.py
"""
🚀 Bootstrap HTTP-експортера `/metrics` для Prometheus.

Повторний виклик у тому ж процесі нічого не робить.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import start_http_server

# 🔠 Системні імпорти
import logging
import threading

# 🧩 Внутрішні модулі проєкту
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(LOG_NAME)

_lock = threading.Lock()
_started_port: int | None = None


def maybe_start_prometheus(port: int, addr: str = "0.0.0.0") -> bool:
    """Стартує експортер на `port`; повертає True, якщо його запущено саме цим викликом."""
    global _started_port
    with _lock:
        if _started_port is not None:
            logger.debug("📈 Prometheus уже працює на порті %s", _started_port)
            return False
        start_http_server(port, addr=addr)
        _started_port = port
    logger.info("📈 Prometheus exporter слухає %s:%s", addr, port)
    return True


__all__ = ["maybe_start_prometheus"]
