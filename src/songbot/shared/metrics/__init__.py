# 📊 songbot/shared/metrics/__init__.py
"""
📊 Пакет метрик Prometheus для застосунку.

🔹 Лічильники доставки, резервного резолвера, хмари та очікування файлів.
🔹 Легкий bootstrap експортера `/metrics`.
"""

from __future__ import annotations

from .exporters import maybe_start_prometheus
from .music import (
    CLOUD_UPLOADS_TOTAL,
    DELIVERIES_TOTAL,
    FALLBACK_RESOLUTIONS_TOTAL,
    FILE_WAIT_TIMEOUTS_TOTAL,
)

__all__ = [
    "CLOUD_UPLOADS_TOTAL",
    "DELIVERIES_TOTAL",
    "FALLBACK_RESOLUTIONS_TOTAL",
    "FILE_WAIT_TIMEOUTS_TOTAL",
    "maybe_start_prometheus",
]
