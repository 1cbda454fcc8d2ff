# 📈 songbot/shared/metrics/music.py
"""
📈 Prometheus-метрики музичного пайплайна.

🔹 `DELIVERIES_TOTAL`: доставки за каналом і результатом.
🔹 `FALLBACK_RESOLUTIONS_TOTAL`: скільки разів спрацював резервний резолвер.
🔹 `CLOUD_UPLOADS_TOTAL`: завантаження в хмару за результатом.
🔹 `FILE_WAIT_TIMEOUTS_TOTAL`: файл не стабілізувався вчасно.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import Counter

# ================================
# 🚚 ДОСТАВКА
# ================================
DELIVERIES_TOTAL = Counter(
    "songbot_deliveries_total",
    "Track deliveries by channel and outcome",
    ["channel", "outcome"],
)

FALLBACK_RESOLUTIONS_TOTAL = Counter(
    "songbot_fallback_resolutions_total",
    "Deliveries resolved through the public fallback resolver",
)

# ================================
# ☁️ ХМАРА ТА ФАЙЛИ
# ================================
CLOUD_UPLOADS_TOTAL = Counter(
    "songbot_cloud_uploads_total",
    "Personal cloud uploads by outcome",
    ["outcome"],
)

FILE_WAIT_TIMEOUTS_TOTAL = Counter(
    "songbot_file_wait_timeouts_total",
    "Files that did not stabilise before the watcher timeout",
)


__all__ = [
    "DELIVERIES_TOTAL",
    "FALLBACK_RESOLUTIONS_TOTAL",
    "CLOUD_UPLOADS_TOTAL",
    "FILE_WAIT_TIMEOUTS_TOTAL",
]
