"""🧰 Спільні утиліти та метрики."""
