# 📜 songbot/shared/utils/logger.py
"""
📜 Єдина схема логування для всього застосунку.

🔹 Ініціалізує кореневий логер `songbot` із консольним та файловим виводом.
🔹 Файловий вивід ротується щодоби, за бажанням: у JSON.
🔹 Приглушує балакучі сторонні бібліотеки (httpx, telegram).
"""
from __future__ import annotations

# 🔠 Системні імпорти
import json									# 📦 Серіалізація payload логів
import logging									# 🪵 Робота з логерами Python
import sys									# 🧵 stdout
import threading								# 🧵 Захист ініціалізації
from dataclasses import dataclass, field					# 🧱 DTO-конфіг логування
from logging.handlers import TimedRotatingFileHandler			# 📁 Хендлер з ротацією файлів
from pathlib import Path								# 📂 Шляхи до лог-файлів
from typing import Any, Dict, Optional, Union				# 🧰 Типи

# ================================
# 🧾 КОНСТАНТИ МОДУЛЯ
# ================================
LOG_NAME: str = "songbot"							# 🏷️ Базовий префікс логерів
PLAIN_FORMAT: str = "%(asctime)s [%(levelname)s] - (%(name)s).%(funcName)s(%(lineno)d) - %(message)s"
CONSOLE_FORMAT: str = "[%(levelname).1s] %(message)s"
DEFAULT_SUPPRESS: Dict[str, str] = {"httpx": "WARNING", "httpcore": "WARNING", "telegram": "INFO"}

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}							# 🚫 Стандартні поля LogRecord

_lock = threading.Lock()


@dataclass
class LoggingConfig:
    """Налаштування логування з дефолтами."""
    level: str = "INFO"
    console: bool = True
    json: bool = False
    file: str = "logs/songbot.log"
    when: str = "midnight"
    backup_count: int = 7
    suppress: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SUPPRESS))
    console_level: str = "INFO"
    file_level: str = "DEBUG"


class JsonFormatter(logging.Formatter):
    """Форматує запис у плоский JSON, додаючи extra-поля."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, datefmt="%Y-%m-%d %H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "func": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():			# 🔎 extra=... від викликача
            if key in _RESERVED_ATTRS or key.startswith("_") or key in payload:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except (TypeError, ValueError):
                payload[key] = str(value)				# 🔄 Несеріалізоване → рядок
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)		# 🌐 Кирилиця/ієрогліфи як є


def _to_level(value: Union[str, int, None], default: int) -> int:
    """Перетворює рядок/інт у числовий рівень логування."""
    if isinstance(value, int):
        return value
    if not value:
        return default
    return getattr(logging, str(value).upper(), default)


def init_logging(
    *,
    level: Optional[str] = None,
    console: Optional[bool] = None,
    json_mode: Optional[bool] = None,
    file: Optional[str] = None,
    suppress: Optional[Dict[str, str]] = None,
    console_level: Optional[Union[str, int]] = None,
    file_level: Optional[Union[str, int]] = None,
) -> logging.Logger:
    """Ініціалізує кореневий логер застосунку за єдиною схемою."""
    with _lock:									# 🔒 Повторна конфігурація лише під локом
        cfg = LoggingConfig(
            level=level or "INFO",
            console=True if console is None else bool(console),
            json=bool(json_mode),
            file=file or "logs/songbot.log",
            suppress={**DEFAULT_SUPPRESS, **(suppress or {})},
            console_level=str(console_level or level or "INFO"),
            file_level=str(file_level or level or "DEBUG"),
        )

        root_logger = logging.getLogger(LOG_NAME)
        root_logger.setLevel(min(
            _to_level(cfg.level, logging.INFO),
            _to_level(cfg.console_level, logging.INFO),
            _to_level(cfg.file_level, logging.DEBUG),
        ))

        for handler in list(root_logger.handlers):			# 🧹 Прибираємо свої попередні хендлери
            root_logger.removeHandler(handler)

        if cfg.console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
            console_handler.setLevel(_to_level(cfg.console_level, logging.INFO))
            root_logger.addHandler(console_handler)

        log_path = Path(cfg.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)		# 🧱 Директорія для логів
        file_handler = TimedRotatingFileHandler(
            filename=str(log_path),
            when=cfg.when,
            backupCount=cfg.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(JsonFormatter() if cfg.json else logging.Formatter(PLAIN_FORMAT))
        file_handler.setLevel(_to_level(cfg.file_level, logging.DEBUG))
        root_logger.addHandler(file_handler)

        for name, lvl in cfg.suppress.items():				# 🙊 Сторонні бібліотеки
            logging.getLogger(name).setLevel(_to_level(lvl, logging.WARNING))

        root_logger.info(
            "✅ Logging initialized | level=%s console=%s json=%s file=%s",
            cfg.level.upper(),
            "ON" if cfg.console else "OFF",
            "ON" if cfg.json else "OFF",
            cfg.file,
        )
        return root_logger


def init_logging_from_config(config: Dict[str, Any]) -> logging.Logger:
    """
    Ініціалізує логування з розділу `logging` конфігурації.

    Args:
        config: Словник вузла `logging` із ConfigService.
    """
    node = config or {}
    return init_logging(
        level=node.get("level"),
        console=node.get("console"),
        json_mode=node.get("json"),
        file=node.get("file"),
        suppress=node.get("suppress"),
        console_level=node.get("console_level"),
        file_level=node.get("file_level"),
    )


def get_logger(suffix: Optional[str] = None) -> logging.Logger:
    """Повертає дочірній логер із префіксом `LOG_NAME`."""
    return logging.getLogger(LOG_NAME if not suffix else f"{LOG_NAME}.{suffix}")


__all__ = ["LOG_NAME", "JsonFormatter", "init_logging", "init_logging_from_config", "get_logger"]
