# ⚙️ config_service.py
"""
⚙️ config_service.py: Сервіс доступу до конфігурації бота.

🔹 Клас `ConfigService`:
- Завантажує конфігурацію з .env, config.json, config.yaml та runtime.yaml.
- Надає єдиний метод .get() для доступу до будь-якого параметра.
- `update_field()` змінює значення і зберігає його в runtime.yaml
  (так переживає рестарт, наприклад, `netease.user_id`).
- Працює як Singleton.
"""

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import json                                 # 📄 Робота з JSON-файлами
import logging                              # 🧾 Логування
import os                                   # 📁 Змінні середовища
import threading                            # 🔒 Серіалізація запису runtime.yaml
from pathlib import Path                    # 📁 Побудова шляху до файлів
from typing import Any, Dict, Optional      # 🧩 Типізація

# ============================
# 🗺️ ENV → КЛЮЧІ КОНФІГУРАЦІЇ
# ============================
ENV_KEYS: Dict[str, str] = {
    "TELEGRAM_TOKEN": "telegram.bot_token",
    "NETEASE_COOKIE": "netease.cookie",
    "NETEASE_SONG_COOKIE": "netease.song_cookie",
    "NETEASE_CLOUD_COOKIE": "netease.cloud_cookie",
    "NETEASE_API_SERVER": "netease.api_server",
}


class ConfigService:
    """
    ⚙️ Надає доступ до всіх конфігураційних параметрів бота.
    Singleton: конфігурація зчитується лише один раз.
    """

    _instance = None                          # 🧩 Singleton-екземпляр
    _config: Dict[str, Any] = {}              # 📦 Обʼєднана конфігурація
    _config_dir: Path = Path(__file__).parent

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._config = {}
            cls._instance._config_dir = Path(os.getenv("SONGBOT_CONFIG_DIR") or Path(__file__).parent)
            cls._instance._write_lock = threading.Lock()
            cls._instance._load_all_configs()  # 🔄 Завантаження під час першого виклику
            logging.debug("🔄 Singleton ConfigService створено і конфігурація завантажена")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """🧹 Скидає singleton (для тестів та перезавантаження конфігів)."""
        cls._instance = None

    def _load_all_configs(self) -> None:
        """
        📥 Завантажує всі джерела в один словник.
        Пріоритет (пізніше перекриває раніше): config.yaml → config.json → runtime.yaml → .env
        """
        self._deep_update(self._config, self._read_yaml(self._config_dir / "config.yaml"))

        json_path = self._config_dir / "config.json"
        try:
            with open(json_path, "r", encoding="utf-8") as f:
                self._deep_update(self._config, json.load(f))
        except FileNotFoundError:
            logging.debug("📄 config.json відсутній: пропускаємо")
        except json.JSONDecodeError as e:
            logging.warning(f"⚠️ Не вдалося розібрати config.json: {e}")

        self._deep_update(self._config, self._read_yaml(self.runtime_path))

        load_dotenv()
        env_vars = {key: os.getenv(env) for env, key in ENV_KEYS.items() if os.getenv(env)}
        self._deep_update(self._config, self._unflatten_dict(env_vars))

        logging.info("✅ Конфігурацію успішно завантажено.")

    @property
    def runtime_path(self) -> Path:
        """📁 Файл, куди пишуться значення з `update_field`."""
        return self._config_dir / "runtime.yaml"

    def get(self, key: str, default: Any = None) -> Any:
        """
        🔑 Отримує значення конфігурації за ключем (наприклад: 'netease.audio_quality').

        Args:
            key (str): Ключ у форматі з крапкою.
            default (Any): Значення за замовчуванням, якщо ключ не знайдено.
        """
        value: Any = self._config
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def update_field(self, key: str, value: Any) -> None:
        """
        ✍️ Оновлює значення в памʼяті та зберігає його в runtime.yaml.

        Блокувальна операція: з async-коду викликати через `asyncio.to_thread`.
        """
        patch = self._unflatten_dict({key: value})
        with self._write_lock:
            self._deep_update(self._config, patch)
            runtime = self._read_yaml(self.runtime_path)
            self._deep_update(runtime, patch)
            self.runtime_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.runtime_path.with_suffix(".yaml.tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(runtime, f, allow_unicode=True, sort_keys=True)
            os.replace(tmp_path, self.runtime_path)  # 🔁 Атомарна заміна
        logging.info(f"✍️ Конфіг оновлено: {key}")

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ
    # ===============================
    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        """📘 Читає YAML-файл; відсутній або зламаний файл → порожній словник."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            return {}
        except yaml.YAMLError as e:
            logging.warning(f"⚠️ Не вдалося розібрати {path.name}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _unflatten_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """
        🔁 Перетворює ключі з крапками в ієрархічний словник.
        'netease.cookie' → {'netease': {'cookie': ...}}
        """
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split('.')
            d_ref = result
            for part in parts[:-1]:
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value
        return result

    def _deep_update(self, source: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> None:
        """🔁 Рекурсивно обʼєднує два словники."""
        for key, value in (overrides or {}).items():
            if isinstance(value, dict) and isinstance(source.get(key), dict):
                self._deep_update(source[key], value)
            else:
                source[key] = value
