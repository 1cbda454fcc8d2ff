# tests/conftest.py
import copy
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import httpx
import pytest

# Додаємо src в sys.path, щоб працював імпорт "songbot.…"
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from songbot.infrastructure.netease.http_client import NeteaseHttpClient  # noqa: E402
from songbot.infrastructure.netease.region_selector import RegionSelector  # noqa: E402

API_BASE = "http://api.test"

BASE_CONFIG: Dict[str, Any] = {
    "netease.use_local_api": True,
    "netease.api_server": API_BASE,
    "netease.api_overseas": "http://os.api.test",
    "netease.api_cn": "http://cn.api.test",
    "netease.fallback_api": "http://fallback.test/music?msg={}&n=1",
    "netease.cookie": "MUSIC_U=main",
    "netease.audio_quality": "exhigh",
    "song_request.enabled": True,
    "song_request.max_list": 20,
    "song_request.send_voice": False,
    "song_request.send_card": True,
    "file_watch.timeout_sec": 120,
    "file_watch.poll_interval_sec": 0.5,
    "upload.retries": 3,
    "upload.backoff_sec": 0,
}


class FakeConfig:
    """Плаский замінник ConfigService: ключі з крапками, без файлів."""

    def __init__(self, values: Optional[Dict[str, Any]] = None) -> None:
        self.values: Dict[str, Any] = dict(values or {})
        self.updates: list = []

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def update_field(self, key: str, value: Any) -> None:
        self.updates.append((key, value))
        self.values[key] = value


class MemoryStore:
    """In-memory IKeyValueStore."""

    def __init__(self) -> None:
        self.data: Dict[str, Any] = {}

    async def get(self, key: str, default: Any = None) -> Any:
        return copy.deepcopy(self.data.get(key, default))

    async def set(self, key: str, value: Any) -> None:
        self.data[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)


@pytest.fixture
def make_config() -> Callable[..., FakeConfig]:
    def _make(**overrides: Any) -> FakeConfig:
        values = dict(BASE_CONFIG)
        values.update({key.replace("__", "."): value for key, value in overrides.items()})
        return FakeConfig(values)

    return _make


@pytest.fixture
def config(make_config) -> FakeConfig:
    return make_config()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def make_http(memory_store) -> Callable[..., NeteaseHttpClient]:
    """NeteaseHttpClient поверх httpx.MockTransport."""

    def _make(handler: Callable[[httpx.Request], httpx.Response], cfg: Optional[FakeConfig] = None) -> NeteaseHttpClient:
        cfg = cfg or FakeConfig(BASE_CONFIG)
        region = RegionSelector(cfg, memory_store)
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return NeteaseHttpClient(cfg, region, client=client)

    return _make
