"""
🧪 test_config_service.py: злиття джерел конфігурації та runtime.yaml.
"""

import json

import pytest
import yaml

from songbot.config.config_service import ENV_KEYS, ConfigService


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    for env_name in ENV_KEYS:
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.setenv("SONGBOT_CONFIG_DIR", str(tmp_path))
    ConfigService.reset()
    yield tmp_path
    ConfigService.reset()


def test_json_overrides_yaml_and_dotted_get(config_dir):
    (config_dir / "config.yaml").write_text(
        "netease:\n  audio_quality: exhigh\n  api_cn: http://cn\nsong_request:\n  max_list: 20\n",
        encoding="utf-8",
    )
    (config_dir / "config.json").write_text(json.dumps({"netease": {"audio_quality": "lossless"}}), encoding="utf-8")

    config = ConfigService()

    assert config.get("netease.audio_quality") == "lossless"
    assert config.get("netease.api_cn") == "http://cn"
    assert config.get("song_request.max_list") == 20
    assert config.get("missing.key", "fallback") == "fallback"


def test_env_overrides_files(config_dir, monkeypatch):
    (config_dir / "config.yaml").write_text("netease:\n  cookie: from-yaml\n", encoding="utf-8")
    monkeypatch.setenv("NETEASE_COOKIE", "MUSIC_U=env")

    assert ConfigService().get("netease.cookie") == "MUSIC_U=env"


def test_update_field_persists_to_runtime_yaml(config_dir):
    config = ConfigService()

    config.update_field("netease.user_id", 12345)

    assert config.get("netease.user_id") == 12345
    runtime = yaml.safe_load((config_dir / "runtime.yaml").read_text(encoding="utf-8"))
    assert runtime == {"netease": {"user_id": 12345}}

    ConfigService.reset()
    assert ConfigService().get("netease.user_id") == 12345


def test_broken_yaml_is_ignored(config_dir):
    (config_dir / "config.yaml").write_text("netease: [unclosed", encoding="utf-8")

    assert ConfigService().get("netease.cookie") is None
