"""
🧪 test_credential_gate.py: перевірка cookie та збереження user_id.
"""

import httpx
import pytest

from songbot.domain.music.entities import CredentialKind
from songbot.infrastructure.netease.credential_gate import LOGIN_STATUS_PATH, CredentialGate


def _status(profile):
    return lambda request: httpx.Response(200, json={"data": {"profile": profile}})


def test_cookie_selection_falls_back_to_main_cookie(make_config, make_http):
    config = make_config(netease__cloud_cookie="MUSIC_U=cloud")
    gate = CredentialGate(config, make_http(_status({})))

    assert gate.cookie_for(CredentialKind.LIBRARY) == "MUSIC_U=cloud"
    assert gate.cookie_for(CredentialKind.PLAYBACK) == "MUSIC_U=main"


@pytest.mark.asyncio
async def test_playback_probe_persists_user_id(config, make_http):
    seen = {}

    def handler(request):
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"data": {"profile": {"userId": 777, "nickname": "n"}}})

    gate = CredentialGate(config, make_http(handler, config))

    assert await gate.probe(LOGIN_STATUS_PATH, CredentialKind.PLAYBACK) is True
    assert "timestamp" in seen["params"]
    assert config.updates == [("netease.user_id", 777)]


@pytest.mark.asyncio
async def test_library_probe_never_persists(config, make_http):
    gate = CredentialGate(config, make_http(_status({"userId": 1}), config))

    assert await gate.probe(LOGIN_STATUS_PATH, CredentialKind.LIBRARY) is True
    assert config.updates == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "handler",
    [
        _status(None),
        _status({}),
        lambda request: httpx.Response(500),
        lambda request: httpx.Response(200, text="not json"),
    ],
)
async def test_invalid_answers_degrade_to_false(config, make_http, handler):
    gate = CredentialGate(config, make_http(handler, config))

    assert await gate.probe(LOGIN_STATUS_PATH, CredentialKind.PLAYBACK) is False
    assert config.updates == []


@pytest.mark.asyncio
async def test_missing_cookie_skips_network(make_config, make_http):
    config = make_config(netease__cookie="")

    def handler(request):  # pragma: no cover - не має викликатися
        raise AssertionError("no request expected")

    gate = CredentialGate(config, make_http(handler, config))
    assert await gate.probe(LOGIN_STATUS_PATH, CredentialKind.PLAYBACK) is False
