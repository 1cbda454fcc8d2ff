"""
🧪 test_region_selector.py: вибір базового URL каталогу.
"""

import pytest

from songbot.config.setup.constants import CONST
from songbot.infrastructure.netease.region_selector import RegionSelector


@pytest.mark.asyncio
async def test_local_api_override_wins_and_skips_store(make_config, memory_store):
    config = make_config(netease__api_server="http://my.server/")
    selector = RegionSelector(config, memory_store)

    assert await selector.resolve_base_url() == "http://my.server"
    assert CONST.CACHE_KEYS.REGION not in memory_store.data


@pytest.mark.asyncio
async def test_first_run_defaults_to_overseas_and_persists(make_config, memory_store):
    config = make_config(netease__use_local_api=False)
    selector = RegionSelector(config, memory_store)

    assert await selector.resolve_base_url() == "http://os.api.test"
    assert memory_store.data[CONST.CACHE_KEYS.REGION] == {"os": True}


@pytest.mark.asyncio
async def test_stored_mainland_flag_selects_cn_server(make_config, memory_store):
    memory_store.data[CONST.CACHE_KEYS.REGION] = {"os": False}
    selector = RegionSelector(make_config(netease__use_local_api=False), memory_store)

    assert await selector.resolve_base_url() == "http://cn.api.test"
    assert memory_store.data[CONST.CACHE_KEYS.REGION] == {"os": False}


@pytest.mark.asyncio
async def test_use_local_api_without_server_falls_back_to_region(make_config, memory_store):
    selector = RegionSelector(make_config(netease__api_server=""), memory_store)

    assert await selector.resolve_base_url() == "http://os.api.test"
