"""
🧪 test_file_watcher.py: очікування стабільного розміру файлу.
"""

import pytest

from songbot.infrastructure.music.file_watcher import FileReadinessWatcher


class _ScriptedSleep:
    """Замість сну виконує наступний крок сценарію (пише у файл)."""

    def __init__(self, steps=()):
        self.steps = list(steps)
        self.calls = 0

    async def __call__(self, seconds):
        self.calls += 1
        if self.steps:
            self.steps.pop(0)()


def test_attempt_count_matches_timeout_over_interval():
    watcher = FileReadinessWatcher(poll_interval=0.5)

    assert watcher.max_attempts(120) == 240
    assert watcher.max_attempts(0.1) == 1


@pytest.mark.asyncio
async def test_missing_file_times_out_after_exact_attempts(tmp_path):
    sleep = _ScriptedSleep()
    watcher = FileReadinessWatcher(poll_interval=0.5, sleep=sleep)

    assert await watcher.await_stable(str(tmp_path / "never.mp3"), 120) is False
    assert sleep.calls == 240


@pytest.mark.asyncio
async def test_growing_file_is_ready_once_size_repeats(tmp_path):
    path = tmp_path / "song.mp3"
    steps = [
        lambda: path.write_bytes(b"a" * 10),
        lambda: path.write_bytes(b"a" * 20),
        lambda: None,
    ]
    sleep = _ScriptedSleep(steps)
    watcher = FileReadinessWatcher(poll_interval=0.5, sleep=sleep)

    assert await watcher.await_stable(str(path), 10) is True
    assert sleep.calls == 3


@pytest.mark.asyncio
async def test_zero_length_file_is_never_ready(tmp_path):
    path = tmp_path / "empty.mp3"
    path.write_bytes(b"")
    sleep = _ScriptedSleep()
    watcher = FileReadinessWatcher(poll_interval=0.5, sleep=sleep)

    assert await watcher.await_stable(str(path), 2) is False
    assert sleep.calls == 4


@pytest.mark.asyncio
async def test_default_timeout_is_used(tmp_path):
    sleep = _ScriptedSleep()
    watcher = FileReadinessWatcher(poll_interval=1.0, default_timeout=3, sleep=sleep)

    assert await watcher.await_stable(str(tmp_path / "x"), None) is False
    assert sleep.calls == 3
