# tests/hotboot/lifecycle/test_timer.py
import logging

import pytest

import hotboot.lifecycle.timer as lifecycle_timer
from hotboot.app.config import LifecycleConfig
from hotboot.lifecycle.timer import LifecycleTimer


@pytest.fixture()
def sleepCalls(monkeypatch) -> list[float]:
    calls: list[float] = []

    async def fake_sleep(delay: float):
        calls.append(delay)

    monkeypatch.setattr(lifecycle_timer.asyncio, "sleep", fake_sleep)
    return calls


def _tickCounts(caplog) -> list[int]:
    return [
        record.args[0] for record in caplog.records
        if record.name == "hotboot.lifecycle.timer" and record.msg.startswith("Exiting automatically")
    ]


@pytest.mark.asyncio
async def test_counts_down_from_ten_then_terminates(sleepCalls, caplog, tmp_path):
    caplog.set_level(logging.INFO)
    terminated: list[list[int]] = []
    timer = LifecycleTimer(
        LifecycleConfig(),
        terminate=lambda: terminated.append(_tickCounts(caplog)),
        workDir=tmp_path,
        platform="linux",
    )
    assert timer.state == "idle"

    await timer.run()

    assert _tickCounts(caplog) == list(range(10, 0, -1))
    assert sleepCalls == [1.0] * 10
    # terminate runs only after the last tick
    assert terminated == [list(range(10, 0, -1))]
    assert timer.state == "terminated"


@pytest.mark.asyncio
async def test_zero_start_terminates_immediately(sleepCalls, caplog, tmp_path):
    caplog.set_level(logging.INFO)
    terminated: list[bool] = []
    timer = LifecycleTimer(
        LifecycleConfig(countdownStart=0),
        terminate=lambda: terminated.append(True),
        workDir=tmp_path,
        platform="linux",
    )

    await timer.run()

    assert terminated == [True]
    assert sleepCalls == []
    assert _tickCounts(caplog) == []


@pytest.mark.asyncio
async def test_sentinel_written_on_windows_only(sleepCalls, tmp_path):
    winDir = tmp_path / "win"
    linuxDir = tmp_path / "linux"
    winDir.mkdir()
    linuxDir.mkdir()
    cfg = LifecycleConfig(countdownStart=1)

    await LifecycleTimer(cfg, terminate=lambda: None, workDir=winDir, platform="win32").run()
    await LifecycleTimer(cfg, terminate=lambda: None, workDir=linuxDir, platform="linux").run()

    assert (winDir / "run.log").read_text(encoding="utf-8") == "ok"
    assert not (linuxDir / "run.log").exists()


def test_sentinel_platforms_are_configurable(tmp_path):
    cfg = LifecycleConfig.model_validate({"sentinel": {"fileName": "alive.txt", "platforms": ["linux", "darwin"]}})
    path = LifecycleTimer(cfg, workDir=tmp_path, platform="darwin").writeSentinel()
    assert path == tmp_path / "alive.txt"
    assert path.read_text(encoding="utf-8") == "ok"


@pytest.mark.asyncio
async def test_second_run_is_rejected(sleepCalls, tmp_path):
    terminated: list[bool] = []
    timer = LifecycleTimer(
        LifecycleConfig(countdownStart=2),
        terminate=lambda: terminated.append(True),
        workDir=tmp_path,
        platform="linux",
    )
    await timer.run()

    with pytest.raises(RuntimeError):
        await timer.run()
    assert terminated == [True]
    assert len(sleepCalls) == 2


def test_quit_process_exits_cleanly():
    with pytest.raises(SystemExit) as excInfo:
        lifecycle_timer.quitProcess()
    assert excInfo.value.code == 0
