from __future__ import annotations

import json
import sys

import pytest

import main
from conftest import TEST_CATALOG
from game import GameSession


class _FakeClock:
    def __init__(self) -> None:
        self.ticks = []

    def tick(self, fps: int) -> int:
        self.ticks.append(fps)
        return 1000


class _FakeTime:
    Clock = _FakeClock


class _FakePygame:
    time = _FakeTime
    quit_calls = 0

    @staticmethod
    def init() -> None:
        return None

    @classmethod
    def quit(cls) -> None:
        cls.quit_calls += 1


def test_realtime_driver_requires_pygame(monkeypatch):
    monkeypatch.setattr(main, "pygame", None)

    with pytest.raises(RuntimeError, match="--headless"):
        main.RealtimeDriver(GameSession(TEST_CATALOG))


def test_realtime_driver_rejects_unknown_speed(monkeypatch):
    monkeypatch.setattr(main, "pygame", _FakePygame)

    with pytest.raises(ValueError):
        main.RealtimeDriver(GameSession(TEST_CATALOG), "ludicrous")


def test_realtime_step_accumulates_wall_time(monkeypatch, capsys):
    monkeypatch.setattr(main, "pygame", _FakePygame)
    session = GameSession(TEST_CATALOG)
    driver = main.RealtimeDriver(session, "fast")

    assert driver.step(1500) == 0
    assert session.state.block_progress == pytest.approx(0.75)
    assert driver.step(4600) == 3
    assert session.state.elapsed_blocks == 3
    assert session.state.block_progress == pytest.approx(0.05)
    assert "day=1" in capsys.readouterr().out


def test_realtime_run_stops_after_days(monkeypatch, capsys):
    monkeypatch.setattr(main, "pygame", _FakePygame)
    _FakePygame.quit_calls = 0
    session = GameSession(TEST_CATALOG)
    driver = main.RealtimeDriver(session, "fast")

    driver.run(days=1)

    assert session.state.day == 2
    assert _FakePygame.quit_calls == 1
    capsys.readouterr()


class _BrokenDriver:
    def __init__(self, session, speed="medium"):
        raise RuntimeError("pygame is required for realtime mode. Relaunch with --headless.")


def test_main_handles_driver_startup_error(monkeypatch, capsys):
    monkeypatch.setattr(main, "RealtimeDriver", _BrokenDriver)
    monkeypatch.setattr(sys, "argv", ["vibe-sim"])

    with pytest.raises(SystemExit) as exc:
        main.main()

    assert exc.value.code == 1
    captured = capsys.readouterr()
    assert "Startup error:" in captured.err
    assert "--headless" in captured.err


def test_headless_run_prints_summary(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["vibe-sim", "--headless", "--blocks", "24", "--seed", "3"])

    main.main()

    out = capsys.readouterr().out
    assert out.startswith("headless_done ")
    assert "day=4" in out


def test_headless_json_output(capsys):
    session = main.run_headless(8, seed=1, data_dir=main.DATA_DIR, as_json=True)

    view = json.loads(capsys.readouterr().out)
    assert view["day"] == session.state.day == 2
    assert "modifiers" in view


def test_autopilot_fills_free_slots():
    session = GameSession(TEST_CATALOG, seed=4)

    main.autopilot_step(session)

    assert {job.assigned_slot for job in session.state.active_jobs} >= {1}
    assert session.state.elapsed_blocks >= 1
