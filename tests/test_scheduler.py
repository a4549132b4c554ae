"""Tests for the tick scheduler that gates engine ticks on host timestamps."""

import pytest

from gridsnake.config import DIFFICULTIES
from gridsnake.engine import GameState
from gridsnake.scheduler import TickScheduler


class CountingEngine:
    """Wraps a real engine and counts advance() calls."""

    def __init__(self, engine):
        self.engine = engine
        self.ticks = 0
        real_advance = engine.advance

        def advance():
            self.ticks += 1
            return real_advance()

        engine.advance = advance


@pytest.fixture
def counted(engine):
    return CountingEngine(engine)


@pytest.fixture
def scheduler(engine, counted):
    return TickScheduler(engine, difficulty="medium")


def test_defaults(scheduler):
    assert scheduler.difficulty == "medium"
    assert scheduler.interval_ms == DIFFICULTIES["medium"] == 100


def test_only_elapsed_interval_ticks(engine, counted, scheduler):
    assert scheduler.on_frame(0) is False  # idle
    engine.start()
    assert scheduler.on_frame(30) is False
    assert scheduler.on_frame(70) is False
    assert scheduler.on_frame(150) is True
    assert counted.ticks == 1


def test_idle_callbacks_do_not_accumulate(engine, counted, scheduler):
    for t in range(0, 1000, 16):
        scheduler.on_frame(t)
    assert counted.ticks == 0
    engine.start()
    assert scheduler.on_frame(1000) is False
    assert counted.ticks == 0


def test_no_catch_up(engine, counted, scheduler):
    engine.start()
    scheduler.on_frame(0)
    # a long stall still produces a single tick
    assert scheduler.on_frame(450) is True
    assert counted.ticks == 1
    assert scheduler.last_tick_time == 450
    assert scheduler.on_frame(500) is False
    assert scheduler.on_frame(550) is True
    assert counted.ticks == 2


def test_exact_interval_ticks(engine, counted, scheduler):
    engine.start()
    scheduler.on_frame(10)
    assert scheduler.on_frame(110) is True


def test_pause_stops_ticks_and_resume_rebaselines(engine, counted, scheduler):
    engine.start()
    scheduler.on_frame(0)
    scheduler.on_frame(100)
    assert counted.ticks == 1

    engine.toggle_pause()
    assert scheduler.on_frame(500) is False
    assert counted.ticks == 1

    engine.toggle_pause()
    # stale baseline (100) must not fire a tick straight away
    assert scheduler.on_frame(900) is False
    assert scheduler.on_frame(950) is False
    assert scheduler.on_frame(1000) is True
    assert counted.ticks == 2


def test_pause_resume_between_frames_rebaselines(engine, counted, scheduler):
    engine.start()
    scheduler.on_frame(0)
    engine.toggle_pause()
    engine.toggle_pause()
    assert scheduler.on_frame(400) is False
    assert counted.ticks == 0


def test_game_over_stops_ticks(engine, counted, scheduler):
    engine.start()
    t = 0
    scheduler.on_frame(t)
    while engine.state is GameState.PLAYING:
        t += 100
        scheduler.on_frame(t)
    ticks = counted.ticks
    assert scheduler.on_frame(t + 1000) is False
    assert counted.ticks == ticks


def test_difficulty_change_rejected_while_playing(engine, scheduler):
    engine.start()
    assert scheduler.set_difficulty("hard") is False
    assert scheduler.difficulty == "medium"


def test_difficulty_change_allowed_when_not_playing(engine, scheduler):
    assert scheduler.set_difficulty("hard") is True
    assert scheduler.interval_ms == 60
    engine.start()
    engine.toggle_pause()
    assert scheduler.set_difficulty("easy") is True
    assert scheduler.interval_ms == 150


def test_new_interval_applies_to_ticks(engine, counted, scheduler):
    scheduler.set_difficulty("hard")
    engine.start()
    scheduler.on_frame(0)
    assert scheduler.on_frame(59) is False
    assert scheduler.on_frame(60) is True


def test_unknown_difficulty(engine, scheduler):
    with pytest.raises(ValueError):
        scheduler.set_difficulty("nightmare")
    with pytest.raises(ValueError):
        TickScheduler(engine, difficulty="nightmare")


def test_non_positive_interval(engine):
    with pytest.raises(ValueError):
        TickScheduler(engine, difficulty="x", difficulties={"x": 0})
