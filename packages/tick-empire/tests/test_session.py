"""Tests for Session and TickStats."""
from __future__ import annotations

import pytest

from tick_empire import GameState, Session, TickEngine, TickStats
from tick_empire.types import Dataset, Event, Metrics


class NoIncidents:
    """Random source whose draws never beat the incident chance."""

    def random(self) -> float:
        return 0.99

    def choice(self, seq):
        return seq[0]


def new_session(now: float = 1000.0, prestige_level: int = 0) -> Session:
    state = GameState.new(Dataset.create("starter", "Starter", 60.0), now=now)
    state.prestige_level = prestige_level
    return Session(state, TickEngine(rng=NoIncidents()), clock=lambda: now + 1)


class TestStep:
    def test_step_earns_and_decays(self) -> None:
        session = new_session()
        session.step(now=1001.0)
        state = session.state
        assert state.currency == pytest.approx(0.999)
        assert state.lifetime_currency == pytest.approx(0.999)
        assert state.datasets[0].metrics == Metrics(99.9, 99.9, 99.9)
        assert state.last_tick_time == 1001.0

    def test_run_accumulates(self) -> None:
        session = new_session()
        session.run(10)
        assert session.stats.total_ticks == 10
        assert 9.0 < session.state.currency < 10.0
        assert session.state.last_tick_time == 1001.0

    def test_prestige_bonus_offsets_decay(self) -> None:
        session = new_session(prestige_level=1)
        session.run(5)
        assert session.state.datasets[0].metrics == Metrics(100, 100, 100)

    def test_paused_session_does_not_earn(self) -> None:
        session = new_session()
        session.state.event = Event(id="e", title="Audit")
        assert session.paused
        session.run(3)
        assert session.state.currency == 0
        assert session.state.datasets[0].metrics == Metrics.uniform(100.0)
        assert session.stats.total_ticks == 0


class TestResume:
    def test_applies_offline_progress_once(self) -> None:
        session = new_session(now=1000.0)
        result = session.resume(now=1060.0)
        assert result is not None
        assert result.ticks_simulated == 60
        assert session.state.currency == result.earned
        assert session.state.last_tick_time == 1060.0
        assert session.resume(now=5000.0) is None

    def test_short_absence_ignored(self) -> None:
        session = new_session(now=1000.0)
        assert session.resume(now=1009.0) is None
        assert session.state.offline_applied is False


class TestTickStats:
    def test_empty(self) -> None:
        stats = TickStats(slow_tick_ms=100.0)
        assert stats.average_ms == 0.0
        assert stats.max_ms == 0.0
        assert stats.total_ticks == 0

    def test_window_and_slow_count(self) -> None:
        stats = TickStats(slow_tick_ms=100.0)
        stats.record(500.0)
        for _ in range(10):
            stats.record(10.0)
        assert stats.total_ticks == 11
        assert stats.slow_ticks == 1
        # 500ms sample has rolled out of the 10-tick window
        assert stats.max_ms == 10.0
        assert stats.average_ms == pytest.approx(10.0)
