"""Session - drives a GameState through the engine one tick at a time."""
from __future__ import annotations

import logging
import time
from collections import deque
from typing import Callable

from tick_empire.balance import MIN_OFFLINE_SECONDS
from tick_empire.engine import TickEngine
from tick_empire.offline import calculate_offline_progress
from tick_empire.state import GameState, apply_offline_result, apply_tick_result
from tick_empire.types import OfflineResult, TickResult

logger = logging.getLogger(__name__)

_STATS_WINDOW = 10


class TickStats:
    """Rolling tick performance: last 10 durations, slow count, total."""

    def __init__(self, slow_tick_ms: float) -> None:
        self._slow_tick_ms = slow_tick_ms
        self._durations: deque[float] = deque(maxlen=_STATS_WINDOW)
        self._slow = 0
        self._total = 0

    @property
    def average_ms(self) -> float:
        if not self._durations:
            return 0.0
        return sum(self._durations) / len(self._durations)

    @property
    def max_ms(self) -> float:
        return max(self._durations, default=0.0)

    @property
    def slow_ticks(self) -> int:
        return self._slow

    @property
    def total_ticks(self) -> int:
        return self._total

    def record(self, duration_ms: float) -> None:
        self._durations.append(duration_ms)
        self._total += 1
        if duration_ms > self._slow_tick_ms:
            self._slow += 1


class Session:
    """Owns the merge loop between a GameState and a TickEngine.

    Scheduling is left to the caller: call ``step()`` once per real second
    and ``resume()`` once after loading a save.
    """

    def __init__(
        self,
        state: GameState,
        engine: TickEngine | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._state = state
        self._engine = engine if engine is not None else TickEngine()
        self._clock = clock if clock is not None else time.time
        self._stats = TickStats(self._engine.balance.slow_tick_ms)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def engine(self) -> TickEngine:
        return self._engine

    @property
    def stats(self) -> TickStats:
        return self._stats

    @property
    def paused(self) -> bool:
        return self._state.event is not None

    def step(self, now: float | None = None) -> TickResult:
        """Process and merge one tick. Paused ticks are not counted in stats."""
        paused = self.paused
        result = self._engine.process_tick(self._state.to_snapshot())
        apply_tick_result(self._state, result, now if now is not None else self._clock())
        if not paused:
            self._stats.record(result.timings.total_ms)
        return result

    def run(self, n: int) -> None:
        for _ in range(n):
            self.step()

    def resume(self, now: float | None = None) -> OfflineResult | None:
        """Apply offline progress for the time since the last tick, once."""
        now = now if now is not None else self._clock()
        if self._state.offline_applied:
            return None
        elapsed = int(now - self._state.last_tick_time)
        if elapsed < MIN_OFFLINE_SECONDS:
            return None
        logger.info("player was away for %d seconds", elapsed)
        result = calculate_offline_progress(
            self._engine, self._state.to_snapshot(), elapsed
        )
        apply_offline_result(self._state, result, now)
        return result
