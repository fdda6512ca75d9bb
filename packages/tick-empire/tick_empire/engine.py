"""TickEngine - one simulated second of the idle economy."""
from __future__ import annotations

import logging
import os
import random
import time
import uuid
from typing import Callable, Protocol, Sequence, TypeVar

from tick_empire import formulas
from tick_empire.balance import BalanceConfig
from tick_empire.incidents import (
    INCIDENT_CATALOG,
    IncidentTemplate,
    advance_incidents,
    apply_incident_impacts,
    halted_dataset_ids,
    spawn_incident,
)
from tick_empire.types import (
    Dataset,
    Event,
    Incident,
    Staff,
    TickResult,
    TickSnapshot,
    TickTimings,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
    """The subset of ``random.Random`` the engine draws from."""

    def random(self) -> float: ...

    def choice(self, seq: Sequence[T]) -> T: ...


def _default_incident_id() -> str:
    return f"incident-{uuid.uuid4().hex[:12]}"


def _ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


class TickEngine:
    """Stateless tick processor with injected randomness, ids and clock.

    The engine keeps no game state between calls: every ``process_tick``
    receives a full snapshot and returns a fresh result for the caller to
    merge. Pass ``seed`` (or a custom ``rng``) and ``id_factory`` for
    reproducible runs.
    """

    def __init__(
        self,
        seed: int | None = None,
        *,
        rng: RandomSource | None = None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], float] | None = None,
        balance: BalanceConfig | None = None,
        catalog: tuple[IncidentTemplate, ...] = INCIDENT_CATALOG,
        honor_dc_halt: bool = False,
    ) -> None:
        if rng is None:
            if seed is None:
                seed = int.from_bytes(os.urandom(8))
            rng = random.Random(seed)
        if not catalog:
            raise ValueError("incident catalog must be non-empty")
        self._seed = seed
        self._rng = rng
        self._id_factory = id_factory if id_factory is not None else _default_incident_id
        self._clock = clock if clock is not None else time.time
        self._balance = balance if balance is not None else BalanceConfig()
        self._catalog = catalog
        self._honor_dc_halt = honor_dc_halt

    @property
    def seed(self) -> int | None:
        return self._seed

    @property
    def balance(self) -> BalanceConfig:
        return self._balance

    @property
    def honor_dc_halt(self) -> bool:
        return self._honor_dc_halt

    def process_tick(self, snapshot: TickSnapshot) -> TickResult:
        if snapshot.event is not None:
            logger.debug("tick skipped: event %r is pending", snapshot.event.id)
            return TickResult(
                dc_generated=0.0,
                new_incidents=(),
                incidents=snapshot.incidents,
                datasets=snapshot.datasets,
                event=None,
            )

        cfg = self._balance
        staff = snapshot.staff
        tick_start = time.perf_counter()

        # Decay first, then staff bonus against the decayed values.
        start = time.perf_counter()
        datasets = tuple(self._decay_and_boost(d, staff) for d in snapshot.datasets)
        decay_ms = _ms(start)

        start = time.perf_counter()
        active, survivors = advance_incidents(
            snapshot.incidents, formulas.resolution_speed(staff)
        )
        datasets = apply_incident_impacts(datasets, active)
        incident_ms = _ms(start)

        datasets = tuple(formulas.refresh(d) for d in datasets)

        start = time.perf_counter()
        dc_generated = self._generate(datasets, staff, survivors)
        rate_ms = _ms(start)

        new_incidents = self._roll_incidents(datasets)
        event = self._roll_event()

        total_ms = _ms(tick_start)
        if total_ms > cfg.slow_tick_ms:
            logger.warning(
                "slow tick: %.2fms (decay %.2fms, incidents %.2fms, rate %.2fms)",
                total_ms, decay_ms, incident_ms, rate_ms,
            )

        return TickResult(
            dc_generated=dc_generated,
            new_incidents=new_incidents,
            incidents=survivors,
            datasets=datasets,
            event=event,
            timings=TickTimings(
                decay_ms=decay_ms,
                incident_ms=incident_ms,
                rate_ms=rate_ms,
                total_ms=total_ms,
            ),
        )

    def _decay_and_boost(self, dataset: Dataset, staff: tuple[Staff, ...]) -> Dataset:
        cfg = self._balance
        rate = formulas.effective_decay_rate(
            len(dataset.installed),
            base_rate=cfg.base_decay_rate,
            reduction_per_upgrade=cfg.decay_reduction_per_upgrade,
            floor=cfg.min_decay_rate,
        )
        decayed = formulas.apply_decay(dataset, rate)
        if staff:
            return formulas.apply_staff_bonuses(decayed, staff)
        return decayed

    def _generate(
        self,
        datasets: tuple[Dataset, ...],
        staff: tuple[Staff, ...],
        incidents: tuple[Incident, ...],
    ) -> float:
        if self._honor_dc_halt:
            halted = halted_dataset_ids(incidents)
            if halted:
                datasets = tuple(d for d in datasets if d.id not in halted)
        return formulas.total_rate(datasets, staff)

    def _roll_incidents(self, datasets: tuple[Dataset, ...]) -> tuple[Incident, ...]:
        cfg = self._balance
        now = self._clock()
        spawned: list[Incident] = []
        for dataset in datasets:
            chance = formulas.incident_chance(
                dataset,
                base_chance=cfg.incident_base_chance,
                min_chance=cfg.incident_min_chance,
                max_chance=cfg.incident_max_chance,
            )
            if self._rng.random() < chance:
                template = self._rng.choice(self._catalog)
                incident = spawn_incident(dataset, template, self._id_factory(), now)
                logger.debug("incident %s (%s) on %s", incident.id, incident.kind, dataset.id)
                spawned.append(incident)
        return tuple(spawned)

    def _roll_event(self) -> Event | None:
        # Event triggering belongs to the content layer; nothing fires here.
        return None
