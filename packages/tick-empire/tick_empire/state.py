"""GameState - the caller-owned state container and its merge steps."""
from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass, field
from typing import Any

from tick_empire import formulas
from tick_empire.balance import SAVE_VERSION
from tick_empire.types import (
    Dataset,
    Event,
    Incident,
    Metrics,
    OfflineResult,
    SnapshotError,
    Staff,
    TickResult,
    TickSnapshot,
)

logger = logging.getLogger(__name__)


@dataclass
class GameState:
    """Authoritative game state. Only merge steps and actions mutate it.

    Attributes:
        currency: Spendable DC balance.
        lifetime_currency: Total DC ever earned (prestige gate).
        prestige_level: Number of completed prestiges.
        datasets: Unlocked datasets.
        staff: Hired staff.
        unlocked_technologies: Technology ids unlocked so far.
        purchased_upgrades: Upgrade ids bought so far. Persisted for the
            content layer; nothing in this package writes it.
        incidents: Active incidents.
        event: Pending blocking event, if any. Never persisted.
        last_tick_time: Wall-clock seconds of the last merged tick.
        offline_applied: Whether offline progress was applied this session.
    """

    currency: float = 0.0
    lifetime_currency: float = 0.0
    prestige_level: int = 0
    datasets: tuple[Dataset, ...] = ()
    staff: tuple[Staff, ...] = ()
    unlocked_technologies: tuple[str, ...] = ()
    purchased_upgrades: tuple[str, ...] = ()
    incidents: tuple[Incident, ...] = ()
    event: Event | None = None
    last_tick_time: float = 0.0
    offline_applied: bool = field(default=False, compare=False)

    @classmethod
    def new(cls, starter: Dataset, now: float = 0.0) -> GameState:
        """Fresh game with a single starter dataset."""
        return cls(datasets=(starter,), last_tick_time=now)

    def to_snapshot(self) -> TickSnapshot:
        return TickSnapshot(
            datasets=self.datasets,
            staff=self.staff,
            incidents=self.incidents,
            event=self.event,
            currency=self.currency,
            lifetime_currency=self.lifetime_currency,
            prestige_level=self.prestige_level,
        )

    # --- Queries ---

    def find_dataset(self, dataset_id: str) -> Dataset | None:
        for dataset in self.datasets:
            if dataset.id == dataset_id:
                return dataset
        return None

    def global_sla(self) -> float:
        return formulas.global_sla(self.datasets)

    def total_rate(self) -> float:
        return formulas.total_rate(self.datasets, self.staff)

    def dataset_rate(self, dataset_id: str) -> float:
        """DC per second of one dataset; 0 for an unknown id."""
        dataset = self.find_dataset(dataset_id)
        if dataset is None:
            return 0.0
        return formulas.dataset_rate(dataset, formulas.staff_multiplier(self.staff))

    def can_afford(self, cost: float) -> bool:
        return self.currency >= cost

    def can_prestige(self) -> bool:
        return formulas.can_prestige(self.datasets, self.lifetime_currency)

    # --- Persistence ---

    def snapshot(self, now: float | None = None) -> dict[str, Any]:
        """JSON-compatible save blob. The pending event is not included."""
        return {
            "version": SAVE_VERSION,
            "timestamp": now if now is not None else self.last_tick_time,
            "state": {
                "currency": self.currency,
                "lifetime_currency": self.lifetime_currency,
                "prestige_level": self.prestige_level,
                "datasets": [dataclasses.asdict(d) for d in self.datasets],
                "staff": [dataclasses.asdict(s) for s in self.staff],
                "unlocked_technologies": list(self.unlocked_technologies),
                "purchased_upgrades": list(self.purchased_upgrades),
                "incidents": [dataclasses.asdict(i) for i in self.incidents],
                "last_tick_time": self.last_tick_time,
            },
        }

    def restore(self, data: dict[str, Any]) -> None:
        """Load a save blob. On any failure the current state is left as is."""
        version = data.get("version") if isinstance(data, dict) else None
        if version != SAVE_VERSION:
            raise SnapshotError(
                f"Unsupported save version {version!r}, expected {SAVE_VERSION}"
            )
        try:
            body = data["state"]
            loaded = GameState(
                currency=float(body["currency"]),
                lifetime_currency=float(body["lifetime_currency"]),
                prestige_level=int(body["prestige_level"]),
                datasets=tuple(Dataset.from_dict(d) for d in body["datasets"]),
                staff=tuple(Staff.from_dict(s) for s in body["staff"]),
                unlocked_technologies=tuple(body.get("unlocked_technologies", ())),
                purchased_upgrades=tuple(body.get("purchased_upgrades", ())),
                incidents=tuple(Incident.from_dict(i) for i in body["incidents"]),
                last_tick_time=float(body["last_tick_time"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise SnapshotError(f"Malformed save data: {exc}") from exc

        for f in dataclasses.fields(self):
            setattr(self, f.name, getattr(loaded, f.name))

    def export_save(self, now: float | None = None) -> str:
        return json.dumps(self.snapshot(now), indent=2)

    def import_save(self, text: str) -> bool:
        """Restore from JSON text. Returns False (state untouched) on failure."""
        try:
            self.restore(json.loads(text))
        except json.JSONDecodeError as exc:
            logger.warning("save import failed: not valid JSON (%s)", exc)
            return False
        except SnapshotError as exc:
            logger.warning("save import failed: %s", exc)
            return False
        logger.info("save imported: %d datasets", len(self.datasets))
        return True


# --- Merge steps ---


def apply_tick_result(state: GameState, result: TickResult, now: float) -> None:
    """Merge one tick's result into *state*.

    The prestige bonus is added to the post-tick metrics here, capped at 100,
    and the stored SLA and status are refreshed to match.
    """
    bonus = formulas.prestige_bonus(state.prestige_level)
    datasets = result.datasets
    if bonus and state.event is None:
        delta = Metrics.uniform(bonus)
        datasets = tuple(
            formulas.refresh(formulas.apply_metric_delta(d, delta)) for d in datasets
        )

    state.currency += result.dc_generated
    state.lifetime_currency += result.dc_generated
    state.datasets = datasets
    state.incidents = result.all_incidents
    if result.event is not None:
        state.event = result.event
    state.last_tick_time = now


def apply_offline_result(state: GameState, result: OfflineResult, now: float) -> bool:
    """Credit offline earnings once per session. Returns False if already applied."""
    if state.offline_applied:
        logger.info("offline progress already applied this session")
        return False
    state.currency += result.earned
    state.lifetime_currency += result.earned
    state.datasets = result.datasets
    state.incidents = ()
    state.offline_applied = True
    state.last_tick_time = now
    logger.info(
        "offline progress applied: +%d DC over %d ticks",
        result.earned, result.ticks_simulated,
    )
    return True
