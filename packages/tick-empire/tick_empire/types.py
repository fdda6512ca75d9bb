"""Value objects exchanged between the caller and the tick engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

RISK_TIERS = ("low", "medium", "high")
STATUSES = ("ok", "warning", "failing")
RESOLVE_TOLERANCE = 1e-9


@dataclass(frozen=True)
class Metrics:
    """Timeliness, accuracy and completeness scores, nominally in [0, 100]."""

    timeliness: float
    accuracy: float
    completeness: float

    @classmethod
    def uniform(cls, value: float) -> Metrics:
        return cls(value, value, value)

    def plus(self, other: Metrics) -> Metrics:
        """Unclamped component-wise sum."""
        return Metrics(
            self.timeliness + other.timeliness,
            self.accuracy + other.accuracy,
            self.completeness + other.completeness,
        )

    def clamped(self, low: float = 0.0, high: float = 100.0) -> Metrics:
        return Metrics(
            min(high, max(low, self.timeliness)),
            min(high, max(low, self.accuracy)),
            min(high, max(low, self.completeness)),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Metrics:
        return cls(
            float(data["timeliness"]),
            float(data["accuracy"]),
            float(data["completeness"]),
        )


ZERO_METRICS = Metrics(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Dataset:
    """An income-producing data source whose quality metrics decay.

    Attributes:
        id: Unique identifier.
        name: Display name.
        base_rate: DC per minute at 100% SLA.
        volume: Data volume, raises incident probability.
        risk: One of ``RISK_TIERS``.
        targets: SLA target value per metric.
        metrics: Current metric values.
        installed: Identifiers of installed upgrades, in install order.
        sla: Derived SLA percentage, refreshed every tick.
        status: Derived status, one of ``STATUSES``.
        description: Free text.
    """

    id: str
    name: str
    base_rate: float
    volume: float
    risk: str
    targets: Metrics
    metrics: Metrics
    installed: tuple[str, ...] = ()
    sla: float = 100.0
    status: str = "ok"
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Dataset id must be non-empty")
        if self.risk not in RISK_TIERS:
            raise ValueError(f"risk must be one of {RISK_TIERS}, got {self.risk!r}")
        if self.status not in STATUSES:
            raise ValueError(f"status must be one of {STATUSES}, got {self.status!r}")

    @classmethod
    def create(
        cls,
        id: str,
        name: str,
        base_rate: float,
        *,
        volume: float = 100.0,
        risk: str = "low",
        targets: Metrics | None = None,
        description: str = "",
    ) -> Dataset:
        """Build a freshly unlocked dataset at perfect metrics."""
        return cls(
            id=id,
            name=name,
            base_rate=base_rate,
            volume=volume,
            risk=risk,
            targets=targets if targets is not None else Metrics.uniform(95.0),
            metrics=Metrics.uniform(100.0),
            description=description,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Dataset:
        return cls(
            id=data["id"],
            name=data["name"],
            base_rate=float(data["base_rate"]),
            volume=float(data["volume"]),
            risk=data["risk"],
            targets=Metrics.from_dict(data["targets"]),
            metrics=Metrics.from_dict(data["metrics"]),
            installed=tuple(data.get("installed", ())),
            sla=float(data.get("sla", 100.0)),
            status=data.get("status", "ok"),
            description=data.get("description", ""),
        )


@dataclass(frozen=True)
class StaffEffects:
    """Bonuses granted by one hired staff member.

    Every dimension is present; the defaults are the identity for how the
    value is combined (metric bonuses sum, multipliers multiply).
    """

    metric_bonus: Metrics = ZERO_METRICS
    resolution_speed: float = 1.0
    dc_bonus: float = 1.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StaffEffects:
        return cls(
            metric_bonus=Metrics.from_dict(data["metric_bonus"]),
            resolution_speed=float(data["resolution_speed"]),
            dc_bonus=float(data["dc_bonus"]),
        )


@dataclass(frozen=True)
class Staff:
    """A hired helper. Immutable once hired."""

    id: str
    name: str
    role: str = ""
    cost: float = 0.0
    salary_per_minute: float = 0.0
    effects: StaffEffects = field(default_factory=StaffEffects)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Staff id must be non-empty")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Staff:
        return cls(
            id=data["id"],
            name=data["name"],
            role=data.get("role", ""),
            cost=float(data.get("cost", 0.0)),
            salary_per_minute=float(data.get("salary_per_minute", 0.0)),
            effects=StaffEffects.from_dict(data["effects"]),
        )


@dataclass(frozen=True)
class UpgradeEffects:
    """One-time metric boost plus ongoing reductions of an upgrade.

    Only ``metrics`` is consulted by the tick; decay scales with the installed
    count instead. ``decay_reduction`` and ``incident_reduction`` are carried
    for content tooling and persistence.
    """

    metrics: Metrics = ZERO_METRICS
    decay_reduction: float = 0.0
    incident_reduction: float = 0.0


@dataclass(frozen=True)
class Upgrade:
    """A permanent per-dataset purchase (pipeline).

    ``cost`` is content-layer data; purchasing lives outside this package.
    """

    id: str
    name: str
    cost: float = 0.0
    effects: UpgradeEffects = field(default_factory=UpgradeEffects)
    category: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Upgrade id must be non-empty")


@dataclass(frozen=True)
class Incident:
    """An active, self-resolving penalty on exactly one dataset.

    Attributes:
        id: Unique runtime identifier.
        kind: Archetype tag (e.g. ``"data-delay"``).
        title: Display title.
        description: Display text.
        dataset_id: The affected dataset.
        impact: Per-metric delta applied every tick while active (<= 0).
        resolution_time: Ticks to resolve at 1.0x speed.
        progress: Resolution progress; resolved once >= 1.0.
        started_at: Wall-clock timestamp (seconds) when spawned.
        halts_dc: Whether the incident is meant to stop DC for its dataset.
    """

    id: str
    kind: str
    title: str
    description: str
    dataset_id: str
    impact: Metrics
    resolution_time: float
    progress: float = 0.0
    started_at: float = 0.0
    halts_dc: bool = False

    def __post_init__(self) -> None:
        if self.resolution_time <= 0:
            raise ValueError(f"resolution_time must be > 0, got {self.resolution_time}")

    @property
    def resolved(self) -> bool:
        # Summed per-tick steps of 1/n can land a hair under 1.0 after n ticks.
        return self.progress >= 1.0 - RESOLVE_TOLERANCE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Incident:
        return cls(
            id=data["id"],
            kind=data["kind"],
            title=data["title"],
            description=data["description"],
            dataset_id=data["dataset_id"],
            impact=Metrics.from_dict(data["impact"]),
            resolution_time=float(data["resolution_time"]),
            progress=float(data.get("progress", 0.0)),
            started_at=float(data.get("started_at", 0.0)),
            halts_dc=bool(data.get("halts_dc", False)),
        )


@dataclass(frozen=True)
class Event:
    """A blocking event awaiting a player decision. Opaque to the engine."""

    id: str
    title: str
    message: str = ""
    kind: str = "choice"
    choices: tuple[str, ...] = ()


@dataclass(frozen=True)
class TickSnapshot:
    """Immutable input bundle for one tick."""

    datasets: tuple[Dataset, ...] = ()
    staff: tuple[Staff, ...] = ()
    incidents: tuple[Incident, ...] = ()
    event: Event | None = None
    currency: float = 0.0
    lifetime_currency: float = 0.0
    prestige_level: int = 0


@dataclass(frozen=True)
class TickTimings:
    """Wall time per phase of a tick, in milliseconds."""

    decay_ms: float = 0.0
    incident_ms: float = 0.0
    rate_ms: float = 0.0
    total_ms: float = 0.0


@dataclass(frozen=True)
class TickResult:
    """Output bundle of one tick. The caller merges it into its own state."""

    dc_generated: float
    new_incidents: tuple[Incident, ...]
    incidents: tuple[Incident, ...]
    datasets: tuple[Dataset, ...]
    event: Event | None = None
    timings: TickTimings = field(default_factory=TickTimings)

    @property
    def all_incidents(self) -> tuple[Incident, ...]:
        """Survivors followed by newly spawned incidents."""
        return self.incidents + self.new_incidents


@dataclass(frozen=True)
class OfflineResult:
    """Outcome of an offline catch-up.

    ``earned`` is already floored. ``datasets`` reflect decay after the last
    simulated batch.
    """

    earned: int
    ticks_simulated: int
    datasets: tuple[Dataset, ...]


class SnapshotError(Exception):
    """Raised on restore failures (version mismatch, malformed save data)."""
