"""Balance constants and the engine configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass

# --- Tick timing ---

TICK_INTERVAL_MS = 1000
SLOW_TICK_MS = 100.0

# --- Metric decay ---

BASE_DECAY_RATE = 0.1
MIN_DECAY_RATE = 0.01
DECAY_REDUCTION_PER_UPGRADE = 0.01  # flat, regardless of the upgrade's own value

# --- SLA ---

SLA_WEIGHT_TIMELINESS = 0.4
SLA_WEIGHT_ACCURACY = 0.4
SLA_WEIGHT_COMPLETENESS = 0.2
METRIC_MIN = 0.0
METRIC_MAX = 100.0

# --- Status ---

WARNING_MULTIPLIER = 0.8

# --- Incidents ---

INCIDENT_BASE_CHANCE = 0.003
INCIDENT_MIN_CHANCE = 0.001
INCIDENT_MAX_CHANCE = 0.1
INCIDENT_VOLUME_DIVISOR = 1000
RISK_MULTIPLIERS: dict[str, float] = {
    "low": 1.0,
    "medium": 1.5,
    "high": 2.0,
}

RESOLUTION_TIME_MINOR = 30
RESOLUTION_TIME_MODERATE = 60
RESOLUTION_TIME_MAJOR = 120

# (T, A, C)
IMPACT_MINOR = (-5.0, -5.0, -5.0)
IMPACT_MODERATE = (-15.0, -15.0, -10.0)
IMPACT_MAJOR = (-30.0, -30.0, -20.0)

# --- Prestige ---

PRESTIGE_MIN_DATASETS = 10
PRESTIGE_MIN_GLOBAL_SLA = 95.0
PRESTIGE_MIN_LIFETIME_DC = 2_000_000
PRESTIGE_BONUS_PER_LEVEL = 5

# --- Offline progress ---

OFFLINE_MAX_SECONDS = 86400
OFFLINE_EFFICIENCY = 0.5
OFFLINE_BATCH_SIZE = 60
MIN_OFFLINE_SECONDS = 10

# --- Save format ---

SAVE_VERSION = 1


@dataclass(frozen=True)
class BalanceConfig:
    """Immutable tuning values consulted by the tick engine.

    Attributes:
        base_decay_rate: Metric points lost per tick before upgrades.
        min_decay_rate: Floor for the effective decay rate.
        decay_reduction_per_upgrade: Decay removed per installed upgrade.
        incident_base_chance: Per-tick incident probability before factors.
        incident_min_chance: Lower clamp for the incident probability.
        incident_max_chance: Upper clamp for the incident probability.
        offline_max_seconds: Hard cap on simulated offline time.
        offline_efficiency: Fraction of DC earned while offline.
        offline_batch_size: Simulated seconds covered by one offline tick.
        slow_tick_ms: Duration above which a tick is reported as slow.
    """

    base_decay_rate: float = BASE_DECAY_RATE
    min_decay_rate: float = MIN_DECAY_RATE
    decay_reduction_per_upgrade: float = DECAY_REDUCTION_PER_UPGRADE
    incident_base_chance: float = INCIDENT_BASE_CHANCE
    incident_min_chance: float = INCIDENT_MIN_CHANCE
    incident_max_chance: float = INCIDENT_MAX_CHANCE
    offline_max_seconds: int = OFFLINE_MAX_SECONDS
    offline_efficiency: float = OFFLINE_EFFICIENCY
    offline_batch_size: int = OFFLINE_BATCH_SIZE
    slow_tick_ms: float = SLOW_TICK_MS

    def __post_init__(self) -> None:
        if self.base_decay_rate < 0:
            raise ValueError(f"base_decay_rate must be >= 0, got {self.base_decay_rate}")
        if self.min_decay_rate < 0:
            raise ValueError(f"min_decay_rate must be >= 0, got {self.min_decay_rate}")
        if self.decay_reduction_per_upgrade < 0:
            raise ValueError(
                f"decay_reduction_per_upgrade must be >= 0, got {self.decay_reduction_per_upgrade}"
            )
        if not 0 <= self.incident_min_chance <= self.incident_max_chance <= 1:
            raise ValueError(
                "incident chance range must satisfy 0 <= min <= max <= 1, "
                f"got ({self.incident_min_chance}, {self.incident_max_chance})"
            )
        if self.offline_max_seconds < 0:
            raise ValueError(f"offline_max_seconds must be >= 0, got {self.offline_max_seconds}")
        if not 0 <= self.offline_efficiency <= 1:
            raise ValueError(f"offline_efficiency must be in [0, 1], got {self.offline_efficiency}")
        if self.offline_batch_size <= 0:
            raise ValueError(f"offline_batch_size must be > 0, got {self.offline_batch_size}")
        if self.slow_tick_ms <= 0:
            raise ValueError(f"slow_tick_ms must be > 0, got {self.slow_tick_ms}")
