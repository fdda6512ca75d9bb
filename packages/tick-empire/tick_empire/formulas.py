"""Pure game formulas: SLA, DC rates, decay, bonuses, incident odds, prestige.

Every function is stateless and returns new values; datasets are never
mutated in place.
"""
from __future__ import annotations

import dataclasses
from typing import Iterable, Sequence

from tick_empire.balance import (
    BASE_DECAY_RATE,
    DECAY_REDUCTION_PER_UPGRADE,
    INCIDENT_BASE_CHANCE,
    INCIDENT_MAX_CHANCE,
    INCIDENT_MIN_CHANCE,
    INCIDENT_VOLUME_DIVISOR,
    METRIC_MAX,
    METRIC_MIN,
    MIN_DECAY_RATE,
    PRESTIGE_BONUS_PER_LEVEL,
    PRESTIGE_MIN_DATASETS,
    PRESTIGE_MIN_GLOBAL_SLA,
    PRESTIGE_MIN_LIFETIME_DC,
    RISK_MULTIPLIERS,
    SLA_WEIGHT_ACCURACY,
    SLA_WEIGHT_COMPLETENESS,
    SLA_WEIGHT_TIMELINESS,
    WARNING_MULTIPLIER,
)
from tick_empire.types import Dataset, Metrics, Staff, Upgrade

# --- SLA and income ---


def sla(metrics: Metrics) -> float:
    """Weighted SLA: T x 0.4 + A x 0.4 + C x 0.2, clamped to [0, 100]."""
    value = (
        metrics.timeliness * SLA_WEIGHT_TIMELINESS
        + metrics.accuracy * SLA_WEIGHT_ACCURACY
        + metrics.completeness * SLA_WEIGHT_COMPLETENESS
    )
    return max(METRIC_MIN, min(METRIC_MAX, value))


def dataset_rate(dataset: Dataset, multiplier: float = 1.0) -> float:
    """DC per second for one dataset. SLA throttles the base rate linearly."""
    efficiency = sla(dataset.metrics) / 100
    return dataset.base_rate * efficiency * multiplier / 60


def staff_multiplier(staff: Iterable[Staff]) -> float:
    """Product of every staff member's DC bonus (1.0 for no staff)."""
    multiplier = 1.0
    for member in staff:
        multiplier *= member.effects.dc_bonus
    return multiplier


def resolution_speed(staff: Iterable[Staff]) -> float:
    """Product of every staff member's incident resolution factor."""
    speed = 1.0
    for member in staff:
        speed *= member.effects.resolution_speed
    return speed


def total_rate(datasets: Iterable[Dataset], staff: Iterable[Staff]) -> float:
    """Total DC per second across *datasets* with the combined staff bonus."""
    multiplier = staff_multiplier(staff)
    return sum(dataset_rate(d, multiplier) for d in datasets)


# --- Metric changes ---


def effective_decay_rate(
    installed_count: int,
    base_rate: float = BASE_DECAY_RATE,
    reduction_per_upgrade: float = DECAY_REDUCTION_PER_UPGRADE,
    floor: float = MIN_DECAY_RATE,
) -> float:
    """Decay rate after upgrade reductions, never below *floor*."""
    return max(floor, base_rate - reduction_per_upgrade * installed_count)


def apply_decay(dataset: Dataset, rate: float = BASE_DECAY_RATE) -> Dataset:
    """Subtract *rate* from every metric, floored at 0."""
    m = dataset.metrics
    decayed = Metrics(
        max(METRIC_MIN, m.timeliness - rate),
        max(METRIC_MIN, m.accuracy - rate),
        max(METRIC_MIN, m.completeness - rate),
    )
    return dataclasses.replace(dataset, metrics=decayed)


def _capped_sum(metrics: Metrics, delta: Metrics) -> Metrics:
    return Metrics(
        min(METRIC_MAX, metrics.timeliness + delta.timeliness),
        min(METRIC_MAX, metrics.accuracy + delta.accuracy),
        min(METRIC_MAX, metrics.completeness + delta.completeness),
    )


def apply_upgrade(dataset: Dataset, upgrade: Upgrade) -> Dataset:
    """Apply an upgrade's one-time metric boost and record it as installed.

    Does not check for duplicates; callers must guard against installing
    the same upgrade twice.
    """
    return dataclasses.replace(
        dataset,
        metrics=_capped_sum(dataset.metrics, upgrade.effects.metrics),
        installed=dataset.installed + (upgrade.id,),
    )


def apply_staff_bonuses(dataset: Dataset, staff: Sequence[Staff]) -> Dataset:
    """Add the summed per-metric bonus of all *staff*, capped at 100."""
    t = a = c = 0.0
    for member in staff:
        bonus = member.effects.metric_bonus
        t += bonus.timeliness
        a += bonus.accuracy
        c += bonus.completeness
    return dataclasses.replace(
        dataset, metrics=_capped_sum(dataset.metrics, Metrics(t, a, c))
    )


def apply_metric_delta(dataset: Dataset, delta: Metrics) -> Dataset:
    """Add *delta* to every metric and clamp the result to [0, 100]."""
    return dataclasses.replace(
        dataset, metrics=dataset.metrics.plus(delta).clamped(METRIC_MIN, METRIC_MAX)
    )


# --- Classification ---


def status(dataset: Dataset) -> str:
    """``ok`` at or above target SLA, ``warning`` within 80% of it, else ``failing``."""
    current = sla(dataset.metrics)
    target = sla(dataset.targets)
    if current >= target:
        return "ok"
    if current >= target * WARNING_MULTIPLIER:
        return "warning"
    return "failing"


def refresh(dataset: Dataset) -> Dataset:
    """Recompute the stored SLA and status from current metrics."""
    return dataclasses.replace(dataset, sla=sla(dataset.metrics), status=status(dataset))


def incident_chance(
    dataset: Dataset,
    base_chance: float = INCIDENT_BASE_CHANCE,
    min_chance: float = INCIDENT_MIN_CHANCE,
    max_chance: float = INCIDENT_MAX_CHANCE,
) -> float:
    """Per-tick incident probability, clamped to [min_chance, max_chance].

    Larger volume, lower SLA and higher risk all raise the odds.
    """
    volume_factor = 1 + dataset.volume / INCIDENT_VOLUME_DIVISOR
    sla_factor = (100 - sla(dataset.metrics)) / 100
    risk_multiplier = RISK_MULTIPLIERS[dataset.risk]
    chance = base_chance * volume_factor * sla_factor * risk_multiplier
    return max(min_chance, min(max_chance, chance))


# --- Portfolio ---


def global_sla(datasets: Sequence[Dataset]) -> float:
    """Mean SLA over *datasets*; 100 for an empty portfolio."""
    if not datasets:
        return 100.0
    return sum(sla(d.metrics) for d in datasets) / len(datasets)


def can_prestige(datasets: Sequence[Dataset], lifetime_currency: float) -> bool:
    """All three gates must hold: dataset count, global SLA, lifetime DC."""
    return (
        len(datasets) >= PRESTIGE_MIN_DATASETS
        and global_sla(datasets) >= PRESTIGE_MIN_GLOBAL_SLA
        and lifetime_currency >= PRESTIGE_MIN_LIFETIME_DC
    )


def prestige_bonus(level: int) -> float:
    """Flat metric bonus granted per prestige level."""
    return level * PRESTIGE_BONUS_PER_LEVEL
