"""Incident archetypes and the per-tick incident lifecycle."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Iterable, Sequence

from tick_empire.balance import (
    IMPACT_MAJOR,
    IMPACT_MINOR,
    IMPACT_MODERATE,
    METRIC_MIN,
    RESOLUTION_TIME_MAJOR,
    RESOLUTION_TIME_MINOR,
    RESOLUTION_TIME_MODERATE,
)
from tick_empire.types import Dataset, Incident, Metrics


@dataclass(frozen=True)
class IncidentTemplate:
    """Preset for spawning incidents. ``description`` may use ``{name}``."""

    kind: str
    title: str
    description: str
    impact: Metrics
    resolution_time: int
    halts_dc: bool = False


INCIDENT_CATALOG: tuple[IncidentTemplate, ...] = (
    IncidentTemplate(
        kind="data-delay",
        title="Data Delay",
        description="{name} is experiencing upstream delays",
        impact=Metrics(*IMPACT_MINOR),
        resolution_time=RESOLUTION_TIME_MINOR,
    ),
    IncidentTemplate(
        kind="corrupted-batch",
        title="Corrupted Batch",
        description="Data quality issue detected in {name}",
        impact=Metrics(*IMPACT_MODERATE),
        resolution_time=RESOLUTION_TIME_MODERATE,
    ),
    IncidentTemplate(
        kind="pipeline-failure",
        title="Pipeline Failure",
        description="Critical pipeline failure in {name}",
        impact=Metrics(*IMPACT_MAJOR),
        resolution_time=RESOLUTION_TIME_MAJOR,
        halts_dc=True,
    ),
)


def spawn_incident(
    dataset: Dataset, template: IncidentTemplate, incident_id: str, now: float
) -> Incident:
    return Incident(
        id=incident_id,
        kind=template.kind,
        title=template.title,
        description=template.description.format(name=dataset.name),
        dataset_id=dataset.id,
        impact=template.impact,
        resolution_time=template.resolution_time,
        progress=0.0,
        started_at=now,
        halts_dc=template.halts_dc,
    )


def advance_incidents(
    incidents: Iterable[Incident], speed: float = 1.0
) -> tuple[tuple[Incident, ...], tuple[Incident, ...]]:
    """Advance resolution progress by one tick.

    Returns ``(active, survivors)``: *active* holds every advanced incident,
    including those that resolved this tick (their impact still applies),
    and *survivors* only those still below 1.0 progress.
    """
    active = tuple(
        dataclasses.replace(inc, progress=inc.progress + speed / inc.resolution_time)
        for inc in incidents
    )
    survivors = tuple(inc for inc in active if not inc.resolved)
    return active, survivors


def apply_incident_impacts(
    datasets: Sequence[Dataset], incidents: Iterable[Incident]
) -> tuple[Dataset, ...]:
    """Apply the cumulative impact of *incidents* to their datasets, floored at 0."""
    by_dataset: dict[str, list[Incident]] = {}
    for inc in incidents:
        by_dataset.setdefault(inc.dataset_id, []).append(inc)

    updated: list[Dataset] = []
    for dataset in datasets:
        affecting = by_dataset.get(dataset.id)
        if not affecting:
            updated.append(dataset)
            continue
        m = dataset.metrics
        t, a, c = m.timeliness, m.accuracy, m.completeness
        for inc in affecting:
            t = max(METRIC_MIN, t + inc.impact.timeliness)
            a = max(METRIC_MIN, a + inc.impact.accuracy)
            c = max(METRIC_MIN, c + inc.impact.completeness)
        updated.append(dataclasses.replace(dataset, metrics=Metrics(t, a, c)))
    return tuple(updated)


def halted_dataset_ids(incidents: Iterable[Incident]) -> frozenset[str]:
    """Datasets with at least one DC-halting incident."""
    return frozenset(inc.dataset_id for inc in incidents if inc.halts_dc)
