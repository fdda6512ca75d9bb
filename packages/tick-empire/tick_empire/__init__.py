"""tick-empire - Tick engine for an idle data-operations economy."""
from tick_empire.actions import hire_staff, prestige, unlock_dataset
from tick_empire.balance import BalanceConfig
from tick_empire.engine import TickEngine
from tick_empire.incidents import INCIDENT_CATALOG, IncidentTemplate
from tick_empire.offline import calculate_offline_progress
from tick_empire.session import Session, TickStats
from tick_empire.state import GameState, apply_offline_result, apply_tick_result
from tick_empire.types import (
    Dataset,
    Event,
    Incident,
    Metrics,
    OfflineResult,
    SnapshotError,
    Staff,
    StaffEffects,
    TickResult,
    TickSnapshot,
    TickTimings,
    Upgrade,
    UpgradeEffects,
)

__all__ = [
    "BalanceConfig",
    "Dataset",
    "Event",
    "GameState",
    "INCIDENT_CATALOG",
    "Incident",
    "IncidentTemplate",
    "Metrics",
    "OfflineResult",
    "Session",
    "SnapshotError",
    "Staff",
    "StaffEffects",
    "TickEngine",
    "TickResult",
    "TickSnapshot",
    "TickStats",
    "TickTimings",
    "Upgrade",
    "UpgradeEffects",
    "apply_offline_result",
    "apply_tick_result",
    "calculate_offline_progress",
    "hire_staff",
    "prestige",
    "unlock_dataset",
]
