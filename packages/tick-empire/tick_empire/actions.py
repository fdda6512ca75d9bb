"""Player actions applied between ticks. Each is all-or-nothing."""
from __future__ import annotations

import dataclasses
import logging

from tick_empire.state import GameState
from tick_empire.types import Dataset, Staff

logger = logging.getLogger(__name__)


def hire_staff(state: GameState, staff: Staff) -> bool:
    """Hire *staff*, paying its cost. Rejects duplicates and unaffordable hires."""
    if any(s.id == staff.id for s in state.staff):
        logger.warning("staff already hired: %s", staff.id)
        return False
    if not state.can_afford(staff.cost):
        logger.warning(
            "cannot afford staff %s: %.2f > %.2f", staff.id, staff.cost, state.currency
        )
        return False
    state.currency -= staff.cost
    state.staff = state.staff + (staff,)
    logger.info("hired staff: %s", staff.name)
    return True


def unlock_dataset(state: GameState, dataset: Dataset) -> bool:
    """Add *dataset* to the portfolio unless its id is already present."""
    if state.find_dataset(dataset.id) is not None:
        logger.warning("dataset already unlocked: %s", dataset.id)
        return False
    state.datasets = state.datasets + (dataset,)
    logger.info("unlocked dataset: %s", dataset.name)
    return True


def prestige(state: GameState, starter: Dataset, now: float) -> bool:
    """Reset to a fresh game one prestige level higher, keeping technologies."""
    if not state.can_prestige():
        logger.warning("prestige requirements not met")
        return False
    level = state.prestige_level + 1
    technologies = state.unlocked_technologies
    fresh = GameState.new(starter, now)
    fresh.prestige_level = level
    fresh.unlocked_technologies = technologies
    fresh.offline_applied = state.offline_applied
    for f in dataclasses.fields(state):
        setattr(state, f.name, getattr(fresh, f.name))
    logger.info("prestige: new level %d", level)
    return True
