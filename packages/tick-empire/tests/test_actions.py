"""Tests for player actions."""
from __future__ import annotations

from tick_empire import GameState, hire_staff, prestige, unlock_dataset
from tick_empire.types import Dataset, Staff


def starter() -> Dataset:
    return Dataset.create("starter", "Starter", 60.0)


def analyst(cost: float = 100.0) -> Staff:
    return Staff(id="analyst", name="Analyst", role="data-steward", cost=cost)


class TestHireStaff:
    def test_hire_deducts_cost(self) -> None:
        state = GameState.new(starter())
        state.currency = 250.0
        assert hire_staff(state, analyst()) is True
        assert state.currency == 150.0
        assert [s.id for s in state.staff] == ["analyst"]

    def test_duplicate_rejected(self) -> None:
        state = GameState.new(starter())
        state.currency = 1000.0
        hire_staff(state, analyst())
        assert hire_staff(state, analyst()) is False
        assert state.currency == 900.0
        assert len(state.staff) == 1

    def test_unaffordable_rejected(self) -> None:
        state = GameState.new(starter())
        state.currency = 99.0
        assert hire_staff(state, analyst()) is False
        assert state.currency == 99.0
        assert state.staff == ()


class TestUnlockDataset:
    def test_unlock_appends(self) -> None:
        state = GameState.new(starter())
        assert unlock_dataset(state, Dataset.create("crm", "CRM Export", 180.0)) is True
        assert [d.id for d in state.datasets] == ["starter", "crm"]

    def test_duplicate_rejected(self) -> None:
        state = GameState.new(starter())
        assert unlock_dataset(state, starter()) is False
        assert len(state.datasets) == 1


class TestPrestige:
    def ready_state(self) -> GameState:
        state = GameState.new(starter(), now=10.0)
        state.datasets = tuple(Dataset.create(f"ds{i}", f"DS {i}", 60.0) for i in range(10))
        state.lifetime_currency = 2_500_000
        state.currency = 40_000
        state.staff = (analyst(),)
        state.unlocked_technologies = ("cloud", "streaming")
        state.prestige_level = 1
        return state

    def test_prestige_resets_and_levels_up(self) -> None:
        state = self.ready_state()
        assert prestige(state, starter(), now=99.0) is True
        assert state.prestige_level == 2
        assert state.unlocked_technologies == ("cloud", "streaming")
        assert state.currency == 0
        assert state.lifetime_currency == 0
        assert state.staff == ()
        assert [d.id for d in state.datasets] == ["starter"]
        assert state.last_tick_time == 99.0

    def test_requirements_not_met(self) -> None:
        state = self.ready_state()
        state.lifetime_currency = 1_000
        assert prestige(state, starter(), now=99.0) is False
        assert state.prestige_level == 1
        assert len(state.datasets) == 10
        assert state.currency == 40_000
