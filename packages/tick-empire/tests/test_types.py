"""Tests for value-object construction and validation."""
from __future__ import annotations

import pytest

from tick_empire import BalanceConfig
from tick_empire.types import Dataset, Incident, Metrics, Staff, StaffEffects, UpgradeEffects


class TestMetrics:
    def test_clamped(self) -> None:
        assert Metrics(-5, 50, 120).clamped() == Metrics(0, 50, 100)

    def test_plus(self) -> None:
        assert Metrics(1, 2, 3).plus(Metrics(10, 20, 30)) == Metrics(11, 22, 33)


class TestDataset:
    def test_create_defaults(self) -> None:
        ds = Dataset.create("orders", "Orders", 60.0)
        assert ds.metrics == Metrics.uniform(100.0)
        assert ds.targets == Metrics.uniform(95.0)
        assert ds.installed == ()
        assert ds.sla == 100.0
        assert ds.status == "ok"

    def test_unknown_risk(self) -> None:
        with pytest.raises(ValueError, match="risk"):
            Dataset.create("orders", "Orders", 60.0, risk="extreme")

    def test_empty_id(self) -> None:
        with pytest.raises(ValueError):
            Dataset.create("", "Orders", 60.0)

    def test_frozen(self) -> None:
        ds = Dataset.create("orders", "Orders", 60.0)
        with pytest.raises(AttributeError):
            ds.base_rate = 1.0  # type: ignore[misc]


class TestEffects:
    def test_staff_effect_identity_defaults(self) -> None:
        effects = StaffEffects()
        assert effects.metric_bonus == Metrics(0, 0, 0)
        assert effects.resolution_speed == 1.0
        assert effects.dc_bonus == 1.0
        assert Staff(id="s", name="S").effects == effects

    def test_upgrade_effect_zero_defaults(self) -> None:
        effects = UpgradeEffects()
        assert effects.metrics == Metrics(0, 0, 0)
        assert effects.decay_reduction == 0.0
        assert effects.incident_reduction == 0.0


class TestIncident:
    def test_resolution_time_positive(self) -> None:
        with pytest.raises(ValueError):
            Incident(
                id="i",
                kind="data-delay",
                title="Data Delay",
                description="",
                dataset_id="ds",
                impact=Metrics(-5, -5, -5),
                resolution_time=0,
            )


class TestBalanceConfig:
    def test_defaults(self) -> None:
        cfg = BalanceConfig()
        assert cfg.base_decay_rate == 0.1
        assert cfg.offline_max_seconds == 86400
        assert cfg.offline_batch_size == 60
        assert cfg.offline_efficiency == 0.5

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"base_decay_rate": -0.1},
            {"offline_batch_size": 0},
            {"offline_efficiency": 1.5},
            {"incident_min_chance": 0.2, "incident_max_chance": 0.1},
            {"slow_tick_ms": 0},
        ],
    )
    def test_rejects_invalid(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            BalanceConfig(**kwargs)

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            BalanceConfig().base_decay_rate = 1.0  # type: ignore[misc]
