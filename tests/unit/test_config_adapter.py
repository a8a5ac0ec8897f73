"""Tests for converting job configurations to engine inputs."""

from __future__ import annotations

from sheetnest.application.config import (
    config_to_defaults,
    config_to_options,
    config_to_panels,
    load_job_from_dict,
)
from sheetnest.domain.value_objects import OptimizationMode


def _job(**overrides):
    data = {
        "schema_version": "1.0",
        "panels": [
            {"id": "side", "label": "Side", "material": "Oak", "length": 720, "width": 560,
             "quantity": 2, "grain": "length"},
            {"id": "shelf", "material": "Oak", "length": 764, "width": 540},
        ],
    }
    data.update(overrides)
    return load_job_from_dict(data)


class TestConfigToPanels:
    """Tests for panel conversion."""

    def test_fields_are_copied(self) -> None:
        panels = config_to_panels(_job())

        side = panels[0]
        assert side.id == "side"
        assert side.label == "Side"
        assert side.quantity == 2
        assert side.grain == "length"
        assert side.thickness == 18.0

    def test_label_defaults_to_id(self) -> None:
        assert config_to_panels(_job())[1].label == "shelf"


class TestConfigToOptions:
    """Tests for options conversion and overrides."""

    def test_defaults(self) -> None:
        options = config_to_options(_job())

        assert options.mode == OptimizationMode.PRODUCTION
        assert options.blade_kerf == 4.0
        assert options.stock_sheets is None
        assert not options.parallel

    def test_stock_sheet_material_defaults_to_key(self) -> None:
        job = _job(stock_sheets={"Oak": {"length": 2500, "width": 1250, "cost_per_sheet": 90}})
        options = config_to_options(job)

        spec = options.stock_sheets["Oak"]
        assert spec.material == "Oak"
        assert spec.length == 2500
        assert spec.cost_per_sheet == 90

    def test_overrides_win(self) -> None:
        job = _job(options={"mode": "PRODUCTION", "blade_kerf": 3, "parallel": False})
        options = config_to_options(
            job, mode=OptimizationMode.ESTIMATION, blade_kerf=5.0, parallel=True
        )

        assert options.mode == OptimizationMode.ESTIMATION
        assert options.blade_kerf == 5.0
        assert options.parallel

    def test_time_budget_is_passed(self) -> None:
        options = config_to_options(_job(options={"time_budget": 2.5}))
        assert options.time_budget == 2.5


class TestConfigToDefaults:
    """Tests for defaults conversion."""

    def test_none_gives_system_defaults(self) -> None:
        defaults = config_to_defaults(None)
        assert (defaults.sheet_length, defaults.sheet_width) == (2440.0, 1220.0)

    def test_overrides(self) -> None:
        job = _job(defaults={"sheet_length": 2800, "sheet_width": 2070, "sheet_cost": 55})
        options = config_to_options(job)

        assert options.defaults.sheet_length == 2800
        assert options.defaults.sheet_cost == 55
        assert options.defaults.min_remnant_size == 200.0
