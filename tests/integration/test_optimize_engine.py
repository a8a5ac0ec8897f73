"""Integration tests for the optimize() pipeline.

These tests run the full engine end-to-end and check:
- The reference cutting scenarios
- Result-wide invariants (units, areas, utilization, grain)
- ESTIMATION vs PRODUCTION behaviour
- Parallel packing and idempotence
- Hard failures for empty or malformed input
"""

from __future__ import annotations

import itertools
import logging

import pytest

from sheetnest.application import (
    EmptyPanelListError,
    EngineDefaults,
    InvalidInputError,
    OptimizationError,
    OptimizationOptions,
    OptimizeCutListCommand,
    optimize,
)
from sheetnest.domain.value_objects import (
    GrainDirection,
    OptimizationMode,
    StockSheetSpec,
    StockSource,
    UnplaceableReason,
)


def _assert_result_invariants(result, expanded_quantity: int, kerf: float) -> None:
    placed = sum(s.piece_count for s in result.sheets)
    assert placed + len(result.unplaceable) == expanded_quantity
    assert 0 <= result.average_utilization <= 100

    for sheet in result.sheets:
        free = sum(r.area for r in sheet.free_regions)
        assert sheet.used_area + free + sheet.kerf_loss_area == pytest.approx(sheet.area)
        for p in sheet.placements:
            assert 0 <= p.x and p.right_edge <= sheet.length + 1e-6
            assert 0 <= p.y and p.top_edge <= sheet.width + 1e-6
            if p.grain != GrainDirection.NONE:
                assert not p.rotated
        for a, b in itertools.combinations(sheet.placements, 2):
            assert not (
                a.x < b.right_edge + kerf - 1e-6
                and b.x < a.right_edge + kerf - 1e-6
                and a.y < b.top_edge + kerf - 1e-6
                and b.y < a.top_edge + kerf - 1e-6
            )


# =============================================================================
# Reference scenarios
# =============================================================================


class TestScenarios:
    """Reference cutting scenarios."""

    def test_single_panel_on_default_stock(self, panel_factory) -> None:
        result = optimize([panel_factory("p1", 600, 400)], OptimizationOptions(blade_kerf=4))

        assert result.total_sheets == 1
        placement = result.sheets[0].placements[0]
        assert (placement.x, placement.y) == (0.0, 0.0)
        assert result.average_utilization == pytest.approx(8.06, abs=0.01)
        assert result.material_summaries[0].stock_source == StockSource.DEFAULT

    def test_panel_larger_than_stock(self, panel_factory) -> None:
        result = optimize([panel_factory("big", 3000, 400)])

        assert result.total_sheets == 0
        assert result.sheets == ()
        assert result.total_panels == 0
        assert len(result.unplaceable) == 1
        assert result.unplaceable[0].reason == UnplaceableReason.EXCEEDS_SHEET_SIZE
        assert result.average_utilization == 0.0

    def test_grain_locked_panel_is_never_rotated(self, panel_factory) -> None:
        stock = {"MDF": StockSheetSpec(material="MDF", length=1200, width=600)}
        panels = [
            panel_factory("wide", 800, 600, material="MDF"),
            panel_factory("locked", 600, 400, material="MDF", grain="length"),
        ]
        result = optimize(panels, OptimizationOptions(blade_kerf=0, stock_sheets=stock))

        assert result.total_sheets == 2
        assert result.is_complete
        for sheet in result.sheets:
            for placement in sheet.placements:
                assert not placement.rotated

    def test_ten_identical_panels(self, panel_factory) -> None:
        result = optimize(
            [panel_factory("door", 500, 300, quantity=10)],
            OptimizationOptions(blade_kerf=3),
        )

        assert result.total_sheets == 1
        assert sum(s.piece_count for s in result.sheets) == 10
        assert result.total_panels == 10
        _assert_result_invariants(result, 10, 3)

    def test_estimation_versus_production(self, panel_factory) -> None:
        panels = [panel_factory("door", 500, 300, quantity=10)]
        estimate = optimize(panels, OptimizationOptions(mode=OptimizationMode.ESTIMATION))
        production = optimize(panels, OptimizationOptions(mode=OptimizationMode.PRODUCTION))

        assert estimate.sheets == ()
        assert estimate.waste_regions == ()
        assert estimate.cut_operations == ()
        assert estimate.total_sheets == 1
        assert production.waste_regions
        assert production.cut_operations
        assert estimate.total_requested_area == production.total_requested_area


# =============================================================================
# Result-wide properties
# =============================================================================


class TestResultProperties:
    """Invariants over a mixed cut list."""

    @pytest.mark.parametrize("kerf", [0.0, 3.2, 4.0])
    def test_invariants(self, kitchen_panels, kerf: float) -> None:
        result = optimize(kitchen_panels, OptimizationOptions(blade_kerf=kerf))
        _assert_result_invariants(result, 9, kerf)

    def test_idempotent(self, kitchen_panels) -> None:
        assert optimize(kitchen_panels) == optimize(kitchen_panels)

    def test_parallel_matches_sequential(self, kitchen_panels) -> None:
        sequential = optimize(kitchen_panels, OptimizationOptions(parallel=False))
        parallel = optimize(kitchen_panels, OptimizationOptions(parallel=True))

        assert parallel.sheets == sequential.sheets
        assert parallel.sheets_by_material == sequential.sheets_by_material
        assert list(parallel.sheets_by_material) == list(sequential.sheets_by_material)

    def test_sheets_numbered_in_group_order(self, kitchen_panels) -> None:
        result = optimize(kitchen_panels)

        assert [s.sheet_number for s in result.sheets] == list(
            range(1, len(result.sheets) + 1)
        )
        assert [s.sheet_id for s in result.sheets] == [
            f"sheet-{n}" for n in range(1, len(result.sheets) + 1)
        ]
        assert list(result.sheets_by_material) == [
            "18mm MDF",
            "6mm Hardboard",
            "Oak Veneer",
        ]

    def test_sheets_by_material_is_read_only(self, kitchen_panels) -> None:
        result = optimize(kitchen_panels)

        with pytest.raises(TypeError):
            result.sheets_by_material["18mm MDF"] = 99  # type: ignore[index]

    def test_totals_are_consistent(self, kitchen_panels) -> None:
        result = optimize(kitchen_panels)

        sheet_area = sum(s.area for s in result.sheets)
        used_area = sum(s.used_area for s in result.sheets)
        assert result.total_used_area == pytest.approx(used_area)
        assert result.total_wasted_area == pytest.approx(sheet_area - used_area)
        assert result.average_utilization == pytest.approx(used_area / sheet_area * 100)
        assert sum(result.sheets_by_material.values()) == result.total_sheets

    def test_cut_totals(self, kitchen_panels) -> None:
        result = optimize(kitchen_panels)

        assert len(result.cut_operations) == 2 * result.total_panels
        assert result.total_cut_length == pytest.approx(
            sum(c.length for c in result.cut_operations)
        )
        assert result.estimated_cut_minutes >= 1


# =============================================================================
# Partial results and options
# =============================================================================


class TestPartialResults:
    """Per-panel problems degrade to partial results."""

    def test_rejected_and_unplaceable_are_reported(self, panel_factory) -> None:
        panels = [
            panel_factory("ok"),
            panel_factory("zero", length=0),
            panel_factory("huge", 3000, 400, quantity=2),
        ]
        result = optimize(panels)

        assert not result.is_complete
        assert [r.panel_id for r in result.rejected_panels] == ["zero"]
        assert [u.unit_id for u in result.unplaceable] == ["huge-1", "huge-2"]
        assert result.total_panels == 1

    def test_placed_unit_ids_are_unique(self, panel_factory) -> None:
        panels = [panel_factory("a", quantity=2), panel_factory("a-1"), panel_factory("a-1")]
        result = optimize(panels)

        unit_ids = [p.unit_id for s in result.sheets for p in s.placements]
        assert len(unit_ids) == 4
        assert len(set(unit_ids)) == 4

    def test_requested_area_excludes_rejected(self, panel_factory) -> None:
        result = optimize([panel_factory("ok", 1000, 500), panel_factory("bad", width=-1)])
        assert result.total_requested_area == 500_000

    def test_time_budget_aborts_remaining(self, panel_factory, monkeypatch) -> None:
        import sheetnest.infrastructure.bin_packing as bin_packing

        clock = iter(itertools.count(start=0.0, step=10.0))
        monkeypatch.setattr(bin_packing.time, "monotonic", lambda: next(clock))
        result = optimize(
            [panel_factory("p", 500, 300, quantity=3)],
            OptimizationOptions(time_budget=1.0),
        )

        assert any(
            u.reason == UnplaceableReason.COMPUTATION_ABORTED for u in result.unplaceable
        )
        placed = sum(s.piece_count for s in result.sheets)
        assert placed + len(result.unplaceable) == 3


class TestStockAndCost:
    """Stock resolution and cost through the full pipeline."""

    def test_explicit_stock_and_cost(self, panel_factory) -> None:
        stock = {"18mm MDF": StockSheetSpec(material="18mm MDF", cost_per_sheet=42.5)}
        result = optimize(
            [panel_factory("a", 2000, 1000, quantity=2)],
            OptimizationOptions(stock_sheets=stock),
        )

        assert result.total_sheets == 2
        assert result.estimated_material_cost == 85.0
        assert result.material_summaries[0].stock_source == StockSource.EXPLICIT

    def test_default_cost_from_engine_defaults(self, panel_factory) -> None:
        options = OptimizationOptions(defaults=EngineDefaults(sheet_cost=30.0))
        result = optimize([panel_factory("a")], options)

        assert result.estimated_material_cost == 30.0

    def test_estimation_uses_fill_ratio(self, panel_factory) -> None:
        # 2.5 m2 of parts over 0.7 of a 2.9768 m2 sheet
        panels = [panel_factory("a", 1000, 500, quantity=5)]
        result = optimize(panels, OptimizationOptions(mode="ESTIMATION"))

        assert result.mode == OptimizationMode.ESTIMATION
        assert result.total_sheets == 2
        assert result.target_utilization == 70.0
        assert result.total_panels == 5


class TestTargetWarning:
    """Production runs below target log a warning."""

    def test_low_yield_warns(self, panel_factory, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="sheetnest"):
            result = optimize([panel_factory()])

        assert not result.meets_target
        assert "below the 85% production target" in caplog.text


# =============================================================================
# Hard failures
# =============================================================================


class TestHardFailures:
    """Whole-run failures raise."""

    def test_empty_panel_list(self) -> None:
        with pytest.raises(EmptyPanelListError):
            optimize([])

    def test_empty_is_optimization_error(self) -> None:
        with pytest.raises(OptimizationError):
            OptimizeCutListCommand().execute([])

    def test_non_sequence_input(self) -> None:
        with pytest.raises(InvalidInputError):
            optimize("not panels")  # type: ignore[arg-type]

    def test_wrong_item_type(self, panel_factory) -> None:
        with pytest.raises(InvalidInputError, match="Item 1"):
            optimize([panel_factory(), {"id": "dict"}])  # type: ignore[list-item]

    @pytest.mark.parametrize("kerf", [-0.5, 25])
    def test_invalid_kerf(self, kerf: float) -> None:
        with pytest.raises(ValueError):
            OptimizationOptions(blade_kerf=kerf)

    @pytest.mark.parametrize("mode", ["estimation", " Estimation ", "ESTIMATION"])
    def test_mode_string_is_case_insensitive(self, mode: str) -> None:
        assert OptimizationOptions(mode=mode).mode == OptimizationMode.ESTIMATION

    def test_unknown_mode_string(self) -> None:
        with pytest.raises(ValueError):
            OptimizationOptions(mode="fast")

    def test_invalid_time_budget(self) -> None:
        with pytest.raises(ValueError):
            OptimizationOptions(time_budget=0)
