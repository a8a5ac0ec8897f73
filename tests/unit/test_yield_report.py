"""Tests for YieldReporter."""

from __future__ import annotations

import pytest

from sheetnest.domain.value_objects import (
    MaterialGroup,
    MaterialSummary,
    StockSheetSpec,
    StockSource,
)
from sheetnest.infrastructure.yield_report import YieldReporter


def _group(material: str, thickness: float = 18.0, cost: float = 50.0) -> MaterialGroup:
    return MaterialGroup(
        material=material,
        thickness=thickness,
        stock=StockSheetSpec(material=material, length=2000, width=1000, cost_per_sheet=cost),
        stock_source=StockSource.EXPLICIT,
    )


@pytest.fixture
def reporter() -> YieldReporter:
    return YieldReporter()


class TestSummarizeGroup:
    """Tests for per-group summaries."""

    def test_summary_fields(self, reporter) -> None:
        summary = reporter.summarize_group(_group("Oak"), sheet_count=2, used_area=3_000_000)

        assert summary.sheet_area == 4_000_000
        assert summary.cost == 100.0
        assert summary.utilization == pytest.approx(75.0)
        assert summary.stock_source == StockSource.EXPLICIT


class TestReport:
    """Tests for run totals."""

    def test_totals(self, reporter) -> None:
        summaries = [
            reporter.summarize_group(_group("Oak"), 2, 3_000_000),
            reporter.summarize_group(_group("MDF", cost=20.0), 1, 1_000_000),
        ]
        totals = reporter.report(summaries)

        assert totals.total_sheets == 3
        assert totals.total_sheet_area == 6_000_000
        assert totals.total_used_area == 4_000_000
        assert totals.total_wasted_area == 2_000_000
        assert totals.average_utilization == pytest.approx(66.6667, rel=1e-4)
        assert totals.estimated_material_cost == 120.0

    def test_sheets_by_material_sums_thicknesses(self, reporter) -> None:
        summaries = [
            reporter.summarize_group(_group("MDF", 18), 2, 1),
            reporter.summarize_group(_group("Oak", 19), 1, 1),
            reporter.summarize_group(_group("MDF", 12), 3, 1),
        ]
        totals = reporter.report(summaries)

        assert totals.sheets_by_material == {"MDF": 5, "Oak": 1}
        assert list(totals.sheets_by_material) == ["MDF", "Oak"]

    def test_sheets_by_material_is_read_only(self, reporter) -> None:
        totals = reporter.report([reporter.summarize_group(_group("MDF"), 1, 1)])

        with pytest.raises(TypeError):
            totals.sheets_by_material["MDF"] = 2  # type: ignore[index]

    def test_no_sheets(self, reporter) -> None:
        totals = reporter.report([])

        assert totals.total_sheets == 0
        assert totals.average_utilization == 0.0
        assert totals.sheets_by_material == {}

    def test_utilization_is_clamped(self, reporter) -> None:
        over = MaterialSummary(
            material="MDF",
            thickness=18,
            sheet_count=1,
            stock=StockSheetSpec(material="MDF"),
            stock_source=StockSource.DEFAULT,
            used_area=5_000_000,
            sheet_area=2_976_800,
            cost=0,
        )
        totals = reporter.report([over])

        assert totals.average_utilization == 100.0
        assert totals.total_wasted_area == 0.0
