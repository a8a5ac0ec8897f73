"""Yield and cost aggregation across material groups."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Sequence

from sheetnest.domain.value_objects import MaterialGroup, MaterialSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YieldTotals:
    """Aggregate sheet usage over a whole optimization run.

    Attributes:
        total_sheets: Sheets opened (or estimated) across all materials.
        sheets_by_material: Read-only sheet count per material name, in group
            order.
        total_sheet_area: Combined area of all sheets.
        total_used_area: Combined area of all parts.
        total_wasted_area: Sheet area not covered by parts.
        average_utilization: Used over sheet area as a percentage (0-100).
        estimated_material_cost: Sheets times cost per sheet, summed.
    """

    total_sheets: int
    sheets_by_material: Mapping[str, int]
    total_sheet_area: float
    total_used_area: float
    total_wasted_area: float
    average_utilization: float
    estimated_material_cost: float


class YieldReporter:
    """Computes per-material summaries and run totals."""

    def summarize_group(
        self,
        group: MaterialGroup,
        sheet_count: int,
        used_area: float,
    ) -> MaterialSummary:
        """Summarize one material group.

        Args:
            group: The material group.
            sheet_count: Sheets opened (PRODUCTION) or estimated (ESTIMATION).
            used_area: Area of the parts counted against those sheets.

        Returns:
            MaterialSummary for the group.
        """
        return MaterialSummary(
            material=group.material,
            thickness=group.thickness,
            sheet_count=sheet_count,
            stock=group.stock,
            stock_source=group.stock_source,
            used_area=used_area,
            sheet_area=sheet_count * group.stock.area,
            cost=sheet_count * group.stock.cost_per_sheet,
        )

    def report(self, summaries: Sequence[MaterialSummary]) -> YieldTotals:
        """Aggregate material summaries into run totals.

        Args:
            summaries: Per-group summaries in group order.

        Returns:
            YieldTotals with utilization clamped to 0-100.
        """
        sheets_by_material: dict[str, int] = {}
        for summary in summaries:
            sheets_by_material[summary.material] = (
                sheets_by_material.get(summary.material, 0) + summary.sheet_count
            )

        total_sheet_area = sum(s.sheet_area for s in summaries)
        total_used_area = sum(s.used_area for s in summaries)

        if total_sheet_area > 0:
            utilization = total_used_area / total_sheet_area * 100
        else:
            utilization = 0.0

        totals = YieldTotals(
            total_sheets=sum(s.sheet_count for s in summaries),
            sheets_by_material=MappingProxyType(sheets_by_material),
            total_sheet_area=total_sheet_area,
            total_used_area=total_used_area,
            total_wasted_area=max(0.0, total_sheet_area - total_used_area),
            average_utilization=max(0.0, min(100.0, utilization)),
            estimated_material_cost=sum(s.cost for s in summaries),
        )

        logger.debug(
            "Yield: %d sheets, %.1f%% utilization, cost %.2f",
            totals.total_sheets,
            totals.average_utilization,
            totals.estimated_material_cost,
        )
        return totals
