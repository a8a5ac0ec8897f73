"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from sheetnest.domain.value_objects import (
    DEFAULT_SHEET_LENGTH,
    DEFAULT_SHEET_WIDTH,
    MIN_REMNANT_SIZE,
    CutOperation,
    MaterialSummary,
    OptimizationMode,
    RejectedPanel,
    Sheet,
    StockSheetSpec,
    UnplaceableUnit,
    WasteRegion,
)


@dataclass(frozen=True)
class EngineDefaults:
    """System defaults applied when the caller does not say otherwise.

    Attributes:
        sheet_length: Length of the fallback stock sheet in mm.
        sheet_width: Width of the fallback stock sheet in mm.
        sheet_cost: Cost per sheet of the fallback stock sheet.
        min_remnant_size: Both dimensions must exceed this for a waste
            region to count as a reusable remnant.
        estimation_fill_ratio: Assumed sheet fill for ESTIMATION sizing.
        estimation_target: Utilization target reported for ESTIMATION runs.
        production_target: Utilization target reported for PRODUCTION runs.
        seconds_per_100mm: Saw feed rate used for cut time estimates.
    """

    sheet_length: float = DEFAULT_SHEET_LENGTH
    sheet_width: float = DEFAULT_SHEET_WIDTH
    sheet_cost: float = 0.0
    min_remnant_size: float = MIN_REMNANT_SIZE
    estimation_fill_ratio: float = 0.70
    estimation_target: float = 70.0
    production_target: float = 85.0
    seconds_per_100mm: float = 2.0

    def __post_init__(self) -> None:
        if self.sheet_length <= 0 or self.sheet_width <= 0:
            raise ValueError("Default sheet dimensions must be positive")
        if self.sheet_cost < 0:
            raise ValueError("Default sheet cost must be non-negative")
        if self.min_remnant_size < 0:
            raise ValueError("Minimum remnant size must be non-negative")
        if not 0 < self.estimation_fill_ratio <= 1:
            raise ValueError("Estimation fill ratio must be in (0, 1]")
        if self.seconds_per_100mm < 0:
            raise ValueError("Cut speed must be non-negative")

    def target_for(self, mode: OptimizationMode) -> float:
        if mode == OptimizationMode.ESTIMATION:
            return self.estimation_target
        return self.production_target


@dataclass(frozen=True)
class OptimizationOptions:
    """Options for one optimize() call.

    Attributes:
        mode: ESTIMATION for fast sizing, PRODUCTION for a cutting plan.
        blade_kerf: Saw kerf in mm.
        stock_sheets: Stock sheets keyed by material name.
        parallel: Pack material groups on a thread pool.
        time_budget: Seconds after which unplaced units are reported as
            aborted. None means no limit.
        defaults: System defaults.
    """

    mode: OptimizationMode = OptimizationMode.PRODUCTION
    blade_kerf: float = 4.0
    stock_sheets: Mapping[str, StockSheetSpec] | None = None
    parallel: bool = False
    time_budget: float | None = None
    defaults: EngineDefaults = field(default_factory=EngineDefaults)

    def __post_init__(self) -> None:
        if not 0 <= self.blade_kerf <= 20:
            raise ValueError("Blade kerf must be between 0 and 20 mm")
        if self.time_budget is not None and self.time_budget <= 0:
            raise ValueError("Time budget must be positive")
        # Accept plain strings for mode in any case ("production")
        if isinstance(self.mode, str):
            object.__setattr__(self, "mode", OptimizationMode(self.mode.strip().upper()))


@dataclass(frozen=True)
class OptimizationResult:
    """Aggregate result of one optimize() call.

    ESTIMATION results carry no sheets, waste regions or cut operations; their
    totals are derived from estimated sheet counts.

    Attributes:
        mode: Mode the result was computed in.
        sheets: Packed sheets in group order, then opening order.
        waste_regions: Free regions left on sheets (PRODUCTION only).
        cut_operations: Saw cuts for every sheet (PRODUCTION only).
        rejected_panels: Requests excluded by the normalizer.
        unplaceable: Units no sheet could take.
        material_summaries: Per material-and-thickness usage.
        total_panels: Units placed (PRODUCTION) or sized (ESTIMATION).
        total_sheets: Sheets opened or estimated.
        sheets_by_material: Read-only sheet count per material name.
        total_requested_area: Area of all valid expanded units.
        total_used_area: Area of parts on sheets.
        total_wasted_area: Sheet area not covered by parts.
        average_utilization: Used over sheet area in percent, 0-100.
        estimated_material_cost: Sheets times cost per sheet.
        target_utilization: Yield target for the mode in percent.
        total_cut_length: Combined length of all cuts in mm.
        estimated_cut_minutes: Saw time estimate in whole minutes.
    """

    mode: OptimizationMode
    sheets: tuple[Sheet, ...]
    waste_regions: tuple[WasteRegion, ...]
    cut_operations: tuple[CutOperation, ...]
    rejected_panels: tuple[RejectedPanel, ...]
    unplaceable: tuple[UnplaceableUnit, ...]
    material_summaries: tuple[MaterialSummary, ...]
    total_panels: int
    total_sheets: int
    sheets_by_material: Mapping[str, int]
    total_requested_area: float
    total_used_area: float
    total_wasted_area: float
    average_utilization: float
    estimated_material_cost: float
    target_utilization: float
    total_cut_length: float = 0.0
    estimated_cut_minutes: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.average_utilization <= 100:
            raise ValueError("Average utilization must be between 0 and 100")
        object.__setattr__(
            self, "sheets_by_material", MappingProxyType(dict(self.sheets_by_material))
        )

    @property
    def is_complete(self) -> bool:
        """True when every requested panel was placed or sized."""
        return not self.rejected_panels and not self.unplaceable

    @property
    def meets_target(self) -> bool:
        return self.average_utilization >= self.target_utilization

    @property
    def reusable_remnants(self) -> tuple[WasteRegion, ...]:
        return tuple(r for r in self.waste_regions if r.reusable)

    def sheets_for(self, material: str) -> tuple[Sheet, ...]:
        return tuple(s for s in self.sheets if s.material == material)
