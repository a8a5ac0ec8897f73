"""Application commands (use cases) for sheet optimization."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from sheetnest.domain.services.material_grouping import MaterialGrouper
from sheetnest.domain.services.normalizer import PanelNormalizer
from sheetnest.domain.value_objects import (
    MaterialGroup,
    MaterialSummary,
    OptimizationMode,
    PanelRequest,
    RejectedPanel,
    Sheet,
    UnplaceableUnit,
)
from sheetnest.infrastructure.bin_packing import (
    BinPackingConfig,
    GroupPackingResult,
    GuillotinePacker,
)
from sheetnest.infrastructure.cut_sequence import (
    CutSequenceGenerator,
    estimate_cut_minutes,
    total_cut_length,
)
from sheetnest.infrastructure.waste_tracker import WasteTracker
from sheetnest.infrastructure.yield_report import YieldReporter

from .dtos import OptimizationOptions, OptimizationResult

logger = logging.getLogger(__name__)


class OptimizationError(Exception):
    """Raised when an optimization run cannot produce any result."""


class EmptyPanelListError(OptimizationError):
    """Raised when there is nothing to optimize."""

    def __init__(self) -> None:
        super().__init__("Panel list is empty; nothing to optimize")


class InvalidInputError(OptimizationError):
    """Raised when the input is not a list of panel requests at all."""


class OptimizeCutListCommand:
    """Command to run the full nesting pipeline for one request.

    The command holds collaborators but no per-run state, so one instance can
    be shared between threads. Each ``execute`` call builds its own packer.
    """

    def __init__(
        self,
        normalizer: PanelNormalizer | None = None,
        cut_sequence_generator: CutSequenceGenerator | None = None,
        yield_reporter: YieldReporter | None = None,
    ) -> None:
        self.normalizer = normalizer or PanelNormalizer()
        self.cut_sequence_generator = cut_sequence_generator or CutSequenceGenerator()
        self.yield_reporter = yield_reporter or YieldReporter()

    def execute(
        self,
        panels: Sequence[PanelRequest],
        options: OptimizationOptions | None = None,
    ) -> OptimizationResult:
        """Execute the optimization.

        Args:
            panels: Panel requests to nest.
            options: Mode, kerf, stock sheets and defaults.

        Returns:
            OptimizationResult. Per-panel problems are reported in its
            ``rejected_panels`` and ``unplaceable`` fields.

        Raises:
            EmptyPanelListError: If ``panels`` is empty.
            InvalidInputError: If ``panels`` is not a sequence of PanelRequest.
        """
        options = options or OptimizationOptions()
        self._check_input(panels)

        started = time.monotonic()
        deadline = started + options.time_budget if options.time_budget else None
        defaults = options.defaults

        normalized = self.normalizer.normalize(panels)
        grouper = MaterialGrouper(
            default_length=defaults.sheet_length,
            default_width=defaults.sheet_width,
            default_cost=defaults.sheet_cost,
        )
        grouping = grouper.group(
            normalized.units, options.stock_sheets, kerf=options.blade_kerf
        )
        requested_area = sum(u.area for u in normalized.units)

        logger.info(
            "Optimizing %d units across %d material groups (%s)",
            len(normalized.units),
            len(grouping.groups),
            options.mode.value,
        )

        packer = GuillotinePacker(
            BinPackingConfig(
                kerf=options.blade_kerf,
                estimation_fill_ratio=defaults.estimation_fill_ratio,
            )
        )

        if options.mode == OptimizationMode.ESTIMATION:
            result = self._estimate(
                packer,
                grouping.groups,
                grouping.unplaceable,
                normalized.rejected,
                requested_area,
                options,
            )
        else:
            result = self._produce(
                packer,
                grouping.groups,
                grouping.unplaceable,
                normalized.rejected,
                requested_area,
                options,
                deadline,
            )

        logger.info(
            "Optimization finished in %.3fs: %d sheets, %.1f%% utilization, "
            "%d rejected, %d unplaceable",
            time.monotonic() - started,
            result.total_sheets,
            result.average_utilization,
            len(result.rejected_panels),
            len(result.unplaceable),
        )
        if (
            options.mode == OptimizationMode.PRODUCTION
            and result.total_sheets
            and not result.meets_target
        ):
            logger.warning(
                "Utilization %.1f%% is below the %.0f%% production target",
                result.average_utilization,
                result.target_utilization,
            )
        return result

    def _check_input(self, panels: Sequence[PanelRequest]) -> None:
        if panels is None or isinstance(panels, (str, bytes)) or not isinstance(
            panels, Sequence
        ):
            raise InvalidInputError(
                f"Expected a sequence of PanelRequest, got {type(panels).__name__}"
            )
        if len(panels) == 0:
            raise EmptyPanelListError()
        for index, panel in enumerate(panels):
            if not isinstance(panel, PanelRequest):
                raise InvalidInputError(
                    f"Item {index} is {type(panel).__name__}, not PanelRequest"
                )

    def _estimate(
        self,
        packer: GuillotinePacker,
        groups: Sequence[MaterialGroup],
        unplaceable: Sequence[UnplaceableUnit],
        rejected: Sequence[RejectedPanel],
        requested_area: float,
        options: OptimizationOptions,
    ) -> OptimizationResult:
        """Size sheet counts from area alone; no placements, waste or cuts."""
        summaries: list[MaterialSummary] = []
        for group in groups:
            if not group.units:
                continue
            sheet_count = packer.estimate_sheet_count(group)
            summaries.append(
                self.yield_reporter.summarize_group(group, sheet_count, group.unit_area)
            )

        totals = self.yield_reporter.report(summaries)
        return OptimizationResult(
            mode=options.mode,
            sheets=(),
            waste_regions=(),
            cut_operations=(),
            rejected_panels=tuple(rejected),
            unplaceable=tuple(unplaceable),
            material_summaries=tuple(summaries),
            total_panels=sum(len(g.units) for g in groups),
            total_sheets=totals.total_sheets,
            sheets_by_material=totals.sheets_by_material,
            total_requested_area=requested_area,
            total_used_area=totals.total_used_area,
            total_wasted_area=totals.total_wasted_area,
            average_utilization=totals.average_utilization,
            estimated_material_cost=totals.estimated_material_cost,
            target_utilization=options.defaults.target_for(options.mode),
        )

    def _produce(
        self,
        packer: GuillotinePacker,
        groups: Sequence[MaterialGroup],
        unplaceable: Sequence[UnplaceableUnit],
        rejected: Sequence[RejectedPanel],
        requested_area: float,
        options: OptimizationOptions,
        deadline: float | None,
    ) -> OptimizationResult:
        """Run full placement, waste tracking and cut sequencing."""
        packable = [g for g in groups if g.units]
        packed = self._pack_groups(packer, packable, options.parallel, deadline)

        sheets: list[Sheet] = []
        summaries: list[MaterialSummary] = []
        all_unplaceable = list(unplaceable)

        # Numbering happens here, in group order, so it never depends on
        # which group finished packing first
        for outcome in packed:
            group = outcome.group
            group_sheets = [
                Sheet(
                    sheet_id=f"sheet-{len(sheets) + i + 1}",
                    sheet_number=len(sheets) + i + 1,
                    material=group.material,
                    thickness=group.thickness,
                    stock=layout.stock,
                    placements=layout.placements,
                    free_regions=layout.free_regions,
                    kerf_loss_area=layout.kerf_loss_area,
                )
                for i, layout in enumerate(outcome.layouts)
            ]
            sheets.extend(group_sheets)
            all_unplaceable.extend(outcome.unplaceable)
            summaries.append(
                self.yield_reporter.summarize_group(
                    group,
                    len(group_sheets),
                    sum(s.used_area for s in group_sheets),
                )
            )

        waste_regions = WasteTracker(options.defaults.min_remnant_size).track(sheets)
        cut_operations = self.cut_sequence_generator.generate_all(sheets)
        totals = self.yield_reporter.report(summaries)

        return OptimizationResult(
            mode=options.mode,
            sheets=tuple(sheets),
            waste_regions=waste_regions,
            cut_operations=cut_operations,
            rejected_panels=tuple(rejected),
            unplaceable=tuple(all_unplaceable),
            material_summaries=tuple(summaries),
            total_panels=sum(s.piece_count for s in sheets),
            total_sheets=totals.total_sheets,
            sheets_by_material=totals.sheets_by_material,
            total_requested_area=requested_area,
            total_used_area=totals.total_used_area,
            total_wasted_area=totals.total_wasted_area,
            average_utilization=totals.average_utilization,
            estimated_material_cost=totals.estimated_material_cost,
            target_utilization=options.defaults.target_for(options.mode),
            total_cut_length=total_cut_length(cut_operations),
            estimated_cut_minutes=estimate_cut_minutes(
                cut_operations, options.defaults.seconds_per_100mm
            ),
        )

    def _pack_groups(
        self,
        packer: GuillotinePacker,
        groups: Sequence[MaterialGroup],
        parallel: bool,
        deadline: float | None,
    ) -> list[GroupPackingResult]:
        """Pack each group, optionally fork-join on a thread pool.

        Results come back in group order either way.
        """
        if not parallel or len(groups) < 2:
            return [packer.pack(group, deadline) for group in groups]

        with ThreadPoolExecutor(max_workers=len(groups)) as executor:
            return list(executor.map(lambda g: packer.pack(g, deadline), groups))


def optimize(
    panels: Sequence[PanelRequest],
    options: OptimizationOptions | None = None,
) -> OptimizationResult:
    """Nest panels onto stock sheets.

    Convenience wrapper around ``OptimizeCutListCommand`` with default
    collaborators. Pure: identical inputs give identical results.

    Args:
        panels: Panel requests to nest.
        options: Mode, kerf, stock sheets and defaults.

    Returns:
        OptimizationResult.

    Raises:
        EmptyPanelListError: If ``panels`` is empty.
        InvalidInputError: If ``panels`` is not a sequence of PanelRequest.
    """
    return OptimizeCutListCommand().execute(panels, options)
