"""Guillotine bin packing for sheet material optimization.

This module packs the units of one material group onto stock sheets using a
best-fit-decreasing order with first-fit region selection. Every placement
splits its free region with straight edge-to-edge cuts, so the resulting
layouts can be cut on a panel saw.

Result dataclasses are frozen; mutable state only lives inside a single
``pack`` call.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field

from sheetnest.domain.services.material_grouping import fits_orientation
from sheetnest.domain.value_objects import (
    FreeRegion,
    MaterialGroup,
    Placement,
    PlaceableUnit,
    StockSheetSpec,
    UnplaceableReason,
    UnplaceableUnit,
)

logger = logging.getLogger(__name__)

# Remnants at or above this size earn a usability bonus when choosing a split
USABLE_SPLIT_DIMENSION = 200.0


@dataclass(frozen=True)
class BinPackingConfig:
    """Configuration for bin packing.

    Attributes:
        kerf: Saw blade kerf width in mm.
        estimation_fill_ratio: Assumed sheet fill when estimating sheet
            counts without placing units.
    """

    kerf: float = 4.0
    estimation_fill_ratio: float = 0.70

    def __post_init__(self) -> None:
        if not 0 <= self.kerf <= 20:
            raise ValueError("Kerf must be between 0 and 20 mm")
        if not 0 < self.estimation_fill_ratio <= 1:
            raise ValueError("Estimation fill ratio must be in (0, 1]")


@dataclass(frozen=True)
class SheetLayout:
    """Layout of units on one sheet of a material group.

    Attributes:
        index: Zero-based index of the sheet within its group.
        stock: Stock sheet the layout was made on.
        placements: Placements in the order they were made.
        free_regions: Free rectangles left when packing finished.
        kerf_loss_area: Area lost to kerf and slivers thinner than a kerf.
    """

    index: int
    stock: StockSheetSpec
    placements: tuple[Placement, ...]
    free_regions: tuple[FreeRegion, ...]
    kerf_loss_area: float = 0.0

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError("Sheet index must be non-negative")

    @property
    def used_area(self) -> float:
        return sum(p.area for p in self.placements)

    @property
    def piece_count(self) -> int:
        return len(self.placements)


@dataclass(frozen=True)
class GroupPackingResult:
    """Outcome of packing one material group.

    Attributes:
        group: The material group that was packed.
        layouts: Sheet layouts in the order the sheets were opened.
        unplaceable: Units the packer had to give up on.
    """

    group: MaterialGroup
    layouts: tuple[SheetLayout, ...]
    unplaceable: tuple[UnplaceableUnit, ...] = ()

    @property
    def sheet_count(self) -> int:
        return len(self.layouts)

    @property
    def pieces_placed(self) -> int:
        return sum(layout.piece_count for layout in self.layouts)


@dataclass
class _SheetState:
    """Internal state for a sheet during packing.

    Attributes:
        index: Sheet index within the group (0-based).
        stock: Stock sheet definition.
        placements: Placements made so far.
        free_regions: Rectangles still available.
        kerf_loss: Area consumed by cuts and slivers so far.
    """

    index: int
    stock: StockSheetSpec
    placements: list[Placement] = field(default_factory=list)
    free_regions: list[FreeRegion] = field(default_factory=list)
    kerf_loss: float = 0.0

    def regions_by_area(self) -> list[FreeRegion]:
        """Free regions largest first, then bottom-to-top, left-to-right."""
        return sorted(self.free_regions, key=lambda r: (-r.area, r.y, r.x))

    def to_layout(self) -> SheetLayout:
        return SheetLayout(
            index=self.index,
            stock=self.stock,
            placements=tuple(self.placements),
            free_regions=tuple(self.regions_by_area()),
            kerf_loss_area=self.kerf_loss,
        )


class GuillotinePacker:
    """Bin packing with the guillotine cut constraint using free rectangles.

    Units are processed largest area first (ties: longest first). Each unit
    goes into the first free region, scanning sheets in the order they were
    opened and regions largest first, that accepts it in its own orientation
    or, when the unit has no grain, rotated. A new sheet is opened only when
    no existing region accepts the unit.

    Attributes:
        config: Bin packing configuration (kerf, estimation fill).
    """

    def __init__(self, config: BinPackingConfig) -> None:
        """Initialize the packer with configuration.

        Args:
            config: Bin packing configuration specifying kerf width.
        """
        self.config = config

    def pack(
        self,
        group: MaterialGroup,
        deadline: float | None = None,
    ) -> GroupPackingResult:
        """Pack the units of a material group onto sheets.

        Args:
            group: Material group with resolved stock sheet.
            deadline: Optional ``time.monotonic()`` value after which the
                remaining units are reported as aborted instead of placed.

        Returns:
            GroupPackingResult with layouts and any unplaceable units.
        """
        if not group.units:
            return GroupPackingResult(group=group, layouts=())

        sorted_units = self._sort_by_area(list(group.units))
        sheets: list[_SheetState] = []
        unplaceable: list[UnplaceableUnit] = []

        logger.debug(
            "Packing %d units of '%s' onto %gx%g sheets",
            len(sorted_units),
            group.material,
            group.stock.length,
            group.stock.width,
        )

        for position, unit in enumerate(sorted_units):
            if deadline is not None and time.monotonic() > deadline:
                remaining = sorted_units[position:]
                logger.warning(
                    "Time budget exceeded packing '%s'; %d units not placed",
                    group.material,
                    len(remaining),
                )
                unplaceable.extend(self._aborted(u) for u in remaining)
                break

            if self._place_on_open_sheets(unit, sheets):
                continue

            sheet = self._open_sheet(len(sheets), group.stock)
            if self._place_on_sheet(unit, sheet):
                sheets.append(sheet)
            else:
                # Grouping screens these out, so this only guards against a loop
                logger.warning(
                    "Unit '%s' does not fit an empty %gx%g sheet",
                    unit.unit_id,
                    group.stock.length,
                    group.stock.width,
                )
                unplaceable.append(
                    UnplaceableUnit(
                        unit_id=unit.unit_id,
                        panel_id=unit.panel_id,
                        label=unit.label,
                        material=unit.material,
                        reason=UnplaceableReason.EXCEEDS_SHEET_SIZE,
                        message="does not fit an empty stock sheet including kerf",
                    )
                )

        layouts = tuple(sheet.to_layout() for sheet in sheets)
        for layout in layouts:
            logger.debug(
                "Sheet %d of '%s': %d pieces, %d free regions",
                layout.index,
                group.material,
                layout.piece_count,
                len(layout.free_regions),
            )

        return GroupPackingResult(
            group=group,
            layouts=layouts,
            unplaceable=tuple(unplaceable),
        )

    def estimate_sheet_count(self, group: MaterialGroup) -> int:
        """Size a material group by area alone, without placing units.

        Args:
            group: Material group with resolved stock sheet.

        Returns:
            Number of sheets needed at the configured fill ratio.
        """
        if not group.units:
            return 0
        capacity = group.stock.area * self.config.estimation_fill_ratio
        return math.ceil(group.unit_area / capacity)

    def _sort_by_area(self, units: list[PlaceableUnit]) -> list[PlaceableUnit]:
        """Sort units by area, then by length, both descending.

        ``sorted`` is stable, so fully tied units keep their request order.
        """
        return sorted(units, key=lambda u: (-u.area, -u.length))

    def _open_sheet(self, index: int, stock: StockSheetSpec) -> _SheetState:
        """Open a new sheet seeded with a single full-sheet free region."""
        logger.debug("Opening sheet %d (%gx%g)", index, stock.length, stock.width)
        return _SheetState(
            index=index,
            stock=stock,
            free_regions=[FreeRegion(x=0.0, y=0.0, length=stock.length, width=stock.width)],
        )

    def _place_on_open_sheets(
        self,
        unit: PlaceableUnit,
        sheets: list[_SheetState],
    ) -> bool:
        """Try every open sheet in creation order."""
        for sheet in sheets:
            if self._place_on_sheet(unit, sheet):
                return True
        return False

    def _place_on_sheet(self, unit: PlaceableUnit, sheet: _SheetState) -> bool:
        """Place the unit in the first accepting region of a sheet.

        Returns:
            True if the unit was placed.
        """
        for region in sheet.regions_by_area():
            rotated = self._accepts(region, unit)
            if rotated is None:
                continue
            self._place_in_region(unit, region, rotated, sheet)
            return True
        return False

    def _accepts(self, region: FreeRegion, unit: PlaceableUnit) -> bool | None:
        """Check whether a region accepts a unit.

        Returns:
            False if the unit fits as requested, True if it only fits
            rotated (and may rotate), None if it does not fit.
        """
        kerf = self.config.kerf
        if fits_orientation(unit.length, unit.width, region.length, region.width, kerf):
            return False
        if unit.can_rotate and fits_orientation(
            unit.width, unit.length, region.length, region.width, kerf
        ):
            return True
        return None

    def _place_in_region(
        self,
        unit: PlaceableUnit,
        region: FreeRegion,
        rotated: bool,
        sheet: _SheetState,
    ) -> Placement:
        """Place a unit at the origin of a region and split the region.

        Args:
            unit: Unit to place.
            region: Free region receiving the unit.
            rotated: Whether the unit is turned 90 degrees.
            sheet: Sheet owning the region.

        Returns:
            The new placement.
        """
        placed_length = unit.width if rotated else unit.length
        placed_width = unit.length if rotated else unit.width

        placement = Placement(
            unit_id=unit.unit_id,
            panel_id=unit.panel_id,
            label=unit.label,
            x=region.x,
            y=region.y,
            length=placed_length,
            width=placed_width,
            rotated=rotated,
            grain=unit.grain,
        )

        new_regions = self._split_region(region, placed_length, placed_width)
        sheet.free_regions.remove(region)
        sheet.free_regions.extend(new_regions)
        sheet.placements.append(placement)
        sheet.kerf_loss += region.area - placement.area - sum(r.area for r in new_regions)

        if rotated:
            logger.debug(
                "Unit '%s' placed rotated at (%s, %s), placed dimensions %sx%s",
                unit.unit_id,
                placement.x,
                placement.y,
                placed_length,
                placed_width,
            )

        return placement

    def _split_region(
        self,
        region: FreeRegion,
        placed_length: float,
        placed_width: float,
    ) -> list[FreeRegion]:
        """Split a region around a placement at its origin.

        The remainder becomes at most two rectangles: a strip right of the
        placement and a strip above it, each separated from the placement by
        one kerf. When both strips exist, one of them spans the full region
        and the split that leaves better-shaped rectangles wins.

        Args:
            region: Region being consumed.
            placed_length: Placement extent along x.
            placed_width: Placement extent along y.

        Returns:
            New free regions (zero, one or two).
        """
        kerf = self.config.kerf
        right_length = region.length - placed_length - kerf
        top_width = region.width - placed_width - kerf
        right_x = region.x + placed_length + kerf
        top_y = region.y + placed_width + kerf

        has_right = right_length > 0
        has_top = top_width > 0

        if not has_right and not has_top:
            return []
        if not has_top:
            return [FreeRegion(x=right_x, y=region.y, length=right_length, width=region.width)]
        if not has_right:
            return [FreeRegion(x=region.x, y=top_y, length=region.length, width=top_width)]

        # Horizontal cut first: the top strip spans the full region length
        horizontal_score = self._score_rectangle(
            right_length, placed_width
        ) + self._score_rectangle(region.length, top_width)
        # Vertical cut first: the right strip spans the full region width
        vertical_score = self._score_rectangle(
            right_length, region.width
        ) + self._score_rectangle(placed_length, top_width)

        if horizontal_score >= vertical_score:
            return [
                FreeRegion(x=right_x, y=region.y, length=right_length, width=placed_width),
                FreeRegion(x=region.x, y=top_y, length=region.length, width=top_width),
            ]
        return [
            FreeRegion(x=right_x, y=region.y, length=right_length, width=region.width),
            FreeRegion(x=region.x, y=top_y, length=placed_length, width=top_width),
        ]

    def _score_rectangle(self, length: float, width: float) -> float:
        """Score how reusable a leftover rectangle is (higher is better).

        Thin strips are penalised, larger areas and dimensions that can take
        a typical part are rewarded.
        """
        aspect = max(length, width) / min(length, width)
        if aspect > 10:
            aspect_score = 10.0
        elif aspect > 6:
            aspect_score = 25.0
        elif aspect > 4:
            aspect_score = 50.0
        else:
            aspect_score = 100.0

        area_score = math.sqrt(length * width) / 10
        dimension_score = (10.0 if length >= USABLE_SPLIT_DIMENSION else 0.0) + (
            10.0 if width >= USABLE_SPLIT_DIMENSION else 0.0
        )
        return aspect_score + area_score + dimension_score

    def _aborted(self, unit: PlaceableUnit) -> UnplaceableUnit:
        return UnplaceableUnit(
            unit_id=unit.unit_id,
            panel_id=unit.panel_id,
            label=unit.label,
            material=unit.material,
            reason=UnplaceableReason.COMPUTATION_ABORTED,
            message="time budget exceeded before the unit was placed",
        )
