"""Material grouping and stock sheet resolution.

Units are grouped by ``(material, thickness)`` and every group gets exactly one
stock sheet definition. Resolution is explicit and the rule that fired is
recorded on the group, so callers and tests can see when a default was used.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Sequence

from sheetnest.domain.value_objects import (
    DEFAULT_SHEET_LENGTH,
    DEFAULT_SHEET_WIDTH,
    MaterialGroup,
    PlaceableUnit,
    StockSheetSpec,
    StockSource,
    UnplaceableReason,
    UnplaceableUnit,
)

logger = logging.getLogger(__name__)

# Caller map key used as a catch-all stock sheet
DEFAULT_STOCK_KEY = "default"


@dataclass(frozen=True)
class GroupingResult:
    """Material groups ready for packing plus units no sheet can take."""

    groups: tuple[MaterialGroup, ...]
    unplaceable: tuple[UnplaceableUnit, ...]


def fits_orientation(
    length: float,
    width: float,
    space_length: float,
    space_width: float,
    kerf: float = 0.0,
) -> bool:
    """Check whether a rectangle fits a space without rotation.

    Each extent either matches the space exactly (flush, no trailing cut is
    needed) or leaves room for a kerf-wide cut after it. The flush case is
    a deliberate relaxation of the strict extent + kerf rule: a part that
    fills an edge exactly leaves no offcut to separate.

    Args:
        length: Extent along the x axis.
        width: Extent along the y axis.
        space_length: Available extent along the x axis.
        space_width: Available extent along the y axis.
        kerf: Saw kerf width.

    Returns:
        True if the rectangle fits.
    """
    fits_length = length == space_length or length + kerf <= space_length
    fits_width = width == space_width or width + kerf <= space_width
    return fits_length and fits_width


class MaterialGrouper:
    """Groups units by material and resolves their stock sheets.

    Attributes:
        default_length: Length of the system default stock sheet.
        default_width: Width of the system default stock sheet.
        default_cost: Cost per sheet of the system default stock sheet.
    """

    def __init__(
        self,
        default_length: float = DEFAULT_SHEET_LENGTH,
        default_width: float = DEFAULT_SHEET_WIDTH,
        default_cost: float = 0.0,
    ) -> None:
        self.default_length = default_length
        self.default_width = default_width
        self.default_cost = default_cost

    def group(
        self,
        units: Sequence[PlaceableUnit],
        stock_sheets: Mapping[str, StockSheetSpec] | None = None,
        kerf: float = 0.0,
    ) -> GroupingResult:
        """Group units and split off those that cannot fit their stock.

        Groups keep the order in which their material first appears.

        Args:
            units: Normalized units.
            stock_sheets: Caller-supplied stock sheets keyed by material name.
            kerf: Saw kerf width, applied the same way the packer applies it.

        Returns:
            GroupingResult with groups and unplaceable units.
        """
        stock_sheets = stock_sheets or {}
        buckets: dict[tuple[str, float], list[PlaceableUnit]] = {}
        for unit in units:
            buckets.setdefault((unit.material, unit.thickness), []).append(unit)

        groups: list[MaterialGroup] = []
        unplaceable: list[UnplaceableUnit] = []

        for (material, thickness), members in buckets.items():
            stock, source = self.resolve_stock(material, thickness, stock_sheets)
            logger.debug(
                "Material '%s' %.1fmm: %d units on %sx%s stock (%s)",
                material,
                thickness,
                len(members),
                stock.length,
                stock.width,
                source.value,
            )

            placeable: list[PlaceableUnit] = []
            for unit in members:
                problem = self._check_fits_stock(unit, stock, kerf)
                if problem is None:
                    placeable.append(unit)
                else:
                    logger.warning("Unit '%s' is unplaceable: %s", unit.unit_id, problem.message)
                    unplaceable.append(problem)

            groups.append(
                MaterialGroup(
                    material=material,
                    thickness=thickness,
                    stock=stock,
                    stock_source=source,
                    units=tuple(placeable),
                )
            )

        return GroupingResult(groups=tuple(groups), unplaceable=tuple(unplaceable))

    def resolve_stock(
        self,
        material: str,
        thickness: float,
        stock_sheets: Mapping[str, StockSheetSpec],
    ) -> tuple[StockSheetSpec, StockSource]:
        """Resolve the stock sheet for a material group.

        Resolution order:
        1. Exact key in the caller map.
        2. Case-insensitive substring match between a key and the material
           name, in map order ("MDF" matches "18mm MDF").
        3. The caller map's "default" entry.
        4. The system default sheet.

        Args:
            material: Material name of the group.
            thickness: Thickness of the group.
            stock_sheets: Caller-supplied stock sheets.

        Returns:
            Tuple of (stock sheet, source of the resolution).
        """
        if material in stock_sheets:
            return stock_sheets[material], StockSource.EXPLICIT

        material_lower = material.lower()
        for key, spec in stock_sheets.items():
            key_lower = key.lower()
            if key_lower == DEFAULT_STOCK_KEY:
                continue
            if key_lower in material_lower or material_lower in key_lower:
                logger.debug("Material '%s' matched stock entry '%s'", material, key)
                return spec, StockSource.MATCHED

        if DEFAULT_STOCK_KEY in stock_sheets:
            return stock_sheets[DEFAULT_STOCK_KEY], StockSource.MATCHED

        return (
            StockSheetSpec(
                material=material,
                length=self.default_length,
                width=self.default_width,
                thickness=thickness,
                cost_per_sheet=self.default_cost,
            ),
            StockSource.DEFAULT,
        )

    def _check_fits_stock(
        self,
        unit: PlaceableUnit,
        stock: StockSheetSpec,
        kerf: float = 0.0,
    ) -> UnplaceableUnit | None:
        """Return an UnplaceableUnit if the unit cannot go on an empty sheet."""
        if fits_orientation(unit.length, unit.width, stock.length, stock.width, kerf):
            return None

        fits_rotated = fits_orientation(
            unit.width, unit.length, stock.length, stock.width, kerf
        )
        size = f"{unit.length:g}x{unit.width:g}"
        sheet = f"{stock.length:g}x{stock.width:g}"

        if fits_rotated and not unit.can_rotate:
            return UnplaceableUnit(
                unit_id=unit.unit_id,
                panel_id=unit.panel_id,
                label=unit.label,
                material=unit.material,
                reason=UnplaceableReason.GRAIN_CONFLICT,
                message=(
                    f"{size} fits {sheet} stock only when rotated, "
                    f"but grain runs along its {unit.grain.value}"
                ),
            )
        if fits_rotated:
            return None

        return UnplaceableUnit(
            unit_id=unit.unit_id,
            panel_id=unit.panel_id,
            label=unit.label,
            material=unit.material,
            reason=UnplaceableReason.EXCEEDS_SHEET_SIZE,
            message=f"{size} exceeds {sheet} stock in every orientation",
        )
