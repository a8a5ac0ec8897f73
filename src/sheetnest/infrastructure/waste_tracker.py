"""Waste and remnant tracking for packed sheets."""

from __future__ import annotations

import logging
from typing import Iterable

from sheetnest.domain.value_objects import MIN_REMNANT_SIZE, Sheet, WasteRegion

logger = logging.getLogger(__name__)


class WasteTracker:
    """Turns the free regions left on sheets into waste regions.

    Every free region becomes a WasteRegion. It is tagged reusable only when
    both of its dimensions exceed the minimum remnant size; smaller regions
    are still reported so they count toward wasted area.

    Attributes:
        min_remnant_size: Both dimensions must exceed this to be reusable.
    """

    def __init__(self, min_remnant_size: float = MIN_REMNANT_SIZE) -> None:
        if min_remnant_size < 0:
            raise ValueError("Minimum remnant size must be non-negative")
        self.min_remnant_size = min_remnant_size

    def track(self, sheets: Iterable[Sheet]) -> tuple[WasteRegion, ...]:
        """Collect waste regions for all sheets, sheet by sheet.

        Args:
            sheets: Packed sheets.

        Returns:
            Waste regions in sheet order, largest first within a sheet.
        """
        regions: list[WasteRegion] = []
        for sheet in sheets:
            sheet_regions = [
                WasteRegion(
                    sheet_id=sheet.sheet_id,
                    x=region.x,
                    y=region.y,
                    length=region.length,
                    width=region.width,
                    reusable=self.is_reusable(region.length, region.width),
                )
                for region in sheet.free_regions
            ]
            reusable = sum(1 for r in sheet_regions if r.reusable)
            logger.debug(
                "%s: %d waste regions, %d reusable",
                sheet.sheet_id,
                len(sheet_regions),
                reusable,
            )
            regions.extend(sheet_regions)
        return tuple(regions)

    def is_reusable(self, length: float, width: float) -> bool:
        return length > self.min_remnant_size and width > self.min_remnant_size
