"""Cut sequence generation for production cutting plans.

Placements are worked bottom-to-top, left-to-right, the way a panel saw
operator breaks down a sheet. Each placement produces a rip cut at its right
edge spanning the full sheet width, followed by a crosscut at its top edge
running from the sheet origin to that rip.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

from sheetnest.domain.value_objects import CutOperation, CutType, Sheet

logger = logging.getLogger(__name__)

# Feed rate used for cut time estimates
SECONDS_PER_100MM = 2.0


class CutSequenceGenerator:
    """Derives ordered saw cuts from a sheet layout."""

    def generate(self, sheet: Sheet) -> tuple[CutOperation, ...]:
        """Generate the cut sequence for one sheet.

        Args:
            sheet: Packed sheet with placements.

        Returns:
            Cut operations numbered from 1 in emission order.
        """
        ordered = sorted(sheet.placements, key=lambda p: (p.y, p.x))
        operations: list[CutOperation] = []
        sequence = 1

        for placement in ordered:
            rip_x = placement.right_edge
            operations.append(
                CutOperation(
                    sheet_id=sheet.sheet_id,
                    sequence=sequence,
                    type=CutType.RIP,
                    start_x=rip_x,
                    start_y=0.0,
                    end_x=rip_x,
                    end_y=sheet.width,
                    length=sheet.width,
                    resulting_part_ids=(placement.unit_id,),
                )
            )
            sequence += 1

            cross_y = placement.top_edge
            operations.append(
                CutOperation(
                    sheet_id=sheet.sheet_id,
                    sequence=sequence,
                    type=CutType.CROSSCUT,
                    start_x=0.0,
                    start_y=cross_y,
                    end_x=rip_x,
                    end_y=cross_y,
                    length=rip_x,
                    resulting_part_ids=(placement.unit_id,),
                )
            )
            sequence += 1

        logger.debug("%s: %d cut operations", sheet.sheet_id, len(operations))
        return tuple(operations)

    def generate_all(self, sheets: Iterable[Sheet]) -> tuple[CutOperation, ...]:
        """Generate cut sequences for several sheets, in sheet order."""
        operations: list[CutOperation] = []
        for sheet in sheets:
            operations.extend(self.generate(sheet))
        return tuple(operations)


def total_cut_length(operations: Sequence[CutOperation]) -> float:
    """Sum of the lengths of all cuts in mm."""
    return sum(op.length for op in operations)


def estimate_cut_minutes(
    operations: Sequence[CutOperation],
    seconds_per_100mm: float = SECONDS_PER_100MM,
) -> int:
    """Estimate saw time for a cut sequence, rounded up to whole minutes."""
    seconds = total_cut_length(operations) / 100 * seconds_per_100mm
    return math.ceil(seconds / 60)
