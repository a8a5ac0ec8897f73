"""Tests for WasteTracker."""

from __future__ import annotations

import pytest

from sheetnest.domain.value_objects import FreeRegion, Sheet, StockSheetSpec
from sheetnest.infrastructure.waste_tracker import WasteTracker


def _sheet(sheet_id: str, regions: list[FreeRegion]) -> Sheet:
    return Sheet(
        sheet_id=sheet_id,
        sheet_number=int(sheet_id.split("-")[1]),
        material="MDF",
        thickness=18,
        stock=StockSheetSpec(material="MDF"),
        placements=(),
        free_regions=tuple(regions),
    )


class TestWasteTracker:
    """Tests for turning free regions into waste regions."""

    def test_every_free_region_is_reported(self) -> None:
        sheet = _sheet(
            "sheet-1",
            [
                FreeRegion(x=604, y=0, length=1836, width=1220),
                FreeRegion(x=0, y=404, length=600, width=816),
                FreeRegion(x=0, y=1200, length=600, width=20),
            ],
        )
        regions = WasteTracker().track([sheet])

        assert len(regions) == 3
        assert all(r.sheet_id == "sheet-1" for r in regions)

    def test_reusable_requires_both_sides_over_threshold(self) -> None:
        tracker = WasteTracker()

        assert tracker.is_reusable(201, 201)
        assert not tracker.is_reusable(200, 500)
        assert not tracker.is_reusable(2000, 150)

    def test_sub_threshold_regions_still_count(self) -> None:
        sheet = _sheet("sheet-1", [FreeRegion(x=0, y=0, length=2440, width=50)])
        regions = WasteTracker().track([sheet])

        assert len(regions) == 1
        assert not regions[0].reusable
        assert regions[0].area == 2440 * 50

    def test_custom_threshold(self) -> None:
        sheet = _sheet("sheet-1", [FreeRegion(x=0, y=0, length=150, width=150)])

        assert WasteTracker(min_remnant_size=100).track([sheet])[0].reusable

    def test_sheet_order_is_kept(self) -> None:
        sheets = [
            _sheet("sheet-1", [FreeRegion(x=0, y=0, length=300, width=300)]),
            _sheet("sheet-2", [FreeRegion(x=0, y=0, length=900, width=900)]),
        ]
        regions = WasteTracker().track(sheets)

        assert [r.sheet_id for r in regions] == ["sheet-1", "sheet-2"]

    def test_negative_threshold_raises(self) -> None:
        with pytest.raises(ValueError):
            WasteTracker(min_remnant_size=-1)
