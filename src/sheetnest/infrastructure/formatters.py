"""Plain-text and JSON formatters for optimization results.

These are terminal and API representations of a result. They only format
geometry the engine already computed; nothing here recomputes placements.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sheetnest.application.dtos import OptimizationResult
    from sheetnest.domain.value_objects import (
        CutOperation,
        MaterialSummary,
        Placement,
        Sheet,
        WasteRegion,
    )


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


class ResultSummaryFormatter:
    """Formats an optimization result as a text summary."""

    def format(self, result: "OptimizationResult") -> str:
        """Format totals, per-material usage, per-sheet details and problems."""
        lines: list[str] = [
            f"SHEET OPTIMIZATION SUMMARY ({result.mode.value})",
            "=" * 60,
            f"Total Panels: {result.total_panels}",
            f"Total Sheets: {result.total_sheets}",
            f"Requested Area: {result.total_requested_area / 1e6:.3f} m2",
            f"Used Area: {result.total_used_area / 1e6:.3f} m2",
            f"Wasted Area: {result.total_wasted_area / 1e6:.3f} m2",
            f"Utilization: {result.average_utilization:.1f}% "
            f"(target {result.target_utilization:.0f}%)",
            f"Estimated Material Cost: {result.estimated_material_cost:.2f}",
        ]

        if result.material_summaries:
            lines.append("")
            lines.append("Sheets by Material:")
            for summary in result.material_summaries:
                lines.append(f"  {self._format_material(summary)}")

        if result.sheets:
            lines.append("")
            lines.append("Per-Sheet Details:")
            for sheet in result.sheets:
                lines.append(
                    f"  Sheet {sheet.sheet_number} ({sheet.material}): "
                    f"{_plural(sheet.piece_count, 'piece')}, "
                    f"{sheet.utilization:.1f}% used"
                )

        remnants = result.reusable_remnants
        if remnants:
            lines.append("")
            lines.append(f"Reusable Remnants: {len(remnants)}")
            for remnant in remnants:
                lines.append(
                    f"  {remnant.sheet_id}: {remnant.length:.0f} x {remnant.width:.0f} "
                    f"at ({remnant.x:.0f}, {remnant.y:.0f})"
                )

        if result.cut_operations:
            lines.append("")
            lines.append(
                f"Cuts: {len(result.cut_operations)}, "
                f"{result.total_cut_length / 1000:.1f} m, "
                f"~{result.estimated_cut_minutes} min"
            )

        if result.rejected_panels:
            lines.append("")
            lines.append(f"Rejected Panels: {len(result.rejected_panels)}")
            for rejected in result.rejected_panels:
                lines.append(f"  {rejected.panel_id}: {rejected.message}")

        if result.unplaceable:
            lines.append("")
            lines.append(f"Unplaceable Units: {len(result.unplaceable)}")
            for unit in result.unplaceable:
                lines.append(f"  {unit.unit_id} [{unit.reason.value}]: {unit.message}")

        return "\n".join(lines)

    def _format_material(self, summary: "MaterialSummary") -> str:
        return (
            f"{summary.material} {summary.thickness:g}mm: "
            f"{_plural(summary.sheet_count, 'sheet')} of "
            f"{summary.stock.length:g}x{summary.stock.width:g} "
            f"({summary.stock_source.value}), {summary.utilization:.1f}% used"
        )


class CutListFormatter:
    """Formats placements and cut sequences as text tables."""

    def format(self, result: "OptimizationResult") -> str:
        if not result.sheets:
            return "No sheets in result."

        blocks: list[str] = []
        for sheet in result.sheets:
            cuts = [c for c in result.cut_operations if c.sheet_id == sheet.sheet_id]
            blocks.append(self.format_sheet(sheet, cuts))
        return "\n\n".join(blocks)

    def format_sheet(self, sheet: "Sheet", cuts: list["CutOperation"]) -> str:
        lines = [
            f"SHEET {sheet.sheet_number} - {sheet.material} "
            f"{sheet.length:g}x{sheet.width:g}",
            "=" * 70,
            f"{'Part':<24} {'X':>7} {'Y':>7} {'Length':>8} {'Width':>8} {'Rot':>4}",
            "-" * 70,
        ]
        for placement in sheet.placements:
            lines.append(
                f"{placement.label[:24]:<24} {placement.x:>7.0f} {placement.y:>7.0f} "
                f"{placement.length:>8.0f} {placement.width:>8.0f} "
                f"{'yes' if placement.rotated else 'no':>4}"
            )

        if cuts:
            lines.append("")
            lines.append(f"{'Seq':<5} {'Type':<9} {'From':<16} {'To':<16} {'Length':>8}")
            lines.append("-" * 70)
            for cut in cuts:
                start = f"({cut.start_x:.0f}, {cut.start_y:.0f})"
                end = f"({cut.end_x:.0f}, {cut.end_y:.0f})"
                lines.append(
                    f"{cut.sequence:<5} {cut.type.value:<9} {start:<16} {end:<16} "
                    f"{cut.length:>8.0f}"
                )
        return "\n".join(lines)


class JsonExporter:
    """Exports optimization results as JSON-compatible data."""

    def export(self, result: "OptimizationResult") -> str:
        """Export a result as a JSON string."""
        return json.dumps(self.to_dict(result), indent=2)

    def to_dict(self, result: "OptimizationResult") -> dict[str, Any]:
        """Convert a result into plain dicts, lists and scalars."""
        return {
            "mode": result.mode.value,
            "total_panels": result.total_panels,
            "total_sheets": result.total_sheets,
            "sheets_by_material": dict(result.sheets_by_material),
            "total_requested_area": result.total_requested_area,
            "total_used_area": result.total_used_area,
            "total_wasted_area": result.total_wasted_area,
            "average_utilization": result.average_utilization,
            "estimated_material_cost": result.estimated_material_cost,
            "target_utilization": result.target_utilization,
            "meets_target": result.meets_target,
            "is_complete": result.is_complete,
            "total_cut_length": result.total_cut_length,
            "estimated_cut_minutes": result.estimated_cut_minutes,
            "material_summaries": [
                {
                    "material": s.material,
                    "thickness": s.thickness,
                    "sheet_count": s.sheet_count,
                    "stock": {
                        "material": s.stock.material,
                        "length": s.stock.length,
                        "width": s.stock.width,
                        "thickness": s.stock.thickness,
                        "cost_per_sheet": s.stock.cost_per_sheet,
                    },
                    "stock_source": s.stock_source.value,
                    "used_area": s.used_area,
                    "sheet_area": s.sheet_area,
                    "utilization": s.utilization,
                    "cost": s.cost,
                }
                for s in result.material_summaries
            ],
            "sheets": [self._format_sheet(sheet) for sheet in result.sheets],
            "waste_regions": [self._format_waste(r) for r in result.waste_regions],
            "cut_operations": [self._format_cut(c) for c in result.cut_operations],
            "rejected_panels": [
                {"panel_id": r.panel_id, "reason": r.reason.value, "message": r.message}
                for r in result.rejected_panels
            ],
            "unplaceable": [
                {
                    "unit_id": u.unit_id,
                    "panel_id": u.panel_id,
                    "label": u.label,
                    "material": u.material,
                    "reason": u.reason.value,
                    "message": u.message,
                }
                for u in result.unplaceable
            ],
        }

    def _format_sheet(self, sheet: "Sheet") -> dict[str, Any]:
        return {
            "sheet_id": sheet.sheet_id,
            "sheet_number": sheet.sheet_number,
            "material": sheet.material,
            "thickness": sheet.thickness,
            "length": sheet.length,
            "width": sheet.width,
            "used_area": sheet.used_area,
            "wasted_area": sheet.wasted_area,
            "utilization": sheet.utilization,
            "placements": [self._format_placement(p) for p in sheet.placements],
        }

    def _format_placement(self, placement: "Placement") -> dict[str, Any]:
        return {
            "unit_id": placement.unit_id,
            "panel_id": placement.panel_id,
            "label": placement.label,
            "x": placement.x,
            "y": placement.y,
            "length": placement.length,
            "width": placement.width,
            "rotated": placement.rotated,
            "grain_aligned": placement.grain_aligned,
        }

    def _format_waste(self, region: "WasteRegion") -> dict[str, Any]:
        return {
            "sheet_id": region.sheet_id,
            "x": region.x,
            "y": region.y,
            "length": region.length,
            "width": region.width,
            "area": region.area,
            "reusable": region.reusable,
        }

    def _format_cut(self, cut: "CutOperation") -> dict[str, Any]:
        return {
            "cut_id": cut.cut_id,
            "sheet_id": cut.sheet_id,
            "sequence": cut.sequence,
            "type": cut.type.value,
            "start_x": cut.start_x,
            "start_y": cut.start_y,
            "end_x": cut.end_x,
            "end_y": cut.end_y,
            "length": cut.length,
            "resulting_part_ids": list(cut.resulting_part_ids),
        }


def result_to_dict(result: "OptimizationResult") -> dict[str, Any]:
    """Convert a result to a JSON-compatible dict."""
    return JsonExporter().to_dict(result)
