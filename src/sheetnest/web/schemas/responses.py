"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class StockSheetSchema(BaseModel):
    """Stock sheet used for a material group."""

    material: str = Field(..., description="Material name")
    length: float = Field(..., description="Sheet length in mm")
    width: float = Field(..., description="Sheet width in mm")
    thickness: float = Field(..., description="Sheet thickness in mm")
    cost_per_sheet: float = Field(..., description="Cost of one sheet")


class MaterialSummarySchema(BaseModel):
    """Sheet usage for one material and thickness."""

    material: str
    thickness: float
    sheet_count: int
    stock: StockSheetSchema
    stock_source: str = Field(..., description="explicit, matched or default")
    used_area: float
    sheet_area: float
    utilization: float = Field(..., description="Percentage 0-100")
    cost: float


class PlacementSchema(BaseModel):
    """A part placed on a sheet."""

    unit_id: str
    panel_id: str
    label: str
    x: float = Field(..., description="Left edge in mm")
    y: float = Field(..., description="Bottom edge in mm")
    length: float
    width: float
    rotated: bool
    grain_aligned: bool


class SheetSchema(BaseModel):
    """A stock sheet with its placements."""

    sheet_id: str
    sheet_number: int
    material: str
    thickness: float
    length: float
    width: float
    used_area: float
    wasted_area: float
    utilization: float
    placements: list[PlacementSchema] = Field(default_factory=list)


class WasteRegionSchema(BaseModel):
    """Free area left on a sheet."""

    sheet_id: str
    x: float
    y: float
    length: float
    width: float
    area: float
    reusable: bool = Field(..., description="True when both sides exceed the remnant threshold")


class CutOperationSchema(BaseModel):
    """A straight saw cut."""

    cut_id: str
    sheet_id: str
    sequence: int
    type: str = Field(..., description="rip or crosscut")
    start_x: float
    start_y: float
    end_x: float
    end_y: float
    length: float
    resulting_part_ids: list[str] = Field(default_factory=list)


class RejectedPanelSchema(BaseModel):
    """Panel request excluded before packing."""

    panel_id: str
    reason: str
    message: str


class UnplaceableUnitSchema(BaseModel):
    """Unit that no sheet could take."""

    unit_id: str
    panel_id: str
    label: str
    material: str
    reason: str
    message: str


class OptimizationResultSchema(BaseModel):
    """Response for an optimization run."""

    mode: str = Field(..., description="ESTIMATION or PRODUCTION")
    total_panels: int
    total_sheets: int
    sheets_by_material: dict[str, int] = Field(default_factory=dict)
    total_requested_area: float
    total_used_area: float
    total_wasted_area: float
    average_utilization: float
    estimated_material_cost: float
    target_utilization: float
    meets_target: bool
    is_complete: bool
    total_cut_length: float
    estimated_cut_minutes: int
    material_summaries: list[MaterialSummarySchema] = Field(default_factory=list)
    sheets: list[SheetSchema] = Field(default_factory=list)
    waste_regions: list[WasteRegionSchema] = Field(default_factory=list)
    cut_operations: list[CutOperationSchema] = Field(default_factory=list)
    rejected_panels: list[RejectedPanelSchema] = Field(default_factory=list)
    unplaceable: list[UnplaceableUnitSchema] = Field(default_factory=list)


class ValidationResultSchema(BaseModel):
    """Response for job validation."""

    is_valid: bool = Field(..., description="Whether the job can be optimized")
    expanded_quantity: int = Field(default=0, description="Pieces after quantity expansion")
    errors: list[dict[str, Any]] = Field(default_factory=list, description="Blocking errors")
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Panels that would be rejected or unplaceable"
    )


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
