"""Pydantic schemas for the REST API."""

from sheetnest.web.schemas.responses import (
    CutOperationSchema,
    ErrorResponseSchema,
    MaterialSummarySchema,
    OptimizationResultSchema,
    PlacementSchema,
    RejectedPanelSchema,
    SheetSchema,
    StockSheetSchema,
    UnplaceableUnitSchema,
    ValidationResultSchema,
    WasteRegionSchema,
)

__all__ = [
    "CutOperationSchema",
    "ErrorResponseSchema",
    "MaterialSummarySchema",
    "OptimizationResultSchema",
    "PlacementSchema",
    "RejectedPanelSchema",
    "SheetSchema",
    "StockSheetSchema",
    "UnplaceableUnitSchema",
    "ValidationResultSchema",
    "WasteRegionSchema",
]
