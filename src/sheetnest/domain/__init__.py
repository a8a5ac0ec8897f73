"""Domain layer - panel, sheet and cutting value objects and services."""

from .services import (
    GroupingResult,
    MaterialGrouper,
    NormalizationResult,
    PanelNormalizer,
)
from .value_objects import (
    CutOperation,
    CutType,
    FreeRegion,
    GrainDirection,
    MaterialGroup,
    MaterialSummary,
    OptimizationMode,
    PanelRequest,
    PlaceableUnit,
    Placement,
    RejectedPanel,
    RejectionReason,
    Sheet,
    StockSheetSpec,
    StockSource,
    UnplaceableReason,
    UnplaceableUnit,
    WasteRegion,
)

__all__ = [
    "CutOperation",
    "CutType",
    "FreeRegion",
    "GrainDirection",
    "GroupingResult",
    "MaterialGroup",
    "MaterialGrouper",
    "MaterialSummary",
    "NormalizationResult",
    "OptimizationMode",
    "PanelNormalizer",
    "PanelRequest",
    "PlaceableUnit",
    "Placement",
    "RejectedPanel",
    "RejectionReason",
    "Sheet",
    "StockSheetSpec",
    "StockSource",
    "UnplaceableReason",
    "UnplaceableUnit",
    "WasteRegion",
]
