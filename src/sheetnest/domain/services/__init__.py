"""Domain services for preparing panels for packing.

This package provides:
- Panel request validation and quantity expansion
- Material grouping and stock sheet resolution
"""

from .material_grouping import (
    DEFAULT_STOCK_KEY,
    GroupingResult,
    MaterialGrouper,
    fits_orientation,
)
from .normalizer import NormalizationResult, PanelNormalizer

__all__ = [
    "DEFAULT_STOCK_KEY",
    "GroupingResult",
    "MaterialGrouper",
    "NormalizationResult",
    "PanelNormalizer",
    "fits_orientation",
]
