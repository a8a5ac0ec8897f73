"""Infrastructure layer - packing algorithms, reporting and formatters."""

from .bin_packing import (
    BinPackingConfig,
    GroupPackingResult,
    GuillotinePacker,
    SheetLayout,
)
from .cut_sequence import CutSequenceGenerator, estimate_cut_minutes, total_cut_length
from .formatters import (
    CutListFormatter,
    JsonExporter,
    ResultSummaryFormatter,
    result_to_dict,
)
from .waste_tracker import WasteTracker
from .yield_report import YieldReporter, YieldTotals

__all__ = [
    # Bin packing
    "BinPackingConfig",
    "GroupPackingResult",
    "GuillotinePacker",
    "SheetLayout",
    # Post-packing analysis
    "CutSequenceGenerator",
    "WasteTracker",
    "YieldReporter",
    "YieldTotals",
    "estimate_cut_minutes",
    "total_cut_length",
    # Formatters
    "CutListFormatter",
    "JsonExporter",
    "ResultSummaryFormatter",
    "result_to_dict",
]
