"""Application layer - use cases and orchestration."""

from .commands import (
    EmptyPanelListError,
    InvalidInputError,
    OptimizationError,
    OptimizeCutListCommand,
    optimize,
)
from .dtos import EngineDefaults, OptimizationOptions, OptimizationResult

__all__ = [
    "EmptyPanelListError",
    "EngineDefaults",
    "InvalidInputError",
    "OptimizationError",
    "OptimizationOptions",
    "OptimizationResult",
    "OptimizeCutListCommand",
    "optimize",
]
