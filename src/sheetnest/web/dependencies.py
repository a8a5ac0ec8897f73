"""FastAPI dependency injection for optimization services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from sheetnest.application.commands import OptimizeCutListCommand


@lru_cache(maxsize=1)
def get_optimize_command() -> OptimizeCutListCommand:
    """Get the shared OptimizeCutListCommand instance."""
    return OptimizeCutListCommand()


# Type alias for cleaner endpoint signatures
OptimizeCommandDep = Annotated[OptimizeCutListCommand, Depends(get_optimize_command)]
