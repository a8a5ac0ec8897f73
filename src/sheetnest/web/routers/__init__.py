"""API routers for the REST API."""

from sheetnest.web.routers.optimize import router as optimize_router
from sheetnest.web.routers.validate import router as validate_router

__all__ = [
    "optimize_router",
    "validate_router",
]
