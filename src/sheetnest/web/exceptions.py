"""Error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sheetnest.application.commands import (
    EmptyPanelListError,
    InvalidInputError,
    OptimizationError,
)
from sheetnest.application.config import ConfigError


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Invalid job",
                "error_type": exc.error_type,
                "details": exc.details or None,
            },
        )

    @app.exception_handler(EmptyPanelListError)
    async def empty_panel_list_handler(
        request: Request, exc: EmptyPanelListError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "empty_panel_list",
                "details": None,
            },
        )

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(
        request: Request, exc: InvalidInputError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "invalid_input",
                "details": None,
            },
        )

    @app.exception_handler(OptimizationError)
    async def optimization_error_handler(
        request: Request, exc: OptimizationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "optimization",
                "details": None,
            },
        )
