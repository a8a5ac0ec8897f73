"""Optimization endpoints."""

from typing import Any

from fastapi import APIRouter, Body

from sheetnest.application.config import (
    config_to_options,
    config_to_panels,
    load_job_from_dict,
)
from sheetnest.infrastructure.formatters import result_to_dict
from sheetnest.web.dependencies import OptimizeCommandDep
from sheetnest.web.schemas.responses import OptimizationResultSchema

router = APIRouter(prefix="/optimize", tags=["optimize"])


@router.post("", response_model=OptimizationResultSchema)
def optimize_job(
    command: OptimizeCommandDep,
    job: dict[str, Any] = Body(..., description="Job in the job file format"),
) -> OptimizationResultSchema:
    """Optimize a cut list.

    The request body uses the same format as a job file. Rejected and
    unplaceable panels are reported in the response, not as errors.

    Raises:
        ConfigError: If the job does not match the schema (422).
        EmptyPanelListError: If the job has no panels (422).
    """
    config = load_job_from_dict(job)
    result = command.execute(config_to_panels(config), config_to_options(config))
    return OptimizationResultSchema.model_validate(result_to_dict(result))
