"""Job validation endpoints."""

from typing import Any

from fastapi import APIRouter, Body

from sheetnest.application.config import (
    config_to_options,
    config_to_panels,
    load_job_from_dict,
)
from sheetnest.domain.services import MaterialGrouper, PanelNormalizer
from sheetnest.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
def validate_job(
    job: dict[str, Any] = Body(..., description="Job in the job file format"),
) -> ValidationResultSchema:
    """Validate a job without optimizing it.

    Schema errors raise ConfigError (422). Panels the engine would reject or
    could not place on their stock sheet are returned as warnings.
    """
    config = load_job_from_dict(job)
    if not config.panels:
        return ValidationResultSchema(
            is_valid=False,
            errors=[{"path": "panels", "message": "Panel list is empty"}],
        )

    options = config_to_options(config)
    normalized = PanelNormalizer().normalize(config_to_panels(config))
    defaults = options.defaults
    grouping = MaterialGrouper(
        default_length=defaults.sheet_length,
        default_width=defaults.sheet_width,
        default_cost=defaults.sheet_cost,
    ).group(normalized.units, options.stock_sheets, kerf=options.blade_kerf)

    warnings = [
        {"panel_id": r.panel_id, "reason": r.reason.value, "message": r.message}
        for r in normalized.rejected
    ]
    warnings.extend(
        {"panel_id": u.panel_id, "unit_id": u.unit_id, "reason": u.reason.value, "message": u.message}
        for u in grouping.unplaceable
    )
    return ValidationResultSchema(
        is_valid=True,
        expanded_quantity=normalized.expanded_quantity,
        warnings=warnings,
    )
