"""Pydantic configuration schema models for optimization job files.

A job file describes one optimization run: the panels to cut, the options
for the run and, optionally, the stock sheets available per material.

Panel dimensions are intentionally not range-checked here. A panel with a
zero or negative dimension is still a well-formed job row; the engine's
normalizer reports it as a rejected panel alongside the rest of the result.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sheetnest.domain.value_objects import (
    DEFAULT_SHEET_LENGTH,
    DEFAULT_SHEET_WIDTH,
    MIN_REMNANT_SIZE,
    OptimizationMode,
)

# Supported schema versions for job files
# Version 1.0: Initial schema with panels, options and stock sheets
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class PanelConfig(BaseModel):
    """One panel row of a cut list.

    Attributes:
        id: Caller-assigned panel id.
        label: Display label. Defaults to the id.
        material: Material name, used for grouping and stock lookup.
        thickness: Material thickness in mm.
        length: Panel length in mm.
        width: Panel width in mm.
        quantity: Number of identical pieces.
        grain: Grain direction: "none", "length" or "width".
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    label: str | None = None
    material: str
    thickness: float = 18.0
    length: float
    width: float
    quantity: int = 1
    grain: str = "none"


class StockSheetConfig(BaseModel):
    """Stock sheet available for a material.

    Attributes:
        material: Material name. Defaults to the key it is stored under.
        length: Sheet length in mm.
        width: Sheet width in mm.
        thickness: Sheet thickness in mm.
        cost_per_sheet: Purchase cost of one sheet.
    """

    model_config = ConfigDict(extra="forbid")

    material: str | None = None
    length: float = Field(default=DEFAULT_SHEET_LENGTH, gt=0, le=10000)
    width: float = Field(default=DEFAULT_SHEET_WIDTH, gt=0, le=10000)
    thickness: float = Field(default=18.0, gt=0, le=200)
    cost_per_sheet: float = Field(default=0.0, ge=0)


class OptionsConfig(BaseModel):
    """Run options.

    Attributes:
        mode: ESTIMATION or PRODUCTION.
        blade_kerf: Saw kerf in mm.
        parallel: Pack material groups concurrently.
        time_budget: Seconds before remaining units are aborted.
    """

    model_config = ConfigDict(extra="forbid")

    mode: OptimizationMode = OptimizationMode.PRODUCTION
    blade_kerf: float = Field(default=4.0, ge=0, le=20, description="Saw kerf in mm")
    parallel: bool = False
    time_budget: float | None = Field(default=None, gt=0)

    @field_validator("mode", mode="before")
    @classmethod
    def normalize_mode(cls, v: object) -> object:
        """Accept mode names in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


class DefaultsConfig(BaseModel):
    """Overrides for the system defaults.

    Attributes:
        sheet_length: Fallback sheet length in mm.
        sheet_width: Fallback sheet width in mm.
        sheet_cost: Fallback cost per sheet.
        min_remnant_size: Threshold above which a waste region is reusable.
    """

    model_config = ConfigDict(extra="forbid")

    sheet_length: float = Field(default=DEFAULT_SHEET_LENGTH, gt=0, le=10000)
    sheet_width: float = Field(default=DEFAULT_SHEET_WIDTH, gt=0, le=10000)
    sheet_cost: float = Field(default=0.0, ge=0)
    min_remnant_size: float = Field(default=MIN_REMNANT_SIZE, ge=0)


class JobConfiguration(BaseModel):
    """Root model of an optimization job file.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0").
        panels: Panel rows to cut.
        options: Run options.
        stock_sheets: Stock sheets keyed by material name. The key
            "default" is used for materials with no better match.
        defaults: Optional overrides for system defaults.

    Example:
        >>> job = JobConfiguration(
        ...     schema_version="1.0",
        ...     panels=[PanelConfig(id="p1", material="Plywood", length=600, width=400)],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    panels: list[PanelConfig]
    options: OptionsConfig = Field(default_factory=OptionsConfig)
    stock_sheets: dict[str, StockSheetConfig] = Field(default_factory=dict)
    defaults: DefaultsConfig | None = None

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions within a supported major version are accepted.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
