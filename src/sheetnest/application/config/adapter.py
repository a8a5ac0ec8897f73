"""Adapter to convert a JobConfiguration into engine inputs.

The engine works on frozen dataclasses; this module maps the Pydantic job
models onto them so the CLI and the HTTP API share one conversion path.
"""

from sheetnest.application.config.schema import (
    DefaultsConfig,
    JobConfiguration,
    PanelConfig,
    StockSheetConfig,
)
from sheetnest.application.dtos import EngineDefaults, OptimizationOptions
from sheetnest.domain.value_objects import (
    OptimizationMode,
    PanelRequest,
    StockSheetSpec,
)


def config_to_panels(config: JobConfiguration) -> list[PanelRequest]:
    """Convert job panel rows to PanelRequest objects.

    Grain strings are passed through unchanged so that unknown values are
    reported by the normalizer as rejected panels.
    """
    return [_panel_to_request(panel) for panel in config.panels]


def _panel_to_request(panel: PanelConfig) -> PanelRequest:
    return PanelRequest(
        id=panel.id,
        label=panel.label if panel.label is not None else panel.id,
        material=panel.material,
        thickness=panel.thickness,
        length=panel.length,
        width=panel.width,
        quantity=panel.quantity,
        grain=panel.grain,  # type: ignore[arg-type]
    )


def config_to_stock_sheets(
    stock_sheets: dict[str, StockSheetConfig],
) -> dict[str, StockSheetSpec]:
    """Convert stock sheet configs to StockSheetSpec, preserving key order."""
    return {
        key: StockSheetSpec(
            material=sheet.material or key,
            length=sheet.length,
            width=sheet.width,
            thickness=sheet.thickness,
            cost_per_sheet=sheet.cost_per_sheet,
        )
        for key, sheet in stock_sheets.items()
    }


def config_to_defaults(config: DefaultsConfig | None) -> EngineDefaults:
    """Convert defaults overrides to EngineDefaults.

    Returns the stock EngineDefaults when no overrides are given.
    """
    if config is None:
        return EngineDefaults()
    return EngineDefaults(
        sheet_length=config.sheet_length,
        sheet_width=config.sheet_width,
        sheet_cost=config.sheet_cost,
        min_remnant_size=config.min_remnant_size,
    )


def config_to_options(
    config: JobConfiguration,
    mode: OptimizationMode | None = None,
    blade_kerf: float | None = None,
    parallel: bool | None = None,
) -> OptimizationOptions:
    """Build OptimizationOptions from a job, with optional overrides.

    Args:
        config: Validated job configuration.
        mode: Overrides the job's mode when given.
        blade_kerf: Overrides the job's kerf when given.
        parallel: Overrides the job's parallel flag when given.

    Returns:
        OptimizationOptions for the engine.
    """
    options = config.options
    return OptimizationOptions(
        mode=mode if mode is not None else options.mode,
        blade_kerf=blade_kerf if blade_kerf is not None else options.blade_kerf,
        stock_sheets=config_to_stock_sheets(config.stock_sheets) or None,
        parallel=parallel if parallel is not None else options.parallel,
        time_budget=options.time_budget,
        defaults=config_to_defaults(config.defaults),
    )
