"""Job file schema and loading for optimization runs.

Public API:
    - JobConfiguration: Root job file model
    - PanelConfig, StockSheetConfig, OptionsConfig, DefaultsConfig: Job sections
    - load_job: Load a job from a JSON file
    - load_job_from_dict: Load a job from a dictionary
    - ConfigError: Exception for job file errors
    - config_to_panels, config_to_options: Convert a job to engine inputs

Example:
    >>> from pathlib import Path
    >>> from sheetnest.application.config import load_job, ConfigError
    >>>
    >>> try:
    ...     job = load_job(Path("kitchen.json"))
    ...     print(f"{len(job.panels)} panel rows")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from sheetnest.application.config.adapter import (
    config_to_defaults,
    config_to_options,
    config_to_panels,
    config_to_stock_sheets,
)
from sheetnest.application.config.loader import (
    ConfigError,
    load_job,
    load_job_from_dict,
)
from sheetnest.application.config.schema import (
    SUPPORTED_VERSIONS,
    DefaultsConfig,
    JobConfiguration,
    OptionsConfig,
    PanelConfig,
    StockSheetConfig,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "DefaultsConfig",
    "JobConfiguration",
    "OptionsConfig",
    "PanelConfig",
    "StockSheetConfig",
    "config_to_defaults",
    "config_to_options",
    "config_to_panels",
    "config_to_stock_sheets",
    "load_job",
    "load_job_from_dict",
]
