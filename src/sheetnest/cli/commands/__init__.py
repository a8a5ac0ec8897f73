"""CLI command implementations for the sheetnest application.

This package contains subcommands for the sheetnest CLI, including:
- validate: Validate a job file
"""

from sheetnest.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
