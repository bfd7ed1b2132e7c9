"""CLI command implementations for the stockcut application.

This package contains subcommands for the stockcut CLI, including:
- validate: Validate a job file
"""

from stockcut.cli.commands.validate import display_config_error, validate_command

__all__ = ["display_config_error", "validate_command"]
