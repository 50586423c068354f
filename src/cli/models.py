"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI commands.

    - SUCCESS (0): Command completed successfully
    - GENERAL_ERROR (1): Validation failure, GraphQL error, failed mutation,
      missing page or any unexpected error
    - LINT_FAILED (2): Lint found error-severity issues
    - CONFIG_ERROR (3): Configuration missing or invalid
    - NETWORK_ERROR (4): Network connectivity, timeout or HTTP failure

    Example:
        >>> raise typer.Exit(ExitCode.NETWORK_ERROR)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    LINT_FAILED = 2
    CONFIG_ERROR = 3
    NETWORK_ERROR = 4
