"""
Exit Codes - Process exit statuses for the CLI.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """CLI exit codes."""

    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    FILE_NOT_FOUND = 3
    FALLBACK = 4  # tracker unusable, local data unchanged
    CANCELLED = 130
