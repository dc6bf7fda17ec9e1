"""Core module exports."""

from objcov.core.errors import (
    ConfigError,
    ErrorCode,
    ObjcovError,
    ParseFormatError,
    PlatformUnsupportedError,
    ToolInvocationError,
    UsageError,
)
from objcov.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from objcov.core.progress import pluralize, progress, status

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "ObjcovError",
    "ParseFormatError",
    "PlatformUnsupportedError",
    "ToolInvocationError",
    "UsageError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "pluralize",
    "progress",
    "status",
]
