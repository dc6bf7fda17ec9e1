"""Config module exports."""

from objcov.config.loader import load_config
from objcov.config.models import (
    LoggingConfig,
    ObjcovConfig,
    ReportConfig,
    ToolConfig,
)

__all__ = [
    "load_config",
    "LoggingConfig",
    "ObjcovConfig",
    "ReportConfig",
    "ToolConfig",
]
