"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (OBJCOV__SECTION__KEY)
3. Repo YAML (<root>/.objcov/config.yaml)
4. Global YAML (~/.config/objcov/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    OBJCOV__<SECTION>__<KEY>=<VALUE>

Examples:
    OBJCOV__LOGGING__LEVEL=DEBUG
    OBJCOV__TOOL__GCOV_PATH=gcov-13
    OBJCOV__TOOL__TIMEOUT_SEC=120
    OBJCOV__REPORT__STRICT_PARSE=true
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        OBJCOV__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. INFO reports every object processed.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ToolConfig(BaseModel):
    """External coverage tool configuration.

    Env vars:
        OBJCOV__TOOL__GCOV_PATH: gcov executable (name on PATH or absolute path)
        OBJCOV__TOOL__TIMEOUT_SEC: Per-object timeout
        OBJCOV__TOOL__MAX_WORKERS: Objects processed concurrently
    """

    gcov_path: str = Field(
        default="gcov",
        description="gcov executable. Must match the compiler that built the sources "
        "(e.g. gcov-13 for gcc-13).",
    )
    timeout_sec: float = Field(
        default=60.0,
        description="Per-object timeout. A hung gcov fails that object only.",
    )
    max_workers: int = Field(
        default=1,
        description="Objects processed concurrently. Row order is always discovery order.",
    )
    extra_args: list[str] = Field(
        default_factory=list,
        description="Additional gcov flags inserted before the object path.",
    )

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v

    @field_validator("max_workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_workers must be >= 1, got {v}")
        return v


class ReportConfig(BaseModel):
    """Report defaults.

    Env vars:
        OBJCOV__REPORT__EXCLUDE_HEADER: Drop header rows from the file table
        OBJCOV__REPORT__IGNORE_CASE: Case-insensitive keyword filters
        OBJCOV__REPORT__STRICT_PARSE: Abort the run on malformed gcov output
    """

    exclude_header: bool = Field(
        default=True,
        description="Count only compiled sources in the file table (under-estimates "
        "coverage of shared headers instead of counting them once per object).",
    )
    ignore_case: bool = Field(
        default=True,
        description="Case-insensitive keyword filters.",
    )
    strict_parse: bool = Field(
        default=False,
        description="Abort the whole report when one object's gcov output cannot be parsed. "
        "When false the object is skipped and listed under failed objects.",
    )


class ObjcovConfig(BaseModel):
    """Root configuration for objcov.

    All settings can be configured via:
    1. Environment variables: OBJCOV__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    tool: ToolConfig = Field(default_factory=ToolConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
