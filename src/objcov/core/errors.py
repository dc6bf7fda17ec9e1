"""objcov error types with typed error codes.

Error code ranges:
- 1xxx: Usage
- 2xxx: Config
- 3xxx: Parse (gcov output format)
- 4xxx: Tool invocation
- 5xxx: Platform
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Usage (1xxx)
    USAGE_MISSING_ROOT = 1001
    USAGE_ROOT_NOT_FOUND = 1002

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Parse (3xxx)
    PARSE_COUNT_MISMATCH = 3001
    PARSE_BAD_QUOTING = 3002
    PARSE_BAD_DATA = 3003

    # Tool (4xxx)
    TOOL_NOT_FOUND = 4001
    TOOL_FAILED = 4002
    TOOL_TIMEOUT = 4003
    TOOL_START_FAILED = 4004

    # Platform (5xxx)
    PLATFORM_UNSUPPORTED = 5001


@dataclass(frozen=True, slots=True)
class ObjcovError(Exception):
    """Base error with structured context for CLI and JSON output."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'TOOL_TIMEOUT')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class UsageError(ObjcovError):
    """Caller supplied unusable arguments. Raised before any work starts."""

    @classmethod
    def missing_root(cls) -> "UsageError":
        return cls(
            code=ErrorCode.USAGE_MISSING_ROOT,
            message="A directory or C file containing instrumented sources must be specified",
        )

    @classmethod
    def root_not_found(cls, root: str) -> "UsageError":
        return cls(
            code=ErrorCode.USAGE_ROOT_NOT_FOUND,
            message=f"Source root does not exist: {root}",
            details={"root": root},
        )


class ConfigError(ObjcovError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ParseFormatError(ObjcovError):
    """gcov output does not have the layout the parser understands."""

    @classmethod
    def count_mismatch(
        cls, object_name: str, files: int, functions: int, data: int
    ) -> "ParseFormatError":
        return cls(
            code=ErrorCode.PARSE_COUNT_MISMATCH,
            message=(
                f"Unexpected gcov output format for {object_name}: "
                f"{files} file + {functions} function declarations "
                f"but {data} data blocks"
            ),
            details={
                "object": object_name,
                "files": files,
                "functions": functions,
                "data": data,
            },
        )

    @classmethod
    def bad_quoting(cls, object_name: str, line: str) -> "ParseFormatError":
        return cls(
            code=ErrorCode.PARSE_BAD_QUOTING,
            message=f"Unrecognized name quoting in gcov output for {object_name}: {line!r}",
            details={"object": object_name, "line": line},
        )

    @classmethod
    def bad_data(cls, object_name: str, line: str) -> "ParseFormatError":
        return cls(
            code=ErrorCode.PARSE_BAD_DATA,
            message=f"Malformed 'Lines executed' record for {object_name}: {line!r}",
            details={"object": object_name, "line": line},
        )


class ToolInvocationError(ObjcovError):
    """The external coverage tool could not produce output for one object."""

    @classmethod
    def not_found(cls, tool: str, object_name: str) -> "ToolInvocationError":
        return cls(
            code=ErrorCode.TOOL_NOT_FOUND,
            message=f"Coverage tool not found: {tool}",
            details={"tool": tool, "object": object_name},
        )

    @classmethod
    def failed(cls, tool: str, object_name: str, returncode: int) -> "ToolInvocationError":
        return cls(
            code=ErrorCode.TOOL_FAILED,
            message=f"{tool} exited with status {returncode} for {object_name}",
            details={"tool": tool, "object": object_name, "returncode": returncode},
        )

    @classmethod
    def timeout(cls, tool: str, object_name: str, timeout_sec: float) -> "ToolInvocationError":
        return cls(
            code=ErrorCode.TOOL_TIMEOUT,
            message=f"{tool} timed out after {timeout_sec}s for {object_name}",
            retryable=True,
            details={"tool": tool, "object": object_name, "timeout_sec": timeout_sec},
        )

    @classmethod
    def start_failed(cls, tool: str, object_name: str, reason: str) -> "ToolInvocationError":
        return cls(
            code=ErrorCode.TOOL_START_FAILED,
            message=f"Could not start {tool} for {object_name}: {reason}",
            details={"tool": tool, "object": object_name, "reason": reason},
        )


class PlatformUnsupportedError(ObjcovError):
    """Operation is not implemented for the running operating system."""

    @classmethod
    def for_platform(cls, platform: str, operation: str) -> "PlatformUnsupportedError":
        return cls(
            code=ErrorCode.PLATFORM_UNSUPPORTED,
            message=f"{operation} is not supported on platform: {platform}",
            details={"platform": platform, "operation": operation},
        )

