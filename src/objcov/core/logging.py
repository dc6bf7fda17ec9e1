"""structlog on top of stdlib logging handlers.

Every report run gets a short run id that is attached to each event, so
the lines of one run can be picked out of a shared log file. Loggers are
lazy proxies: nothing is resolved until an event is emitted, which lets
the CLI configure outputs after modules have been imported.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from objcov.config.models import LoggingConfig, LogOutputConfig

_run_id: ContextVar[str | None] = ContextVar("run_id", default=None)

# First file destination of the active configuration
_log_file_path: Path | None = None

_CONSOLE_DESTINATIONS = {"stderr", "stdout"}


def get_run_id() -> str | None:
    return _run_id.get()


def set_run_id(run_id: str | None = None) -> str:
    """Start a report run, generating an id unless one is given."""
    rid = run_id or uuid4().hex[:12]
    _run_id.set(rid)
    return rid


def clear_run_id() -> None:
    _run_id.set(None)


def get_log_file_path() -> Path | None:
    """Log file the CLI can point at after a failure, if one is configured."""
    return _log_file_path


def _add_run_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if rid := get_run_id():
        event_dict.setdefault("run_id", rid)
    return event_dict


class ConsoleSuppressingFilter(logging.Filter):
    """Hold back console records while a progress bar is drawing.

    Attached to stderr/stdout handlers only; files get every record.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: ARG002
        from objcov.core.progress import is_console_suppressed

        return not is_console_suppressed()


def _level_number(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def _make_handler(output: LogOutputConfig) -> logging.Handler:
    handler: logging.Handler
    if output.destination == "stderr":
        handler = logging.StreamHandler(sys.stderr)
    elif output.destination == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a")
    if output.destination in _CONSOLE_DESTINATIONS:
        handler.addFilter(ConsoleSuppressingFilter())
    return handler


def _make_formatter(
    output: LogOutputConfig,
    pre_chain: list[structlog.types.Processor],
) -> logging.Formatter:
    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        colors = output.destination == "stderr" and sys.stderr.isatty()
        renderer = structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0, pad_level=False)
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def configure_logging(*, config: LoggingConfig | None = None, level: str = "INFO") -> None:
    """Route structlog events to the outputs in ``config``.

    Without a config, events at ``level`` and above go to stderr. Calling
    this again replaces the previous handlers.
    """
    global _log_file_path
    from objcov.config.models import LoggingConfig

    if config is None:
        config = LoggingConfig(level=level)  # type: ignore[arg-type]
    root_level = _level_number(config.level)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
        _add_run_id,  # type: ignore[list-item]
    ]
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # reconfiguring must reach loggers that were already used
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(root_level)

    _log_file_path = None
    for output in config.outputs:
        if output.destination not in _CONSOLE_DESTINATIONS and _log_file_path is None:
            _log_file_path = Path(output.destination)
        handler = _make_handler(output)
        handler.setLevel(_level_number(output.level or config.level))
        handler.setFormatter(_make_formatter(output, pre_chain))
        root_logger.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Lazy logger; the stdlib logger ``name`` is looked up per event."""
    if name:
        return structlog.get_logger(name)  # type: ignore[no-any-return]
    return structlog.get_logger()  # type: ignore[no-any-return]
