"""Collaborators around the external gcov tool.

- discover_sources: which compilation objects exist under a root
- GcovRunner: run gcov for one object and capture its summary output
- reset_accumulated_coverage: delete gcov's accumulated .gcda counters

gcov accumulates counters across runs in .gcda files next to the objects.
That state lives on disk only; nothing here mirrors it in memory.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from objcov.config.constants import (
    DATA_SUFFIX,
    GCOV_FLAGS,
    GCOV_OBJECT_DIR_FLAG,
    SOURCE_SUFFIX,
)
from objcov.core.errors import PlatformUnsupportedError, ToolInvocationError, UsageError
from objcov.core.logging import get_logger

log = get_logger("coverage.tool")


def source_base(root: Path) -> Path:
    """Directory object paths are relative to."""
    return root.parent if root.is_file() else root


def discover_sources(root: Path) -> list[str]:
    """List compilation objects under ``root`` as sorted relative POSIX paths.

    If ``root`` itself is a C file, the result is just its file name.
    """
    if root.is_file():
        if root.name.lower().endswith(SOURCE_SUFFIX):
            return [root.name]
        return []

    return sorted(
        PurePosixPath(path.relative_to(root)).as_posix()
        for path in root.rglob(f"*{SOURCE_SUFFIX}")
        if path.is_file()
    )


@dataclass
class GcovRunner:
    """Runs ``gcov -p -n -f -o <object dir> <object>`` for one object."""

    gcov_path: str = "gcov"
    timeout_sec: float = 60.0
    extra_args: tuple[str, ...] = ()

    def command(self, base: Path, object_path: str) -> list[str]:
        source = base / object_path
        return [
            self.gcov_path,
            *GCOV_FLAGS,
            GCOV_OBJECT_DIR_FLAG,
            str(source.parent),
            *self.extra_args,
            str(source),
        ]

    def run(self, base: Path, object_path: str) -> list[str]:
        """Return gcov's stdout lines for one object; stderr is discarded.

        Bytes that are not valid UTF-8 (e.g. Latin-1 identifiers) are
        replaced rather than aborting the object.

        Raises:
            ToolInvocationError: gcov is missing, cannot be started, exits
                non-zero, or times out.
        """
        cmd = self.command(base, object_path)
        # gcov output is parsed by its English markers
        env = {**os.environ, "LC_ALL": "C", "LANGUAGE": "en_US"}
        log.debug("gcov_run", object=object_path, cmd=" ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout_sec,
                env=env,
            )
        except FileNotFoundError as e:
            raise ToolInvocationError.not_found(self.gcov_path, object_path) from e
        except subprocess.TimeoutExpired as e:
            raise ToolInvocationError.timeout(self.gcov_path, object_path, self.timeout_sec) from e
        except OSError as e:
            reason = e.strerror or str(e)
            raise ToolInvocationError.start_failed(self.gcov_path, object_path, reason) from e

        if result.returncode != 0:
            raise ToolInvocationError.failed(self.gcov_path, object_path, result.returncode)
        return result.stdout.splitlines()


def reset_accumulated_coverage(root: Path | None, *, platform: str | None = None) -> list[Path]:
    """Delete every accumulated .gcda file under ``root``.

    Safe to call when nothing has been recorded yet.

    Args:
        root: Top directory of the instrumented sources.
        platform: Override of ``os.name`` (for tests).

    Returns:
        Paths of the removed files.

    Raises:
        UsageError: ``root`` is missing or does not exist.
        PlatformUnsupportedError: Not a POSIX platform; nothing is deleted.
    """
    if root is None or str(root) == "":
        raise UsageError.missing_root()
    platform = platform or os.name
    if platform != "posix":
        raise PlatformUnsupportedError.for_platform(platform, "Coverage reset")
    if not root.exists():
        raise UsageError.root_not_found(str(root))

    base = source_base(root)
    removed: list[Path] = []
    for path in sorted(base.rglob(f"*{DATA_SUFFIX}")):
        if not path.is_file():
            continue
        path.unlink(missing_ok=True)
        removed.append(path)

    log.info("coverage_reset", root=str(base), removed=len(removed))
    return removed
