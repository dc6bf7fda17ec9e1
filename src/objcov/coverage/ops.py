"""Report orchestration: discover -> gcov -> parse -> aggregate -> filter -> render.

Per-object failures are isolated by default. A gcov failure (missing
binary, non-zero exit, timeout) always only drops that object and lists
it under ``failures``. Unparseable output is handled the same way unless
strict parsing is enabled, in which case the first ParseFormatError aborts
the whole run.
"""

from __future__ import annotations

import contextvars
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from objcov.config.loader import load_config
from objcov.config.models import ObjcovConfig
from objcov.core.errors import ObjcovError, ParseFormatError, ToolInvocationError, UsageError
from objcov.core.logging import clear_run_id, get_logger, set_run_id
from objcov.core.progress import progress
from objcov.coverage.aggregate import aggregate
from objcov.coverage.filters import FilterOptions, apply_filters
from objcov.coverage.models import ObjectFailure, ObjectRecords, ReportResult
from objcov.coverage.parser import parse_gcov_output
from objcov.coverage.report import build_text_report, compute_summary
from objcov.coverage.tool import GcovRunner, discover_sources, source_base

log = get_logger("coverage.ops")

# (base directory, object path) -> gcov stdout lines
Runner = Callable[[Path, str], list[str]]

# Outcome of processing one object: records, or the error that dropped it
_Outcome = ObjectRecords | None | ObjcovError


def _process_object(run: Runner, base: Path, object_path: str, strict: bool) -> _Outcome:
    try:
        lines = run(base, object_path)
    except ToolInvocationError as e:
        log.warning("object_tool_failed", object=object_path, error=e.error_name)
        return e

    try:
        records = parse_gcov_output(lines, object_path)
    except ParseFormatError as e:
        if strict:
            raise
        log.warning("object_parse_failed", object=object_path, error=e.message)
        return e

    if records is None:
        log.info("object_no_data", object=object_path)
    else:
        log.info(
            "object_parsed",
            object=object_path,
            files=len(records.files),
            functions=len(records.functions),
        )
    return records


def _collect(
    run: Runner,
    base: Path,
    objects: list[str],
    *,
    strict: bool,
    max_workers: int,
) -> list[_Outcome]:
    """Process every object, returning outcomes in discovery order."""
    if max_workers <= 1 or len(objects) <= 1:
        return [
            _process_object(run, base, obj, strict)
            for obj in progress(objects, desc="Running gcov", unit="objects")
        ]

    # one context copy per task; run_id is a contextvar
    contexts = [contextvars.copy_context() for _ in objects]

    def process(ctx: contextvars.Context, obj: str) -> _Outcome:
        return ctx.run(_process_object, run, base, obj, strict)

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="objcov-gcov") as pool:
        # map() yields in submission order, whatever order the workers finish in
        return list(
            progress(
                pool.map(process, contexts, objects),
                desc="Running gcov",
                total=len(objects),
                unit="objects",
            )
        )


def generate_report(
    root: Path | str | None,
    exclude_header: bool = True,
    file_detail: bool = False,
    func_detail: bool = False,
    file_keyword: str = "",
    func_keyword: str = "",
    ignore_case: bool = True,
    *,
    runner: Runner | None = None,
    config: ObjcovConfig | None = None,
    strict: bool | None = None,
    max_workers: int | None = None,
) -> ReportResult:
    """Build an object-wise coverage report for a source tree or a single C file.

    Args:
        root: Directory containing instrumented sources, or one ``.c`` file.
        exclude_header: Drop header rows from the file table.
        file_detail: Include the per-file detail table in the text report.
        func_detail: Include the per-function detail table in the text report.
        file_keyword: Keep only rows whose object contains this substring.
        func_keyword: Keep only functions whose name contains this substring.
        ignore_case: Case-insensitive keyword and suffix matching.
        runner: Callable producing gcov output for ``(base, object)``.
                Defaults to a GcovRunner built from ``config.tool``.
        config: Resolved configuration; loaded for ``root`` when omitted.
        strict: Abort on the first unparseable object (default: config).
        max_workers: Objects processed concurrently (default: config).

    Returns:
        Filtered tables, summary, failed objects and the rendered text.

    Raises:
        UsageError: ``root`` is missing or does not exist.
        ParseFormatError: Only in strict mode.
    """
    if root is None or str(root) == "":
        raise UsageError.missing_root()
    root = Path(root)
    if not root.exists():
        raise UsageError.root_not_found(str(root))

    config = config or load_config(root)
    if strict is None:
        strict = config.report.strict_parse
    if max_workers is None:
        max_workers = config.tool.max_workers
    if runner is None:
        runner = GcovRunner(
            gcov_path=config.tool.gcov_path,
            timeout_sec=config.tool.timeout_sec,
            extra_args=tuple(config.tool.extra_args),
        ).run

    set_run_id()
    try:
        base = source_base(root)
        objects = discover_sources(root)
        log.info("report_start", root=str(root), objects=len(objects))

        outcomes = _collect(runner, base, objects, strict=strict, max_workers=max_workers)

        failures = [
            ObjectFailure(object=obj, error=outcome)
            for obj, outcome in zip(objects, outcomes, strict=True)
            if isinstance(outcome, ObjcovError)
        ]
        all_files, all_functions = aggregate(
            outcome for outcome in outcomes if not isinstance(outcome, ObjcovError)
        )

        options = FilterOptions(
            file_keyword=file_keyword,
            func_keyword=func_keyword,
            ignore_case=ignore_case,
            exclude_header=exclude_header,
        )
        files, functions = apply_filters(all_files, all_functions, options)
        summary = compute_summary(files, functions)

        text = build_text_report(
            str(root),
            options,
            files,
            functions,
            summary,
            file_detail=file_detail,
            func_detail=func_detail,
            failures=failures,
        )
        log.info(
            "report_done",
            files=len(files),
            functions=len(functions),
            failures=len(failures),
        )
        return ReportResult(
            files=files,
            functions=functions,
            summary=summary,
            failures=failures,
            text=text,
        )
    finally:
        clear_run_id()
