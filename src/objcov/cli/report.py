"""objcov report command - coverage report for a source tree."""

import json
from pathlib import Path

import click

from objcov.config.loader import load_config
from objcov.core.errors import ObjcovError, UsageError
from objcov.core.logging import configure_logging, get_log_file_path
from objcov.core.progress import pluralize, status
from objcov.coverage.filters import FilterOptions
from objcov.coverage.ops import generate_report
from objcov.coverage.report import build_json_report


@click.command()
@click.argument("root", required=False, type=click.Path(path_type=Path))
@click.option(
    "--exclude-header/--include-header",
    default=None,
    help="Drop header files from the file table (default: config, normally on)",
)
@click.option("--file-detail", is_flag=True, help="Print the per-file detail table")
@click.option("--func-detail", is_flag=True, help="Print the per-function detail table")
@click.option("--file-keyword", default="", help="Keep only objects containing KEYWORD")
@click.option("--func-keyword", default="", help="Keep only functions containing KEYWORD")
@click.option(
    "--ignore-case/--case-sensitive",
    default=None,
    help="Keyword matching case sensitivity (default: config, normally ignore case)",
)
@click.option("--strict", is_flag=True, help="Abort on unparseable gcov output")
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Parallel gcov runs")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None,
              help="Per-object gcov timeout in seconds")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def report_command(
    ctx: click.Context,
    root: Path | None,
    exclude_header: bool | None,
    file_detail: bool,
    func_detail: bool,
    file_keyword: str,
    func_keyword: str,
    ignore_case: bool | None,
    strict: bool,
    workers: int | None,
    timeout: float | None,
    as_json: bool,
) -> None:
    """Report object-wise line, file and function coverage.

    ROOT is a directory of gcov-instrumented C sources, or a single C file.
    Run the test suite first; gcov accumulates counts until 'objcov reset'.
    """
    if root is None:
        raise click.UsageError(UsageError.missing_root().message, ctx=ctx)
    if not root.exists():
        raise click.UsageError(UsageError.root_not_found(str(root)).message, ctx=ctx)

    overrides = {}
    if timeout is not None:
        overrides["timeout_sec"] = timeout
    if workers is not None:
        overrides["max_workers"] = workers
    try:
        config = load_config(root, **({"tool": overrides} if overrides else {}))
    except ObjcovError as e:
        raise click.ClickException(e.message) from e

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    if not verbose:
        configure_logging(config=config.logging)

    if exclude_header is None:
        exclude_header = config.report.exclude_header
    if ignore_case is None:
        ignore_case = config.report.ignore_case

    try:
        result = generate_report(
            root,
            exclude_header=exclude_header,
            file_detail=file_detail,
            func_detail=func_detail,
            file_keyword=file_keyword,
            func_keyword=func_keyword,
            ignore_case=ignore_case,
            config=config,
            strict=True if strict else None,
        )
    except ObjcovError as e:
        message = e.message
        if log_path := get_log_file_path():
            message += f"\nSee {log_path} for details."
        raise click.ClickException(message) from e

    if as_json:
        options = FilterOptions(
            file_keyword=file_keyword,
            func_keyword=func_keyword,
            ignore_case=ignore_case,
            exclude_header=exclude_header,
        )
        click.echo(json.dumps(build_json_report(str(root), options, result), indent=2))
    else:
        click.echo(result.text, nl=False)

    if result.failures:
        status(f"{pluralize(len(result.failures), 'object')} failed", style="warning")
