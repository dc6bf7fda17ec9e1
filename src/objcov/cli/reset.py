"""objcov reset command - delete accumulated gcov counters."""

from pathlib import Path

import click
import questionary

from objcov.core.errors import ObjcovError, UsageError
from objcov.core.progress import pluralize, status
from objcov.coverage.tool import reset_accumulated_coverage


@click.command()
@click.argument("root", required=False, type=click.Path(path_type=Path))
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def reset_command(ctx: click.Context, root: Path | None, yes: bool) -> None:
    """Delete accumulated .gcda files for a fresh coverage run.

    gcov adds every test run's counts to the existing .gcda files. Reset
    before running a test suite whose coverage increment you want to see.

    ROOT is the top directory of the instrumented sources.
    """
    if root is None:
        raise click.UsageError(UsageError.missing_root().message, ctx=ctx)

    if not yes:
        answer = questionary.confirm(
            f"Delete all accumulated coverage data under {root}?",
            default=False,
        ).ask()
        if not answer:
            status("Cancelled", style="none")
            return

    try:
        removed = reset_accumulated_coverage(root)
    except ObjcovError as e:
        raise click.ClickException(e.message) from e

    status(f"Removed {pluralize(len(removed), 'coverage data file')}", style="success")
