"""objcov CLI - objcov command."""

import click

from objcov.cli.report import report_command
from objcov.cli.reset import reset_command
from objcov.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="objcov")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """objcov - object-wise gcov coverage reports for C source trees."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(report_command, name="report")
cli.add_command(reset_command, name="reset")


if __name__ == "__main__":
    cli()
