"""goimpl CLI - generate Go interface stubs for the type under the cursor."""

import click

from goimpl.cli.run import run_command
from goimpl.core.logging import configure_logging


@click.group()
@click.version_option(package_name="goimpl", prog_name="goimpl")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """goimpl - implement a Go interface on the type under the cursor."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(run_command, name="run")


if __name__ == "__main__":
    cli()
