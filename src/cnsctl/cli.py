"""Root CLI group for cnsctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from cnsctl import __version__
from cnsctl.commands import register_commands
from cnsctl.commands._context import AppContext
from cnsctl.config.settings import CnsSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="cnsctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the resolved value.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and lookup timings.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--registry",
    "registry_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Registry TOML file to resolve against.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    registry_path: Path | None,
) -> None:
    """cnsctl — namehashing, address checksums, and .crypto record resolution."""
    settings = CnsSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        registry_path=registry_path.resolve() if registry_path else None,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
