"""vidctl entry point: global flags, settings, and the command table."""

from __future__ import annotations

from pathlib import Path

import click

from vidctl import __version__
from vidctl.commands import register_commands
from vidctl.commands._context import AppContext
from vidctl.config.settings import VidSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="vidctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with timings and debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Use this vidctl.toml instead of searching for one.",
)
@click.option(
    "-C",
    "--root",
    "workspace_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Workspace root (defaults to the config file's directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    workspace_root: Path | None,
) -> None:
    """vidctl: track videos from idea to publication."""
    settings = VidSettings.from_cli(
        config_path=config_path,
        workspace_root=workspace_root,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
