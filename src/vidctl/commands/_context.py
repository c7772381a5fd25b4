"""AppContext: what every command receives through ``@click.pass_obj``."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vidctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from vidctl.config.settings import VidSettings
    from vidctl.infrastructure.workspace import Workspace
    from vidctl.services.result import ServiceResult


class AppContext:
    """Settings, output mode, and a lazily opened workspace.

    Building the context configures logging (and telemetry under
    ``--verbose``). The workspace, and with it plugin discovery, is only
    created when a command asks for it.
    """

    def __init__(self, settings: VidSettings) -> None:
        from vidctl.config.logging import configure_logging

        self.settings = settings
        self.output = OutputSettings.from_settings(settings)
        self._workspace: Workspace | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            from vidctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def workspace(self) -> Workspace:
        if self._workspace is None:
            from vidctl.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; exit with status 1 if it failed.

        Successful output goes to stdout with warnings on stderr (JSON
        output already carries them). Failures go to stderr.
        """
        text = format_result(result, self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)
        click.echo(text)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
