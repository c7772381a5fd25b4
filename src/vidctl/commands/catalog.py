"""Catalog-wide commands: list, phases, categories, reconcile."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vidctl.commands._base import VidCommand
from vidctl.domain.phases import Phase

if TYPE_CHECKING:
    from vidctl.commands._context import AppContext


@click.command(
    "list",
    cls=VidCommand,
    examples="""\
  vidctl list --phase ideas
  vidctl list --phase publish-pending
  vidctl -q list --phase started""",
)
@click.option(
    "--phase",
    type=click.Choice([p.value for p in Phase]),
    required=True,
    help="Phase to list.",
)
@click.pass_obj
def list_cmd(app: AppContext, phase: str) -> None:
    """List items in a phase, oldest publish date first."""
    from vidctl.services.catalog import CatalogService

    app.emit(CatalogService(app.workspace).list_by_phase(phase))


@click.command(
    cls=VidCommand,
    examples="""\
  vidctl phases
  vidctl --json phases""",
)
@click.pass_obj
def phases(app: AppContext) -> None:
    """Show how many items are in each phase."""
    from vidctl.services.catalog import CatalogService

    app.emit(CatalogService(app.workspace).counts_by_phase())


@click.command(cls=VidCommand, examples="  vidctl categories\n  vidctl -v categories")
@click.pass_obj
def categories(app: AppContext) -> None:
    """List categories found under the content directory."""
    from vidctl.services.catalog import CatalogService

    app.emit(CatalogService(app.workspace).list_categories())


@click.command(cls=VidCommand, examples="  vidctl reconcile\n  vidctl --json reconcile")
@click.pass_obj
def reconcile(app: AppContext) -> None:
    """Report index entries and documents that do not match. Repairs nothing."""
    from vidctl.services.catalog import CatalogService

    app.emit(CatalogService(app.workspace).reconcile())
