"""Command: show a single item."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vidctl.commands._base import VidCommand, item_address

if TYPE_CHECKING:
    from vidctl.commands._context import AppContext


@click.command(
    cls=VidCommand,
    examples="""\
  vidctl show my-video development
  vidctl --json show my-video development""",
)
@item_address
@click.pass_obj
def show(app: AppContext, name: str, category: str) -> None:
    """Show an item's stages, phase, and key metadata."""
    from vidctl.services.catalog import CatalogService

    app.emit(CatalogService(app.workspace).get(name, category))
