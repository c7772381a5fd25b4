"""Command: create a new item with a starter script."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vidctl.commands._base import VidCommand, item_address

if TYPE_CHECKING:
    from vidctl.commands._context import AppContext


@click.command(
    cls=VidCommand,
    examples="""\
  vidctl create "Argo CD in 10 minutes" Development
  vidctl create crossplane-intro "Infrastructure As Code"
  vidctl --json create "My Video" Tools""",
)
@item_address
@click.pass_obj
def create(app: AppContext, name: str, category: str) -> None:
    """Create an item in CATEGORY and add it to the index."""
    from vidctl.services.catalog import CatalogService

    app.emit(CatalogService(app.workspace).create(name, category))
