"""Command: delete an item, its script, and its index entry."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vidctl.commands._base import VidCommand, item_address

if TYPE_CHECKING:
    from vidctl.commands._context import AppContext


@click.command(
    cls=VidCommand,
    examples="""\
  vidctl delete my-video development
  vidctl delete my-video development --yes""",
)
@item_address
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def delete(app: AppContext, name: str, category: str, yes: bool) -> None:
    """Delete an item's document and script, and drop it from the index."""
    from vidctl.services.catalog import CatalogService

    if not yes:
        click.confirm(f"Delete {category}/{name}?", abort=True, err=True)
    app.emit(CatalogService(app.workspace).delete(name, category))
