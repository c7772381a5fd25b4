"""Command: recompute stage progress from an item's fields."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vidctl.commands._base import VidCommand, item_address

if TYPE_CHECKING:
    from vidctl.commands._context import AppContext


@click.command(
    cls=VidCommand,
    examples="""\
  vidctl refresh my-video development
  vidctl -v refresh my-video development""",
)
@item_address
@click.pass_obj
def refresh(app: AppContext, name: str, category: str) -> None:
    """Recompute every stage counter and save the item."""
    from vidctl.services.catalog import CatalogService

    app.emit(CatalogService(app.workspace).refresh(name, category))
