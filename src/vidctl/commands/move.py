"""Command: move an item to another category."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vidctl.commands._base import VidCommand, item_address

if TYPE_CHECKING:
    from vidctl.commands._context import AppContext


@click.command(
    cls=VidCommand,
    examples="""\
  vidctl move my-video development tools
  vidctl move my-video "Infrastructure As Code" Kubernetes""",
)
@item_address
@click.argument("target_category")
@click.pass_obj
def move(app: AppContext, name: str, category: str, target_category: str) -> None:
    """Move an item from CATEGORY to TARGET_CATEGORY."""
    from vidctl.services.catalog import CatalogService

    app.emit(CatalogService(app.workspace).move(name, category, target_category))
