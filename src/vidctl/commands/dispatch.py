"""Commands: hand an item to notification and upload plugins."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vidctl.commands._base import VidCommand, item_address

if TYPE_CHECKING:
    from vidctl.commands._context import AppContext


@click.command(
    cls=VidCommand,
    examples="""\
  vidctl notify my-video development slack
  vidctl notify my-video development email""",
)
@item_address
@click.argument("channel")
@click.pass_obj
def notify(app: AppContext, name: str, category: str, channel: str) -> None:
    """Post an item to CHANNEL through a notification plugin."""
    from vidctl.services.dispatch import DispatchService

    app.emit(DispatchService(app.workspace).notify(name, category, channel))


@click.command(
    cls=VidCommand,
    examples="""\
  vidctl upload my-video development
  vidctl --json upload my-video development""",
)
@item_address
@click.pass_obj
def upload(app: AppContext, name: str, category: str) -> None:
    """Upload an item's video through an upload plugin and store its id."""
    from vidctl.services.dispatch import DispatchService

    app.emit(DispatchService(app.workspace).upload(name, category))
