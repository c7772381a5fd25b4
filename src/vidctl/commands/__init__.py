"""Subcommand modules for vidctl.

Provides register_commands() which uses deferred imports to keep
``vidctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all commands on the root CLI group."""
    # --- Single-item commands ---
    from vidctl.commands.create import create
    from vidctl.commands.delete import delete
    from vidctl.commands.dispatch import notify, upload
    from vidctl.commands.move import move
    from vidctl.commands.refresh import refresh
    from vidctl.commands.show import show
    from vidctl.commands.update import update

    cli.add_command(create)
    cli.add_command(show)
    cli.add_command(update)
    cli.add_command(refresh)
    cli.add_command(delete)
    cli.add_command(move)
    cli.add_command(notify)
    cli.add_command(upload)

    # --- Catalog-wide commands ---
    from vidctl.commands.catalog import categories, list_cmd, phases, reconcile

    cli.add_command(list_cmd)
    cli.add_command(phases)
    cli.add_command(categories)
    cli.add_command(reconcile)
