"""Command: update item fields."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vidctl.commands._base import VidCommand, item_address

if TYPE_CHECKING:
    from vidctl.commands._context import AppContext


def _parse_assignments(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    changes: dict[str, str] = {}
    for raw in values:
        key, sep, value = raw.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got {raw!r}")
        changes[key.strip()] = value
    return changes


@click.command(
    cls=VidCommand,
    examples="""\
  vidctl update my-video development --set title="Argo CD Explained"
  vidctl update my-video development --set date=2026-03-02T16:00 --set delayed=false
  vidctl update my-video development --set initiation.done=true
  vidctl update my-video development --set sponsorship.blocked="waiting on contract" """,
)
@item_address
@click.option(
    "--set",
    "changes",
    multiple=True,
    metavar="KEY=VALUE",
    callback=_parse_assignments,
    help="Field to change (repeatable). Dotted keys reach nested fields.",
)
@click.pass_obj
def update(app: AppContext, name: str, category: str, changes: dict[str, str]) -> None:
    """Change fields of an item's document."""
    from vidctl.services.catalog import CatalogService

    if not changes:
        click.echo("No changes specified. Use --set KEY=VALUE.", err=True)
        raise SystemExit(1)

    app.emit(CatalogService(app.workspace).set_fields(name, category, changes))
