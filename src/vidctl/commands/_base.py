"""Shared Click building blocks for vidctl commands.

Every command is a :class:`VidCommand`, which carries copy-pasteable
examples, and most address a single item with :func:`item_address`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

F = TypeVar("F", bound=Callable[..., Any])


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    command = ctx.command
    assert isinstance(command, VidCommand)
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(command.examples)
    ctx.exit(0)


class VidCommand(click.Command):
    """Command with an ``examples`` block.

    The block is printed by ``--examples`` and appended to ``--help``
    under an "Examples" heading. Commands without examples get neither.
    """

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_print_examples,
                    help="Show usage examples.",
                )
            )

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_epilog(ctx, formatter)
        if self.examples:
            with formatter.section("Examples"):
                for line in self.examples.splitlines():
                    formatter.write(f"{'':>{formatter.current_indent}}{line.strip()}\n")


def item_address(func: F) -> F:
    """Add the ``NAME CATEGORY`` positional pair that locates an item."""
    func = click.argument("category")(func)
    return click.argument("name")(func)
