"""Click base classes with ``--examples`` support.

``--help`` stays short; ``--examples`` prints usage examples and exits.
Examples are given as a sequence of command lines.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click


def _examples_option(examples: Sequence[str]) -> click.Option:
    """Build an eager ``--examples`` flag that prints *examples* and exits."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        for line in examples:
            click.echo(f"  {line}")
        ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show_examples,
        help="Show usage examples.",
    )


class DevCommand(click.Command):
    """Command accepting an ``examples`` keyword."""

    def __init__(self, *args: Any, examples: Sequence[str] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(_examples_option(self.examples))


class DevGroup(click.Group):
    """Group whose subcommands default to :class:`DevCommand`."""

    command_class = DevCommand

    def __init__(self, *args: Any, examples: Sequence[str] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(_examples_option(self.examples))
