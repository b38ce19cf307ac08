"""Subcommand groups for devctl.

register_commands() imports lazily so ``devctl --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the add/remove/list groups on the root CLI group."""
    from devctl.commands.add import add
    from devctl.commands.list_cmd import list_cmd
    from devctl.commands.remove import remove

    cli.add_command(add)
    cli.add_command(remove)
    cli.add_command(list_cmd)
