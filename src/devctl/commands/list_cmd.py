"""Group: list configuration entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from devctl.commands._base import DevGroup

if TYPE_CHECKING:
    from devctl.commands._context import AppContext


@click.group("list", cls=DevGroup)
def list_cmd() -> None:
    """List entries of devctl.yaml."""


@list_cmd.command(examples=("devctl list ports", "devctl --json list ports"))
@click.pass_obj
def ports(app: AppContext) -> None:
    """Show configured port forwarding rules."""
    from devctl.services.ports import PortService

    app.emit(PortService(app.store).list_ports())
