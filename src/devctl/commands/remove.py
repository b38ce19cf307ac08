"""Group: remove configuration entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from devctl.commands._base import DevGroup

if TYPE_CHECKING:
    from devctl.commands._context import AppContext


@click.group(cls=DevGroup)
def remove() -> None:
    """Remove entries from devctl.yaml."""


@remove.command(
    examples=(
        "devctl remove port 8080",
        "devctl remove port 8080,3000",
        "devctl remove port --all",
    ),
)
@click.argument("ports", required=False, default=None, metavar="[PORT[,...]]")
@click.option("-l", "--label-selector", default="", help="Label selector (key=value,...).")
@click.option("--all", "remove_all", is_flag=True, help="Remove every port forwarding rule.")
@click.pass_obj
def port(app: AppContext, ports: str | None, label_selector: str, remove_all: bool) -> None:
    """Stop forwarding the given local or remote ports."""
    from devctl.services.ports import PortService

    app.emit(
        PortService(app.store).remove_port(
            ports,
            remove_all=remove_all,
            label_selector=label_selector,
        )
    )
