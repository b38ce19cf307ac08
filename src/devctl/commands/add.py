"""Group: add configuration entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from devctl.commands._base import DevGroup

if TYPE_CHECKING:
    from devctl.commands._context import AppContext


@click.group(cls=DevGroup)
def add() -> None:
    """Add entries to devctl.yaml."""


@add.command(
    examples=(
        "devctl add port 8080",
        "devctl add port 8080:80,8443:443",
        "devctl add port 3000 --label-selector app=web,tier=frontend",
        "devctl add port 5432 --service database --namespace data",
    ),
)
@click.argument("port_mappings", metavar="LOCAL[:REMOTE][,...]")
@click.option("-n", "--namespace", default="", help="Namespace of the target pods.")
@click.option(
    "-l",
    "--label-selector",
    default="",
    help="Label selector of the target pods (key=value,key2=value2).",
)
@click.option(
    "-s",
    "--service",
    "service_name",
    default="",
    help="Named selector from dev.selectors.",
)
@click.pass_obj
def port(
    app: AppContext,
    port_mappings: str,
    namespace: str,
    label_selector: str,
    service_name: str,
) -> None:
    """Forward local ports to remote ports of the selected pods.

    Mappings for a selector that is already forwarded are appended to
    the existing rule.
    """
    from devctl.services.ports import PortService

    app.emit(
        PortService(app.store).add_port(
            port_mappings,
            namespace=namespace,
            label_selector=label_selector,
            service_name=service_name,
        )
    )
