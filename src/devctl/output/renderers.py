"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op``; unknown ops fall through to
a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from devctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from devctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="devctl.ok"), Text(f"  {result.op}", style="devctl.op"))


def _field(console: Console, key: str, value: Any, *, style: str = "") -> None:
    """Print a single indented key-value field."""
    if isinstance(value, (dict, list)):
        value = _json.dumps(value, separators=(",", ":"))
    console.print(Text(f"  {key}: ", style="devctl.key"), Text(str(value), style=style), sep="")


def _target(item: dict[str, Any]) -> Text:
    if item.get("service"):
        return Text(f"service={item['service']}", style="devctl.service")
    return Text(item.get("selector") or "<all pods>", style="devctl.selector")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="devctl.error"),
        Text(f"  {result.op}", style="devctl.op"),
        Text(" — "),
        msg,
    )

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Port renderers ────────────────────────────────────────────────────


def _render_add_port(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    console.print(Text("  target: ", style="devctl.key"), _target(d), sep="")
    if d.get("namespace"):
        _field(console, "namespace", d["namespace"])
    added = ", ".join(f"{pm['local_port']}:{pm['remote_port']}" for pm in d.get("added", []))
    _field(console, "added", added, style="devctl.port")
    _field(console, "rule", "merged into existing" if d.get("merged") else "created")
    if verbose:
        _field(console, "rule_index", d.get("rule_index"))
        _field(console, "rules", d.get("rules"))


def _render_remove_port(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    if not d.get("saved"):
        console.print("  nothing to remove")
        return
    _field(console, "removed_mappings", d.get("removed_mappings", 0))
    _field(console, "removed_rules", d.get("removed_rules", 0))
    _field(console, "remaining_rules", d.get("remaining_rules", 0))


def _render_list_ports(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No port forwarding configured")
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    if verbose:
        table.add_column("#", justify="right", style="dim")
    table.add_column("Target", no_wrap=True)
    table.add_column("Namespace")
    table.add_column("Ports", style="devctl.port")

    for item in items:
        row: list[Any] = [_target(item), item.get("namespace", ""), ", ".join(item["mappings"])]
        if verbose:
            row.insert(0, str(item.get("index", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} rules")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "add_port": _render_add_port,
    "remove_port": _render_remove_port,
    "list_ports": _render_list_ports,
}
