"""Rich Console factory and theme for devctl output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract.  Outside a terminal (tests, pipes) Rich drops the
color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEVCTL_THEME = Theme(
    {
        "devctl.ok": "bold green",
        "devctl.error": "bold red",
        "devctl.op": "bold cyan",
        "devctl.key": "dim",
        "devctl.selector": "bold blue",
        "devctl.service": "bold magenta",
        "devctl.port": "green",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=DEVCTL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
