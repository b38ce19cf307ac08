"""Port mapping mini-grammar.

``local[:remote]`` segments separated by commas::

    80              -> 80:80
    80:8080         -> 80:8080
    80:8080,443     -> 80:8080, 443:443
"""

from __future__ import annotations

import re

from devctl.config.models import PortMapping
from devctl.domain.errors import ParseError

# Plain decimal with optional sign, no whitespace or underscores.
_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_port(text: str) -> int:
    """Parse a port number the way the CLI accepts it.

    Raises:
        ParseError: If *text* is not a plain decimal integer.
    """
    if _INT_RE.fullmatch(text) is None:
        raise ParseError(f"invalid port number: {text!r}", value=text)
    return int(text)


def parse_port_mappings(text: str) -> list[PortMapping]:
    """Parse a comma-separated list of port mappings, preserving order.

    A segment with a single port maps it to itself.  Duplicates are kept.

    Raises:
        ParseError: On a segment with more than one ``:`` or a port that
            is not an integer.
    """
    mappings: list[PortMapping] = []
    for segment in text.split(","):
        parts = segment.split(":")
        if len(parts) not in (1, 2):
            raise ParseError(f"Error parsing port mapping: {segment}", segment=segment)

        local = parse_port(parts[0])
        remote = local if len(parts) == 1 else parse_port(parts[1])
        mappings.append(PortMapping(local_port=local, remote_port=remote))
    return mappings


def port_tokens(text: str | None) -> list[str]:
    """Split a removal argument into port tokens (``""`` yields ``[""]``)."""
    return (text or "").split(",")


def contains_port(port: int, tokens: list[str]) -> bool:
    """True if the decimal text of *port* equals a trimmed token."""
    needle = str(port)
    return any(token.strip() == needle for token in tokens)
