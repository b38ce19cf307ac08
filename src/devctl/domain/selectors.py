"""Label selector parsing and comparison.

A selector is written on the command line as ``key=value,key2=value2``
and stored as a plain ``dict[str, str]``.

Examples:
    >>> parse_selectors("app=web,tier=frontend")
    {'app': 'web', 'tier': 'frontend'}
    >>> parse_selectors("")
    {}
    >>> format_selectors({"tier": "frontend", "app": "web"})
    'app=web,tier=frontend'
"""

from __future__ import annotations

from collections.abc import Mapping

from devctl.domain.errors import ParseError


def parse_selectors(text: str) -> dict[str, str]:
    """Parse ``key=value`` pairs separated by commas.

    Each token must contain exactly one ``=``.  Duplicate keys keep the
    last value.

    Raises:
        ParseError: If a token has no ``=`` or more than one.
    """
    selectors: dict[str, str] = {}
    if text == "":
        return selectors

    for token in text.split(","):
        parts = token.split("=")
        if len(parts) != 2:
            raise ParseError(f"malformed selector token: {token!r}", token=token)
        selectors[parts[0]] = parts[1]
    return selectors


def format_selectors(selectors: Mapping[str, str] | None) -> str:
    """Render a selector as ``key=value`` pairs sorted by key."""
    if not selectors:
        return ""
    return ",".join(f"{key}={selectors[key]}" for key in sorted(selectors))


def selectors_equal(a: Mapping[str, str] | None, b: Mapping[str, str] | None) -> bool:
    """Order-independent equality; ``None`` counts as the empty selector."""
    a = a or {}
    b = b or {}
    if len(a) != len(b):
        return False
    for key, value in a.items():
        if key not in b or b[key] != value:
            return False
    return True
