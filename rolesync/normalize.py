"""Tool name normalization for raw role-file lines."""

from __future__ import annotations

_QUOTES = ("'", '"')


def normalize_tool_name(raw: str) -> str:
    """Clean one raw line into a package identifier.

    Trims whitespace, strips one trailing comma, then strips one layer of
    matching surrounding quotes. Returns ``""`` when nothing is left.
    """
    name = raw.strip()
    if name.endswith(","):
        name = name[:-1].strip()
    if len(name) >= 2 and name[0] == name[-1] and name[0] in _QUOTES:
        name = name[1:-1]
    return name

