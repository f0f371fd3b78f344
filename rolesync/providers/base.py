"""The tool list provider capability shared by every role source."""

from __future__ import annotations

import os
from typing import Protocol, runtime_checkable

from rolesync import __version__

USER_AGENT = f"rolesync/{__version__}"


@runtime_checkable
class ToolListProvider(Protocol):
    """A remote source of role definitions.

    ``fetch_tools`` returns the raw, un-normalized tool names for one role in
    source order, or raises :class:`~rolesync.errors.FetchError`.
    """

    name: str

    def fetch_tools(self, role: str) -> list[str]: ...

    def list_roles(self) -> list[str]: ...


def build_headers(*, accept: str | None = None, github_token: bool = False) -> dict[str, str]:
    """Build request headers with the rolesync user agent and optional GitHub token."""
    headers = {"User-Agent": USER_AGENT}
    if accept:
        headers["Accept"] = accept
    if github_token:
        token = os.environ.get("GITHUB_TOKEN")
        if token:
            headers["Authorization"] = f"token {token}"
    return headers
