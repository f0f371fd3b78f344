"""Role source backed by a JSON role registry service."""

from __future__ import annotations

from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from rolesync._log import get_logger
from rolesync.errors import FetchError
from rolesync.providers.base import build_headers

logger = get_logger("provider.registry")


class ToolRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str


class RoleRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str


_TOOL_RECORDS = TypeAdapter(list[ToolRecord])
_ROLE_RECORDS = TypeAdapter(list[RoleRecord])


def _unwrap(data: object, key: str) -> object:
    """Accept either a bare list or an object wrapping the list under *key*."""
    if isinstance(data, dict) and key in data:
        return data[key]
    return data


class RegistryRoleProvider:
    """Query ``GET {registry_url}/roles/{role}`` for records carrying ``name``.

    The response is either a JSON list of records or ``{"tools": [...]}``.
    """

    name = "registry"

    def __init__(self, registry_url: str, *, timeout: float = 30.0) -> None:
        if not registry_url:
            raise ValueError("registry_url is required for the registry provider")
        self._registry_url = registry_url.rstrip("/")
        self._timeout = timeout

    def _get_json(self, role: str, url: str) -> object:
        logger.debug("GET %s", url)
        try:
            with httpx.Client(
                headers=build_headers(accept="application/json"),
                timeout=self._timeout,
            ) as client:
                resp = client.get(url)
        except httpx.TimeoutException as e:
            raise FetchError(role, f"timed out querying {url}") from e
        except httpx.InvalidURL as e:
            raise FetchError(role, f"invalid registry URL {url}: {e}") from e
        except httpx.HTTPError as e:
            raise FetchError(role, f"could not reach registry at {url}: {e}") from e

        if resp.status_code == 404:
            raise FetchError(role, "not found in registry")
        if resp.status_code >= 400:
            raise FetchError(role, f"registry returned HTTP {resp.status_code}")
        try:
            return resp.json()
        except ValueError as e:
            raise FetchError(role, f"registry returned invalid JSON: {e}") from e

    def fetch_tools(self, role: str) -> list[str]:
        data = self._get_json(role, f"{self._registry_url}/roles/{quote(role, safe='')}")
        try:
            records = _TOOL_RECORDS.validate_python(_unwrap(data, "tools"))
        except ValidationError as e:
            raise FetchError(role, f"malformed registry response: {e}") from e
        return [record.name for record in records]

    def list_roles(self) -> list[str]:
        data = self._get_json("roles", f"{self._registry_url}/roles")
        try:
            records = _ROLE_RECORDS.validate_python(_unwrap(data, "roles"))
        except ValidationError as e:
            raise FetchError("roles", f"malformed registry response: {e}") from e
        return [record.name for record in records]
