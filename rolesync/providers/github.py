"""Role source backed by plain-text role files on a static host (GitHub raw)."""

from __future__ import annotations

from urllib.parse import quote

import httpx

from rolesync._log import get_logger
from rolesync.errors import FetchError
from rolesync.providers.base import build_headers

logger = get_logger("provider.github")

ROLE_INDEX_FILE = "role_names"


class GitHubRoleProvider:
    """Fetch ``{base_url}{role}`` and treat each line as one raw tool name."""

    name = "github"

    def __init__(self, base_url: str, *, timeout: float = 30.0) -> None:
        self._base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._timeout = timeout

    def role_url(self, role: str) -> str:
        return f"{self._base_url}{quote(role, safe='')}"

    def _get_text(self, role: str, url: str) -> str:
        logger.debug("GET %s", url)
        try:
            with httpx.Client(
                headers=build_headers(github_token=True),
                timeout=self._timeout,
                follow_redirects=True,
            ) as client:
                resp = client.get(url)
        except httpx.TimeoutException as e:
            raise FetchError(role, f"timed out fetching {url}") from e
        except httpx.InvalidURL as e:
            raise FetchError(role, f"invalid role URL {url}: {e}") from e
        except httpx.HTTPError as e:
            raise FetchError(role, f"could not reach {url}: {e}") from e

        if resp.status_code == 404:
            raise FetchError(role, f"not found at {url}")
        if resp.status_code == 403:
            raise FetchError(
                role, "GitHub rate limit reached. Set GITHUB_TOKEN env var for higher limits."
            )
        if resp.status_code >= 400:
            raise FetchError(role, f"HTTP {resp.status_code} fetching {url}")
        return resp.text

    def fetch_tools(self, role: str) -> list[str]:
        return self._get_text(role, self.role_url(role)).splitlines()

    def list_roles(self) -> list[str]:
        """Read the ``role_names`` index file next to the role files."""
        text = self._get_text(ROLE_INDEX_FILE, self.role_url(ROLE_INDEX_FILE))
        return [line.strip() for line in text.splitlines() if line.strip()]
