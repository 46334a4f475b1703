"""
Remote collaborators for fetched resources.

Fetches the Zig language reference and standard library documentation
from ziglang.org and lists popular Zig repositories through the GitHub
search API. Failures are wrapped in ResourceFetchError and logged; nothing
here retries.
"""

import json
import logging

import httpx

from zig_mcp.errors import ResourceFetchError
from zig_mcp.models import DEFAULT_CONFIG, ServerConfig

# Documentation sections served under zig://docs/*
DOC_PAGES = {
    "language": "index.html",
    "std": "std.html",
}

USER_AGENT = "zig-mcp"


class ZigResourceClient:
    """HTTP client for documentation and repository listings.

    A fresh httpx.AsyncClient is opened per request, so the client holds
    no connections between tool calls.

    Attributes:
        config: Server configuration (URLs, timeout, token)
        logger: Logger instance for diagnostics

    Example:
        ```python
        client = ZigResourceClient(ServerConfig.from_env())
        html = await client.fetch_docs("language")
        repos = await client.fetch_popular_repos()
        ```
    """

    def __init__(
        self, config: ServerConfig = DEFAULT_CONFIG, logger: logging.Logger | None = None
    ) -> None:
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

    @property
    def github_headers(self) -> dict[str, str]:
        """GitHub API headers, with the token when configured."""
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }
        if self.config.github_token:
            headers["Authorization"] = f"token {self.config.github_token}"
        return headers

    def docs_url(self, section: str) -> str:
        """Documentation URL for ``section`` ("language" or "std").

        Raises:
            KeyError: Unknown section.
        """
        page = DOC_PAGES[section]
        return f"{self.config.docs_base_url}/{self.config.docs_version}/{page}"

    async def fetch_docs(self, section: str) -> str:
        """Download one documentation page.

        Args:
            section: "language" for the language reference, "std" for the
                standard library docs.

        Returns:
            The page body as text (HTML).

        Raises:
            ResourceFetchError: Transport failure or non-2xx status.
        """
        url = self.docs_url(section)
        self.logger.info(f"Fetching Zig documentation: {url}")
        try:
            async with httpx.AsyncClient(
                headers={"User-Agent": USER_AGENT}, timeout=self.config.http_timeout
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.text
        except httpx.HTTPError as e:
            self.logger.error(f"Failed to fetch Zig documentation from {url}: {e}")
            raise ResourceFetchError(f"Failed to fetch Zig documentation: {e}") from e

    async def fetch_popular_repos(self) -> str:
        """List the most-starred Zig repositories on GitHub.

        Returns:
            JSON array (indented) of objects with name, description, stars
            and url.

        Raises:
            ResourceFetchError: Transport failure, non-2xx status or an
                unexpected response body.
        """
        url = f"{self.config.github_api_url}/search/repositories"
        params = {
            "q": "language:zig",
            "sort": "stars",
            "order": "desc",
            "per_page": str(self.config.popular_repo_count),
        }
        self.logger.info("Fetching popular Zig repositories")
        try:
            async with httpx.AsyncClient(
                headers=self.github_headers, timeout=self.config.http_timeout
            ) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self.logger.error(f"Failed to fetch popular repositories: {e}")
            raise ResourceFetchError(f"Failed to fetch popular repositories: {e}") from e

        items = payload.get("items", []) if isinstance(payload, dict) else None
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            self.logger.error("Failed to fetch popular repositories: unexpected response")
            raise ResourceFetchError("Failed to fetch popular repositories: unexpected response")

        repos = [
            {
                "name": item.get("full_name"),
                "description": item.get("description"),
                "stars": item.get("stargazers_count"),
                "url": item.get("html_url"),
            }
            for item in items
        ]
        return json.dumps(repos, indent=2)
