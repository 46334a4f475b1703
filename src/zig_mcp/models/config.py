"""
Configuration models for zig-mcp.

Defines server configuration, environment overrides and defaults.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# Debug output is switched on by any non-empty DEBUG variable
DEBUG_ENV_VAR = "DEBUG"


@dataclass
class ServerConfig:
    """Configuration for the zig-mcp server.

    Attributes:
        max_code_size: Maximum accepted source size in characters (1MB default)
        default_zig_version: Zig version assumed by generated build files
        docs_version: Documentation version fetched from ziglang.org
        docs_base_url: Base URL of the documentation mirror
        github_api_url: GitHub REST API root
        popular_repo_count: Repositories listed by zig://repos/popular
        http_timeout: Seconds before remote fetches give up
        github_token: Optional token for GitHub API rate limits
        log_level: Logging level name for the server process
    """

    max_code_size: int = 1024 * 1024
    default_zig_version: str = "0.12.0"

    # Remote collaborators
    docs_version: str = "0.14.1"
    docs_base_url: str = "https://ziglang.org/documentation"
    github_api_url: str = "https://api.github.com"
    popular_repo_count: int = 10
    http_timeout: float = 20.0
    github_token: str | None = field(default=None, repr=False)

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServerConfig":
        """Build configuration from environment variables.

        Reads deployment settings that MCP clients pass through the server
        process environment. Unset or malformed values keep their defaults.

        Variables:
            GITHUB_TOKEN: Token for the popular repositories resource
            ZIG_MCP_DOCS_VERSION: Documentation version to fetch
            ZIG_MCP_HTTP_TIMEOUT: Remote fetch timeout in seconds
            ZIG_MCP_LOG_LEVEL: Logging level name
            DEBUG: Any non-empty value forces DEBUG logging

        Args:
            environ: Mapping to read. Defaults to os.environ.

        Returns:
            ServerConfig with overrides applied.

        Raises:
            No exceptions - invalid numbers are ignored.

        Example:
            >>> ServerConfig.from_env({"ZIG_MCP_DOCS_VERSION": "0.13.0"}).docs_version
            '0.13.0'
        """
        env = os.environ if environ is None else environ
        config = cls()

        config.github_token = env.get("GITHUB_TOKEN") or None
        config.docs_version = env.get("ZIG_MCP_DOCS_VERSION", config.docs_version)

        timeout = env.get("ZIG_MCP_HTTP_TIMEOUT")
        if timeout:
            try:
                config.http_timeout = float(timeout)
            except ValueError:
                pass

        config.log_level = env.get("ZIG_MCP_LOG_LEVEL", config.log_level).upper()
        if env.get(DEBUG_ENV_VAR):
            config.log_level = "DEBUG"

        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary for logging and inspection.

        The GitHub token is reported only as present or absent.

        Returns:
            Dict with all config fields.

        Example:
            >>> ServerConfig().to_dict()["github_token"]
            False
        """
        return {
            "max_code_size": self.max_code_size,
            "default_zig_version": self.default_zig_version,
            "docs_version": self.docs_version,
            "docs_base_url": self.docs_base_url,
            "github_api_url": self.github_api_url,
            "popular_repo_count": self.popular_repo_count,
            "http_timeout": self.http_timeout,
            "github_token": self.github_token is not None,
            "log_level": self.log_level,
        }


# Default configuration instance
DEFAULT_CONFIG = ServerConfig()
