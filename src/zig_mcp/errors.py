"""
Exception hierarchy for zig-mcp.

The analysis and generation core never raises for odd input text. These
exceptions cover the two failure families that remain: callers handing in a
malformed argument bag, and remote collaborators failing to deliver.
The server maps each one to a JSON-RPC error code.
"""


class ZigMCPError(Exception):
    """Base class for all zig-mcp errors."""


class InvalidParamsError(ZigMCPError):
    """Tool arguments are missing, mistyped or structurally invalid.

    Surfaced immediately to the caller as INVALID_PARAMS, never retried.
    """


class ResourceNotFoundError(ZigMCPError):
    """A resources/read request named a URI the server does not expose."""

    def __init__(self, uri: str) -> None:
        super().__init__(f"Resource not found: {uri}")
        self.uri = uri


class ResourceFetchError(ZigMCPError):
    """A remote collaborator (docs mirror, GitHub API) failed.

    Wraps the underlying transport error message with context. Surfaced as
    INTERNAL_ERROR; the core does not retry.
    """
