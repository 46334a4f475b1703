"""Version information for zig-mcp."""

__version__ = "0.2.0"
__version_date__ = "2026-10-18"

__title__ = "zig_mcp"
__description__ = (
    "MCP server with heuristic Zig code analysis, code generation and build tooling"
)
__url__ = "https://github.com/openSVM/zig-mcp-server"

__author__ = "zig-mcp contributors"

__license__ = "MIT"
__copyright__ = "Copyright 2025 zig-mcp contributors"

__all__ = [
    "__version__",
    "__version_date__",
    "__title__",
    "__description__",
    "__url__",
    "__author__",
    "__license__",
    "__copyright__",
]
