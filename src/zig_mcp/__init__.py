"""
Zig MCP Server.

PURPOSE: MCP server offering heuristic analysis, code generation and build
tooling for the Zig programming language.
AI CONTEXT: All "analysis" is regular-expression pattern matching over raw
source text and all "generation" is fixed templates parameterised by a few
flags. Nothing here parses Zig.

PACKAGE STRUCTURE:
- server.py: MCP server with JSON-RPC 2.0 message handling
- tools.py: Tool implementations returning text payloads
- models/: Data models (findings, generation inputs, configuration)
- analyzers/: Pattern tables, classifiers, compute estimation, build files
- generators/: Requirement parsing and template generation
- knowledge.py: Static guides and recommendation tables
- remote.py: HTTP collaborators for documentation and repository listings
- formatting.py: Report rendering

QUICK START:
    # Run MCP server
    python -m zig_mcp.server

    # Use the tools directly
    from zig_mcp import tools
    print(tools.estimate_compute_units(code))

MCP TOOLS:
1. optimize_code - Optimization suggestions plus build-mode advice
2. estimate_compute_units - Memory, time complexity and allocation estimates
3. generate_code - Zig code from a natural language prompt
4. get_recommendations - Categorized review findings
5. generate_build_zig - build.zig template
6. analyze_build_zig - build.zig modernization checks
7. generate_build_zon - build.zig.zon dependency manifest
"""

from zig_mcp.__version__ import (
    __author__,
    __copyright__,
    __description__,
    __license__,
    __title__,
    __url__,
    __version__,
    __version_date__,
)

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
