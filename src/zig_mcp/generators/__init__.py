"""
Template generators for Zig source, build scripts and manifests.
"""

from zig_mcp.generators.build import (
    EXAMPLE_DEPENDENCIES,
    example_dependencies,
    generate_build_zig,
    generate_build_zon,
)
from zig_mcp.generators.code import generate_zig_code, select_template
from zig_mcp.generators.requirements import parse_requirements

__all__ = [
    "EXAMPLE_DEPENDENCIES",
    "example_dependencies",
    "generate_build_zig",
    "generate_build_zon",
    "generate_zig_code",
    "parse_requirements",
    "select_template",
]
