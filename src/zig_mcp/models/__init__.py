"""
zig-mcp Models.

Core data structures shared by analyzers, generators and the server.
"""

from zig_mcp.models.config import (
    DEFAULT_CONFIG,
    ServerConfig,
)
from zig_mcp.models.findings import (
    AnalysisReport,
    Finding,
    Severity,
)
from zig_mcp.models.generation import (
    BuildConfig,
    GenerationRequirements,
    OptimizationLevel,
    ZigDependency,
)

__all__ = [
    # Findings
    "AnalysisReport",
    "Finding",
    "Severity",
    # Generation inputs
    "BuildConfig",
    "GenerationRequirements",
    "OptimizationLevel",
    "ZigDependency",
    # Configuration
    "ServerConfig",
    "DEFAULT_CONFIG",
]
