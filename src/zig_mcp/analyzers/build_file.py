"""
build.zig analyzer.

Checks a build script against the post-0.11 build API. Checks are plain
substring and pattern tests run in a fixed order, so identical input
always yields identical recommendations in the same order.
"""

import re
from collections.abc import Callable

MODERN_BUILD_MESSAGE = "Build file follows modern Zig patterns"

REGEX_FILE_IMPORT = re.compile(r"@import\(\s*\"(?!std\"|builtin\"|root\")[^\"]+\.zig\"\s*\)")
REGEX_PATH_STRUCT = re.compile(r"\.\{\s*\.path\s*=")
REGEX_STEP_ADD_MODULE = re.compile(r"\b(?:exe|lib|tests?|unit_tests)\.addModule\s*\(")

# (condition, recommendation) pairs, evaluated in order
BUILD_FILE_CHECKS: tuple[tuple[Callable[[str], bool], str], ...] = (
    (
        lambda text: "Builder" in text,
        "Update to new Build API: replace Builder with std.Build",
    ),
    (
        lambda text: "setTarget" in text,
        "Use standardTargetOptions() instead of setTarget()",
    ),
    (
        lambda text: "setBuildMode" in text,
        "Use standardOptimizeOption() instead of setBuildMode()",
    ),
    (
        lambda text: REGEX_FILE_IMPORT.search(text) is not None,
        "Consider using b.dependency() for external dependencies instead of @import()",
    ),
    (
        lambda text: REGEX_PATH_STRUCT.search(text) is not None,
        'Use b.path("src/main.zig") instead of .{ .path = "src/main.zig" } for source paths',
    ),
    (
        lambda text: REGEX_STEP_ADD_MODULE.search(text) is not None,
        'Use root_module.addImport("name", module) instead of addModule() on compile steps',
    ),
    (
        lambda text: "standardTargetOptions" not in text,
        "Add standardTargetOptions() for cross-compilation support",
    ),
    (
        lambda text: "standardOptimizeOption" not in text,
        "Add standardOptimizeOption() for build mode selection",
    ),
    (
        lambda text: "addTest" not in text,
        "Consider adding test step with addTest()",
    ),
    (
        lambda text: "installArtifact" not in text,
        "Use installArtifact() to install built executables/libraries",
    ),
)


def analyze_build_file(build_file_content: str) -> list[str]:
    """Recommend build.zig modernizations.

    Runs every check in BUILD_FILE_CHECKS in order and collects the
    recommendation of each one that triggers.

    Args:
        build_file_content: Text of a build.zig file (may be empty).

    Returns:
        Ordered recommendations. A single-element list with
        MODERN_BUILD_MESSAGE when nothing triggers.

    Raises:
        No exceptions - any string is accepted.

    Example:
        >>> analyze_build_file("exe.setTarget(target);")[0]
        'Use standardTargetOptions() instead of setTarget()'
    """
    recommendations = [
        message for check, message in BUILD_FILE_CHECKS if check(build_file_content)
    ]
    return recommendations or [MODERN_BUILD_MESSAGE]
