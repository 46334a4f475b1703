"""
Tool implementations.

One plain function per MCP tool. Arguments arrive already validated by the
server; every function returns the single text payload of the tool result
and never raises for unusual source text.
"""

import logging
from collections.abc import Iterable, Sequence

from zig_mcp.analyzers import (
    OptimizationClassifier,
    analyze_allocations,
    analyze_build_file,
    analyze_memory_usage,
    analyze_time_complexity,
    create_classifiers,
)
from zig_mcp.analyzers.base import Classifier
from zig_mcp.formatting import bullet_list, render_report, render_sections
from zig_mcp.generators import build as build_templates
from zig_mcp.generators import generate_zig_code, parse_requirements, select_template
from zig_mcp.knowledge import ADVANCED_BUILD_TIPS, build_mode_advice, specific_recommendations
from zig_mcp.models import BuildConfig, OptimizationLevel, ZigDependency

logger = logging.getLogger(__name__)


def optimize_code(code: str, optimization_level: object = None) -> str:
    """Suggest general optimizations plus advice for one optimize mode.

    Args:
        code: Zig source text.
        optimization_level: Optimize mode name. Missing or unrecognized
            values fall back to ReleaseSafe.

    Returns:
        Report with general optimizations, mode-specific build
        configuration and build tips.

    Example:
        >>> "Build Configuration for ReleaseFast" in optimize_code("", "ReleaseFast")
        True
    """
    level = OptimizationLevel.parse(optimization_level)
    if optimization_level is not None and level.value != optimization_level:
        logger.warning(
            f"Unknown optimization level {optimization_level!r}, using {level.value}"
        )

    classifier = OptimizationClassifier()
    report = classifier.classify(code)
    tips = [tip.format(level=level.value) for tip in ADVANCED_BUILD_TIPS]

    body = render_sections(
        [
            ("General Code Optimizations", render_report(report, classifier.default_message)),
            (f"Build Configuration for {level.value}", bullet_list(build_mode_advice(level))),
            ("Advanced Build Tips", bullet_list(tips)),
        ]
    )
    return f"Optimization Analysis for {level.value}:\n\n{body}"


def estimate_compute_units(code: str) -> str:
    """Estimate memory usage, time complexity and allocation strategy.

    Args:
        code: Zig source text.

    Returns:
        Three-section estimation report. All figures are heuristics.
    """
    body = render_sections(
        [
            ("Memory Usage", analyze_memory_usage(code)),
            ("Time Complexity", analyze_time_complexity(code)),
            ("Allocation Analysis", analyze_allocations(code)),
        ]
    )
    return f"Compute Units Estimation:\n\n{body}"


def _generation_notes(
    kind: str, error_handling: bool, testing: bool, performance: bool
) -> list[str]:
    notes = [f"Template: {kind}", "Code follows the Zig style guide (zig fmt layout)"]
    if error_handling:
        notes.append("Functions that can fail return an error union over Error")
    if testing:
        notes.append('Includes "basic functionality" and "edge cases" tests')
    if performance:
        notes.append("Performance notes included as comments")
    return notes


def generate_code(prompt: str, context: str | None = None) -> str:
    """Generate Zig source from a natural-language request.

    Args:
        prompt: Request text; keywords select the template and options.
        context: Extra text searched for keywords alongside the prompt.

    Returns:
        Generated source followed by notes describing the choices made.
    """
    requirements = parse_requirements(prompt, context)
    code = generate_zig_code(requirements)
    notes = _generation_notes(
        select_template(requirements),
        requirements.error_handling,
        requirements.testing,
        requirements.performance,
    )
    return f"Generated Zig Code:\n\n{code}\nNotes:\n{bullet_list(notes)}"


def get_recommendations(
    code: str,
    prompt: str | None = None,
    classifiers: Sequence[Classifier] | None = None,
) -> str:
    """Run every classifier and render one section per classifier.

    Args:
        code: Zig source text.
        prompt: Optional focus text; keyword matches add a section of
            topic-specific recommendations.
        classifiers: Classifiers to run. Defaults to the full registry.

    Returns:
        Combined report. Each section is non-empty, falling back to the
        classifier's default message.
    """
    classifiers = create_classifiers() if classifiers is None else classifiers
    sections = [
        (classifier.title, render_report(classifier.classify(code), classifier.default_message))
        for classifier in classifiers
    ]
    if prompt:
        sections.append(
            (
                f'Specific Recommendations for "{prompt}"',
                bullet_list(specific_recommendations(prompt)),
            )
        )
    return f"Code Analysis and Recommendations:\n\n{render_sections(sections)}"


def generate_build_zig(config: BuildConfig) -> str:
    """Generate a build script with usage notes.

    Args:
        config: Build parameters.

    Returns:
        Generated script followed by notes.
    """
    script = build_templates.generate_build_zig(config)
    notes = [
        "Uses the std.Build API with b.path() source paths",
        f"Preferred optimize mode: {config.optimization_level.value}",
        "Run `zig build run` to build and run, `zig build test` for tests",
    ]
    if config.target_triple:
        notes.append(f"Default target: {config.target_triple} (override with -Dtarget)")
    if config.dependencies:
        notes.append("Declare every dependency in build.zig.zon (zig fetch --save <url>)")
    return f"Generated build.zig:\n\n{script}\nNotes:\n{bullet_list(notes)}"


def analyze_build_zig(build_file_content: str) -> str:
    """Analyze a build script and list modernization recommendations."""
    recommendations = analyze_build_file(build_file_content)
    return f"Build File Analysis:\n\nRecommendations:\n{bullet_list(recommendations)}"


def generate_build_zon(
    dependencies: Iterable[ZigDependency],
    project_name: str = "my-project",
    version: str = "0.1.0",
) -> str:
    """Generate a dependency manifest with usage notes.

    Args:
        dependencies: Dependencies to declare.
        project_name: Package name.
        version: Package version.

    Returns:
        Generated manifest followed by notes.
    """
    manifest = build_templates.generate_build_zon(dependencies, project_name, version)
    notes = [
        "Hashes are placeholders; `zig fetch --save <url>` records the real ones",
        "Reference each dependency from build.zig with b.dependency(name, .{})",
    ]
    return f"Generated build.zig.zon:\n\n{manifest}\nNotes:\n{bullet_list(notes)}"
