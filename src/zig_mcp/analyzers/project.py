"""
Project-level classifiers: build system usage and code metrics.
"""

from zig_mcp.analyzers.base import Rule, RuleClassifier
from zig_mcp.analyzers.build_file import MODERN_BUILD_MESSAGE, analyze_build_file
from zig_mcp.analyzers.compute import (
    estimate_complexity,
    max_loop_nesting_depth,
    measure_time_complexity,
)
from zig_mcp.analyzers.patterns import (
    BUILD_SYSTEM_PATTERNS,
    STRUCTURE_PATTERNS,
    MetricSet,
)
from zig_mcp.analyzers.review import has
from zig_mcp.models import AnalysisReport, Severity

WARNING = Severity.WARNING
SUGGESTION = Severity.SUGGESTION
STRENGTH = Severity.STRENGTH
INFO = Severity.INFO

LONG_FUNCTION_LINES = 50
DEEP_NESTING = 3
LOW_COMMENT_DENSITY_PCT = 5
MIN_LINES_FOR_DENSITY = 20


def _not_build_script(code: str, m: MetricSet) -> bool:
    return m["build_fn"] == 0


class BuildSystemClassifier(RuleClassifier):
    """Build script conventions and build-related hints in regular sources.

    When the text defines ``pub fn build(...)`` it is treated as a build
    script and every build-file recommendation becomes a suggestion (or a
    strength when the script is already modern). Otherwise only the
    source-level hints below apply.
    """

    name = "build_system"
    title = "Build System"
    default_message = "No build system concerns detected"
    patterns = BUILD_SYSTEM_PATTERNS
    rules = (
        Rule(
            SUGGESTION,
            lambda code, m: _not_build_script(code, m) and m["relative_import"] > 0,
            "Expose shared files as modules in build.zig (b.addModule/addImport) "
            "instead of relative @import paths",
        ),
        Rule(
            SUGGESTION,
            lambda code, m: _not_build_script(code, m) and m["c_import"] > 0,
            "Link the libraries behind @cImport in build.zig (linkLibC, linkSystemLibrary)",
        ),
        Rule(
            INFO,
            has("builtin_mode"),
            "Code branches on builtin.mode; check behavior in every optimize mode",
        ),
        Rule(STRENGTH, has("build_options"), "Passes configuration through build options"),
    )

    def classify(self, code: str) -> AnalysisReport:
        """Run the source-level rules, then the build-file checks for build scripts."""
        report = super().classify(code)
        if not BUILD_SYSTEM_PATTERNS["build_fn"].pattern.search(code):
            return report
        for recommendation in analyze_build_file(code):
            if recommendation == MODERN_BUILD_MESSAGE:
                report.add(STRENGTH, recommendation)
            else:
                report.add(SUGGESTION, recommendation)
        return report


class MetricsClassifier(RuleClassifier):
    """Size, density and nesting figures for the whole file."""

    name = "metrics"
    title = "Code Metrics"
    default_message = "No metrics available"
    patterns = STRUCTURE_PATTERNS
    rules = (
        Rule(
            INFO,
            lambda code, m: True,
            lambda m: f"Lines: {m['lines']} total, {m['code_lines']} code, "
            f"{m['comment_lines']} comment",
        ),
        Rule(
            INFO,
            lambda code, m: True,
            lambda m: f"Functions: {m['functions']} ({m['pub_functions']} public), "
            f"containers: {m['structs']}",
        ),
        Rule(
            INFO,
            lambda code, m: True,
            lambda m: f"Comment density: {m['comment_density_pct']}%",
        ),
        Rule(
            INFO,
            has("functions"),
            lambda m: f"Average function length: ~{m['avg_function_length']} lines",
        ),
        Rule(
            INFO,
            lambda code, m: True,
            lambda m: f"Max loop nesting depth: {m['nesting_depth']} (line-based approximation)",
        ),
        Rule(
            INFO,
            lambda code, m: True,
            lambda m: f"Estimated complexity: {estimate_complexity(m)} (heuristic estimate)",
        ),
        Rule(
            INFO,
            lambda code, m: True,
            lambda m: f"Test ratio: {m['tests']} test(s) per {m['functions']} function(s)",
        ),
        Rule(
            WARNING,
            lambda code, m: m["avg_function_length"] > LONG_FUNCTION_LINES,
            "Functions are long on average; split them into smaller units",
        ),
        Rule(
            WARNING,
            lambda code, m: m["nesting_depth"] >= DEEP_NESTING,
            "Deeply nested loops; extract inner loops into functions",
        ),
        Rule(
            SUGGESTION,
            lambda code, m: m["code_lines"] >= MIN_LINES_FOR_DENSITY
            and m["comment_density_pct"] < LOW_COMMENT_DENSITY_PCT,
            "Low comment density; document non-obvious logic",
        ),
        Rule(
            SUGGESTION,
            lambda code, m: m["functions"] > 0 and m["tests"] == 0,
            "No tests alongside these functions",
        ),
    )

    def measure(self, code: str) -> MetricSet:
        """Structure counts plus derived line, density and nesting figures."""
        metrics = {
            **super().measure(code),
            **measure_time_complexity(code),
        }
        lines = code.splitlines()
        code_lines = [
            line for line in lines if line.strip() and not line.lstrip().startswith("//")
        ]
        metrics["lines"] = len(lines)
        metrics["code_lines"] = len(code_lines)
        metrics["comment_density_pct"] = (
            round(100 * metrics["comment_lines"] / len(lines)) if lines else 0
        )
        metrics["avg_function_length"] = (
            len(code_lines) // metrics["functions"] if metrics["functions"] else 0
        )
        metrics["nesting_depth"] = max_loop_nesting_depth(code)
        return metrics
