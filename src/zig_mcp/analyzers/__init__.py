"""
Heuristic Zig analyzers.

Pattern tables, rule-driven classifiers, compute estimators and the
build-file analyzer. ``CLASSIFIERS`` lists the classifiers reported by
``get_recommendations`` in report order.
"""

import logging

from zig_mcp.analyzers.base import Classifier, Rule, RuleClassifier
from zig_mcp.analyzers.build_file import MODERN_BUILD_MESSAGE, analyze_build_file
from zig_mcp.analyzers.compute import (
    analyze_allocations,
    analyze_memory_usage,
    analyze_time_complexity,
    count_nested_loops,
    count_self_recursion,
    determine_allocation_strategy,
    estimate_complexity,
    max_loop_nesting_depth,
    measure_time_complexity,
)
from zig_mcp.analyzers.language import (
    ConcurrencyClassifier,
    InteropClassifier,
    MetaprogrammingClassifier,
    ModernityClassifier,
    TestingClassifier,
)
from zig_mcp.analyzers.patterns import extract_metrics
from zig_mcp.analyzers.project import BuildSystemClassifier, MetricsClassifier
from zig_mcp.analyzers.review import (
    IdiomClassifier,
    OptimizationClassifier,
    PerformanceClassifier,
    SafetyClassifier,
    StyleClassifier,
)

CLASSIFIERS: tuple[type[RuleClassifier], ...] = (
    StyleClassifier,
    IdiomClassifier,
    SafetyClassifier,
    PerformanceClassifier,
    ConcurrencyClassifier,
    MetaprogrammingClassifier,
    TestingClassifier,
    BuildSystemClassifier,
    InteropClassifier,
    MetricsClassifier,
    ModernityClassifier,
)


def create_classifiers(logger: logging.Logger | None = None) -> list[Classifier]:
    """Instantiate every registered classifier, sharing one logger."""
    return [classifier(logger=logger) for classifier in CLASSIFIERS]


__all__ = [
    "CLASSIFIERS",
    "MODERN_BUILD_MESSAGE",
    "BuildSystemClassifier",
    "Classifier",
    "ConcurrencyClassifier",
    "IdiomClassifier",
    "InteropClassifier",
    "MetaprogrammingClassifier",
    "MetricsClassifier",
    "ModernityClassifier",
    "OptimizationClassifier",
    "PerformanceClassifier",
    "Rule",
    "RuleClassifier",
    "SafetyClassifier",
    "StyleClassifier",
    "TestingClassifier",
    "analyze_allocations",
    "analyze_build_file",
    "analyze_memory_usage",
    "analyze_time_complexity",
    "count_nested_loops",
    "count_self_recursion",
    "create_classifiers",
    "determine_allocation_strategy",
    "estimate_complexity",
    "extract_metrics",
    "max_loop_nesting_depth",
    "measure_time_complexity",
]
