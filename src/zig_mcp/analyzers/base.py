"""
Base classifier types for heuristic analysis.

Defines the classifier interface and the rule-table machinery every
concrete classifier is built from. A rule is an independent
``condition -> (severity, message)`` pair; rules run unconditionally in
declaration order and never suppress one another.
"""

import logging
from abc import abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar, Protocol, TypeAlias

from zig_mcp.analyzers.patterns import EMPTY_TABLE, MetricSet, PatternTable, extract_metrics
from zig_mcp.models import AnalysisReport, Finding, Severity

Check: TypeAlias = Callable[[str, MetricSet], bool]
Message: TypeAlias = str | Callable[[MetricSet], str]


class Classifier(Protocol):
    """Protocol defining the heuristic classifier interface.

    All classifiers turn raw source text into an AnalysisReport. The
    server and tools only depend on this interface, so classifiers can be
    added without touching the tool layer.

    Examples:
        ```python
        class TodoClassifier:
            name = "todo"
            title = "Open Work"
            default_message = "No TODO comments"

            def classify(self, code: str) -> AnalysisReport:
                report = AnalysisReport(self.title)
                if "TODO" in code:
                    report.add(Severity.WARNING, "Resolve TODO comments")
                return report
        ```
    """

    name: str
    title: str
    default_message: str

    @abstractmethod
    def classify(self, code: str) -> AnalysisReport:
        """Classify source text into severity buckets.

        Args:
            code: Source text to inspect (may be empty).

        Returns:
            AnalysisReport with zero or more findings.

        Raises:
            No exceptions - classifiers accept any string.
        """
        ...


@dataclass(frozen=True)
class Rule:
    """A single condition-to-finding rule.

    Attributes:
        severity: Bucket the finding lands in
        check: Predicate over (source text, metrics)
        message: Finding text, or a callable building it from metrics
    """

    severity: Severity
    check: Check
    message: Message

    def evaluate(self, code: str, metrics: MetricSet) -> Finding | None:
        """Return the rule's finding if its condition holds, else None."""
        if not self.check(code, metrics):
            return None
        text = self.message(metrics) if callable(self.message) else self.message
        return Finding(message=text, severity=self.severity)


class RuleClassifier:
    """Classifier driven by a pattern table and an ordered rule list.

    Subclasses declare ``patterns`` and ``rules`` as class attributes and
    may override ``measure`` to add derived metrics (line counts, nesting
    depth) on top of the raw pattern counts.

    Attributes:
        logger: Logger instance for diagnostics

    Examples:
        ```python
        class TabClassifier(RuleClassifier):
            name = "tabs"
            title = "Tabs"
            default_message = "No tabs"
            rules = (Rule(Severity.WARNING, lambda code, m: "\\t" in code, "Use spaces"),)

        report = TabClassifier().classify("\\tconst x = 1;")
        ```
    """

    name: ClassVar[str] = "rules"
    title: ClassVar[str] = "Findings"
    default_message: ClassVar[str] = "No issues found"
    patterns: ClassVar[PatternTable] = EMPTY_TABLE
    rules: ClassVar[tuple[Rule, ...]] = ()

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def measure(self, code: str) -> MetricSet:
        """Extract the metrics the rules are evaluated against.

        Args:
            code: Source text.

        Returns:
            MetricSet with one count per pattern in ``patterns``.
        """
        return extract_metrics(code, self.patterns)

    def classify(self, code: str) -> AnalysisReport:
        """Run every rule against ``code`` in declaration order.

        No short-circuiting: each rule is independent and several may fire
        with overlapping or even contradictory advice.

        Args:
            code: Source text to inspect (may be empty).

        Returns:
            AnalysisReport titled after this classifier.

        Raises:
            No exceptions - any string is accepted.

        Example:
            >>> from zig_mcp.analyzers.review import SafetyClassifier
            >>> SafetyClassifier().classify("var x: u8 = undefined;").is_empty
            False
        """
        metrics = self.measure(code)
        report = AnalysisReport(title=self.title)
        for rule in self.rules:
            finding = rule.evaluate(code, metrics)
            if finding is not None:
                report.findings.append(finding)
        self.logger.debug(f"{self.name}: {len(report.findings)} findings")
        return report
