"""
Finding and report models for heuristic analysis.

Defines severity buckets, individual findings and the per-call report that
classifiers produce and the formatter renders. Reports live for a single
tool invocation and are never cached.
"""

from dataclasses import dataclass, field
from enum import Enum


class Severity(Enum):
    """Finding buckets in rendering order.

    Buckets:
    • CRITICAL: Likely bugs or unsafe constructs
    • WARNING: Questionable code that deserves a look
    • SUGGESTION: Improvements and idiomatic alternatives
    • STRENGTH: Good practice already present
    • INFO: Neutral observations (counts, estimates)

    The declaration order is the report order.
    """

    CRITICAL = "critical"
    WARNING = "warnings"
    SUGGESTION = "suggestions"
    STRENGTH = "strengths"
    INFO = "info"


@dataclass(frozen=True)
class Finding:
    """One heuristic observation.

    Attributes:
        message: Short human-readable text
        severity: Bucket the finding belongs to
    """

    message: str
    severity: Severity


@dataclass
class AnalysisReport:
    """Ordered collection of findings produced by one classifier.

    Attributes:
        title: Section title used when reports are combined
        findings: Findings in the order the rules fired
        summary: Optional free-form text appended after the buckets
    """

    title: str
    findings: list[Finding] = field(default_factory=list)
    summary: str = ""

    def add(self, severity: Severity, message: str) -> None:
        """Append a finding to the report.

        Args:
            severity: Bucket for the finding.
            message: Finding text.

        Returns:
            None - mutates the report.

        Example:
            >>> report = AnalysisReport("Safety")
            >>> report.add(Severity.WARNING, "Review pointer casts")
            >>> len(report.findings)
            1
        """
        self.findings.append(Finding(message=message, severity=severity))

    def buckets(self) -> dict[Severity, list[str]]:
        """Group finding messages by severity, omitting empty buckets.

        Produces the ordered bucket view consumed by the formatter. Bucket
        order follows the Severity declaration order; message order inside
        a bucket follows rule order.

        Returns:
            Dict of Severity to messages, containing only non-empty buckets.

        Example:
            >>> report = AnalysisReport("Style")
            >>> report.add(Severity.INFO, "10 lines")
            >>> list(report.buckets())
            [<Severity.INFO: 'info'>]
        """
        grouped: dict[Severity, list[str]] = {severity: [] for severity in Severity}
        for finding in self.findings:
            grouped[finding.severity].append(finding.message)
        return {severity: messages for severity, messages in grouped.items() if messages}

    def messages(self, severity: Severity | None = None) -> list[str]:
        """Return finding messages, optionally limited to one bucket."""
        return [
            f.message for f in self.findings if severity is None or f.severity is severity
        ]

    @property
    def is_empty(self) -> bool:
        """True when no rule fired."""
        return not self.findings
