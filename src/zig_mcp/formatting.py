"""
Report rendering.

Turns AnalysisReports and section lists into the markdown-flavoured text
returned by the tools. Empty buckets are never rendered, and no rendering
path returns an empty string.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from zig_mcp.models import AnalysisReport, Severity

BUCKET_SYMBOLS: Mapping[Severity, str] = MappingProxyType(
    {
        Severity.CRITICAL: "🚨",
        Severity.WARNING: "⚠️",
        Severity.SUGGESTION: "💡",
        Severity.STRENGTH: "✅",
        Severity.INFO: "ℹ️",
    }
)

DEFAULT_MESSAGE = "No issues found"


def bullet_list(items: Iterable[str]) -> str:
    """Render items as ``- item`` lines."""
    return "\n".join(f"- {item}" for item in items)


def render_report(report: AnalysisReport, default_message: str = DEFAULT_MESSAGE) -> str:
    """Render a report as symbol-prefixed severity buckets.

    Each non-empty bucket becomes a header line (symbol plus title-cased
    bucket name), its messages as bullets, then a blank separator. The
    result is trimmed. A report with no findings renders the positive
    default message instead of an empty string.

    Args:
        report: Report to render.
        default_message: Text used when no rule fired.

    Returns:
        Rendered text, never empty.

    Raises:
        No exceptions raised.

    Example:
        >>> report = AnalysisReport("Safety")
        >>> report.add(Severity.WARNING, "Review pointer casts")
        >>> print(render_report(report))
        ⚠️ Warnings
        - Review pointer casts
        >>> render_report(AnalysisReport("Safety"), "Code appears safe")
        '- Code appears safe'
    """
    blocks = []
    for severity, messages in report.buckets().items():
        header = f"{BUCKET_SYMBOLS[severity]} {severity.value.title()}"
        blocks.append(f"{header}\n{bullet_list(messages)}\n")

    text = "\n".join(blocks).strip()
    if report.summary:
        text = f"{text}\n\n{report.summary}".strip()
    return text or bullet_list([default_message])


def render_sections(sections: Iterable[tuple[str, str]]) -> str:
    """Join ``(title, body)`` pairs into ``Title:\\nbody`` blocks."""
    return "\n\n".join(f"{title}:\n{body}" for title, body in sections).strip()
