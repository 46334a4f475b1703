"""Tests for report rendering."""

from zig_mcp.formatting import DEFAULT_MESSAGE, bullet_list, render_report, render_sections
from zig_mcp.models import AnalysisReport, Severity


class TestRenderReport:
    """Tests for render_report()."""

    def test_empty_report_uses_default(self) -> None:
        """Verify an empty report renders the default message."""
        assert render_report(AnalysisReport("Safety")) == f"- {DEFAULT_MESSAGE}"
        assert render_report(AnalysisReport("Safety"), "All good") == "- All good"

    def test_buckets_in_severity_order(self) -> None:
        """Verify buckets appear in severity order with symbol headers."""
        report = AnalysisReport("Mixed")
        report.add(Severity.STRENGTH, "uses defer")
        report.add(Severity.CRITICAL, "catch unreachable")
        report.add(Severity.STRENGTH, "uses errdefer")

        assert render_report(report) == (
            "🚨 Critical\n- catch unreachable\n\n✅ Strengths\n- uses defer\n- uses errdefer"
        )

    def test_bucket_titles(self) -> None:
        """Verify each severity gets its title-cased header."""
        report = AnalysisReport("All")
        for severity in Severity:
            report.add(severity, severity.name)
        text = render_report(report)
        for header in ("Critical", "Warnings", "Suggestions", "Strengths", "Info"):
            assert header in text

    def test_summary_appended(self) -> None:
        """Verify the summary follows the buckets."""
        report = AnalysisReport("Summary", summary="Totals: 3")
        report.add(Severity.INFO, "note")
        assert render_report(report).endswith("- note\n\nTotals: 3")


class TestHelpers:
    """Tests for bullet_list() and render_sections()."""

    def test_bullet_list(self) -> None:
        """Verify items become dash bullets."""
        assert bullet_list(["a", "b"]) == "- a\n- b"
        assert bullet_list([]) == ""

    def test_render_sections(self) -> None:
        """Verify sections are titled and separated by blank lines."""
        text = render_sections([("Memory Usage", "- a"), ("Time Complexity", "- b")])
        assert text == "Memory Usage:\n- a\n\nTime Complexity:\n- b"
