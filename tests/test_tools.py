"""Tests for the tool implementations."""

import logging
import time

import pytest

from zig_mcp import tools
from zig_mcp.analyzers import MODERN_BUILD_MESSAGE, SafetyClassifier, StyleClassifier
from zig_mcp.knowledge import (
    ADVANCED_BUILD_TIPS,
    BUILD_MODE_ADVICE,
    GENERAL_RECOMMENDATION,
    specific_recommendations,
)
from zig_mcp.models import BuildConfig, OptimizationLevel, ZigDependency


class TestOptimizeCode:
    """Tests for optimize_code()."""

    def test_empty_code_release_fast(self) -> None:
        """Verify empty input gets the default message and full mode advice."""
        text = tools.optimize_code("", "ReleaseFast")
        assert text.startswith("Optimization Analysis for ReleaseFast:")
        assert "- No general optimizations suggested for this code" in text
        assert "Build Configuration for ReleaseFast:" in text
        for advice in BUILD_MODE_ADVICE[OptimizationLevel.RELEASE_FAST]:
            assert f"- {advice}" in text
        assert "zig build -Doptimize=ReleaseFast" in text

    def test_unknown_level_uses_release_safe(self, caplog: pytest.LogCaptureFixture) -> None:
        """Verify unknown levels fall back to ReleaseSafe with a warning."""
        with caplog.at_level(logging.WARNING, logger="zig_mcp.tools"):
            text = tools.optimize_code("", "Turbo")
        assert text.startswith("Optimization Analysis for ReleaseSafe:")
        assert "Unknown optimization level 'Turbo'" in caplog.text

    def test_missing_level_uses_release_safe(self) -> None:
        """Verify a missing level defaults silently to ReleaseSafe."""
        assert "Build Configuration for ReleaseSafe:" in tools.optimize_code("")

    def test_code_findings(self) -> None:
        """Verify pattern findings appear under general optimizations."""
        text = tools.optimize_code("var list = std.ArrayList(u8).init(a);", "Debug")
        assert "- Consider pre-allocating ArrayList capacity if size is known" in text
        assert "No general optimizations suggested" not in text

    def test_sections_in_order(self) -> None:
        """Verify the three sections appear in a fixed order."""
        text = tools.optimize_code("", "ReleaseSmall")
        general = text.index("General Code Optimizations:")
        build = text.index("Build Configuration for ReleaseSmall:")
        tips = text.index("Advanced Build Tips:")
        assert general < build < tips
        assert text.count("- ") >= len(ADVANCED_BUILD_TIPS)


class TestEstimateComputeUnits:
    """Tests for estimate_compute_units()."""

    def test_sections(self) -> None:
        """Verify the three estimation sections are present."""
        text = tools.estimate_compute_units("")
        assert text.startswith("Compute Units Estimation:")
        for section in ("Memory Usage:", "Time Complexity:", "Allocation Analysis:"):
            assert section in text
        assert "- Allocation Strategy: default allocator usage" in text

    def test_nested_loop_after_inner_block(self) -> None:
        """Verify an inner if block does not hide a nested loop."""
        code = (
            "for (rows) |row| {\n"
            "    if (row.len == 0) {\n"
            "        continue;\n"
            "    }\n"
            "    for (row) |cell| {\n"
            "        total += cell;\n"
            "    }\n"
            "}\n"
        )
        text = tools.estimate_compute_units(code)
        assert "- Estimated Complexity: O(n²) or worse" in text
        assert "- Nested Loops: 1" in text


class TestLargeInput:
    """Tests for analysis time on input near the size limit."""

    @pytest.mark.parametrize(
        "unit",
        ["for ", "for (", "fn f(x) {", "if (", "const a = "],
        ids=["for_word", "for_paren", "fn_open", "if_paren", "const_assign"],
    )
    def test_reports_finish_quickly(self, unit: str) -> None:
        """Verify repetitive 200 KB input is analyzed in well under the budget."""
        code = unit * (200_000 // len(unit))
        start = time.perf_counter()
        tools.estimate_compute_units(code)
        tools.get_recommendations(code)
        assert time.perf_counter() - start < 5.0


class TestGenerateCode:
    """Tests for generate_code()."""

    def test_struct_with_notes(self) -> None:
        """Verify generated code is followed by template notes."""
        text = tools.generate_code("Create a struct with tests")
        assert text.startswith("Generated Zig Code:\n\n//! Generated Zig code")
        assert "pub const MyStruct = struct {" in text
        assert "Notes:\n- Template: struct" in text
        assert 'Includes "basic functionality" and "edge cases" tests' in text

    def test_context_used(self) -> None:
        """Verify context contributes keywords."""
        text = tools.generate_code("Write something", context="an enum type")
        assert "- Template: enum" in text


class TestGetRecommendations:
    """Tests for get_recommendations()."""

    def test_every_classifier_section(self) -> None:
        """Verify each classifier has a titled, non-empty section."""
        text = tools.get_recommendations("")
        assert text.startswith("Code Analysis and Recommendations:")
        for title in (
            "Style and Conventions:",
            "Design Patterns:",
            "Safety Considerations:",
            "Performance Insights:",
            "Concurrency:",
            "Compile-time Metaprogramming:",
            "Testing:",
            "Build System:",
            "C Interoperability:",
            "Code Metrics:",
            "Language Version:",
        ):
            assert title in text
        assert "- Code appears to follow safe practices" in text
        assert "Specific Recommendations" not in text

    def test_prompt_section(self) -> None:
        """Verify a prompt adds topic-specific recommendations."""
        text = tools.get_recommendations("", prompt="performance")
        assert 'Specific Recommendations for "performance":' in text
        assert "- Use comptime when possible for compile-time evaluation" in text

    def test_custom_classifiers(self) -> None:
        """Verify only the supplied classifiers are reported."""
        text = tools.get_recommendations(
            "const f = open() catch unreachable;",
            classifiers=[SafetyClassifier(), StyleClassifier()],
        )
        assert "Safety Considerations:\n🚨 Critical" in text
        assert "Testing:" not in text


class TestSpecificRecommendations:
    """Tests for prompt keyword matching."""

    def test_multiple_groups(self) -> None:
        """Verify several groups can match one prompt."""
        advice = specific_recommendations("Memory SAFETY")
        assert "Use ArenaAllocator for batch allocations with single cleanup" in advice
        assert "Add bounds checking for array access" in advice

    def test_no_match(self) -> None:
        """Verify unmatched prompts get the general note."""
        assert specific_recommendations("colour scheme") == [GENERAL_RECOMMENDATION]


class TestBuildTools:
    """Tests for the build tool wrappers."""

    def test_generate_build_zig(self) -> None:
        """Verify the script is wrapped with notes."""
        text = tools.generate_build_zig(
            BuildConfig(target_triple="aarch64-linux-gnu", dependencies={"args": "args"})
        )
        assert text.startswith("Generated build.zig:\n\n//! Build script for Zig project")
        assert "- Default target: aarch64-linux-gnu (override with -Dtarget)" in text
        assert "zig fetch --save" in text

    def test_analyze_build_zig_modern(self) -> None:
        """Verify a generated script analyzes as modern."""
        script = tools.generate_build_zig(BuildConfig()).split("\nNotes:")[0]
        text = tools.analyze_build_zig(script)
        assert text == f"Build File Analysis:\n\nRecommendations:\n- {MODERN_BUILD_MESSAGE}"

    def test_analyze_build_zig_legacy(self) -> None:
        """Verify legacy calls are reported."""
        text = tools.analyze_build_zig("exe.setTarget(target);")
        assert "- Use standardTargetOptions() instead of setTarget()" in text

    def test_generate_build_zon(self) -> None:
        """Verify the manifest is wrapped with notes."""
        text = tools.generate_build_zon(
            [ZigDependency(name="args", url="https://x/y")], "demo", "0.2.0"
        )
        assert text.startswith("Generated build.zig.zon:\n\n.{")
        assert '.url = "https://x/y",' in text
        assert '.name = "demo",' in text
