"""Tests for compute unit estimation."""

import time

import pytest

from zig_mcp.analyzers.compute import (
    COMPLEXITY_CONSTANT,
    COMPLEXITY_LINEAR,
    COMPLEXITY_QUADRATIC,
    COMPLEXITY_RECURSIVE,
    DEFAULT_ALLOCATION_STRATEGY,
    REGEX_FOR_TOKENS,
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

NESTED_LOOPS = """pub fn sum(grid: [][]const u32) u32 {
    var total: u32 = 0;
    for (grid) |row| {
        for (row) |cell| {
            total += cell;
        }
    }
    return total;
}
"""

RECURSIVE = """fn fact(n: u32) u32 {
    if (n == 0) return 1;
    return n * fact(n - 1);
}
"""

NESTED_AFTER_INNER_BLOCK = """for (rows) |row| {
    if (row.len == 0) {
        continue;
    }
    for (row) |cell| {
        total += cell;
    }
}
"""


class TestEstimateComplexity:
    """Tests for the complexity decision ladder."""

    @pytest.mark.parametrize(
        ("metrics", "expected"),
        [
            ({"nested_loops": 1, "loops": 2, "recursion": 1}, COMPLEXITY_QUADRATIC),
            ({"nested_loops": 0, "loops": 3, "recursion": 1}, COMPLEXITY_LINEAR),
            ({"nested_loops": 0, "loops": 0, "recursion": 1}, COMPLEXITY_RECURSIVE),
            ({"nested_loops": 0, "loops": 0, "recursion": 0}, COMPLEXITY_CONSTANT),
            ({}, COMPLEXITY_CONSTANT),
        ],
        ids=["nested_wins", "loop_beats_recursion", "recursion", "constant", "missing_keys"],
    )
    def test_ladder(self, metrics: dict[str, int], expected: str) -> None:
        """Verify the first matching rung decides the label."""
        assert estimate_complexity(metrics) == expected


class TestMaxLoopNestingDepth:
    """Tests for the line-based nesting scanner."""

    def test_no_loops(self) -> None:
        """Verify code without loops has depth 0."""
        assert max_loop_nesting_depth("const x = 1;\n") == 0

    def test_nested(self) -> None:
        """Verify two nested loops read as depth 2."""
        assert max_loop_nesting_depth(NESTED_LOOPS) == 2

    def test_sequential_loops(self) -> None:
        """Verify closed loops do not accumulate depth."""
        code = "for (a) |x| {\n    _ = x;\n}\nwhile (i < n) {\n    i += 1;\n}\n"
        assert max_loop_nesting_depth(code) == 1

    def test_stray_braces_never_negative(self) -> None:
        """Verify unmatched closing braces do not drive depth below zero."""
        code = "}\n}\nfor (a) |x| {\n}\n"
        assert max_loop_nesting_depth(code) == 1


class TestCountNestedLoops:
    """Tests for the brace-tracking nested loop counter."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("", 0),
            ("for (a) |x| {\n    _ = x;\n}\nwhile (i < n) {\n    i += 1;\n}\n", 0),
            (NESTED_LOOPS, 1),
            (NESTED_AFTER_INNER_BLOCK, 1),
            ("while (i < n) : (i += 1) {\n    for (b) |y| {}\n    for (c) |z| {}\n}\n", 2),
            ("for (a) |x| for (b) |y| {\n    _ = x + y;\n}\n", 1),
            ("for (a) |x| sum += x;\nfn next() void {\n    for (b) |y| {}\n}\n", 0),
            ("}\n}\nfor (a) |x| {\n    for (b) |y| {}\n}\n", 1),
        ],
        ids=[
            "empty",
            "sequential",
            "nested",
            "inner_block_closes_first",
            "two_inner_loops",
            "braceless_outer",
            "braceless_loop_ends_at_semicolon",
            "stray_braces",
        ],
    )
    def test_counts(self, code: str, expected: int) -> None:
        """Verify only loops opened inside a loop body are counted."""
        assert count_nested_loops(code) == expected

    def test_for_only_tokens(self) -> None:
        """Verify the for-only token set ignores while loops."""
        code = "while (i < n) {\n    for (b) |y| {}\n}\n"
        assert count_nested_loops(code, REGEX_FOR_TOKENS) == 0
        assert count_nested_loops(code) == 1


class TestCountSelfRecursion:
    """Tests for the self-recursion counter."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("", 0),
            (RECURSIVE, 1),
            ("fn fib(n: u32) u32 {\n    return fib(n - 1) + fib(n - 2);\n}\n", 1),
            ("fn a() void {\n    b();\n}\nfn b() void {\n    a();\n}\n", 0),
            ("extern fn puts(s: [*c]const u8) c_int;\nfn main() void {\n    puts(x);\n}\n", 0),
            (
                "fn walk(self: *Node) void {\n"
                "    if (self.left) |l| {\n        l.walk();\n    }\n}\n",
                1,
            ),
        ],
        ids=["empty", "factorial", "counted_once", "mutual", "extern_decl", "method_in_block"],
    )
    def test_counts(self, code: str, expected: int) -> None:
        """Verify functions calling themselves are counted once each."""
        assert count_self_recursion(code) == expected


class TestMeasureTimeComplexity:
    """Tests for the combined time-complexity metrics."""

    def test_inner_block_does_not_hide_nesting(self) -> None:
        """Verify an if block closing before the inner loop keeps it nested."""
        metrics = measure_time_complexity(NESTED_AFTER_INNER_BLOCK)
        assert metrics["loops"] == 2
        assert metrics["nested_loops"] == 1
        assert estimate_complexity(metrics) == COMPLEXITY_QUADRATIC

    @pytest.mark.parametrize(
        "unit",
        ["for ", "for (", "for (a) |x| {", "fn f(", "fn f(x) {", "{", "@Vector(", "test \""],
        ids=[
            "for_word",
            "for_paren",
            "loop_open",
            "fn_paren",
            "fn_open",
            "brace",
            "vector",
            "test",
        ],
    )
    def test_large_input_scales_linearly(self, unit: str) -> None:
        """Verify repetitive input near the size limit is analyzed quickly."""
        code = unit * (200_000 // len(unit))
        start = time.perf_counter()
        analyze_time_complexity(code)
        assert time.perf_counter() - start < 2.0


class TestAllocationStrategy:
    """Tests for determine_allocation_strategy()."""

    @pytest.mark.parametrize(
        ("metrics", "expected"),
        [
            ({}, DEFAULT_ALLOCATION_STRATEGY),
            ({"arena": 2}, "Arena-based allocation"),
            ({"fixed_buffer": 1}, "FixedBuffer-based allocation"),
            ({"page": 1, "arena": 1}, "Mixed allocation strategy (Arena, Page)"),
            (
                {"general_purpose": 1, "fixed_buffer": 1},
                "Mixed allocation strategy (FixedBuffer, GeneralPurpose)",
            ),
        ],
        ids=["default", "arena", "fixed_buffer", "mixed_ordered", "mixed_other"],
    )
    def test_labels(self, metrics: dict[str, int], expected: str) -> None:
        """Verify strategy labels and their fixed kind order."""
        assert determine_allocation_strategy(metrics) == expected


class TestReports:
    """Tests for the three estimation sections."""

    def test_memory_heap_profile(self) -> None:
        """Verify heap containers yield a heap-heavy profile and advice."""
        text = analyze_memory_usage("var list = std.ArrayList(u8).init(allocator);")
        assert "- Heap Allocations: 1 detected" in text
        assert "- Memory Profile: Heap-heavy" in text
        assert "Consider ArrayListUnmanaged for reduced pointer indirection" in text

    def test_memory_empty_is_stack_optimized(self) -> None:
        """Verify empty input is reported without recommendations."""
        text = analyze_memory_usage("")
        assert "- Memory Profile: Stack-optimized" in text
        assert "Recommendations:" not in text

    def test_time_nested(self) -> None:
        """Verify nested loops give a quadratic estimate."""
        text = analyze_time_complexity(NESTED_LOOPS)
        assert f"Estimated Complexity: {COMPLEXITY_QUADRATIC}" in text
        assert "- Max Loop Nesting Depth: 2" in text

    def test_time_recursive(self) -> None:
        """Verify self-recursion without loops is recursion-dependent."""
        text = analyze_time_complexity(RECURSIVE)
        assert f"Estimated Complexity: {COMPLEXITY_RECURSIVE}" in text
        assert "- Recursive Patterns: 1 detected" in text

    def test_time_states_heuristic(self) -> None:
        """Verify the estimate is labelled as a heuristic."""
        assert "heuristic" in analyze_time_complexity("")

    def test_allocations_default(self) -> None:
        """Verify code without allocators uses the default label."""
        text = analyze_allocations("const x = 1;")
        assert f"- Allocation Strategy: {DEFAULT_ALLOCATION_STRATEGY}" in text
        assert "Consider using specialized allocators for better performance" in text

    def test_allocations_arena_without_defer(self) -> None:
        """Verify an arena without defer asks for cleanup."""
        code = "var arena = std.heap.ArenaAllocator.init(std.heap.page_allocator);"
        text = analyze_allocations(code)
        assert "- Allocation Strategy: Mixed allocation strategy (Arena, Page)" in text
        assert "Add defer statements for proper cleanup" in text
