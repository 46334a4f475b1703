"""
Code review classifiers.

Style, idiom, safety, performance and general optimization rules. Each
classifier is a pattern table plus an ordered rule list; see
``RuleClassifier`` for evaluation semantics.
"""

from zig_mcp.analyzers.base import Check, Rule, RuleClassifier
from zig_mcp.analyzers.compute import (
    REGEX_FOR_TOKENS,
    count_nested_loops,
    estimate_complexity,
    measure_time_complexity,
)
from zig_mcp.analyzers.patterns import (
    IDIOM_PATTERNS,
    OPTIMIZATION_PATTERNS,
    PERFORMANCE_PATTERNS,
    SAFETY_PATTERNS,
    STYLE_PATTERNS,
    MetricSet,
)
from zig_mcp.models import Severity

CRITICAL = Severity.CRITICAL
WARNING = Severity.WARNING
SUGGESTION = Severity.SUGGESTION
STRENGTH = Severity.STRENGTH
INFO = Severity.INFO


def has(name: str) -> Check:
    """Rule check: metric ``name`` matched at least once."""
    return lambda code, m: m[name] > 0


def lacks(name: str) -> Check:
    """Rule check: metric ``name`` never matched."""
    return lambda code, m: m[name] == 0


class StyleClassifier(RuleClassifier):
    """Naming, formatting and documentation conventions."""

    name = "style"
    title = "Style and Conventions"
    default_message = "Code follows Zig style guidelines"
    patterns = STYLE_PATTERNS
    rules = (
        Rule(
            SUGGESTION,
            has("pascal_case_assign"),
            "Use snake_case for variable names instead of PascalCase",
        ),
        Rule(
            SUGGESTION,
            has("camel_case_assign"),
            "Use snake_case for variable names instead of camelCase",
        ),
        Rule(
            SUGGESTION,
            has("trailing_whitespace"),
            lambda m: f"Remove trailing whitespace ({m['trailing_whitespace']} lines)",
        ),
        Rule(SUGGESTION, has("tabs"), "Use spaces instead of tabs for indentation (zig fmt)"),
        Rule(
            SUGGESTION,
            lacks("doc_comments"),
            "Add documentation comments (///) for public declarations",
        ),
        Rule(
            SUGGESTION,
            has("long_lines"),
            lambda m: f"Consider breaking long lines ({m['long_lines']} lines >100 chars)",
        ),
        Rule(WARNING, has("todo_comments"), "Address TODO/FIXME comments before production"),
        Rule(
            STRENGTH,
            has("doc_comments"),
            lambda m: f"Documentation comments present ({m['doc_comments']})",
        ),
    )


class IdiomClassifier(RuleClassifier):
    """Common Zig idioms and anti-patterns."""

    name = "patterns"
    title = "Design Patterns"
    default_message = "No significant pattern issues detected"
    patterns = IDIOM_PATTERNS
    rules = (
        Rule(
            WARNING,
            lambda code, m: m["array_list"] > 0 and m["deinit"] == 0,
            "Consider implementing deinit for proper cleanup",
        ),
        Rule(
            SUGGESTION,
            has("infinite_while"),
            "Consider using labeled breaks for clearer loop control",
        ),
        Rule(
            SUGGESTION,
            has("alloc_print"),
            "Consider using formatters or bufPrint when possible",
        ),
        Rule(WARNING, has("panic"), "Consider using proper error handling instead of @panic"),
        Rule(STRENGTH, has("mem_eql_u8"), "Uses std.mem.eql for byte slice comparison"),
        Rule(STRENGTH, has("defer_deinit"), "Releases resources with defer ... deinit()"),
        Rule(STRENGTH, has("tagged_union"), "Models variants with tagged unions (union(enum))"),
        Rule(STRENGTH, has("error_switch"), "Handles errors exhaustively with catch |err| switch"),
        Rule(STRENGTH, has("optional_capture"), "Unwraps optionals with payload captures"),
    )


class SafetyClassifier(RuleClassifier):
    """Undefined behaviour risks and error handling gaps."""

    name = "safety"
    title = "Safety Considerations"
    default_message = "Code appears to follow safe practices"
    patterns = SAFETY_PATTERNS
    rules = (
        Rule(
            WARNING,
            lambda code, m: m["error_void"] > 0 and m["try_expr"] == 0,
            "Add error handling for functions that can fail",
        ),
        Rule(
            WARNING,
            has("undefined"),
            "Initialize variables explicitly instead of using undefined",
        ),
        Rule(WARNING, has("ptr_cast"), "Review pointer casts for safety implications"),
        Rule(
            SUGGESTION,
            lambda code, m: m["int_cast"] > 0 and m["range_check"] == 0,
            "Check ranges before @intCast or use std.math.cast for fallible narrowing",
        ),
        Rule(SUGGESTION, has("unreachable"), "Ensure unreachable paths are truly unreachable"),
        Rule(
            CRITICAL,
            has("catch_unreachable"),
            "catch unreachable turns errors into undefined behavior in release builds; "
            "handle or propagate the error",
        ),
        Rule(
            CRITICAL,
            has("runtime_safety_off"),
            "@setRuntimeSafety(false) removes bounds and overflow checks; "
            "limit it to measured hot paths",
        ),
        Rule(
            SUGGESTION,
            has("force_unwrap"),
            lambda m: f"Replace forced unwraps (.?) with orelse or if captures "
            f"({m['force_unwrap']} found)",
        ),
        Rule(
            WARNING,
            lambda code, m: m["align_cast"] > 0 and m["ptr_cast"] > 0,
            "Verify source alignment before combining @alignCast with @ptrCast",
        ),
        Rule(STRENGTH, has("errdefer"), "Uses errdefer for error-path cleanup"),
    )


class PerformanceClassifier(RuleClassifier):
    """Allocation, layout, vectorization and builtin usage advice."""

    name = "performance"
    title = "Performance Insights"
    default_message = "No immediate performance concerns detected"
    patterns = PERFORMANCE_PATTERNS
    rules = (
        Rule(
            SUGGESTION,
            lambda code, m: m["array_list"] > 0 and m["init_capacity"] == 0,
            "Consider pre-allocating ArrayList capacity with initCapacity()",
        ),
        Rule(
            SUGGESTION,
            lambda code, m: m["array_list"] > 0 and m["array_list_unmanaged"] == 0,
            "Consider ArrayListUnmanaged for reduced pointer indirection",
        ),
        Rule(SUGGESTION, has("constant_arith"), "Use comptime for constant expressions"),
        Rule(SUGGESTION, has("crypto"), "Consider using batch processing for crypto operations"),
        Rule(
            SUGGESTION,
            has("mul_div_mod"),
            "Consider using bit operations for power-of-2 operations",
        ),
        Rule(
            SUGGESTION,
            has("numeric_slices"),
            "Consider @Vector for SIMD operations on numeric arrays",
        ),
        Rule(SUGGESTION, has("numeric_slices"), "Use @reduce() for vector reduction operations"),
        Rule(
            SUGGESTION,
            has("arith_loop"),
            "Loop with arithmetic operations can benefit from vectorization",
        ),
        Rule(
            SUGGESTION,
            has("struct_decl"),
            "Order struct fields by alignment (largest first) for optimal packing",
        ),
        Rule(
            SUGGESTION,
            has("struct_decl"),
            "Consider packed struct for memory-constrained scenarios",
        ),
        Rule(
            SUGGESTION,
            has("nested_slices"),
            "Consider MultiArrayList for better cache locality (AoS → SoA)",
        ),
        Rule(
            SUGGESTION,
            has("small_fn"),
            "Consider inline fn for small, frequently-called functions",
        ),
        Rule(
            SUGGESTION,
            has("call_builtin"),
            "Use @call(.always_inline, ...) for guaranteed inlining",
        ),
        Rule(
            SUGGESTION,
            has("math_sqrt"),
            "Use @sqrt() builtin instead of std.math.sqrt for better performance",
        ),
        Rule(SUGGESTION, has("math_trig"), "Use @sin()/@cos() builtins for better performance"),
        Rule(
            SUGGESTION,
            has("mem_copy_set"),
            "Use @memcpy()/@memset() builtins for optimized memory operations",
        ),
        Rule(
            SUGGESTION,
            lambda code, m: m["hash_map"] > 0 and m["array_hash_map"] == 0,
            "Consider ArrayHashMap for better cache locality with small datasets",
        ),
        Rule(
            STRENGTH,
            has("bounded_array"),
            "BoundedArray provides stack allocation with dynamic sizing",
        ),
        Rule(
            SUGGESTION,
            has("hash_constant"),
            "Move hash/crypto constants to comptime evaluation",
        ),
        Rule(
            SUGGESTION,
            has("switch_expr"),
            "Ensure switch cases are comptime-known when possible",
        ),
        Rule(
            SUGGESTION,
            has("threads"),
            "Consider target CPU cache line size for atomic operations",
        ),
        Rule(
            SUGGESTION,
            has("threads"),
            "Use std.builtin.AtomicOrder for fine-grained memory ordering control",
        ),
        Rule(WARNING, has("nested_for"), "Review nested loops for optimization opportunities"),
        Rule(
            INFO,
            lambda code, m: True,
            lambda m: f"Estimated time complexity: {estimate_complexity(m)} (heuristic estimate)",
        ),
    )

    def measure(self, code: str) -> MetricSet:
        """Pattern counts plus the time-complexity counts for the estimate."""
        return {
            **super().measure(code),
            **measure_time_complexity(code),
            "nested_for": count_nested_loops(code, REGEX_FOR_TOKENS),
        }


class OptimizationClassifier(RuleClassifier):
    """General optimization opportunities reported by optimize_code."""

    name = "optimization"
    title = "General Code Optimizations"
    default_message = "No general optimizations suggested for this code"
    patterns = OPTIMIZATION_PATTERNS
    rules = (
        Rule(
            SUGGESTION,
            has("array_list"),
            "Consider pre-allocating ArrayList capacity if size is known",
        ),
        Rule(
            SUGGESTION,
            has("array_list"),
            "Use ArrayListUnmanaged for better cache locality and reduced indirection",
        ),
        Rule(
            SUGGESTION,
            has("alloc_print"),
            "Consider using std.fmt.bufPrint for stack allocation when possible",
        ),
        Rule(
            SUGGESTION,
            has("infinite_while"),
            "Consider using continue/break instead of while(true)",
        ),
        Rule(
            SUGGESTION,
            has("arith_loop"),
            "Consider using @Vector for SIMD operations on numeric arrays",
        ),
        Rule(
            SUGGESTION,
            has("float_slices"),
            "Float arrays can benefit from vectorized operations using @Vector",
        ),
        Rule(
            SUGGESTION,
            has("integer_constant"),
            "Move constant calculations to comptime blocks",
        ),
        Rule(
            SUGGESTION,
            has("hash_or_crypto"),
            "Consider comptime evaluation for constant hash/crypto operations",
        ),
        Rule(
            SUGGESTION,
            has("struct_decl"),
            "Consider using packed struct for memory efficiency if appropriate",
        ),
        Rule(
            SUGGESTION,
            has("struct_decl"),
            "Order struct fields by size (largest first) for optimal packing",
        ),
        Rule(SUGGESTION, has("small_fn"), "Consider inline fn for small hot functions"),
        Rule(
            SUGGESTION,
            has("std_math"),
            "Use builtin math functions like @sqrt, @sin, @cos for better performance",
        ),
        Rule(
            SUGGESTION,
            has("hash_map"),
            "Consider ArrayHashMap for better cache locality with small datasets",
        ),
        Rule(
            SUGGESTION,
            has("hash_map"),
            "Use HashMap with a custom context for custom hash/equality functions",
        ),
        Rule(
            STRENGTH,
            has("multi_array_list"),
            "MultiArrayList provides better cache efficiency for struct-of-arrays pattern",
        ),
    )
