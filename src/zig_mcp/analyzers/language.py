"""
Language feature classifiers.

Concurrency, compile-time metaprogramming, testing, C interop and
language-version (modernity) checks.
"""

from zig_mcp.analyzers.base import Rule, RuleClassifier
from zig_mcp.analyzers.patterns import (
    CONCURRENCY_PATTERNS,
    INTEROP_PATTERNS,
    METAPROGRAMMING_PATTERNS,
    MODERNITY_PATTERNS,
    TESTING_PATTERNS,
)
from zig_mcp.analyzers.review import has, lacks
from zig_mcp.models import Severity

CRITICAL = Severity.CRITICAL
WARNING = Severity.WARNING
SUGGESTION = Severity.SUGGESTION
STRENGTH = Severity.STRENGTH
INFO = Severity.INFO


class ConcurrencyClassifier(RuleClassifier):
    """Threads, locks and atomics."""

    name = "concurrency"
    title = "Concurrency"
    default_message = "No concurrency concerns detected"
    patterns = CONCURRENCY_PATTERNS
    rules = (
        Rule(
            WARNING,
            lambda code, m: m["thread_spawn"] > m["thread_join"] + m["thread_detach"],
            "Join or detach every spawned thread to avoid leaking it",
        ),
        Rule(
            CRITICAL,
            lambda code, m: m["lock"] != m["unlock"],
            lambda m: f"Lock/unlock imbalance ({m['lock']} lock vs {m['unlock']} unlock calls)",
        ),
        Rule(
            WARNING,
            lambda code, m: m["mutex"] > 0 and m["lock"] > 0 and m["defer_unlock"] == 0,
            "Pair mutex.lock() with defer mutex.unlock() to release on every path",
        ),
        Rule(
            WARNING,
            lambda code, m: m["global_var"] > 0
            and (m["thread_spawn"] > 0 or m["thread_pool"] > 0),
            "Mutable globals shared across threads need a Mutex or atomics",
        ),
        Rule(
            CRITICAL,
            has("async_await"),
            "async/await/suspend were removed from the self-hosted compiler; "
            "use threads or an event loop library",
        ),
        Rule(
            SUGGESTION,
            has("unordered"),
            "Relaxed atomic orderings (.unordered/.monotonic) do not synchronize other memory; "
            "use .acquire/.release for publication",
        ),
        Rule(
            SUGGESTION,
            lambda code, m: m["atomic"] > 0 and m["mutex"] > 0,
            "Mixing atomics and mutexes on the same data is easy to get wrong; "
            "pick one scheme per field",
        ),
        Rule(STRENGTH, has("thread_pool"), "Uses std.Thread.Pool for task scheduling"),
        Rule(STRENGTH, has("wait_group"), "Uses WaitGroup to await task completion"),
        Rule(
            STRENGTH,
            has("sync_events"),
            "Uses std.Thread synchronization primitives (ResetEvent, Condition, ...)",
        ),
        Rule(STRENGTH, has("defer_unlock"), "Releases locks with defer"),
    )


class MetaprogrammingClassifier(RuleClassifier):
    """comptime, reflection and generic type functions."""

    name = "metaprogramming"
    title = "Compile-time Metaprogramming"
    default_message = "No compile-time metaprogramming detected"
    patterns = METAPROGRAMMING_PATTERNS
    rules = (
        Rule(
            INFO,
            has("comptime"),
            lambda m: f"comptime used {m['comptime']} times",
        ),
        Rule(
            SUGGESTION,
            lambda code, m: m["type_info"] > 0 and m["compile_error"] == 0,
            "Reject unsupported types from @typeInfo with @compileError",
        ),
        Rule(
            SUGGESTION,
            has("anytype"),
            "Document the interface expected from anytype parameters "
            "or check it with @hasDecl/@hasField",
        ),
        Rule(
            SUGGESTION,
            has("inline_for"),
            "inline for/while unrolls at compile time; keep it to short, comptime-known ranges",
        ),
        Rule(
            WARNING,
            has("type_construct"),
            "@Type builds types from data; prefer plain declarations when the shape is fixed",
        ),
        Rule(
            WARNING,
            has("eval_quota"),
            "@setEvalBranchQuota raises compile-time limits; "
            "check the comptime work actually needs it",
        ),
        Rule(STRENGTH, has("generic_fn"), "Generic types built with fn (comptime T: type) type"),
        Rule(STRENGTH, has("has_decl"), "Checks capabilities with @hasDecl/@hasField"),
        Rule(STRENGTH, has("compile_error"), "Reports misuse at compile time with @compileError"),
    )


class TestingClassifier(RuleClassifier):
    """Test block coverage and std.testing usage."""

    # keeps pytest from collecting this class
    __test__ = False

    name = "testing"
    title = "Testing"
    default_message = "Testing practices look good"
    patterns = TESTING_PATTERNS
    rules = (
        Rule(
            WARNING,
            lacks("test_blocks"),
            'Add test blocks (test "name" { ... }) to cover public behavior',
        ),
        Rule(
            INFO,
            has("test_blocks"),
            lambda m: f"{m['test_blocks']} test block(s) found",
        ),
        Rule(
            SUGGESTION,
            lambda code, m: m["test_blocks"] > 0
            and m["allocations"] > 0
            and m["testing_allocator"] == 0,
            "Use std.testing.allocator in tests to catch leaks",
        ),
        Rule(
            WARNING,
            has("placeholder_expect"),
            "Replace placeholder expect(true) assertions with real checks",
        ),
        Rule(
            SUGGESTION,
            lambda code, m: m["error_union"] > 0 and m["expect_error"] == 0,
            "Cover error paths with std.testing.expectError",
        ),
        Rule(
            SUGGESTION,
            lambda code, m: m["pub_decls"] > 0 and m["ref_all_decls"] == 0,
            "Add std.testing.refAllDecls(@This()) so every declaration is semantically checked",
        ),
        Rule(INFO, has("skip_test"), "Some tests are skipped with error.SkipZigTest"),
        Rule(STRENGTH, has("testing_allocator"), "Tests use std.testing.allocator"),
        Rule(STRENGTH, has("expect_equal"), "Uses precise expectEqual* assertions"),
    )


class InteropClassifier(RuleClassifier):
    """C interop and ABI boundaries."""

    name = "interop"
    title = "C Interoperability"
    default_message = "No C interop detected"
    patterns = INTEROP_PATTERNS
    rules = (
        Rule(
            SUGGESTION,
            has("c_import"),
            "Link the C library (linkLibC/linkSystemLibrary) in build.zig for @cImport",
        ),
        Rule(
            SUGGESTION,
            has("c_import"),
            "Keep @cImport in one module and re-export it to avoid duplicate C types",
        ),
        Rule(
            WARNING,
            lambda code, m: m["export_fn"] > 0 and m["callconv"] == 0,
            "Declare callconv(.C) explicitly on functions exposed to C",
        ),
        Rule(
            SUGGESTION,
            has("extern_fn"),
            "Wrap extern functions in Zig APIs that use slices and error unions",
        ),
        Rule(
            WARNING,
            has("c_pointer"),
            "Convert [*c] pointers to [*]T, *T or ?*T as soon as possible",
        ),
        Rule(
            SUGGESTION,
            lambda code, m: m["c_malloc"] > 0 and m["c_allocator"] == 0,
            "Use std.heap.c_allocator instead of calling std.c.malloc/free directly",
        ),
        Rule(STRENGTH, has("extern_struct"), "Uses extern struct for C-compatible layout"),
        Rule(STRENGTH, has("mem_span"), "Converts C strings to slices with std.mem.span/sliceTo"),
        Rule(INFO, has("std_c"), lambda m: f"{m['std_c']} std.c references"),
    )


class ModernityClassifier(RuleClassifier):
    """Constructs removed or renamed in recent Zig releases."""

    name = "modernity"
    title = "Language Version"
    default_message = "No outdated language constructs detected"
    patterns = MODERNITY_PATTERNS
    rules = (
        Rule(
            CRITICAL,
            lambda code, m: any(
                m[key]
                for key in (
                    "int_cast_two_arg",
                    "float_cast_two_arg",
                    "ptr_cast_two_arg",
                    "truncate_two_arg",
                    "bit_cast_two_arg",
                )
            ),
            "Two-argument casts were removed in 0.11; write @as(T, @intCast(x)) "
            "or rely on the result type",
        ),
        Rule(CRITICAL, has("enum_to_int"), "@enumToInt was renamed to @intFromEnum"),
        Rule(CRITICAL, has("int_to_enum"), "@intToEnum was renamed to @enumFromInt"),
        Rule(CRITICAL, has("bool_to_int"), "@boolToInt was renamed to @intFromBool"),
        Rule(CRITICAL, has("ptr_to_int"), "@ptrToInt was renamed to @intFromPtr"),
        Rule(CRITICAL, has("int_to_ptr"), "@intToPtr was renamed to @ptrFromInt"),
        Rule(CRITICAL, has("float_to_int"), "@floatToInt was renamed to @intFromFloat"),
        Rule(CRITICAL, has("int_to_float"), "@intToFloat was renamed to @floatFromInt"),
        Rule(
            WARNING,
            has("mem_copy_set"),
            "std.mem.copy/set are deprecated; use @memcpy/@memset or std.mem.copyForwards",
        ),
        Rule(
            CRITICAL,
            has("async_await"),
            "async/await/suspend are not supported by the self-hosted compiler",
        ),
        Rule(
            WARNING,
            has("usingnamespace"),
            "usingnamespace is being removed; import declarations explicitly",
        ),
        Rule(
            WARNING,
            has("old_builder"),
            "std.build.Builder was replaced by std.Build",
        ),
        Rule(
            WARNING,
            has("path_struct"),
            'Use b.path("...") instead of .{ .path = "..." }',
        ),
        Rule(
            WARNING,
            has("old_for_index"),
            "Use multi-object for syntax: for (items, 0..) |item, i|",
        ),
        Rule(STRENGTH, has("multi_object_for"), "Uses multi-object for loops with index ranges"),
        Rule(STRENGTH, has("as_cast"), "Uses @as with result-type casts"),
    )
