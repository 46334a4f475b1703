"""
Pattern tables for heuristic Zig analysis.

Every table maps a metric name to a PatternRule. Tables are built once at
import time, wrapped in read-only mappings and shared by all requests.
Nothing here understands Zig syntax; rules match surface text only.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TypeAlias

MetricSet: TypeAlias = dict[str, int]
PatternTable: TypeAlias = Mapping[str, "PatternRule"]


@dataclass(frozen=True)
class PatternRule:
    """Named text-matching rule.

    Attributes:
        name: Metric name the match count is stored under
        pattern: Compiled regular expression
        concern: What the rule is meant to detect
    """

    name: str
    pattern: re.Pattern[str]
    concern: str

    def count(self, text: str) -> int:
        """Count non-overlapping matches in ``text``."""
        return sum(1 for _ in self.pattern.finditer(text))


def _table(*rules: tuple[str, str, str] | tuple[str, str, str, int]) -> PatternTable:
    """Compile ``(name, regex, concern[, flags])`` tuples into a read-only table."""
    compiled: dict[str, PatternRule] = {}
    for rule in rules:
        name, regex, concern = rule[:3]
        flags = rule[3] if len(rule) > 3 else 0
        compiled[name] = PatternRule(name, re.compile(regex, flags), concern)
    return MappingProxyType(compiled)


def extract_metrics(text: str, table: PatternTable) -> MetricSet:
    """Count matches of every rule in ``table`` against ``text``.

    Pure function of its inputs. Absent patterns count 0; the text is never
    checked for being Zig at all.

    Args:
        text: Source text, possibly empty.
        table: Pattern table to apply.

    Returns:
        MetricSet mapping each rule name to its match count.

    Raises:
        No exceptions - any string input is accepted.

    Example:
        >>> extract_metrics("while (true) {}", TIME_COMPLEXITY_PATTERNS)["loops"]
        1
    """
    return {name: rule.count(text) for name, rule in table.items()}


EMPTY_TABLE: PatternTable = MappingProxyType({})

# Gaps between anchors use bounded repeats so a scan stays linear in the text.
# Loop nesting and self-recursion need brace tracking; see analyzers.compute.

# ==================== COMPUTE ESTIMATION ====================

MEMORY_PATTERNS = _table(
    ("heap_alloc", r"std\.(?:ArrayList|StringHashMap|AutoHashMap|HashMap)", "heap containers"),
    ("stack_alloc", r"var\s+\w+\s*:\s*\[\d+\]", "fixed-size stack arrays"),
    (
        "slices",
        r"\[\](?:u8|i32|f64|usize|isize|f32|i64|u32|u64|i16|u16)\b",
        "numeric slices",
    ),
    ("multi_array_list", r"std\.MultiArrayList", "struct-of-arrays containers"),
    ("bounded_array", r"std\.BoundedArray", "stack-backed dynamic arrays"),
    ("vector_types", r"@Vector\(\s*\d+\s*,", "SIMD vector types"),
    ("packed_struct", r"\bpacked\s+struct", "packed layouts"),
    ("aligned_types", r"@alignOf|align\(\d+\)", "explicit alignment"),
    (
        "allocators",
        r"std\.heap\.(?:ArenaAllocator|FixedBufferAllocator|GeneralPurposeAllocator|page_allocator)",
        "custom allocators",
    ),
    ("array_list_unmanaged", r"ArrayListUnmanaged", "unmanaged lists"),
    ("simd_alignment", r"@alignOf\(.{0,200}@Vector", "vector alignment queries"),
)

TIME_COMPLEXITY_PATTERNS = _table(
    ("loops", r"\b(?:while|for)\s*\(", "loop headers"),
    ("vector_operations", r"@Vector\([^)]{0,200}\)[^;]{0,200}[+\-*/]", "arithmetic on vectors"),
    ("builtin_math", r"@(?:sqrt|sin|cos|exp|log|pow)\s*\(", "math builtins"),
    ("memory_ops", r"@(?:memcpy|memset|memmove)\s*\(", "bulk memory builtins"),
    ("simd_reductions", r"@reduce\s*\(", "vector reductions"),
    ("parallelizable", r"std\.Thread|std\.atomic", "threads and atomics"),
)

ALLOCATION_PATTERNS = _table(
    ("comptime", r"\bcomptime\s", "compile-time evaluation"),
    ("arena", r"std\.heap\.ArenaAllocator", "arena allocator"),
    ("fixed_buffer", r"std\.heap\.FixedBufferAllocator", "fixed buffer allocator"),
    ("general_purpose", r"std\.heap\.GeneralPurposeAllocator", "general purpose allocator"),
    ("page", r"std\.heap\.page_allocator", "page allocator"),
    ("stack_fallback", r"std\.heap\.StackFallbackAllocator", "stack fallback allocator"),
    ("aligned_alloc", r"alignedAlloc|@alignOf", "aligned allocations"),
    ("defer", r"\bdefer\s", "defer statements"),
    ("errdefer", r"\berrdefer\s", "errdefer statements"),
    ("embed_file", r"@embedFile\s*\(", "embedded files"),
    ("comptime_block", r"\bcomptime\s*\{[^}]{1,500}\}", "comptime blocks"),
)

# Allocator kinds used for strategy labelling, in reporting order
ALLOCATOR_KINDS: Mapping[str, str] = MappingProxyType(
    {
        "arena": "Arena",
        "fixed_buffer": "FixedBuffer",
        "general_purpose": "GeneralPurpose",
        "page": "Page",
    }
)

# ==================== REVIEW CLASSIFIERS ====================

STYLE_PATTERNS = _table(
    (
        "pascal_case_assign",
        r"\b[A-Z][a-z]+(?:[A-Z][a-z]+)*\s*=(?!=)"
        r"(?!\s*(?:struct|enum|union|error|packed|extern|opaque)\b|\s*@(?:This|import|Type)\b)",
        "PascalCase variables (type declarations excluded)",
    ),
    ("camel_case_assign", r"\b[a-z]+[A-Z][a-z]+\s*=[^=]", "camelCase variables"),
    ("trailing_whitespace", r"(?<![ \t])[ \t]+$", "trailing whitespace", re.MULTILINE),
    ("tabs", r"\t", "tab indentation"),
    ("doc_comments", r"//[!/] ", "doc comments"),
    ("todo_comments", r"//\s*(?:TODO|FIXME|XXX)", "unfinished work", re.IGNORECASE),
    ("long_lines", r"^.{101,}$", "lines over 100 characters", re.MULTILINE),
    ("pub_decls", r"\bpub\s+(?:fn|const|var)\b", "public declarations"),
)

IDIOM_PATTERNS = _table(
    ("array_list", r"std\.ArrayList", "ArrayList usage"),
    ("deinit", r"\bdeinit\b", "deinit calls"),
    ("infinite_while", r"while\s*\(\s*true\s*\)", "while (true) loops"),
    ("alloc_print", r"std\.fmt\.allocPrint", "allocating formatting"),
    ("panic", r"@panic\s*\(", "@panic calls"),
    ("mem_eql_u8", r"std\.mem\.eql\(\s*u8\s*,", "byte slice comparison"),
    ("defer_deinit", r"\bdefer\s+[\w.]+\.deinit\(", "deferred cleanup"),
    ("tagged_union", r"\bunion\s*\(\s*enum\s*\)", "tagged unions"),
    ("error_switch", r"catch\s*\|\s*\w+\s*\|\s*switch", "exhaustive error handling"),
    (
        "optional_capture",
        r"\bif\s*\([^)]{0,200}\)\s*\|\s*\w+\s*\|",
        "optional unwrapping captures",
    ),
)

SAFETY_PATTERNS = _table(
    ("error_void", r"!void", "error-returning functions"),
    ("try_expr", r"\btry\b", "try expressions"),
    ("undefined", r"\bundefined\b", "undefined initialisation"),
    ("ptr_cast", r"@ptrCast\s*\(", "pointer casts"),
    ("int_cast", r"@intCast\s*\(", "integer narrowing"),
    ("range_check", r"std\.math\.cast\s*\(|maxInt|minInt", "explicit range checks"),
    ("unreachable", r"\bunreachable\b", "unreachable paths"),
    ("catch_unreachable", r"catch\s+unreachable", "ignored errors"),
    ("runtime_safety_off", r"@setRuntimeSafety\s*\(\s*false\s*\)", "disabled safety checks"),
    ("force_unwrap", r"\.\?", "forced optional unwraps"),
    ("errdefer", r"\berrdefer\b", "error-path cleanup"),
    ("align_cast", r"@alignCast\s*\(", "alignment casts"),
)

PERFORMANCE_PATTERNS = _table(
    ("array_list", r"std\.ArrayList\b", "ArrayList usage"),
    ("init_capacity", r"initCapacity", "pre-allocated capacity"),
    ("array_list_unmanaged", r"ArrayListUnmanaged", "unmanaged lists"),
    ("constant_arith", r"\+\s*\d+\s*\+", "runtime constant arithmetic"),
    ("crypto", r"std\.crypto", "crypto routines"),
    ("mul_div_mod", r"\b(?:mul|div|mod)\b", "arithmetic helpers"),
    ("numeric_slices", r"\[\](?:f32|f64|i32)\b", "numeric slices"),
    (
        "arith_loop",
        r"\bfor\s*\([^)]{0,200}\)\s*\|[^|]{0,100}\|\s*\{[^}+\-*/]{0,500}[+\-*/]",
        "arithmetic in loops",
    ),
    ("struct_decl", r"\bstruct\s*\{", "struct declarations"),
    ("nested_slices", r"\[\]\[\]", "slices of slices"),
    ("small_fn", r"\bfn\s+\w+[^{]{0,200}\{[^}]{1,100}\}", "small functions"),
    ("call_builtin", r"@call\s*\(", "@call usage"),
    ("math_sqrt", r"std\.math\.sqrt", "std.math.sqrt"),
    ("math_trig", r"std\.math\.(?:sin|cos)\b", "std.math trigonometry"),
    ("mem_copy_set", r"std\.mem\.(?:copy|set)\b", "std.mem.copy/set"),
    ("hash_map", r"std\.HashMap", "HashMap usage"),
    ("array_hash_map", r"ArrayHashMap", "ArrayHashMap usage"),
    ("bounded_array", r"std\.BoundedArray", "BoundedArray usage"),
    ("hash_constant", r"const\s+\w+\s*=.{0,200}std\.(?:hash|crypto)", "hash/crypto constants"),
    ("switch_expr", r"\bswitch\s*\(", "switch expressions"),
    ("threads", r"std\.Thread|std\.atomic", "threads and atomics"),
)

OPTIMIZATION_PATTERNS = _table(
    ("array_list", r"std\.ArrayList", "ArrayList usage"),
    ("alloc_print", r"std\.fmt\.allocPrint", "allocating formatting"),
    ("infinite_while", r"while\s*\(\s*true\s*\)", "while (true) loops"),
    (
        "arith_loop",
        r"\bfor\s*\([^)]{0,200}\)\s*\|[^|]{0,100}\|\s*\{[^}+\-*/]{0,500}[+\-*/][^}]{0,500}\}",
        "arithmetic loops",
    ),
    ("float_slices", r"\[\]f(?:32|64)\b", "float slices"),
    ("integer_constant", r"\bconst\s+\w+\s*=\s*\d+", "literal constants"),
    ("hash_or_crypto", r"std\.(?:crypto|hash)\b", "hash/crypto routines"),
    ("struct_decl", r"\bstruct\s*\{", "struct declarations"),
    ("small_fn", r"\bfn\s+\w+[^{]{0,200}\{[^}]{1,50}\}", "small functions"),
    ("std_math", r"std\.math\b", "std.math usage"),
    ("hash_map", r"std\.HashMap", "HashMap usage"),
    ("multi_array_list", r"std\.MultiArrayList", "MultiArrayList usage"),
)

CONCURRENCY_PATTERNS = _table(
    ("thread_spawn", r"std\.Thread\.spawn\s*\(|Thread\.spawn\s*\(", "spawned threads"),
    ("thread_join", r"\.join\s*\(\s*\)", "joined threads"),
    ("thread_detach", r"\.detach\s*\(\s*\)", "detached threads"),
    ("mutex", r"\bMutex\b", "mutexes"),
    ("lock", r"\.lock\s*\(\s*\)", "lock calls"),
    ("unlock", r"\.unlock\s*\(\s*\)", "unlock calls"),
    ("defer_unlock", r"\bdefer\s+[\w.]+\.unlock\s*\(", "deferred unlocks"),
    ("global_var", r"^(?:pub\s+)?var\s+\w+", "mutable globals", re.MULTILINE),
    ("async_await", r"\b(?:async|await|suspend|resume|nosuspend)\b", "async keywords"),
    ("atomic", r"std\.atomic|@atomic(?:Load|Store|Rmw)|@cmpxchg(?:Weak|Strong)", "atomics"),
    ("unordered", r"\.unordered\b|\.monotonic\b", "relaxed orderings"),
    ("thread_pool", r"std\.Thread\.Pool|Thread\.Pool", "thread pools"),
    ("wait_group", r"WaitGroup", "wait groups"),
    ("sync_events", r"Thread\.(?:ResetEvent|Condition|Semaphore|RwLock)", "sync primitives"),
)

METAPROGRAMMING_PATTERNS = _table(
    ("comptime", r"\bcomptime\b", "compile-time evaluation"),
    ("type_info", r"@typeInfo\s*\(", "type reflection"),
    ("compile_error", r"@compileError\s*\(", "compile-time diagnostics"),
    ("anytype", r"\banytype\b", "duck-typed parameters"),
    ("inline_for", r"\binline\s+(?:for|while)\b", "unrolled loops"),
    ("type_construct", r"@Type\s*\(", "type construction"),
    ("eval_quota", r"@setEvalBranchQuota\s*\(", "raised comptime quotas"),
    (
        "generic_fn",
        r"\bfn\s+\w+\s*\((?=[^)]{0,200}\btype\b)[^)]{0,200}\)\s*type\b",
        "generic type functions",
    ),
    ("type_name", r"@typeName\s*\(", "type names"),
    ("has_decl", r"@hasDecl\s*\(|@hasField\s*\(", "declaration checks"),
)

TESTING_PATTERNS = _table(
    ("test_blocks", r"\btest\s+\"[^\"\n]{0,200}\"\s*\{|\btest\s*\{", "test blocks"),
    ("testing_allocator", r"testing\.allocator", "leak-checking allocator"),
    ("allocations", r"\.alloc\s*\(|\.create\s*\(|std\.ArrayList|allocPrint", "allocations"),
    ("placeholder_expect", r"expect\s*\(\s*true\s*\)", "placeholder assertions"),
    ("expect_error", r"expectError\s*\(", "error-path assertions"),
    ("error_union", r"\w!\w|\s![a-zA-Z_]\w*\s*\{|\berror\s*\{", "error unions"),
    ("ref_all_decls", r"refAllDecls", "declaration coverage"),
    ("pub_decls", r"\bpub\s+(?:fn|const)\b", "public declarations"),
    ("skip_test", r"error\.SkipZigTest", "skipped tests"),
    ("expect_equal", r"expectEqual(?:Slices|Strings)?\s*\(", "equality assertions"),
)

BUILD_SYSTEM_PATTERNS = _table(
    ("build_fn", r"\bpub\s+fn\s+build\s*\(", "build script entry point"),
    ("relative_import", r"@import\(\s*\"(?:\.\./|\./)?[\w./-]+\.zig\"\s*\)", "file imports"),
    ("c_import", r"@cImport\s*\(", "C imports"),
    ("builtin_mode", r"builtin\.mode\b", "build mode branching"),
    ("build_options", r"@import\(\s*\"build_options\"\s*\)|b\.addOptions", "build options"),
)

INTEROP_PATTERNS = _table(
    ("c_import", r"@cImport\s*\(", "C header imports"),
    ("extern_fn", r"\bextern\s+(?:\"\w+\"\s+)?fn\b", "extern functions"),
    ("export_fn", r"\bexport\s+fn\b", "exported functions"),
    ("callconv", r"callconv\s*\(", "explicit calling conventions"),
    ("c_pointer", r"\[\*c\]", "C pointers"),
    ("extern_struct", r"\bextern\s+struct\b", "C-compatible layouts"),
    ("mem_span", r"std\.mem\.(?:span|sliceTo)\s*\(", "C string conversion"),
    ("c_malloc", r"std\.c\.(?:malloc|free)\s*\(", "libc allocation"),
    ("c_allocator", r"std\.heap\.c_allocator|std\.heap\.raw_c_allocator", "libc allocator"),
    ("std_c", r"std\.c\.\w+", "libc bindings"),
)

STRUCTURE_PATTERNS = _table(
    ("functions", r"\bfn\s+\w+\s*\(", "function declarations"),
    ("pub_functions", r"\bpub\s+fn\s+\w+\s*\(", "public functions"),
    ("tests", r"\btest\s+\"[^\"\n]{0,200}\"|\btest\s*\{", "test blocks"),
    ("comment_lines", r"^\s*//", "comment lines", re.MULTILINE),
    ("structs", r"\b(?:struct|enum|union)\b\s*(?:\(\s*\w*\s*\))?\s*\{", "container types"),
)

MODERNITY_PATTERNS = _table(
    ("int_cast_two_arg", r"@intCast\(\s*\w+\s*,", "two-argument @intCast"),
    ("float_cast_two_arg", r"@floatCast\(\s*\w+\s*,", "two-argument @floatCast"),
    ("ptr_cast_two_arg", r"@ptrCast\(\s*[\w*\[\]]+\s*,", "two-argument @ptrCast"),
    ("truncate_two_arg", r"@truncate\(\s*\w+\s*,", "two-argument @truncate"),
    ("bit_cast_two_arg", r"@bitCast\(\s*\w+\s*,", "two-argument @bitCast"),
    ("enum_to_int", r"@enumToInt\s*\(", "@enumToInt"),
    ("int_to_enum", r"@intToEnum\s*\(", "@intToEnum"),
    ("bool_to_int", r"@boolToInt\s*\(", "@boolToInt"),
    ("ptr_to_int", r"@ptrToInt\s*\(", "@ptrToInt"),
    ("int_to_ptr", r"@intToPtr\s*\(", "@intToPtr"),
    ("float_to_int", r"@floatToInt\s*\(", "@floatToInt"),
    ("int_to_float", r"@intToFloat\s*\(", "@intToFloat"),
    ("mem_copy_set", r"std\.mem\.(?:copy|set)\s*\(", "std.mem.copy/set"),
    ("async_await", r"\b(?:async|await|suspend|nosuspend)\b", "async keywords"),
    ("usingnamespace", r"\busingnamespace\b", "usingnamespace"),
    ("old_builder", r"std\.build\.Builder|\bBuilder\b", "std.build.Builder"),
    ("path_struct", r"\.\{\s*\.path\s*=", "LazyPath struct literal"),
    (
        "old_for_index",
        r"\bfor\s*\([^,)]{1,200}\)\s*\|\s*\*?\w+\s*,\s*\w+\s*\|",
        "old for index capture",
    ),
    ("multi_object_for", r"\bfor\s*\([^)]{0,200},\s*0\.\.\s*\)", "multi-object for loops"),
    (
        "as_cast",
        r"@as\(\s*[\w\[\]*]+\s*,\s*@(?:intCast|floatCast|truncate|bitCast)\(",
        "@as result casts",
    ),
)
