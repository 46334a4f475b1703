"""
Compute unit estimation.

Memory, time-complexity and allocation estimates built from pattern
counts. Every figure here is a textual heuristic: loop "nesting" is read
off brace counting and a line scanner, not from any control-flow
analysis, and the output says so.
"""

import re

from zig_mcp.analyzers.patterns import (
    ALLOCATION_PATTERNS,
    ALLOCATOR_KINDS,
    MEMORY_PATTERNS,
    TIME_COMPLEXITY_PATTERNS,
    MetricSet,
    extract_metrics,
)
from zig_mcp.formatting import bullet_list

COMPLEXITY_QUADRATIC = "O(n²) or worse"
COMPLEXITY_LINEAR = "O(n)"
COMPLEXITY_RECURSIVE = "O(depth) recursion-dependent"
COMPLEXITY_CONSTANT = "O(1)"

DEFAULT_ALLOCATION_STRATEGY = "default allocator usage"

REGEX_LOOP_KEYWORD = re.compile(r"\b(?:for|while)\b")

# Brace-scanner tokens; `;` ends a header that never opened a block
REGEX_LOOP_TOKENS = re.compile(r"(?P<loop>\b(?:for|while)\s*\()|[{};]")
REGEX_FOR_TOKENS = re.compile(r"(?P<loop>\bfor\s*\()|[{};]")
REGEX_CALL_TOKENS = re.compile(r"\bfn\s+(?P<fn>\w+)\s*\(|\b(?P<call>\w+)\s*\(|[{};]")


def estimate_complexity(metrics: MetricSet) -> str:
    """Pick a complexity label from time-complexity pattern counts.

    Decision ladder: a nested-loop match wins, then any loop, then a
    self-recursive function, then constant time.

    Args:
        metrics: Counts from measure_time_complexity().

    Returns:
        One of the COMPLEXITY_* labels.

    Example:
        >>> estimate_complexity({"nested_loops": 0, "loops": 2, "recursion": 1})
        'O(n)'
    """
    if metrics.get("nested_loops", 0) > 0:
        return COMPLEXITY_QUADRATIC
    if metrics.get("loops", 0) > 0:
        return COMPLEXITY_LINEAR
    if metrics.get("recursion", 0) > 0:
        return COMPLEXITY_RECURSIVE
    return COMPLEXITY_CONSTANT


def max_loop_nesting_depth(code: str) -> int:
    """Approximate the deepest loop nesting with a line scanner.

    A line opening a loop increments the depth; any other line holding a
    closing brace while inside a loop decrements it. Depth never drops
    below zero. Braces of unrelated inner blocks also count as closing a
    loop, so multi-line bodies with ``if`` blocks read shallower than they
    are.

    Args:
        code: Source text.

    Returns:
        Maximum depth observed (0 when no loops).

    Example:
        >>> max_loop_nesting_depth("for (a) |x| {\\n    for (b) |y| {\\n    }\\n}")
        2
    """
    depth = 0
    max_depth = 0
    for line in code.splitlines():
        keyword = REGEX_LOOP_KEYWORD.search(line)
        if keyword and "{" in line[keyword.end() :]:
            depth += 1
            max_depth = max(max_depth, depth)
        elif "}" in line and depth > 0:
            depth -= 1
    return max_depth


def count_nested_loops(code: str, tokens: re.Pattern[str] = REGEX_LOOP_TOKENS) -> int:
    """Count loops opened inside the body of another loop.

    Tracks brace depth across the whole text and remembers the depth at
    which each loop body opened, so inner ``if`` or ``switch`` blocks that
    close before the inner loop do not hide the nesting. A loop header
    directly following another header (brace-less body) also counts.
    Braces inside strings and comments are not skipped.

    Args:
        code: Source text.
        tokens: Token pattern with a ``loop`` group for loop headers.

    Returns:
        Number of loop headers found inside another loop.

    Example:
        >>> count_nested_loops("for (a) |r| {\\n if (x) { continue; }\\n for (r) |c| {}\\n}")
        1
    """
    nested = 0
    depth = 0
    loop_depths: list[int] = []
    header_open = False
    for token in tokens.finditer(code):
        text = token.group()
        if token.group("loop"):
            if loop_depths or header_open:
                nested += 1
            header_open = True
        elif text == "{":
            if header_open:
                loop_depths.append(depth)
                header_open = False
            depth += 1
        elif text == "}":
            depth = max(depth - 1, 0)
            while loop_depths and loop_depths[-1] >= depth:
                loop_depths.pop()
        else:
            header_open = False
    return nested


def count_self_recursion(code: str) -> int:
    """Count functions whose body calls the function by name.

    Each function counts once however many self-calls it makes. Method
    calls such as ``self.visit(...)`` inside ``fn visit`` count as well.

    Args:
        code: Source text.

    Returns:
        Number of self-recursive functions.

    Example:
        >>> count_self_recursion("fn f(n: u32) u32 { return if (n == 0) 1 else f(n - 1); }")
        1
    """
    recursive = 0
    depth = 0
    frames: list[tuple[str, int]] = []
    pending: str | None = None
    for token in REGEX_CALL_TOKENS.finditer(code):
        text = token.group()
        if token.group("fn"):
            pending = token.group("fn")
        elif token.group("call"):
            if frames and frames[-1][0] == token.group("call"):
                recursive += 1
                # blank the name so later calls in this body are not recounted
                frames[-1] = ("", frames[-1][1])
        elif text == "{":
            if pending:
                frames.append((pending, depth))
                pending = None
            depth += 1
        elif text == "}":
            depth = max(depth - 1, 0)
            while frames and frames[-1][1] >= depth:
                frames.pop()
        else:
            pending = None
    return recursive


def measure_time_complexity(code: str) -> MetricSet:
    """Time-complexity pattern counts plus scanned nesting and recursion."""
    metrics = extract_metrics(code, TIME_COMPLEXITY_PATTERNS)
    metrics["nested_loops"] = count_nested_loops(code)
    metrics["recursion"] = count_self_recursion(code)
    return metrics


def determine_allocation_strategy(metrics: MetricSet) -> str:
    """Label the allocation strategy from allocator pattern counts.

    Args:
        metrics: Counts from ALLOCATION_PATTERNS.

    Returns:
        "default allocator usage" when no allocator kind appears,
        "<Kind>-based allocation" for exactly one kind, otherwise
        "Mixed allocation strategy (<kinds>)".

    Example:
        >>> determine_allocation_strategy({"arena": 1, "page": 2})
        'Mixed allocation strategy (Arena, Page)'
    """
    kinds = [label for key, label in ALLOCATOR_KINDS.items() if metrics.get(key, 0) > 0]
    if not kinds:
        return DEFAULT_ALLOCATION_STRATEGY
    if len(kinds) == 1:
        return f"{kinds[0]}-based allocation"
    return f"Mixed allocation strategy ({', '.join(kinds)})"


def _with_notes(lines: list[str], heading: str, notes: list[str]) -> str:
    text = bullet_list(lines)
    if notes:
        text += f"\n\n{heading}:\n{bullet_list(notes)}"
    return text


def analyze_memory_usage(code: str) -> str:
    """Summarize container, slice and layout usage.

    Args:
        code: Source text.

    Returns:
        Bullet list of counts, a memory profile and recommendations.
    """
    m = extract_metrics(code, MEMORY_PATTERNS)
    profile = "Heap-heavy" if m["heap_alloc"] > m["stack_alloc"] else "Stack-optimized"

    recommendations = []
    if m["heap_alloc"] > m["array_list_unmanaged"] and m["heap_alloc"] > 0:
        recommendations.append("Consider ArrayListUnmanaged for reduced pointer indirection")
    if m["vector_types"] > 0 and m["simd_alignment"] == 0:
        recommendations.append("Ensure SIMD vectors are properly aligned for optimal performance")
    if m["slices"] > 0 and m["multi_array_list"] == 0 and m["heap_alloc"] > 2:
        recommendations.append(
            "Consider MultiArrayList for better cache locality with multiple arrays"
        )
    if m["stack_alloc"] == 0 and m["bounded_array"] == 0 and m["heap_alloc"] > 0:
        recommendations.append("Consider BoundedArray for small, stack-allocated dynamic arrays")

    lines = [
        f"Heap Allocations: {m['heap_alloc']} detected",
        f"Stack Allocations: {m['stack_alloc']} detected",
        f"Slice Usage: {m['slices']} instances",
        f"MultiArrayList: {m['multi_array_list']} instances (SoA pattern for cache efficiency)",
        f"BoundedArray: {m['bounded_array']} instances (stack-allocated dynamic arrays)",
        f"Vector Types: {m['vector_types']} instances (SIMD support)",
        f"Packed Structs: {m['packed_struct']} instances (memory optimization)",
        f"Aligned Types: {m['aligned_types']} instances (alignment optimization)",
        f"Custom Allocators: {m['allocators']} instances",
        f"ArrayListUnmanaged: {m['array_list_unmanaged']} instances (reduced overhead)",
        f"Memory Profile: {profile}",
    ]
    return _with_notes(lines, "Recommendations", recommendations)


def analyze_time_complexity(code: str) -> str:
    """Estimate time complexity from loop, recursion and builtin counts.

    Args:
        code: Source text.

    Returns:
        Bullet list with the complexity estimate, loop counts, nesting
        depth and optimization notes.
    """
    m = measure_time_complexity(code)
    complexity = estimate_complexity(m)

    notes = []
    if m["vector_operations"] > 0:
        notes.append("SIMD vectorization detected")
    if m["builtin_math"] > 0:
        notes.append("Optimized builtin math functions used")
    if m["memory_ops"] > 0:
        notes.append("Optimized memory operations detected")
    if m["simd_reductions"] > 0:
        notes.append("Vector reductions for parallel computation")
    if m["parallelizable"] > 0:
        notes.append("Potential for parallel execution")

    lines = [
        f"Estimated Complexity: {complexity} (heuristic estimate from loop patterns)",
        f"Loop Count: {m['loops']}",
        f"Nested Loops: {m['nested_loops']}",
        f"Max Loop Nesting Depth: {max_loop_nesting_depth(code)} (line-based approximation)",
        f"Recursive Patterns: {m['recursion']} detected",
        f"Vector Operations: {m['vector_operations']} (SIMD optimization opportunities)",
        f"Builtin Math Functions: {m['builtin_math']} (hardware-optimized)",
        f"Memory Operations: {m['memory_ops']} (optimized bulk operations)",
        f"SIMD Reductions: {m['simd_reductions']} (parallel reductions)",
        f"Threading/Atomic Operations: {m['parallelizable']} (parallelization potential)",
    ]
    return _with_notes(lines, "Optimization Notes", notes)


def analyze_allocations(code: str) -> str:
    """Summarize allocator, comptime and cleanup usage.

    Args:
        code: Source text.

    Returns:
        Bullet list of counts, the allocation strategy label and
        allocator recommendations.
    """
    m = extract_metrics(code, ALLOCATION_PATTERNS)

    recommendations = []
    if m["arena"] == 0 and m["fixed_buffer"] == 0 and m["general_purpose"] == 0:
        recommendations.append("Consider using specialized allocators for better performance")
    if m["aligned_alloc"] > 0:
        recommendations.append("SIMD-aligned allocations detected - good for vectorization")
    if m["defer"] == 0 and (m["arena"] > 0 or m["fixed_buffer"] > 0):
        recommendations.append("Add defer statements for proper cleanup")
    if m["embed_file"] > 0:
        recommendations.append("Compile-time file embedding reduces runtime I/O")

    lines = [
        f"Comptime Evaluations: {m['comptime']} (compile-time optimization)",
        f"Comptime Blocks: {m['comptime_block']} (complex compile-time evaluation)",
        f"Arena Allocators: {m['arena']} (batch allocation/cleanup)",
        f"Fixed Buffer Allocators: {m['fixed_buffer']} (stack-based allocation)",
        f"General Purpose Allocators: {m['general_purpose']} (debugging/development)",
        f"Page Allocators: {m['page']} (large allocations)",
        f"Stack Fallback Allocators: {m['stack_fallback']} (hybrid stack/heap)",
        f"Aligned Allocations: {m['aligned_alloc']} (SIMD optimization)",
        f"Defer Statements: {m['defer']} (cleanup automation)",
        f"Errdefer Statements: {m['errdefer']} (error cleanup)",
        f"Embedded Files: {m['embed_file']} (compile-time resources)",
        f"Allocation Strategy: {determine_allocation_strategy(m)}",
    ]
    return _with_notes(lines, "Allocator Recommendations", recommendations)
