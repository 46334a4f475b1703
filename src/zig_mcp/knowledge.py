"""
Static Zig knowledge base.

Read-only advice tables and guides served by the tools and the static
resources: per-optimize-mode build advice, prompt-keyword recommendations,
the build system best-practices guide and the troubleshooting guide. All
data is built at import time and never mutated.
"""

from collections.abc import Mapping
from types import MappingProxyType

from zig_mcp.models import OptimizationLevel

BUILD_MODE_ADVICE: Mapping[OptimizationLevel, tuple[str, ...]] = MappingProxyType(
    {
        OptimizationLevel.DEBUG: (
            "Runtime safety checks and full debug info enabled (-ODebug)",
            "Fastest compile times for the edit-compile-test loop",
            "Use std.heap.GeneralPurposeAllocator to catch leaks and double frees",
            "Consider --verbose-llvm-ir for LLVM optimization inspection",
        ),
        OptimizationLevel.RELEASE_SAFE: (
            "Runtime safety checks enabled (-OReleaseSafe)",
            "LLVM -O2 optimizations enabled",
            "Use -flto for link-time optimization",
            "Enable -mcpu=native for target-specific optimizations",
        ),
        OptimizationLevel.RELEASE_FAST: (
            "Runtime safety checks disabled (-OReleaseFast)",
            "Maximum LLVM -O3 optimizations",
            "Use -fstrip for smaller binaries",
            "Enable -mcpu=native for maximum target optimization",
            "Use -fno-stack-check for maximum performance",
            "Benchmark against ReleaseSafe: undefined behavior is no longer caught",
        ),
        OptimizationLevel.RELEASE_SMALL: (
            "Size optimizations enabled (-OReleaseSmall)",
            "LLVM -Os optimization for size",
            "Use -fstrip to remove debug symbols",
            "Enable -flto for dead code elimination",
            "Consider -ffunction-sections -fdata-sections for better linking",
            "Use @setRuntimeSafety(false) in hot paths",
        ),
    }
)

ADVANCED_BUILD_TIPS: tuple[str, ...] = (
    "Use 'zig build-exe -O{level}' or 'zig build -Doptimize={level}' for optimized builds",
    "Set target with '-target x86_64-linux-gnu' for cross-compilation",
    "Add '-mcpu=native' for CPU-specific optimizations",
    "Use '-flto' for link-time optimization (longer compile time, better performance)",
    "Enable '-fstrip' to reduce binary size in release builds",
)

# (trigger keywords, recommendations), checked in order against the lowercased prompt
PROMPT_RECOMMENDATIONS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (
        ("performance",),
        (
            "Use comptime when possible for compile-time evaluation",
            "Consider using packed structs for memory optimization",
            "Implement custom allocators for specific use cases",
            "Use inline fn for small hot functions",
            "Consider using @Vector for SIMD operations",
            "Use @prefetch() to hint cache warming for pointer access",
            "Use @setRuntimeSafety(false) only in measured performance-critical paths",
            "Consider ArrayListUnmanaged for reduced indirection overhead",
            "Use MultiArrayList for better cache locality (Structure of Arrays)",
            "Leverage @reduce() for efficient vector reductions",
            "Use builtin functions (@sqrt, @sin, @cos) instead of std.math",
            "Consider @embedFile() for compile-time resource inclusion",
            "Use @bitCast() instead of @ptrCast() when possible for better optimization",
            "Leverage @splat() for vector initialization",
        ),
    ),
    (
        ("build", "optimization"),
        (
            "Use -OReleaseFast for maximum runtime performance",
            "Enable -mcpu=native for target-specific CPU optimizations",
            "Use -flto for link-time optimization and dead code elimination",
            "Use -fstrip to reduce binary size in production builds",
            "Use -fomit-frame-pointer for additional register availability",
            "Use --verbose-llvm-ir to inspect LLVM optimization passes",
            "Enable -ffunction-sections -fdata-sections for better dead code elimination",
            "Consider cross-compilation with -target for specific architectures",
            "Use zig build-exe -OReleaseSmall for size-optimized builds",
            "Leverage -femit-llvm-ir to analyze generated LLVM code",
        ),
    ),
    (
        ("memory",),
        (
            "Use ArenaAllocator for batch allocations with single cleanup",
            "Consider FixedBufferAllocator for stack-based allocation",
            "Use std.heap.page_allocator for large, long-lived allocations",
            "Implement GeneralPurposeAllocator for debugging memory issues",
            "Use BoundedArray for stack-allocated dynamic arrays",
            "Consider @alignOf() and @sizeOf() for memory layout optimization",
            "Use @memcpy() and @memset() builtins for optimized memory operations",
            "Leverage packed structs for memory-constrained environments",
            "Use std.mem.Allocator.alignedAlloc() for SIMD-aligned allocations",
        ),
    ),
    (
        ("simd", "vector"),
        (
            "Use @Vector(len, T) for explicit SIMD programming",
            "Leverage @splat() to broadcast scalars to vectors",
            "Use @reduce() for vector reductions (sum, min, max, etc.)",
            "Consider @shuffle() for vector lane rearrangement",
            "Use @select() for conditional vector operations",
            "Ensure data alignment with @alignOf() for optimal SIMD performance",
            "Use vector length that matches target CPU SIMD width",
            "Consider loop unrolling for better vectorization opportunities",
        ),
    ),
    (
        ("safety",),
        (
            "Add bounds checking for array access",
            "Use explicit error handling with try/catch",
            "Implement proper resource cleanup with defer",
            "Use const where possible to prevent mutations",
            "Avoid undefined behavior with proper initialization",
            "Keep runtime safety on (Debug/ReleaseSafe) while testing",
            "Leverage optional types (?T) instead of null pointers",
            "Use tagged unions for type-safe variant types",
        ),
    ),
    (
        ("maintainability",),
        (
            "Add comprehensive documentation",
            "Break down complex functions",
            "Use meaningful variable names",
            "Organize code into modules and namespaces",
            "Write unit tests for public functions",
            "Use comptime for compile-time validation",
            "Leverage Zig's type system for self-documenting code",
        ),
    ),
)

GENERAL_RECOMMENDATION = "No topic-specific advice for this prompt; see the sections above"


def build_mode_advice(level: OptimizationLevel) -> tuple[str, ...]:
    """Advice list for one optimize mode."""
    return BUILD_MODE_ADVICE[level]


def specific_recommendations(prompt: str) -> list[str]:
    """Collect the recommendation groups whose keywords appear in ``prompt``.

    Groups are matched by case-insensitive substring and concatenated in
    table order; a prompt can trigger several groups.

    Args:
        prompt: Free-form focus text from the caller.

    Returns:
        Recommendations, or a single general note when nothing matched.

    Example:
        >>> specific_recommendations("SIMD math")[0]
        'Use @Vector(len, T) for explicit SIMD programming'
    """
    text = prompt.lower()
    recommendations: list[str] = []
    for keywords, advice in PROMPT_RECOMMENDATIONS:
        if any(keyword in text for keyword in keywords):
            recommendations.extend(advice)
    return recommendations or [GENERAL_RECOMMENDATION]


BUILD_BEST_PRACTICES = """# Zig Build System Best Practices

## Project Structure
```
my-project/
├── build.zig          # Main build script
├── build.zig.zon      # Dependency management (Zig 0.11+)
├── src/
│   ├── main.zig       # Application entry point
│   ├── root.zig       # Library root (if applicable)
│   └── ...            # Other source files
├── test/              # Integration tests
└── examples/          # Example code
```

## Modern Build API

### 1. Build function signature
```zig
// Old pattern (Zig 0.10 and earlier)
pub fn build(b: *std.build.Builder) void {
    const target = b.standardTargetOptions(.{});
    const mode = b.standardReleaseOptions();
    const exe = b.addExecutable("my-app", "src/main.zig");
    exe.setTarget(target);
    exe.setBuildMode(mode);
    exe.install();
}

// New pattern (Zig 0.11+)
pub fn build(b: *std.Build) void {
    const target = b.standardTargetOptions(.{});
    const optimize = b.standardOptimizeOption(.{});
    const exe = b.addExecutable(.{
        .name = "my-app",
        .root_source_file = b.path("src/main.zig"),
        .target = target,
        .optimize = optimize,
    });
    b.installArtifact(exe);
}
```

### 2. Dependency management with build.zig.zon
```zig
const dep = b.dependency("my_dep", .{
    .target = target,
    .optimize = optimize,
});
exe.root_module.addImport("my_dep", dep.module("my_dep"));
```

Add entries with `zig fetch --save <url>`; it writes the correct hash.

### 3. Build options
```zig
const options = b.addOptions();
options.addOption(bool, "enable_logging", true);
exe.root_module.addOptions("config", options);
```

### 4. System library linking
```zig
exe.linkLibC();
exe.linkSystemLibrary("pthread");
```

## Common Build Steps

### Testing
```zig
const unit_tests = b.addTest(.{
    .root_source_file = b.path("src/main.zig"),
    .target = target,
    .optimize = optimize,
});
const test_step = b.step("test", "Run tests");
test_step.dependOn(&b.addRunArtifact(unit_tests).step);
```

### Documentation generation
```zig
const docs = b.addInstallDirectory(.{
    .source_dir = exe.getEmittedDocs(),
    .install_dir = .prefix,
    .install_subdir = "docs",
});
const docs_step = b.step("docs", "Generate documentation");
docs_step.dependOn(&docs.step);
```

## Optimize Modes

1. **Debug**: fastest compilation, full safety checks and debug info
2. **ReleaseSafe**: optimized with runtime safety checks kept
3. **ReleaseFast**: maximum runtime performance, safety checks removed
4. **ReleaseSmall**: optimized for binary size

## Cross-compilation Examples

```bash
# Windows from Linux/macOS
zig build -Dtarget=x86_64-windows-gnu

# macOS from Linux/Windows
zig build -Dtarget=x86_64-macos-none

# WebAssembly
zig build -Dtarget=wasm32-freestanding-musl

# ARM64 Linux
zig build -Dtarget=aarch64-linux-gnu
```

## Common Gotchas

1. **Always pass .target and .optimize** to addExecutable, addLibrary and addTest
2. **Use b.path("file.zig")** for source files inside the project
3. **Declare dependencies in build.zig.zon** for Zig 0.11+
4. **Use b.dependency() instead of @import()** for external packages
5. **Install artifacts with b.installArtifact()** instead of manual install steps
"""

BUILD_TROUBLESHOOTING = """# Zig Build System Troubleshooting

## Common Issues and Solutions

### 1. "error: unable to find zig installation directory"
**Solution**:
- Ensure Zig is properly installed and in your PATH
- Use absolute path to zig binary if needed
- Verify installation: `zig version`

### 2. "error: dependency not found"
**Solution**:
- Check build.zig.zon exists and lists the dependency
- Run `zig build --fetch` to download dependencies
- Verify dependency URLs and hashes are correct

### 3. "error: unable to create output directory"
**Solution**:
- Check file permissions in project directory
- Ensure adequate disk space
- Try cleaning build cache: `rm -rf zig-cache zig-out`

### 4. Cross-compilation linking errors
**Solution**:
- Install target system libraries if needed
- Prefer musl targets for static binaries
- Check the target triple is correct

### 5. "error: unable to parse build.zig"
**Solution**:
- Check Zig syntax in build.zig
- Ensure all imports are valid
- Use `zig fmt build.zig` to format and catch errors

### 6. Slow build times
**Solutions**:
- Keep the cache between builds (default behaviour)
- Reduce debug info in release builds
- Use `--cache-dir` to specify cache location
- Limit parallel jobs with `-j<n>` on memory-constrained machines

### 7. "hash mismatch" for dependencies
**Solution**:
- Update hash in build.zig.zon
- Use `zig fetch --save <url>` to record the correct hash
- Verify dependency URL is correct

## Build Cache Management

```bash
# Clear build cache
rm -rf zig-cache zig-out .zig-cache

# Use custom cache directory
zig build --cache-dir /tmp/zig-cache

# Show every command the build runs
zig build --verbose
```

## Debugging Build Issues

```bash
# Verbose output
zig build --verbose

# Show all available steps and options
zig build --help

# Debug mode for development
zig build -Doptimize=Debug

# Print the build steps as a tree
zig build --summary all
```
"""
