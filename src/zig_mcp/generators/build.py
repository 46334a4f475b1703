"""
build.zig and build.zig.zon templates.

Both documents are fixed templates with one block repeated per declared
dependency. Generated build scripts use the current build API only, so
they pass ``analyze_build_file`` without recommendations.
"""

import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from zig_mcp.models import BuildConfig, OptimizationLevel, ZigDependency

REGEX_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
REGEX_NON_IDENTIFIER = re.compile(r"\W")

# Steps every generated script already declares
BUILTIN_STEPS = frozenset({"run", "test", "install", "uninstall"})

EXAMPLE_DEPENDENCIES: Mapping[str, ZigDependency] = MappingProxyType(
    {
        "zig-args": ZigDependency(
            name="args",
            url="https://github.com/MasterQ32/zig-args",
            path="args.zig",
            version="main",
        ),
        "zig-json": ZigDependency(
            name="json",
            url="https://github.com/getty-zig/json",
            path="json.zig",
            version="main",
        ),
        "zig-network": ZigDependency(
            name="network",
            url="https://github.com/MasterQ32/zig-network",
            path="network.zig",
            version="main",
        ),
        "zigimg": ZigDependency(
            name="zigimg",
            url="https://github.com/zigimg/zigimg",
            path="zigimg.zig",
            version="main",
        ),
    }
)


def zig_identifier(name: str) -> str:
    """Make ``name`` usable as a Zig variable name (``zig-args`` -> ``zig_args``)."""
    ident = REGEX_NON_IDENTIFIER.sub("_", name) or "_"
    return f"_{ident}" if ident[0].isdigit() else ident


def zon_field(name: str) -> str:
    """Field access syntax for a .zon key, quoting names that are not identifiers."""
    return f".{name}" if REGEX_IDENTIFIER.match(name) else f'.@"{name}"'


def _optimize_options(level: OptimizationLevel) -> str:
    if level is OptimizationLevel.DEBUG:
        return ".{}"
    return f".{{ .preferred_optimize_mode = .{level.value} }}"


def _target_options(target_triple: str | None) -> str:
    if not target_triple:
        return ".{}"
    return (
        ".{\n"
        "        .default_target = std.Target.Query.parse(.{\n"
        f'            .arch_os_abi = "{target_triple}",\n'
        '        }) catch @panic("invalid target triple"),\n'
        "    }"
    )


def _dependency_block(name: str) -> str:
    ident = zig_identifier(name)
    return (
        f'    const {ident}_dep = b.dependency("{name}", .{{\n'
        "        .target = target,\n"
        "        .optimize = optimize,\n"
        "    });\n"
        f'    exe.root_module.addImport("{name}", {ident}_dep.module("{name}"));\n'
    )


def _step_block(name: str) -> str:
    ident = zig_identifier(name)
    return (
        f'    const {ident}_step = b.step("{name}", "Run the {name} step");\n'
        f"    {ident}_step.dependOn(b.getInstallStep());\n"
    )


def _custom_steps(build_steps: Iterable[str]) -> list[str]:
    steps: list[str] = []
    for step in build_steps:
        if step and step not in BUILTIN_STEPS and step not in steps:
            steps.append(step)
    return steps


def generate_build_zig(config: BuildConfig) -> str:
    """Render a build.zig script for ``config``.

    The script declares an executable rooted at src/main.zig, installs it,
    and adds ``run`` and ``test`` steps. Each dependency gets a
    ``b.dependency`` lookup imported into the executable's root module;
    each extra build step gets a named step depending on install.

    Args:
        config: Build parameters.

    Returns:
        Complete build.zig source ending in a newline.

    Example:
        >>> script = generate_build_zig(BuildConfig(dependencies={"args": "args"}))
        >>> 'b.dependency("args"' in script
        True
    """
    dependencies = "".join(_dependency_block(name) for name in config.dependencies)
    if not dependencies:
        dependencies = "    // No external dependencies declared\n"

    steps = "".join(_step_block(name) for name in _custom_steps(config.build_steps))
    if steps:
        steps = f"\n    // Custom steps\n{steps}"

    target_note = ""
    if config.target_triple:
        target_note = f"//! Default target: {config.target_triple}\n"

    return f"""//! Build script for Zig project
//! Zig version: {config.zig_version}
//! Preferred optimize mode: {config.optimization_level.value}
{target_note}
const std = @import("std");

pub fn build(b: *std.Build) void {{
    // Lets the person running `zig build` choose the target; native by default.
    const target = b.standardTargetOptions({_target_options(config.target_triple)});

    // Debug, ReleaseSafe, ReleaseFast or ReleaseSmall via -Doptimize.
    const optimize = b.standardOptimizeOption({_optimize_options(config.optimization_level)});

    const exe = b.addExecutable(.{{
        .name = "main",
        .root_source_file = b.path("src/main.zig"),
        .target = target,
        .optimize = optimize,
    }});

    // Dependencies from build.zig.zon
{dependencies}
    b.installArtifact(exe);

    const run_cmd = b.addRunArtifact(exe);
    run_cmd.step.dependOn(b.getInstallStep());
    if (b.args) |args| {{
        run_cmd.addArgs(args);
    }}

    const run_step = b.step("run", "Run the application");
    run_step.dependOn(&run_cmd.step);

    const unit_tests = b.addTest(.{{
        .root_source_file = b.path("src/main.zig"),
        .target = target,
        .optimize = optimize,
    }});

    const run_unit_tests = b.addRunArtifact(unit_tests);
    const test_step = b.step("test", "Run unit tests");
    test_step.dependOn(&run_unit_tests.step);
{steps}}}
"""


def generate_build_zon(
    dependencies: Iterable[ZigDependency],
    project_name: str = "my-project",
    version: str = "0.1.0",
    minimum_zig_version: str = "0.12.0",
) -> str:
    """Render a build.zig.zon manifest.

    Args:
        dependencies: Dependencies to declare, in order.
        project_name: Package name.
        version: Package version.
        minimum_zig_version: Oldest supported compiler.

    Returns:
        Complete build.zig.zon source ending in a newline. Dependencies
        without a URL point at a placeholder repository; hashes are
        placeholders that ``zig fetch --save`` replaces.

    Example:
        >>> ".url = \\"https://x/y\\"" in generate_build_zon([ZigDependency("args", "https://x/y")])
        True
    """
    blocks = "".join(
        f"        {zon_field(dep.name)} = .{{\n"
        f'            .url = "{dep.resolved_url()}",\n'
        f'            .hash = "{dep.hash}",\n'
        "        },\n"
        for dep in dependencies
    )
    return f""".{{
    .name = "{project_name}",
    .version = "{version}",
    .minimum_zig_version = "{minimum_zig_version}",

    .dependencies = .{{
{blocks}    }},

    .paths = .{{
        "build.zig",
        "build.zig.zon",
        "src",
    }},
}}
"""


def example_dependencies() -> dict[str, ZigDependency]:
    """Catalogue of well-known Zig packages, keyed by repository name."""
    return dict(EXAMPLE_DEPENDENCIES)
