"""Tests for code, build script and manifest generation."""

import pytest

from zig_mcp.analyzers import MODERN_BUILD_MESSAGE, analyze_build_file
from zig_mcp.generators import (
    EXAMPLE_DEPENDENCIES,
    example_dependencies,
    generate_build_zig,
    generate_build_zon,
    generate_zig_code,
    parse_requirements,
    select_template,
)
from zig_mcp.generators.build import zig_identifier, zon_field
from zig_mcp.models import BuildConfig, OptimizationLevel, ZigDependency


class TestParseRequirements:
    """Tests for parse_requirements()."""

    def test_features_and_flags(self) -> None:
        """Verify keywords map onto features and flags."""
        req = parse_requirements("Create a struct with error handling and tests")
        assert req.features == frozenset({"create", "struct"})
        assert req.error_handling
        assert req.testing
        assert not req.performance

    def test_case_insensitive_with_context(self) -> None:
        """Verify context is searched and matching ignores case."""
        req = parse_requirements("An ENUM", context="make it FAST")
        assert req.has_feature("enum")
        assert req.performance

    def test_empty_prompt(self) -> None:
        """Verify an empty prompt requests nothing."""
        req = parse_requirements("")
        assert req.features == frozenset()
        assert not (req.error_handling or req.testing or req.performance)

    def test_negation_not_understood(self) -> None:
        """Verify substring matching ignores negation."""
        assert parse_requirements("no error handling please").error_handling


class TestSelectTemplate:
    """Tests for template priority."""

    @pytest.mark.parametrize(
        ("prompt", "expected"),
        [
            ("struct and enum and union", "struct"),
            ("enum or union", "enum"),
            ("a union", "union"),
            ("implement a parser", "function"),
            ("", "function"),
        ],
        ids=["struct_first", "enum_over_union", "union", "implement", "default"],
    )
    def test_priority(self, prompt: str, expected: str) -> None:
        """Verify struct > enum > union > function."""
        assert select_template(parse_requirements(prompt)) == expected


class TestGenerateZigCode:
    """Tests for generate_zig_code()."""

    def test_struct_with_tests(self) -> None:
        """Verify a struct request yields the struct and both test blocks."""
        code = generate_zig_code(parse_requirements("Create a struct with tests"))
        assert code.startswith("//! Generated Zig code\n")
        assert "pub const MyStruct = struct {" in code
        assert "const testing = std.testing;" in code
        assert 'test "basic functionality" {' in code
        assert 'test "edge cases" {' in code
        assert "expectError" not in code
        assert "expect(true)" not in code

    def test_error_handling(self) -> None:
        """Verify error handling adds the error set and error unions."""
        code = generate_zig_code(parse_requirements("struct with error handling and tests"))
        assert "const Error = error{" in code
        assert "InvalidInput," in code
        assert "pub fn process(self: *Self, input: []const u8) Error!void {" in code
        assert "try testing.expectError(Error.InvalidInput" in code

    def test_no_tests_without_request(self) -> None:
        """Verify test blocks appear only when asked for."""
        code = generate_zig_code(parse_requirements("a union"))
        assert "pub const MyUnion = union(enum) {" in code
        assert "test " not in code
        assert "asInteger" not in code

    def test_enum_optional_result(self) -> None:
        """Verify enum parsing returns an optional without error handling."""
        code = generate_zig_code(parse_requirements("enum"))
        assert "pub fn fromString(str: []const u8) ?Self {" in code

    def test_default_function(self) -> None:
        """Verify the default template is a plain function."""
        code = generate_zig_code(parse_requirements("", None))
        assert "pub fn process(input: []const u8) usize {" in code

    def test_performance_note(self) -> None:
        """Verify performance requests add the note."""
        code = generate_zig_code(parse_requirements("fast function"))
        assert "// Optimized for performance:" in code

    def test_deterministic(self) -> None:
        """Verify equal requirements yield byte-identical output."""
        req = parse_requirements("struct with error handling, tests, fast")
        assert generate_zig_code(req) == generate_zig_code(req)


class TestGenerateBuildZig:
    """Tests for generate_build_zig()."""

    def test_default_passes_analyzer(self) -> None:
        """Verify the default script needs no modernization."""
        assert analyze_build_file(generate_build_zig(BuildConfig())) == [MODERN_BUILD_MESSAGE]

    def test_full_config_passes_analyzer(self) -> None:
        """Verify dependencies, steps and target keep the script modern."""
        config = BuildConfig(
            optimization_level=OptimizationLevel.RELEASE_FAST,
            target_triple="x86_64-linux-gnu",
            dependencies={"zig-args": "args", "json": "json"},
            build_steps=["bench", "test", "bench"],
        )
        script = generate_build_zig(config)
        assert analyze_build_file(script) == [MODERN_BUILD_MESSAGE]
        assert ".preferred_optimize_mode = .ReleaseFast" in script
        assert '.arch_os_abi = "x86_64-linux-gnu"' in script
        assert 'const zig_args_dep = b.dependency("zig-args", .{' in script
        assert 'exe.root_module.addImport("json", json_dep.module("json"));' in script
        assert script.count('b.step("bench"') == 1
        assert script.count('b.step("test"') == 1

    def test_debug_uses_plain_options(self) -> None:
        """Verify Debug does not set a preferred mode."""
        script = generate_build_zig(BuildConfig(optimization_level=OptimizationLevel.DEBUG))
        assert "b.standardOptimizeOption(.{})" in script

    def test_no_dependencies_comment(self) -> None:
        """Verify an empty dependency map is noted."""
        assert "// No external dependencies declared" in generate_build_zig(BuildConfig())


class TestGenerateBuildZon:
    """Tests for generate_build_zon()."""

    def test_dependency_url(self) -> None:
        """Verify an explicit URL is embedded."""
        zon = generate_build_zon([ZigDependency(name="args", url="https://x/y")])
        assert ".args = .{" in zon
        assert '.url = "https://x/y",' in zon
        assert '.name = "my-project",' in zon

    def test_placeholder_url_and_quoted_name(self) -> None:
        """Verify missing URLs use a placeholder and odd names are quoted."""
        zon = generate_build_zon([ZigDependency(name="zig-args")], "demo", "1.2.3")
        assert '.@"zig-args" = .{' in zon
        assert '.url = "https://github.com/example/zig-args",' in zon
        assert '.version = "1.2.3",' in zon

    def test_no_dependencies(self) -> None:
        """Verify an empty dependency list is still a complete manifest."""
        zon = generate_build_zon([])
        assert ".dependencies = .{\n    }," in zon
        assert zon.endswith("}\n")


class TestHelpers:
    """Tests for naming helpers and the dependency catalogue."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("args", "args"), ("zig-args", "zig_args"), ("3d", "_3d")],
        ids=["plain", "dash", "leading_digit"],
    )
    def test_zig_identifier(self, name: str, expected: str) -> None:
        """Verify names are made into valid identifiers."""
        assert zig_identifier(name) == expected

    def test_zon_field(self) -> None:
        """Verify only non-identifiers are quoted."""
        assert zon_field("args") == ".args"
        assert zon_field("zig-args") == '.@"zig-args"'

    def test_example_dependencies_copy(self) -> None:
        """Verify the catalogue is returned as an independent dict."""
        catalogue = example_dependencies()
        assert set(catalogue) == {"zig-args", "zig-json", "zig-network", "zigimg"}
        catalogue.clear()
        assert len(EXAMPLE_DEPENDENCIES) == 4
