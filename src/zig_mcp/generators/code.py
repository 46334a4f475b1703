"""
Zig source templates.

Each template is a small pure function of GenerationRequirements returning
a complete Zig declaration. ``generate_zig_code`` picks one template by
feature priority (struct > enum > union > function) and assembles the
file: header, imports, optional error set, declaration, optional
performance note and optional tests. Output is byte-identical for equal
requirements.
"""

from collections.abc import Callable
from typing import TypeAlias

from zig_mcp.models import GenerationRequirements

HEADER = "//! Generated Zig code\n"

ERROR_SET = """const Error = error{
    InvalidInput,
    OutOfMemory,
    InvalidOperation,
};
"""

PERFORMANCE_NOTE = """// Optimized for performance:
// - consider @Vector for SIMD processing of large inputs
// - pre-size buffers with initCapacity when lengths are known"""

Template: TypeAlias = Callable[[GenerationRequirements], str]


def _error_prefix(requirements: GenerationRequirements) -> str:
    """Return-type prefix: ``Error!`` when error handling was requested."""
    return "Error!" if requirements.error_handling else ""


def _guard(requirements: GenerationRequirements, statement: str, indent: str) -> str:
    """Guard line (with trailing newline) or nothing."""
    return f"{indent}{statement}\n" if requirements.error_handling else ""


def _try(requirements: GenerationRequirements) -> str:
    return "try " if requirements.error_handling else ""


def struct_template(requirements: GenerationRequirements) -> str:
    guard = _guard(requirements, "if (input.len == 0) return Error.InvalidInput;", " " * 8)
    return f"""pub const MyStruct = struct {{
    allocator: std.mem.Allocator,
    processed: usize,

    const Self = @This();

    /// Initialize a new instance
    pub fn init(allocator: std.mem.Allocator) Self {{
        return .{{
            .allocator = allocator,
            .processed = 0,
        }};
    }}

    /// Release resources held by the instance
    pub fn deinit(self: *Self) void {{
        self.* = undefined;
    }}

    /// Process a chunk of input
    pub fn process(self: *Self, input: []const u8) {_error_prefix(requirements)}void {{
{guard}        self.processed += input.len;
    }}
}};
"""


def enum_template(requirements: GenerationRequirements) -> str:
    missing = "Error.InvalidInput" if requirements.error_handling else "null"
    result = "Error!Self" if requirements.error_handling else "?Self"
    return f"""pub const MyEnum = enum {{
    variant_a,
    variant_b,
    variant_c,

    const Self = @This();

    /// Convert to string representation
    pub fn toString(self: Self) []const u8 {{
        return switch (self) {{
            .variant_a => "Variant A",
            .variant_b => "Variant B",
            .variant_c => "Variant C",
        }};
    }}

    /// Parse from string
    pub fn fromString(str: []const u8) {result} {{
        return std.meta.stringToEnum(Self, str) orelse {missing};
    }}
}};
"""


def union_template(requirements: GenerationRequirements) -> str:
    as_integer = ""
    if requirements.error_handling:
        as_integer = """
    /// Integer payload, or an error for any other variant
    pub fn asInteger(self: Self) Error!i32 {
        return switch (self) {
            .integer => |val| val,
            else => Error.InvalidOperation,
        };
    }
"""
    return f"""pub const MyUnion = union(enum) {{
    integer: i32,
    float: f64,
    string: []const u8,

    const Self = @This();

    /// Get type tag as string
    pub fn getTypeName(self: Self) []const u8 {{
        return @tagName(self);
    }}
{as_integer}
    /// Format for printing
    pub fn format(
        self: Self,
        comptime fmt: []const u8,
        options: std.fmt.FormatOptions,
        writer: anytype,
    ) !void {{
        _ = fmt;
        _ = options;

        switch (self) {{
            .integer => |val| try writer.print("{{d}}", .{{val}}),
            .float => |val| try writer.print("{{d}}", .{{val}}),
            .string => |val| try writer.print("{{s}}", .{{val}}),
        }}
    }}
}};
"""


def function_template(requirements: GenerationRequirements) -> str:
    guard = _guard(requirements, "if (input.len == 0) return Error.InvalidInput;", " " * 4)
    blank = "\n" if guard else ""
    return f"""/// Count the non-zero bytes of input
pub fn process(input: []const u8) {_error_prefix(requirements)}usize {{
{guard}{blank}    var count: usize = 0;
    for (input) |byte| {{
        if (byte != 0) count += 1;
    }}
    return count;
}}
"""


def _struct_tests(requirements: GenerationRequirements) -> tuple[str, str]:
    setup = "    var instance = MyStruct.init(testing.allocator);\n    defer instance.deinit();\n"
    basic = (
        f"{setup}"
        f'    {_try(requirements)}instance.process("test input");\n'
        "    try testing.expectEqual(@as(usize, 10), instance.processed);\n"
    )
    if requirements.error_handling:
        edge = f'{setup}    try testing.expectError(Error.InvalidInput, instance.process(""));\n'
    else:
        edge = f'{setup}    instance.process("");\n'
    edge += "    try testing.expectEqual(@as(usize, 0), instance.processed);\n"
    return basic, edge


def _enum_tests(requirements: GenerationRequirements) -> tuple[str, str]:
    basic = (
        '    try testing.expectEqualStrings("Variant A", MyEnum.variant_a.toString());\n'
        f'    try testing.expectEqual(MyEnum.variant_b, {_try(requirements)}'
        'MyEnum.fromString("variant_b"));\n'
    )
    if requirements.error_handling:
        edge = '    try testing.expectError(Error.InvalidInput, MyEnum.fromString(""));\n'
    else:
        edge = '    try testing.expect(MyEnum.fromString("") == null);\n'
    return basic, edge


def _union_tests(requirements: GenerationRequirements) -> tuple[str, str]:
    basic = (
        "    const value = MyUnion{ .integer = 42 };\n"
        '    try testing.expectEqualStrings("integer", value.getTypeName());\n'
    )
    edge = '    const value = MyUnion{ .string = "" };\n'
    if requirements.error_handling:
        edge += "    try testing.expectError(Error.InvalidOperation, value.asInteger());\n"
    edge += '    try testing.expectEqualStrings("string", value.getTypeName());\n'
    return basic, edge


def _function_tests(requirements: GenerationRequirements) -> tuple[str, str]:
    basic = (
        "    try testing.expectEqual(@as(usize, 10), "
        f'{_try(requirements)}process("test input"));\n'
    )
    if requirements.error_handling:
        edge = '    try testing.expectError(Error.InvalidInput, process(""));\n'
    else:
        edge = '    try testing.expectEqual(@as(usize, 0), process(""));\n'
    return basic, edge


TEMPLATES: dict[str, tuple[Template, Callable[[GenerationRequirements], tuple[str, str]]]] = {
    "struct": (struct_template, _struct_tests),
    "enum": (enum_template, _enum_tests),
    "union": (union_template, _union_tests),
    "function": (function_template, _function_tests),
}


def select_template(requirements: GenerationRequirements) -> str:
    """Name of the template used for ``requirements``.

    Priority is struct, enum, union, then function (also chosen for
    "implement" and as the default).
    """
    for kind in ("struct", "enum", "union"):
        if requirements.has_feature(kind):
            return kind
    return "function"


def generate_tests(requirements: GenerationRequirements, kind: str) -> str:
    """Two test blocks, "basic functionality" and "edge cases", for ``kind``."""
    basic, edge = TEMPLATES[kind][1](requirements)
    return f'test "basic functionality" {{\n{basic}}}\n\ntest "edge cases" {{\n{edge}}}\n'


def generate_zig_code(requirements: GenerationRequirements) -> str:
    """Assemble a complete Zig source file from requirements.

    Args:
        requirements: Parsed generation requirements.

    Returns:
        Zig source ending in a newline.

    Example:
        >>> from zig_mcp.generators.requirements import parse_requirements
        >>> code = generate_zig_code(parse_requirements("struct with tests"))
        >>> 'test "edge cases"' in code
        True
    """
    kind = select_template(requirements)
    template = TEMPLATES[kind][0]

    imports = 'const std = @import("std");\n'
    if requirements.testing:
        imports += "const testing = std.testing;\n"

    parts = [HEADER, imports]
    if requirements.error_handling:
        parts.append(ERROR_SET)
    parts.append(template(requirements))
    if requirements.performance:
        parts.append(f"{PERFORMANCE_NOTE}\n")
    if requirements.testing:
        parts.append(generate_tests(requirements, kind))
    return "\n".join(parts)
