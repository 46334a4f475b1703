"""Command-line interface for zig-mcp.

Provides installation, server and local analysis commands.

Commands:
    install: Configure MCP server in VS Code workspace or globally
    uninstall: Remove MCP server configuration
    serve: Run the MCP server on stdio
    check: Review a Zig source file with every classifier
    check-build: Analyze a build.zig file
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from zig_mcp import tools
from zig_mcp.__version__ import __version__

# Platform constant for cross-platform detection
WINDOWS_PLATFORM = "win32"

# Key of this server in mcp.json
SERVER_KEY = "zig-mcp"


def get_venv_python() -> str:
    """Detect .venv Python executable for MCP server configuration.

    Checks for a .venv directory in the current working directory and
    returns the path to its Python executable (bin/python on Linux/macOS,
    Scripts/python.exe on Windows) without resolving symlinks, so the
    venv's site-packages are used. Falls back to sys.executable.

    Returns:
        Full path to Python executable as string.

    Example:
        >>> path = get_venv_python()
        >>> 'python' in path
        True
    """
    venv_dir = Path.cwd() / ".venv"

    if venv_dir.exists():
        if sys.platform == WINDOWS_PLATFORM:
            venv_python = venv_dir / "Scripts" / "python.exe"
        else:
            venv_python = venv_dir / "bin" / "python"

        if venv_python.exists():
            return str(venv_python.absolute())

    return sys.executable


def get_mcp_server_config() -> dict[str, object]:
    """Generate MCP server configuration with detected Python path.

    Uses `-m zig_mcp.server` module execution rather than the entry point
    script so the detected interpreter's site-packages are loaded.

    Returns:
        Dict with 'command' (Python path) and 'args' (module invocation).

    Example:
        >>> get_mcp_server_config()['args']
        ['-m', 'zig_mcp.server']
    """
    return {
        "command": get_venv_python(),
        "args": ["-m", "zig_mcp.server"],
    }


def get_vscode_mcp_path(global_install: bool = False, insiders: bool = False) -> Path:
    """Get the path to the MCP configuration file.

    Args:
        global_install: If True, return user-level config path.
                       If False, return workspace .vscode/mcp.json path.
        insiders: If True (with global_install), use Code - Insiders path.
                 Ignored for workspace installs.

    Returns:
        Path to the mcp.json configuration file.

    Raises:
        No exceptions - returns path regardless of existence.
    """
    if global_install:
        code_dir = "Code - Insiders" if insiders else "Code"
        return Path.home() / ".config" / code_dir / "User" / "mcp.json"
    return Path.cwd() / ".vscode" / "mcp.json"


def _location(global_install: bool, insiders: bool) -> str:
    if global_install:
        variant = "Insiders" if insiders else "stable"
        return f"global ({variant})"
    return "workspace"


def _load_config(mcp_path: Path) -> dict | None:
    """Read mcp.json; None (with an error printed) when it is not valid JSON."""
    try:
        with open(mcp_path) as f:
            return json.load(f)
    except json.JSONDecodeError:
        print(f"Error: Invalid JSON in {mcp_path}", file=sys.stderr)
        return None


def _write_config(mcp_path: Path, config: dict) -> None:
    with open(mcp_path, "w") as f:
        json.dump(config, f, indent=2)
        f.write("\n")


def install_mcp(global_install: bool = False, insiders: bool = False) -> int:
    """Install MCP server configuration to VS Code.

    Creates or updates mcp.json with the zig-mcp server entry, keeping
    any other servers already configured.

    Args:
        global_install: Install to user-level config instead of workspace.
        insiders: Use VS Code Insiders path (only with global_install).

    Returns:
        Exit code: 0 for success, 1 for failure.

    Raises:
        No exceptions - errors printed to stderr, returns exit code.
    """
    mcp_path = get_vscode_mcp_path(global_install, insiders)
    mcp_path.parent.mkdir(parents=True, exist_ok=True)

    if mcp_path.exists():
        config = _load_config(mcp_path)
        if config is None:
            return 1
    else:
        config = {"servers": {}}

    config.setdefault("servers", {})
    config["servers"][SERVER_KEY] = get_mcp_server_config()
    _write_config(mcp_path, config)

    print(f"✓ Zig MCP server installed ({_location(global_install, insiders)})")
    print(f"  Config: {mcp_path}")
    print()
    print("Reload VS Code window to activate the MCP server.")
    return 0


def uninstall_mcp(global_install: bool = False, insiders: bool = False) -> int:
    """Remove MCP server configuration from VS Code.

    Removes the zig-mcp entry from mcp.json while preserving other
    server configurations.

    Args:
        global_install: Remove from user-level config instead of workspace.
        insiders: Use VS Code Insiders path (only with global_install).

    Returns:
        Exit code: 0 for success, 1 for failure.
    """
    mcp_path = get_vscode_mcp_path(global_install, insiders)
    location = _location(global_install, insiders)

    if not mcp_path.exists():
        print(f"No MCP config found at {mcp_path}")
        return 0

    config = _load_config(mcp_path)
    if config is None:
        return 1

    if SERVER_KEY in config.get("servers", {}):
        del config["servers"][SERVER_KEY]
        _write_config(mcp_path, config)
        print(f"✓ Zig MCP server removed ({location})")
    else:
        print(f"Zig MCP server not found in {location} config")

    return 0


def _read_source(path: str) -> str | None:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error: cannot read {path}: {e}", file=sys.stderr)
        return None


def check_file(path: str, prompt: str | None = None) -> int:
    """Print the full recommendation report for a Zig source file.

    Returns:
        Exit code: 0 for success, 1 when the file cannot be read.
    """
    code = _read_source(path)
    if code is None:
        return 1
    print(tools.get_recommendations(code, prompt))
    return 0


def check_build_file(path: str) -> int:
    """Print build.zig recommendations for a file.

    Returns:
        Exit code: 0 for success, 1 when the file cannot be read.
    """
    content = _read_source(path)
    if content is None:
        return 1
    print(tools.analyze_build_zig(content))
    return 0


def serve() -> int:  # pragma: no cover
    """Run the MCP server on stdio until EOF."""
    from zig_mcp.server import main as server_main

    asyncio.run(server_main())
    return 0


def _add_scope_flags(parser: argparse.ArgumentParser, action: str) -> None:
    parser.add_argument(
        "--global",
        "-g",
        dest="global_install",
        action="store_true",
        help=f"{action} user-level VS Code config instead of workspace",
    )
    parser.add_argument(
        "--insiders",
        "-i",
        dest="insiders",
        action="store_true",
        help="Use VS Code Insiders config path (only with --global)",
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for zig-mcp commands.

    Flags:
        --global, -g: Target user-level config instead of workspace
        --version, -v: Show version and exit

    Args:
        argv: Arguments to parse. Defaults to sys.argv[1:].

    Returns:
        Exit code: 0 for success, non-zero for failure.

    Raises:
        SystemExit: On --version or argument errors (via argparse).

    Example:
        >>> main(['check-build', 'build.zig'])
        0
    """
    parser = argparse.ArgumentParser(
        prog="zig-mcp",
        description="Zig MCP Server - Zig code analysis and generation",
    )
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    install_parser = subparsers.add_parser("install", help="Install MCP server configuration")
    _add_scope_flags(install_parser, "Install to")

    uninstall_parser = subparsers.add_parser("uninstall", help="Remove MCP server configuration")
    _add_scope_flags(uninstall_parser, "Remove from")

    subparsers.add_parser("serve", help="Run the MCP server on stdio")

    check_parser = subparsers.add_parser("check", help="Review a Zig source file")
    check_parser.add_argument("file", help="Path to a .zig file")
    check_parser.add_argument(
        "--prompt", "-p", help="Focus area for extra recommendations (e.g. performance)"
    )

    build_parser = subparsers.add_parser("check-build", help="Analyze a build.zig file")
    build_parser.add_argument("file", help="Path to build.zig")

    args = parser.parse_args(argv)

    if args.command == "install":
        return install_mcp(global_install=args.global_install, insiders=args.insiders)
    elif args.command == "uninstall":
        return uninstall_mcp(global_install=args.global_install, insiders=args.insiders)
    elif args.command == "serve":
        return serve()
    elif args.command == "check":
        return check_file(args.file, args.prompt)
    elif args.command == "check-build":
        return check_build_file(args.file)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
