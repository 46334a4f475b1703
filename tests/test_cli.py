"""Tests for CLI module."""

import json
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from zig_mcp.cli import (
    SERVER_KEY,
    WINDOWS_PLATFORM,
    check_build_file,
    check_file,
    get_mcp_server_config,
    get_venv_python,
    get_vscode_mcp_path,
    install_mcp,
    main,
    uninstall_mcp,
)


class TestGetVenvPython:
    """Tests for get_venv_python function."""

    @pytest.mark.parametrize(
        ("platform", "venv_subpath", "python_name"),
        [
            ("linux", "bin", "python"),
            (WINDOWS_PLATFORM, "Scripts", "python.exe"),
        ],
        ids=["linux_venv", "windows_venv"],
    )
    def test_detects_venv_python(
        self, tmp_path: Path, platform: str, venv_subpath: str, python_name: str
    ) -> None:
        """Verify detection of venv Python path on different platforms."""
        venv_dir = tmp_path / ".venv" / venv_subpath
        venv_dir.mkdir(parents=True)
        (venv_dir / python_name).touch()

        with (
            patch("zig_mcp.cli.Path.cwd", return_value=tmp_path),
            patch("zig_mcp.cli.sys.platform", platform),
        ):
            result = get_venv_python()
            assert ".venv" in result
            assert result.endswith(python_name)

    @pytest.mark.parametrize(
        "has_venv_dir",
        [False, True],
        ids=["no_venv", "venv_no_python"],
    )
    def test_fallback_to_sys_executable(self, tmp_path: Path, has_venv_dir: bool) -> None:
        """Verify fallback to sys.executable when venv unavailable."""
        if has_venv_dir:
            (tmp_path / ".venv").mkdir()

        with patch("zig_mcp.cli.Path.cwd", return_value=tmp_path):
            assert get_venv_python() == sys.executable


class TestGetMcpServerConfig:
    """Tests for get_mcp_server_config function."""

    def test_returns_valid_config_structure(self) -> None:
        """Verify config runs the server module."""
        config = get_mcp_server_config()
        assert "command" in config
        assert config["args"] == ["-m", "zig_mcp.server"]


class TestGetVscodeMcpPath:
    """Tests for get_vscode_mcp_path function."""

    @pytest.mark.parametrize(
        ("global_install", "insiders", "expected_parts"),
        [
            (False, False, [".vscode", "mcp.json"]),
            (True, False, [".config", "Code", "User", "mcp.json"]),
            (True, True, [".config", "Code - Insiders", "User", "mcp.json"]),
            (False, True, [".vscode", "mcp.json"]),
        ],
        ids=["workspace_path", "global_stable", "global_insiders", "workspace_insiders_ignored"],
    )
    def test_vscode_mcp_path(
        self, tmp_path: Path, global_install: bool, insiders: bool, expected_parts: list[str]
    ) -> None:
        """Verify correct path returned for workspace vs global install."""
        with (
            patch("zig_mcp.cli.Path.cwd", return_value=tmp_path),
            patch("zig_mcp.cli.Path.home", return_value=tmp_path),
        ):
            result = get_vscode_mcp_path(global_install=global_install, insiders=insiders)
            assert result.parts[-len(expected_parts) :] == tuple(expected_parts)


class TestInstallMcp:
    """Tests for install_mcp function."""

    def test_install_creates_new_config(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Verify install creates mcp.json when it doesn't exist."""
        with patch("zig_mcp.cli.Path.cwd", return_value=tmp_path):
            result = install_mcp(global_install=False)

        assert result == 0
        config = json.loads((tmp_path / ".vscode" / "mcp.json").read_text())
        assert config["servers"][SERVER_KEY]["args"] == ["-m", "zig_mcp.server"]
        assert "✓ Zig MCP server installed (workspace)" in capsys.readouterr().out

    @pytest.mark.parametrize(
        ("initial_config", "expected_servers"),
        [
            ({"servers": {"other-server": {}}}, ["other-server", SERVER_KEY]),
            ({"other_key": "value"}, [SERVER_KEY]),
        ],
        ids=["preserves_existing", "adds_servers_key"],
    )
    def test_install_updates_existing_config(
        self, tmp_path: Path, initial_config: dict, expected_servers: list[str]
    ) -> None:
        """Verify install preserves existing servers and handles missing keys."""
        vscode_dir = tmp_path / ".vscode"
        vscode_dir.mkdir()
        mcp_path = vscode_dir / "mcp.json"
        mcp_path.write_text(json.dumps(initial_config))

        with patch("zig_mcp.cli.Path.cwd", return_value=tmp_path):
            result = install_mcp(global_install=False)

        assert result == 0
        config = json.loads(mcp_path.read_text())
        assert sorted(config["servers"]) == sorted(expected_servers)

    def test_install_handles_invalid_json(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Verify install fails gracefully on invalid JSON."""
        vscode_dir = tmp_path / ".vscode"
        vscode_dir.mkdir()
        (vscode_dir / "mcp.json").write_text("{ invalid json }")

        with patch("zig_mcp.cli.Path.cwd", return_value=tmp_path):
            assert install_mcp(global_install=False) == 1
        assert "Invalid JSON" in capsys.readouterr().err


class TestUninstallMcp:
    """Tests for uninstall_mcp function."""

    def test_uninstall_removes_server(self, tmp_path: Path) -> None:
        """Verify uninstall removes zig-mcp and keeps other servers."""
        vscode_dir = tmp_path / ".vscode"
        vscode_dir.mkdir()
        mcp_path = vscode_dir / "mcp.json"
        mcp_path.write_text(json.dumps({"servers": {SERVER_KEY: {}, "other-server": {}}}))

        with patch("zig_mcp.cli.Path.cwd", return_value=tmp_path):
            result = uninstall_mcp(global_install=False)

        assert result == 0
        config = json.loads(mcp_path.read_text())
        assert list(config["servers"]) == ["other-server"]

    @pytest.mark.parametrize(
        ("setup", "expected_code", "expected_output"),
        [
            ("no_config", 0, "No MCP config found at"),
            ("no_server", 0, "Zig MCP server not found in workspace config"),
            ("invalid_json", 1, ""),
        ],
        ids=["missing_config", "missing_server", "invalid_json"],
    )
    def test_uninstall_edge_cases(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
        setup: str,
        expected_code: int,
        expected_output: str,
    ) -> None:
        """Verify uninstall handles various edge cases."""
        vscode_dir = tmp_path / ".vscode"

        if setup == "no_server":
            vscode_dir.mkdir()
            (vscode_dir / "mcp.json").write_text(json.dumps({"servers": {"other-server": {}}}))
        elif setup == "invalid_json":
            vscode_dir.mkdir()
            (vscode_dir / "mcp.json").write_text("{ invalid json }")

        with patch("zig_mcp.cli.Path.cwd", return_value=tmp_path):
            assert uninstall_mcp(global_install=False) == expected_code
        assert expected_output in capsys.readouterr().out


class TestCheckCommands:
    """Tests for the local analysis commands."""

    def test_check_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Verify check prints the recommendation report."""
        source = tmp_path / "main.zig"
        source.write_text("const f = open() catch unreachable;\n")

        assert check_file(str(source), prompt="safety") == 0
        out = capsys.readouterr().out
        assert out.startswith("Code Analysis and Recommendations:")
        assert "🚨 Critical" in out
        assert 'Specific Recommendations for "safety":' in out

    def test_check_build_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Verify check-build prints build recommendations."""
        build = tmp_path / "build.zig"
        build.write_text("pub fn build(b: *std.build.Builder) void {}\n")

        assert check_build_file(str(build)) == 0
        assert "replace Builder with std.Build" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "command",
        [check_file, check_build_file],
        ids=["check", "check_build"],
    )
    def test_missing_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str], command
    ) -> None:
        """Verify unreadable files fail with an error on stderr."""
        assert command(str(tmp_path / "missing.zig")) == 1
        assert "cannot read" in capsys.readouterr().err


class TestMain:
    """Tests for main CLI entry point."""

    @pytest.mark.parametrize(
        ("argv", "expected_exit", "check_path"),
        [
            (["zig-mcp"], 0, None),
            (["zig-mcp", "install"], 0, ".vscode/mcp.json"),
            (["zig-mcp", "uninstall"], 0, None),
        ],
        ids=["no_command", "install", "uninstall"],
    )
    def test_main_commands(
        self, tmp_path: Path, argv: list[str], expected_exit: int, check_path: str | None
    ) -> None:
        """Verify main dispatches commands correctly."""
        with (
            patch.object(sys, "argv", argv),
            patch("zig_mcp.cli.Path.cwd", return_value=tmp_path),
        ):
            assert main() == expected_exit
            if check_path:
                assert (tmp_path / check_path).exists()

    def test_main_check(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Verify main runs check with a prompt."""
        source = tmp_path / "main.zig"
        source.write_text("var list = std.ArrayList(u8).init(a);\n")

        assert main(["check", str(source), "-p", "memory"]) == 0
        assert "Use ArenaAllocator" in capsys.readouterr().out

    def test_main_check_build(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Verify main runs check-build."""
        build = tmp_path / "build.zig"
        build.write_text("exe.setTarget(target);\n")

        assert main(["check-build", str(build)]) == 0
        assert "Build File Analysis:" in capsys.readouterr().out

    def test_main_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Verify --version prints the package version."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "zig-mcp 0.2.0" in capsys.readouterr().out

    def test_main_install_global_flag(self, tmp_path: Path) -> None:
        """Verify main handles --global flag for install."""
        home_dir = tmp_path / "home"
        home_dir.mkdir()

        with patch("zig_mcp.cli.Path.home", return_value=home_dir):
            assert main(["install", "--global"]) == 0
        assert (home_dir / ".config" / "Code" / "User" / "mcp.json").exists()

    @pytest.mark.parametrize(
        ("command", "flags"),
        [
            ("install", ["--global", "--insiders"]),
            ("install", ["-g", "-i"]),
            ("uninstall", ["--global", "--insiders"]),
        ],
        ids=["install_insiders_long", "install_insiders_short", "uninstall_insiders"],
    )
    def test_main_insiders_flag(self, tmp_path: Path, command: str, flags: list[str]) -> None:
        """Verify main handles --insiders flag for global operations."""
        home_dir = tmp_path / "home"
        insiders_path = home_dir / ".config" / "Code - Insiders" / "User"
        insiders_path.mkdir(parents=True)
        mcp_json = insiders_path / "mcp.json"

        if command == "uninstall":
            mcp_json.write_text(json.dumps({"servers": {SERVER_KEY: {}}}))

        with patch("zig_mcp.cli.Path.home", return_value=home_dir):
            assert main([command, *flags]) == 0

        servers = json.loads(mcp_json.read_text())["servers"]
        assert (SERVER_KEY in servers) is (command == "install")
