# ABOUTME: Integration tests for the mcp-stack CLI that run actual subprocess commands
# ABOUTME: Tests real CLI behavior by invoking the CLI via python -m mcpstack
import json
import os
import subprocess
import sys
from pathlib import Path


def run_cli(*args: str, cwd: Path | None = None) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env.pop("GITHUB_TOKEN", None)
    return subprocess.run(
        [sys.executable, "-m", "mcpstack", *args],
        capture_output=True,
        text=True,
        timeout=30,
        cwd=str(cwd) if cwd else None,
        env=env,
    )


class TestCliIntegration:
    """Integration tests that run the CLI via subprocess."""

    def test_integration_cli_version_output(self):
        """Test that the CLI can be invoked and returns version information."""
        result = run_cli("--version")

        assert result.returncode == 0
        assert "mcp-stack v" in result.stdout

    def test_integration_cli_help_output(self):
        """Test that --help lists the subcommands."""
        result = run_cli("--help")

        assert result.returncode == 0
        for command in ("init", "add", "remove", "list", "doctor", "completion"):
            assert command in result.stdout

    def test_integration_add_then_list(self, tmp_path: Path):
        """Test that add writes .mcp.json and list shows it."""
        result = run_cli("add", "playwright", cwd=tmp_path)
        assert result.returncode == 0

        data = json.loads((tmp_path / ".mcp.json").read_text())
        assert data["mcpServers"]["playwright"]["command"] == "npx"

        result = run_cli("list", "configured", cwd=tmp_path)
        assert result.returncode == 0
        assert "playwright" in result.stdout

    def test_integration_unknown_mcp_exit_code(self, tmp_path: Path):
        result = run_cli("add", "does-not-exist", cwd=tmp_path)
        assert result.returncode == 1
        assert not (tmp_path / ".mcp.json").exists()

    def test_integration_verbose_logs_to_stderr(self, tmp_path: Path):
        """Test that -v sends debug logging to stderr, not stdout."""
        result = run_cli("-v", "detect", cwd=tmp_path)

        assert result.returncode == 0
        assert "DEBUG" in result.stderr
        assert "DEBUG" not in result.stdout
