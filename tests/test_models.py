# Tests for core data models
from dataclasses import FrozenInstanceError

import pytest

from mcpstack.models import (
    ConfigFile,
    ConnectorDefinition,
    DetectionReport,
    DoctorResult,
    ServerConfig,
)


def test_server_config_stdio_shape():
    """A server with a command is stdio."""
    server = ServerConfig(command="npx", args=["-y", "pkg"])
    assert server.is_stdio
    assert not server.is_http


def test_server_config_http_shape():
    """A server needs both type and url to count as HTTP."""
    assert ServerConfig(type="http", url="https://example.com/mcp").is_http
    assert not ServerConfig(url="https://example.com/mcp").is_http
    assert not ServerConfig(type="sse").is_http


def test_server_config_is_immutable():
    """Test that ServerConfig cannot be modified after creation."""
    server = ServerConfig(command="npx")
    with pytest.raises(FrozenInstanceError):
        server.command = "node"


def test_config_file_defaults_to_no_servers():
    assert ConfigFile().servers == {}
    # Each instance gets its own dict
    first = ConfigFile()
    first.servers["a"] = ServerConfig(command="x")
    assert ConfigFile().servers == {}


def test_connector_needs_credentials():
    """Required or optional env makes a connector need credentials."""
    base = {"name": "x", "description": "X", "config": ServerConfig(command="x")}
    assert not ConnectorDefinition(**base).needs_credentials
    assert ConnectorDefinition(**base, required_env=["A"]).needs_credentials
    assert ConnectorDefinition(**base, optional_env=["B"]).needs_credentials


class TestDetectionReport:
    """Tests for DetectionReport.add."""

    def test_first_reason_wins(self):
        report = DetectionReport()
        report.add("supabase", "Found supabase/config.toml")
        report.add("supabase", "Found dependency @supabase/supabase-js")

        assert report.suggested == ["supabase"]
        assert len(report.detected) == 1
        assert report.detected[0].reason == "Found supabase/config.toml"

    def test_keeps_insertion_order(self):
        report = DetectionReport()
        report.add("vercel", "a")
        report.add("github", "b")
        report.add("vercel", "c")
        assert report.suggested == ["vercel", "github"]


class TestDoctorResult:
    """Tests for escalate-only status updates."""

    def test_starts_healthy(self):
        assert DoctorResult(connector="x").status == "healthy"

    def test_escalates_upward(self):
        result = DoctorResult(connector="x")
        result.escalate("warning")
        assert result.status == "warning"
        result.escalate("error")
        assert result.status == "error"

    def test_never_downgrades(self):
        result = DoctorResult(connector="x")
        result.escalate("error")
        result.escalate("warning")
        result.escalate("healthy")
        assert result.status == "error"

    def test_add_check_appends_in_order(self):
        result = DoctorResult(connector="x")
        result.add_check("Config", True, "ok")
        result.add_check("Connection", False, "down")
        assert [check.name for check in result.checks] == ["Config", "Connection"]
        assert result.checks[1].passed is False
