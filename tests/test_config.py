# ABOUTME: Tests for .mcp.json reading, writing, add and remove
# ABOUTME: Covers schema validation and byte-level output format
import json
from pathlib import Path

import pytest

from mcpstack.config import (
    MCP_CONFIG_FILE,
    add_server_to_config,
    config_exists,
    dict_to_server,
    get_config_path,
    get_configured_names,
    read_config,
    remove_server_from_config,
    server_to_dict,
    write_config,
)
from mcpstack.models import ConfigFile, ServerConfig


def write_raw(tmp_path: Path, data) -> Path:
    path = tmp_path / MCP_CONFIG_FILE
    path.write_text(json.dumps(data) if not isinstance(data, str) else data)
    return path


class TestConfigPath:
    """Tests for config path resolution."""

    def test_path_in_project_dir(self, tmp_path: Path) -> None:
        assert get_config_path(tmp_path) == tmp_path / ".mcp.json"

    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert get_config_path() == tmp_path / ".mcp.json"

    def test_config_exists(self, tmp_path: Path) -> None:
        assert not config_exists(tmp_path)
        write_raw(tmp_path, {"mcpServers": {}})
        assert config_exists(tmp_path)


class TestReadConfig:
    """Tests for read_config function."""

    def test_missing_file_returns_none(self, tmp_path: Path) -> None:
        assert read_config(tmp_path) is None

    def test_reads_stdio_and_http_servers(self, tmp_path: Path) -> None:
        write_raw(tmp_path, {
            "mcpServers": {
                "github": {
                    "command": "npx",
                    "args": ["-y", "@modelcontextprotocol/server-github"],
                    "env": {"GITHUB_PERSONAL_ACCESS_TOKEN": "abc"},
                },
                "vercel": {"type": "http", "url": "https://mcp.vercel.com"},
            }
        })

        config = read_config(tmp_path)

        assert config is not None
        assert list(config.servers) == ["github", "vercel"]
        assert config.servers["github"].command == "npx"
        assert config.servers["github"].env == {"GITHUB_PERSONAL_ACCESS_TOKEN": "abc"}
        assert config.servers["vercel"].is_http

    def test_malformed_json_raises(self, tmp_path: Path) -> None:
        write_raw(tmp_path, "{ not json")
        with pytest.raises(json.JSONDecodeError):
            read_config(tmp_path)

    def test_missing_mcp_servers_raises(self, tmp_path: Path) -> None:
        write_raw(tmp_path, {"servers": {}})
        with pytest.raises(ValueError, match="mcpServers"):
            read_config(tmp_path)

    def test_top_level_must_be_object(self, tmp_path: Path) -> None:
        write_raw(tmp_path, [1, 2, 3])
        with pytest.raises(ValueError, match="top level"):
            read_config(tmp_path)

    def test_invalid_type_raises(self, tmp_path: Path) -> None:
        write_raw(tmp_path, {"mcpServers": {"x": {"type": "stdio", "url": "https://a"}}})
        with pytest.raises(ValueError, match="invalid type"):
            read_config(tmp_path)

    def test_args_must_be_strings(self, tmp_path: Path) -> None:
        write_raw(tmp_path, {"mcpServers": {"x": {"command": "npx", "args": [1]}}})
        with pytest.raises(ValueError, match="args"):
            read_config(tmp_path)

    def test_entry_without_shape_raises(self, tmp_path: Path) -> None:
        write_raw(tmp_path, {"mcpServers": {"x": {"args": ["a"]}}})
        with pytest.raises(ValueError, match="needs either"):
            read_config(tmp_path)

    def test_http_entry_needs_url(self, tmp_path: Path) -> None:
        write_raw(tmp_path, {"mcpServers": {"x": {"type": "http"}}})
        with pytest.raises(ValueError):
            read_config(tmp_path)

    def test_mixed_shape_accepted(self, tmp_path: Path) -> None:
        write_raw(tmp_path, {"mcpServers": {"x": {"command": "npx", "type": "http", "url": "https://a.b"}}})
        config = read_config(tmp_path)
        assert config.servers["x"].is_stdio
        assert config.servers["x"].is_http

    def test_unknown_keys_are_dropped(self, tmp_path: Path) -> None:
        write_raw(tmp_path, {"mcpServers": {"x": {"command": "npx", "disabled": True}}})
        config = read_config(tmp_path)
        assert config.servers["x"] == ServerConfig(command="npx")


class TestWriteConfig:
    """Tests for write_config function."""

    def test_two_space_indent_and_trailing_newline(self, tmp_path: Path) -> None:
        config = ConfigFile(servers={"playwright": ServerConfig(command="npx", args=["@playwright/mcp@latest"])})

        write_config(config, tmp_path)

        text = (tmp_path / ".mcp.json").read_text()
        expected = json.dumps(
            {"mcpServers": {"playwright": {"command": "npx", "args": ["@playwright/mcp@latest"]}}},
            indent=2,
        ) + "\n"
        assert text == expected

    def test_none_fields_omitted(self) -> None:
        assert server_to_dict(ServerConfig(type="http", url="https://a.b")) == {
            "type": "http",
            "url": "https://a.b",
        }

    def test_round_trip(self, tmp_path: Path) -> None:
        config = ConfigFile(servers={
            "supabase": ServerConfig(
                command="npx",
                args=["-y", "@supabase/mcp-server-supabase@latest", "--project-ref=abc"],
                env={"SUPABASE_ACCESS_TOKEN": "sbp_x"},
            ),
            "context7": ServerConfig(
                type="http",
                url="https://mcp.context7.com/mcp",
                headers={"CONTEXT7_API_KEY": ""},
            ),
        })

        write_config(config, tmp_path)

        assert read_config(tmp_path) == config

    def test_dict_to_server_rejects_non_object(self) -> None:
        with pytest.raises(ValueError):
            dict_to_server("x", "npx")


class TestAddRemove:
    """Tests for add_server_to_config and remove_server_from_config."""

    def test_add_creates_file(self, tmp_path: Path) -> None:
        add_server_to_config("playwright", ServerConfig(command="npx"), tmp_path)
        assert get_configured_names(tmp_path) == ["playwright"]

    def test_add_keeps_other_entries_and_order(self, tmp_path: Path) -> None:
        add_server_to_config("a", ServerConfig(command="a"), tmp_path)
        add_server_to_config("b", ServerConfig(command="b"), tmp_path)
        add_server_to_config("a", ServerConfig(command="a2"), tmp_path)

        config = read_config(tmp_path)
        assert list(config.servers) == ["a", "b"]
        assert config.servers["a"].command == "a2"

    def test_add_same_entry_twice_is_stable(self, tmp_path: Path) -> None:
        server = ServerConfig(command="npx", args=["x"])
        add_server_to_config("x", server, tmp_path)
        first = (tmp_path / ".mcp.json").read_bytes()
        add_server_to_config("x", server, tmp_path)
        assert (tmp_path / ".mcp.json").read_bytes() == first

    def test_remove_entry(self, tmp_path: Path) -> None:
        add_server_to_config("a", ServerConfig(command="a"), tmp_path)
        add_server_to_config("b", ServerConfig(command="b"), tmp_path)

        config = remove_server_from_config("a", tmp_path)

        assert list(config.servers) == ["b"]
        assert get_configured_names(tmp_path) == ["b"]

    def test_remove_is_idempotent(self, tmp_path: Path) -> None:
        add_server_to_config("a", ServerConfig(command="a"), tmp_path)
        remove_server_from_config("a", tmp_path)
        after_first = (tmp_path / ".mcp.json").read_bytes()

        remove_server_from_config("a", tmp_path)

        assert (tmp_path / ".mcp.json").read_bytes() == after_first

    def test_remove_without_file_returns_none(self, tmp_path: Path) -> None:
        assert remove_server_from_config("a", tmp_path) is None
        assert not (tmp_path / ".mcp.json").exists()

    def test_configured_names_without_file(self, tmp_path: Path) -> None:
        assert get_configured_names(tmp_path) == []
