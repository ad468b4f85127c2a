# Project .mcp.json loading and saving for mcpstack
import json
import logging
from pathlib import Path
from typing import Any

from mcpstack.models import ConfigFile, ServerConfig

logger = logging.getLogger(__name__)

# ABOUTME: Project-level config file, always relative to the project directory
MCP_CONFIG_FILE = ".mcp.json"

# ABOUTME: Keys understood in a server entry; anything else is dropped on read
SERVER_KEYS = ("command", "args", "env", "type", "url", "headers")
SERVER_TYPES = ("http", "sse")


def get_config_path(project_dir: Path | None = None) -> Path:
    """Return the path to .mcp.json in the project directory.

    ABOUTME: Defaults to the current working directory
    ABOUTME: File may not exist yet
    """
    return (project_dir if project_dir is not None else Path.cwd()) / MCP_CONFIG_FILE


def config_exists(project_dir: Path | None = None) -> bool:
    return get_config_path(project_dir).exists()


def _require_str_map(name: str, key: str, value: Any) -> dict[str, str]:
    if not isinstance(value, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        raise ValueError(f"Server '{name}' field '{key}' must map strings to strings")
    return dict(value)


def dict_to_server(name: str, data: Any) -> ServerConfig:
    """Convert a raw .mcp.json entry to ServerConfig.

    ABOUTME: Validates field types and requires a stdio or http shape
    ABOUTME: Unknown keys are ignored; both shapes on one entry are allowed

    Raises:
        ValueError: If a field has the wrong type, 'type' is not http/sse,
            or the entry has neither shape
    """
    if not isinstance(data, dict):
        raise ValueError(f"Server '{name}' must be a JSON object")

    unknown = set(data) - set(SERVER_KEYS)
    if unknown:
        logger.debug("Ignoring unknown keys for '%s': %s", name, ", ".join(sorted(unknown)))

    command = data.get("command")
    if command is not None and not isinstance(command, str):
        raise ValueError(f"Server '{name}' field 'command' must be a string")

    args = data.get("args")
    if args is not None:
        if not isinstance(args, list) or not all(isinstance(arg, str) for arg in args):
            raise ValueError(f"Server '{name}' field 'args' must be a list of strings")
        args = list(args)

    env = data.get("env")
    if env is not None:
        env = _require_str_map(name, "env", env)

    server_type = data.get("type")
    if server_type is not None and server_type not in SERVER_TYPES:
        raise ValueError(
            f"Server '{name}' has invalid type '{server_type}'. Must be 'http' or 'sse'."
        )

    url = data.get("url")
    if url is not None and not isinstance(url, str):
        raise ValueError(f"Server '{name}' field 'url' must be a string")

    headers = data.get("headers")
    if headers is not None:
        headers = _require_str_map(name, "headers", headers)

    server = ServerConfig(
        command=command,
        args=args,
        env=env,
        type=server_type,
        url=url,
        headers=headers,
    )
    if not server.is_stdio and not server.is_http:
        raise ValueError(
            f"Server '{name}' needs either 'command' (stdio) or 'type' and 'url' (http)"
        )
    return server


def server_to_dict(server: ServerConfig) -> dict[str, Any]:
    """Convert ServerConfig to its JSON form.

    ABOUTME: Fields that are None are omitted; field order follows SERVER_KEYS
    """
    result: dict[str, Any] = {}
    for key in SERVER_KEYS:
        value = getattr(server, key)
        if value is not None:
            result[key] = value
    return result


def read_config(project_dir: Path | None = None) -> ConfigFile | None:
    """Load and validate .mcp.json.

    ABOUTME: Returns None if the file doesn't exist
    ABOUTME: Fail-fast on parse errors and schema violations

    Args:
        project_dir: Directory holding .mcp.json (default: cwd)

    Returns:
        Parsed ConfigFile, or None if there is no config file

    Raises:
        json.JSONDecodeError: If JSON syntax is invalid
        ValueError: If the content doesn't match the schema
    """
    path = get_config_path(project_dir)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("No config at %s", path)
        return None

    if not isinstance(data, dict):
        raise ValueError(f"Invalid config in {path}: top level must be a JSON object")
    if "mcpServers" not in data:
        raise ValueError(f"Invalid config in {path}: missing required 'mcpServers' section")

    servers_data = data["mcpServers"]
    if not isinstance(servers_data, dict):
        raise ValueError(f"Invalid config in {path}: 'mcpServers' must be a JSON object")

    servers = {
        name: dict_to_server(name, server_data)
        for name, server_data in servers_data.items()
    }
    logger.debug("Loaded %d server(s) from %s", len(servers), path)
    return ConfigFile(servers=servers)


def write_config(config: ConfigFile, project_dir: Path | None = None) -> None:
    """Write .mcp.json with 2-space indentation and a trailing newline.

    Raises:
        OSError: If file cannot be written
    """
    path = get_config_path(project_dir)
    data = {
        "mcpServers": {
            name: server_to_dict(server) for name, server in config.servers.items()
        }
    }

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    logger.debug("Wrote %d server(s) to %s", len(config.servers), path)


def add_server_to_config(
    name: str, server: ServerConfig, project_dir: Path | None = None
) -> ConfigFile:
    """Add or replace a server entry.

    ABOUTME: Loads existing config, sets the entry, saves back
    ABOUTME: Creates new config if file doesn't exist

    Returns:
        The config as written
    """
    config = read_config(project_dir) or ConfigFile()
    config.servers[name] = server
    write_config(config, project_dir)
    return config


def remove_server_from_config(
    name: str, project_dir: Path | None = None
) -> ConfigFile | None:
    """Remove a server entry by name.

    ABOUTME: Returns None if there is no config file
    ABOUTME: A name that isn't configured leaves the file untouched

    Returns:
        The config as written, or None if there is no config file
    """
    config = read_config(project_dir)
    if config is None:
        return None

    if name not in config.servers:
        return config

    del config.servers[name]
    write_config(config, project_dir)
    return config


def get_configured_names(project_dir: Path | None = None) -> list[str]:
    """Return connector names in .mcp.json, in file order."""
    config = read_config(project_dir)
    if config is None:
        return []
    return list(config.servers)
