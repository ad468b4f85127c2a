# Connector registry
from collections.abc import Iterable, Mapping

from mcpstack.connectors.browsers import CHROME_DEVTOOLS, PLAYWRIGHT, PUPPETEER
from mcpstack.connectors.context7 import CONTEXT7
from mcpstack.connectors.github import GITHUB
from mcpstack.connectors.supabase import SUPABASE
from mcpstack.connectors.vercel import VERCEL
from mcpstack.models import ConnectorDefinition, ServerConfig
from mcpstack.utils.env import expand_server_config

# Registry of all available connectors, in display order
CONNECTORS: dict[str, ConnectorDefinition] = {
    connector.name: connector
    for connector in (
        SUPABASE,
        VERCEL,
        GITHUB,
        PLAYWRIGHT,
        PUPPETEER,
        CHROME_DEVTOOLS,
        CONTEXT7,
    )
}

__all__ = [
    "CONNECTORS",
    "build_server_config",
    "get_all_connector_names",
    "get_all_connectors",
    "get_connector",
    "get_connectors_with_required_env",
    "get_required_env_for_connectors",
]


def get_connector(name: str) -> ConnectorDefinition | None:
    return CONNECTORS.get(name)


def get_all_connector_names() -> list[str]:
    return list(CONNECTORS)


def get_all_connectors() -> list[ConnectorDefinition]:
    return list(CONNECTORS.values())


def get_connectors_with_required_env() -> list[ConnectorDefinition]:
    return [connector for connector in CONNECTORS.values() if connector.required_env]


def build_server_config(
    definition: ConnectorDefinition,
    values: Mapping[str, str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ServerConfig:
    """Build the concrete .mcp.json entry for a connector.

    ABOUTME: Expands ${VAR} tokens in the connector's template
    ABOUTME: Explicit values win over environ, environ over inline defaults
    """
    return expand_server_config(definition.config, values, environ)


def get_required_env_for_connectors(names: Iterable[str]) -> list[str]:
    """Collect required credential names for connectors, deduplicated in order.

    ABOUTME: Unknown names are skipped
    """
    required: list[str] = []
    for name in names:
        connector = get_connector(name)
        if connector is None:
            continue
        for env_var in connector.required_env:
            if env_var not in required:
                required.append(env_var)
    return required
