# Context7 connector definition
from collections.abc import Mapping

from mcpstack.connectors.base import check_endpoint_reachable
from mcpstack.models import ConnectorDefinition, ProbeResult, ServerConfig

ENDPOINT = "https://mcp.context7.com/mcp"


def validate_context7(environ: Mapping[str, str]) -> ProbeResult:
    return check_endpoint_reachable(ENDPOINT, "Context7", "Context7 MCP endpoint reachable")


CONTEXT7 = ConnectorDefinition(
    name="context7",
    description="Context7 MCP server for documentation and context lookup",
    config=ServerConfig(
        type="http",
        url=ENDPOINT,
        headers={"CONTEXT7_API_KEY": "${CONTEXT7_API_KEY}"},
    ),
    optional_env=["CONTEXT7_API_KEY"],
    env_hints={
        "CONTEXT7_API_KEY": (
            "Get a free API key at https://context7.com/dashboard for higher rate limits"
        ),
    },
    setup_hint="Auth: Run /mcp in Claude Code → Select context7 → Authenticate (opens browser)",
    probe=validate_context7,
)
