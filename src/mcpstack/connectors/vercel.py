# Vercel connector definition
from collections.abc import Mapping

from mcpstack.connectors.base import check_endpoint_reachable
from mcpstack.models import ConnectorDefinition, ProbeResult, ServerConfig

ENDPOINT = "https://mcp.vercel.com"


def validate_vercel(environ: Mapping[str, str]) -> ProbeResult:
    # Authentication happens in the browser; only reachability can be checked
    return check_endpoint_reachable(
        ENDPOINT,
        "Vercel",
        "Vercel MCP endpoint reachable (authentication via browser)",
    )


VERCEL = ConnectorDefinition(
    name="vercel",
    description="Vercel MCP server for deployment and project management",
    config=ServerConfig(type="http", url=ENDPOINT),
    setup_hint="Auth: Run /mcp in Claude Code → Select vercel → Authenticate (opens browser)",
    probe=validate_vercel,
)
