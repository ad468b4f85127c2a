# GitHub connector definition
import json
import urllib.error
from collections.abc import Mapping

from mcpstack.connectors.base import fetch
from mcpstack.models import ConnectorDefinition, ProbeResult, ServerConfig

API_USER_URL = "https://api.github.com/user"


def validate_github(environ: Mapping[str, str]) -> ProbeResult:
    """Check GITHUB_TOKEN against the authenticated-user endpoint."""
    token = environ.get("GITHUB_TOKEN")
    if not token:
        return ProbeResult(valid=False, message="GITHUB_TOKEN not set")

    try:
        status, body = fetch(API_USER_URL, headers={"Authorization": f"Bearer {token}"})
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        return ProbeResult(
            valid=False,
            message="Could not connect to GitHub API",
            details=str(e),
        )

    if status == 200:
        try:
            login = json.loads(body).get("login", "unknown")
        except (json.JSONDecodeError, AttributeError):
            login = "unknown"
        return ProbeResult(valid=True, message=f"Authenticated as: {login}")
    if status == 401:
        return ProbeResult(valid=False, message="Invalid or expired token")
    return ProbeResult(valid=False, message=f"GitHub API error: {status}")


GITHUB = ConnectorDefinition(
    name="github",
    description="GitHub MCP server for repository operations",
    config=ServerConfig(
        command="npx",
        args=["-y", "@modelcontextprotocol/server-github"],
        env={"GITHUB_PERSONAL_ACCESS_TOKEN": "${GITHUB_TOKEN}"},
    ),
    required_env=["GITHUB_TOKEN"],
    env_hints={
        "GITHUB_TOKEN": (
            "https://github.com/settings/tokens → Generate new token (classic)"
            " → Select scopes: repo, read:org"
        ),
    },
    probe=validate_github,
)
