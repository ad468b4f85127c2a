# Supabase connector definition
import json
import urllib.error
from collections.abc import Mapping

from mcpstack.connectors.base import fetch
from mcpstack.models import ConnectorDefinition, ProbeResult, ServerConfig

API_URL = "https://api.supabase.com/v1/projects"


def validate_supabase(environ: Mapping[str, str]) -> ProbeResult:
    """Validate the access token by fetching the configured project.

    ABOUTME: 401 means a bad token, 404 means a bad project reference
    """
    project_ref = environ.get("SUPABASE_PROJECT_REF")
    access_token = environ.get("SUPABASE_ACCESS_TOKEN")

    if not project_ref:
        return ProbeResult(valid=False, message="SUPABASE_PROJECT_REF not set")
    if not access_token:
        return ProbeResult(valid=False, message="SUPABASE_ACCESS_TOKEN not set")

    try:
        status, body = fetch(
            f"{API_URL}/{project_ref}",
            headers={"Authorization": f"Bearer {access_token}"},
        )
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        return ProbeResult(
            valid=False,
            message="Could not connect to Supabase API",
            details=str(e),
        )

    if status == 200:
        try:
            project_name = json.loads(body).get("name") or project_ref
        except (json.JSONDecodeError, AttributeError):
            project_name = project_ref
        return ProbeResult(valid=True, message=f"Connected to project: {project_name}")
    if status == 401:
        return ProbeResult(valid=False, message="Invalid access token")
    if status == 404:
        return ProbeResult(valid=False, message="Project not found")
    return ProbeResult(valid=False, message=f"API error: {status}")


SUPABASE = ConnectorDefinition(
    name="supabase",
    description="Supabase MCP server for database and auth operations",
    config=ServerConfig(
        command="npx",
        args=[
            "-y",
            "@supabase/mcp-server-supabase@latest",
            "--project-ref=${SUPABASE_PROJECT_REF}",
        ],
        env={"SUPABASE_ACCESS_TOKEN": "${SUPABASE_ACCESS_TOKEN}"},
    ),
    required_env=["SUPABASE_PROJECT_REF", "SUPABASE_ACCESS_TOKEN"],
    env_hints={
        "SUPABASE_PROJECT_REF": (
            'Supabase Dashboard → Select Project → Project Settings → General → "Reference ID"'
        ),
        "SUPABASE_ACCESS_TOKEN": (
            "https://supabase.com/dashboard/account/tokens → Generate new token"
        ),
    },
    probe=validate_supabase,
)
