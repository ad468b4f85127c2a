# Health checks for configured connectors
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from mcpstack.connectors import get_connector
from mcpstack.models import ConfigFile, DoctorResult, ServerConfig
from mcpstack.utils.env import check_required_env
from mcpstack.utils.validation import validate_server_config

logger = logging.getLogger(__name__)


@dataclass
class DoctorReport:
    """Report from a doctor run.

    ABOUTME: One DoctorResult per configured connector, in file order
    ABOUTME: Exit status is failure if any connector reached 'error'
    """
    results: list[DoctorResult] = field(default_factory=list)

    def count(self, status: str) -> int:
        return sum(1 for result in self.results if result.status == status)

    @property
    def healthy_count(self) -> int:
        return self.count("healthy")

    @property
    def warning_count(self) -> int:
        return self.count("warning")

    @property
    def error_count(self) -> int:
        return self.count("error")

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0


def check_connector(
    name: str, server: ServerConfig, environ: Mapping[str, str]
) -> DoctorResult:
    """Run every check for one configured connector.

    ABOUTME: Checks run in a fixed order; status only ever escalates
    ABOUTME: Probe failures and exceptions downgrade to 'warning', never abort

    Args:
        name: Connector name as configured in .mcp.json
        server: The configured entry
        environ: Credential lookup used for required env checks and the probe

    Returns:
        DoctorResult with status and the list of checks performed
    """
    result = DoctorResult(connector=name)
    connector = get_connector(name)

    if connector is None:
        result.escalate("warning")
        result.add_check(
            "Known MCP", False, "Unknown MCP (not in registry, but may still work)"
        )
        return result

    for error in validate_server_config(name, server):
        result.escalate("error" if error.severity == "error" else "warning")
        result.add_check("Config", False, error.message)

    if connector.required_env:
        missing, present = check_required_env(connector.required_env, environ)
        if missing:
            result.escalate("error")
            result.add_check("Credentials", False, f"Missing: {', '.join(missing)}")
        else:
            result.add_check(
                "Credentials", True, f"All required set ({', '.join(present)})"
            )
    elif not connector.setup_hint:
        result.add_check("Credentials", True, "No credentials required")

    if connector.setup_hint:
        result.add_check("Browser auth", True, "Run /mcp in Claude Code to authenticate")

    configured_values = {**(server.env or {}), **(server.headers or {})}
    for env_var in connector.optional_env:
        configured = bool(configured_values.get(env_var))
        result.add_check(
            "API Key", True, "configured" if configured else "not set (optional)"
        )

    if connector.probe is not None:
        try:
            probe_result = connector.probe(environ)
        except Exception as e:
            logger.debug("Probe for %s raised", name, exc_info=True)
            result.escalate("warning")
            result.add_check("Connection", False, f"Validation error: {e}")
        else:
            if not probe_result.valid:
                result.escalate("warning")
            result.add_check("Connection", probe_result.valid, probe_result.message)

    return result


def run_doctor(
    config: ConfigFile,
    environ: Mapping[str, str],
    on_check: Callable[[str], None] | None = None,
) -> DoctorReport:
    """Check every configured connector, one after another.

    Args:
        config: Loaded .mcp.json
        environ: Credential lookup
        on_check: Optional callback invoked with each name before it is checked

    Returns:
        DoctorReport with one result per configured connector
    """
    report = DoctorReport()
    for name, server in config.servers.items():
        if on_check is not None:
            on_check(name)
        report.results.append(check_connector(name, server, environ))
    return report
