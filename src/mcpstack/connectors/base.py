# Shared probe helpers for connector definitions
import logging
import subprocess
import urllib.error
import urllib.request
from collections.abc import Mapping

from mcpstack.models import ProbeResult

logger = logging.getLogger(__name__)

HTTP_TIMEOUT = 10  # seconds
PROBE_TIMEOUT = 10  # seconds
USER_AGENT = "mcp-stack"


def fetch(
    url: str,
    method: str = "GET",
    headers: Mapping[str, str] | None = None,
    timeout: float = HTTP_TIMEOUT,
) -> tuple[int, bytes]:
    """Send one HTTP request and return (status, body).

    ABOUTME: Error statuses are returned, not raised; callers map them to messages
    ABOUTME: Connection failures and timeouts propagate (URLError, TimeoutError, OSError)
    """
    request = urllib.request.Request(url, method=method)
    request.add_header("User-Agent", USER_AGENT)
    for key, value in (headers or {}).items():
        request.add_header(key, value)

    logger.debug("%s %s", method, url)
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            return response.status, response.read()
    except urllib.error.HTTPError as e:
        logger.debug("%s %s -> HTTP %s", method, url, e.code)
        return e.code, b""


def check_endpoint_reachable(url: str, label: str, reachable_message: str) -> ProbeResult:
    """HEAD the endpoint; any HTTP response at all means the server is up."""
    try:
        fetch(url, method="HEAD")
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        return ProbeResult(
            valid=False,
            message=f"Could not reach {label} MCP endpoint",
            details=str(e),
        )
    return ProbeResult(valid=True, message=reachable_message)


def check_npx_package(
    package: str,
    label: str,
    expected_output: str | None = None,
    timeout: float = PROBE_TIMEOUT,
) -> ProbeResult:
    """Check an npm package resolves by running `npx --yes <package> --help`.

    ABOUTME: A timeout counts as available; first-time downloads can be slow
    ABOUTME: With expected_output, a non-zero exit passes only if the text appears

    Args:
        package: npm package spec, e.g. '@playwright/mcp@latest'
        label: Display name used in messages
        expected_output: Optional marker text proving the package ran
        timeout: Seconds to wait before giving up

    Returns:
        ProbeResult describing availability
    """
    cmd = ["npx", "--yes", package, "--help"]
    try:
        completed = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return ProbeResult(
            valid=True,
            message=f"{label} MCP package assumed available (timeout)",
        )
    except OSError as e:
        return ProbeResult(valid=False, message="Failed to spawn npx", details=str(e))

    if expected_output is None:
        return ProbeResult(valid=True, message=f"{label} MCP package available")

    output = (completed.stdout or "") + (completed.stderr or "")
    if completed.returncode == 0 or expected_output in output:
        return ProbeResult(valid=True, message=f"{label} MCP package available")
    return ProbeResult(
        valid=False,
        message=f"Could not verify {label} MCP package",
        details=output,
    )
