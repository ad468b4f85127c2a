# ABOUTME: Validation utilities for configured MCP server entries
# ABOUTME: Checks entry shape, command availability and URL format
import shutil
from dataclasses import dataclass
from urllib.parse import urlparse

from mcpstack.models import ServerConfig


@dataclass(frozen=True)
class ValidationError:
    """Represents a validation error or warning.

    ABOUTME: Uses frozen dataclass for immutability
    ABOUTME: Severity level distinguishes between blocking errors and warnings
    """
    server_name: str
    message: str
    severity: str  # 'error' or 'warning'


def validate_command_exists(command: str) -> ValidationError | None:
    """Validate that a command exists on the system.

    ABOUTME: Uses shutil.which() for cross-platform command lookup
    ABOUTME: Returns None if command found, ValidationError otherwise

    Args:
        command: Command name or path to check

    Returns:
        ValidationError if command not found, None otherwise
    """
    if shutil.which(command) is None:
        return ValidationError(
            server_name="",
            message=f"Command not found: {command}",
            severity="error"
        )
    return None


def validate_url(url: str) -> ValidationError | None:
    """Validate that a URL is properly formatted.

    ABOUTME: Requires HTTP or HTTPS scheme and a host
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        return ValidationError(
            server_name="",
            message=f"URL must use HTTP or HTTPS scheme: {url}",
            severity="error"
        )
    if not parsed.netloc:
        return ValidationError(
            server_name="",
            message=f"URL missing host/domain: {url}",
            severity="error"
        )
    return None


def validate_server_config(name: str, server: ServerConfig) -> list[ValidationError]:
    """Validate one .mcp.json entry.

    ABOUTME: An entry needs a stdio shape (command) or an HTTP shape (type + url)
    ABOUTME: Entries carrying both shapes are accepted as-is
    ABOUTME: A missing command is only a warning; it may be installed later

    Args:
        name: Connector name the entry is stored under
        server: Parsed entry

    Returns:
        List of ValidationError instances (empty if valid)
    """
    errors: list[ValidationError] = []

    if not server.is_stdio and not server.is_http:
        errors.append(ValidationError(
            server_name=name,
            message="Entry needs either 'command' or 'type' and 'url'",
            severity="error"
        ))
        return errors

    if server.command:
        cmd_error = validate_command_exists(server.command)
        if cmd_error:
            errors.append(ValidationError(
                server_name=name,
                message=cmd_error.message,
                severity="warning"
            ))

    if server.url:
        url_error = validate_url(server.url)
        if url_error:
            errors.append(ValidationError(
                server_name=name,
                message=url_error.message,
                severity=url_error.severity
            ))

    return errors
