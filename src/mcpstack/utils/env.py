# Template expansion and credential helpers
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import replace

from mcpstack.models import ServerConfig

logger = logging.getLogger(__name__)

# ABOUTME: Pattern matches ${NAME} and ${NAME:-default}; the expression is split on ':-'
TOKEN_PATTERN = re.compile(r'\$\{([^}]+)\}')

# ABOUTME: Substrings that mark a credential name as secret (masked input and display)
SENSITIVE_MARKERS = ("TOKEN", "KEY", "SECRET", "PASSWORD")


def expand_template(
    value: str,
    values: Mapping[str, str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Expand ${VAR} and ${VAR:-default} tokens in a string.

    ABOUTME: Lookup order is explicit values, then environ, then inline default, then ''
    ABOUTME: Strings without tokens are returned unchanged

    Args:
        value: String potentially containing substitution tokens
        values: Explicitly supplied values (e.g. entered at a prompt)
        environ: Environment lookup; nothing is read from os.environ here

    Returns:
        String with every token replaced

    Examples:
        >>> expand_template("--project-ref=${REF}", values={"REF": "abc"})
        '--project-ref=abc'
        >>> expand_template("${PORT:-3000}", environ={})
        '3000'
    """
    values = values or {}
    environ = environ or {}

    def replace_token(match: re.Match[str]) -> str:
        name, separator, default = match.group(1).partition(":-")
        if name in values:
            return values[name]
        if name in environ:
            return environ[name]
        if separator:
            return default
        logger.debug("No value for '%s', substituting empty string", name)
        return ""

    return TOKEN_PATTERN.sub(replace_token, value)


def expand_server_config(
    template: ServerConfig,
    values: Mapping[str, str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ServerConfig:
    """Build a concrete ServerConfig from a connector template.

    ABOUTME: Expands tokens in args, env values, url and header values
    ABOUTME: Returns a new object; the template is left untouched
    """
    def expand(text: str) -> str:
        return expand_template(text, values, environ)

    return replace(
        template,
        args=[expand(arg) for arg in template.args] if template.args is not None else None,
        env={key: expand(val) for key, val in template.env.items()} if template.env is not None else None,
        url=expand(template.url) if template.url is not None else None,
        headers=(
            {key: expand(val) for key, val in template.headers.items()}
            if template.headers is not None
            else None
        ),
    )


def check_required_env(
    required: Iterable[str], environ: Mapping[str, str]
) -> tuple[list[str], list[str]]:
    """Split credential names into (missing, present).

    An empty value counts as missing.
    """
    missing: list[str] = []
    present: list[str] = []
    for name in required:
        if environ.get(name):
            present.append(name)
        else:
            missing.append(name)
    return missing, present


def find_missing_credentials(
    required: Iterable[str],
    optional: Iterable[str],
    known: Mapping[str, str],
) -> tuple[list[str], list[str]]:
    """Return the (required, optional) names that have no known value yet."""
    missing_required, _ = check_required_env(required, known)
    missing_optional, _ = check_required_env(optional, known)
    return missing_required, missing_optional


def is_sensitive(name: str) -> bool:
    """Whether a credential name should be masked on input and display."""
    upper = name.upper()
    return any(marker in upper for marker in SENSITIVE_MARKERS)


def mask_value(value: str, visible_chars: int = 4) -> str:
    """Mask a secret for display, keeping only a short prefix.

    Examples:
        >>> mask_value("ghp_abcdefghijkl")
        'ghp_********'
        >>> mask_value("abc")
        '***'
    """
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * min(8, len(value) - visible_chars)
