# ABOUTME: Update check against the PyPI JSON API
# ABOUTME: Best effort - the CLI reports network problems and still exits 0
import json
import logging
import re
import urllib.request

logger = logging.getLogger(__name__)

PACKAGE_NAME = "mcp-stack"
PYPI_URL = f"https://pypi.org/pypi/{PACKAGE_NAME}/json"
UPDATE_TIMEOUT = 10  # seconds
LEADING_DIGITS = re.compile(r"\d+")


def compare_versions(a: str, b: str) -> int:
    """Compare dotted numeric versions.

    ABOUTME: Missing parts count as 0; a leading 'v' is ignored

    Returns:
        1 if a > b, -1 if a < b, 0 if equal

    Examples:
        >>> compare_versions("0.2.0", "0.1.9")
        1
        >>> compare_versions("v1.0", "1.0.0")
        0
    """
    def parts(version: str) -> list[int]:
        numbers: list[int] = []
        for piece in version.strip().removeprefix("v").split("."):
            match = LEADING_DIGITS.match(piece)
            numbers.append(int(match.group()) if match else 0)
        return numbers

    parts_a = parts(a)
    parts_b = parts(b)
    for idx in range(max(len(parts_a), len(parts_b))):
        num_a = parts_a[idx] if idx < len(parts_a) else 0
        num_b = parts_b[idx] if idx < len(parts_b) else 0
        if num_a > num_b:
            return 1
        if num_a < num_b:
            return -1
    return 0


def fetch_latest_version(timeout: float = UPDATE_TIMEOUT) -> str | None:
    """Return the latest released version on PyPI.

    Returns:
        Version string, or None if the response carries no version

    Raises:
        urllib.error.HTTPError: If PyPI answers with an error status
        urllib.error.URLError: If PyPI can't be reached
        TimeoutError: If the request times out
    """
    logger.debug("GET %s", PYPI_URL)
    with urllib.request.urlopen(PYPI_URL, timeout=timeout) as response:
        data = json.loads(response.read().decode("utf-8"))
    info = data.get("info") if isinstance(data, dict) else None
    if not isinstance(info, dict):
        return None
    version = info.get("version")
    return version if isinstance(version, str) else None
