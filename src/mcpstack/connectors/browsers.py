# Browser automation connector definitions (Playwright, Puppeteer, Chrome DevTools)
from collections.abc import Mapping

from mcpstack.connectors.base import check_npx_package
from mcpstack.models import ConnectorDefinition, ProbeResult, ServerConfig

PLAYWRIGHT_PACKAGE = "@playwright/mcp@latest"
PUPPETEER_PACKAGE = "@modelcontextprotocol/server-puppeteer"
CHROME_DEVTOOLS_PACKAGE = "chrome-devtools-mcp@latest"


def validate_playwright(environ: Mapping[str, str]) -> ProbeResult:
    return check_npx_package(PLAYWRIGHT_PACKAGE, "Playwright", expected_output="playwright")


def validate_puppeteer(environ: Mapping[str, str]) -> ProbeResult:
    # Any response at all means the package resolved
    return check_npx_package(PUPPETEER_PACKAGE, "Puppeteer")


def validate_chrome_devtools(environ: Mapping[str, str]) -> ProbeResult:
    return check_npx_package(CHROME_DEVTOOLS_PACKAGE, "Chrome DevTools")


PLAYWRIGHT = ConnectorDefinition(
    name="playwright",
    description="Playwright MCP server for browser automation",
    config=ServerConfig(command="npx", args=[PLAYWRIGHT_PACKAGE]),
    probe=validate_playwright,
)

PUPPETEER = ConnectorDefinition(
    name="puppeteer",
    description="Puppeteer MCP server for browser automation",
    config=ServerConfig(command="npx", args=["-y", PUPPETEER_PACKAGE]),
    probe=validate_puppeteer,
)

CHROME_DEVTOOLS = ConnectorDefinition(
    name="chrome-devtools",
    description="Chrome DevTools MCP server for browser debugging",
    config=ServerConfig(command="npx", args=[CHROME_DEVTOOLS_PACKAGE]),
    probe=validate_chrome_devtools,
)
