# ABOUTME: Project detection - suggests connectors from marker files and declared dependencies
# ABOUTME: Rules are checked in order; the first rule to suggest a connector records the reason
import json
import logging
import re
from pathlib import Path
from typing import Any

import tomli

from mcpstack.models import DetectionReport, DetectionRule

logger = logging.getLogger(__name__)

DETECTION_RULES: list[DetectionRule] = [
    # Vercel
    DetectionRule(
        files=["next.config.js", "next.config.ts", "next.config.mjs", "vercel.json"],
        suggest=["vercel"],
    ),
    # Supabase
    DetectionRule(files=["supabase/config.toml", "supabase/.gitignore"], suggest=["supabase"]),
    DetectionRule(
        dependencies=["@supabase/supabase-js", "@supabase/ssr", "supabase"],
        suggest=["supabase"],
    ),
    # Playwright
    DetectionRule(files=["playwright.config.ts", "playwright.config.js"], suggest=["playwright"]),
    DetectionRule(
        dependencies=["@playwright/test", "playwright", "pytest-playwright"],
        suggest=["playwright"],
    ),
    # Puppeteer
    DetectionRule(files=["puppeteer.config.js", "puppeteer.config.ts"], suggest=["puppeteer"]),
    DetectionRule(
        dependencies=["puppeteer", "puppeteer-core", "pyppeteer"],
        suggest=["puppeteer"],
    ),
    # GitHub
    DetectionRule(files=[".github/workflows", ".github"], suggest=["github"]),
    # Chrome DevTools, usually alongside a browser driver
    DetectionRule(dependencies=["puppeteer", "playwright"], suggest=["chrome-devtools"]),
    # TypeScript projects benefit from library docs lookup
    DetectionRule(files=["tsconfig.json", "jsconfig.json"], suggest=["context7"]),
]

# ABOUTME: Leading distribution name of a PEP 508 requirement string
REQUIREMENT_NAME = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)")
NAME_SEPARATORS = re.compile(r"[-_.]+")

# ABOUTME: Fixed decision list for stack suggestion; order matters
FULLSTACK_MCPS = ("supabase", "vercel", "github", "playwright", "context7")
FULLSTACK_THRESHOLD = 4


def _package_json_dependencies(project_dir: Path) -> list[str]:
    path = project_dir / "package.json"
    try:
        with open(path, encoding="utf-8") as f:
            pkg = json.load(f)
        return [
            *(pkg.get("dependencies") or {}).keys(),
            *(pkg.get("devDependencies") or {}).keys(),
        ]
    except (OSError, ValueError, AttributeError) as e:
        if path.exists():
            logger.debug("Could not read %s: %s", path, e)
        return []


def normalize_name(name: str) -> str:
    """Normalize a Python distribution name (lowercase, runs of -_. become -)."""
    return NAME_SEPARATORS.sub("-", name).lower()


def _requirement_names(requirements: Any) -> list[str]:
    names: list[str] = []
    if not isinstance(requirements, list):
        return names
    for requirement in requirements:
        if not isinstance(requirement, str):
            continue
        match = REQUIREMENT_NAME.match(requirement)
        if match:
            names.append(normalize_name(match.group(1)))
    return names


def _pyproject_dependencies(project_dir: Path) -> list[str]:
    path = project_dir / "pyproject.toml"
    try:
        with open(path, "rb") as f:
            data = tomli.load(f)
    except (OSError, UnicodeDecodeError, tomli.TOMLDecodeError) as e:
        if path.exists():
            logger.debug("Could not read %s: %s", path, e)
        return []

    project = data.get("project")
    if not isinstance(project, dict):
        project = {}
    extras = project.get("optional-dependencies")
    groups = data.get("dependency-groups")

    names = _requirement_names(project.get("dependencies"))
    for extra in (extras.values() if isinstance(extras, dict) else []):
        names.extend(_requirement_names(extra))
    for group in (groups.values() if isinstance(groups, dict) else []):
        names.extend(_requirement_names(group))
    return names


def get_project_dependencies(project_dir: Path) -> list[str]:
    """Return declared runtime and development dependency names.

    ABOUTME: Union of package.json (dependencies + devDependencies) and pyproject.toml
    ABOUTME: Best effort - an unreadable manifest contributes nothing, never raises

    Args:
        project_dir: Project root to scan

    Returns:
        Dependency names, possibly with duplicates
    """
    return _package_json_dependencies(project_dir) + _pyproject_dependencies(project_dir)


def detect_project_connectors(project_dir: Path | None = None) -> DetectionReport:
    """Detect the project's stack and suggest connectors.

    ABOUTME: Uses existence checks only, so results don't depend on directory listing order
    ABOUTME: Within a rule, files are checked before dependencies

    Args:
        project_dir: Project root (default: cwd)

    Returns:
        DetectionReport with first-seen reasons and deduplicated suggestions
    """
    project_dir = project_dir if project_dir is not None else Path.cwd()
    dependencies = set(get_project_dependencies(project_dir))
    report = DetectionReport()

    for rule in DETECTION_RULES:
        for marker in rule.files:
            if (project_dir / marker).exists():
                for connector in rule.suggest:
                    report.add(connector, f"Found {marker}")

        for dependency in rule.dependencies:
            if dependency in dependencies:
                for connector in rule.suggest:
                    report.add(connector, f"Found dependency {dependency}")

    logger.debug("Detected connectors: %s", report.suggested)
    return report


def suggest_stack(suggested: list[str]) -> str | None:
    """Map suggested connectors to a stack name.

    ABOUTME: First matching predicate wins; returns None if nothing matches
    """
    def has(name: str) -> bool:
        return name in suggested

    if sum(1 for name in FULLSTACK_MCPS if has(name)) >= FULLSTACK_THRESHOLD:
        return "fullstack"

    if has("supabase") and has("vercel"):
        return "saas-ts"

    if has("playwright") or has("puppeteer"):
        return "automation"

    if has("vercel") or has("supabase"):
        return "ai-builder"

    return None
