# Project initialization from a stack template or detection
import argparse
import os
from pathlib import Path

from mcpstack.config import config_exists, get_configured_names, read_config, write_config
from mcpstack.connectors import build_server_config, get_all_connectors, get_connector
from mcpstack.detection import detect_project_connectors, suggest_stack
from mcpstack.models import ConfigFile
from mcpstack.prompts import (
    BOLD,
    CYAN,
    GRAY,
    GREEN,
    RED,
    RESET,
    YELLOW,
    collect_credentials,
    confirm,
    interactive_select,
    select_one,
)
from mcpstack.stacks import get_all_stack_names, get_all_stacks, get_stack

CUSTOM_CHOICE = "__custom__"


def select_stack() -> str | None:
    """Ask for a stack template; None means pick connectors individually."""
    choices = [(stack.name, f"{stack.name} - {stack.description}") for stack in get_all_stacks()]
    choices.append((CUSTOM_CHOICE, "Custom (select individual MCPs)"))
    selection = select_one("Select a stack template:", choices)
    return None if selection == CUSTOM_CHOICE else selection


def select_connectors(exclude: set[str] | None = None) -> list[str]:
    """Multi-select connectors from the registry."""
    exclude = exclude or set()
    connectors = [c for c in get_all_connectors() if c.name not in exclude]
    return interactive_select(
        [c.name for c in connectors],
        labels={c.name: f"{c.name} - {c.description}" for c in connectors},
        title="Select MCPs to add:",
    )


def _detected_connectors(project_dir: Path) -> list[str]:
    print("Detecting project type...")
    report = detect_project_connectors(project_dir)

    if not report.detected:
        print(f"{YELLOW}Could not auto-detect project type.{RESET}")
        print()
        return []

    print(f"{GREEN}Detected project configuration:{RESET}")
    print()
    for detection in report.detected:
        print(f"{GRAY}  {detection.connector}: {detection.reason}{RESET}")

    suggested_stack = suggest_stack(report.suggested)
    if suggested_stack:
        print()
        print(f"{CYAN}Suggested stack: {suggested_stack}{RESET}")

    print()
    if confirm(f"Add detected MCPs ({', '.join(report.suggested)})?", default=True):
        return list(report.suggested)
    return []


def cmd_init(args: argparse.Namespace) -> int:
    """Create or extend .mcp.json from a stack, detection, or a manual pick.

    ABOUTME: Existing config triggers a merge/replace/cancel choice unless --force
    ABOUTME: --detect proposes detected connectors before falling back to stacks
    ABOUTME: Returns exit code (0 for success or cancel, 1 for error)
    """
    from mcpstack import __version__

    print(f"{BOLD}mcp-stack init v{__version__}{RESET}")
    print()

    project_dir = Path.cwd()
    force = bool(args.force)

    if config_exists(project_dir) and not force:
        try:
            existing = get_configured_names(project_dir)
        except (ValueError, OSError) as e:
            print(f"{RED}Error: {e}{RESET}")
            return 1

        print(f"{YELLOW}A .mcp.json file already exists.{RESET}")
        print(f"{GRAY}Configured MCPs: {', '.join(existing) or 'none'}{RESET}")
        print()
        action = select_one(
            "What would you like to do?",
            [
                ("merge", "Merge with existing config"),
                ("replace", "Replace existing config"),
                ("cancel", "Cancel"),
            ],
        )
        if action == "cancel":
            print()
            print(f"{GRAY}Aborted.{RESET}")
            return 0
        if action == "replace":
            force = True

    names: list[str] = []

    if args.detect:
        names = _detected_connectors(project_dir)

    if not names:
        if args.stack:
            stack = get_stack(args.stack)
            if stack is None:
                print(f"{RED}Unknown stack: {args.stack}{RESET}")
                print(f"{GRAY}Available stacks: {', '.join(get_all_stack_names())}{RESET}")
                return 1
            names = list(stack.mcps)
            print(f"{CYAN}Using stack: {stack.name}{RESET}")
            print(f"{GRAY}{stack.description}{RESET}")
            print()
        else:
            selected_stack = select_stack()
            stack = get_stack(selected_stack) if selected_stack else None
            if stack is not None:
                names = list(stack.mcps)
                print()
                print(f"{GRAY}Selected: {stack.description}{RESET}")
                print()
            else:
                names = select_connectors()

    if not names:
        print()
        print(f"{YELLOW}No MCPs selected. Aborted.{RESET}")
        return 0

    environ = os.environ
    connectors = [c for c in (get_connector(name) for name in names) if c is not None]

    values: dict[str, str] = {}
    for connector in connectors:
        values.update(collect_credentials(connector, environ, skip_prompts=args.skip_prompts))

    print("Writing .mcp.json...")
    try:
        existing_config = None if force else read_config(project_dir)
        config = ConfigFile(servers=dict(existing_config.servers) if existing_config else {})
        for connector in connectors:
            config.servers[connector.name] = build_server_config(connector, values, environ)
        write_config(config, project_dir)
    except (ValueError, OSError) as e:
        print(f"{RED}Failed to write .mcp.json: {e}{RESET}")
        return 1

    print(f"{GREEN}Created .mcp.json{RESET}")
    print()
    print(f"{BOLD}Added MCPs:{RESET}")
    for connector in connectors:
        print(f"{GREEN}  ✓ {connector.name}{RESET}")
        if connector.setup_hint:
            print(f"{CYAN}    {connector.setup_hint}{RESET}")

    print()
    print(f"{GRAY}Run `mcp-stack doctor` to verify connections.{RESET}")
    return 0
