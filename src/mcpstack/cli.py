# CLI interface for mcpstack
import argparse
import logging
import os
import sys
import urllib.error
from pathlib import Path

from mcpstack import __version__
from mcpstack.completion import LIST_TYPES, SHELLS, generate_completion
from mcpstack.config import (
    ConfigFile,
    add_server_to_config,
    config_exists,
    get_configured_names,
    read_config,
    remove_server_from_config,
    write_config,
)
from mcpstack.connectors import (
    build_server_config,
    get_all_connector_names,
    get_all_connectors,
    get_connector,
)
from mcpstack.detection import detect_project_connectors, suggest_stack
from mcpstack.doctor import run_doctor
from mcpstack.init import cmd_init, select_connectors
from mcpstack.models import ConnectorDefinition
from mcpstack.prompts import (
    BLUE,
    BOLD,
    CYAN,
    GRAY,
    GREEN,
    MAGENTA,
    RED,
    RESET,
    YELLOW,
    collect_credentials,
    confirm,
    select_one,
)
from mcpstack.stacks import get_all_stack_names, get_all_stacks, get_stack
from mcpstack.update import PACKAGE_NAME, compare_versions, fetch_latest_version

logger = logging.getLogger(__name__)

# ABOUTME: Exit codes - 0 for success or a benign no-op, 1 for any failure
EXIT_SUCCESS = 0
EXIT_FAILURE = 1

VERIFY_HINT = "Verify: Run `claude mcp list` in CLI or `/mcp` in Claude Code"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def print_header(command: str) -> None:
    print(f"{BOLD}mcp-stack {command} v{__version__}{RESET}")
    print()


def print_connector_details(connector: ConnectorDefinition) -> None:
    """Show a connector's description and what it needs to authenticate."""
    print(f"{CYAN}  {connector.name}{RESET}")
    print(f"{GRAY}    {connector.description}{RESET}")

    if connector.required_env:
        print(f"{YELLOW}    credentials: {', '.join(connector.required_env)}{RESET}")
    if connector.optional_env:
        print(f"{BLUE}    optional: {', '.join(connector.optional_env)}{RESET}")
    if connector.setup_hint:
        print(f"{MAGENTA}    auth: browser (via /mcp in Claude Code){RESET}")
    if not connector.needs_credentials and not connector.setup_hint:
        print(f"{GREEN}    no credentials required{RESET}")
    print()


def _add_connector(
    connector: ConnectorDefinition,
    configured: list[str],
    force: bool,
    skip_prompts: bool,
    project_dir: Path,
) -> bool:
    """Add one connector; returns False only on a write failure.

    ABOUTME: Without --force, an already configured connector needs overwrite confirmation
    """
    if connector.name in configured and not force:
        print(f"{YELLOW}{connector.name} is already configured.{RESET}")
        if not confirm("Do you want to overwrite the existing configuration?", default=False):
            print(f"{GRAY}Skipped.{RESET}")
            print()
            return True

    environ = os.environ
    values = collect_credentials(connector, environ, skip_prompts=skip_prompts)

    try:
        server = build_server_config(connector, values, environ)
        add_server_to_config(connector.name, server, project_dir)
    except (ValueError, OSError) as e:
        print(f"{RED}Failed to add {connector.name}: {e}{RESET}")
        return False

    print(f"{GREEN}✓ Added {connector.name} to .mcp.json{RESET}")
    if connector.setup_hint:
        print(f"{CYAN}  {connector.setup_hint}{RESET}")
    print()
    return True


def cmd_add(args: argparse.Namespace) -> int:
    """Execute add command.

    ABOUTME: With no names, offers an interactive pick of not-yet-configured connectors
    ABOUTME: Unknown names fail the whole command before anything is written
    """
    print_header("add")
    project_dir = Path.cwd()

    try:
        configured = get_configured_names(project_dir)
    except (ValueError, OSError) as e:
        print(f"{RED}Error: could not read .mcp.json: {e}{RESET}")
        return EXIT_FAILURE

    names: list[str] = list(args.names or [])
    if not names:
        exclude = set() if args.force else set(configured)
        if not set(get_all_connector_names()) - exclude:
            print(f"{YELLOW}All available MCPs are already configured.{RESET}")
            print(f"{GRAY}Use --force to reconfigure existing MCPs.{RESET}")
            return EXIT_SUCCESS
        names = select_connectors(exclude)
        if not names:
            print(f"{GRAY}No MCPs selected.{RESET}")
            return EXIT_SUCCESS

    unknown = [name for name in names if get_connector(name) is None]
    if unknown:
        print(f"{RED}Unknown MCP: {', '.join(unknown)}{RESET}")
        print(f"{GRAY}Available MCPs: {', '.join(get_all_connector_names())}{RESET}")
        return EXIT_FAILURE

    if len(names) > 1:
        print(f"{BOLD}Adding {len(names)} MCPs...{RESET}")
        print()

    connectors = [
        connector
        for connector in (get_connector(name) for name in dict.fromkeys(names))
        if connector is not None
    ]

    failed = 0
    for connector in connectors:
        if not _add_connector(connector, configured, args.force, args.skip_prompts, project_dir):
            failed += 1

    print(f"{GRAY}{VERIFY_HINT}{RESET}")
    if len(names) > 1:
        print(f"{GRAY}Health check: Run `mcp-stack doctor` to verify connections{RESET}")

    return EXIT_FAILURE if failed else EXIT_SUCCESS


def _load_for_removal(project_dir: Path) -> list[str] | None:
    """Configured names, or None after printing why removal can't proceed."""
    if not config_exists(project_dir):
        print(f"{YELLOW}No .mcp.json found in current directory.{RESET}")
        print(f"{GRAY}Run `mcp-stack init` or `mcp-stack add <mcp>` first.{RESET}")
        return None
    try:
        return get_configured_names(project_dir)
    except (ValueError, OSError) as e:
        print(f"{RED}Error: could not read .mcp.json: {e}{RESET}")
        return None


def remove_one(name: str | None, force: bool, project_dir: Path) -> int:
    configured = _load_for_removal(project_dir)
    if configured is None:
        return EXIT_FAILURE
    if not configured:
        print(f"{YELLOW}No MCPs configured in .mcp.json.{RESET}")
        return EXIT_SUCCESS

    if name is None:
        name = select_one("Select MCP to remove:", [(n, n) for n in configured])

    if name not in configured:
        print(f"{RED}MCP \"{name}\" is not configured in .mcp.json.{RESET}")
        print(f"{GRAY}Configured MCPs: {', '.join(configured)}{RESET}")
        return EXIT_FAILURE

    if not force and not confirm(f"Remove {name} from .mcp.json?", default=False):
        print(f"{GRAY}Cancelled.{RESET}")
        return EXIT_SUCCESS

    try:
        remove_server_from_config(name, project_dir)
    except (ValueError, OSError) as e:
        print(f"{RED}Failed to remove {name}: {e}{RESET}")
        return EXIT_FAILURE

    print(f"{GREEN}✓ Removed {name} from .mcp.json{RESET}")
    print()
    print(f"{GRAY}{VERIFY_HINT}{RESET}")
    return EXIT_SUCCESS


def remove_all(force: bool, project_dir: Path) -> int:
    configured = _load_for_removal(project_dir)
    if configured is None:
        return EXIT_FAILURE
    if not configured:
        print(f"{YELLOW}No MCPs configured in .mcp.json.{RESET}")
        return EXIT_SUCCESS

    if not force:
        print(f"{YELLOW}This will remove all {len(configured)} configured MCP(s):{RESET}")
        for name in configured:
            print(f"{GRAY}  - {name}{RESET}")
        if not confirm("Are you sure?", default=False):
            print(f"{GRAY}Cancelled.{RESET}")
            return EXIT_SUCCESS

    try:
        write_config(ConfigFile(), project_dir)
    except OSError as e:
        print(f"{RED}Failed to remove MCPs: {e}{RESET}")
        return EXIT_FAILURE

    print(f"{GREEN}✓ Removed {len(configured)} MCP(s) from .mcp.json{RESET}")
    print()
    print(f"{GRAY}{VERIFY_HINT}{RESET}")
    return EXIT_SUCCESS


def remove_stack(stack_name: str | None, force: bool, project_dir: Path) -> int:
    """Remove every configured connector that belongs to a stack."""
    configured = _load_for_removal(project_dir)
    if configured is None:
        return EXIT_FAILURE

    if not stack_name:
        stack_name = select_one(
            "Select stack to remove:",
            [(stack.name, f"{stack.name} - {stack.description}") for stack in get_all_stacks()],
        )

    stack = get_stack(stack_name)
    if stack is None:
        print(f"{RED}Unknown stack: {stack_name}{RESET}")
        print(f"{GRAY}Available stacks: {', '.join(get_all_stack_names())}{RESET}")
        return EXIT_FAILURE

    to_remove = [name for name in stack.mcps if name in configured]
    if not to_remove:
        print(f"{YELLOW}None of the MCPs in stack {stack.name} are configured.{RESET}")
        return EXIT_SUCCESS

    if not force:
        print(f"{YELLOW}This will remove {len(to_remove)} MCP(s) from stack {stack.name}:{RESET}")
        for name in to_remove:
            print(f"{GRAY}  - {name}{RESET}")
        if not confirm("Are you sure?", default=False):
            print(f"{GRAY}Cancelled.{RESET}")
            return EXIT_SUCCESS

    try:
        for name in to_remove:
            remove_server_from_config(name, project_dir)
    except (ValueError, OSError) as e:
        print(f"{RED}Failed to remove MCPs: {e}{RESET}")
        return EXIT_FAILURE

    print(f"{GREEN}✓ Removed {len(to_remove)} MCP(s) from .mcp.json{RESET}")
    print()
    print(f"{GRAY}{VERIFY_HINT}{RESET}")
    return EXIT_SUCCESS


def cmd_remove(args: argparse.Namespace) -> int:
    """Execute remove command.

    ABOUTME: --all and --stack take precedence over a single name
    ABOUTME: Asks for confirmation unless --force
    """
    print_header("remove")
    project_dir = Path.cwd()

    if args.all:
        return remove_all(args.force, project_dir)
    if args.stack is not None:
        return remove_stack(args.stack or None, args.force, project_dir)
    return remove_one(args.name, args.force, project_dir)


def list_stacks() -> None:
    print(f"{BOLD}Available Stacks:{RESET}")
    print()
    for stack in get_all_stacks():
        print(f"{CYAN}  {stack.name}{RESET}")
        print(f"{GRAY}    {stack.description}{RESET}")
        print(f"{GRAY}    MCPs: {', '.join(stack.mcps)}{RESET}")
        print()


def list_connectors() -> None:
    print(f"{BOLD}Available MCPs:{RESET}")
    print()
    for connector in get_all_connectors():
        print_connector_details(connector)


def list_configured(project_dir: Path) -> int:
    try:
        configured = get_configured_names(project_dir)
    except (ValueError, OSError) as e:
        print(f"{RED}Error: could not read .mcp.json: {e}{RESET}")
        return EXIT_FAILURE

    if not configured:
        print(f"{YELLOW}No MCPs configured in this project.{RESET}")
        print(f"{GRAY}Run `mcp-stack init` to get started.{RESET}")
        print()
        return EXIT_SUCCESS

    print(f"{BOLD}Configured MCPs:{RESET}")
    print()
    for name in configured:
        print(f"{GREEN}  ✓ {name}{RESET}")
    print()
    return EXIT_SUCCESS


def cmd_list(args: argparse.Namespace) -> int:
    """Execute list command.

    ABOUTME: Without a type, lists stacks, connectors, and configured connectors
    """
    print_header("list")
    project_dir = Path.cwd()

    if args.type == "stacks":
        list_stacks()
        return EXIT_SUCCESS
    if args.type == "mcps":
        list_connectors()
        return EXIT_SUCCESS
    if args.type == "configured":
        return list_configured(project_dir)

    list_stacks()
    list_connectors()
    return list_configured(project_dir)


def cmd_stacks(args: argparse.Namespace) -> int:
    """Browse a stack and show its connectors."""
    print_header("stacks")

    stack_name = select_one(
        "Select a stack to view MCPs:",
        [(stack.name, f"{stack.name} - {stack.description}") for stack in get_all_stacks()],
    )
    stack = get_stack(stack_name)
    if stack is None:
        return EXIT_FAILURE

    print()
    print(f"{BOLD}{stack.name}{RESET}")
    print(f"{GRAY}{stack.description}{RESET}")
    print()
    print(f"{BOLD}MCPs in this stack:{RESET}")
    print()
    for name in stack.mcps:
        connector = get_connector(name)
        if connector is not None:
            print_connector_details(connector)
    return EXIT_SUCCESS


def cmd_detect(args: argparse.Namespace) -> int:
    """Execute detect command.

    ABOUTME: Prints each detected connector with its reason, then a stack or connector hint
    """
    print_header("detect")
    print("Scanning project...")
    print()

    report = detect_project_connectors(Path.cwd())

    if not report.detected:
        print(f"{YELLOW}No project-specific MCPs detected.{RESET}")
        print()
        print(f"{GRAY}This could mean:{RESET}")
        print(f"{GRAY}  - The project uses technologies we don't have detection rules for{RESET}")
        print(f"{GRAY}  - You're in an empty or non-project directory{RESET}")
        print()
        print(f"{GRAY}Run `mcp-stack init` to manually select MCPs.{RESET}")
        return EXIT_SUCCESS

    print(f"{GREEN}Detected:{RESET}")
    print()
    for detection in report.detected:
        print(f"{CYAN}  {detection.connector}{RESET}")
        print(f"{GRAY}    {detection.reason}{RESET}")
    print()

    stack_name = suggest_stack(report.suggested)
    if stack_name:
        print(f"{BOLD}Suggested stack:{RESET}")
        print(f"{CYAN}  {stack_name}{RESET}")
        print()
        print(f"{GRAY}Run: mcp-stack init {stack_name}{RESET}")
    else:
        print(f"{BOLD}Suggested MCPs:{RESET}")
        print(f"{CYAN}  {', '.join(report.suggested)}{RESET}")
        print()
        print(f"{GRAY}Run: mcp-stack init --detect{RESET}")
    return EXIT_SUCCESS


def cmd_doctor(args: argparse.Namespace) -> int:
    """Execute doctor command.

    ABOUTME: Checks every configured connector sequentially
    ABOUTME: Returns failure if any connector ends in 'error'
    """
    print_header("doctor")

    try:
        config = read_config(Path.cwd())
    except (ValueError, OSError) as e:
        print(f"{RED}Error: could not read .mcp.json: {e}{RESET}")
        return EXIT_FAILURE

    if config is None or not config.servers:
        print(f"{YELLOW}No MCPs configured in this project.{RESET}")
        print(f"{GRAY}Run `mcp-stack init` to get started.{RESET}")
        return EXIT_SUCCESS

    print(f"{GRAY}Checking {len(config.servers)} configured MCP(s)...{RESET}")
    print()

    report = run_doctor(
        config,
        os.environ,
        on_check=lambda name: print(f"{GRAY}  Validating {name}...{RESET}"),
    )
    print()

    status_styles = {
        "healthy": (GREEN, "✓"),
        "warning": (YELLOW, "!"),
        "error": (RED, "✗"),
    }
    for result in report.results:
        color, icon = status_styles[result.status]
        print(f"{color}{icon} {result.connector}{RESET}")
        for check in result.checks:
            check_icon = f"{GREEN}  ✓{RESET}" if check.passed else f"{RED}  ✗{RESET}"
            print(f"{check_icon} {check.name}: {GRAY}{check.message}{RESET}")
        print()

    print(f"{BOLD}Summary:{RESET}")
    print(f"{GREEN}  {report.healthy_count} healthy{RESET}")
    if report.warning_count:
        print(f"{YELLOW}  {report.warning_count} warning(s){RESET}")
    if report.error_count:
        print(f"{RED}  {report.error_count} error(s){RESET}")
    print()

    if report.has_errors:
        print(f"{RED}Some MCPs have errors. Fix the issues above for best experience.{RESET}")
        return EXIT_FAILURE
    if report.warning_count:
        print(f"{YELLOW}Some MCPs have warnings but should still work.{RESET}")
    else:
        print(f"{GREEN}All MCPs are healthy!{RESET}")
    return EXIT_SUCCESS


def cmd_update(args: argparse.Namespace) -> int:
    """Execute update command.

    ABOUTME: Best effort - an unreachable index is reported but still exits 0
    """
    print_header("update")
    print("Checking for updates...")

    try:
        latest = fetch_latest_version()
    except urllib.error.HTTPError as e:
        print(f"{YELLOW}Failed to check for updates{RESET}")
        print(f"{GRAY}Could not reach PyPI (HTTP {e.code}){RESET}")
        return EXIT_SUCCESS
    except (urllib.error.URLError, TimeoutError, OSError, ValueError) as e:
        print(f"{YELLOW}Failed to check for updates{RESET}")
        print(f"{GRAY}  Could not connect to PyPI: {e}{RESET}")
        return EXIT_SUCCESS

    if not latest:
        print(f"{YELLOW}Could not determine latest version{RESET}")
        return EXIT_SUCCESS

    comparison = compare_versions(latest, __version__)
    if comparison > 0:
        print(f"{YELLOW}  Update available: {__version__} → {latest}{RESET}")
        print()
        print(f"{BOLD}  To update, run:{RESET}")
        print(f"{CYAN}    pip install --upgrade {PACKAGE_NAME}{RESET}")
    elif comparison == 0:
        print(f"{GREEN}  ✓ You're on the latest version ({__version__}){RESET}")
    else:
        print(f"{BLUE}  You're on version {__version__} (latest: {latest}){RESET}")
    return EXIT_SUCCESS


def cmd_completion(args: argparse.Namespace) -> int:
    """Print a completion script, or usage when no shell is given.

    ABOUTME: No header is printed so the output can be eval'd directly
    """
    if not args.shell:
        print(f"{BOLD}Generate shell completion scripts{RESET}")
        print()
        print("Usage:")
        print(f"{CYAN}  mcp-stack completion bash{RESET}{GRAY}  # Bash completion{RESET}")
        print(f"{CYAN}  mcp-stack completion zsh{RESET}{GRAY}   # Zsh completion{RESET}")
        print()
        print("Installation:")
        print(f"{GRAY}  # Bash - add to ~/.bashrc:{RESET}")
        print(f'{CYAN}  eval "$(mcp-stack completion bash)"{RESET}')
        print()
        print(f"{GRAY}  # Zsh - add to ~/.zshrc:{RESET}")
        print(f'{CYAN}  eval "$(mcp-stack completion zsh)"{RESET}')
        return EXIT_SUCCESS

    try:
        script = generate_completion(args.shell)
    except ValueError as e:
        print(f"{RED}{e}{RESET}")
        print(f"{GRAY}Supported shells: {', '.join(SHELLS)}{RESET}")
        return EXIT_FAILURE

    print(script, end="")
    return EXIT_SUCCESS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-stack",
        description="MCP Stack Manager - manage project MCP server configurations"
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"mcp-stack v{__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging on stderr"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # init command
    init_parser = subparsers.add_parser(
        "init",
        help="Initialize MCP configuration with a stack template"
    )
    init_parser.add_argument("stack", nargs="?", help="Stack template name")
    init_parser.add_argument(
        "--detect", "-d",
        action="store_true",
        help="Auto-detect project type and suggest MCPs"
    )
    init_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Overwrite existing .mcp.json"
    )
    init_parser.add_argument(
        "--skip-prompts", "-s",
        action="store_true",
        help="Skip credential prompts (use env vars only)"
    )

    # add command
    add_parser = subparsers.add_parser(
        "add",
        help="Add MCP(s) to the configuration"
    )
    add_parser.add_argument("names", nargs="*", help="MCP names to add")
    add_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Overwrite if already configured"
    )
    add_parser.add_argument(
        "--skip-prompts", "-s",
        action="store_true",
        help="Skip credential prompts (use env vars only)"
    )

    # remove command
    remove_parser = subparsers.add_parser(
        "remove",
        help="Remove MCP(s) from the configuration"
    )
    remove_parser.add_argument("name", nargs="?", help="MCP name to remove")
    remove_parser.add_argument(
        "--all", "-a",
        action="store_true",
        help="Remove all configured MCPs"
    )
    remove_parser.add_argument(
        "--stack", "-s",
        nargs="?",
        const="",
        default=None,
        metavar="NAME",
        help="Remove all MCPs from a stack"
    )
    remove_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Skip confirmation prompt"
    )

    # list command
    list_parser = subparsers.add_parser(
        "list",
        help="List available stacks, MCPs, or configured MCPs"
    )
    list_parser.add_argument("type", nargs="?", choices=LIST_TYPES, help="What to list")

    subparsers.add_parser("stacks", help="Browse stacks and view MCPs in each stack")
    subparsers.add_parser("detect", help="Detect project type and suggest MCPs")
    subparsers.add_parser("doctor", help="Check MCP configurations and validate connections")
    subparsers.add_parser("update", help="Check for new versions")

    # completion command
    completion_parser = subparsers.add_parser(
        "completion",
        help="Generate shell completion scripts"
    )
    completion_parser.add_argument("shell", nargs="?", help="Shell name (bash or zsh)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    ABOUTME: Parses args and dispatches to appropriate command
    ABOUTME: Returns exit code for sys.exit()
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    try:
        if args.command == "init":
            return cmd_init(args)
        elif args.command == "add":
            return cmd_add(args)
        elif args.command == "remove":
            return cmd_remove(args)
        elif args.command == "list":
            return cmd_list(args)
        elif args.command == "stacks":
            return cmd_stacks(args)
        elif args.command == "detect":
            return cmd_detect(args)
        elif args.command == "doctor":
            return cmd_doctor(args)
        elif args.command == "update":
            return cmd_update(args)
        elif args.command == "completion":
            return cmd_completion(args)
        else:
            # No command specified, show help
            parser.print_help()
            return EXIT_SUCCESS
    except (KeyboardInterrupt, EOFError):
        print()
        print("Operation cancelled.")
        return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
