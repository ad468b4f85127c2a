# Interactive terminal prompts
import getpass
import sys
from collections.abc import Mapping, Sequence

from mcpstack.models import ConnectorDefinition
from mcpstack.utils.env import check_required_env, is_sensitive, mask_value

# ABOUTME: Terminal codes for interactive UI and coloured output
CLEAR_SCREEN = "\033[2J\033[H"
BOLD = "\033[1m"
RESET = "\033[0m"
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
BLUE = "\033[94m"
MAGENTA = "\033[95m"
CYAN = "\033[96m"
GRAY = "\033[90m"


def interactive_select(
    items: list[str],
    preselected: set[str] | None = None,
    labels: Mapping[str, str] | None = None,
    title: str = "Select MCPs:",
) -> list[str]:
    """Terminal-based multi-select without external dependencies.

    ABOUTME: Uses arrow keys, space, and enter for selection
    ABOUTME: Falls back to numbered input without termios or an interactive stdin
    ABOUTME: Returns selected items in their original order

    Args:
        items: List of items to select from
        preselected: Set of items that should start selected
        labels: Optional display text per item
        title: Heading shown above the list

    Returns:
        List of selected items

    Raises:
        KeyboardInterrupt: If the user presses Ctrl+C
    """
    if not items:
        return []

    labels = labels or {}
    selected: set[str] = set(preselected or ()) & set(items)
    current_idx = 0

    try:
        import termios
        import tty
    except ImportError:
        # Fallback for systems without tty/termios (e.g., Windows)
        return _numbered_select(items, selected, labels, title)

    if not sys.stdin.isatty():
        return _numbered_select(items, selected, labels, title)

    def getch() -> str:
        """Get a single character from stdin."""
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            ch = sys.stdin.read(1)
            # Handle escape sequences for arrow keys
            if ch == "\x1b":
                ch += sys.stdin.read(2)
            return ch
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    while True:
        print(CLEAR_SCREEN, end="")
        print(f"{BOLD}{title}{RESET}")
        print()

        for idx, item in enumerate(items):
            prefix = "[✓]" if item in selected else "[ ]"
            cursor = f"{CYAN}→{RESET} " if idx == current_idx else "  "
            print(f"{cursor}{prefix} {labels.get(item, item)}")

        print()
        print("Use arrow keys to navigate, space to toggle, enter to confirm.")

        ch = getch()

        if ch == "\x1b[A":  # Up arrow
            current_idx = (current_idx - 1) % len(items)
        elif ch == "\x1b[B":  # Down arrow
            current_idx = (current_idx + 1) % len(items)
        elif ch == " ":
            current_item = items[current_idx]
            if current_item in selected:
                selected.remove(current_item)
            else:
                selected.add(current_item)
        elif ch in ("\r", "\n"):
            break
        elif ch == "\x03":  # Ctrl+C
            print(CLEAR_SCREEN, end="")
            raise KeyboardInterrupt

    print(CLEAR_SCREEN, end="")
    return [item for item in items if item in selected]


def _numbered_select(
    items: list[str],
    selected: set[str],
    labels: Mapping[str, str],
    title: str,
) -> list[str]:
    print(f"{BOLD}{title}{RESET}")
    print()
    for idx, item in enumerate(items):
        status = " [preselected]" if item in selected else ""
        print(f"  {idx + 1}. {labels.get(item, item)}{status}")

    print()
    print("Enter comma-separated numbers (e.g., 1,3,5) or press Enter for defaults:")
    user_input = sys.stdin.readline().strip()

    if user_input:
        chosen: set[str] = set()
        try:
            for num_str in user_input.split(","):
                idx = int(num_str.strip()) - 1
                if 0 <= idx < len(items):
                    chosen.add(items[idx])
            selected = chosen
        except ValueError:
            print("Invalid input. Using defaults.")
    return [item for item in items if item in selected]


def select_one(title: str, choices: Sequence[tuple[str, str]]) -> str:
    """Pick one value from a numbered list.

    Args:
        title: Question shown above the list
        choices: (value, label) pairs

    Returns:
        The chosen value
    """
    print(f"{BOLD}{title}{RESET}")
    for idx, (_value, label) in enumerate(choices, start=1):
        print(f"  {idx}. {label}")

    while True:
        raw = input(f"Choice [1-{len(choices)}]: ").strip()
        if raw.isdigit() and 1 <= int(raw) <= len(choices):
            return choices[int(raw) - 1][0]
        print(f"  Invalid choice. Enter a number between 1 and {len(choices)}.")


def confirm(message: str, default: bool = False) -> bool:
    suffix = "[Y/n]" if default else "[y/N]"
    answer = input(f"{message} {suffix}: ").strip().lower()
    if not answer:
        return default
    return answer in ("y", "yes")


def prompt_value(message: str, secret: bool = False, required: bool = False) -> str:
    """Read one value, masking input for secrets.

    ABOUTME: Required values are asked again until non-empty
    """
    while True:
        value = getpass.getpass(f"{message} ") if secret else input(f"{message} ")
        value = value.strip()
        if value or not required:
            return value
        print("  Value is required")


def _print_credential_header(
    connector: ConnectorDefinition, env_var: str, optional: bool
) -> None:
    label = f"{GRAY} (optional){RESET}" if optional else ""
    print(f"  {BOLD}{env_var}{RESET}{label}")
    hint = connector.env_hints.get(env_var)
    if hint:
        print(f"  {GRAY}Hint: {hint}{RESET}")


def _offer_existing(environ: Mapping[str, str], env_var: str) -> str | None:
    existing = environ.get(env_var)
    if not existing:
        return None
    print(f"  {GREEN}Found in environment: {mask_value(existing)}{RESET}")
    if confirm("Use this value for this project?", default=True):
        return existing
    return None


def prompt_for_credentials(
    connector: ConnectorDefinition, environ: Mapping[str, str]
) -> dict[str, str]:
    """Ask for a connector's credentials, offering environment values first.

    ABOUTME: An environment value is shown masked and can be accepted or overridden
    ABOUTME: A freshly entered value always wins over the environment for this run
    ABOUTME: Optional values are only asked for after a yes/no confirmation

    Args:
        connector: Connector whose required/optional credentials to ask for
        environ: Existing environment values

    Returns:
        Mapping of credential name to chosen value; skipped optionals are
        omitted unless an environment value was rejected (then mapped to '')
    """
    values: dict[str, str] = {}
    if not connector.needs_credentials:
        return values

    print()
    print(f"{CYAN}Configure {connector.name}:{RESET}")
    print()

    for env_var in connector.required_env:
        _print_credential_header(connector, env_var, optional=False)
        existing = _offer_existing(environ, env_var)
        if existing is not None:
            values[env_var] = existing
        else:
            values[env_var] = prompt_value(
                "Enter value:", secret=is_sensitive(env_var), required=True
            )
        print()

    for env_var in connector.optional_env:
        _print_credential_header(connector, env_var, optional=True)
        existing = _offer_existing(environ, env_var)
        if existing is not None:
            values[env_var] = existing
        else:
            value = ""
            if confirm("Do you want to provide a value?", default=False):
                value = prompt_value("Enter value:", secret=is_sensitive(env_var))
            if value or environ.get(env_var):
                # A rejected environment value must not leak back in via expansion
                values[env_var] = value
        print()

    return values


def collect_credentials(
    connector: ConnectorDefinition,
    environ: Mapping[str, str],
    skip_prompts: bool = False,
) -> dict[str, str]:
    """Resolve the values to substitute into a connector's template.

    ABOUTME: With skip_prompts, values come from environ only and gaps are warned about
    ABOUTME: A missing credential never blocks; it is substituted as empty
    """
    if not connector.needs_credentials:
        return {}

    if skip_prompts:
        missing, _ = check_required_env(connector.required_env, environ)
        if missing:
            print(f"{YELLOW}Warning: {connector.name} is missing {', '.join(missing)}{RESET}")
            print(f"{GRAY}Set them in your environment; the entry will be written with empty values.{RESET}")
        return {}

    return prompt_for_credentials(connector, environ)
