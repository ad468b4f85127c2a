# Shell completion scripts
from mcpstack.connectors import get_all_connector_names
from mcpstack.stacks import get_all_stack_names

PROG = "mcp-stack"
SHELLS = ("bash", "zsh")
LIST_TYPES = ("stacks", "mcps", "configured")

# ABOUTME: (command, description) pairs; zsh shows the descriptions
COMMANDS: list[tuple[str, str]] = [
    ("init", "Initialize MCP configuration with a stack template"),
    ("add", "Add MCP(s) to the configuration"),
    ("remove", "Remove MCP(s) from the configuration"),
    ("list", "List available stacks, MCPs, or configured MCPs"),
    ("stacks", "Browse stacks and view MCPs in each stack"),
    ("detect", "Detect project type and suggest MCPs"),
    ("doctor", "Check MCP configurations and validate connections"),
    ("update", "Check for new versions"),
    ("completion", "Generate shell completion scripts"),
]

BASH_TEMPLATE = """\
# {prog} bash completion
# Add this to your ~/.bashrc or ~/.bash_profile

_mcp_stack_completions() {{
    local cur prev commands stacks mcps list_types
    cur="${{COMP_WORDS[COMP_CWORD]}}"
    prev="${{COMP_WORDS[COMP_CWORD-1]}}"

    commands="{commands}"
    stacks="{stacks}"
    mcps="{mcps}"
    list_types="{list_types}"

    case "${{prev}}" in
        {prog})
            COMPREPLY=( $(compgen -W "${{commands}}" -- "${{cur}}") )
            return 0
            ;;
        init)
            COMPREPLY=( $(compgen -W "${{stacks}} --detect --force --skip-prompts" -- "${{cur}}") )
            return 0
            ;;
        add)
            COMPREPLY=( $(compgen -W "${{mcps}} --force --skip-prompts" -- "${{cur}}") )
            return 0
            ;;
        remove)
            COMPREPLY=( $(compgen -W "${{mcps}} --all --stack --force" -- "${{cur}}") )
            return 0
            ;;
        list)
            COMPREPLY=( $(compgen -W "${{list_types}}" -- "${{cur}}") )
            return 0
            ;;
        --stack)
            COMPREPLY=( $(compgen -W "${{stacks}}" -- "${{cur}}") )
            return 0
            ;;
        completion)
            COMPREPLY=( $(compgen -W "{shells}" -- "${{cur}}") )
            return 0
            ;;
    esac

    COMPREPLY=()
}}

complete -F _mcp_stack_completions {prog}
"""

ZSH_TEMPLATE = """\
#compdef {prog}
# {prog} zsh completion
# Add this to your ~/.zshrc or place in your fpath

_mcp_stack() {{
    local -a commands stacks mcps list_types

    commands=(
{commands}
    )

    stacks=({stacks})
    mcps=({mcps})
    list_types=({list_types})

    case "$words[2]" in
        init)
            _arguments \\
                '--detect[Auto-detect project type]' \\
                '--force[Overwrite existing config]' \\
                '--skip-prompts[Use environment variables only]' \\
                '1:stack:(${{stacks}})'
            ;;
        add)
            _arguments \\
                '--force[Overwrite if already configured]' \\
                '--skip-prompts[Use environment variables only]' \\
                '*:mcp:(${{mcps}})'
            ;;
        remove)
            _arguments \\
                '--all[Remove all MCPs]' \\
                '--stack[Remove stack MCPs]:stack:(${{stacks}})' \\
                '--force[Skip confirmation]' \\
                '1:mcp:(${{mcps}})'
            ;;
        list)
            _arguments '1:type:(${{list_types}})'
            ;;
        completion)
            _arguments '1:shell:({shells})'
            ;;
        *)
            _describe -t commands '{prog} commands' commands
            ;;
    esac
}}

_mcp_stack "$@"
"""


def _quoted(words: list[str] | tuple[str, ...]) -> str:
    return " ".join(f"'{word}'" for word in words)


def generate_bash_completion() -> str:
    return BASH_TEMPLATE.format(
        prog=PROG,
        commands=" ".join(name for name, _ in COMMANDS),
        stacks=" ".join(get_all_stack_names()),
        mcps=" ".join(get_all_connector_names()),
        list_types=" ".join(LIST_TYPES),
        shells=" ".join(SHELLS),
    )


def generate_zsh_completion() -> str:
    return ZSH_TEMPLATE.format(
        prog=PROG,
        commands="\n".join(f"        '{name}:{description}'" for name, description in COMMANDS),
        stacks=_quoted(get_all_stack_names()),
        mcps=_quoted(get_all_connector_names()),
        list_types=_quoted(LIST_TYPES),
        shells=" ".join(SHELLS),
    )


def generate_completion(shell: str) -> str:
    """Return the completion script for a shell.

    Raises:
        ValueError: If the shell isn't supported
    """
    shell = shell.lower()
    if shell == "bash":
        return generate_bash_completion()
    if shell == "zsh":
        return generate_zsh_completion()
    raise ValueError(f"Unknown shell: {shell}")
