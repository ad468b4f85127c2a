# Tests for shell completion script generation
import pytest

from mcpstack.completion import (
    COMMANDS,
    generate_bash_completion,
    generate_completion,
    generate_zsh_completion,
)


def test_bash_lists_commands_stacks_and_mcps():
    script = generate_bash_completion()

    assert "complete -F _mcp_stack_completions mcp-stack" in script
    assert 'commands="init add remove list stacks detect doctor update completion"' in script
    assert "saas-ts automation ai-builder fullstack" in script
    assert "supabase vercel github playwright puppeteer chrome-devtools context7" in script
    assert '${COMP_WORDS[COMP_CWORD]}' in script


def test_zsh_describes_commands():
    script = generate_zsh_completion()

    assert script.startswith("#compdef mcp-stack")
    for name, description in COMMANDS:
        assert f"'{name}:{description}'" in script
    assert "'saas-ts' 'automation' 'ai-builder' 'fullstack'" in script
    assert "_describe -t commands 'mcp-stack commands' commands" in script


def test_generate_completion_dispatch():
    assert generate_completion("bash") == generate_bash_completion()
    assert generate_completion("ZSH") == generate_zsh_completion()


def test_unknown_shell():
    with pytest.raises(ValueError, match="Unknown shell: fish"):
        generate_completion("fish")
