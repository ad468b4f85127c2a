# ABOUTME: Tests for interactive prompts and credential collection
# ABOUTME: input/getpass are patched so nothing reads the real terminal
import io
from unittest.mock import patch

from mcpstack.connectors import build_server_config, get_connector
from mcpstack.prompts import (
    collect_credentials,
    confirm,
    interactive_select,
    prompt_for_credentials,
    select_one,
)


class TestBasicPrompts:
    """Tests for confirm and select_one."""

    def test_confirm_default(self):
        with patch("builtins.input", return_value=""):
            assert confirm("Continue?", default=True) is True
        with patch("builtins.input", return_value=""):
            assert confirm("Continue?") is False

    def test_confirm_answers(self):
        with patch("builtins.input", return_value="YES"):
            assert confirm("Continue?") is True
        with patch("builtins.input", return_value="n"):
            assert confirm("Continue?", default=True) is False

    def test_select_one_retries_invalid(self, capsys):
        choices = [("a", "Alpha"), ("b", "Beta")]
        with patch("builtins.input", side_effect=["0", "x", "2"]):
            assert select_one("Pick:", choices) == "b"
        assert "Invalid choice" in capsys.readouterr().out


class TestInteractiveSelect:
    """Tests for the numbered fallback used when stdin isn't a terminal."""

    def test_numbered_choice(self):
        with patch("sys.stdin", io.StringIO("3,1\n")):
            assert interactive_select(["a", "b", "c"]) == ["a", "c"]

    def test_enter_keeps_preselected(self):
        with patch("sys.stdin", io.StringIO("\n")):
            assert interactive_select(["a", "b", "c"], preselected={"b"}) == ["b"]

    def test_invalid_input_keeps_defaults(self, capsys):
        with patch("sys.stdin", io.StringIO("x\n")):
            assert interactive_select(["a", "b"], preselected={"a"}) == ["a"]
        assert "Invalid input" in capsys.readouterr().out

    def test_empty_items(self):
        assert interactive_select([]) == []


class TestPromptForCredentials:
    """Tests for prompt_for_credentials."""

    def test_no_credentials_needed(self):
        assert prompt_for_credentials(get_connector("playwright"), {}) == {}

    def test_uses_existing_env_value(self):
        environ = {"GITHUB_TOKEN": "ghp_existing"}
        with patch("builtins.input", return_value="y"):
            values = prompt_for_credentials(get_connector("github"), environ)
        assert values == {"GITHUB_TOKEN": "ghp_existing"}

    def test_entered_value_wins_over_env(self):
        environ = {"GITHUB_TOKEN": "ghp_existing"}
        with patch("builtins.input", return_value="n"), \
                patch("mcpstack.prompts.getpass.getpass", return_value="ghp_typed"):
            values = prompt_for_credentials(get_connector("github"), environ)

        assert values == {"GITHUB_TOKEN": "ghp_typed"}
        server = build_server_config(get_connector("github"), values, environ)
        assert server.env == {"GITHUB_PERSONAL_ACCESS_TOKEN": "ghp_typed"}

    def test_required_value_asked_until_given(self, capsys):
        with patch("mcpstack.prompts.getpass.getpass", side_effect=["", "ghp_x"]):
            values = prompt_for_credentials(get_connector("github"), {})
        assert values == {"GITHUB_TOKEN": "ghp_x"}
        assert "Value is required" in capsys.readouterr().out

    def test_non_secret_uses_plain_input(self):
        # SUPABASE_PROJECT_REF is typed in the clear, the access token is masked
        with patch("builtins.input", return_value="abc123"), \
                patch("mcpstack.prompts.getpass.getpass", return_value="sbp_x"):
            values = prompt_for_credentials(get_connector("supabase"), {})
        assert values == {"SUPABASE_PROJECT_REF": "abc123", "SUPABASE_ACCESS_TOKEN": "sbp_x"}

    def test_optional_declined(self):
        with patch("builtins.input", return_value="n"):
            values = prompt_for_credentials(get_connector("context7"), {})
        assert values == {}

    def test_optional_provided(self):
        with patch("builtins.input", return_value="y"), \
                patch("mcpstack.prompts.getpass.getpass", return_value="c7_key"):
            values = prompt_for_credentials(get_connector("context7"), {})
        assert values == {"CONTEXT7_API_KEY": "c7_key"}

    def test_rejected_optional_env_value_not_used(self):
        environ = {"CONTEXT7_API_KEY": "old"}
        # Reject the env value, then decline to provide a new one
        with patch("builtins.input", side_effect=["n", "n"]):
            values = prompt_for_credentials(get_connector("context7"), environ)

        server = build_server_config(get_connector("context7"), values, environ)
        assert server.headers == {"CONTEXT7_API_KEY": ""}


class TestCollectCredentials:
    """Tests for collect_credentials."""

    def test_skip_prompts_warns_and_does_not_ask(self, capsys):
        with patch("builtins.input", side_effect=AssertionError("prompted")):
            values = collect_credentials(get_connector("github"), {}, skip_prompts=True)

        assert values == {}
        assert "github is missing GITHUB_TOKEN" in capsys.readouterr().out

    def test_skip_prompts_with_env_is_quiet(self, capsys):
        values = collect_credentials(
            get_connector("github"), {"GITHUB_TOKEN": "x"}, skip_prompts=True
        )
        assert values == {}
        assert "Warning" not in capsys.readouterr().out

    def test_prompts_when_not_skipped(self):
        with patch("mcpstack.prompts.getpass.getpass", return_value="ghp_x"):
            values = collect_credentials(get_connector("github"), {})
        assert values == {"GITHUB_TOKEN": "ghp_x"}
