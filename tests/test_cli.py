"""CLI regression tests."""

import json
import pytest
from unittest.mock import patch
from click.testing import CliRunner
from code_agent.main import cli
from code_agent.llm.provider import LLMProvider, ProviderError

FENCE = "```"


class ScriptedProvider(LLMProvider):
    model_name = "scripted"

    def __init__(self, responses):
        self.responses = list(responses)

    def chat(self, messages):
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def runner():
    """Create Click test runner."""
    return CliRunner()


def _scripted(*responses):
    return patch("code_agent.main.create_llm_provider", return_value=ScriptedProvider(responses))


def test_help_lists_commands(runner):
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("chat", "review", "fix", "refactor", "generate", "config"):
        assert command in result.output


def test_chat_session_exit(runner, temp_repo):
    with _scripted("Hello from the model"):
        result = runner.invoke(cli, ["chat", "--path", str(temp_repo)], input="hi\nexit\n")

    assert result.exit_code == 0
    assert "Indexed 3 files" in result.output
    assert "Hello from the model" in result.output


def test_chat_clear_and_eof(runner, temp_repo):
    with _scripted():
        result = runner.invoke(cli, ["chat", "--path", str(temp_repo)], input="clear\n")

    assert result.exit_code == 0
    assert "Conversation cleared" in result.output


def test_chat_continues_after_provider_error(runner, temp_repo):
    with _scripted(ProviderError("AI server error: 503"), "recovered"):
        result = runner.invoke(
            cli, ["chat", "--path", str(temp_repo)], input="first\nsecond\nexit\n"
        )

    assert result.exit_code == 0
    assert "AI server error: 503" in result.output
    assert "recovered" in result.output


def test_chat_applies_confirmed_changes(runner, temp_repo):
    response = f"I'll create it:\nFile: `src/new.py`\n{FENCE}python\nNEW = True\n{FENCE}"
    with _scripted(response):
        result = runner.invoke(
            cli, ["chat", "--path", str(temp_repo)], input="add new module\ny\nexit\n"
        )

    assert result.exit_code == 0
    assert (temp_repo / "src" / "new.py").read_text() == "NEW = True"


def test_chat_declined_changes_not_written(runner, temp_repo):
    response = f"I'll create it:\nFile: `src/new.py`\n{FENCE}python\nNEW = True\n{FENCE}"
    with _scripted(response):
        runner.invoke(cli, ["chat", "--path", str(temp_repo)], input="add\nn\nexit\n")

    assert not (temp_repo / "src" / "new.py").exists()


def test_review_prints_response(runner, temp_repo):
    with _scripted("All good"):
        result = runner.invoke(cli, ["review", "--all", "--path", str(temp_repo)])

    assert result.exit_code == 0
    assert "Code Review" in result.output
    assert "All good" in result.output


def test_review_failure_exits_nonzero(runner, temp_repo):
    with _scripted(ProviderError("AI server error: 500")):
        result = runner.invoke(cli, ["review", "--path", str(temp_repo)])

    assert result.exit_code == 1
    assert "Review failed" in result.output


def test_fix_with_yes_applies(runner, temp_repo):
    with _scripted(f"File: `main.go`\n{FENCE}go\npackage fixed\n{FENCE}"):
        result = runner.invoke(cli, ["fix", "main.go", "--path", str(temp_repo), "--yes"])

    assert result.exit_code == 0
    assert (temp_repo / "main.go").read_text() == "package fixed"


def test_fix_missing_file_exits_nonzero(runner, temp_repo):
    with _scripted("unused"):
        result = runner.invoke(cli, ["fix", "nope.py", "--path", str(temp_repo)])

    assert result.exit_code == 1
    assert "Fix failed" in result.output


def test_refactor_declined(runner, temp_repo):
    original = (temp_repo / "src" / "auth.py").read_text()
    with _scripted(f"File: `src/auth.py`\n{FENCE}python\nrefactored\n{FENCE}"):
        result = runner.invoke(
            cli, ["refactor", "src/auth.py", "-s", "naming", "--path", str(temp_repo)], input="n\n"
        )

    assert result.exit_code == 0
    assert (temp_repo / "src" / "auth.py").read_text() == original


def test_generate_defaults_to_creating_files(runner, temp_repo):
    with _scripted(f"File: `web/index.js`\n{FENCE}js\nconsole.log(1)\n{FENCE}"):
        result = runner.invoke(
            cli, ["generate", "hello page", "--path", str(temp_repo)], input="\n"
        )

    assert result.exit_code == 0
    assert (temp_repo / "web" / "index.js").read_text() == "console.log(1)"


def test_gemini_without_key_reports_error(runner, temp_repo):
    result = runner.invoke(cli, ["--provider", "gemini", "review", "--path", str(temp_repo)])

    assert result.exit_code == 1
    assert "API key" in result.output


def test_config_command_saves(runner, isolated_home):
    result = runner.invoke(cli, ["config"], input="lmstudio\n\nmy-model\n")

    assert result.exit_code == 0
    saved = json.loads((isolated_home / "config.json").read_text())
    assert saved["provider"] == "lmstudio"
    assert saved["url"] == "http://localhost:1234/v1/chat/completions"
    assert saved["model"] == "my-model"
    assert "api_key" not in saved


def test_config_command_gemini_asks_for_key(runner, isolated_home):
    result = runner.invoke(cli, ["config"], input="gemini\n\nsecret-key\n")

    assert result.exit_code == 0
    saved = json.loads((isolated_home / "config.json").read_text())
    assert saved["provider"] == "gemini"
    assert saved["model"] == "gemini-2.5-flash"
    assert saved["api_key"] == "secret-key"


def test_provider_flag_picks_up_gemini_key(runner, temp_repo, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    with patch("code_agent.llm.litellm_provider.litellm.completion") as mock_completion:
        mock_completion.side_effect = Exception("offline")
        result = runner.invoke(cli, ["--provider", "gemini", "review", "--path", str(temp_repo)])

    assert result.exit_code == 1
    assert "Review failed" in result.output
    kwargs = mock_completion.call_args[1]
    assert kwargs["model"] == "gemini/gemini-2.5-flash"
    assert kwargs["api_key"] == "env-key"
