"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path
from code_agent.config import Config


@pytest.fixture
def temp_repo(tmp_path: Path) -> Path:
    """Create a temporary repository structure for testing."""
    repo = tmp_path / "test_repo"
    repo.mkdir()

    (repo / "src").mkdir()
    (repo / "src" / "auth.py").write_text("def login(user):\n    return check_password(user)\n")
    (repo / "src" / "utils.ts").write_text("export const VERSION = '1.0';\n")
    (repo / "main.go").write_text("package main\n\nfunc main() {}\n")
    (repo / "README.md").write_text("# Test Project")

    return repo


@pytest.fixture
def config() -> Config:
    """Provide a test configuration."""
    return Config(
        provider="ollama",
        url="http://localhost:11434/v1/chat/completions",
        model="llama3.1:8b",
    )


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    """Keep persisted config and env overrides out of the real user home."""
    home = tmp_path / "agent_home"
    monkeypatch.setenv("CODE_AGENT_HOME", str(home))
    for name in (
        "CODE_AGENT_PROVIDER",
        "CODE_AGENT_URL",
        "CODE_AGENT_MODEL",
        "CODE_AGENT_TIMEOUT",
        "GEMINI_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    return home
