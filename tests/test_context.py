"""Tests for prompt context assembly."""

from code_agent.codebase.indexer import Codebase
from code_agent.context import (
    build_files_bundle,
    build_project_structure,
    build_relevant_context,
    format_file_block,
)
from code_agent.models import IndexedFile


def test_format_file_block():
    assert format_file_block("a.py", "x = 1") == "File: a.py\n```\nx = 1\n```"


def test_relevant_context_joins_with_blank_line():
    files = [IndexedFile(path="a.py", content="A"), IndexedFile(path="b.py", content="B")]
    assert build_relevant_context(files) == "File: a.py\n```\nA\n```\n\nFile: b.py\n```\nB\n```"


def test_relevant_context_empty():
    assert build_relevant_context([]) == ""


def test_files_bundle_uses_index_and_blanks_unknown(temp_repo):
    codebase = Codebase(temp_repo)
    codebase.index()

    bundle = build_files_bundle(codebase, ["main.go", "missing.py"])

    assert "File: main.go\n```\npackage main" in bundle
    assert bundle.endswith("File: missing.py\n```\n\n```")


def test_project_structure_limits_to_ten_paths():
    paths = [f"f{i}.py" for i in range(12)]
    structure = build_project_structure(paths)

    assert structure.startswith("Current project structure:\n")
    assert "f9.py" in structure
    assert "f10.py" not in structure
