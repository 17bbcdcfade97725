"""Codebase indexer: loads source files into an in-memory mapping."""

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set
from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern
from ..config import Config, DEFAULT_EXTENSIONS, DEFAULT_IGNORED_DIRS
from ..models import IndexedFile

logger = logging.getLogger(__name__)


def _raise_walk_error(error: OSError) -> None:
    raise error


class Codebase:
    """Owns the path -> content mapping for one codebase root.

    The mapping is rebuilt from scratch on every ``index()`` call; it is
    never patched incrementally, so files deleted on disk disappear after
    the next pass.
    """

    def __init__(
        self,
        root: str | Path,
        extensions: Optional[Iterable[str]] = None,
        ignored_dirs: Optional[Iterable[str]] = None,
        respect_gitignore: bool = False,
    ):
        """Initialize the codebase.

        Args:
            root: Codebase root directory
            extensions: Allowed file extensions, with or without a leading dot
            ignored_dirs: Directory names skipped anywhere in the tree
            respect_gitignore: Also skip paths matched by the root .gitignore
        """
        self.root = Path(root)
        self.extensions: Set[str] = {
            "." + ext.lstrip(".").lower()
            for ext in (extensions if extensions is not None else DEFAULT_EXTENSIONS)
        }
        self.ignored_dirs: Set[str] = set(
            ignored_dirs if ignored_dirs is not None else DEFAULT_IGNORED_DIRS
        )
        self.respect_gitignore = respect_gitignore
        self._files: Dict[str, str] = {}

    @classmethod
    def from_config(cls, root: str | Path, config: Config) -> "Codebase":
        return cls(
            root,
            extensions=config.extensions,
            ignored_dirs=config.ignored_dirs,
            respect_gitignore=config.respect_gitignore,
        )

    def index(self) -> Dict[str, str]:
        """Walk the root and replace the mapping with the current disk state.

        Returns:
            The new mapping of relative path -> file content

        Raises:
            FileNotFoundError: If the root does not exist
            NotADirectoryError: If the root is not a directory
            OSError: If a directory or file cannot be read
        """
        if not self.root.exists():
            raise FileNotFoundError(f"Codebase root does not exist: {self.root}")
        if not self.root.is_dir():
            raise NotADirectoryError(f"Codebase root is not a directory: {self.root}")

        files: Dict[str, str] = {}
        for rel_path in self._discover():
            files[rel_path] = self._read(rel_path)
            logger.debug("Indexed %s", rel_path)

        self._files = files
        logger.info("Indexed %d files under %s", len(files), self.root)
        return dict(files)

    def file_count(self) -> int:
        return len(self._files)

    def all_paths(self) -> List[str]:
        """Indexed relative paths in mapping order."""
        return list(self._files)

    def get(self, path: str) -> Optional[str]:
        """Cached content for an indexed path, or None."""
        return self._files.get(path)

    def files(self) -> List[IndexedFile]:
        """Indexed files in mapping order."""
        return [IndexedFile(path=path, content=content) for path, content in self._files.items()]

    def read_file(self, path: str) -> str:
        """Read a single file straight from disk, bypassing the index.

        Raises:
            OSError: If the file cannot be read
        """
        return self._read(path)

    def _read(self, rel_path: str) -> str:
        # No binary sniffing: undecodable bytes become U+FFFD.
        return (self.root / rel_path).read_text(encoding="utf-8", errors="replace")

    def _discover(self) -> List[str]:
        """Collect matching relative paths in sorted POSIX order."""
        gitignore_spec = self._load_gitignore() if self.respect_gitignore else None
        matches: List[str] = []

        for current, dirs, filenames in os.walk(self.root, onerror=_raise_walk_error):
            current_path = Path(current)

            # Prune directories before descending further
            dirs[:] = [
                d
                for d in dirs
                if d not in self.ignored_dirs
                and not d.startswith(".")
                and not self._gitignored(current_path / d, gitignore_spec, is_dir=True)
            ]

            for filename in filenames:
                file_path = current_path / filename
                if file_path.suffix.lower() not in self.extensions:
                    continue
                if self._gitignored(file_path, gitignore_spec):
                    continue
                matches.append(file_path.relative_to(self.root).as_posix())

        return sorted(matches)

    def _gitignored(self, path: Path, spec: PathSpec | None, is_dir: bool = False) -> bool:
        if spec is None:
            return False
        rel = path.relative_to(self.root).as_posix()
        return spec.match_file(rel + "/" if is_dir else rel)

    def _load_gitignore(self) -> PathSpec | None:
        """Load .gitignore patterns if present."""
        gitignore_path = self.root / ".gitignore"
        if not gitignore_path.exists():
            return None

        try:
            patterns = gitignore_path.read_text().splitlines()
        except OSError:
            logger.warning("Could not read %s, ignoring it", gitignore_path)
            return None

        if not patterns:
            return None

        return PathSpec.from_lines(GitWildMatchPattern, patterns)
