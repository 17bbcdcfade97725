"""Writes extracted code blocks back to the codebase."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional
from ..models import ExtractedBlock
from .parser import extract_blocks

logger = logging.getLogger(__name__)


class ChangeApplier:
    """Applies extracted blocks as full-file overwrites under a root.

    There is no merge, backup or rollback: each block replaces its target
    file, and a failure part way through leaves earlier writes in place.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def apply(self, blocks: Iterable[ExtractedBlock]) -> List[str]:
        """Write every block that names a file.

        Args:
            blocks: Blocks extracted from one model response

        Returns:
            Relative paths written, in block order

        Raises:
            OSError: If a directory or file cannot be written
        """
        written: List[str] = []
        for block in blocks:
            if not block.file_path:
                continue

            target = self._resolve_safe_path(block.file_path)
            if target is None:
                logger.warning("Skipping block for path outside the root: %s", block.file_path)
                continue

            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(block.code, encoding="utf-8")
            logger.debug("Wrote %d chars to %s", len(block.code), target)
            written.append(block.file_path)

        if written:
            logger.info("Applied %d file change(s) under %s", len(written), self.root)
        return written

    def apply_response(self, text: str) -> List[str]:
        """Extract blocks from a raw response and apply them."""
        return self.apply(extract_blocks(text))

    def _resolve_safe_path(self, path: str) -> Optional[Path]:
        """Join a relative path onto the root, or None if it escapes it."""
        root = self.root.resolve()
        full_path = (root / path.lstrip("/\\")).resolve()
        try:
            full_path.relative_to(root)
        except ValueError:
            return None
        if full_path == root:
            return None
        return full_path
