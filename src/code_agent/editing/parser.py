"""Extraction of file edits from free-text model responses."""

import re
from typing import List
from ..models import ExtractedBlock

# Optional ``File: `path` `` declaration, then a fenced block with an
# optional language tag. Lazy body match, so an unterminated fence never
# matches.
CODE_BLOCK_PATTERN = re.compile(
    r"(?:File: `([^`]+)`\s*)?```(?:[\w+#.-]+)?[ \t]*\r?\n(.*?)```",
    re.DOTALL,
)


def extract_blocks(text: str) -> List[ExtractedBlock]:
    """Extract fenced code blocks in the order they appear.

    Args:
        text: Raw model response

    Returns:
        One ExtractedBlock per terminated fence; ``file_path`` is set only
        when a ``File:`` declaration directly precedes the fence
    """
    blocks: List[ExtractedBlock] = []
    for match in CODE_BLOCK_PATTERN.finditer(text):
        file_path, code = match.group(1), match.group(2)
        blocks.append(
            ExtractedBlock(
                file_path=file_path.strip() if file_path else None,
                code=code.strip(),
            )
        )
    return blocks
