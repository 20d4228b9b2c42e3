"""Detection of an existing documentation comment above a line."""

from __future__ import annotations

from typing import Optional, Sequence

from .languages import CSHARP, LanguagePatterns
from .models import DocBlock


def _block_comment_start(lines: Sequence[str], end: int, language: LanguagePatterns) -> Optional[int]:
    """Index of the line opening the block comment that ends on *end*."""
    i = end
    while not lines[i].strip().startswith(language.block_comment_start):
        i -= 1
        if i < 0 or "*/" in lines[i]:
            return None
    return i


def find_doc_block(
    lines: Sequence[str],
    line_index: int,
    language: LanguagePatterns = CSHARP,
) -> Optional[DocBlock]:
    """Return the documentation block immediately above *line_index*.

    Blank lines between the block and the line are skipped (and included in
    the returned ``end``).  The first non-blank line must carry the
    documentation marker or close a documentation block.  For line-style
    docs the walk then continues upward while lines keep the marker prefix;
    block-style docs are walked up to their opener, which must be the
    language's doc opener (``/**``) rather than a plain ``/*``.
    """
    i = min(line_index, len(lines)) - 1
    while i >= 0 and not lines[i].strip():
        i -= 1
    if i < 0 or not language.is_doc_evidence(lines[i].strip()):
        return None

    if language.doc_opener is not None:
        start = _block_comment_start(lines, i, language)
        if start is None or not lines[start].strip().startswith(language.doc_opener):
            return None
        return DocBlock(start=start, end=line_index - 1)

    start = i
    while start > 0 and language.is_doc_line(lines[start - 1].strip()):
        start -= 1
    return DocBlock(start=start, end=line_index - 1)


def has_doc_before(
    lines: Sequence[str],
    line_index: int,
    language: LanguagePatterns = CSHARP,
) -> bool:
    return find_doc_block(lines, line_index, language) is not None
