"""
Batch edit planner: turns generated documentation into buffer edits.

Edits are emitted bottom-up (descending insertion line) so that applying
them one after another never shifts a line that a later edit still refers
to.  Within one element the insertion comes before the deletion of the old
block, because the old block lies above the insertion point.
"""

from __future__ import annotations

import logging
import textwrap
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, NamedTuple, Optional

from ..scanning.models import Element

logger = logging.getLogger(__name__)


class EditKind(str, Enum):
    INSERT = "insert"
    DELETE_RANGE = "delete_range"


class Position(NamedTuple):
    line: int
    column: int


@dataclass(frozen=True)
class EditOperation:
    """One buffer mutation in pre-edit coordinates."""
    position: Position
    kind: EditKind
    text: str = ""
    range_end: Optional[Position] = None   # exclusive, DELETE_RANGE only


def reindent(text: str, indent_prefix: str) -> str:
    """Re-indent a documentation block to sit on *indent_prefix*.

    The result ends with a newline so it can be inserted at column 0 of the
    element's line.
    """
    body = textwrap.dedent(text.strip("\n"))
    lines = [indent_prefix + line.rstrip() if line.strip() else "" for line in body.splitlines()]
    return "\n".join(lines) + "\n"


class BatchEditPlanner:
    """Compute a conflict-free edit sequence for a batch of elements."""

    def __init__(self, replace_existing: bool = False) -> None:
        self.replace_existing = replace_existing

    def plan(self, items: Iterable[tuple[Element, str]]) -> list[EditOperation]:
        """Return edits ordered by descending insertion line.

        Elements with empty documentation text, and repeated elements at an
        already planned line, are dropped.  Raises ``ValueError`` if two
        elements' edit regions overlap.
        """
        ordered = sorted(items, key=lambda item: item[0].insert_line, reverse=True)
        operations: list[EditOperation] = []
        seen_lines: set[int] = set()
        floor: Optional[int] = None   # lowest line touched by the previous element

        for element, text in ordered:
            if element.insert_line in seen_lines:
                logger.warning(
                    "[Planner] Duplicate element %s at line %d skipped",
                    element.name, element.insert_line,
                )
                continue
            if not text or not text.strip():
                logger.warning("[Planner] Empty documentation for %s skipped", element.name)
                continue

            top = element.insert_line
            if self.replace_existing and element.doc_block is not None:
                top = element.doc_block.start
            if floor is not None and element.insert_line > floor:
                raise ValueError(
                    f"Edit for {element.name} at line {element.insert_line} "
                    f"overlaps an edit starting at line {floor}"
                )

            operations.append(EditOperation(
                position=Position(element.insert_line, 0),
                kind=EditKind.INSERT,
                text=reindent(text, element.indent_prefix),
            ))
            if self.replace_existing and element.doc_block is not None:
                operations.append(EditOperation(
                    position=Position(element.doc_block.start, 0),
                    kind=EditKind.DELETE_RANGE,
                    range_end=Position(element.doc_block.end + 1, 0),
                ))
            seen_lines.add(element.insert_line)
            floor = top

        logger.debug("[Planner] Planned %d edit operations", len(operations))
        return operations
