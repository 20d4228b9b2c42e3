"""
Element scanner: builds the element inventory for a buffer.

Combines the line classifier, span extractor and doc-block detector.  The
scan is line oriented and not nesting aware: ``scan_at`` returns the nearest
declaration above the cursor, which is not necessarily the innermost one.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from .classifier import LineClassifier, extract_element_name
from .doc_blocks import find_doc_block
from .languages import LanguagePatterns, get_language
from .models import Element, ElementKind
from .spans import extract_span

logger = logging.getLogger(__name__)


class ElementScanner:
    """Locate documentable elements in a sequence of lines."""

    def __init__(
        self,
        language: Union[str, LanguagePatterns, None] = None,
        track_literals: bool = False,
    ) -> None:
        if isinstance(language, LanguagePatterns):
            self.language = language
        else:
            self.language = get_language(language)
        self.track_literals = track_literals
        self.classifier = LineClassifier(self.language)

    def scan_at(
        self,
        lines: Sequence[str],
        cursor_line: int,
        skip_bodiless: bool = True,
    ) -> Optional[Element]:
        """Nearest method or class-family declaration at or above *cursor_line*.

        With ``skip_bodiless=False`` the upward search also stops at
        ``;``-terminated member declarations.
        """
        if not lines or cursor_line < 0:
            return None

        commented = self._comment_mask(lines)
        for i in range(min(cursor_line, len(lines) - 1), -1, -1):
            if commented[i]:
                continue
            kind = self.classifier.classify(lines[i], allow_bodiless=not skip_bodiless)
            if kind is None or kind is ElementKind.PROPERTY:
                continue
            return self._build_element(lines, i, kind)

        logger.debug("[Scanner] No element at or above line %d", cursor_line)
        return None

    def scan_all(self, lines: Sequence[str]) -> list[Element]:
        """Every element in buffer order (ascending start line)."""
        elements: list[Element] = []
        commented = self._comment_mask(lines)

        for i, line in enumerate(lines):
            if commented[i]:
                continue
            kind = self.classifier.classify(line)
            if kind is None:
                continue
            elements.append(self._build_element(lines, i, kind))

        logger.debug(
            "[Scanner] Found %d elements (%d documented)",
            len(elements), sum(1 for e in elements if e.has_documentation),
        )
        return elements

    def _comment_mask(self, lines: Sequence[str]) -> list[bool]:
        """Per line, True for comment lines and lines inside ``/* ... */``."""
        mask: list[bool] = []
        in_block_comment = False
        for line in lines:
            stripped = line.strip()
            if in_block_comment:
                if "*/" in stripped:
                    in_block_comment = False
                mask.append(True)
                continue
            if self.language.is_comment_line(stripped):
                if stripped.startswith("/*") and "*/" not in stripped[2:]:
                    in_block_comment = True
                mask.append(True)
                continue
            mask.append(False)
        return mask

    def _attribute_start(self, lines: Sequence[str], start_line: int) -> int:
        i = start_line
        while i > 0 and self.language.is_attribute_line(lines[i - 1].strip()):
            i -= 1
        return i

    def _build_element(self, lines: Sequence[str], index: int, kind: ElementKind) -> Element:
        line = lines[index]
        end_line, end_column = extract_span(lines, index, kind, self.track_literals)
        insert_line = self._attribute_start(lines, index)
        return Element(
            kind=kind,
            name=extract_element_name(line, kind, self.language),
            start_line=index,
            end_line=end_line,
            end_column=end_column,
            indent_column=len(line) - len(line.lstrip()),
            code="\n".join(lines[index:end_line + 1]),
            insert_line=insert_line,
            doc_block=find_doc_block(lines, insert_line, self.language),
        )
