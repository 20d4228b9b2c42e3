"""
Span extractor: finds where a classified element ends.

Braces are balanced character by character.  By default every ``{`` and
``}`` counts, including those inside string literals and comments; pass
``track_literals=True`` to skip quoted text and comments instead.  Both
modes are approximations: verbatim strings spanning several lines are not
followed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence

from .models import ElementKind

logger = logging.getLogger(__name__)


@dataclass
class _LiteralState:
    in_block_comment: bool = False


def _significant_chars(
    line: str,
    state: _LiteralState,
    track_literals: bool,
) -> Iterator[tuple[int, str]]:
    """Yield ``(column, char)`` pairs that take part in delimiter balancing."""
    if not track_literals:
        yield from enumerate(line)
        return

    quote = ""
    verbatim = False
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if state.in_block_comment:
            if line.startswith("*/", i):
                state.in_block_comment = False
                i += 2
            else:
                i += 1
            continue
        if quote:
            if ch == "\\" and not verbatim:
                i += 2
                continue
            if ch == quote:
                if verbatim and line.startswith('""', i):
                    i += 2
                    continue
                quote = ""
            i += 1
            continue
        if line.startswith("//", i):
            return
        if line.startswith("/*", i):
            state.in_block_comment = True
            i += 2
            continue
        if ch in "\"'":
            quote = ch
            verbatim = ch == '"' and i > 0 and line[i - 1] == "@"
            i += 1
            continue
        yield i, ch
        i += 1


def _signature_end(
    lines: Sequence[str],
    start_line: int,
    track_literals: bool,
) -> tuple[int, int]:
    """End of the parameter list, or the declaration line when it never closes."""
    depth = 0
    opened = False
    state = _LiteralState()
    for i in range(start_line, len(lines)):
        for col, ch in _significant_chars(lines[i], state, track_literals):
            if ch == "(":
                depth += 1
                opened = True
            elif ch == ")":
                depth -= 1
                if opened and depth == 0:
                    return i, col + 1
    return start_line, len(lines[start_line])


def extract_span(
    lines: Sequence[str],
    start_line: int,
    kind: ElementKind,
    track_literals: bool = False,
) -> tuple[int, int]:
    """Return ``(end_line, end_column)`` for the element starting at *start_line*.

    ``end_column`` is exclusive.  Class, interface and enum spans are the
    declaration line only.  Methods and properties run to the brace that
    brings the open count back to zero.  A ``;`` reached before any ``{``
    (at parenthesis depth zero) ends a bodiless declaration.  When the
    buffer ends first, the span degrades to the signature.
    """
    if kind.is_type_declaration:
        return start_line, len(lines[start_line])

    braces = 0
    parens = 0
    found_open = False
    state = _LiteralState()

    for i in range(start_line, len(lines)):
        for col, ch in _significant_chars(lines[i], state, track_literals):
            if ch == "(":
                parens += 1
            elif ch == ")":
                parens = max(0, parens - 1)
            elif ch == "{":
                braces += 1
                found_open = True
            elif ch == "}":
                braces -= 1
                if found_open and braces == 0:
                    return i, col + 1
                if not found_open:
                    braces = 0
            elif ch == ";" and not found_open and parens == 0:
                return i, col + 1

    logger.debug(
        "[SpanExtractor] No closing brace for %s at line %d; "
        "using signature-only span",
        kind.value, start_line,
    )
    return _signature_end(lines, start_line, track_literals)
