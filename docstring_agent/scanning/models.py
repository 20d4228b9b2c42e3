"""Records produced by one scan pass over a buffer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ElementKind(str, Enum):
    """Kinds of documentable constructs.

    Adding a kind requires a matching classification pattern and a span rule.
    """
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    METHOD = "method"
    PROPERTY = "property"

    @property
    def is_type_declaration(self) -> bool:
        return self in (ElementKind.CLASS, ElementKind.INTERFACE, ElementKind.ENUM)


@dataclass(frozen=True)
class DocBlock:
    """Inclusive line range of an existing documentation comment.

    ``end`` also covers any blank lines between the comment and the element.
    """
    start: int
    end: int


@dataclass(frozen=True)
class Element:
    """A documentable construct found in the buffer."""
    kind: ElementKind
    name: str              # "Unknown" when the identifier cannot be extracted
    start_line: int
    end_line: int          # inclusive
    end_column: int        # exclusive column on end_line
    indent_column: int
    code: str              # lines[start_line:end_line + 1] joined with "\n"
    insert_line: int       # first attribute line above start_line, else start_line
    doc_block: Optional[DocBlock] = None

    @property
    def has_documentation(self) -> bool:
        return self.doc_block is not None

    @property
    def doc_block_start(self) -> Optional[int]:
        return self.doc_block.start if self.doc_block else None

    @property
    def doc_block_end(self) -> Optional[int]:
        return self.doc_block.end if self.doc_block else None

    @property
    def indent_prefix(self) -> str:
        """Literal leading whitespace of the declaration line (tabs preserved)."""
        return self.code[:self.indent_column]
