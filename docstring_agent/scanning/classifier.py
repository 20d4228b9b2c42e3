"""
Line classifier: decides whether a single line opens a documentable element.

Rules are tried in a fixed order: class/interface/enum, then method, then
property.  A property accessor line would otherwise be mistaken for a method
start, and the class-family keywords are mutually exclusive.  Anything that
does not match cleanly is simply "not an element".
"""

from __future__ import annotations

import re
from typing import Callable, Optional

from .languages import CSHARP, LanguagePatterns
from .models import ElementKind

UNKNOWN_NAME = "Unknown"

_KEYWORD_KINDS = {
    "class": ElementKind.CLASS,
    "interface": ElementKind.INTERFACE,
    "enum": ElementKind.ENUM,
}

_NAME_BEFORE_PAREN = re.compile(r"(\w+)\s*(?:<[^()<>]*(?:<[^()<>]*>)?[^()<>]*>\s*)?\(")
_NAME_BEFORE_BRACE = re.compile(r"(\w+)\s*\{")
_NAME_AFTER_KEYWORD = re.compile(r"\b(?:class|interface|enum)\s+(\w+)")


def _match_type_declaration(stripped: str, lang: LanguagePatterns) -> Optional[ElementKind]:
    m = lang.class_pattern.match(stripped)
    if m:
        return _KEYWORD_KINDS[m.group("keyword")]
    return None


def _match_member(pattern: Optional[re.Pattern], stripped: str, lang: LanguagePatterns) -> bool:
    if pattern is None:
        return False
    m = pattern.match(stripped)
    if not m:
        return False
    # "return Foo(", "else if (" and friends are statements, not signatures.
    if m.group("type") in lang.keywords or m.group("name") in lang.keywords:
        return False
    return True


def is_bodiless_declaration(line: str) -> bool:
    """A declaration line terminated by ';' (interface or abstract member)."""
    return line.rstrip().endswith(";")


class LineClassifier:
    """Ordered list of independent predicate rules over one stripped line."""

    def __init__(self, language: LanguagePatterns = CSHARP) -> None:
        self.language = language
        self._rules: list[tuple[ElementKind | None, Callable[[str], Optional[ElementKind]]]] = [
            (None, lambda s: _match_type_declaration(s, self.language)),
            (ElementKind.METHOD, self._is_method),
            (ElementKind.PROPERTY, self._is_property),
        ]

    def classify(self, line: str, allow_bodiless: bool = False) -> Optional[ElementKind]:
        """Return the kind of element *line* opens, or None.

        Method lines ending with ';' have no body and only classify when
        *allow_bodiless* is set.
        """
        stripped = line.strip()
        if not stripped or self.language.is_comment_line(stripped):
            return None

        for kind, rule in self._rules:
            result = rule(stripped)
            if not result:
                continue
            if kind is None:
                return result
            if kind is ElementKind.METHOD and not allow_bodiless \
                    and is_bodiless_declaration(stripped):
                return None
            return kind
        return None

    def _is_method(self, stripped: str) -> bool:
        return _match_member(self.language.method_pattern, stripped, self.language)

    def _is_property(self, stripped: str) -> bool:
        return _match_member(self.language.property_pattern, stripped, self.language)


def classify(line: str, language: LanguagePatterns = CSHARP,
             allow_bodiless: bool = False) -> Optional[ElementKind]:
    return LineClassifier(language).classify(line, allow_bodiless=allow_bodiless)


def extract_element_name(line: str, kind: ElementKind,
                         language: LanguagePatterns = CSHARP) -> str:
    """Best-effort identifier for the element opened by *line*.

    Prefers the name captured by the language's own declaration pattern and
    falls back to a looser search; never raises.
    """
    stripped = line.strip()
    pattern = {
        ElementKind.METHOD: language.method_pattern,
        ElementKind.PROPERTY: language.property_pattern,
    }.get(kind, language.class_pattern)
    if pattern is not None:
        m = pattern.match(stripped)
        if m:
            return m.group("name")

    if kind.is_type_declaration:
        m = _NAME_AFTER_KEYWORD.search(stripped)
    elif kind is ElementKind.PROPERTY:
        m = _NAME_BEFORE_BRACE.search(stripped)
    else:
        m = _NAME_BEFORE_PAREN.search(stripped)
    return m.group(1) if m else UNKNOWN_NAME
