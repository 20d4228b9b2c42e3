"""
Language pattern tables for the line-oriented element scanner.

Each table is a handful of anchored regexes matched against a *stripped*
line.  Supporting another language means adding a table here; nothing else
in the scanner is language-aware.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Optional

# ---------------------------------------------------------------------------
# C#
# ---------------------------------------------------------------------------

# Generic arguments may contain spaces ("Dictionary<string, int>") but never
# braces, parentheses or "=", which keeps them from running into a body.
_GENERIC_ARGS = r"<[\w\s,.<>\[\]?]*>"
_TYPE_TOKEN = r"[\w.]+(?:" + _GENERIC_ARGS + r")?(?:\[[,\s]*\])*\??"

_CS_VISIBILITY = r"(?:(?:public|private|protected|internal)\s+){0,2}"
_CS_MEMBER_PREFIX = _CS_VISIBILITY + r"(?:(?:static|virtual|override|async)\s+)*"

_CS_CLASS = re.compile(
    _CS_VISIBILITY
    + r"(?:(?:static|abstract|sealed|partial)\s+)*"
    + r"(?P<keyword>class|interface|enum)\s+(?P<name>\w+)"
)
_CS_METHOD = re.compile(
    _CS_MEMBER_PREFIX
    + r"(?P<type>" + _TYPE_TOKEN + r")\s+(?P<name>\w+)\s*(?:" + _GENERIC_ARGS + r"\s*)?\("
)
_CS_PROPERTY = re.compile(
    _CS_MEMBER_PREFIX
    + r"(?P<type>" + _TYPE_TOKEN + r")\s+(?P<name>\w+)\s*"
    + r"\{\s*(?:(?:private|protected|internal)\s+)?(?:get|set)\b"
)

_CS_KEYWORDS = frozenset({
    "if", "else", "for", "foreach", "while", "do", "switch", "case", "catch",
    "using", "lock", "fixed", "return", "new", "throw", "await", "yield",
    "goto", "checked", "unchecked", "typeof", "nameof", "sizeof", "default",
    "when", "in", "is", "as", "var",
})

# ---------------------------------------------------------------------------
# Java
# ---------------------------------------------------------------------------

_JAVA_VISIBILITY = r"(?:(?:public|private|protected)\s+)?"
_JAVA_MEMBER_PREFIX = (
    _JAVA_VISIBILITY
    + r"(?:(?:static|final|abstract|synchronized|native|default)\s+)*"
    + r"(?:" + _GENERIC_ARGS + r"\s+)?"
)

_JAVA_CLASS = re.compile(
    _JAVA_VISIBILITY
    + r"(?:(?:static|abstract|final|sealed|strictfp)\s+)*"
    + r"(?P<keyword>class|interface|enum)\s+(?P<name>\w+)"
)
_JAVA_METHOD = re.compile(
    _JAVA_MEMBER_PREFIX
    + r"(?P<type>" + _TYPE_TOKEN + r")\s+(?P<name>\w+)\s*\("
)

_JAVA_KEYWORDS = frozenset({
    "if", "else", "for", "while", "do", "switch", "case", "catch", "try",
    "synchronized", "return", "new", "throw", "assert", "yield", "instanceof",
})


@dataclass(frozen=True)
class LanguagePatterns:
    """Pattern table for one language."""
    name: str
    class_pattern: re.Pattern
    method_pattern: re.Pattern
    property_pattern: Optional[re.Pattern]
    doc_prefixes: tuple[str, ...]
    doc_closing: re.Pattern
    line_comment: str = "//"
    block_comment_start: str = "/*"
    doc_opener: Optional[str] = None     # block-style docs must open with this
    attribute_pattern: Optional[re.Pattern] = None
    keywords: frozenset = frozenset()

    def is_doc_line(self, stripped: str) -> bool:
        return stripped.startswith(self.doc_prefixes)

    def is_plain_comment(self, stripped: str) -> bool:
        """An ordinary comment line that is not documentation."""
        if self.is_doc_line(stripped):
            return False
        return stripped.startswith((self.line_comment, self.block_comment_start))

    def is_doc_evidence(self, stripped: str) -> bool:
        """True for a doc-marker line or a line closing a documentation block."""
        if self.is_doc_line(stripped):
            return True
        if stripped.startswith((self.line_comment, self.block_comment_start)):
            return False
        return bool(self.doc_closing.search(stripped))

    def is_comment_line(self, stripped: str) -> bool:
        return self.is_doc_line(stripped) or self.is_plain_comment(stripped) \
            or stripped.startswith("*")

    def is_attribute_line(self, stripped: str) -> bool:
        return bool(self.attribute_pattern and self.attribute_pattern.match(stripped))


CSHARP = LanguagePatterns(
    name="csharp",
    class_pattern=_CS_CLASS,
    method_pattern=_CS_METHOD,
    property_pattern=_CS_PROPERTY,
    doc_prefixes=("///",),
    doc_closing=re.compile(r"^[^;{}]*</\w+>$"),
    attribute_pattern=re.compile(r"^\[.*\]$"),
    keywords=_CS_KEYWORDS,
)

JAVA = LanguagePatterns(
    name="java",
    class_pattern=_JAVA_CLASS,
    method_pattern=_JAVA_METHOD,
    property_pattern=None,
    doc_prefixes=("/**", "*"),
    doc_closing=re.compile(r"^[^;{}]*\*/$"),
    doc_opener="/**",
    attribute_pattern=re.compile(r"^@\w+(?:\.\w+)*(?:\(.*\))?$"),
    keywords=_JAVA_KEYWORDS,
)

_LANG_PATTERNS: dict[str, LanguagePatterns] = {
    "csharp": CSHARP,
    "java": JAVA,
}

_EXT_TO_LANG = {
    ".cs": "csharp",
    ".java": "java",
}

DEFAULT_LANGUAGE = "csharp"


def get_language(language: str | None) -> LanguagePatterns:
    """Pattern table for *language*; unknown languages fall back to C#."""
    return _LANG_PATTERNS.get((language or DEFAULT_LANGUAGE).lower(), CSHARP)


def language_for_path(file_path: str) -> str:
    ext = os.path.splitext(file_path)[1].lower()
    return _EXT_TO_LANG.get(ext, DEFAULT_LANGUAGE)
