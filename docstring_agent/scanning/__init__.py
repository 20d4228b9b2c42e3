from .classifier import LineClassifier, classify, extract_element_name
from .doc_blocks import find_doc_block, has_doc_before
from .languages import CSHARP, JAVA, LanguagePatterns, get_language, language_for_path
from .models import DocBlock, Element, ElementKind
from .scanner import ElementScanner
from .spans import extract_span

__all__ = [
    "CSHARP", "JAVA", "DocBlock", "Element", "ElementKind", "ElementScanner",
    "LanguagePatterns", "LineClassifier",
    "classify", "extract_element_name", "extract_span", "find_doc_block",
    "get_language", "has_doc_before", "language_for_path",
]
