from .generator import DocstringGenerator, build_prompt, format_docstring, offline_docstring
from .pacing import RequestPacer
from .templates import Template, get_template

__all__ = [
    "DocstringGenerator", "RequestPacer", "Template", "build_prompt",
    "format_docstring", "get_template", "offline_docstring",
]
