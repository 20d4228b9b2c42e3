"""
Documentation generator: prompt construction and response clean-up around
an injected ``LLMClient``.

Without a client the generator answers from canned offline text, so the
rest of the pipeline can run with no service configured.
"""

from __future__ import annotations

import logging
import re
import textwrap
from typing import Optional, Union

from ..errors import GenerationError
from ..llm.base import LLMClient
from ..scanning.models import ElementKind
from .templates import get_template

logger = logging.getLogger(__name__)

_CODE_BLOCK = re.compile(r"```[\w#+-]*\n(.*?)```", re.DOTALL)
_OPENING_FENCE = re.compile(r"^```[\w#+-]*\n?")
_CLOSING_FENCE = re.compile(r"\n?```$")
_LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t]*\r?\n)+")
_PARAM_LIST = re.compile(r"\(([^()]*)\)")

_PROMPT = """Generate a {language} docstring for this {element_type}:

{code}

Use this format:
{example}

Requirements:
- Write a clear, concise summary
- Document all parameters with types and descriptions
- Document the return value
- Include any exceptions that might be thrown
- Follow Microsoft style guidelines
- Be accurate and helpful

Return only the docstring, no additional text."""


def build_prompt(code: str, language: str, element_type: str) -> str:
    template = get_template(language, element_type)
    return _PROMPT.format(
        language=language, element_type=element_type, code=code, example=template.example,
    )


def format_docstring(response: str) -> str:
    """Strip Markdown fences and common indentation from an LLM answer.

    Indentation is removed before any other whitespace so that every line of
    the block loses the same prefix.
    """
    block = _CODE_BLOCK.search(response)
    if block:
        body = block.group(1)
    elif response.strip().startswith("```"):
        body = _CLOSING_FENCE.sub("", _OPENING_FENCE.sub("", response.strip()))
    else:
        body = response
    body = _LEADING_BLANK_LINES.sub("", body)
    return textwrap.dedent(body).rstrip()


def _parameter_names(code: str) -> list[str]:
    m = _PARAM_LIST.search(code)
    if not m or not m.group(1).strip():
        return []
    names = []
    for raw in m.group(1).split(","):
        declaration = raw.split("=", 1)[0].strip()
        if declaration:
            names.append(declaration.split()[-1])
    return names


def offline_docstring(code: str, language: str, element_type: str) -> str:
    """Placeholder documentation used when no LLM client is configured."""
    if language == "csharp":
        if element_type == "method":
            lines = [
                "/// <summary>",
                "/// Processes the specified data and returns the result.",
                "/// </summary>",
            ]
            lines += [
                f'/// <param name="{name}">The {name} value.</param>'
                for name in _parameter_names(code)
            ]
            lines.append("/// <returns>The processed result.</returns>")
            return "\n".join(lines)
        if element_type == "property":
            return "/// <summary>\n/// Gets or sets the value.\n/// </summary>"
        return "/// <summary>\n/// Represents a service for handling core business logic.\n/// </summary>"
    if language == "java":
        lines = ["/**", " * Describes the purpose of this element."]
        if element_type == "method":
            lines += [f" * @param {name} the {name} value" for name in _parameter_names(code)]
        lines.append(" */")
        return "\n".join(lines)
    return "// Add documentation"


class DocstringGenerator:
    """``generate(code, language, element_kind) -> text`` over an LLM client."""

    def __init__(self, client: Optional[LLMClient] = None) -> None:
        self.client = client

    def generate(
        self,
        code: str,
        language: str,
        element_kind: Union[ElementKind, str],
    ) -> str:
        element_type = element_kind.value if isinstance(element_kind, ElementKind) else element_kind
        if self.client is None:
            logger.debug("[Generator] No LLM client configured, using offline text")
            return offline_docstring(code, language, element_type)

        prompt = build_prompt(code, language, element_type)
        raw = self.client.generate_response(prompt)
        docstring = format_docstring(raw or "")
        if not docstring:
            raise GenerationError(
                "LLM returned no documentation",
                {"language": language, "element_type": element_type},
            )
        return docstring
