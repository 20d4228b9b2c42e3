import argparse
import logging
import sys
from typing import Optional

from .config import Config
from .editing.buffer import InMemoryBuffer
from .errors import ConfigurationError, DocstringAgentError
from .generation.generator import DocstringGenerator
from .generation.pacing import RequestPacer
from .llm.base import LLMClient
from .llm.chat_completions import AzureOpenAIClient, ChatCompletionsClient
from .llm.ollama import OllamaClient
from .scanning.languages import language_for_path
from .scanning.scanner import ElementScanner
from .workflow import DocumentationWorkflow


def build_client(provider: str, model: str) -> Optional[LLMClient]:
    Config.validate_provider(provider)
    if provider == "ollama":
        return OllamaClient(base_url=Config.OLLAMA_BASE_URL, model=model)
    if provider == "lm_studio":
        return ChatCompletionsClient(
            base_url=Config.LM_STUDIO_BASE_URL, model=model, api_key=Config.OPENAI_API_KEY or None,
        )
    if provider == "azure":
        return AzureOpenAIClient(
            endpoint=Config.AZURE_OPENAI_ENDPOINT,
            api_key=Config.AZURE_OPENAI_API_KEY,
            deployment=Config.AZURE_OPENAI_DEPLOYMENT,
            api_version=Config.AZURE_OPENAI_API_VERSION,
        )
    return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="AI Docstring Generator")
    parser.add_argument("file", help="Source file to document")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--line", type=int, help="Document the element at or above this 1-based line")
    mode.add_argument("--all", action="store_true", help="Document every undocumented element")
    mode.add_argument("--list", action="store_true", help="List elements and their documentation status (default)")
    parser.add_argument("--provider", choices=Config.PROVIDERS, default=Config.DEFAULT_PROVIDER, help="The LLM provider to use")
    parser.add_argument("--model", default=Config.DEFAULT_MODEL, help="The model name to use")
    parser.add_argument("--language", help="Language tag (detected from the file extension by default)")
    parser.add_argument("--replace", action="store_true", help="Replace existing documentation blocks")
    parser.add_argument("--dry-run", action="store_true", help="Print the result instead of writing the file")
    parser.add_argument("--delay", type=float, default=Config.REQUEST_DELAY, help="Seconds between requests")
    parser.add_argument("--track-literals", action="store_true", default=Config.TRACK_LITERALS,
                        help="Ignore braces inside strings and comments when measuring spans")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _print_inventory(path: str, buffer: InMemoryBuffer, language: str, track_literals: bool) -> None:
    elements = ElementScanner(language, track_literals=track_literals).scan_all(buffer.lines())
    print(f"--- {path}: {len(elements)} elements ---")
    for element in elements:
        status = "documented" if element.has_documentation else "missing"
        print(
            f"  {element.start_line + 1:>5}-{element.end_line + 1:<5} "
            f"{element.kind.value:<9} {element.name:<30} {status}"
        )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    language = args.language or language_for_path(args.file)
    with open(args.file, "r", encoding="utf-8", newline="") as f:
        buffer = InMemoryBuffer(f.read())

    if args.line is None and not args.all:
        _print_inventory(args.file, buffer, language, args.track_literals)
        return 0

    try:
        client = build_client(args.provider, args.model)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    workflow = DocumentationWorkflow(
        DocstringGenerator(client),
        pacer=RequestPacer(delay=args.delay),
        track_literals=args.track_literals,
    )

    try:
        if args.line is not None:
            element = workflow.document_at_cursor(
                buffer, args.line - 1, language, replace_existing=args.replace,
            )
            if element is None:
                print("No function or class found at cursor position")
                return 1
            print(f"Docstring generated for {element.kind.value} {element.name}")
        else:
            result = workflow.document_all(
                buffer, language, replace_existing=args.replace,
                on_progress=lambda i, n, e: print(f"  Processing {e.name} ({i}/{n})"),
            )
            if result.candidates == 0:
                print("All elements are already documented!")
                return 0
            print(f"Generated {result.applied} docstrings ({result.failed} failed)")
    except DocstringAgentError as e:
        print(f"Failed to generate docstring: {e}", file=sys.stderr)
        return 1

    if args.dry_run:
        print(buffer.text, end="")
    else:
        with open(args.file, "w", encoding="utf-8", newline="") as f:
            f.write(buffer.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
