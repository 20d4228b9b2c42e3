"""
Generate-and-insert workflows over a text buffer.

Requests are issued one element at a time through a ``RequestPacer``.  Only
one workflow may run against a given buffer at a time: every planned edit
relies on the line numbers of a single scan, so interleaved runs would
corrupt the buffer.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, Sequence

from .editing.buffer import TextBuffer
from .editing.planner import BatchEditPlanner, EditKind, EditOperation
from .errors import EditApplyError, GenerationError, WorkflowBusyError
from .generation.generator import DocstringGenerator
from .generation.pacing import RequestPacer
from .scanning.models import Element
from .scanning.scanner import ElementScanner

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, Element], None]


class CancellationToken:
    """Cooperative cancellation flag, checked between elements."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class BatchResult:
    """Outcome of a whole-buffer run."""
    candidates: int = 0
    generated: int = 0
    failed: int = 0
    applied: int = 0
    cancelled: bool = False
    failures: list[str] = field(default_factory=list)


class DocumentationWorkflow:
    """Scan, generate, plan and apply documentation for a buffer.

    Parameters
    ----------
    generator:
        Produces documentation text for one element.
    pacer:
        Spacing between sequential requests.  Defaults to no delay.
    apply_on_cancel:
        When a batch is cancelled, still apply the text generated so far
        (default) or discard it.
    skip_bodiless:
        Passed to ``ElementScanner.scan_at``; ``False`` lets the cursor
        search stop at ``;``-terminated member declarations.
    """

    _active_buffers: set[int] = set()
    _active_lock = threading.Lock()

    def __init__(
        self,
        generator: DocstringGenerator,
        pacer: Optional[RequestPacer] = None,
        track_literals: bool = False,
        apply_on_cancel: bool = True,
        skip_bodiless: bool = True,
    ) -> None:
        self.generator = generator
        self.pacer = pacer or RequestPacer(delay=0.0)
        self.track_literals = track_literals
        self.apply_on_cancel = apply_on_cancel
        self.skip_bodiless = skip_bodiless

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def document_at_cursor(
        self,
        buffer: TextBuffer,
        cursor_line: int,
        language: str,
        replace_existing: bool = False,
    ) -> Optional[Element]:
        """Document the nearest element above *cursor_line*.

        Returns the element, or None when there is nothing to document.
        Raises GenerationError or EditApplyError.
        """
        with self._exclusive(buffer):
            scanner = self._scanner(language)
            element = scanner.scan_at(buffer.lines(), cursor_line, skip_bodiless=self.skip_bodiless)
            if element is None:
                logger.info("[Workflow] No function or class found at line %d", cursor_line)
                return None
            if element.has_documentation and not replace_existing:
                logger.warning(
                    "[Workflow] %s already has documentation; adding another block",
                    element.name,
                )

            self.pacer.wait()
            try:
                text = self.generator.generate(element.code, scanner.language.name, element.kind)
            except GenerationError:
                self.pacer.record_failure()
                raise
            self.pacer.record_success()

            edits = BatchEditPlanner(replace_existing).plan([(element, text)])
            self._apply(buffer, edits)
            logger.info("[Workflow] Documented %s %s", element.kind.value, element.name)
            return element

    def document_all(
        self,
        buffer: TextBuffer,
        language: str,
        replace_existing: bool = False,
        cancel_token: Optional[CancellationToken] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> BatchResult:
        """Document every undocumented element (all elements when replacing).

        Generation failures are counted and skipped.  All edits are applied
        in one atomic batch at the end.
        """
        with self._exclusive(buffer):
            scanner = self._scanner(language)
            elements = scanner.scan_all(buffer.lines())
            candidates = [e for e in elements if replace_existing or not e.has_documentation]
            result = BatchResult(candidates=len(candidates))
            if not candidates:
                logger.info("[Workflow] All elements are already documented")
                return result

            generated: list[tuple[Element, str]] = []
            for index, element in enumerate(candidates):
                if cancel_token is not None and cancel_token.is_cancelled:
                    result.cancelled = True
                    logger.info(
                        "[Workflow] Cancelled after %d of %d elements", index, len(candidates),
                    )
                    break
                if on_progress is not None:
                    on_progress(index + 1, len(candidates), element)

                self.pacer.wait()
                try:
                    text = self.generator.generate(
                        element.code, scanner.language.name, element.kind,
                    )
                except GenerationError as e:
                    self.pacer.record_failure()
                    result.failed += 1
                    result.failures.append(element.name)
                    logger.error(
                        "[Workflow] Failed to generate docstring for %s: %s", element.name, e,
                    )
                    continue
                self.pacer.record_success()
                generated.append((element, text))

            result.generated = len(generated)
            if result.cancelled and not self.apply_on_cancel:
                logger.info("[Workflow] Discarding %d generated docstrings", len(generated))
                return result
            if not generated:
                return result

            edits = BatchEditPlanner(replace_existing).plan(generated)
            self._apply(buffer, edits)
            result.applied = sum(1 for e in edits if e.kind is EditKind.INSERT)
            logger.info(
                "[Workflow] Applied %d docstrings (%d failed)", result.applied, result.failed,
            )
            return result

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _scanner(self, language: str) -> ElementScanner:
        return ElementScanner(language, track_literals=self.track_literals)

    @staticmethod
    def _apply(buffer: TextBuffer, edits: Sequence[EditOperation]) -> None:
        if not edits:
            return
        if not buffer.apply_edits(edits):
            raise EditApplyError("Buffer rejected the edit batch", {"edits": len(edits)})

    @classmethod
    @contextmanager
    def _exclusive(cls, buffer: TextBuffer) -> Iterator[None]:
        key = id(buffer)
        with cls._active_lock:
            if key in cls._active_buffers:
                raise WorkflowBusyError("A documentation run is already in progress for this buffer")
            cls._active_buffers.add(key)
        try:
            yield
        finally:
            with cls._active_lock:
                cls._active_buffers.discard(key)
