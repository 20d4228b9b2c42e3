"""Tests for the at-cursor and whole-buffer documentation workflows."""

from unittest.mock import MagicMock, call

import pytest

from docstring_agent.editing.buffer import InMemoryBuffer
from docstring_agent.errors import EditApplyError, GenerationError, WorkflowBusyError
from docstring_agent.generation.generator import DocstringGenerator
from docstring_agent.generation.pacing import RequestPacer
from docstring_agent.llm.base import LLMClient
from docstring_agent.workflow import CancellationToken, DocumentationWorkflow


SOURCE = """\
public class Calculator
{
    public int Add(int a, int b)
    {
        return a + b;
    }

    /// <summary>
    /// Subtracts.
    /// </summary>
    public int Sub(int a, int b)
    {
        return a - b;
    }

    public int Mul(int a, int b)
    {
        return a * b;
    }
}
"""

DOC = "/// <summary>\n/// Doc.\n/// </summary>"


class RejectingBuffer(InMemoryBuffer):
    def apply_edits(self, edits):
        return False


@pytest.fixture
def llm():
    client = MagicMock(spec=LLMClient)
    client.generate_response.return_value = DOC
    return client


@pytest.fixture
def workflow(llm):
    return DocumentationWorkflow(DocstringGenerator(llm))


class TestDocumentAtCursor:
    def test_inserts_above_element(self, workflow, llm):
        buffer = InMemoryBuffer(SOURCE)
        element = workflow.document_at_cursor(buffer, 4, "csharp")

        assert element.name == "Add"
        assert buffer.lines()[2:6] == [
            "    /// <summary>",
            "    /// Doc.",
            "    /// </summary>",
            "    public int Add(int a, int b)",
        ]
        prompt = llm.generate_response.call_args[0][0]
        assert "public int Add(int a, int b)" in prompt
        assert "return a + b;" in prompt

    def test_nothing_found(self, workflow, llm):
        buffer = InMemoryBuffer("using System;\n")
        assert workflow.document_at_cursor(buffer, 0, "csharp") is None
        assert buffer.text == "using System;\n"
        llm.generate_response.assert_not_called()

    def test_replace_existing(self, workflow):
        buffer = InMemoryBuffer(SOURCE)
        element = workflow.document_at_cursor(buffer, 12, "csharp", replace_existing=True)

        assert element.name == "Sub"
        assert "Subtracts." not in buffer.text
        assert "    /// Doc.\n    /// </summary>\n    public int Sub" in buffer.text

    def test_generation_error_leaves_buffer(self, workflow, llm):
        llm.generate_response.side_effect = GenerationError("service down")
        buffer = InMemoryBuffer(SOURCE)
        with pytest.raises(GenerationError):
            workflow.document_at_cursor(buffer, 4, "csharp")
        assert buffer.text == SOURCE

    def test_rejected_edit_raises(self, workflow):
        with pytest.raises(EditApplyError):
            workflow.document_at_cursor(RejectingBuffer(SOURCE), 4, "csharp")

    def test_indented_response_aligned_to_element(self, workflow, llm):
        llm.generate_response.return_value = "    /// <summary>\n    /// Adds.\n    /// </summary>"
        buffer = InMemoryBuffer(SOURCE)
        workflow.document_at_cursor(buffer, 4, "csharp")
        assert buffer.lines()[2:5] == [
            "    /// <summary>",
            "    /// Adds.",
            "    /// </summary>",
        ]

    def test_failure_backs_off_next_request(self, llm):
        sleep = MagicMock()
        llm.generate_response.side_effect = [GenerationError("busy"), DOC]
        workflow = DocumentationWorkflow(
            DocstringGenerator(llm), pacer=RequestPacer(delay=1.0, sleep=sleep),
        )
        buffer = InMemoryBuffer(SOURCE)
        with pytest.raises(GenerationError):
            workflow.document_at_cursor(buffer, 4, "csharp")
        assert workflow.pacer.current_delay == 2.0

        workflow.document_at_cursor(buffer, 4, "csharp")
        sleep.assert_called_once_with(2.0)
        assert workflow.pacer.current_delay == 1.0


class TestDocumentAll:
    def test_documents_undocumented_elements(self, workflow, llm):
        buffer = InMemoryBuffer(SOURCE)
        result = workflow.document_all(buffer, "csharp")

        assert result.candidates == 3
        assert result.generated == 3
        assert result.applied == 3
        assert result.failed == 0
        assert not result.cancelled
        assert llm.generate_response.call_count == 3
        assert buffer.text.count("/// Doc.") == 3
        assert "Subtracts." in buffer.text

        # Running again finds nothing left to do
        again = workflow.document_all(buffer, "csharp")
        assert again.candidates == 0
        assert llm.generate_response.call_count == 3

    def test_failures_are_counted_and_skipped(self, workflow, llm):
        llm.generate_response.side_effect = [DOC, GenerationError("boom"), DOC]
        buffer = InMemoryBuffer(SOURCE)
        result = workflow.document_all(buffer, "csharp")

        assert result.failed == 1
        assert result.failures == ["Add"]
        assert result.applied == 2
        lines = buffer.lines()
        add = next(i for i, line in enumerate(lines) if "int Add(" in line)
        assert lines[add - 1] == "{"

    def test_progress_reported(self, workflow):
        progress = MagicMock()
        workflow.document_all(InMemoryBuffer(SOURCE), "csharp", on_progress=progress)
        assert [c.args[:2] for c in progress.call_args_list] == [(1, 3), (2, 3), (3, 3)]
        assert [c.args[2].name for c in progress.call_args_list] == ["Calculator", "Add", "Mul"]

    def test_replace_existing_covers_all_elements(self, workflow):
        buffer = InMemoryBuffer(SOURCE)
        result = workflow.document_all(buffer, "csharp", replace_existing=True)
        assert result.candidates == 4
        assert result.applied == 4
        assert "Subtracts." not in buffer.text
        assert buffer.text.count("/// Doc.") == 4

    def test_pacing_between_requests(self, llm):
        sleep = MagicMock()
        llm.generate_response.side_effect = [DOC, GenerationError("busy"), DOC]
        workflow = DocumentationWorkflow(
            DocstringGenerator(llm), pacer=RequestPacer(delay=1.0, sleep=sleep),
        )
        workflow.document_all(InMemoryBuffer(SOURCE), "csharp")
        assert sleep.call_args_list == [call(1.0), call(2.0)]

    def test_rejected_batch_raises(self, workflow):
        with pytest.raises(EditApplyError):
            workflow.document_all(RejectingBuffer(SOURCE), "csharp")


class TestCancellation:
    def _cancel_after_first(self, token):
        def on_progress(index, total, element):
            if index == 1:
                token.cancel()
        return on_progress

    def test_partial_results_applied(self, llm):
        token = CancellationToken()
        workflow = DocumentationWorkflow(DocstringGenerator(llm))
        buffer = InMemoryBuffer(SOURCE)

        result = workflow.document_all(
            buffer, "csharp", cancel_token=token, on_progress=self._cancel_after_first(token),
        )

        assert result.cancelled
        assert result.generated == 1
        assert result.applied == 1
        assert llm.generate_response.call_count == 1
        assert buffer.lines()[:4] == ["/// <summary>", "/// Doc.", "/// </summary>", "public class Calculator"]

    def test_partial_results_discarded(self, llm):
        token = CancellationToken()
        workflow = DocumentationWorkflow(DocstringGenerator(llm), apply_on_cancel=False)
        buffer = InMemoryBuffer(SOURCE)

        result = workflow.document_all(
            buffer, "csharp", cancel_token=token, on_progress=self._cancel_after_first(token),
        )

        assert result.cancelled
        assert result.generated == 1
        assert result.applied == 0
        assert buffer.text == SOURCE

    def test_cancelled_before_start(self, workflow, llm):
        token = CancellationToken()
        token.cancel()
        result = workflow.document_all(InMemoryBuffer(SOURCE), "csharp", cancel_token=token)
        assert result.cancelled
        assert result.generated == 0
        llm.generate_response.assert_not_called()


class TestExclusiveRuns:
    def test_reentrant_run_rejected(self, workflow):
        buffer = InMemoryBuffer(SOURCE)

        def on_progress(index, total, element):
            workflow.document_at_cursor(buffer, 4, "csharp")

        with pytest.raises(WorkflowBusyError):
            workflow.document_all(buffer, "csharp", on_progress=on_progress)
        assert buffer.text == SOURCE

        # The guard is released once the run ends
        assert workflow.document_at_cursor(buffer, 4, "csharp").name == "Add"

    def test_other_buffers_unaffected(self, workflow):
        first = InMemoryBuffer(SOURCE)
        second = InMemoryBuffer(SOURCE)

        def on_progress(index, total, element):
            if index == 1:
                workflow.document_at_cursor(second, 4, "csharp")

        workflow.document_all(first, "csharp", on_progress=on_progress)
        assert "/// Doc." in second.text
