"""Tests for InMemoryBuffer."""

import pytest

from docstring_agent.editing.buffer import InMemoryBuffer
from docstring_agent.editing.planner import EditKind, EditOperation, Position


def _insert(line, text):
    return EditOperation(Position(line, 0), EditKind.INSERT, text)


def _delete(start, end):
    return EditOperation(Position(start, 0), EditKind.DELETE_RANGE, range_end=Position(end, 0))


class TestInMemoryBuffer:
    def test_lines(self):
        buffer = InMemoryBuffer("a\nb\nc\n")
        assert buffer.line_count == 3
        assert buffer.line_at(1) == "b"
        assert buffer.lines() == ["a", "b", "c"]

    def test_insert_before_line(self):
        buffer = InMemoryBuffer("a\nb\n")
        assert buffer.apply_edits([_insert(1, "x\n")])
        assert buffer.text == "a\nx\nb\n"

    def test_delete_range(self):
        buffer = InMemoryBuffer("a\nb\nc\nd")
        assert buffer.apply_edits([_delete(1, 3)])
        assert buffer.text == "a\nd"

    def test_delete_to_end_of_buffer(self):
        buffer = InMemoryBuffer("a\nb\nc")
        assert buffer.apply_edits([_delete(1, 3)])
        assert buffer.lines() == ["a"]
        assert buffer.text == "a\n"

    def test_edits_apply_in_sequence(self):
        buffer = InMemoryBuffer("a\nb\nc\nd\n")
        assert buffer.apply_edits([_insert(3, "new\n"), _delete(1, 2)])
        assert buffer.lines() == ["a", "c", "new", "d"]

    def test_failed_batch_leaves_buffer_unchanged(self):
        buffer = InMemoryBuffer("a\nb\n")
        assert not buffer.apply_edits([_insert(1, "x\n"), _insert(10, "y\n")])
        assert buffer.text == "a\nb\n"

    def test_inverted_range_rejected(self):
        buffer = InMemoryBuffer("a\nb\nc")
        assert not buffer.apply_edits([_delete(2, 1)])
        assert buffer.lines() == ["a", "b", "c"]

    def test_delete_without_end_rejected(self):
        buffer = InMemoryBuffer("a\nb")
        assert not buffer.apply_edits([EditOperation(Position(0, 0), EditKind.DELETE_RANGE)])

    def test_crlf_preserved(self):
        buffer = InMemoryBuffer("a\r\nb\r\n")
        assert buffer.apply_edits([_insert(1, "x\r\n")])
        assert buffer.text == "a\r\nx\r\nb\r\n"

    def test_no_trailing_newline_preserved(self):
        buffer = InMemoryBuffer("a\nb")
        assert buffer.apply_edits([_insert(0, "x\n")])
        assert buffer.text == "x\na\nb"

    def test_empty_batch(self):
        buffer = InMemoryBuffer("a")
        assert buffer.apply_edits([])
        assert buffer.text == "a"

    def test_from_lines(self):
        buffer = InMemoryBuffer.from_lines(["x", "y"])
        assert buffer.text == "x\ny"


class TestRoundTrip:
    @pytest.mark.parametrize("text", [
        "class A\x0c{\n}\n",
        'var s = "a\u2028b";\nvar t = "c\x85d";\n',
        "a\vb\r\n",
        "first\r\nsecond\nthird\r\n",
        "no newline at end",
        "\n\n",
        "",
    ])
    def test_text_unchanged(self, text):
        assert InMemoryBuffer(text).text == text

    def test_only_newlines_split_lines(self):
        buffer = InMemoryBuffer("class A\x0c{\n  x\u2029y\n}")
        assert buffer.lines() == ["class A\x0c{", "  x\u2029y", "}"]

    def test_mixed_endings_kept_around_edit(self):
        buffer = InMemoryBuffer("a\r\nb\nc\r\n")
        assert buffer.apply_edits([_insert(2, "x\n")])
        assert buffer.text == "a\r\nb\nx\r\nc\r\n"
        assert buffer.lines() == ["a", "b", "x", "c"]

    def test_blank_lines_counted(self):
        buffer = InMemoryBuffer("a\n\n\nb\n")
        assert buffer.lines() == ["a", "", "", "b"]
        assert buffer.apply_edits([_insert(3, "x\n")])
        assert buffer.text == "a\n\n\nx\nb\n"
