"""Tests for chunk selection, merging and joining in the compression engine."""

import sys

import pytest

from codepack.core.compress import (
    CHUNK_SEPARATOR,
    Chunk,
    GrammarRegistry,
    Language,
    compress_content,
    dedupe_chunks,
    join_chunks,
    merge_chunks,
)
from codepack.core.compress.engine import _end_row, _header_range
from codepack.core.errors import CompressionError


class _Node:
    """Just enough of a tree_sitter.Node for row arithmetic."""

    def __init__(self, start_point, end_point):
        self.start_point = start_point
        self.end_point = end_point
        self.named_children = []

    def child_by_field_name(self, name):
        return None


def _chunk(start, end, capture="name.definition.function", content=None):
    return Chunk(
        content=content if content is not None else f"rows {start}-{end}",
        start_row=start,
        end_row=end,
        capture_name=capture,
    )


class TestChunk:
    def test_start_after_end_is_rejected(self):
        with pytest.raises(ValueError):
            Chunk(content="x", start_row=3, end_row=2)


class TestNodeRows:
    def test_node_ending_at_column_zero_stops_on_previous_row(self):
        # A line comment that owns its newline
        assert _end_row(_Node((0, 0), (1, 0))) == 0

    def test_node_ending_mid_line_keeps_its_row(self):
        assert _end_row(_Node((0, 0), (2, 1))) == 2

    def test_empty_node_on_one_row(self):
        assert _end_row(_Node((3, 0), (3, 0))) == 3

    def test_header_without_body_excludes_trailing_newline(self):
        assert _header_range(_Node((4, 0), (5, 0))) == (4, 4)


class TestDedupe:
    def test_longest_chunk_per_start_row_wins(self):
        short = _chunk(0, 0, content="def f():")
        long = _chunk(0, 1, content="def f():\n    pass")

        assert dedupe_chunks([short, long]) == [long]
        assert dedupe_chunks([long, short]) == [long]

    def test_equal_length_prefers_definition_names(self):
        comment = _chunk(4, 4, capture="comment", content="abc")
        name = _chunk(4, 4, capture="name.definition.class", content="xyz")
        call = _chunk(4, 4, capture="name.reference.call", content="uvw")

        for order in ([comment, name, call], [call, comment, name], [name, call, comment]):
            assert dedupe_chunks(order) == [name]

    def test_result_sorted_by_start_row(self):
        chunks = [_chunk(7, 7), _chunk(2, 3), _chunk(5, 5)]
        assert [c.start_row for c in dedupe_chunks(chunks)] == [2, 5, 7]


class TestMerge:
    def test_consecutive_rows_merge(self):
        merged = merge_chunks(
            [_chunk(0, 2, content="a"), _chunk(3, 3, content="b"), _chunk(5, 6, content="c")]
        )

        assert [(c.start_row, c.end_row) for c in merged] == [(0, 3), (5, 6)]
        assert merged[0].content == "a\nb"
        assert merged[1].content == "c"

    def test_overlapping_rows_start_a_new_run(self):
        merged = merge_chunks([_chunk(0, 4), _chunk(2, 2)])
        assert len(merged) == 2

    def test_empty(self):
        assert merge_chunks([]) == []


class TestJoin:
    def test_runs_are_trimmed_and_separated(self):
        runs = [_chunk(0, 0, content="  import os  "), _chunk(2, 3, content="def f():\n    pass\n")]
        assert join_chunks(runs) == f"import os\n{CHUNK_SEPARATOR}\ndef f():\n    pass"

    def test_no_runs_is_empty_string(self):
        assert join_chunks([]) == ""


class TestCompressContent:
    @pytest.mark.parametrize("extension", [".txt", "md", "", ".unknown"])
    def test_unsupported_extension_is_returned_unchanged(self, extension):
        content = "some text\n\nmore"
        assert compress_content(content, extension) == content

    @pytest.mark.parametrize(
        "extension, language",
        [(".py", Language.PYTHON), ("RS", Language.RUST), (".tsx", Language.TSX), (".h", Language.C)],
    )
    def test_extension_lookup(self, extension, language):
        assert Language.from_extension(extension) is language

    def test_missing_grammar_raises_compression_error(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "tree_sitter_go", None)

        with pytest.raises(CompressionError, match="tree_sitter_go"):
            compress_content("package main\n", ".go", registry=GrammarRegistry())
