"""
Compression engine: a signature view of source code.

Keeps declarations, imports, comments and call sites, and drops
implementation bodies. Selected lines are grouped into runs of consecutive
lines which are joined with a separator line.
"""

import logging
from typing import Any, Iterable

from codepack.core.errors import CompressionError

from .languages import GrammarRegistry, Language, get_grammar_registry
from .models import Chunk

logger = logging.getLogger(__name__)

CHUNK_SEPARATOR = "⋮----"

# Captures whose name contains one of these are kept
_SELECTED_CAPTURE_KEYWORDS = ("name", "comment", "import", "require")

# How far below the enclosing node a body field is searched for
_BODY_SEARCH_DEPTH = 3


def _is_selected(capture_name: str) -> bool:
    return any(keyword in capture_name for keyword in _SELECTED_CAPTURE_KEYWORDS)


def _capture_priority(capture_name: str) -> int:
    """Rank used to break ties between equally long chunks; lower wins."""
    if capture_name.startswith("name.definition"):
        return 0
    if "import" in capture_name or "require" in capture_name or capture_name.endswith(".module"):
        return 1
    if "comment" in capture_name:
        return 2
    if "reference" in capture_name:
        return 3
    return 4


def _end_row(node: Any) -> int:
    """Last row a node covers."""
    row, column = node.end_point
    # Nodes that own their trailing newline end at column 0 of the next row
    if column == 0 and row > node.start_point[0]:
        return row - 1
    return row


def _find_body(node: Any, depth: int = _BODY_SEARCH_DEPTH) -> Any | None:
    """Find a ``body`` field on node or on a descendant up to depth levels down."""
    body = node.child_by_field_name("body")
    if body is not None or depth <= 0:
        return body
    for child in node.named_children:
        body = _find_body(child, depth - 1)
        if body is not None:
            return body
    return None


def _header_range(node: Any) -> tuple[int, int]:
    """
    Row range of a construct up to its body header.

    For brace bodies the range ends on the line holding ``{``; for indented
    bodies it ends on the line before the body. Without a body the whole
    node is used.
    """
    start_row = node.start_point[0]
    body = _find_body(node)
    if body is None:
        return start_row, _end_row(node)

    body_row = body.start_point[0]
    if (body.text or b"")[:1] == b"{":
        end_row = body_row
    else:
        end_row = body_row - 1
    return start_row, max(start_row, end_row)


def _enclosing_node(name_node: Any, match_nodes: list[Any]) -> Any:
    """Largest node of the same match that contains name_node."""
    best = name_node
    for candidate in match_nodes:
        if (
            candidate.start_byte <= name_node.start_byte
            and candidate.end_byte >= name_node.end_byte
            and candidate.end_byte - candidate.start_byte > best.end_byte - best.start_byte
        ):
            best = candidate
    return best


def _iter_matches(query: Any, root: Any) -> Iterable[tuple[int, dict[str, list[Any]]]]:
    import tree_sitter

    for pattern_index, captures in tree_sitter.QueryCursor(query).matches(root):
        yield pattern_index, {
            name: nodes if isinstance(nodes, list) else [nodes] for name, nodes in captures.items()
        }


def collect_chunks(query: Any, root: Any, lines: list[str]) -> list[Chunk]:
    """
    Turn query matches into chunks of verbatim source lines.

    Args:
        query: Compiled tree_sitter.Query
        root: Root node of the parsed tree
        lines: Source split on newlines

    Returns:
        Unordered chunks, one per selected capture
    """
    last_row = len(lines) - 1
    chunks: list[Chunk] = []

    for _, captures in _iter_matches(query, root):
        match_nodes = [node for nodes in captures.values() for node in nodes]

        for capture_name, nodes in captures.items():
            if not _is_selected(capture_name):
                continue
            for node in nodes:
                if "name" in capture_name:
                    start_row, end_row = _header_range(_enclosing_node(node, match_nodes))
                else:
                    start_row, end_row = node.start_point[0], _end_row(node)

                end_row = min(end_row, last_row)
                if start_row > end_row:
                    continue

                chunks.append(
                    Chunk(
                        content="\n".join(lines[start_row : end_row + 1]),
                        start_row=start_row,
                        end_row=end_row,
                        capture_name=capture_name,
                    )
                )

    return chunks


def dedupe_chunks(chunks: Iterable[Chunk]) -> list[Chunk]:
    """
    Keep one chunk per start row, sorted by start row.

    The longest content wins; equal lengths fall back to capture priority and
    then capture name so the result never depends on match order.
    """
    best: dict[int, Chunk] = {}
    for chunk in chunks:
        current = best.get(chunk.start_row)
        if current is None or _chunk_rank(chunk) < _chunk_rank(current):
            best[chunk.start_row] = chunk
    return [best[row] for row in sorted(best)]


def _chunk_rank(chunk: Chunk) -> tuple[int, int, str]:
    return (-len(chunk.content), _capture_priority(chunk.capture_name), chunk.capture_name)


def merge_chunks(chunks: list[Chunk]) -> list[Chunk]:
    """
    Merge chunks whose rows are directly consecutive.

    Args:
        chunks: Chunks sorted by start_row

    Returns:
        Runs of consecutive lines
    """
    merged: list[Chunk] = []
    for chunk in chunks:
        if merged and chunk.start_row == merged[-1].end_row + 1:
            previous = merged[-1]
            merged[-1] = Chunk(
                content=f"{previous.content}\n{chunk.content}",
                start_row=previous.start_row,
                end_row=chunk.end_row,
                capture_name=previous.capture_name,
            )
        else:
            merged.append(chunk)
    return merged


def join_chunks(chunks: Iterable[Chunk]) -> str:
    """Join trimmed runs with the separator line."""
    return f"\n{CHUNK_SEPARATOR}\n".join(chunk.content.strip() for chunk in chunks)


def compress_content(
    content: str, extension: str, registry: GrammarRegistry | None = None
) -> str:
    """
    Compress source text to its signature view.

    Args:
        content: Source text
        extension: File extension, with or without the leading dot
        registry: Grammar registry; defaults to the process-wide one

    Returns:
        The compressed text, or content unchanged for unsupported extensions

    Raises:
        CompressionError: If the grammar is unavailable or parsing fails
    """
    language = Language.from_extension(extension)
    if language is None:
        return content

    registry = registry or get_grammar_registry()
    parser = registry.parser(language)
    query = registry.query(language)

    try:
        tree = parser.parse(content.encode("utf-8"))
    except (ValueError, RuntimeError) as e:
        raise CompressionError(f"Failed to parse {language.value} source: {e}") from e
    if tree is None:
        raise CompressionError(f"Failed to parse {language.value} source")

    lines = content.split("\n")
    chunks = dedupe_chunks(collect_chunks(query, tree.root_node, lines))
    return join_chunks(merge_chunks(chunks))
