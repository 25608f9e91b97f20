"""
Token count tree: per-directory token sums for the packed files.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable

_BRANCH = "├── "
_LAST = "└── "
_PIPE = "│   "
_SPACE = "    "


@dataclass
class FileTokenInfo:
    """A file entry on its parent directory node."""

    name: str
    tokens: int


@dataclass
class TokenTreeNode:
    """
    A directory in the token tree.

    Attributes:
        token_sum: Tokens of this node's files plus all descendant sums
        files: File entries directly in this directory
        children: Subdirectories keyed by path segment
    """

    token_sum: int = 0
    files: list[FileTokenInfo] = field(default_factory=list)
    children: dict[str, "TokenTreeNode"] = field(default_factory=dict)


def _calculate_sums(node: TokenTreeNode) -> int:
    file_tokens = sum(f.tokens for f in node.files)
    child_tokens = sum(_calculate_sums(child) for child in node.children.values())
    node.token_sum = file_tokens + child_tokens
    return node.token_sum


def build_token_tree(entries: Iterable[tuple[str, int]]) -> TokenTreeNode:
    """
    Build a tree from (relative_path, token_count) pairs.

    Every path segment but the last becomes a directory node; the last one is
    recorded as a file on its parent. Sums are computed in one post-order pass.
    """
    root = TokenTreeNode()

    for path, tokens in entries:
        parts = [p for p in str(path).replace("\\", "/").split("/") if p]
        if not parts:
            continue

        current = root
        for part in parts[:-1]:
            current = current.children.setdefault(part, TokenTreeNode())
        current.files.append(FileTokenInfo(name=parts[-1], tokens=tokens))

    _calculate_sums(root)
    return root


def token_tree_to_dict(node: TokenTreeNode) -> dict[str, Any]:
    """
    Convert a tree to nested dicts.

    ``_files`` lists file entries (omitted when empty), ``_tokenSum`` holds
    the node sum, and every other key is a child directory.
    """
    data: dict[str, Any] = {}
    if node.files:
        data["_files"] = [{"name": f.name, "tokens": f.tokens} for f in node.files]
    data["_tokenSum"] = node.token_sum
    for name in sorted(node.children):
        data[name] = token_tree_to_dict(node.children[name])
    return data


def render_token_tree(node: TokenTreeNode, min_tokens: int = 0) -> list[str]:
    """
    Render a tree as box-drawing lines.

    Files come before directories, both sorted by name. Entries with fewer
    than min_tokens tokens (directories by their sum) are hidden.
    """
    lines: list[str] = []
    _render_node(node, "", min_tokens, lines)
    return lines


def _render_node(node: TokenTreeNode, prefix: str, min_tokens: int, lines: list[str]) -> None:
    files = sorted((f for f in node.files if f.tokens >= min_tokens), key=lambda f: f.name)
    dirs = sorted(
        (item for item in node.children.items() if item[1].token_sum >= min_tokens),
        key=lambda item: item[0],
    )

    for idx, info in enumerate(files):
        is_last = idx == len(files) - 1 and not dirs
        connector = _LAST if is_last else _BRANCH
        lines.append(f"{prefix}{connector}{info.name} ({info.tokens} tokens)")

    for idx, (name, child) in enumerate(dirs):
        is_last = idx == len(dirs) - 1
        connector = _LAST if is_last else _BRANCH
        lines.append(f"{prefix}{connector}{name}/ ({child.token_sum} tokens)")
        _render_node(child, prefix + (_SPACE if is_last else _PIPE), min_tokens, lines)
