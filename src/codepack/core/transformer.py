"""
Content transformer: the per-file text pipeline.

Stages run in a fixed order, each toggled independently:

1. base64 truncation
2. comment stripping
3. empty-line removal
4. whole-content trim (always)
5. compression
"""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath

from codepack.core.compress import compress_content
from codepack.core.entropy import DEFAULT_THRESHOLDS, EntropyThresholds, is_likely_base64

DATA_URI_MIN_LEN = 40
STANDALONE_MIN_LEN = 60
TRUNCATION_LEN = 32
TRUNCATION_MARKER = "..."

_DATA_URI_RE = re.compile(
    r"data:([A-Za-z0-9/\-+]+)((?:;[A-Za-z0-9\-=]+)*);base64,"
    rf"([A-Za-z0-9+/=]{{{DATA_URI_MIN_LEN},}})"
)
_STANDALONE_RE = re.compile(rf"[A-Za-z0-9+/]{{{STANDALONE_MIN_LEN},}}={{0,2}}")

_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT_RE = re.compile(r"//.*?$", re.MULTILINE)
_HASH_COMMENT_RE = re.compile(r"^[ \t]*#.*$", re.MULTILINE)


class CommentStyle(Enum):
    """How comments are written in a language family."""

    C_FAMILY = "c_family"
    HASH = "hash"

    @classmethod
    def for_path(cls, path: str | PurePath) -> "CommentStyle | None":
        """Return the comment style for a file, or None if unrecognized."""
        suffix = PurePath(path).suffix.lstrip(".").lower()
        return _COMMENT_STYLES.get(suffix)


_C_FAMILY_EXTENSIONS = (
    "rs ts tsx js jsx mjs cjs go c cc cpp cxx h hpp hh java kt kts swift cs scala php dart"
)
_HASH_EXTENSIONS = "py rb sh bash zsh yaml yml toml r pl"

_COMMENT_STYLES: dict[str, CommentStyle] = {
    **{ext: CommentStyle.C_FAMILY for ext in _C_FAMILY_EXTENSIONS.split()},
    **{ext: CommentStyle.HASH for ext in _HASH_EXTENSIONS.split()},
}


@dataclass(frozen=True)
class TransformOptions:
    """Toggles for the transform stages."""

    truncate_base64: bool = False
    remove_comments: bool = False
    remove_empty_lines: bool = False
    compress: bool = False
    entropy: EntropyThresholds = DEFAULT_THRESHOLDS

    @classmethod
    def from_config(cls, config) -> "TransformOptions":
        """Build options from a PackConfig."""
        output = config.output
        return cls(
            truncate_base64=output.truncate_base64,
            remove_comments=output.remove_comments,
            remove_empty_lines=output.remove_empty_lines,
            compress=output.compress,
            entropy=EntropyThresholds(
                min_classes=config.security.entropy_min_classes,
                min_unique_chars=config.security.entropy_min_unique_chars,
            ),
        )


def truncate_base64(content: str, thresholds: EntropyThresholds = DEFAULT_THRESHOLDS) -> str:
    """
    Shorten embedded base64 payloads to a short preview.

    Data URIs are handled first, so the standalone pass never sees their
    already-truncated previews.
    """

    def replace_data_uri(match: re.Match) -> str:
        mime, params, data = match.group(1), match.group(2), match.group(3)
        return f"data:{mime}{params};base64,{data[:TRUNCATION_LEN]}{TRUNCATION_MARKER}"

    def replace_standalone(match: re.Match) -> str:
        data = match.group(0)
        if is_likely_base64(data, thresholds):
            return f"{data[:TRUNCATION_LEN]}{TRUNCATION_MARKER}"
        return data

    result = _DATA_URI_RE.sub(replace_data_uri, content)
    return _STANDALONE_RE.sub(replace_standalone, result)


def strip_c_comments(content: str) -> str:
    """Remove ``/* */`` and ``//`` comments; block comments keep their newlines."""
    without_blocks = _BLOCK_COMMENT_RE.sub(lambda m: "\n" * m.group(0).count("\n"), content)
    return _LINE_COMMENT_RE.sub("", without_blocks)


def strip_hash_comments(content: str) -> str:
    return _HASH_COMMENT_RE.sub("", content)


def strip_comments(content: str, path: str | PurePath) -> str:
    """Strip comments according to the file's comment style."""
    style = CommentStyle.for_path(path)
    if style is CommentStyle.C_FAMILY:
        return strip_c_comments(content)
    if style is CommentStyle.HASH:
        return strip_hash_comments(content)
    return content


def remove_empty_lines(content: str) -> str:
    """Drop blank lines and right-trim the rest."""
    return "\n".join(line.rstrip() for line in content.split("\n") if line.strip())


def transform_content(content: str, path: str | PurePath, options: TransformOptions) -> str:
    """
    Apply the enabled stages to one file's content.

    Args:
        content: Raw file text
        path: File path, used for comment style and language lookup
        options: Stage toggles

    Returns:
        Transformed text

    Raises:
        CompressionError: If compression is enabled and parsing fails
    """
    processed = content

    if options.truncate_base64:
        processed = truncate_base64(processed, options.entropy)

    if options.remove_comments:
        processed = strip_comments(processed, path)

    if options.remove_empty_lines:
        processed = remove_empty_lines(processed)

    processed = processed.strip()

    if options.compress:
        processed = compress_content(processed, PurePath(path).suffix)

    return processed
