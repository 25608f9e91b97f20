"""
Pattern matching for include and ignore globs.

Patterns are gitignore-style globs compiled with pathspec. Paths handed to a
PatternSet are always relative to a walk root and use forward slashes.
"""

import logging
from typing import Iterable

import pathspec

from codepack.core.errors import PatternError

logger = logging.getLogger(__name__)

MATCH_ALL_PATTERN = "**/*"

# Characters that carry glob meaning and must be escaped in literal paths
_GLOB_SPECIAL = frozenset("[]()*?\\")


def to_unix_separators(value: str) -> str:
    """Replace Windows path separators with forward slashes."""
    return value.replace("\\", "/")


def normalize_ignore_pattern(pattern: str) -> str:
    """
    Normalize a user or default ignore pattern.

    - ``dir/`` (but not ``**/``) matches the directory itself: ``dir``
    - ``**/name`` without a dot or a later ``/**`` matches a directory at any
      depth and everything below it: ``**/name/**``

    Args:
        pattern: Raw pattern string

    Returns:
        Normalized pattern string
    """
    unix = to_unix_separators(pattern.strip())
    if unix == "**/":
        return unix

    if unix.endswith("/") and not unix.endswith("**/"):
        return unix.rstrip("/")

    # A dot usually means a file pattern such as **/*.xml, leave those alone
    if unix.startswith("**/") and "/**" not in unix and "." not in unix:
        return f"{unix}/**"

    return unix


def escape_glob_pattern(path: str) -> str:
    """
    Escape a literal relative path so it can be used as a glob pattern.

    Bracket, parenthesis, wildcard and backslash characters are escaped, as is
    a leading ``!`` or ``#`` which would otherwise negate or comment the line.
    """
    escaped = []
    for ch in path:
        if ch in _GLOB_SPECIAL:
            escaped.append("\\")
        escaped.append(ch)
    result = "".join(escaped)
    if result.startswith(("!", "#")):
        result = "\\" + result
    return result


class PatternSet:
    """
    A compiled set of glob patterns.

    An empty set matches nothing. Use include_matcher() for the include
    allow-list, which defaults to matching everything.
    """

    def __init__(self, patterns: Iterable[str] = ()):
        self._patterns: list[str] = [p for p in patterns if p and p.strip()]
        self._spec: pathspec.PathSpec | None = None

        if self._patterns:
            try:
                self._spec = pathspec.GitIgnoreSpec.from_lines(self._patterns)
            except ValueError as e:
                raise PatternError(f"Invalid pattern in {self._patterns!r}: {e}") from e

    @classmethod
    def compile_ignore(cls, patterns: Iterable[str]) -> "PatternSet":
        """Build an ignore set, normalizing every pattern first."""
        return cls(normalize_ignore_pattern(p) for p in patterns if p and p.strip())

    @property
    def patterns(self) -> list[str]:
        """Return a copy of the compiled pattern strings."""
        return list(self._patterns)

    def is_empty(self) -> bool:
        return self._spec is None

    def matches(self, relative_path: str) -> bool:
        """Check whether a root-relative file path matches the set."""
        if self._spec is None:
            return False
        return self._spec.match_file(to_unix_separators(relative_path))

    def matches_dir(self, relative_path: str) -> bool:
        """Check whether a root-relative directory path matches the set."""
        if self._spec is None:
            return False
        return self._spec.match_file(to_unix_separators(relative_path).rstrip("/") + "/")


def include_matcher(patterns: Iterable[str], literal_paths: Iterable[str] = ()) -> PatternSet:
    """
    Build the include allow-list.

    literal_paths are root-relative paths matched exactly; they are escaped
    here, after separator normalization. An empty allow-list means "include
    everything".
    """
    normalized = [to_unix_separators(p) for p in patterns if p and p.strip()]
    normalized.extend("/" + escape_glob_pattern(to_unix_separators(p)) for p in literal_paths if p)
    if not normalized:
        normalized = [MATCH_ALL_PATTERN]
    return PatternSet(normalized)
