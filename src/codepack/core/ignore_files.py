"""
Directory-scoped ignore files.

Handles ``.gitignore`` files at every directory level (plus
``.git/info/exclude`` at the walk root) and the dot-ignore files
``.ignore``, ``.repomixignore`` and ``.codepackignore``. Rules follow git
semantics:

- Patterns are relative to the directory holding the ignore file
- Within one directory, the last matching pattern wins
- Negation patterns (!) re-include previously excluded paths
- A matching rule in a deeper directory overrides shallower ones
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

import pathspec

logger = logging.getLogger(__name__)

GITIGNORE_FILE = ".gitignore"
GIT_EXCLUDE_FILE = Path(".git") / "info" / "exclude"
DOT_IGNORE_FILES: tuple[str, ...] = (".ignore", ".repomixignore", ".codepackignore")


@dataclass(frozen=True)
class DirectoryRules:
    """Ignore rules loaded from the ignore files of a single directory."""

    directory: str  # relative to the walk root, "" for the root itself
    spec: pathspec.GitIgnoreSpec
    sources: tuple[str, ...]

    def check(self, relative_path: str, is_dir: bool) -> bool | None:
        """
        Evaluate a root-relative path against these rules.

        Returns:
            True if ignored, False if explicitly re-included, None if no
            pattern in this directory matches
        """
        scoped = relative_path
        if self.directory:
            prefix = self.directory + "/"
            if not relative_path.startswith(prefix):
                return None
            scoped = relative_path[len(prefix):]
        if is_dir:
            scoped = scoped.rstrip("/") + "/"
        result = self.spec.check_file(scoped)
        return result.include


def _read_pattern_lines(path: Path) -> list[str]:
    """Read non-empty, non-comment lines from an ignore file."""
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        logger.warning(f"Invalid UTF-8 encoding in {path}: {e}")
        return []
    except OSError as e:
        logger.warning(f"Error reading {path}: {e}")
        return []

    lines = []
    for line in content.splitlines():
        stripped = line.rstrip()
        if not stripped.strip() or stripped.lstrip().startswith("#"):
            continue
        lines.append(stripped)
    return lines


class IgnoreFileRules:
    """
    Accumulates directory-scoped ignore rules during a walk.

    The walker calls load_directory() when entering each directory, then
    is_ignored() for that directory's children. Rules are cached per
    directory so each ignore file is read once.
    """

    def __init__(self, root: Path, use_gitignore: bool = True, use_dot_ignore: bool = True):
        self._root = Path(root)
        self._use_gitignore = use_gitignore
        self._use_dot_ignore = use_dot_ignore
        self._rules: dict[str, DirectoryRules] = {}
        self._loaded: set[str] = set()
        # The parallel walker loads directories from several threads
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._use_gitignore or self._use_dot_ignore

    def _ignore_file_names(self) -> list[str]:
        names = []
        if self._use_gitignore:
            names.append(GITIGNORE_FILE)
        if self._use_dot_ignore:
            names.extend(DOT_IGNORE_FILES)
        return names

    def load_directory(self, relative_dir: str) -> DirectoryRules | None:
        """
        Load the ignore files that live in a directory.

        Args:
            relative_dir: Directory relative to the walk root ("" for root)

        Returns:
            The compiled rules, or None if the directory has no patterns
        """
        relative_dir = relative_dir.strip("/")
        with self._lock:
            if relative_dir in self._loaded:
                return self._rules.get(relative_dir)
            self._loaded.add(relative_dir)

        if not self.enabled:
            return None

        directory = self._root / relative_dir if relative_dir else self._root
        lines: list[str] = []
        sources: list[str] = []

        if not relative_dir and self._use_gitignore:
            exclude_path = directory / GIT_EXCLUDE_FILE
            if exclude_path.is_file():
                lines.extend(_read_pattern_lines(exclude_path))
                sources.append(str(exclude_path))

        for name in self._ignore_file_names():
            path = directory / name
            if not path.is_file():
                continue
            file_lines = _read_pattern_lines(path)
            if file_lines:
                lines.extend(file_lines)
                sources.append(str(path))

        if not lines:
            return None

        try:
            spec = pathspec.GitIgnoreSpec.from_lines(lines)
        except ValueError as e:
            logger.warning(f"Skipping malformed ignore rules in {directory}: {e}")
            return None

        rules = DirectoryRules(directory=relative_dir, spec=spec, sources=tuple(sources))
        with self._lock:
            self._rules[relative_dir] = rules
        logger.debug(f"Loaded {len(lines)} ignore patterns from {', '.join(sources)}")
        return rules

    def is_ignored(self, relative_path: str, is_dir: bool = False) -> bool:
        """
        Check whether a root-relative path is ignored by any loaded rules.

        Directories are evaluated deepest first; the first directory with a
        matching pattern decides.
        """
        relative_path = relative_path.replace("\\", "/").strip("/")
        parts = relative_path.split("/")

        # Candidate rule directories: every ancestor of the path, deepest first
        for depth in range(len(parts) - 1, -1, -1):
            directory = "/".join(parts[:depth])
            rules = self._rules.get(directory)
            if rules is None:
                continue
            decision = rules.check(relative_path, is_dir)
            if decision is not None:
                return decision
        return False

    @property
    def rule_count(self) -> int:
        return len(self._rules)
