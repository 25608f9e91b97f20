"""
FileWalker implementation for recursive directory traversal.
"""

import logging
import os
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from codepack.core.config import PackConfig
from codepack.core.default_ignore import DEFAULT_IGNORE_PATTERNS
from codepack.core.errors import CodepackError, EmptyRootListError, RootPathError
from codepack.core.ignore_files import IgnoreFileRules
from codepack.core.patterns import PatternSet, include_matcher

from .models import CandidateFile, VisitFn

logger = logging.getLogger(__name__)


@dataclass
class _RootContext:
    """Matchers scoped to a single walk root."""

    root: Path
    include: PatternSet
    custom: PatternSet
    defaults: PatternSet
    ignore_files: IgnoreFileRules
    output_path: Path | None


def _join(parent: str, name: str) -> str:
    return f"{parent}/{name}" if parent else name


class FileWalker:
    """
    Walks root directories and reports every selected regular file.

    Selection, per entry:
    - Non-regular files (including symlinks) are skipped
    - The include allow-list must match
    - No ignore source may match (custom, default, ignore files)
    - The configured output file is never reported

    Hidden files are not special; only ignore rules exclude them. A directory
    matched by an ignore source is pruned together with its subtree.
    """

    def __init__(self, config: PackConfig | None = None):
        """
        Initialize the FileWalker.

        Args:
            config: Pack configuration. Defaults to PackConfig().
        """
        self._config = config or PackConfig()
        ignore = self._config.ignore

        # Compiled once; a malformed pattern fails before any traversal
        self._custom = PatternSet.compile_ignore(ignore.custom_patterns)
        self._defaults = PatternSet.compile_ignore(
            DEFAULT_IGNORE_PATTERNS if ignore.use_default_patterns else ()
        )
        self._output_path = self._config.resolved_output_path()

    def _resolve_root(self, root: Path | str) -> Path:
        path = Path(root)
        if not path.is_absolute():
            path = Path(self._config.cwd) / path
        try:
            resolved = path.resolve(strict=True)
        except (FileNotFoundError, RuntimeError) as e:
            raise RootPathError(f"Root path does not exist: {path}", str(path)) from e
        except OSError as e:
            raise RootPathError(f"Cannot access root path {path}: {e}", str(path)) from e
        if not resolved.is_dir():
            raise RootPathError(f"Root path is not a directory: {resolved}", str(resolved))
        return resolved

    def _stdin_paths_under(self, root: Path) -> list[str]:
        """Return the stdin paths that lie under root, relative to it."""
        literals = []
        for raw in self._config.stdin_file_paths:
            path = Path(raw)
            if not path.is_absolute():
                path = Path(self._config.cwd) / path
            try:
                relative = path.resolve().relative_to(root)
            except ValueError:
                logger.debug(f"Dropping stdin path outside root {root}: {path}")
                continue
            rel_str = relative.as_posix()
            if not rel_str or rel_str == ".":
                continue
            literals.append(rel_str)
        return literals

    def _include_for(self, root: Path) -> PatternSet:
        literals = self._stdin_paths_under(root)
        if self._config.stdin_file_paths and not literals and not self._config.include:
            # Stdin mode, but none of the piped paths lie under this root
            return PatternSet()
        return include_matcher(self._config.include, literals)

    def _prepare(self, roots: Iterable[Path | str]) -> list[_RootContext]:
        roots = list(roots)
        if not roots:
            raise EmptyRootListError("No root directories were given")

        contexts = []
        for root in roots:
            resolved = self._resolve_root(root)
            contexts.append(
                _RootContext(
                    root=resolved,
                    include=self._include_for(resolved),
                    custom=self._custom,
                    defaults=self._defaults,
                    ignore_files=IgnoreFileRules(
                        resolved,
                        use_gitignore=self._config.ignore.use_gitignore,
                        use_dot_ignore=self._config.ignore.use_dot_ignore,
                    ),
                    output_path=self._output_path,
                )
            )
        return contexts

    def _is_ignored(self, ctx: _RootContext, relative: str, is_dir: bool) -> bool:
        if is_dir:
            if ctx.custom.matches_dir(relative) or ctx.defaults.matches_dir(relative):
                return True
        elif ctx.custom.matches(relative) or ctx.defaults.matches(relative):
            return True
        return ctx.ignore_files.is_ignored(relative, is_dir=is_dir)

    def _list_directory(
        self, ctx: _RootContext, relative_dir: str
    ) -> tuple[list[tuple[Path, str]], list[str]]:
        """
        List one directory.

        Returns:
            (selected files as (absolute, relative), subdirectories to descend)
        """
        directory = ctx.root / relative_dir if relative_dir else ctx.root
        ctx.ignore_files.load_directory(relative_dir)

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"Error listing directory {directory}: {e}")
            return [], []

        files: list[tuple[Path, str]] = []
        subdirs: list[str] = []

        for entry in entries:
            relative = _join(relative_dir, entry.name)
            try:
                if entry.is_symlink():
                    logger.debug(f"Skipping symlink: {entry.path}")
                    continue
                if entry.is_dir(follow_symlinks=False):
                    if self._is_ignored(ctx, relative, is_dir=True):
                        logger.debug(f"Pruning ignored directory: {relative}")
                        continue
                    subdirs.append(relative)
                    continue
                if not entry.is_file(follow_symlinks=False):
                    continue
            except OSError as e:
                logger.warning(f"Error reading entry {entry.path}: {e}")
                continue

            if not ctx.include.matches(relative):
                continue
            if self._is_ignored(ctx, relative, is_dir=False):
                logger.debug(f"Ignoring file: {relative}")
                continue

            absolute = Path(entry.path)
            if ctx.output_path is not None and absolute == ctx.output_path:
                logger.debug(f"Skipping output file: {absolute}")
                continue
            files.append((absolute, relative))

        return files, subdirs

    def walk(self, roots: Iterable[Path | str], visit: VisitFn) -> None:
        """
        Walk roots sequentially in a deterministic order.

        Args:
            roots: Root directories
            visit: Called as visit(absolute_path, relative_path) per selected file

        Raises:
            EmptyRootListError: If roots is empty
            RootPathError: If a root is missing or not a directory
        """
        for ctx in self._prepare(roots):
            logger.debug(f"Walking {ctx.root}")
            # Depth-first, entries in name order
            stack = [""]
            while stack:
                relative_dir = stack.pop()
                files, subdirs = self._list_directory(ctx, relative_dir)
                for absolute, relative in files:
                    visit(absolute, relative)
                stack.extend(reversed(subdirs))

    def walk_parallel(
        self,
        roots: Iterable[Path | str],
        visit: VisitFn,
        max_workers: int | None = None,
    ) -> None:
        """
        Walk roots with directory listings spread over a thread pool.

        visit may be called concurrently from several threads; callers
        synchronise their own side effects. Selection is identical to walk().
        """
        contexts = self._prepare(roots)
        workers = max_workers or self._config.processing.max_workers or 1

        def list_and_visit(ctx: _RootContext, relative_dir: str) -> tuple[_RootContext, list[str]]:
            files, subdirs = self._list_directory(ctx, relative_dir)
            for absolute, relative in files:
                visit(absolute, relative)
            return ctx, subdirs

        with ThreadPoolExecutor(max_workers=workers) as executor:
            pending: set[Future] = {executor.submit(list_and_visit, ctx, "") for ctx in contexts}
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    # Re-raises anything visit raised
                    ctx, subdirs = future.result()
                    for subdir in subdirs:
                        pending.add(executor.submit(list_and_visit, ctx, subdir))

    def collect_candidates(self, roots: Iterable[Path | str]) -> list[CandidateFile]:
        """Walk sequentially and return every selected file."""
        found: list[CandidateFile] = []
        self.walk(roots, lambda absolute, relative: found.append(CandidateFile(absolute, relative)))
        return found


def parse_stdin_paths(lines: Iterable[str], cwd: Path) -> list[Path]:
    """
    Turn piped file paths into absolute "must include" paths.

    Blank lines and lines starting with '#' are dropped, relative paths are
    resolved against cwd, and duplicates keep their first position.

    Raises:
        CodepackError: If no usable path remains
    """
    seen: set[Path] = set()
    paths: list[Path] = []
    for line in lines:
        entry = line.strip()
        if not entry or entry.startswith("#"):
            continue
        path = Path(entry)
        if not path.is_absolute():
            path = Path(cwd) / path
        path = Path(os.path.normpath(path))
        if path not in seen:
            seen.add(path)
            paths.append(path)

    if not paths:
        raise CodepackError("No valid file paths found in stdin input")
    return paths


def collect_candidates(
    roots: Iterable[Path | str], config: PackConfig | None = None
) -> list[CandidateFile]:
    """Convenience wrapper around FileWalker(config).collect_candidates(roots)."""
    return FileWalker(config).collect_candidates(roots)
