"""
Pack Service for codepack.

Runs the file pipeline: discover candidates, then read, scan and transform
them on a ProcessPoolExecutor (the map phase), then count tokens and
aggregate everything in the calling thread (the reduce phase). Worker
results are immutable, so no locks are needed across the map phase.
"""

import logging
import threading
from concurrent.futures import ProcessPoolExecutor
from concurrent.futures.process import BrokenProcessPool
from pathlib import Path
from typing import Iterable, Mapping, Optional

from codepack.core.config import PackConfig
from codepack.core.errors import EmptyRootListError
from codepack.core.file_walker import CandidateFile, FileWalker
from codepack.core.token_tree import build_token_tree
from codepack.core.tokenizer import count_tokens, resolve_encoding_name

from .pack_models import FileOutcome, FileStats, PipelineResult, SecurityFinding
from .pack_worker import FileProcessor, init_worker, process_file_worker

logger = logging.getLogger(__name__)


class PackService:
    """
    Service for packing one or more directory trees.

    Produces the transformed content of every selected file plus token and
    character statistics. Files with detected secrets are excluded and
    reported separately.
    """

    def __init__(
        self,
        config: Optional[PackConfig] = None,
        walker: Optional[FileWalker] = None,
    ):
        """
        Initialize the pack service.

        Args:
            config: Pack configuration. Defaults to PackConfig().
            walker: File walker to use. Defaults to FileWalker(config).
        """
        self._config = config or PackConfig()
        self._walker = walker or FileWalker(self._config)
        self._max_workers = max(1, self._config.processing.max_workers or 1)

    def run(
        self,
        roots: Iterable[Path | str],
        change_counts: Optional[Mapping[str, int]] = None,
    ) -> PipelineResult:
        """
        Pack the given roots.

        Args:
            roots: Root directories
            change_counts: Optional per-path change frequency, used when
                output.sort_by_changes is enabled

        Returns:
            PipelineResult with contents, stats and security findings

        Raises:
            EmptyRootListError, RootPathError: If the roots are invalid
            PatternError: If an include or ignore pattern is malformed
            CompressionError: If compression fails on a supported language
        """
        candidates = self.collect_candidates(list(roots))
        logger.info(f"Found {len(candidates)} candidate files")

        outcomes = self._process_files(candidates)
        return self._aggregate(outcomes, change_counts)

    def collect_candidates(self, roots: list[Path | str]) -> list[CandidateFile]:
        """
        Discover candidates root by root.

        Each root's files are sorted by relative path. When two roots yield the
        same relative path, the earlier root wins.
        """
        if not roots:
            raise EmptyRootListError("No root directories were given")

        if self._max_workers > 1:
            per_root = [self._walk_root_parallel(root) for root in roots]
        else:
            per_root = [self._walker.collect_candidates([root]) for root in roots]

        seen: dict[str, CandidateFile] = {}
        for files in per_root:
            for candidate in sorted(files, key=lambda c: c.relative_path):
                existing = seen.get(candidate.relative_path)
                if existing is not None:
                    logger.warning(
                        f"Duplicate relative path {candidate.relative_path}: keeping "
                        f"{existing.absolute_path}, skipping {candidate.absolute_path}"
                    )
                    continue
                seen[candidate.relative_path] = candidate
        return list(seen.values())

    def _walk_root_parallel(self, root: Path | str) -> list[CandidateFile]:
        found: list[CandidateFile] = []
        lock = threading.Lock()

        def visit(absolute: Path, relative: str) -> None:
            with lock:
                found.append(CandidateFile(absolute, relative))

        self._walker.walk_parallel([root], visit, max_workers=self._max_workers)
        return found

    def _process_files(self, candidates: list[CandidateFile]) -> list[FileOutcome]:
        """Run the map phase, in parallel when worthwhile."""
        if self._max_workers <= 1 or len(candidates) <= 1:
            return self._process_files_sequential(candidates)
        return self._process_files_parallel(candidates)

    def _process_files_parallel(self, candidates: list[CandidateFile]) -> list[FileOutcome]:
        """
        Process files using ProcessPoolExecutor.

        Workers are initialized once with the pack configuration. Results come
        back in submission order.
        """
        absolute_paths = [str(c.absolute_path) for c in candidates]
        relative_paths = [c.relative_path for c in candidates]
        chunksize = max(1, len(candidates) // (self._max_workers * 4))

        try:
            with ProcessPoolExecutor(
                max_workers=self._max_workers,
                initializer=init_worker,
                initargs=(self._config,),
            ) as executor:
                return list(
                    executor.map(
                        process_file_worker, absolute_paths, relative_paths, chunksize=chunksize
                    )
                )
        except (OSError, BrokenProcessPool) as exc:
            logger.warning(
                "ProcessPoolExecutor failed (%s). Falling back to sequential processing.",
                exc,
            )
            return self._process_files_sequential(candidates)

    def _process_files_sequential(self, candidates: list[CandidateFile]) -> list[FileOutcome]:
        """Process files in the calling process."""
        processor = FileProcessor(self._config)
        return [processor.process(str(c.absolute_path), c.relative_path) for c in candidates]

    def _order_paths(
        self, paths: list[str], change_counts: Optional[Mapping[str, int]]
    ) -> list[str]:
        """Lexicographic order, or by ascending change count when requested."""
        if self._config.output.sort_by_changes:
            if change_counts is not None:
                return sorted(paths, key=lambda p: (change_counts.get(p, 0), p))
            logger.debug("sort_by_changes is enabled but no change counts were given")
        return sorted(paths)

    def _aggregate(
        self,
        outcomes: list[FileOutcome],
        change_counts: Optional[Mapping[str, int]],
    ) -> PipelineResult:
        """Reduce worker outcomes into a PipelineResult."""
        encoding = resolve_encoding_name(self._config.token_count.encoding)
        result = PipelineResult()

        packed: dict[str, str] = {}
        stats: dict[str, FileStats] = {}
        findings: list[SecurityFinding] = []

        for outcome in outcomes:
            path = outcome.relative_path
            if outcome.error is not None:
                logger.warning(f"Skipping {path}: {outcome.error}")
                continue
            if outcome.secrets:
                logger.warning(f"Excluding {path}: possible secrets ({', '.join(outcome.secrets)})")
                findings.append(SecurityFinding(path=path, categories=outcome.secrets))
                continue
            if outcome.content is None:
                continue

            content = outcome.content
            packed[path] = content
            stats[path] = FileStats(
                path=path,
                token_count=count_tokens(content, encoding),
                char_count=len(content),
            )

        for path in self._order_paths(list(packed), change_counts):
            result.contents[path] = packed[path]
            result.file_stats.append(stats[path])

        result.total_files = len(result.file_stats)
        result.total_chars = sum(s.char_count for s in result.file_stats)
        result.total_tokens = sum(s.token_count for s in result.file_stats)

        top_length = max(0, self._config.output.top_files_length)
        result.top_files = sorted(
            result.file_stats, key=lambda s: (-s.token_count, s.path)
        )[:top_length]

        result.security_findings = sorted(findings, key=lambda f: f.path)
        result.suspicious_files = [f.path for f in result.security_findings]

        if self._config.output.token_tree_threshold() is not None:
            result.token_tree = build_token_tree(
                (s.path, s.token_count) for s in result.file_stats
            )

        logger.info(
            f"Packed {result.total_files} files, {result.total_chars} chars, "
            f"{result.total_tokens} tokens, {len(result.suspicious_files)} suspicious"
        )
        return result


def pack(
    roots: Iterable[Path | str],
    config: Optional[PackConfig] = None,
    change_counts: Optional[Mapping[str, int]] = None,
) -> PipelineResult:
    """Pack roots with a one-off PackService."""
    return PackService(config).run(roots, change_counts)
