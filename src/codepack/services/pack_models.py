"""
Pack Service data models.

Contains dataclasses for per-file outcomes and the aggregated pipeline result.
"""

from dataclasses import dataclass, field

from codepack.core.token_tree import TokenTreeNode


@dataclass(frozen=True)
class FileStats:
    """Token and character counts of one packed file."""

    path: str
    token_count: int
    char_count: int


@dataclass(frozen=True)
class SecurityFinding:
    """Secret categories detected in a file that was excluded from the pack."""

    path: str
    categories: tuple[str, ...]


@dataclass(frozen=True)
class FileOutcome:
    """
    Result of processing a single file in a worker.

    Exactly one of the following holds:
    - content is set: the file was read, passed the scan and was transformed
    - secrets is non-empty: the file was excluded by the secret scanner
    - error is set: the file could not be read
    - none of the above: the file was skipped (too large, binary, not UTF-8)
    """

    relative_path: str
    content: str | None = None
    secrets: tuple[str, ...] = ()
    error: str | None = None

    @property
    def skipped(self) -> bool:
        return self.content is None and not self.secrets and self.error is None


@dataclass
class PipelineResult:
    """Result of a pack run."""

    contents: dict[str, str] = field(default_factory=dict)
    file_stats: list[FileStats] = field(default_factory=list)
    top_files: list[FileStats] = field(default_factory=list)
    suspicious_files: list[str] = field(default_factory=list)
    security_findings: list[SecurityFinding] = field(default_factory=list)
    total_files: int = 0
    total_chars: int = 0
    total_tokens: int = 0
    token_tree: TokenTreeNode | None = None

    @property
    def has_secrets(self) -> bool:
        return bool(self.suspicious_files)
