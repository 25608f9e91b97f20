"""
Data models for the file walker.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

# visit(absolute_path, relative_path)
VisitFn = Callable[[Path, str], None]


@dataclass(frozen=True)
class CandidateFile:
    """
    A file selected by the walker.

    Attributes:
        absolute_path: Canonical path to the file on disk
        relative_path: Path relative to its walk root, always '/'-separated
    """

    absolute_path: Path
    relative_path: str
