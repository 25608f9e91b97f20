"""
File walker module for codepack.

Discovers candidate files under one or more roots, honouring include globs,
custom and default ignore patterns, and directory-scoped ignore files.
"""

from .models import CandidateFile, VisitFn
from .walker import FileWalker, collect_candidates, parse_stdin_paths

__all__ = [
    "CandidateFile",
    "FileWalker",
    "VisitFn",
    "collect_candidates",
    "parse_stdin_paths",
]
