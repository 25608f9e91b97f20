"""
Service Layer - PackService and its worker functions.
"""

from codepack.services.pack_models import (
    FileOutcome,
    FileStats,
    PipelineResult,
    SecurityFinding,
)
from codepack.services.pack_service import PackService, pack
from codepack.services.pack_worker import FileProcessor, init_worker, process_file_worker

__all__ = [
    # Service
    "PackService",
    "pack",
    # Workers
    "FileProcessor",
    "init_worker",
    "process_file_worker",
    # Models
    "FileOutcome",
    "FileStats",
    "PipelineResult",
    "SecurityFinding",
]
