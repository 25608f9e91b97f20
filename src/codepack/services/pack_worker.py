"""
Pack worker functions for parallel processing.

Contains worker initialization and file processing functions
that run in separate processes via ProcessPoolExecutor.
"""

import logging
from pathlib import Path
from typing import Optional

from codepack.core.config import PackConfig
from codepack.core.file_reader import read_file
from codepack.core.secret_scanner import SecretScanner
from codepack.core.transformer import TransformOptions, transform_content

from .pack_models import FileOutcome

logger = logging.getLogger(__name__)


class FileProcessor:
    """
    Read, scan and transform single files under one configuration.

    Holds no mutable state, so one instance can serve a whole run.
    """

    def __init__(self, config: PackConfig):
        self._max_file_size = config.input.max_file_size
        self._check_secrets = config.security.enable_security_check
        self._scanner = SecretScanner.from_config(config.security)
        self._options = TransformOptions.from_config(config)

    def process(self, absolute_path: str, relative_path: str) -> FileOutcome:
        """
        Process one candidate file.

        Raises:
            CompressionError: If compression is enabled and parsing fails
        """
        try:
            content = read_file(Path(absolute_path), self._max_file_size)
        except OSError as e:
            return FileOutcome(relative_path=relative_path, error=str(e))

        if content is None:
            return FileOutcome(relative_path=relative_path)

        # Secrets are looked for in the raw text, before any transform
        if self._check_secrets:
            secrets = self._scanner.scan(content)
            if secrets:
                return FileOutcome(relative_path=relative_path, secrets=tuple(secrets))

        transformed = transform_content(content, relative_path, self._options)
        return FileOutcome(relative_path=relative_path, content=transformed)


# Global processor for worker processes
_worker_processor: Optional[FileProcessor] = None


def init_worker(config: Optional[PackConfig] = None) -> None:
    """
    Initialize a worker process.

    Runs once per worker process so regexes, options and grammars are set up
    once rather than per file.

    Args:
        config: Pack configuration. If None, uses defaults.
    """
    global _worker_processor
    _worker_processor = FileProcessor(config or PackConfig())


def process_file_worker(absolute_path: str, relative_path: str) -> FileOutcome:
    """
    Worker function for parallel file processing.

    Args:
        absolute_path: File to read
        relative_path: Path reported in results

    Returns:
        The file's FileOutcome
    """
    global _worker_processor

    # Not initialized when run directly rather than via the executor
    if _worker_processor is None:
        _worker_processor = FileProcessor(PackConfig())

    return _worker_processor.process(absolute_path, relative_path)
