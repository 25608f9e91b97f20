"""
Content reader: turns a candidate path into text or a skip.
"""

import logging
from pathlib import Path

from codepack.core.binary_extensions import BINARY_EXTENSIONS

logger = logging.getLogger(__name__)

# Bytes inspected by the content sniffer
SNIFF_BYTES = 8192


def has_binary_extension(path: Path) -> bool:
    """Check the file extension against the known-binary set."""
    suffix = Path(path).suffix
    if not suffix:
        return False
    return suffix[1:].lower() in BINARY_EXTENSIONS


def looks_binary(data: bytes) -> bool:
    """Classify raw bytes as binary when a NUL byte appears in the sniffed prefix."""
    return b"\x00" in data[:SNIFF_BYTES]


def read_file(path: Path, max_file_size: int) -> str | None:
    """
    Read a file as UTF-8 text.

    Checks run in a fixed order: size limit, binary extension, content
    sniffing, then UTF-8 decoding. Any failing check is a normal skip.

    Args:
        path: File to read
        max_file_size: Largest accepted size in bytes

    Returns:
        File content, or None if the file was skipped

    Raises:
        OSError: If the file metadata or content cannot be read
    """
    path = Path(path)
    size = path.stat().st_size

    if size > max_file_size:
        logger.debug(f"Skipping file {path} (size: {size} > max: {max_file_size})")
        return None

    if has_binary_extension(path):
        logger.debug(f"Skipping binary file {path} (extension match)")
        return None

    data = path.read_bytes()

    if looks_binary(data):
        logger.debug(f"Skipping binary file {path} (content detection)")
        return None

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.debug(f"Skipping binary file {path} (utf-8 error: {e})")
        return None
