"""
Tokenizer module for token counting.

Uses tiktoken library for token counting compatible with OpenAI models.
Encoders are expensive to build, so one instance per encoding is created
lazily and shared for the lifetime of the process.
"""

import logging
import threading
from typing import Any

import tiktoken

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "o200k_base"

SUPPORTED_ENCODINGS: frozenset[str] = frozenset(
    ["o200k_base", "cl100k_base", "p50k_base", "p50k_edit", "r50k_base"]
)

# Process-wide encoder registry, one lock per encoding name
_encoders: dict[str, Any] = {}
_encoder_locks: dict[str, threading.Lock] = {}
_registry_lock = threading.Lock()


def resolve_encoding_name(encoding_name: str | None) -> str:
    """Map an encoding name to a supported one, falling back to the default."""
    if not encoding_name:
        return DEFAULT_ENCODING
    if encoding_name not in SUPPORTED_ENCODINGS:
        logger.warning(
            f"Unknown token encoding '{encoding_name}', falling back to {DEFAULT_ENCODING}"
        )
        return DEFAULT_ENCODING
    return encoding_name


def _lock_for(encoding_name: str) -> threading.Lock:
    with _registry_lock:
        lock = _encoder_locks.get(encoding_name)
        if lock is None:
            lock = threading.Lock()
            _encoder_locks[encoding_name] = lock
        return lock


def get_encoder(encoding_name: str | None = None):
    """
    Return the shared encoder for an encoding, building it on first use.

    Args:
        encoding_name: tiktoken encoding name; unknown names fall back to
            the default encoding with a warning

    Returns:
        An object with an ``encode_ordinary(text)`` method
    """
    name = resolve_encoding_name(encoding_name)
    encoder = _encoders.get(name)
    if encoder is not None:
        return encoder

    with _lock_for(name):
        encoder = _encoders.get(name)
        if encoder is None:
            logger.debug(f"Loading tiktoken encoding {name}")
            encoder = tiktoken.get_encoding(name)
            _encoders[name] = encoder
        return encoder


def register_encoding(encoding_name: str, encoder: Any) -> None:
    """
    Install an encoder for an encoding name.

    Mainly for tests that must not download BPE files.
    """
    with _lock_for(encoding_name):
        _encoders[encoding_name] = encoder


def clear_encoders() -> None:
    """Drop every cached encoder."""
    with _registry_lock:
        _encoders.clear()


def count_tokens(text: str, encoding_name: str | None = None) -> int:
    """
    Count tokens in text.

    Special-token markers in the text are encoded as ordinary text.
    """
    if not text:
        return 0
    return len(get_encoder(encoding_name).encode_ordinary(text))
