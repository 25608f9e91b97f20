"""
Tree-sitter based compression of source files.
"""

from .engine import (
    CHUNK_SEPARATOR,
    collect_chunks,
    compress_content,
    dedupe_chunks,
    join_chunks,
    merge_chunks,
)
from .languages import EXTENSION_TO_LANGUAGE, GrammarRegistry, Language, get_grammar_registry
from .models import Chunk

__all__ = [
    "CHUNK_SEPARATOR",
    "Chunk",
    "EXTENSION_TO_LANGUAGE",
    "GrammarRegistry",
    "Language",
    "collect_chunks",
    "compress_content",
    "dedupe_chunks",
    "get_grammar_registry",
    "join_chunks",
    "merge_chunks",
]
