"""
Core Layer - File discovery, reading, secret scanning, transformation and token counting.
"""

from codepack.core.compress import CHUNK_SEPARATOR, Chunk, Language, compress_content
from codepack.core.config import (
    IgnoreConfig,
    InputConfig,
    LoggingConfig,
    OutputConfig,
    PackConfig,
    ProcessingConfig,
    SecurityConfig,
    TokenCountConfig,
    load_config,
)
from codepack.core.entropy import EntropyThresholds, is_likely_base64, looks_random
from codepack.core.errors import (
    CodepackError,
    CompressionError,
    ConfigError,
    EmptyRootListError,
    PatternError,
    RootPathError,
)
from codepack.core.file_reader import read_file
from codepack.core.file_walker import CandidateFile, FileWalker, collect_candidates
from codepack.core.patterns import PatternSet, include_matcher
from codepack.core.secret_scanner import SecretScanner, scan_content
from codepack.core.token_tree import (
    TokenTreeNode,
    build_token_tree,
    render_token_tree,
    token_tree_to_dict,
)
from codepack.core.tokenizer import count_tokens
from codepack.core.transformer import CommentStyle, TransformOptions, transform_content

__all__ = [
    # Config
    "PackConfig",
    "InputConfig",
    "IgnoreConfig",
    "OutputConfig",
    "SecurityConfig",
    "TokenCountConfig",
    "ProcessingConfig",
    "LoggingConfig",
    "load_config",
    # Errors
    "CodepackError",
    "CompressionError",
    "ConfigError",
    "EmptyRootListError",
    "PatternError",
    "RootPathError",
    # Discovery
    "PatternSet",
    "include_matcher",
    "CandidateFile",
    "FileWalker",
    "collect_candidates",
    "read_file",
    # Security
    "EntropyThresholds",
    "looks_random",
    "is_likely_base64",
    "SecretScanner",
    "scan_content",
    # Transformation
    "CommentStyle",
    "TransformOptions",
    "transform_content",
    "CHUNK_SEPARATOR",
    "Chunk",
    "Language",
    "compress_content",
    # Tokens
    "count_tokens",
    "TokenTreeNode",
    "build_token_tree",
    "render_token_tree",
    "token_tree_to_dict",
]
