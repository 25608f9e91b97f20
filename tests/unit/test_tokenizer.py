"""
Tests for the Tokenizer module.
"""

import logging
import threading

import pytest

from codepack.core import tokenizer
from codepack.core.tokenizer import (
    DEFAULT_ENCODING,
    count_tokens,
    get_encoder,
    resolve_encoding_name,
)


class CharEncoding:
    """One token per character."""

    def encode_ordinary(self, text: str) -> list[str]:
        return list(text)


@pytest.fixture
def char_encoding():
    """Swap cl100k_base for a per-character encoder for one test."""
    original = get_encoder("cl100k_base")
    tokenizer.register_encoding("cl100k_base", CharEncoding())
    yield
    tokenizer.register_encoding("cl100k_base", original)


class TestCountTokens:
    def test_empty_text_has_no_tokens(self):
        assert count_tokens("") == 0

    def test_counts_with_default_encoding(self):
        assert count_tokens("hello brave new world") == 4

    def test_named_encoding_is_used(self, char_encoding):
        assert count_tokens("abc", "cl100k_base") == 3
        assert count_tokens("abc", DEFAULT_ENCODING) == 1

    def test_special_token_markers_count_as_text(self):
        assert count_tokens("<|endoftext|> done") == 2


class TestEncodingResolution:
    def test_none_resolves_to_default(self):
        assert resolve_encoding_name(None) == DEFAULT_ENCODING

    def test_supported_name_is_kept(self):
        assert resolve_encoding_name("p50k_base") == "p50k_base"

    def test_unknown_name_falls_back_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="codepack.core.tokenizer"):
            assert resolve_encoding_name("gpt-9000") == DEFAULT_ENCODING
        assert "gpt-9000" in caplog.text

    def test_encoder_is_shared_across_threads(self):
        seen = []

        def grab():
            seen.append(get_encoder("r50k_base"))

        threads = [threading.Thread(target=grab) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len({id(encoder) for encoder in seen}) == 1
