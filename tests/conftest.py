"""
Shared fixtures for codepack tests.

Tests never download tiktoken BPE files: every supported encoding is replaced
by an offline stub for the whole session.
"""

import pytest

from codepack.core import tokenizer


class FakeEncoding:
    """Offline-safe encoding stub for unit tests."""

    def encode_ordinary(self, text: str) -> list[str]:
        if not text:
            return []
        # Approximate tokenization: split on whitespace boundaries
        return text.replace("\n", " \n ").split()

    def encode(self, text: str) -> list[str]:
        return self.encode_ordinary(text)


def install_fake_encodings() -> None:
    for name in tokenizer.SUPPORTED_ENCODINGS:
        tokenizer.register_encoding(name, FakeEncoding())


@pytest.fixture(scope="session", autouse=True)
def fake_encodings():
    install_fake_encodings()
    yield
    tokenizer.clear_encoders()


def write_tree(root, files: dict[str, str]) -> None:
    """Create files (and parent directories) under root from a path->content map."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def make_tree(tmp_path):
    """Return a helper that writes a file map under tmp_path (or a given root)."""

    def _make(files: dict[str, str], root=None):
        root = root or tmp_path
        write_tree(root, files)
        return root

    return _make
