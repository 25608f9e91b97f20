"""Tests for reading candidate files as text."""

import pytest

from codepack.core.file_reader import SNIFF_BYTES, has_binary_extension, looks_binary, read_file

MAX_SIZE = 1024


def test_reads_utf8_text(tmp_path):
    path = tmp_path / "main.py"
    path.write_text("print('héllo')\n", encoding="utf-8")

    assert read_file(path, MAX_SIZE) == "print('héllo')\n"


def test_empty_file_is_empty_string(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")

    assert read_file(path, MAX_SIZE) == ""


def test_file_over_size_limit_is_skipped(tmp_path):
    path = tmp_path / "big.txt"
    path.write_text("abcd", encoding="utf-8")

    assert read_file(path, 3) is None
    assert read_file(path, 4) == "abcd"


@pytest.mark.parametrize("name", ["logo.png", "LOGO.PNG", "archive.zip", "lib.so"])
def test_binary_extension_is_skipped_without_reading(tmp_path, name):
    path = tmp_path / name
    path.write_text("plain text", encoding="utf-8")

    assert has_binary_extension(path)
    assert read_file(path, MAX_SIZE) is None


def test_extensionless_file_is_not_binary_by_name(tmp_path):
    path = tmp_path / "Makefile"
    path.write_text("all:\n", encoding="utf-8")

    assert not has_binary_extension(path)
    assert read_file(path, MAX_SIZE) == "all:\n"


def test_nul_byte_marks_content_binary(tmp_path):
    path = tmp_path / "data.txt"
    path.write_bytes(b"abc\x00def")

    assert read_file(path, MAX_SIZE) is None


def test_nul_byte_beyond_sniff_window_is_ignored():
    data = b"a" * SNIFF_BYTES + b"\x00"
    assert not looks_binary(data)
    assert looks_binary(b"\x00" + data)


def test_invalid_utf8_is_skipped(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes("café".encode("latin-1"))

    assert read_file(path, MAX_SIZE) is None


def test_missing_file_raises_oserror(tmp_path):
    with pytest.raises(OSError):
        read_file(tmp_path / "gone.txt", MAX_SIZE)
