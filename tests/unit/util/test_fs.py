"""Unit tests for util/fs.py"""

import logging

import pytest

from pkgdiff.core.errors import FileTooLarge
from pkgdiff.util.fs import iter_files, read_content


def test_read_content_missing_is_absent(tmp_path):
    """A path that does not exist reads as None, not as empty text."""
    assert read_content(tmp_path / "nope.js", 1024) is None
    (tmp_path / "empty.js").write_text("")
    assert read_content(tmp_path / "empty.js", 1024) == ""


def test_read_content_text(tmp_path):
    """File contents are decoded as UTF-8."""
    (tmp_path / "a.js").write_text("héllo\n", encoding="utf-8")
    assert read_content(tmp_path / "a.js", 1024) == "héllo\n"


def test_read_content_replaces_invalid_bytes(tmp_path, caplog):
    """Undecodable bytes are replaced rather than failing the read, and a warning names the file."""
    (tmp_path / "bin").write_bytes(b"ok\xff\n")
    with caplog.at_level(logging.WARNING, logger="pkgdiff.util.fs"):
        assert read_content(tmp_path / "bin", 1024) == "ok�\n"
    assert "not valid UTF-8 (byte offset 2)" in caplog.text
    assert str(tmp_path / "bin") in caplog.text


def test_read_content_valid_text_no_warning(tmp_path, caplog):
    """Valid UTF-8 reads without warnings."""
    (tmp_path / "a.js").write_text("héllo\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="pkgdiff.util.fs"):
        read_content(tmp_path / "a.js", 1024)
    assert caplog.records == []


def test_read_content_too_large(tmp_path):
    """Files above the cap raise FileTooLarge."""
    (tmp_path / "big.js").write_text("x" * 100)
    with pytest.raises(FileTooLarge, match="File too large"):
        read_content(tmp_path / "big.js", 99)
    assert read_content(tmp_path / "big.js", 100) == "x" * 100


def test_iter_files_relative_sorted(tmp_path):
    """Files are yielded as sorted root-relative POSIX paths; directories are skipped."""
    (tmp_path / "lib").mkdir()
    (tmp_path / "lib" / "b.js").write_text("")
    (tmp_path / "a.js").write_text("")
    assert list(iter_files(tmp_path)) == ["a.js", "lib/b.js"]


def test_iter_files_missing_root(tmp_path):
    """A missing root yields nothing."""
    assert list(iter_files(tmp_path / "missing")) == []
