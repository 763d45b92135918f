"""Unit tests for core/lines.py"""

import pytest

from pkgdiff.core.lines import split_lines


def _texts(content):
    return [line.text for line in split_lines(content)]


def test_split_lines_absent_stays_absent():
    """None (absent file) is not the same as an empty file."""
    assert split_lines(None) is None
    assert split_lines("") == []


@pytest.mark.parametrize("content,expected", [
    ("a\nb", ["a", "b"]),
    ("a\nb\n", ["a", "b"]),
    ("a\r\nb\r\n", ["a", "b"]),
    ("a\r\nb\nc", ["a", "b", "c"]),
    ("a\n\n", ["a", ""]),
    ("\n", [""]),
    ("a\rb", ["a\rb"]),
])
def test_split_lines_texts(content, expected):
    """\\r\\n and \\n split uniformly; a final newline adds no empty line."""
    assert _texts(content) == expected


def test_split_lines_numbers_are_one_based():
    """Line numbers start at 1 and increase by one."""
    assert [line.number for line in split_lines("x\ny\nz\n")] == [1, 2, 3]
