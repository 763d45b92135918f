"""Shared fixtures for core unit tests"""

import pytest

from pkgdiff.core.models import DiffOptions, Line


@pytest.fixture(name="generous")
def generous_fixture():
    """Options that pair any two lines within range and always highlight inline."""
    return DiffOptions(max_change_ratio=1.0, max_diff_distance=60, inline_max_char_edits=10)


@pytest.fixture(name="no_merge")
def no_merge_fixture():
    return DiffOptions(merge_modified_lines=False)


@pytest.fixture(name="lines")
def lines_fixture():
    """Factory: lines("a", "b", start=3) -> [Line(3, "a"), Line(4, "b")]."""
    def _make(*texts, start=1):
        return [Line(number=i, text=t) for i, t in enumerate(texts, start=start)]
    return _make
