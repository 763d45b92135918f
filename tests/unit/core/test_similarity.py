"""Unit tests for core/utils/similarity.py"""

import time
from collections import Counter

import pytest

from pkgdiff.core.utils.similarity import change_ratio, change_ratio_within, distance_floor, levenshtein


@pytest.mark.parametrize("s1,s2,expected", [
    ("kitten", "sitting", 3),
    ("", "abc", 3),
    ("abc", "abc", 0),
    ("flaw", "lawn", 2),
    ("héllo", "hello", 1),
])
def test_levenshtein(s1, s2, expected):
    """Unit-cost distance over code points."""
    assert levenshtein(s1, s2) == expected


def test_levenshtein_limit_stops_early():
    """With a limit, distances beyond it are reported as limit + 1."""
    assert levenshtein("abcdef", "uvwxyz", limit=2) == 3
    assert levenshtein("abc", "abcdefgh", limit=2) == 3
    assert levenshtein("kitten", "sitting", limit=3) == 3


def test_change_ratio_bounds():
    """0.0 for identical or empty lines, 1.0 when nothing is shared."""
    assert change_ratio("", "") == 0.0
    assert change_ratio("same", "same") == 0.0
    assert change_ratio("b", "x") == 1.0
    assert change_ratio("a", "") == 1.0
    assert change_ratio("kitten", "sitting") == pytest.approx(3 / 7)


def test_change_ratio_within_threshold():
    """The ratio is returned only when it does not exceed the threshold."""
    assert change_ratio_within("kitten", "sitting", 0.5) == pytest.approx(3 / 7)
    assert change_ratio_within("kitten", "sitting", 0.4) is None


def test_change_ratio_within_exact_boundary():
    """A ratio equal to the threshold is accepted despite float rounding in the limit."""
    s1 = "a" * 100
    s2 = "a" * 71 + "b" * 29
    assert change_ratio_within(s1, s2, 0.29) == 0.29


def test_change_ratio_within_zero_threshold():
    """A zero threshold accepts only identical lines."""
    assert change_ratio_within("abc", "abc", 0.0) == 0.0
    assert change_ratio_within("abc", "abd", 0.0) is None


# --- long lines ---

def _minified(count):
    """A single-line bundle of roughly 25 characters per statement."""
    return "".join(f"var a{i}=f({i},'k{i % 7}');" for i in range(count))


def _substitute(text, step, char="#"):
    """Replace every step-th character with one that does not occur in text."""
    return "".join(char if i and i % step == 0 else c for i, c in enumerate(text))


def test_levenshtein_long_line_single_change():
    """One changed character in a 20 KB line costs a linear scan."""
    s1 = _minified(1000)
    s2 = s1[:len(s1) // 2] + "#" + s1[len(s1) // 2 + 1:]
    assert len(s1) > 20_000
    start = time.perf_counter()
    assert levenshtein(s1, s2) == 1
    assert change_ratio_within(s1, s2, 0.45) == pytest.approx(1 / len(s1))
    assert time.perf_counter() - start < 0.5


def test_levenshtein_long_line_scattered_changes():
    """Changes spread over a 20 KB line are counted exactly within a time budget."""
    s1 = _minified(1000)
    s2 = _substitute(s1, 1000)
    edits = sum(a != b for a, b in zip(s1, s2))
    start = time.perf_counter()
    assert levenshtein(s1, s2) == edits
    assert levenshtein(s1, s2, limit=edits - 1) == edits
    assert time.perf_counter() - start < 5.0


def test_levenshtein_limit_on_long_dissimilar_lines():
    """Lines far beyond the limit stop early with limit + 1."""
    s1 = "a" * 5000
    s2 = "b" * 5000
    assert levenshtein(s1, s2, limit=100) == 101
    assert change_ratio_within(s1, s2, 0.45) is None


def test_distance_floor_from_character_counts():
    """The character-count bound never exceeds the real distance."""
    for s1, s2 in [("kitten", "sitting"), ("flaw", "lawn"), ("abc", "xyz"), ("", "abc")]:
        assert distance_floor(Counter(s1), Counter(s2)) <= levenshtein(s1, s2)
    assert distance_floor(Counter("abc"), Counter("xyz")) == 3
