"""Character-level dissimilarity between two lines, used to pick modify pairs"""

from collections import Counter
from typing import Optional


def levenshtein(s1: str, s2: str, limit: Optional[int] = None) -> int:
    """Unit-cost insert/delete/substitute distance over code points.

    With a limit, returns limit + 1 as soon as the distance is known to exceed it.

    The common prefix and suffix are stripped first, so a long line with one
    local change costs O(L). The rest uses the bit-vector recurrence of Myers
    (1999) in Hyyrö's global-distance form: one column of the DP table is held
    in a pair of Python ints, giving L integer steps of L/64 machine words each.
    """
    if len(s1) < len(s2):
        s1, s2 = s2, s1
    if limit is not None and len(s1) - len(s2) > limit:
        return limit + 1

    start = 0
    while start < len(s2) and s1[start] == s2[start]:
        start += 1
    end1, end2 = len(s1), len(s2)
    while end2 > start and s1[end1 - 1] == s2[end2 - 1]:
        end1 -= 1
        end2 -= 1
    s1, s2 = s1[start:end1], s2[start:end2]
    if not s2:
        return len(s1)

    peq: dict[str, int] = {}
    for i, c in enumerate(s2):
        peq[c] = peq.get(c, 0) | (1 << i)
    mask = (1 << len(s2)) - 1
    last = 1 << (len(s2) - 1)
    pv, mv, dist = mask, 0, len(s2)
    remaining = len(s1)
    for c in s1:
        remaining -= 1
        eq = peq.get(c, 0)
        xv = eq | mv
        xh = (((eq & pv) + pv) ^ pv) | eq
        ph = mv | ~(xh | pv)
        mh = pv & xh
        if ph & last:
            dist += 1
        elif mh & last:
            dist -= 1
        ph = (ph << 1) | 1
        pv = ((mh << 1) | ~(xv | ph)) & mask
        mv = ph & xv
        # each remaining column lowers the distance by at most one
        if limit is not None and dist - remaining > limit:
            return limit + 1
    return dist


def distance_floor(c1: Counter, c2: Counter) -> int:
    """Lower bound on the Levenshtein distance of two strings from their character counts."""
    longest = max(c1.total(), c2.total())
    return longest - sum((c1 & c2).values())


def distance_limit(longest: int, max_ratio: float) -> int:
    """Largest distance whose ratio to `longest` can still be <= max_ratio."""
    return int(max_ratio * longest + 1e-9)     # float slack; the final check is exact


def change_ratio(s1: str, s2: str) -> float:
    """Share of differing characters relative to the longer line: 0.0 identical, 1.0 nothing shared."""
    longest = max(len(s1), len(s2))
    if not longest:
        return 0.0
    return levenshtein(s1, s2) / longest


def change_ratio_within(s1: str, s2: str, max_ratio: float) -> Optional[float]:
    """change_ratio(s1, s2) if it is <= max_ratio, else None (skips the full computation when possible)."""
    longest = max(len(s1), len(s2))
    if not longest:
        return 0.0
    limit = distance_limit(longest, max_ratio)
    dist = levenshtein(s1, s2, limit=limit)
    if dist > limit:
        return None
    ratio = dist / longest
    return ratio if ratio <= max_ratio else None
