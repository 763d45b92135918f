"""Minimal edit scripts over sequences (Myers' O(N·D) algorithm, linear-space variant)"""

import logging
from typing import Optional, Sequence

from pkgdiff.core.models import AddedRun, DeletedRun, EqualRun, Line, Run


logger = logging.getLogger(__name__)

Opcode = tuple[str, int, int, int, int]
Block = tuple[int, int, int]


def _common_prefix(a: Sequence, b: Sequence) -> int:
    n = min(len(a), len(b))
    i = 0
    while i < n and a[i] == b[i]:
        i += 1
    return i


def _common_suffix(a: Sequence, b: Sequence, prefix: int) -> int:
    n = min(len(a), len(b)) - prefix
    i = 0
    while i < n and a[-1 - i] == b[-1 - i]:
        i += 1
    return i


def _add_block(blocks: list[Block], i: int, j: int, size: int) -> None:
    """Append a matching block, extending the previous one when the two touch."""
    if not size:
        return
    if blocks:
        pi, pj, ps = blocks[-1]
        if pi + ps == i and pj + ps == j:
            blocks[-1] = (pi, pj, ps + size)
            return
    blocks.append((i, j, size))


def _middle_snake(a: Sequence, b: Sequence, rounds: int) -> Optional[tuple[int, int, int]]:
    """Run the forward and reverse greedy searches until their paths overlap.

    Returns (x, y, cost): a point on a minimal path splitting the problem in two,
    and the total cost of that path. Returns None when the paths do not meet
    within `rounds` steps of d. Only two vectors of furthest-reaching x values
    are kept, so memory is linear in `rounds`.
    """
    n, m = len(a), len(b)
    delta = n - m
    front = delta % 2 != 0
    offset = rounds + 1
    size = 2 * rounds + 3
    v1 = [-1] * size
    v2 = [-1] * size
    v1[offset + 1] = 0
    v2[offset + 1] = 0
    k1start = k1end = k2start = k2end = 0
    for d in range(rounds):
        for k1 in range(-d + k1start, d + 1 - k1end, 2):
            k1_off = offset + k1
            if k1 == -d or (k1 != d and v1[k1_off - 1] < v1[k1_off + 1]):
                x1 = v1[k1_off + 1]
            else:
                x1 = v1[k1_off - 1] + 1
            y1 = x1 - k1
            while x1 < n and y1 < m and a[x1] == b[y1]:
                x1 += 1
                y1 += 1
            v1[k1_off] = x1
            if x1 > n:
                k1end += 2
            elif y1 > m:
                k1start += 2
            elif front:
                k2_off = offset + delta - k1
                if 0 <= k2_off < size and v2[k2_off] != -1 and x1 >= n - v2[k2_off]:
                    return x1, y1, 2 * d - 1

        for k2 in range(-d + k2start, d + 1 - k2end, 2):
            k2_off = offset + k2
            if k2 == -d or (k2 != d and v2[k2_off - 1] < v2[k2_off + 1]):
                x2 = v2[k2_off + 1]
            else:
                x2 = v2[k2_off - 1] + 1
            y2 = x2 - k2
            while x2 < n and y2 < m and a[n - x2 - 1] == b[m - y2 - 1]:
                x2 += 1
                y2 += 1
            v2[k2_off] = x2
            if x2 > n:
                k2end += 2
            elif y2 > m:
                k2start += 2
            elif not front:
                k1_off = offset + delta - k2
                if 0 <= k1_off < size and v1[k1_off] != -1:
                    x1 = v1[k1_off]
                    if x1 >= n - x2:
                        return x1, x1 - (k1_off - offset), 2 * d
    return None


def _match(a: Sequence, b: Sequence, i0: int, j0: int, blocks: list[Block], max_cost: Optional[int] = None) -> bool:
    """Append the matching blocks of a minimal script for a vs b, offset by (i0, j0).

    Returns False, leaving `blocks` partially filled, when the script costs more
    than max_cost. Recursion depth grows with log(D).
    """
    prefix = _common_prefix(a, b)
    suffix = _common_suffix(a, b, prefix)
    _add_block(blocks, i0, j0, prefix)
    a_mid = a[prefix:len(a) - suffix]
    b_mid = b[prefix:len(b) - suffix]

    if a_mid and b_mid:
        natural = (len(a_mid) + len(b_mid) + 1) // 2
        rounds = natural if max_cost is None else min(natural, (max_cost + 1) // 2 + 1)
        split = _middle_snake(a_mid, b_mid, rounds)
        if split is None:
            # nothing in common, or not within max_cost
            if rounds < natural or (max_cost is not None and len(a_mid) + len(b_mid) > max_cost):
                return False
        else:
            x, y, cost = split
            if max_cost is not None and cost > max_cost:
                return False
            _match(a_mid[:x], b_mid[:y], i0 + prefix, j0 + prefix, blocks)
            _match(a_mid[x:], b_mid[y:], i0 + prefix + x, j0 + prefix + y, blocks)
    elif max_cost is not None and len(a_mid) + len(b_mid) > max_cost:
        return False

    _add_block(blocks, i0 + len(a) - suffix, j0 + len(b) - suffix, suffix)
    return True


def matching_blocks(a: Sequence, b: Sequence, max_cost: Optional[int] = None) -> Optional[list[Block]]:
    """Maximal (i, j, size) runs where a[i:i+size] == b[j:j+size] in a minimal edit script.

    Elements that occur on one side only can never be matched, so they are set
    aside before the search; a full rewrite then costs no search at all. With
    max_cost, returns None as soon as the script is known to need more than
    max_cost inserted plus deleted elements. Elements must be hashable.
    """
    prefix = _common_prefix(a, b)
    suffix = _common_suffix(a, b, prefix)
    a_mid = a[prefix:len(a) - suffix]
    b_mid = b[prefix:len(b) - suffix]

    shared = set(a_mid) & set(b_mid)
    keep_a = [i for i, x in enumerate(a_mid) if x in shared]
    keep_b = [j for j, x in enumerate(b_mid) if x in shared]
    if max_cost is not None:
        max_cost -= (len(a_mid) - len(keep_a)) + (len(b_mid) - len(keep_b))
        if max_cost < 0:
            return None

    inner: list[Block] = []
    if not _match([a_mid[i] for i in keep_a], [b_mid[j] for j in keep_b], 0, 0, inner, max_cost):
        return None

    blocks: list[Block] = []
    _add_block(blocks, 0, 0, prefix)
    for i, j, size in inner:
        for t in range(size):
            _add_block(blocks, prefix + keep_a[i + t], prefix + keep_b[j + t], 1)
    _add_block(blocks, len(a) - suffix, len(b) - suffix, suffix)
    return blocks


def edit_script(a: Sequence, b: Sequence, max_cost: Optional[int] = None) -> Optional[list[Opcode]]:
    """Return opcodes ('equal' | 'delete' | 'insert', i1, i2, j1, j2) of a minimal edit script.

    Same shape as difflib's get_opcodes() but minimal and without 'replace':
    a changed region is reported as a 'delete' followed by an 'insert'. Ties
    favour matching the earliest old element against the earliest new one.
    Works on any indexable sequence, so a str is diffed per code point.

    Returns None only when max_cost is given and the minimal script needs more
    inserted plus deleted elements than that.
    """
    blocks = matching_blocks(a, b, max_cost)
    if blocks is None:
        return None

    ops: list[Opcode] = []
    i = j = 0
    for bi, bj, size in blocks + [(len(a), len(b), 0)]:
        if i < bi:
            ops.append(("delete", i, bi, j, j))
        if j < bj:
            ops.append(("insert", bi, bi, j, bj))
        if size:
            ops.append(("equal", bi, bi + size, bj, bj + size))
        i, j = bi + size, bj + size
    return ops


def edit_distance(ops: list[Opcode]) -> int:
    """Number of inserted plus deleted elements in an edit script."""
    return sum((i2 - i1) + (j2 - j1) for tag, i1, i2, j1, j2 in ops if tag != "equal")


def diff_lines(old: list[Line], new: list[Line]) -> list[Run]:
    """Align two line lists by text equality into Equal / Deleted / Added runs."""
    ids: dict[str, int] = {}
    a = [ids.setdefault(line.text, len(ids)) for line in old]
    b = [ids.setdefault(line.text, len(ids)) for line in new]
    ops = edit_script(a, b)
    logger.debug("line diff: %d old, %d new, distance %d", len(old), len(new), edit_distance(ops))

    runs: list[Run] = []
    for tag, i1, i2, j1, j2 in ops:
        if tag == "equal":
            runs.append(EqualRun(old=tuple(old[i1:i2]), new=tuple(new[j1:j2])))
        elif tag == "delete":
            runs.append(DeletedRun(lines=tuple(old[i1:i2])))
        else:
            runs.append(AddedRun(lines=tuple(new[j1:j2])))
    return runs
