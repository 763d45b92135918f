"""Re-interpret adjacent deleted/added lines as single 'modified' rows when they are similar"""

import bisect
import logging
from collections import Counter
from typing import Sequence

from pkgdiff.core.models import (
    AddedRun,
    DeletedRun,
    DiffLineEntry,
    DiffOptions,
    EqualRun,
    Line,
    LineKind,
    Run,
)
from pkgdiff.core.utils.similarity import change_ratio_within, distance_floor, distance_limit


logger = logging.getLogger(__name__)


def _context(run: EqualRun) -> list[DiffLineEntry]:
    return [DiffLineEntry(kind=LineKind.context, old_line=o, new_line=n) for o, n in zip(run.old, run.new)]


def _deleted(lines: Sequence[Line]) -> list[DiffLineEntry]:
    return [DiffLineEntry(kind=LineKind.deleted, old_line=line) for line in lines]


def _added(lines: Sequence[Line]) -> list[DiffLineEntry]:
    return [DiffLineEntry(kind=LineKind.added, new_line=line) for line in lines]


def run_entries(run: Run) -> list[DiffLineEntry]:
    """Expand one run into plain context / deleted / added rows."""
    if isinstance(run, EqualRun):
        return _context(run)
    if isinstance(run, DeletedRun):
        return _deleted(run.lines)
    return _added(run.lines)


def match_pairs(
    deleted: Sequence[Line],
    added: Sequence[Line],
    options: DiffOptions,
    ) -> list[tuple[int, int]]:
    """Greedily pair deleted[i] with added[j]; returns accepted (i, j) sorted by i.

    Candidates lie within max_diff_distance of each other and have a change ratio
    <= max_change_ratio. They are taken best-first by (ratio, |i - j|, i, j); a
    candidate is dropped when either line is already used or when it would cross
    an accepted pair, so pairs stay in document order on both sides.
    """
    distance = options.max_diff_distance
    old_counts = [Counter(line.text) for line in deleted]
    new_counts = [Counter(line.text) for line in added]
    candidates = []
    for i, old in enumerate(deleted):
        for j in range(max(0, i - distance), min(len(added), i + distance + 1)):
            new = added[j]
            # character counts rule out most pairs of a rewritten region without a distance computation
            limit = distance_limit(max(len(old.text), len(new.text)), options.max_change_ratio)
            if distance_floor(old_counts[i], new_counts[j]) > limit:
                continue
            ratio = change_ratio_within(old.text, new.text, options.max_change_ratio)
            if ratio is not None:
                candidates.append((ratio, abs(i - j), i, j))
    candidates.sort()

    pairs: list[tuple[int, int]] = []
    used_old: set[int] = set()
    used_new: set[int] = set()
    for _, _, i, j in candidates:
        if i in used_old or j in used_new:
            continue
        pos = bisect.bisect_left(pairs, (i, j))
        if pos > 0 and pairs[pos - 1][1] > j:
            continue
        if pos < len(pairs) and pairs[pos][1] < j:
            continue
        pairs.insert(pos, (i, j))
        used_old.add(i)
        used_new.add(j)
    return pairs


def _merge_block(deleted: Sequence[Line], added: Sequence[Line], options: DiffOptions) -> list[DiffLineEntry]:
    """Rows for one change region: unmatched deletions, unmatched additions, then each modify pair."""
    pairs = match_pairs(deleted, added, options)
    entries: list[DiffLineEntry] = []
    i = j = 0
    for pi, pj in pairs:
        entries.extend(_deleted(deleted[i:pi]))
        entries.extend(_added(added[j:pj]))
        entries.append(DiffLineEntry(kind=LineKind.modified, old_line=deleted[pi], new_line=added[pj]))
        i, j = pi + 1, pj + 1
    entries.extend(_deleted(deleted[i:]))
    entries.extend(_added(added[j:]))
    if pairs:
        logger.debug("paired %d of %d deleted / %d added lines", len(pairs), len(deleted), len(added))
    return entries


def merge_modified_pairs(runs: list[Run], options: DiffOptions) -> list[DiffLineEntry]:
    """Flatten runs into rows, merging similar deleted/added neighbours into 'modified' rows.

    With merge_modified_lines off every line stays a plain deleted/added row.
    """
    if not options.merge_modified_lines:
        return [entry for run in runs for entry in run_entries(run)]

    entries: list[DiffLineEntry] = []
    idx = 0
    while idx < len(runs):
        run = runs[idx]
        nxt = runs[idx + 1] if idx + 1 < len(runs) else None
        if isinstance(run, DeletedRun) and isinstance(nxt, AddedRun):
            entries.extend(_merge_block(run.lines, nxt.lines, options))
            idx += 2
        elif isinstance(run, AddedRun) and isinstance(nxt, DeletedRun):
            entries.extend(_merge_block(nxt.lines, run.lines, options))
            idx += 2
        else:
            entries.extend(run_entries(run))
            idx += 1
    return entries
