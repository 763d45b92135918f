"""Collapse long runs of unchanged lines into skip blocks for compact display"""

from pkgdiff.core.models import DiffLineEntry, Hunk, HunkBlock, LineKind, SkipBlock


SKIP_THRESHOLD = 10     # context runs longer than this are collapsed
CONTEXT_LINES = 3       # context rows kept next to each change


def _skip(hidden: list[DiffLineEntry]) -> SkipBlock:
    return SkipBlock(
        hidden_count=len(hidden),
        old_range=(hidden[0].old_line.number, hidden[-1].old_line.number),
        new_range=(hidden[0].new_line.number, hidden[-1].new_line.number),
    )


def insert_skip_blocks(
    entries: list[DiffLineEntry],
    threshold: int = SKIP_THRESHOLD,
    context: int = CONTEXT_LINES,
    ) -> list[Hunk]:
    """Split rows into HunkBlocks separated by SkipBlocks.

    A maximal context run longer than threshold keeps `context` rows on each side
    that borders a change and hides the rest; a run of exactly threshold rows
    stays visible.
    """
    if context < 0 or threshold < 2 * context:
        raise ValueError(f"threshold ({threshold}) must be at least twice context ({context})")

    hunks: list[Hunk] = []
    current: list[DiffLineEntry] = []
    n = len(entries)
    idx = 0
    while idx < n:
        if entries[idx].kind is not LineKind.context:
            current.append(entries[idx])
            idx += 1
            continue

        start = idx
        while idx < n and entries[idx].kind is LineKind.context:
            idx += 1
        run = entries[start:idx]
        if len(run) <= threshold:
            current.extend(run)
            continue

        head = context if start > 0 else 0
        tail = context if idx < n else 0
        current.extend(run[:head])
        if current:
            hunks.append(HunkBlock(lines=current))
        hunks.append(_skip(run[head:len(run) - tail]))
        current = run[len(run) - tail:]

    if current:
        hunks.append(HunkBlock(lines=current))
    return hunks
