"""Addition/deletion totals derived from a hunk list"""

from pkgdiff.core.models import DiffStats, Hunk, HunkBlock, LineKind


def count_stats(hunks: list[Hunk]) -> DiffStats:
    """Count added (+ new side of modified) and deleted (+ old side of modified) rows. Skip blocks add nothing."""
    additions = deletions = 0
    for hunk in hunks:
        if not isinstance(hunk, HunkBlock):
            continue
        for entry in hunk.lines:
            if entry.kind in (LineKind.added, LineKind.modified):
                additions += 1
            if entry.kind in (LineKind.deleted, LineKind.modified):
                deletions += 1
    return DiffStats(additions=additions, deletions=deletions)
