"""compute_diff: split -> line diff -> modify pairs -> inline spans -> skip blocks -> stats"""

import logging
from typing import Any, Optional, Union

from pkgdiff.core.inline import attach_inline_spans
from pkgdiff.core.lines import split_lines
from pkgdiff.core.merge import merge_modified_pairs
from pkgdiff.core.models import (
    ChangeType,
    DiffLineEntry,
    DiffOptions,
    EqualRun,
    FileDiffResult,
    HunkBlock,
    Line,
    LineKind,
    parse_options,
)
from pkgdiff.core.sequence import diff_lines
from pkgdiff.core.skip import insert_skip_blocks
from pkgdiff.core.stats import count_stats


logger = logging.getLogger(__name__)


def _whole_file(path: str, change_type: ChangeType, lines: list[Line]) -> FileDiffResult:
    """Result for a file present on one side only: every line added or deleted, no merging."""
    if change_type is ChangeType.add:
        entries = [DiffLineEntry(kind=LineKind.added, new_line=line) for line in lines]
    else:
        entries = [DiffLineEntry(kind=LineKind.deleted, old_line=line) for line in lines]
    hunks = [HunkBlock(lines=entries)] if entries else []
    return FileDiffResult(path=path, change_type=change_type, hunks=hunks, stats=count_stats(hunks))


def compute_diff(
    old_content: Optional[str],
    new_content: Optional[str],
    path: str,
    options: Union[DiffOptions, dict[str, Any], None] = None,
    ) -> FileDiffResult:
    """Diff two versions of one file. None means the file is absent on that side.

    Raises InvalidOptions for out-of-range options; any combination of present,
    absent or empty content yields a result. Identical content yields no hunks.
    """
    opts = parse_options(options)
    old_lines = split_lines(old_content)
    new_lines = split_lines(new_content)

    if old_lines is None and new_lines is None:
        return FileDiffResult(path=path, change_type=ChangeType.modify)
    if old_lines is None:
        return _whole_file(path, ChangeType.add, new_lines)
    if new_lines is None:
        return _whole_file(path, ChangeType.delete, old_lines)

    runs = diff_lines(old_lines, new_lines)
    if all(isinstance(run, EqualRun) for run in runs):
        return FileDiffResult(path=path, change_type=ChangeType.modify)

    entries = merge_modified_pairs(runs, opts)
    entries = attach_inline_spans(entries, opts.inline_max_char_edits)
    hunks = insert_skip_blocks(entries)
    stats = count_stats(hunks)
    logger.debug("%s: %d hunks, +%d -%d", path, len(hunks), stats.additions, stats.deletions)
    return FileDiffResult(path=path, change_type=ChangeType.modify, hunks=hunks, stats=stats)
