"""Multi-file comparison: one compute_diff per changed file plus whole-comparison totals"""

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from pkgdiff.core.models import DiffOptions, DiffStats, FileDiffResult, FilePresence, parse_options
from pkgdiff.core.pipeline import compute_diff


logger = logging.getLogger(__name__)

FilePair = tuple[Optional[str], Optional[str]]


class FileComparison(BaseModel):
    """A changed file: whether it exists on each side, and its content diff."""
    model_config = ConfigDict(frozen=True)
    path:     str
    presence: FilePresence
    diff:     FileDiffResult


class CompareResult(BaseModel):
    model_config = ConfigDict(frozen=True)
    files:     list[FileComparison] = Field(default_factory=list)
    unchanged: int = 0
    stats:     DiffStats = Field(default_factory=DiffStats)


def classify_presence(old: Optional[str], new: Optional[str]) -> Optional[FilePresence]:
    """File existence change between versions; None when the file exists in neither."""
    if old is None and new is None:
        return None
    if old is None:
        return FilePresence.added
    if new is None:
        return FilePresence.removed
    return FilePresence.modified


def compare_files(
    files: Mapping[str, FilePair],
    options: Union[DiffOptions, dict[str, Any], None] = None,
    ) -> CompareResult:
    """Diff every path in files (old, new) in sorted path order and total their stats.

    Files with identical content on both sides are counted as unchanged and omitted.
    """
    opts = parse_options(options)
    results: list[FileComparison] = []
    unchanged = 0
    total = DiffStats()
    for path in sorted(files):
        old, new = files[path]
        presence = classify_presence(old, new)
        if presence is None or (presence is FilePresence.modified and old == new):
            unchanged += 1
            continue
        diff = compute_diff(old, new, path, opts)
        results.append(FileComparison(path=path, presence=presence, diff=diff))
        total = total + diff.stats

    logger.debug("compared %d files: %d changed, %d unchanged", len(files), len(results), unchanged)
    return CompareResult(files=results, unchanged=unchanged, stats=total)
