"""Character-level highlighting spans for modified lines"""

from pkgdiff.core.models import DiffLineEntry, InlineEditSpan, LineKind, SpanKind, SpanSide
from pkgdiff.core.sequence import edit_script


# Inserted plus deleted characters beyond which the character search is abandoned
# and the line falls back to full-line spans.
INLINE_MAX_COST = 1000


def full_line_spans(old_text: str, new_text: str) -> list[InlineEditSpan]:
    """Fallback: the whole old line deleted and the whole new line inserted, no equal spans."""
    spans = []
    if old_text:
        spans.append(InlineEditSpan(side=SpanSide.old, kind=SpanKind.delete, start_offset=0, end_offset=len(old_text)))
    if new_text:
        spans.append(InlineEditSpan(side=SpanSide.new, kind=SpanKind.insert, start_offset=0, end_offset=len(new_text)))
    return spans


def inline_spans(old_text: str, new_text: str, max_edits: int, max_cost: int = INLINE_MAX_COST) -> list[InlineEditSpan]:
    """Old-side spans followed by new-side spans, offsets in code points.

    Each maximal insert or delete run counts as one edit; more than max_edits
    edits falls back to full_line_spans. So does a character script costing
    more than max_cost, which keeps the search bounded on very long lines.
    """
    if max_edits == 0 and old_text != new_text:
        return full_line_spans(old_text, new_text)
    ops = edit_script(old_text, new_text, max_cost=max_cost)
    if ops is None or sum(1 for op in ops if op[0] != "equal") > max_edits:
        return full_line_spans(old_text, new_text)

    old_spans, new_spans = [], []
    for tag, i1, i2, j1, j2 in ops:
        if tag in ("equal", "delete"):
            kind = SpanKind.equal if tag == "equal" else SpanKind.delete
            old_spans.append(InlineEditSpan(side=SpanSide.old, kind=kind, start_offset=i1, end_offset=i2))
        if tag in ("equal", "insert"):
            kind = SpanKind.equal if tag == "equal" else SpanKind.insert
            new_spans.append(InlineEditSpan(side=SpanSide.new, kind=kind, start_offset=j1, end_offset=j2))
    return old_spans + new_spans


def attach_inline_spans(entries: list[DiffLineEntry], max_edits: int) -> list[DiffLineEntry]:
    """Return a copy of entries where every modified row carries its inline spans."""
    result = []
    for entry in entries:
        if entry.kind is LineKind.modified:
            entry = DiffLineEntry(
                kind=entry.kind,
                old_line=entry.old_line,
                new_line=entry.new_line,
                inline_spans=inline_spans(entry.old_line.text, entry.new_line.text, max_edits),
            )
        result.append(entry)
    return result
