"""Plain-text rendering of diff results for terminal output"""

from pkgdiff.core.compare import CompareResult
from pkgdiff.core.models import (
    DiffLineEntry,
    FileDiffResult,
    HunkBlock,
    InlineEditSpan,
    LineKind,
    SkipBlock,
    SpanKind,
    SpanSide,
)


_MARKS = {SpanKind.delete: ("[-", "-]"), SpanKind.insert: ("{+", "+}")}


def _num(n) -> str:
    return f"{n:>5}" if n is not None else " " * 5


def render_inline(text: str, spans: list[InlineEditSpan], side: SpanSide) -> str:
    """Wrap deleted ([-x-]) and inserted ({+x+}) spans of one side's text."""
    side_spans = [s for s in spans if s.side is side]
    if not side_spans:
        return text
    parts = []
    for span in side_spans:
        chunk = text[span.start_offset:span.end_offset]
        if span.kind is SpanKind.equal:
            parts.append(chunk)
        else:
            start, end = _MARKS[span.kind]
            parts.append(f"{start}{chunk}{end}")
    return "".join(parts)


def _render_entry(entry: DiffLineEntry) -> list[str]:
    old_no = entry.old_line.number if entry.old_line else None
    new_no = entry.new_line.number if entry.new_line else None
    if entry.kind is LineKind.context:
        return [f"{_num(old_no)} {_num(new_no)}   {entry.old_line.text}"]
    if entry.kind is LineKind.deleted:
        return [f"{_num(old_no)} {_num(None)} - {entry.old_line.text}"]
    if entry.kind is LineKind.added:
        return [f"{_num(None)} {_num(new_no)} + {entry.new_line.text}"]
    spans = entry.inline_spans or []
    return [
        f"{_num(old_no)} {_num(None)} ~ {render_inline(entry.old_line.text, spans, SpanSide.old)}",
        f"{_num(None)} {_num(new_no)} ~ {render_inline(entry.new_line.text, spans, SpanSide.new)}",
    ]


def render_diff(result: FileDiffResult) -> str:
    """Header line, then one row per entry and one separator per skip block."""
    out = [f"{result.path} ({result.change_type.value}) +{result.stats.additions} -{result.stats.deletions}"]
    for hunk in result.hunks:
        if isinstance(hunk, SkipBlock):
            (o1, o2), (n1, n2) = hunk.old_range, hunk.new_range
            out.append(f"@@ {hunk.hidden_count} unchanged lines (old {o1}-{o2}, new {n1}-{n2}) @@")
        elif isinstance(hunk, HunkBlock):
            for entry in hunk.lines:
                out.extend(_render_entry(entry))
    return "\n".join(out) + "\n"


def render_compare(result: CompareResult) -> str:
    """One summary row per changed file followed by the comparison total."""
    out = [
        f"{c.presence.value:<9} {c.path}  +{c.diff.stats.additions} -{c.diff.stats.deletions}"
        for c in result.files
    ]
    out.append(
        f"{len(result.files)} changed, {result.unchanged} unchanged, "
        f"+{result.stats.additions} -{result.stats.deletions}"
    )
    return "\n".join(out) + "\n"
