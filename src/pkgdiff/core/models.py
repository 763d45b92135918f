"""Data models for the diff pipeline: lines, rendered rows, inline spans, hunks, results"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from pkgdiff.core.errors import InvalidOptions


class LineKind(str, Enum):
    """Classification of a single rendered diff row"""
    context = "context"
    added = "added"
    deleted = "deleted"
    modified = "modified"


class SpanSide(str, Enum):
    old = "old"
    new = "new"


class SpanKind(str, Enum):
    equal = "equal"
    insert = "insert"
    delete = "delete"


class ChangeType(str, Enum):
    """Shape of the diff content for one file"""
    add = "add"
    delete = "delete"
    modify = "modify"


class FilePresence(str, Enum):
    """Whether a file exists in the old version, the new version, or both"""
    added = "added"
    removed = "removed"
    modified = "modified"


class Line(BaseModel):
    """One logical line of a file version (1-based number)."""
    model_config = ConfigDict(frozen=True)
    number: int = Field(..., ge=1)
    text:   str


class InlineEditSpan(BaseModel):
    """Code point range [start_offset, end_offset) of one side's text."""
    model_config = ConfigDict(frozen=True)
    side:         SpanSide
    kind:         SpanKind
    start_offset: int = Field(..., ge=0)
    end_offset:   int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_offsets(self) -> "InlineEditSpan":
        if self.end_offset < self.start_offset:
            raise ValueError("end_offset must not precede start_offset")
        if self.side is SpanSide.old and self.kind is SpanKind.insert:
            raise ValueError("insert spans belong to the new side")
        if self.side is SpanSide.new and self.kind is SpanKind.delete:
            raise ValueError("delete spans belong to the old side")
        return self


_SIDES_BY_KIND = {
    LineKind.context:  (True, True),
    LineKind.modified: (True, True),
    LineKind.added:    (False, True),
    LineKind.deleted:  (True, False),
}


def _check_partition(spans: list[InlineEditSpan], side: SpanSide, text: str) -> None:
    """Spans for one side must be contiguous and cover the side's text exactly."""
    pos = 0
    for span in (s for s in spans if s.side is side):
        if span.start_offset != pos:
            raise ValueError(f"{side.value} spans are not contiguous at offset {pos}")
        pos = span.end_offset
    if pos != len(text):
        raise ValueError(f"{side.value} spans cover {pos} of {len(text)} characters")


class DiffLineEntry(BaseModel):
    """A single rendered row of a hunk."""
    model_config = ConfigDict(frozen=True)
    kind:         LineKind
    old_line:     Optional[Line] = None
    new_line:     Optional[Line] = None
    inline_spans: Optional[list[InlineEditSpan]] = None   # modified rows only

    @model_validator(mode="after")
    def check_sides(self) -> "DiffLineEntry":
        want_old, want_new = _SIDES_BY_KIND[self.kind]
        if (self.old_line is not None) != want_old or (self.new_line is not None) != want_new:
            raise ValueError(f"{self.kind.value} entry has the wrong line sides")
        if self.inline_spans is not None:
            if self.kind is not LineKind.modified:
                raise ValueError("inline spans are only valid on modified entries")
            _check_partition(self.inline_spans, SpanSide.old, self.old_line.text)
            _check_partition(self.inline_spans, SpanSide.new, self.new_line.text)
        return self

    def spans_for(self, side: SpanSide) -> list[InlineEditSpan]:
        return [s for s in self.inline_spans or [] if s.side is side]


class HunkBlock(BaseModel):
    model_config = ConfigDict(frozen=True)
    type:  Literal["hunk"] = "hunk"
    lines: list[DiffLineEntry]


class SkipBlock(BaseModel):
    """Collapsed run of unchanged lines; ranges are inclusive and 1-based."""
    model_config = ConfigDict(frozen=True)
    type:         Literal["skip"] = "skip"
    hidden_count: int = Field(..., ge=1)
    old_range:    tuple[int, int]
    new_range:    tuple[int, int]

    @model_validator(mode="after")
    def check_ranges(self) -> "SkipBlock":
        for start, end in (self.old_range, self.new_range):
            if end - start + 1 != self.hidden_count:
                raise ValueError("skip range length does not match hidden_count")
        return self


Hunk = Annotated[Union[HunkBlock, SkipBlock], Field(discriminator="type")]


class DiffStats(BaseModel):
    model_config = ConfigDict(frozen=True)
    additions: int = 0
    deletions: int = 0

    def __add__(self, other: "DiffStats") -> "DiffStats":
        return DiffStats(additions=self.additions + other.additions,
                         deletions=self.deletions + other.deletions)


class FileDiffResult(BaseModel):
    """Structured, renderable diff of one file between two versions."""
    model_config = ConfigDict(frozen=True)
    path:        str
    change_type: ChangeType
    hunks:       list[Hunk] = Field(default_factory=list)
    stats:       DiffStats = Field(default_factory=DiffStats)


class DiffOptions(BaseModel):
    """Caller-supplied tuning knobs, immutable per compute_diff call."""
    model_config = ConfigDict(frozen=True, extra="forbid")
    merge_modified_lines:  bool  = Field(default=True,  strict=True, description="Pair similar deleted/added lines")
    max_change_ratio:      float = Field(default=0.45, ge=0.0, le=1.0, description="Max dissimilarity for a modify pair")
    max_diff_distance:     int   = Field(default=30,   ge=1,   le=60,  description="Max positional offset between paired lines")
    inline_max_char_edits: int   = Field(default=4,    ge=0,   le=10,  description="Max char edit runs before inline highlighting is dropped")


def parse_options(options: Union[DiffOptions, dict[str, Any], None] = None) -> DiffOptions:
    """Validate caller options, raising InvalidOptions instead of clamping."""
    if options is None:
        return DiffOptions()
    data = options.model_dump() if isinstance(options, DiffOptions) else options
    try:
        return DiffOptions.model_validate(data)
    except ValidationError as e:
        raise InvalidOptions(f"Invalid diff options: {e}") from e


@dataclass(frozen=True)
class EqualRun:
    """Matched lines; old and new are the same length and text."""
    old: tuple[Line, ...]
    new: tuple[Line, ...]


@dataclass(frozen=True)
class AddedRun:
    lines: tuple[Line, ...]


@dataclass(frozen=True)
class DeletedRun:
    lines: tuple[Line, ...]


Run = Union[EqualRun, AddedRun, DeletedRun]
