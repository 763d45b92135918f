"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from pkgdiff.config import Settings, load_config
from pkgdiff.core.compare import compare_files
from pkgdiff.core.errors import FileTooLarge, InvalidOptions
from pkgdiff.core.models import DiffOptions
from pkgdiff.core.pipeline import compute_diff
from pkgdiff.core.render import render_compare, render_diff
from pkgdiff.util.fs import iter_files, read_content


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _setup(overrides: dict, verbose: bool) -> tuple[Settings, DiffOptions]:
    """Load settings, configure logging, and validate diff options."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail("Invalid configuration", e)
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        return settings, settings.diff_options()
    except InvalidOptions as e:
        _fail("Invalid diff options", e)


MergeOpt     = Annotated[Optional[bool],  typer.Option("--merge/--no-merge", help="Pair similar deleted/added lines as modified")]
RatioOpt     = Annotated[Optional[float], typer.Option("--max-change-ratio", help="Max changed-character ratio for a modified pair (0-1)")]
DistanceOpt  = Annotated[Optional[int],   typer.Option("--max-diff-distance", help="Max offset between paired lines (1-60)")]
InlineOpt    = Annotated[Optional[int],   typer.Option("--inline-max-char-edits", help="Max inline edits before highlighting is dropped (0-10)")]
JsonOpt      = Annotated[bool, typer.Option("--json", help="Print the result as JSON")]
VerboseOpt   = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")]


def diff_cmd(
    old: Annotated[Path, typer.Argument(help="Old version of the file (missing path = absent)")],
    new: Annotated[Path, typer.Argument(help="New version of the file (missing path = absent)")],
    label: Annotated[Optional[str], typer.Option("--path", help="Path shown in the result")] = None,
    merge: MergeOpt = None,
    ratio: RatioOpt = None,
    distance: DistanceOpt = None,
    inline_edits: InlineOpt = None,
    as_json: JsonOpt = False,
    verbose: VerboseOpt = False,
    ):
    """Diff two versions of a single file.

    Files are read as UTF-8; bytes that are not valid UTF-8 are shown as U+FFFD
    and a warning names the file.
    """
    settings, options = _setup({
        "merge_modified_lines": merge, "max_change_ratio": ratio,
        "max_diff_distance": distance, "inline_max_char_edits": inline_edits,
    }, verbose)

    try:
        old_content = read_content(old, settings.max_file_size)
        new_content = read_content(new, settings.max_file_size)
    except FileTooLarge as e:
        _fail(str(e))
    if old_content is None and new_content is None:
        _fail(f"Neither {old} nor {new} exists")

    path = label or (new if new_content is not None else old).as_posix()
    result = compute_diff(old_content, new_content, path, options)
    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        typer.echo(render_diff(result), nl=False)


def compare_cmd(
    old_dir: Annotated[Path, typer.Argument(help="Directory holding the old version")],
    new_dir: Annotated[Path, typer.Argument(help="Directory holding the new version")],
    merge: MergeOpt = None,
    ratio: RatioOpt = None,
    distance: DistanceOpt = None,
    inline_edits: InlineOpt = None,
    as_json: JsonOpt = False,
    verbose: VerboseOpt = False,
    ):
    """Diff every file of two directory trees and total the changes.

    Files are read as UTF-8; bytes that are not valid UTF-8 are shown as U+FFFD
    and a warning names the file.
    """
    settings, options = _setup({
        "merge_modified_lines": merge, "max_change_ratio": ratio,
        "max_diff_distance": distance, "inline_max_char_edits": inline_edits,
    }, verbose)
    if not old_dir.is_dir() and not new_dir.is_dir():
        _fail(f"Neither {old_dir} nor {new_dir} is a directory")

    paths = sorted(set(iter_files(old_dir)) | set(iter_files(new_dir)))
    try:
        files = {
            p: (read_content(old_dir / p, settings.max_file_size), read_content(new_dir / p, settings.max_file_size))
            for p in paths
        }
    except FileTooLarge as e:
        _fail(str(e))

    result = compare_files(files, options)
    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        typer.echo(render_compare(result), nl=False)
