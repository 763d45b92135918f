"""Local file content source: size-capped reads and file discovery"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from pkgdiff.core.errors import FileTooLarge


logger = logging.getLogger(__name__)


def read_content(path: Path, max_bytes: int) -> Optional[str]:
    """Return the file's text, or None when it does not exist. Raises FileTooLarge above max_bytes.

    Content is decoded as UTF-8. Bytes that are not valid UTF-8 are replaced by
    U+FFFD so the file still diffs; a warning names the file and the first bad offset.
    """
    if not path.is_file():
        return None
    size = path.stat().st_size
    if size > max_bytes:
        raise FileTooLarge(str(path), size, max_bytes)
    data = path.read_bytes()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.warning("%s is not valid UTF-8 (byte offset %d); invalid bytes are shown as U+FFFD", path, e.start)
        return data.decode("utf-8", errors="replace")


def iter_files(root: Path) -> Iterable[str]:
    """Yield root-relative POSIX paths of regular files under root, sorted."""
    if not root.is_dir():
        return
    for p in sorted(root.rglob("*")):
        if p.is_file():
            yield p.relative_to(root).as_posix()
