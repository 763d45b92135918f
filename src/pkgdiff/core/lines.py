"""Split raw file content into numbered logical lines"""

from typing import Optional

from pkgdiff.core.models import Line


def split_lines(content: Optional[str]) -> Optional[list[Line]]:
    """Split on '\\r\\n' or '\\n' into 1-based Lines. None (absent file) stays None.

    A final newline does not produce a trailing empty line, so '' and 'a\\n'
    yield [] and [a]. Lone '\\r' and other separators stay part of the text.
    """
    if content is None:
        return None
    if not content:
        return []
    parts = content.replace("\r\n", "\n").split("\n")
    if parts[-1] == "":
        parts.pop()
    return [Line(number=i, text=text) for i, text in enumerate(parts, start=1)]
