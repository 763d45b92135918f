"""Exception types raised at the diff engine boundary"""


class DiffError(Exception):
    """Base class for pkgdiff errors."""


class InvalidOptions(DiffError, ValueError):
    """DiffOptions outside their allowed ranges; rejected, never clamped."""


class FileTooLarge(DiffError):
    """Content exceeds the configured size cap before reaching the engine."""

    def __init__(self, path: str, size: int, limit: int):
        self.path = path
        self.size = size
        self.limit = limit
        super().__init__(
            f"File too large: {path} ({size / 1024:.1f}KB). Maximum size is {limit / 1024:.0f}KB."
        )
