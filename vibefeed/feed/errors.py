"""Exceptions for feed assembly and candidate loading."""


class FeedError(Exception):
    """Base exception for feed errors."""


class FeedQueryError(FeedError):
    """Raised when a feed query cannot be interpreted."""

    def __init__(self, message: str) -> None:
        """Initialize the query error.

        Args:
            message: Human-readable error message.
        """
        super().__init__(message)


class CandidateLoadError(FeedError):
    """Raised when a candidate file cannot be read or validated.

    Attributes:
        path: File that failed to load.
        errors: Per-record error descriptions, if any.
    """

    def __init__(self, path: str, message: str, errors: list[str] | None = None) -> None:
        """Initialize the load error.

        Args:
            path: File that failed to load.
            message: Human-readable error message.
            errors: Per-record error descriptions.
        """
        self.path = path
        self.errors = errors or []
        super().__init__(f"Cannot load candidates from {path}: {message}")
