"""Exceptions for files app.

Creation payload problems are reported with Django's ``ValidationError``;
everything else a request can run into is one of the classes below.
"""


class FilesError(Exception):
    """Base class for errors translated to a client-facing status."""


class UnauthorizedError(FilesError):
    """Raised when an operation requires an identity and none was resolved."""

    def __init__(self) -> None:
        """Initialize UnauthorizedError."""
        super().__init__('Unauthorized')


class NotFoundError(FilesError):
    """Raised when a record is absent, its id is malformed, or it is not ours.

    All three cases share one message so that a caller cannot tell
    whether a record it does not own exists.
    """

    def __init__(self) -> None:
        """Initialize NotFoundError."""
        super().__init__('Not found')


class InvalidOperationError(FilesError):
    """Raised when an operation does not apply to the record's kind."""


class ContentNotFoundError(Exception):
    """Raised by the content store when no object exists under a key."""

    def __init__(self, content_key: str) -> None:
        """Initialize ContentNotFoundError.

        Args:
            content_key: Storage key that was looked up.
        """
        self.content_key = content_key
        super().__init__(f'No stored content for key: {content_key}')
