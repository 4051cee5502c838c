"""Metadata derived from file names."""

import mimetypes
from typing import Final

_DEFAULT_MIME_TYPE: Final = 'application/octet-stream'
_TEXT_CHARSET: Final = 'utf-8'


def detect_mime_type(filename: str) -> str:
    """Detect MIME type from a file name.

    Uses Python's built-in mimetypes module to guess MIME type
    from the extension. Content is never inspected.

    Args:
        filename: Filename with extension.

    Returns:
        MIME type string (e.g., 'image/jpeg', 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return _DEFAULT_MIME_TYPE
    return mime_type


def content_type_for(filename: str) -> str:
    """Build a Content-Type header value for a file name.

    Textual types get an explicit charset.

    Args:
        filename: Filename with extension.

    Returns:
        Header value (e.g., 'text/plain; charset=utf-8', 'image/png').
    """
    mime_type = detect_mime_type(filename)
    if mime_type.startswith('text/'):
        return f'{mime_type}; charset={_TEXT_CHARSET}'
    return mime_type
