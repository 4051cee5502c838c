"""S3-compatible storage backend for file content."""

import logging
from typing import IO, Any, final, override

from storages.backends.s3 import S3Storage

logger = logging.getLogger(__name__)


@final
class FileStorage(S3Storage):
    """S3 storage backend holding the raw bytes of uploaded files.

    Extends django-storages S3Storage with logging of every write,
    failed read and delete.
    """

    @override
    def save(
        self,
        name: str | None,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Save content object to S3 with logging.

        Args:
            name: Storage key for the object.
            content: File content (file-like object).
            max_length: Optional maximum length for the key.

        Returns:
            Key actually used by the storage.

        Raises:
            Exception: If S3 upload fails.
        """
        try:
            logger.debug('Uploading content object: %s', name)
            saved_name = super().save(name, content, max_length)
        except Exception:
            logger.exception('Failed to upload content object: %s', name)
            raise
        logger.info('Uploaded content object: %s', saved_name)
        return saved_name

    @override
    def open(self, name: str, mode: str = 'rb') -> IO[Any]:
        """Open a content object, logging failures.

        Args:
            name: Storage key of the object.
            mode: File mode.

        Returns:
            File-like object streaming from S3.
        """
        try:
            return super().open(name, mode)
        except Exception:
            logger.exception('Failed to open content object: %s', name)
            raise

    @override
    def delete(self, name: str) -> None:
        """Delete content object from S3 with logging.

        Args:
            name: Storage key of the object to delete.

        Raises:
            Exception: If S3 delete fails.
        """
        try:
            super().delete(name)
        except Exception:
            logger.exception('Failed to delete content object: %s', name)
            raise
        logger.info('Deleted content object: %s', name)
