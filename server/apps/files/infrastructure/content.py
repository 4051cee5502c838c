"""Raw content persistence keyed independently of file records."""

import logging
import uuid
from typing import Final, final

from django.core.files.base import ContentFile
from django.core.files.storage import Storage

from server.apps.files.exceptions import ContentNotFoundError

logger = logging.getLogger(__name__)

_KEY_SEPARATOR: Final = '/'


@final
class ContentStore:
    """Write-once store for file bytes on top of a Django storage backend.

    Every write gets a fresh random key, so content and metadata
    lifecycles never depend on each other. Size variants produced by
    the thumbnail worker sit next to the original under derived keys.
    """

    def __init__(self, storage: Storage, location: str = '') -> None:
        """Initialize content store.

        Args:
            storage: Storage backend that holds the objects.
            location: Key prefix (folder) for all objects.
        """
        self._storage = storage
        self._location = location.strip(_KEY_SEPARATOR)

    @property
    def location(self) -> str:
        """Key prefix used for all objects."""
        return self._location

    def store(self, data: bytes) -> str:
        """Write bytes under a newly generated key.

        Args:
            data: Raw content.

        Returns:
            Content key to keep on the file record.
        """
        key = self._make_key(uuid.uuid4().hex)
        saved_key = self._storage.save(key, ContentFile(data))
        logger.info('Stored %d bytes of content: %s', len(data), saved_key)
        return saved_key

    def retrieve(self, content_key: str) -> bytes:
        """Read all bytes stored under a key.

        Args:
            content_key: Key returned by ``store`` or a derived variant key.

        Returns:
            Stored bytes.

        Raises:
            ContentNotFoundError: If nothing is stored under the key.
        """
        if not content_key or not self._storage.exists(content_key):
            raise ContentNotFoundError(content_key)

        with self._storage.open(content_key, 'rb') as content:
            return content.read()

    def exists(self, content_key: str) -> bool:
        """Check whether an object is stored under a key."""
        return bool(content_key) and self._storage.exists(content_key)

    def discard(self, content_key: str) -> None:
        """Delete content whose metadata record was never created.

        Best effort: errors are logged, not raised. Whatever stays behind
        is removed later by the ``purge_orphaned_content`` command.

        Args:
            content_key: Key of the object to delete.
        """
        try:
            logger.warning('Discarding unreferenced content: %s', content_key)
            self._storage.delete(content_key)
        except Exception:
            logger.exception('Failed to discard content, orphaned: %s', content_key)

    def delete(self, content_key: str) -> None:
        """Delete the object stored under a key.

        Args:
            content_key: Key of the object to delete.
        """
        self._storage.delete(content_key)

    def list_keys(self) -> list[str]:
        """List every key stored under the store's location.

        Returns:
            Keys in storage order.
        """
        try:
            _, filenames = self._storage.listdir(self._location)
        except FileNotFoundError:
            # Nothing was ever written under the location
            return []
        return [self._make_key(filename) for filename in filenames]

    def _make_key(self, name: str) -> str:
        if not self._location:
            return name
        return f'{self._location}{_KEY_SEPARATOR}{name}'
