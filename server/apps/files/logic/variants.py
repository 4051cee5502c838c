"""Selection of the stored rendition to serve for a requested size."""

import logging
from typing import TYPE_CHECKING, Final

from django.conf import settings

from server.apps.files.exceptions import ContentNotFoundError, NotFoundError
from server.apps.files.models import File

if TYPE_CHECKING:
    from server.apps.files.infrastructure.content import ContentStore

logger = logging.getLogger(__name__)

# Thumbnail widths produced by the variant worker
_DEFAULT_VARIANT_SIZES: Final = ('100', '250', '500')


def get_variant_sizes() -> tuple[str, ...]:
    """Get the size tokens clients may request.

    Returns:
        Size tokens from settings or the default widths.
    """
    sizes = getattr(settings, 'FILES_VARIANT_SIZES', _DEFAULT_VARIANT_SIZES)
    return tuple(str(size) for size in sizes)


def variant_key(content_key: str, size: str) -> str:
    """Derive the key under which a size variant is stored.

    Example: ('files/ab12', '250') -> 'files/ab12_250'

    Args:
        content_key: Key of the original content.
        size: Size token.

    Returns:
        Variant key.
    """
    return f'{content_key}_{size}'


def lookup_variant(
    content_key: str,
    size: str,
    content_store: 'ContentStore',
) -> str | None:
    """Find the stored variant of some content.

    Args:
        content_key: Key of the original content.
        size: Size token.
        content_store: Store holding originals and variants.

    Returns:
        Variant key if the variant has been generated, None otherwise.
    """
    key = variant_key(content_key, size)
    if content_store.exists(key):
        return key

    logger.info('Variant %s not generated yet, serving original: %s', size, content_key)
    return None


def resolve_content(
    record: File,
    size: str,
    content_store: 'ContentStore',
) -> bytes:
    """Read the bytes to serve for a record at a requested size.

    An empty size means the original. A known size is served from its
    variant when it exists and from the original otherwise.

    Args:
        record: File or image record (never a folder).
        size: Requested size token, or empty string.
        content_store: Store holding originals and variants.

    Returns:
        Content bytes.

    Raises:
        NotFoundError: If the size token is unknown or the original
            content is missing.
    """
    content_key = record.content_key
    if size:
        if size not in get_variant_sizes():
            logger.debug('Unknown size %r requested for file %d', size, record.id)
            raise NotFoundError
        content_key = lookup_variant(content_key, size, content_store) or content_key

    try:
        return content_store.retrieve(content_key)
    except ContentNotFoundError as error:
        logger.warning('Content missing for file %d: %s', record.id, content_key)
        raise NotFoundError from error
