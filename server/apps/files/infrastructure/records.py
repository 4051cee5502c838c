"""Repository over file records stored through the Django ORM."""

import logging
from typing import Final, final

from django.conf import settings
from django.db import transaction

from server.apps.files.exceptions import NotFoundError
from server.apps.files.logic.identifiers import ParentRef
from server.apps.files.models import File, FileKind

logger = logging.getLogger(__name__)

_DEFAULT_PAGE_SIZE: Final = 20

# Largest OFFSET plus LIMIT the database accepts (signed 64-bit)
_MAX_ROW_BOUND: Final = 2**63 - 1


def get_page_size() -> int:
    """Get maximum number of records returned per listing page.

    Returns:
        Page size from settings or default of 20.
    """
    return getattr(settings, 'FILES_PAGE_SIZE', _DEFAULT_PAGE_SIZE)


def normalize_page(raw_page: object) -> int:
    """Turn a client-supplied page number into a zero-based index.

    Missing, non-numeric and negative values all become page 0.

    Args:
        raw_page: Value from the query string.

    Returns:
        Non-negative page index.
    """
    try:
        page = int(str(raw_page))
    except ValueError:
        return 0
    return max(page, 0)


@final
class FileRepository:
    """Lookup, listing and visibility updates for ``File`` records.

    Apart from ``is_public`` records are never modified once inserted.
    """

    def insert(  # noqa: WPS211
        self,
        owner_id: int,
        name: str,
        kind: FileKind,
        parent: ParentRef,
        *,
        is_public: bool = False,
        content_key: str = '',
    ) -> File:
        """Create a new record; the database assigns its id.

        Args:
            owner_id: Id of the owning user.
            name: Display name.
            kind: Folder, file or image.
            parent: Containing folder or root.
            is_public: Initial visibility.
            content_key: Key of stored content, empty for folders.

        Returns:
            Created File instance.
        """
        with transaction.atomic():
            record = File.objects.create(
                user_id=owner_id,
                name=name,
                kind=kind,
                parent_id=parent.to_wire(),
                is_public=is_public,
                content_key=content_key,
            )
        logger.info(
            'File record created: %s (ID: %d, kind: %s, owner: %d)',
            name,
            record.id,
            kind,
            owner_id,
        )
        return record

    def find_by_id(self, record_id: int) -> File | None:
        """Get a record by id regardless of owner.

        Args:
            record_id: Record id.

        Returns:
            File instance, or None if there is no such record.
        """
        return File.objects.filter(id=record_id).first()

    def find_owned(self, record_id: int, owner_id: int) -> File | None:
        """Get a record by id only if it belongs to the given owner.

        Args:
            record_id: Record id.
            owner_id: Id of the expected owner.

        Returns:
            File instance, or None if absent or owned by someone else.
        """
        return File.objects.filter(id=record_id, user_id=owner_id).first()

    def find_children(
        self,
        owner_id: int,
        parent: ParentRef,
        page: int,
    ) -> list[File]:
        """List one page of an owner's records directly inside a parent.

        Args:
            owner_id: Id of the owner whose records are listed.
            parent: Folder (or root) whose children are listed.
            page: Zero-based page index.

        Returns:
            Up to ``FILES_PAGE_SIZE`` records in insertion order; empty
            when the page is past the end.
        """
        page_size = get_page_size()
        page_index = normalize_page(page)
        offset = page_index * page_size
        if offset > _MAX_ROW_BOUND - page_size:
            logger.debug('Page %d is beyond any possible row', page_index)
            return []

        logger.debug(
            'Listing children of %d for owner %d (offset %d)',
            parent.to_wire(),
            owner_id,
            offset,
        )
        children = File.objects.filter(
            user_id=owner_id,
            parent_id=parent.to_wire(),
        ).order_by('id')
        return list(children[offset:offset + page_size])

    def update_visibility(self, record_id: int, *, is_public: bool) -> File:
        """Set ``is_public`` on a record with a single-column update.

        Args:
            record_id: Record id.
            is_public: New visibility.

        Returns:
            Updated File instance.

        Raises:
            NotFoundError: If no record has this id.
        """
        updated = File.objects.filter(id=record_id).update(is_public=is_public)
        if not updated:
            raise NotFoundError

        logger.info(
            'File visibility changed: ID=%d, is_public=%s',
            record_id,
            is_public,
        )
        return File.objects.get(id=record_id)

    def referenced_content_keys(self) -> set[str]:
        """Collect content keys referenced by any record.

        Returns:
            Set of non-empty content keys.
        """
        return set(
            File.objects.exclude(content_key='').values_list(
                'content_key',
                flat=True,
            ),
        )
