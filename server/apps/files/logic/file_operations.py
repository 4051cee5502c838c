"""Business logic for file operations."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, final

from django.conf import settings
from django.core.files.storage import default_storage

from server.apps.files.exceptions import (
    InvalidOperationError,
    NotFoundError,
    UnauthorizedError,
)
from server.apps.files.infrastructure.content import ContentStore
from server.apps.files.infrastructure.jobs import JobQueue, get_job_queue
from server.apps.files.infrastructure.metadata import content_type_for
from server.apps.files.infrastructure.records import FileRepository
from server.apps.files.logic.access import (
    ensure_can_change_visibility,
    ensure_can_read_content,
    ensure_can_read_metadata,
)
from server.apps.files.logic.identifiers import ParentRef, parse_record_id
from server.apps.files.logic.validation import (
    UploadParams,
    decode_content,
    validate_upload,
)
from server.apps.files.logic.variants import resolve_content
from server.apps.files.models import File, FileKind

logger = logging.getLogger(__name__)

FOLDER_HAS_NO_CONTENT = 'A folder has no content'


@final
@dataclass(frozen=True, slots=True)
class FileContent:
    """Bytes of a file ready to be served."""

    data: bytes
    content_type: str


@final
class FileOperations:
    """Create, read, list, publish and serve user files.

    Store, repository and job queue are passed in; use
    ``get_file_operations()`` for the ones configured in settings.
    """

    def __init__(
        self,
        repository: FileRepository,
        content_store: ContentStore,
        job_queue: JobQueue,
    ) -> None:
        """Initialize file operations.

        Args:
            repository: Metadata repository.
            content_store: Store for raw content.
            job_queue: Queue receiving variant generation jobs.
        """
        self._repository = repository
        self._content_store = content_store
        self._job_queue = job_queue

    @property
    def repository(self) -> FileRepository:
        """Metadata repository in use."""
        return self._repository

    @property
    def content_store(self) -> ContentStore:
        """Content store in use."""
        return self._content_store

    @property
    def job_queue(self) -> JobQueue:
        """Job queue receiving variant requests."""
        return self._job_queue

    def create(
        self,
        requester_id: int | None,
        payload: Mapping[str, Any],
    ) -> File:
        """Validate an upload, store its content and create its record.

        Transaction safety: content is written first, then the record.
        If the record cannot be created the content is discarded (best
        effort). There is no transaction spanning both stores.

        Args:
            requester_id: Id of the requesting user, None if anonymous.
            payload: Decoded request body.

        Returns:
            Created File instance.

        Raises:
            UnauthorizedError: If the requester is anonymous.
            ValidationError: If the payload is invalid.
            Exception: If storage or database operations fail.
        """
        if requester_id is None:
            raise UnauthorizedError

        params = validate_upload(payload, requester_id, self._repository)
        content = None if params.data is None else decode_content(params.data)

        try:
            record = self._persist(requester_id, params, content)
        except Exception:
            if params.kind == FileKind.IMAGE:
                self._notify_failed_upload(requester_id)
            raise

        if record.kind == FileKind.IMAGE:
            self._request_variants(record)
        return record

    def get(self, requester_id: int | None, raw_id: object) -> File:
        """Get one of the requester's records.

        Args:
            requester_id: Id of the requesting user, None if anonymous.
            raw_id: Record id as received from the client.

        Returns:
            File instance.

        Raises:
            UnauthorizedError: If the requester is anonymous.
            NotFoundError: If the id is malformed, or the record is
                absent or not owned by the requester.
        """
        if requester_id is None:
            raise UnauthorizedError
        record = self._find(raw_id)
        return ensure_can_read_metadata(record, requester_id)

    def list_children(
        self,
        requester_id: int | None,
        raw_parent_id: object = None,
        raw_page: object = 0,
    ) -> list[File]:
        """List one page of the requester's records inside a folder.

        A parent that is malformed, missing, not ours or not a folder
        simply has no children.

        Args:
            requester_id: Id of the requesting user, None if anonymous.
            raw_parent_id: Parent id from the query string, root if None.
            raw_page: Zero-based page from the query string.

        Returns:
            Records of the requested page.

        Raises:
            UnauthorizedError: If the requester is anonymous.
        """
        if requester_id is None:
            raise UnauthorizedError

        try:
            parent = ParentRef.from_wire(raw_parent_id)
        except ValueError:
            logger.debug('Malformed parent id in listing: %r', raw_parent_id)
            return []

        if not parent.is_root:
            folder = self._repository.find_owned(parent.folder_id, requester_id)
            if folder is None or not folder.is_folder:
                return []

        return self._repository.find_children(requester_id, parent, raw_page)

    def publish(self, requester_id: int | None, raw_id: object) -> File:
        """Make a record public.

        Args:
            requester_id: Id of the requesting user, None if anonymous.
            raw_id: Record id as received from the client.

        Returns:
            Updated File instance.

        Raises:
            NotFoundError: If the record is absent or not the requester's.
        """
        return self._set_visibility(requester_id, raw_id, is_public=True)

    def unpublish(self, requester_id: int | None, raw_id: object) -> File:
        """Make a record private again.

        Args:
            requester_id: Id of the requesting user, None if anonymous.
            raw_id: Record id as received from the client.

        Returns:
            Updated File instance.

        Raises:
            NotFoundError: If the record is absent or not the requester's.
        """
        return self._set_visibility(requester_id, raw_id, is_public=False)

    def fetch_content(
        self,
        requester_id: int | None,
        raw_id: object,
        size: str = '',
    ) -> FileContent:
        """Get the content of a public or own file at a requested size.

        Args:
            requester_id: Id of the requesting user, None if anonymous.
            raw_id: Record id as received from the client.
            size: Size token, empty for the original.

        Returns:
            Content bytes with their Content-Type.

        Raises:
            NotFoundError: If the record is absent, not visible to the
                requester, or has no content at that size.
            InvalidOperationError: If the record is a folder.
        """
        record = ensure_can_read_content(self._find(raw_id), requester_id)
        if record.is_folder:
            raise InvalidOperationError(FOLDER_HAS_NO_CONTENT)

        data = resolve_content(record, size, self._content_store)
        return FileContent(data=data, content_type=content_type_for(record.name))

    def _find(self, raw_id: object) -> File | None:
        try:
            record_id = parse_record_id(raw_id)
        except ValueError:
            raise NotFoundError from None
        return self._repository.find_by_id(record_id)

    def _set_visibility(
        self,
        requester_id: int | None,
        raw_id: object,
        *,
        is_public: bool,
    ) -> File:
        record = ensure_can_change_visibility(self._find(raw_id), requester_id)
        return self._repository.update_visibility(record.id, is_public=is_public)

    def _persist(
        self,
        owner_id: int,
        params: UploadParams,
        content: bytes | None,
    ) -> File:
        """Write content (unless a folder) and insert the record.

        Args:
            owner_id: Id of the owning user.
            params: Validated upload parameters.
            content: Decoded content, None for folders.

        Returns:
            Created File instance.
        """
        content_key = ''
        if content is not None:
            content_key = self._content_store.store(content)

        try:
            return self._repository.insert(
                owner_id,
                params.name,
                params.kind,
                params.parent,
                is_public=params.is_public,
                content_key=content_key,
            )
        except Exception:
            logger.exception('Failed to create file record: %s', params.name)
            if content_key:
                self._content_store.discard(content_key)
            raise

    def _request_variants(self, record: File) -> None:
        # The record already exists, so a queue failure must not fail the request
        try:
            self._job_queue.enqueue({'fileId': record.id, 'userId': record.user_id})
        except Exception:
            logger.exception('Failed to enqueue variant job for file %d', record.id)

    def _notify_failed_upload(self, owner_id: int) -> None:
        try:
            self._job_queue.enqueue({'userId': owner_id})
        except Exception:
            logger.warning(
                'Failed to notify job queue about failed upload for user %d',
                owner_id,
                exc_info=True,
            )


def get_file_operations() -> FileOperations:
    """Build file operations from the configured backends.

    Returns:
        FileOperations over the default storage, the ORM and the
        configured job queue.
    """
    location = getattr(settings, 'FILES_CONTENT_LOCATION', 'files')
    return FileOperations(
        repository=FileRepository(),
        content_store=ContentStore(default_storage, location),
        job_queue=get_job_queue(),
    )
