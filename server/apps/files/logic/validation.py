"""Validation of file creation payloads."""

import base64
import binascii
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final, final

from django.core.exceptions import ValidationError

from server.apps.files.logic.identifiers import ParentRef
from server.apps.files.models import FileKind

if TYPE_CHECKING:
    from server.apps.files.infrastructure.records import FileRepository

logger = logging.getLogger(__name__)

MISSING_NAME: Final = 'Missing name'
MISSING_TYPE: Final = 'Missing type'
MISSING_DATA: Final = 'Missing data'
PARENT_NOT_FOUND: Final = 'Parent not found'
PARENT_NOT_FOLDER: Final = 'Parent is not a folder'
INVALID_DATA: Final = 'Invalid data'

_TRUE_STRINGS: Final = frozenset(('true', '1', 'yes', 'on'))


@final
@dataclass(frozen=True, slots=True)
class UploadParams:
    """Normalized parameters of a valid creation request."""

    name: str
    kind: FileKind
    parent: ParentRef
    is_public: bool
    data: str | None = None


def validate_upload(
    payload: Mapping[str, Any],
    owner_id: int,
    repository: 'FileRepository',
) -> UploadParams:
    """Check a creation payload and normalize it.

    Checks run in a fixed order and the first failure is reported:
    name, type, data, parent. The parent must be a folder owned by
    ``owner_id``.

    Args:
        payload: Decoded request body.
        owner_id: Id of the requesting user.
        repository: Used to look up the parent folder.

    Returns:
        Normalized upload parameters.

    Raises:
        ValidationError: With the reason of the first failed check.
    """
    name = payload.get('name')
    if not isinstance(name, str) or not name:
        raise ValidationError(MISSING_NAME)

    raw_kind = payload.get('type')
    if raw_kind not in FileKind.values:
        raise ValidationError(MISSING_TYPE)
    kind = FileKind(raw_kind)

    data = payload.get('data')
    if kind != FileKind.FOLDER and not data:
        raise ValidationError(MISSING_DATA)

    parent = _validate_parent(payload.get('parentId'), owner_id, repository)

    return UploadParams(
        name=name,
        kind=kind,
        parent=parent,
        is_public=_coerce_bool(payload.get('isPublic', False)),
        data=None if kind == FileKind.FOLDER else str(data),
    )


def decode_content(data: str) -> bytes:
    """Decode base64 content from a creation payload.

    Args:
        data: Base64-encoded content.

    Returns:
        Raw bytes.

    Raises:
        ValidationError: If the data is not valid base64.
    """
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as error:
        raise ValidationError(INVALID_DATA) from error


def _validate_parent(
    raw_parent_id: object,
    owner_id: int,
    repository: 'FileRepository',
) -> ParentRef:
    try:
        parent = ParentRef.from_wire(raw_parent_id)
    except ValueError as error:
        raise ValidationError(PARENT_NOT_FOUND) from error

    if parent.is_root:
        return parent

    folder = repository.find_owned(parent.folder_id, owner_id)
    if folder is None:
        logger.debug('Parent %d not found for owner %d', parent.folder_id, owner_id)
        raise ValidationError(PARENT_NOT_FOUND)
    if not folder.is_folder:
        raise ValidationError(PARENT_NOT_FOLDER)
    return parent


def _coerce_bool(raw_value: object) -> bool:
    if isinstance(raw_value, str):
        return raw_value.strip().lower() in _TRUE_STRINGS
    return bool(raw_value)
