"""Ownership and visibility rules for file records.

Every check takes the looked-up record (None when absent) and the id
of the requester (None when unauthenticated). A record the requester
may not see is reported exactly like a missing one.
"""

from server.apps.files.exceptions import NotFoundError, UnauthorizedError
from server.apps.files.models import File


def is_owner(record: File, requester_id: int | None) -> bool:
    """Check whether the requester owns the record.

    Args:
        record: File record.
        requester_id: Id of the requesting user, None if anonymous.

    Returns:
        True if the requester is authenticated and owns the record.
    """
    return requester_id is not None and record.user_id == requester_id


def ensure_can_read_metadata(
    record: File | None,
    requester_id: int | None,
) -> File:
    """Allow reading a record's metadata to its owner only.

    Args:
        record: Looked-up record or None.
        requester_id: Id of the requesting user, None if anonymous.

    Returns:
        The record.

    Raises:
        UnauthorizedError: If the requester is anonymous.
        NotFoundError: If the record is absent or owned by someone else.
    """
    if requester_id is None:
        raise UnauthorizedError
    if record is None or not is_owner(record, requester_id):
        raise NotFoundError
    return record


def ensure_can_read_content(
    record: File | None,
    requester_id: int | None,
) -> File:
    """Allow reading content of public records, or of own records.

    Args:
        record: Looked-up record or None.
        requester_id: Id of the requesting user, None if anonymous.

    Returns:
        The record.

    Raises:
        NotFoundError: In every denied case, anonymous included.
    """
    if record is None:
        raise NotFoundError
    if record.is_public or is_owner(record, requester_id):
        return record
    raise NotFoundError


def ensure_can_change_visibility(
    record: File | None,
    requester_id: int | None,
) -> File:
    """Allow publishing and unpublishing to the owner only.

    Args:
        record: Looked-up record or None.
        requester_id: Id of the requesting user, None if anonymous.

    Returns:
        The record.

    Raises:
        NotFoundError: If the record is absent or the requester is not
            its owner.
    """
    if record is None or not is_owner(record, requester_id):
        raise NotFoundError
    return record
