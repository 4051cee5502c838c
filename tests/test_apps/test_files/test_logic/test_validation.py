"""Tests for creation payload validation."""

import pytest
from django.core.exceptions import ValidationError

from server.apps.files.logic.identifiers import ParentRef
from server.apps.files.logic.validation import (
    INVALID_DATA,
    MISSING_DATA,
    MISSING_NAME,
    MISSING_TYPE,
    PARENT_NOT_FOLDER,
    PARENT_NOT_FOUND,
    decode_content,
    validate_upload,
)
from server.apps.files.models import File, FileKind


def _messages(excinfo) -> list[str]:
    return excinfo.value.messages


@pytest.mark.django_db
@pytest.mark.parametrize('payload', [
    {},
    {'type': 'nope'},
    {'name': '', 'type': 'file'},
    {'name': None, 'parentId': 'bad'},
    {'name': 5, 'type': 'image', 'data': 'aGk='},
])
def test_missing_name_wins_over_other_defects(user, repository, payload):
    """Test a missing name is reported whatever else is wrong."""
    with pytest.raises(ValidationError) as excinfo:
        validate_upload(payload, user.id, repository)

    assert _messages(excinfo) == [MISSING_NAME]


@pytest.mark.django_db
@pytest.mark.parametrize('payload', [
    {'name': 'a'},
    {'name': 'a', 'type': 'document'},
    {'name': 'a', 'type': ['file'], 'parentId': 'bad'},
])
def test_missing_type(user, repository, payload):
    """Test unknown or absent type is reported before data and parent."""
    with pytest.raises(ValidationError) as excinfo:
        validate_upload(payload, user.id, repository)

    assert _messages(excinfo) == [MISSING_TYPE]


@pytest.mark.django_db
@pytest.mark.parametrize('kind', ['file', 'image'])
def test_missing_data_for_content_kinds(user, repository, kind):
    """Test files and images require data, checked before the parent."""
    payload = {'name': 'a', 'type': kind, 'parentId': 'bad'}

    with pytest.raises(ValidationError) as excinfo:
        validate_upload(payload, user.id, repository)

    assert _messages(excinfo) == [MISSING_DATA]


@pytest.mark.django_db
def test_folder_without_data(user, repository):
    """Test folders are valid without data and drop any data sent."""
    params = validate_upload(
        {'name': 'docs', 'type': 'folder', 'data': 'aGk='},
        user.id,
        repository,
    )

    assert params.kind == FileKind.FOLDER
    assert params.data is None
    assert params.parent == ParentRef.root()
    assert params.is_public is False


@pytest.mark.django_db
@pytest.mark.parametrize('parent_id', ['abc', '999999', 999999])
def test_parent_not_found(user, repository, parent_id):
    """Test malformed and absent parents are both 'not found'."""
    payload = {'name': 'a', 'type': 'folder', 'parentId': parent_id}

    with pytest.raises(ValidationError) as excinfo:
        validate_upload(payload, user.id, repository)

    assert _messages(excinfo) == [PARENT_NOT_FOUND]


@pytest.mark.django_db
def test_parent_owned_by_someone_else(user, other_user, repository):
    """Test another user's folder cannot be used as parent."""
    folder = File.objects.create(user=other_user, name='theirs', kind=FileKind.FOLDER)
    payload = {'name': 'a', 'type': 'folder', 'parentId': folder.id}

    with pytest.raises(ValidationError) as excinfo:
        validate_upload(payload, user.id, repository)

    assert _messages(excinfo) == [PARENT_NOT_FOUND]


@pytest.mark.django_db
def test_parent_not_folder(user, repository):
    """Test a file cannot contain other records."""
    plain = File.objects.create(
        user=user,
        name='a.txt',
        kind=FileKind.FILE,
        content_key='files/abc',
    )
    payload = {'name': 'b', 'type': 'folder', 'parentId': str(plain.id)}

    with pytest.raises(ValidationError) as excinfo:
        validate_upload(payload, user.id, repository)

    assert _messages(excinfo) == [PARENT_NOT_FOLDER]


@pytest.mark.django_db
def test_valid_image_in_folder(user, repository):
    """Test a complete payload is normalized."""
    folder = File.objects.create(user=user, name='pics', kind=FileKind.FOLDER)

    params = validate_upload(
        {
            'name': 'cat.png',
            'type': 'image',
            'parentId': str(folder.id),
            'isPublic': 'true',
            'data': 'aGk=',
        },
        user.id,
        repository,
    )

    assert params.name == 'cat.png'
    assert params.kind == FileKind.IMAGE
    assert params.parent == ParentRef.folder(folder.id)
    assert params.is_public is True
    assert params.data == 'aGk='


@pytest.mark.parametrize(('raw_value', 'expected'), [
    (True, True),
    (False, False),
    ('true', True),
    ('False', False),
    ('1', True),
    ('', False),
    (0, False),
    (None, False),
])
@pytest.mark.django_db
def test_is_public_coercion(user, repository, raw_value, expected):
    """Test isPublic accepts booleans and common string forms."""
    params = validate_upload(
        {'name': 'a', 'type': 'folder', 'isPublic': raw_value},
        user.id,
        repository,
    )

    assert params.is_public is expected


def test_decode_content():
    """Test base64 content is decoded."""
    assert decode_content('aGVsbG8=') == b'hello'


@pytest.mark.parametrize('data', ['not base64!', 'aGVsbG8', '***'])
def test_decode_content_invalid(data):
    """Test malformed base64 is rejected."""
    with pytest.raises(ValidationError) as excinfo:
        decode_content(data)

    assert excinfo.value.messages == [INVALID_DATA]
