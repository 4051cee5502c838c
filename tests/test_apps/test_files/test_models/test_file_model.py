"""Tests for File model."""

import pytest
from django.db import IntegrityError

from server.apps.files.models import File, FileKind


@pytest.mark.django_db
def test_file_model_str(user):
    """Test File __str__ method."""
    file_instance = File.objects.create(user=user, name='docs', kind=FileKind.FOLDER)

    assert str(file_instance) == f'{user.id}:docs'


@pytest.mark.django_db
def test_file_defaults(user):
    """Test new records are private, at root and without content."""
    file_instance = File.objects.create(user=user, name='docs', kind=FileKind.FOLDER)

    assert file_instance.parent_id == 0
    assert file_instance.is_public is False
    assert file_instance.content_key == ''
    assert file_instance.created_at is not None
    assert file_instance.is_folder


@pytest.mark.django_db
def test_folder_cannot_have_content(user):
    """Test the database rejects folders with a content key."""
    with pytest.raises(IntegrityError):
        File.objects.create(
            user=user,
            name='docs',
            kind=FileKind.FOLDER,
            content_key='files/abc',
        )


@pytest.mark.django_db
def test_parent_is_plain_value(user):
    """Test children survive the removal of their folder."""
    folder = File.objects.create(user=user, name='docs', kind=FileKind.FOLDER)
    child = File.objects.create(
        user=user,
        name='inner',
        kind=FileKind.FOLDER,
        parent_id=folder.id,
    )

    folder_id = folder.id

    folder.delete()

    child.refresh_from_db()
    assert child.parent_id == folder_id


@pytest.mark.django_db
def test_files_deleted_with_owner(user):
    """Test removing a user removes their records."""
    File.objects.create(user=user, name='docs', kind=FileKind.FOLDER)

    user.delete()

    assert File.objects.count() == 0
