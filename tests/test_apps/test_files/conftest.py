"""Shared fixtures for files app tests."""

import base64

import boto3
import pytest
from django.contrib.auth import get_user_model
from django.core.files.storage import InMemoryStorage
from moto import mock_aws

from server.apps.files.infrastructure.content import ContentStore
from server.apps.files.infrastructure.jobs import LocMemJobQueue
from server.apps.files.infrastructure.records import FileRepository
from server.apps.files.logic.file_operations import FileOperations

User = get_user_model()


@pytest.fixture
def user(db):
    """Create test user.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        username='testuser',
        password='testpass123',
        email='test@example.com',
    )


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        username='otheruser',
        password='testpass123',
        email='other@example.com',
    )


@pytest.fixture
def mock_s3():
    """Mock S3 service with files-manager bucket.

    Yields:
        boto3 S3 resource with files-manager bucket created.
    """
    with mock_aws():
        conn = boto3.resource('s3', region_name='us-east-1')
        conn.create_bucket(Bucket='files-manager')

        yield conn


@pytest.fixture
def storage():
    """Fresh in-memory storage backend."""
    return InMemoryStorage()


@pytest.fixture
def content_store(storage):
    """Content store over the in-memory storage.

    Returns:
        ContentStore writing under ``files/``.
    """
    return ContentStore(storage, 'files')


@pytest.fixture
def repository():
    """Record repository over the test database."""
    return FileRepository()


@pytest.fixture
def job_queue():
    """In-memory job queue with an empty outbox."""
    LocMemJobQueue.outbox.clear()
    return LocMemJobQueue()


@pytest.fixture
def operations(repository, content_store, job_queue):
    """File operations wired to in-memory backends.

    Returns:
        FileOperations instance.
    """
    return FileOperations(repository, content_store, job_queue)


@pytest.fixture
def encode():
    """Encode bytes the way clients send them.

    Returns:
        Callable turning bytes into a base64 string.
    """
    def _encode(data: bytes) -> str:
        return base64.b64encode(data).decode('ascii')
    return _encode
