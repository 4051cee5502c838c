"""Project-wide test fixtures."""

import pytest

from server.apps.files.infrastructure.jobs import LocMemJobQueue


@pytest.fixture(autouse=True)
def _isolated_backends(settings):
    """Keep content in memory and capture jobs instead of sending them.

    Changing ``STORAGES`` resets ``default_storage``, so every test
    starts with an empty in-memory store.
    """
    settings.STORAGES = {
        **settings.STORAGES,
        'default': {'BACKEND': 'django.core.files.storage.InMemoryStorage'},
    }
    settings.FILES_JOB_QUEUE_BACKEND = (
        'server.apps.files.infrastructure.jobs.LocMemJobQueue'
    )
    LocMemJobQueue.outbox.clear()
    yield
    LocMemJobQueue.outbox.clear()
