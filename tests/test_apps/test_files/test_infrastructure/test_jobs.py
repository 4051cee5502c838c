"""Tests for job queue backends."""

from unittest.mock import MagicMock, patch

from server.apps.files.infrastructure.jobs import (
    CeleryJobQueue,
    LocMemJobQueue,
    get_job_queue,
)


def test_get_job_queue_from_settings(settings):
    """Test backend is selected by dotted path."""
    settings.FILES_JOB_QUEUE_BACKEND = (
        'server.apps.files.infrastructure.jobs.CeleryJobQueue'
    )

    assert isinstance(get_job_queue(), CeleryJobQueue)


def test_locmem_job_queue_records_copies():
    """Test enqueued payloads land in the outbox as copies."""
    payload = {'fileId': 1, 'userId': 2}

    LocMemJobQueue().enqueue(payload)
    payload['fileId'] = 99

    assert LocMemJobQueue.outbox == [{'fileId': 1, 'userId': 2}]


@patch('server.celery.app.send_task')
def test_celery_job_queue_sends_task(mock_send_task, settings):
    """Test jobs are published by task name and queue from settings."""
    settings.FILES_VARIANT_TASK = 'thumbnails.generate'
    settings.FILES_VARIANT_QUEUE = 'thumbnails'
    mock_send_task.return_value = MagicMock(id='task-1')

    CeleryJobQueue().enqueue({'fileId': 1, 'userId': 2})

    mock_send_task.assert_called_once_with(
        'thumbnails.generate',
        kwargs={'fileId': 1, 'userId': 2},
        queue='thumbnails',
    )


@patch('server.celery.app.send_task')
def test_celery_job_queue_explicit_arguments(mock_send_task):
    """Test constructor arguments override settings."""
    mock_send_task.return_value = MagicMock(id='task-2')

    CeleryJobQueue(task_name='custom.task', queue='fast').enqueue({'userId': 3})

    mock_send_task.assert_called_once_with(
        'custom.task',
        kwargs={'userId': 3},
        queue='fast',
    )
