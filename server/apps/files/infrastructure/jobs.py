"""Job queue used to request size variants of uploaded images.

The worker consuming these jobs runs out of process; this module only
enqueues. Payloads are plain JSON dicts::

    {'fileId': 42, 'userId': 7}   # variants for a new image
    {'userId': 7}                 # an image upload failed, nothing to resize
"""

import logging
from typing import Any, ClassVar, Final, Protocol, final

from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)

_DEFAULT_BACKEND: Final = 'server.apps.files.infrastructure.jobs.CeleryJobQueue'
_DEFAULT_TASK: Final = 'files.generate_variants'

JobPayload = dict[str, Any]


class JobQueue(Protocol):
    """Anything jobs can be handed to."""

    def enqueue(self, payload: JobPayload) -> None:
        """Submit a job without waiting for it."""


@final
class CeleryJobQueue:
    """Sends jobs to the Celery broker by task name."""

    def __init__(
        self,
        task_name: str | None = None,
        queue: str | None = None,
    ) -> None:
        """Initialize Celery job queue.

        Args:
            task_name: Registered name of the consumer task.
            queue: Broker queue to route to, default queue if None.
        """
        self._task_name = task_name or getattr(
            settings,
            'FILES_VARIANT_TASK',
            _DEFAULT_TASK,
        )
        self._queue = queue or getattr(settings, 'FILES_VARIANT_QUEUE', None)

    def enqueue(self, payload: JobPayload) -> None:
        """Publish a job message.

        Args:
            payload: JSON-serializable job arguments.
        """
        from server.celery import app  # noqa: PLC0415

        result = app.send_task(
            self._task_name,
            kwargs=payload,
            queue=self._queue,
        )
        logger.info(
            'Enqueued %s job %s: %s',
            self._task_name,
            result.id,
            payload,
        )


@final
class LocMemJobQueue:
    """Keeps jobs in memory instead of sending them anywhere.

    Works like Django's locmem email backend: everything enqueued in
    the process lands in ``LocMemJobQueue.outbox``.
    """

    outbox: ClassVar[list[JobPayload]] = []

    def enqueue(self, payload: JobPayload) -> None:
        """Append a copy of the payload to the outbox.

        Args:
            payload: Job arguments.
        """
        self.outbox.append(dict(payload))
        logger.debug('Recorded job in memory: %s', payload)


def get_job_queue() -> JobQueue:
    """Instantiate the configured job queue backend.

    Returns:
        Backend named by ``FILES_JOB_QUEUE_BACKEND`` (Celery by default).
    """
    backend_path = getattr(settings, 'FILES_JOB_QUEUE_BACKEND', _DEFAULT_BACKEND)
    backend_class = import_string(backend_path)
    return backend_class()
